"""Configuration data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


class ConfigError(ValueError):
    """Invalid configuration content."""

    pass


DEFAULT_IGNORE_DIRS = ("node_modules", ".git")


def parse_deadline(value: Any) -> datetime:
    """Parse a deadline given as an ISO-8601 string or a YAML datetime.

    The deadline must carry a UTC offset so that it names a single instant.
    """
    if isinstance(value, datetime):
        deadline = value
    elif isinstance(value, str):
        try:
            deadline = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise ConfigError(f"Invalid deadline: {value!r}") from e
    else:
        raise ConfigError(f"Deadline must be an ISO-8601 string, got {type(value).__name__}")

    if deadline.tzinfo is None or deadline.utcoffset() is None:
        raise ConfigError(f"Deadline must include a UTC offset: {value!r}")
    return deadline


@dataclass(frozen=True)
class GradingConfig:
    """Settings for grading one lab: deadline, timing marks, and file names."""

    lab_name: str
    deadline: datetime
    rubric_file: str = "css-basics.yml"
    submission_max: float = 20
    submission_late: float = 10
    artifacts_dir: str = "artifacts"
    feedback_dir: str = "feedback"
    html_file: str = "index.html"
    css_file: str = "styles.css"
    ignore_dirs: tuple[str, ...] = DEFAULT_IGNORE_DIRS
    step_summary_env: str = "GITHUB_STEP_SUMMARY"

    def __post_init__(self):
        if self.submission_late > self.submission_max:
            raise ConfigError(
                f"submission_late ({self.submission_late}) exceeds "
                f"submission_max ({self.submission_max})"
            )

    @property
    def ignored_dir_names(self) -> frozenset[str]:
        """Directory names skipped during file discovery, artifacts included."""
        return frozenset(self.ignore_dirs) | {self.artifacts_dir}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GradingConfig":
        if "lab_name" not in data or "deadline" not in data:
            raise ConfigError("Lab config requires 'lab_name' and 'deadline'")

        submission = data.get("submission") or {}
        files = data.get("files") or {}
        output = data.get("output") or {}

        return cls(
            lab_name=str(data["lab_name"]),
            deadline=parse_deadline(data["deadline"]),
            rubric_file=data.get("rubric", "css-basics.yml"),
            submission_max=submission.get("max", 20),
            submission_late=submission.get("late", 10),
            artifacts_dir=output.get("artifacts_dir", "artifacts"),
            feedback_dir=output.get("feedback_dir", "feedback"),
            html_file=files.get("html", "index.html"),
            css_file=files.get("css", "styles.css"),
            ignore_dirs=tuple(files.get("ignore_dirs", DEFAULT_IGNORE_DIRS)),
            step_summary_env=output.get("step_summary_env", "GITHUB_STEP_SUMMARY"),
        )
