"""
Submission timing.

The submission time is the committer date of the most recent git commit.
A submission at or before the deadline is on time; anything strictly after
it, or a submission whose time cannot be determined, is late.
"""

import subprocess
from datetime import datetime, timezone
from pathlib import Path

from ..config.models import GradingConfig
from ..utils.logging import get_logger
from .models import TimingResult, TimingStatus

logger = get_logger(__name__)


def get_last_commit_time(repo_dir: Path, timeout: int = 30) -> datetime | None:
    """
    Read the most recent commit time from git history.

    Args:
        repo_dir: Directory inside the submission's git repository
        timeout: Seconds to wait for git

    Returns:
        Timezone-aware commit time, or None if it could not be determined
    """
    try:
        result = subprocess.run(
            ["git", "log", "-1", "--format=%cI"],
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=repo_dir,
        )
    except FileNotFoundError:
        logger.warning("git not found, cannot read submission time")
        return None
    except subprocess.TimeoutExpired:
        logger.warning("git log timed out")
        return None

    if result.returncode != 0:
        logger.warning(f"git log failed: {result.stderr.strip()}")
        return None

    value = result.stdout.strip()
    try:
        committed = datetime.fromisoformat(value)
    except ValueError:
        logger.warning(f"Unrecognized commit time from git: {value!r}")
        return None

    if committed.tzinfo is None:
        logger.warning(f"Commit time has no UTC offset: {value!r}")
        return None
    return committed


def evaluate_timing(
    submitted_at: datetime | None,
    config: GradingConfig,
    now: datetime | None = None,
) -> TimingResult:
    """
    Classify a submission as on time or late.

    Args:
        submitted_at: Submission time, or None if unknown
        config: Lab configuration with the deadline and timing marks
        now: Time recorded when ``submitted_at`` is unknown (defaults to now)

    Returns:
        TimingResult with status and earned marks
    """
    if submitted_at is None:
        recorded = now or datetime.now(timezone.utc)
        logger.warning("Submission time unknown, treating as late")
        return TimingResult(
            status=TimingStatus.LATE,
            submitted_at=recorded,
            deadline=config.deadline,
            score=config.submission_late,
            max_score=config.submission_max,
            source="clock",
        )

    on_time = submitted_at <= config.deadline
    return TimingResult(
        status=TimingStatus.ON_TIME if on_time else TimingStatus.LATE,
        submitted_at=submitted_at,
        deadline=config.deadline,
        score=config.submission_max if on_time else config.submission_late,
        max_score=config.submission_max,
        source="git",
    )
