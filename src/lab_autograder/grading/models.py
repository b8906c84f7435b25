"""Grading result models."""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


def round2(value: float) -> float:
    """Round to two decimal places, halves rounding up."""
    return math.floor(value * 100 + 0.5) / 100


@dataclass(frozen=True)
class CheckResult:
    """Pass/fail outcome of one required check."""

    label: str
    passed: bool

    @property
    def mark(self) -> str:
        return "✅" if self.passed else "❌"

    def __str__(self) -> str:
        return f"{self.mark} {self.label}"


@dataclass(frozen=True)
class EvaluationResult:
    """Score and checklist for one rubric item."""

    item_id: str
    name: str
    max_marks: float
    score: float
    checks: tuple[CheckResult, ...] = ()
    deductions: tuple[str, ...] = ()

    @property
    def passed(self) -> list[CheckResult]:
        return [c for c in self.checks if c.passed]

    @property
    def missing(self) -> list[CheckResult]:
        return [c for c in self.checks if not c.passed]


class TimingStatus(Enum):
    """Submission timing outcome."""

    ON_TIME = "on_time"
    LATE = "late"


@dataclass(frozen=True)
class TimingResult:
    """Outcome of comparing the submission time to the deadline."""

    status: TimingStatus
    submitted_at: datetime
    deadline: datetime
    score: float
    max_score: float
    source: str = "git"

    @property
    def is_late(self) -> bool:
        return self.status is TimingStatus.LATE


@dataclass
class GradeReport:
    """Everything produced by one grading run."""

    lab_name: str
    results: list[EvaluationResult]
    timing: TimingResult
    html_path: Path | None = None
    css_path: Path | None = None
    css_file: str = "styles.css"

    @property
    def steps_score(self) -> float:
        return round2(sum(r.score for r in self.results))

    @property
    def steps_max(self) -> float:
        return sum(r.max_marks for r in self.results)

    @property
    def total_score(self) -> float:
        return round2(self.steps_score + self.timing.score)

    @property
    def total_max(self) -> float:
        return self.steps_max + self.timing.max_score
