"""
Grading module.

Rubric evaluation, submission timing, and the result models they produce.
"""

from .evaluator import RubricEvaluator, split_marks
from .models import (
    CheckResult,
    EvaluationResult,
    GradeReport,
    TimingResult,
    TimingStatus,
)
from .timing import evaluate_timing, get_last_commit_time

__all__ = [
    "RubricEvaluator",
    "split_marks",
    "CheckResult",
    "EvaluationResult",
    "GradeReport",
    "TimingResult",
    "TimingStatus",
    "evaluate_timing",
    "get_last_commit_time",
]
