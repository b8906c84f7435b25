"""Output module: Markdown feedback, CSV grade record, and CI step summary."""

from .report import (
    append_step_summary,
    build_feedback,
    build_grade_csv,
    build_summary,
    format_console_line,
    format_marks,
    write_artifacts,
)

__all__ = [
    "append_step_summary",
    "build_feedback",
    "build_grade_csv",
    "build_summary",
    "format_console_line",
    "format_marks",
    "write_artifacts",
]
