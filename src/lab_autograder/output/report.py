"""
Report generation.

Turns a GradeReport into the Markdown summary, the per-item feedback
document, and the CSV grade record, and writes them out.
"""

import csv
import io
import os
from pathlib import Path

from ..grading.models import EvaluationResult, GradeReport, round2
from ..utils.files import append_text, write_text
from ..utils.logging import get_logger

logger = get_logger(__name__)

CSV_HEADER = ["student", "score", "max_score"]
CSV_STUDENT = "all_students"

MARKING_RULES = """\
## How marks were deducted (rules)

- HTML comments are ignored (so examples in comments do NOT count).
- CSS comments are ignored (so examples in comments do NOT count).
- Checks are intentionally light: they look for key selectors and key properties.
- CSS rules can be in ANY order, and repeated selectors/properties are allowed.
- Accepted equivalents:
  - `background` or `background-color`
  - `white` or `#fff` or `#ffffff`
  - `font-weight: bold` or `font-weight: 700`
  - font-size rem equivalents: 16px/1rem, 14px/0.875rem, 12px/0.75rem, 18px/1.125rem
- Missing required items reduce marks proportionally within that TODO.
"""


def format_marks(value: float) -> str:
    """Format marks without trailing zeros: 20.0 -> '20', 9.5 -> '9.5'."""
    text = f"{round2(value):.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def md_escape(text: str) -> str:
    """Escape angle brackets so labels like ``<head>`` render literally."""
    return str(text).replace("<", "&lt;").replace(">", "&gt;")


def _submission_block(report: GradeReport) -> str:
    timing = report.timing
    time_label = (
        "Last commit time (from git log)"
        if timing.source == "git"
        else "Submission time (git log unavailable, current time used)"
    )
    status = "(Late submission)" if timing.is_late else "(On time)"
    return (
        f"- **Lab:** {report.lab_name}\n"
        f"- **Deadline:** {timing.deadline.isoformat()}\n"
        f"- **{time_label}:** {timing.submitted_at.isoformat()}\n"
        f"- **Submission marks:** **{format_marks(timing.score)}/{format_marks(timing.max_score)}** {status}\n"
    )


def _files_block(report: GradeReport) -> str:
    html = f"✅ {report.html_path}" if report.html_path else "❌ No HTML file found"
    css = f"✅ {report.css_path}" if report.css_path else f"❌ No {report.css_file} file found"
    return f"- HTML: {html}\n- CSS: {css}\n"


def _score(result: EvaluationResult) -> str:
    return f"{format_marks(result.score)}/{format_marks(result.max_marks)}"


def _bullets(lines: list[str], empty: str, prefix: str = "") -> str:
    if not lines:
        return f"- {empty}"
    return "\n".join(f"- {prefix}{line}" for line in lines)


def build_summary(report: GradeReport, feedback_path: str = "artifacts/feedback/README.md") -> str:
    """
    Build the short Markdown summary (suitable for a CI step summary).

    Args:
        report: Grading results
        feedback_path: Where the full feedback document is written

    Returns:
        Markdown text
    """
    timing = report.timing
    parts = [
        f"# {report.lab_name} — Autograding Summary\n",
        "## Submission\n",
        _submission_block(report),
        "## Files Checked\n",
        _files_block(report),
        "## Marks Breakdown\n",
        "| Component | Marks |\n|---|---:|",
    ]
    rows = [f"| {r.name} | {_score(r)} |" for r in report.results]
    rows.append(
        f"| Submission (timing) | {format_marks(timing.score)}/{format_marks(timing.max_score)} |"
    )
    parts.append("\n".join(rows) + "\n")
    parts.append("## Total Marks\n")
    parts.append(f"**{format_marks(report.total_score)} / {format_marks(report.total_max)}**\n")
    parts.append("## Detailed Checks (What you did / missed)\n")

    for result in report.results:
        found = [md_escape(c) for c in result.passed]
        missed = [md_escape(c) for c in result.missing]
        notes = [md_escape(d) for d in result.deductions]
        parts.append(
            "<details>\n"
            f"  <summary><strong>{md_escape(result.name)}</strong> — {_score(result)}</summary>\n\n"
            "  <br/>\n\n"
            "  <strong>✅ Found</strong>\n\n"
            f"{_bullets(found, '(Nothing detected)')}\n\n"
            "  <br/><br/>\n\n"
            "  <strong>❌ Missing</strong>\n\n"
            f"{_bullets(missed, '(Nothing missing)')}\n\n"
            "  <br/><br/>\n\n"
            "  <strong>❗ Deductions / Notes</strong>\n\n"
            f"{_bullets(notes, 'No deductions.')}\n\n"
            "</details>\n"
        )

    parts.append(f"> Full feedback is also available in: `{feedback_path}`\n")
    return "\n".join(parts)


def build_feedback(report: GradeReport) -> str:
    """Build the detailed per-item feedback document in Markdown."""
    parts = [
        f"# {report.lab_name} — Feedback\n",
        "## Submission\n",
        _submission_block(report),
        "## Files Checked\n",
        _files_block(report),
        "---\n",
        "## TODO-by-TODO Feedback\n",
    ]

    for result in report.results:
        checklist = _bullets([str(c) for c in result.checks], "(No checks available)")
        if result.deductions:
            deductions = _bullets(list(result.deductions), "", prefix="❗ ")
        else:
            deductions = "- ✅ No deductions. Good job!"
        parts.append(
            f"### {result.name} — **{_score(result)}**\n\n"
            f"**Checklist**\n{checklist}\n\n"
            f"**Deductions / Notes**\n{deductions}\n"
        )

    parts.append("---\n")
    parts.append(MARKING_RULES)
    return "\n".join(parts)


def build_grade_csv(report: GradeReport) -> str:
    """Build the two-line CSV grade record."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerow([CSV_STUDENT, format_marks(report.total_score), format_marks(report.total_max)])
    return buffer.getvalue()


def format_console_line(report: GradeReport) -> str:
    """One-line score breakdown printed at the end of a run."""
    timing = report.timing
    return (
        f"✔ Lab graded: {format_marks(report.total_score)}/{format_marks(report.total_max)} "
        f"(Submission: {format_marks(timing.score)}/{format_marks(timing.max_score)}, "
        f"TODOs: {format_marks(report.steps_score)}/{format_marks(report.steps_max)})."
    )


def write_artifacts(
    report: GradeReport,
    artifacts_dir: Path,
    feedback_dir: str = "feedback",
) -> dict[str, Path]:
    """
    Write ``grade.csv`` and ``<feedback_dir>/README.md`` under ``artifacts_dir``.

    Directory creation failures propagate.

    Returns:
        Dict with the written ``csv`` and ``feedback`` paths
    """
    csv_path = write_text(artifacts_dir / "grade.csv", build_grade_csv(report))
    feedback_path = write_text(artifacts_dir / feedback_dir / "README.md", build_feedback(report))
    logger.info(f"Wrote {csv_path} and {feedback_path}")
    return {"csv": csv_path, "feedback": feedback_path}


def append_step_summary(summary: str, env_var: str = "GITHUB_STEP_SUMMARY") -> Path | None:
    """Append ``summary`` to the file named by ``env_var``, if it is set."""
    target = os.environ.get(env_var)
    if not target:
        return None
    path = append_text(Path(target), summary)
    logger.info(f"Appended summary to {path}")
    return path
