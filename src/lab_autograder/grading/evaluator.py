"""
Rubric evaluation.

One generic routine grades every rubric item from its declarative checks.
Marks are deducted uniformly per missing check:

    score = max(0, round2(marks - (marks / total_checks) * missing))
"""

from ..processing.css_rules import (
    CssRule,
    bodies_for_exact_selector,
    bodies_for_selector_pattern,
    has_any_declaration,
    parse_top_level_rules,
)
from ..processing.html import extract_head, has_stylesheet_link
from ..processing.submissions import SubmissionFiles
from ..rubrics.models import (
    CheckKind,
    CheckSpec,
    MatchKind,
    Rubric,
    RubricItem,
    SelectorQuery,
    SourceFile,
)
from ..utils.logging import get_logger
from .models import CheckResult, EvaluationResult, round2

logger = get_logger(__name__)


def split_marks(marks: float, missing_count: int, total_checks: int) -> float:
    """Deduct an equal share of ``marks`` for each missing check."""
    if missing_count <= 0:
        return marks
    per_check = marks / total_checks
    return max(0, round2(marks - per_check * missing_count))


def bodies_for_queries(rules: list[CssRule], queries: tuple[SelectorQuery, ...]) -> list[str]:
    """Collect declaration bodies for every selector query, in query order."""
    bodies: list[str] = []
    for query in queries:
        if query.match is MatchKind.PATTERN:
            bodies.extend(bodies_for_selector_pattern(rules, query.text))
        else:
            bodies.extend(bodies_for_exact_selector(rules, query.text))
    return bodies


class RubricEvaluator:
    """Grades sanitized submission text against a rubric."""

    def __init__(self, rubric: Rubric, css_file: str = "styles.css"):
        """Initialize the evaluator.

        Args:
            rubric: Rubric to grade against
            css_file: Stylesheet name used in missing-file diagnostics
        """
        self.rubric = rubric
        self.css_file = css_file

    def evaluate(self, submission: SubmissionFiles) -> list[EvaluationResult]:
        """Evaluate every rubric item, in rubric order.

        Args:
            submission: Located files and their comment-free text

        Returns:
            One EvaluationResult per rubric item
        """
        rules = parse_top_level_rules(submission.css) if submission.css is not None else []
        head = extract_head(submission.html) if submission.html is not None else ""

        results = []
        for item in self.rubric.items:
            result = self.evaluate_item(item, submission, rules, head)
            logger.debug(f"{item.id}: {result.score}/{result.max_marks}")
            results.append(result)
        return results

    def evaluate_item(
        self,
        item: RubricItem,
        submission: SubmissionFiles,
        rules: list[CssRule],
        head: str,
    ) -> EvaluationResult:
        """Evaluate a single rubric item."""
        missing_reason = self._missing_file_reason(item.source, submission)
        if missing_reason:
            return EvaluationResult(
                item_id=item.id,
                name=item.name,
                max_marks=item.marks,
                score=0,
                deductions=(missing_reason,),
            )

        checks = tuple(
            CheckResult(label=check.label, passed=self._run_check(check, rules, head))
            for check in item.checks
        )
        missing = [c for c in checks if not c.passed]

        return EvaluationResult(
            item_id=item.id,
            name=item.name,
            max_marks=item.marks,
            score=split_marks(item.marks, len(missing), len(checks)),
            checks=checks,
            deductions=tuple(f"Missing: {c.label}" for c in missing),
        )

    def _run_check(self, check: CheckSpec, rules: list[CssRule], head: str) -> bool:
        if check.kind is CheckKind.HTML_HEAD:
            return bool(head)
        if check.kind is CheckKind.STYLESHEET_LINK:
            return has_stylesheet_link(head, check.href)

        bodies = bodies_for_queries(rules, check.selectors)
        if check.kind is CheckKind.RULE:
            return len(bodies) > 0

        alternatives = check.declaration.alternatives()
        return any(has_any_declaration(body, alternatives) for body in bodies)

    def _missing_file_reason(self, source: SourceFile, submission: SubmissionFiles) -> str | None:
        """Diagnostic for an item whose governing file is absent or unreadable."""
        if source is SourceFile.HTML:
            if submission.html is not None:
                return None
            if submission.html_path:
                return f"Could not read HTML file at: {submission.html_path}"
            return "No .html file found (expected index.html or any .html file)."

        if submission.css is not None:
            return None
        if submission.css_path:
            return f"Could not read CSS file at: {submission.css_path}"
        return f"No {self.css_file} file found."
