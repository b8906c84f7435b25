"""
Lab Autograder Pipeline

Orchestrates one grading run: locate and read the submission, evaluate the
rubric, classify submission timing, and write the report artifacts.
"""

from datetime import datetime
from pathlib import Path

from .config.models import GradingConfig
from .grading.evaluator import RubricEvaluator
from .grading.models import GradeReport
from .grading.timing import evaluate_timing, get_last_commit_time
from .output.report import append_step_summary, build_summary, write_artifacts
from .processing.submissions import load_submission
from .rubrics.loader import RubricLoader
from .rubrics.models import Rubric
from .utils.logging import get_logger

logger = get_logger(__name__)


class GradingPipeline:
    """Orchestrates the complete grading workflow for one submission."""

    def __init__(
        self,
        config: GradingConfig,
        rubric: Rubric | None = None,
        rubric_loader: RubricLoader | None = None,
    ):
        """Initialize the grading pipeline.

        Args:
            config: Lab configuration
            rubric: Rubric to grade against. Loaded from ``config.rubric_file``
                when not given.
            rubric_loader: Loader used when ``rubric`` is not given
        """
        self.config = config
        if rubric is None:
            rubric = (rubric_loader or RubricLoader()).load(config.rubric_file)
        self.rubric = rubric
        self.evaluator = RubricEvaluator(rubric, css_file=config.css_file)

    def grade(
        self,
        submission_dir: Path,
        submitted_at: datetime | None = None,
        read_git: bool = True,
    ) -> GradeReport:
        """Grade a submission without writing anything.

        Args:
            submission_dir: Root of the submission tree
            submitted_at: Submission time. Read from git history when omitted
                and ``read_git`` is set.
            read_git: Whether to look up the last commit time

        Returns:
            GradeReport for the submission
        """
        logger.info(f"Grading {self.config.lab_name} in {submission_dir}")

        if submitted_at is None and read_git:
            submitted_at = get_last_commit_time(submission_dir)
        timing = evaluate_timing(submitted_at, self.config)

        submission = load_submission(submission_dir, self.config)
        results = self.evaluator.evaluate(submission)

        report = GradeReport(
            lab_name=self.config.lab_name,
            results=results,
            timing=timing,
            html_path=submission.html_path,
            css_path=submission.css_path,
            css_file=self.config.css_file,
        )
        logger.info(f"Score: {report.total_score}/{report.total_max}")
        return report

    def run(
        self,
        submission_dir: Path,
        artifacts_dir: Path | None = None,
        submitted_at: datetime | None = None,
    ) -> GradeReport:
        """Grade a submission and write all artifacts.

        Args:
            submission_dir: Root of the submission tree
            artifacts_dir: Output directory. Defaults to the configured
                artifacts directory inside ``submission_dir``.
            submitted_at: Submission time override

        Returns:
            GradeReport for the submission
        """
        report = self.grade(submission_dir, submitted_at=submitted_at)

        if artifacts_dir is None:
            artifacts_dir = submission_dir / self.config.artifacts_dir
        write_artifacts(report, artifacts_dir, feedback_dir=self.config.feedback_dir)

        feedback_path = f"{self.config.artifacts_dir}/{self.config.feedback_dir}/README.md"
        append_step_summary(
            build_summary(report, feedback_path=feedback_path),
            env_var=self.config.step_summary_env,
        )
        return report
