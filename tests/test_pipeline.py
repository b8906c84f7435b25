from datetime import timedelta

from typer.testing import CliRunner

from conftest import COMPLETE_CSS, VALID_HTML
from lab_autograder import cli
from lab_autograder.main import GradingPipeline

runner = CliRunner()


def test_full_marks_on_time(make_submission, config, rubric, tmp_path) -> None:
    root = make_submission({"index.html": VALID_HTML, "styles.css": COMPLETE_CSS})
    report = GradingPipeline(config, rubric=rubric).grade(root, submitted_at=config.deadline)
    assert report.total_score == 100
    assert report.total_max == 100


def test_css_absent_scenario(make_submission, config, rubric) -> None:
    root = make_submission({"index.html": VALID_HTML})
    late = config.deadline + timedelta(minutes=1)
    report = GradingPipeline(config, rubric=rubric).grade(root, submitted_at=late)
    assert [r.score for r in report.results] == [6, 0, 0, 0, 0, 0, 0, 0, 0]
    assert report.timing.score == 10
    assert report.total_score == 16


def test_without_git_history_counts_as_late(make_submission, config, rubric) -> None:
    root = make_submission({"index.html": VALID_HTML, "styles.css": COMPLETE_CSS})
    report = GradingPipeline(config, rubric=rubric).grade(root, read_git=False)
    assert report.timing.is_late
    assert report.timing.source == "clock"
    assert report.total_score == 90


def test_run_writes_artifacts_and_step_summary(make_submission, config, rubric, tmp_path, monkeypatch) -> None:
    summary = tmp_path / "step_summary.md"
    monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary))
    root = make_submission({"styles.css": "p { color: #333; }"})

    report = GradingPipeline(config, rubric=rubric).run(root, submitted_at=config.deadline)

    csv_text = (root / "artifacts" / "grade.csv").read_text(encoding="utf-8")
    assert csv_text == f"student,score,max_score\nall_students,{report.total_score:g},100\n"
    assert (root / "artifacts" / "feedback" / "README.md").exists()
    assert "Autograding Summary" in summary.read_text(encoding="utf-8")


def test_grading_twice_is_identical(make_submission, config, rubric) -> None:
    root = make_submission({"index.html": VALID_HTML, "styles.css": ".username { color: #1877f2 }"})
    pipeline = GradingPipeline(config, rubric=rubric)
    first = pipeline.grade(root, submitted_at=config.deadline)
    second = pipeline.grade(root, submitted_at=config.deadline)
    assert first.results == second.results


def test_cli_grade_exits_zero_with_empty_submission(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
    monkeypatch.setattr("lab_autograder.main.get_last_commit_time", lambda repo_dir: None)
    result = runner.invoke(cli.app, ["grade", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "Lab graded: 10/100" in result.output
    assert (tmp_path / "artifacts" / "grade.csv").exists()


def test_cli_grade_custom_artifacts_dir(make_submission, tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
    monkeypatch.setattr("lab_autograder.main.get_last_commit_time", lambda repo_dir: None)
    root = make_submission({"index.html": VALID_HTML, "styles.css": COMPLETE_CSS})
    out = tmp_path / "out"
    result = runner.invoke(cli.app, ["grade", str(root), "--artifacts-dir", str(out)])
    assert result.exit_code == 0, result.output
    assert "Lab graded: 90/100" in result.output
    assert (out / "feedback" / "README.md").exists()


def test_cli_bad_config_exits_one(tmp_path) -> None:
    result = runner.invoke(cli.app, ["grade", str(tmp_path), "--config", str(tmp_path / "missing.yml")])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_cli_rubric_lists_items() -> None:
    result = runner.invoke(cli.app, ["rubric"])
    assert result.exit_code == 0, result.output
    assert "TODO 1" in result.output
    assert "80" in result.output


def test_cli_grade_writes_log_file(tmp_path, monkeypatch, root_logging) -> None:
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
    monkeypatch.setattr("lab_autograder.main.get_last_commit_time", lambda repo_dir: None)
    log_file = tmp_path / "grade.log"
    result = runner.invoke(cli.app, ["grade", str(tmp_path), "--log-file", str(log_file)])
    assert result.exit_code == 0, result.output
    assert "No HTML file found" in log_file.read_text(encoding="utf-8")


def test_cli_config_in_submission_does_not_shadow_packaged_lab(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("GITHUB_STEP_SUMMARY", raising=False)
    monkeypatch.setattr("lab_autograder.main.get_last_commit_time", lambda repo_dir: None)
    (tmp_path / "3-1-css-basics.yml").write_text(
        "lab_name: shadow\ndeadline: 2099-01-01T00:00:00+00:00\nsubmission: {max: 90, late: 90}\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(cli.app, ["grade"])
    assert result.exit_code == 0, result.output
    assert "Lab graded: 10/100" in result.output
