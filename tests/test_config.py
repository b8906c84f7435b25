from datetime import datetime, timedelta, timezone

import pytest

from lab_autograder.config.loader import ConfigLoader
from lab_autograder.config.models import ConfigError, GradingConfig, parse_deadline
from lab_autograder.rubrics.loader import RubricLoader


def test_packaged_lab_config() -> None:
    config = ConfigLoader().load_lab()
    assert config.lab_name == "3-1-css-basics"
    assert config.deadline == datetime(2026, 1, 26, 23, 59, tzinfo=timezone(timedelta(hours=3)))
    assert (config.submission_max, config.submission_late) == (20, 10)
    assert config.rubric_file == "css-basics.yml"
    assert config.ignored_dir_names == {"node_modules", ".git", "artifacts"}


def test_lab_config_from_path(tmp_path) -> None:
    path = tmp_path / "lab.yml"
    path.write_text(
        "lab_name: demo\n"
        "deadline: 2026-03-01T12:00:00+00:00\n"
        "submission: {max: 30, late: 0}\n"
        "files: {css: main.css}\n",
        encoding="utf-8",
    )
    config = ConfigLoader().load_lab(path)
    assert config.lab_name == "demo"
    assert config.deadline == datetime(2026, 3, 1, 12, tzinfo=timezone.utc)
    assert config.submission_max == 30
    assert config.css_file == "main.css"


def test_missing_lab_config(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader(tmp_path).load_lab("nope")


def test_deadline_requires_offset() -> None:
    with pytest.raises(ConfigError, match="UTC offset"):
        parse_deadline("2026-01-26T23:59:00")


def test_deadline_rejects_garbage() -> None:
    with pytest.raises(ConfigError):
        parse_deadline("tomorrow")


def test_required_fields() -> None:
    with pytest.raises(ConfigError):
        GradingConfig.from_dict({"lab_name": "x"})


def test_late_marks_cannot_exceed_max() -> None:
    with pytest.raises(ConfigError):
        GradingConfig.from_dict(
            {
                "lab_name": "x",
                "deadline": "2026-01-26T23:59:00+03:00",
                "submission": {"max": 5, "late": 10},
            }
        )


def test_bare_names_ignore_files_in_working_directory(tmp_path, monkeypatch) -> None:
    (tmp_path / "3-1-css-basics.yml").write_text(
        "lab_name: 3-1-css-basics\ndeadline: 2099-01-01T00:00:00+00:00\n", encoding="utf-8"
    )
    (tmp_path / "css-basics.yml").write_text(
        "items:\n  - {id: a, name: A, marks: 1, checks: [{label: p, exact: p}]}\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    config = ConfigLoader().load_lab()
    rubric = RubricLoader().load(config.rubric_file)
    assert config.deadline.year == 2026
    assert len(rubric.items) == 9


def test_explicit_relative_path_is_used_as_given(tmp_path, monkeypatch) -> None:
    (tmp_path / "labs").mkdir()
    (tmp_path / "labs" / "demo.yml").write_text(
        "lab_name: demo\ndeadline: 2026-03-01T12:00:00+00:00\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    assert ConfigLoader().load_lab("labs/demo.yml").lab_name == "demo"


def test_empty_sections_fall_back_to_defaults() -> None:
    config = GradingConfig.from_dict(
        {
            "lab_name": "x",
            "deadline": "2026-01-26T23:59:00+03:00",
            "submission": None,
            "files": None,
            "output": None,
        }
    )
    assert config.submission_max == 20
    assert config.css_file == "styles.css"
    assert config.artifacts_dir == "artifacts"
