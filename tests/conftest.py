"""
Shared test fixtures for the lab autograder.
Submissions are written into tmp_path; nothing touches git or the network.
"""
import logging
from pathlib import Path

import pytest

from lab_autograder.config.models import GradingConfig, parse_deadline
from lab_autograder.rubrics.loader import RubricLoader

DEADLINE = "2026-01-26T23:59:00+03:00"

VALID_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>CSS Basics</title>
  <link href="./styles.css" rel="stylesheet">
</head>
<body>
  <p class="username">Ada</p>
</body>
</html>
"""

COMPLETE_CSS = """
/* TODO 2 */
p {
  color: #333;
  font-size: 16px;
}
span {
  color: #888;
  font-size: 0.875rem;
}

/* TODO 3 */
.username { color: #1877f2; font-weight: 700; }
.blue-text { color: #4267B2; }
.red-text { color: #e74c3c; }
.highlight {
  background-color: #f0f2f5;
  padding: 15px;
}

/* TODO 4 */
#featured-user { color: #42b883; font-size: 1.125rem; }

/* TODO 5 */
.winner { color: #ff6b6b; }
#specificity-test { color: #4ecdc4; }
p.winner { color: #95a5a6; }

/* TODO 6 */
.important-test { color: #e67e22 !important; }

/* TODO 7 */
.chat-container .message { color: #2c3e50; }
.chat-container .message-time { color: #7f8c8d; font-size: 12px; }
.simple-form input {
  border: 1px solid #ccc;
  background: #fff;
  color: #333;
}

/* TODO 8 */
.send-button:hover { background-color: #3b5998; color: white; }
.chat-link:hover { color: #1877f2; text-decoration: none; }
.simple-form button:hover { background-color: #145dbf; }

/* TODO 9 */
h4.trending-tag, h5.trending-tag, h6.trending-tag {
  color: #8b9dc3;
  font-family: Arial, sans-serif;
}
"""


@pytest.fixture
def config() -> GradingConfig:
    return GradingConfig(lab_name="3-1-css-basics", deadline=parse_deadline(DEADLINE))


@pytest.fixture
def rubric():
    return RubricLoader().load("css-basics.yml")


@pytest.fixture
def make_submission(tmp_path):
    """Write files into a fresh submission directory and return its root."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "submission"
        root.mkdir(exist_ok=True)
        for name, content in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def root_logging():
    """Restore the root logger after a test reconfigures it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
