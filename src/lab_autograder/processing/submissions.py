"""
Submission file discovery utilities.

Locates the student's HTML and CSS files by conventional name, falling back
to a scan of the submission tree, and loads their comment-free text.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from ..config.models import GradingConfig
from ..utils.logging import get_logger
from .reader import ReadError, read_text_file
from .sanitizer import strip_css_comments, strip_html_comments

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubmissionFiles:
    """Located submission files and their sanitized text.

    A path without text means the file was found but could not be read.
    """

    html_path: Path | None = None
    css_path: Path | None = None
    html: str | None = None
    css: str | None = None


def find_file(
    root: Path,
    predicate: Callable[[Path], bool],
    ignore_dirs: Iterable[str] = (),
    preferred: str | None = None,
) -> Path | None:
    """
    Find the first file under ``root`` satisfying ``predicate``.

    If ``preferred`` exists directly under ``root`` it wins. Otherwise the
    tree is walked depth-first in name order, checking the files of each
    directory before descending into its subdirectories. Directories whose
    name is in ``ignore_dirs`` are skipped, and symbolic links are never
    followed.

    Args:
        root: Submission root directory
        predicate: Test applied to candidate file paths
        ignore_dirs: Directory names never descended into
        preferred: File name checked first, directly under root

    Returns:
        Path to the matching file, or None
    """
    if preferred:
        candidate = root / preferred
        if candidate.is_file() and not candidate.is_symlink():
            return candidate

    ignored = set(ignore_dirs)
    stack = [root]

    while stack:
        directory = stack.pop()
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            continue

        subdirs = []
        for entry in entries:
            if entry.is_symlink():
                continue
            if entry.is_dir():
                if entry.name not in ignored:
                    subdirs.append(entry)
            elif entry.is_file() and predicate(entry):
                return entry

        stack.extend(reversed(subdirs))

    return None


def find_css_file(root: Path, config: GradingConfig) -> Path | None:
    """Find the stylesheet by its configured name, case-insensitively."""
    target = config.css_file.lower()
    return find_file(
        root,
        lambda p: p.name.lower() == target,
        ignore_dirs=config.ignored_dir_names,
        preferred=config.css_file,
    )


def find_html_file(root: Path, config: GradingConfig) -> Path | None:
    """Find the configured HTML page, or else any ``.html`` file."""
    return find_file(
        root,
        lambda p: p.name.lower().endswith(".html"),
        ignore_dirs=config.ignored_dir_names,
        preferred=config.html_file,
    )


def _load_text(path: Path | None) -> str | None:
    if path is None:
        return None
    try:
        return read_text_file(path)
    except ReadError as e:
        logger.warning(str(e))
        return None


def load_submission(root: Path, config: GradingConfig) -> SubmissionFiles:
    """
    Locate and read the submission's HTML and CSS files.

    Comments are stripped from both texts before they are returned.

    Args:
        root: Submission root directory
        config: Lab configuration naming the expected files

    Returns:
        SubmissionFiles with paths and sanitized text
    """
    html_path = find_html_file(root, config)
    css_path = find_css_file(root, config)

    if html_path:
        logger.info(f"HTML file: {html_path}")
    else:
        logger.warning(f"No HTML file found under {root}")
    if css_path:
        logger.info(f"CSS file: {css_path}")
    else:
        logger.warning(f"No {config.css_file} found under {root}")

    html_raw = _load_text(html_path)
    css_raw = _load_text(css_path)

    return SubmissionFiles(
        html_path=html_path,
        css_path=css_path,
        html=strip_html_comments(html_raw) if html_raw is not None else None,
        css=strip_css_comments(css_raw) if css_raw is not None else None,
    )
