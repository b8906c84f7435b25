"""File handling utilities."""

from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path (for chaining)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_text(path: Path, text: str) -> Path:
    """Write UTF-8 text to a file, creating parent directories first."""
    ensure_dir(path.parent)
    path.write_text(text, encoding="utf-8")
    return path


def append_text(path: Path, text: str) -> Path:
    """Append UTF-8 text to a file, creating it if needed."""
    ensure_dir(path.parent)
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)
    return path
