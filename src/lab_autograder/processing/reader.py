"""
Text reading for submitted source files.

Student files arrive in whatever encoding their editor chose, so the raw
bytes are decoded with chardet's guess first and common encodings after.
"""

from pathlib import Path

import chardet

from ..utils.logging import get_logger

logger = get_logger(__name__)

FALLBACK_ENCODINGS = ["utf-8", "utf-8-sig", "cp1252", "latin-1"]

BOMS = [
    (b"\xef\xbb\xbf", "utf-8-sig"),
    (b"\xff\xfe\x00\x00", "utf-32-le"),
    (b"\x00\x00\xfe\xff", "utf-32-be"),
    (b"\xff\xfe", "utf-16-le"),
    (b"\xfe\xff", "utf-16-be"),
]


class ReadError(Exception):
    """A file exists but could not be read."""

    pass


def read_text_file(file_path: Path) -> str:
    """
    Read a text file with encoding detection.

    Args:
        file_path: Path to the file

    Returns:
        Decoded file contents

    Raises:
        ReadError: If the file cannot be opened or read
    """
    try:
        raw = file_path.read_bytes()
    except OSError as e:
        raise ReadError(f"Cannot read {file_path}: {e}") from e

    detected = _detect_encoding(raw)
    encodings_to_try = [detected] if detected else []
    encodings_to_try.extend(FALLBACK_ENCODINGS)

    seen = set()
    for enc in encodings_to_try:
        if enc in seen:
            continue
        seen.add(enc)
        try:
            text = raw.decode(enc)
        except (UnicodeDecodeError, LookupError):
            continue
        logger.debug(f"Decoded {file_path.name} as {enc}")
        return text

    # latin-1 decodes any byte sequence, so this is only reached if the
    # fallback list is changed
    logger.warning(f"Some characters in {file_path} could not be decoded")
    return raw.decode("utf-8", errors="replace")


def _detect_encoding(raw: bytes) -> str | None:
    """Guess the encoding of ``raw`` from its BOM, then with chardet."""
    for bom, encoding in BOMS:
        if raw.startswith(bom):
            return encoding

    result = chardet.detect(raw[:10000])
    if result and (result.get("confidence") or 0) > 0.7:
        return result.get("encoding")
    return None
