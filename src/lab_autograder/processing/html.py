"""HTML checks: ``<head>`` extraction and stylesheet link detection."""

import re

HEAD_RE = re.compile(r"<head\b[^>]*>([\s\S]*?)</head>", re.IGNORECASE)
LINK_TAG_RE = re.compile(r"<link\b[^>]*>", re.IGNORECASE)
REL_STYLESHEET_RE = re.compile(r"""\brel\s*=\s*["']stylesheet["']""", re.IGNORECASE)


def extract_head(html: str) -> str:
    """Return the inner text of the first ``<head>`` element, or ``""``."""
    match = HEAD_RE.search(html)
    return match.group(1) if match else ""


def has_stylesheet_link(head_html: str, href: str = "styles.css") -> bool:
    """
    Check for ``<link rel="stylesheet" href="styles.css">`` inside the head.

    Attribute order is free, either quote style is accepted, and the href may
    be prefixed with ``./``.

    Args:
        head_html: Inner HTML of the ``<head>`` element
        href: Stylesheet file name the link must point at

    Returns:
        True if a matching link tag exists
    """
    href_re = re.compile(
        rf"""\bhref\s*=\s*["'](\./)?{re.escape(href)}["']""",
        re.IGNORECASE,
    )
    for tag in LINK_TAG_RE.findall(head_html):
        if REL_STYLESHEET_RE.search(tag) and href_re.search(tag):
            return True
    return False
