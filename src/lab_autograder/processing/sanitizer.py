"""
Comment stripping for submitted HTML and CSS.

Comments are removed before any matching so that example code left inside
them cannot satisfy a check. String literals are not special-cased.
"""

import re

HTML_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
CSS_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")


def strip_html_comments(html: str) -> str:
    """Remove every ``<!-- ... -->`` span, including multi-line ones."""
    return HTML_COMMENT_RE.sub("", html)


def strip_css_comments(css: str) -> str:
    """Remove every ``/* ... */`` span, including multi-line ones."""
    return CSS_COMMENT_RE.sub("", css)
