"""
Submission processing module.

Handles discovery and reading of submitted files, comment stripping, and
the light-weight CSS/HTML matching used by the rubric checks.
"""

# Comment stripping
from .sanitizer import strip_css_comments, strip_html_comments

# CSS rule extraction and matching
from .css_rules import (
    CssRule,
    Declaration,
    parse_top_level_rules,
    bodies_for_exact_selector,
    bodies_for_selector_pattern,
    has_declaration,
    has_any_declaration,
)

# HTML checks
from .html import extract_head, has_stylesheet_link

# Reading and discovery
from .reader import ReadError, read_text_file
from .submissions import (
    SubmissionFiles,
    find_file,
    find_css_file,
    find_html_file,
    load_submission,
)

__all__ = [
    "strip_css_comments",
    "strip_html_comments",
    "CssRule",
    "Declaration",
    "parse_top_level_rules",
    "bodies_for_exact_selector",
    "bodies_for_selector_pattern",
    "has_declaration",
    "has_any_declaration",
    "extract_head",
    "has_stylesheet_link",
    "ReadError",
    "read_text_file",
    "SubmissionFiles",
    "find_file",
    "find_css_file",
    "find_html_file",
    "load_submission",
]
