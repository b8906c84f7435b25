"""
Flexible top-level CSS rule extraction and matching.

Not a full CSS parser. It recognizes ``selector { body }`` blocks without
nesting, which is enough for beginner stylesheets and lets the grader:

- find ALL rules for a selector, in any order
- allow repeated selectors and repeated properties
- accept grouped selectors (``h4.tag, h5.tag``)

At-rules, nested blocks and braces inside strings are out of contract.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Pattern

RULE_RE = re.compile(r"([^{}]+)\{([\s\S]*?)\}")


@dataclass(frozen=True)
class CssRule:
    """A selector list paired with its raw declaration body."""

    selector_text: str
    selectors: tuple[str, ...]
    body: str


@dataclass(frozen=True)
class Declaration:
    """One accepted ``property: value`` form, both given as regex sources."""

    prop: str
    value: str


def parse_top_level_rules(css: str) -> list[CssRule]:
    """
    Parse sanitized CSS into rules, in source order.

    Rules sharing a selector are kept separate so every body stays queryable.

    Args:
        css: CSS text with comments already removed

    Returns:
        List of CssRule objects
    """
    rules = []
    for match in RULE_RE.finditer(css):
        selector_text = (match.group(1) or "").strip()
        body = (match.group(2) or "").strip()
        if not selector_text:
            continue

        selectors = tuple(s.strip() for s in selector_text.split(",") if s.strip())
        rules.append(CssRule(selector_text=selector_text, selectors=selectors, body=body))
    return rules


def bodies_for_exact_selector(rules: Iterable[CssRule], selector: str) -> list[str]:
    """Bodies of rules whose selector list contains ``selector`` (case-insensitive).

    ``.username`` matches ``.username`` and ``a, .username`` but not
    ``.username:hover``.
    """
    target = selector.strip().lower()
    return [
        rule.body
        for rule in rules
        if any(s.strip().lower() == target for s in rule.selectors)
    ]


def bodies_for_selector_pattern(
    rules: Iterable[CssRule],
    pattern: str | Pattern[str],
) -> list[str]:
    """Bodies of rules whose full selector text matches ``pattern`` anywhere."""
    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.IGNORECASE)
    return [rule.body for rule in rules if pattern.search(rule.selector_text)]


def has_declaration(body: str, prop: str, value: str) -> bool:
    """
    Check whether a declaration body contains ``prop: value``.

    Both ``prop`` and ``value`` are regex sources. Whitespace around the colon
    and a trailing semicolon are optional. Declaration boundaries are not
    validated.
    """
    if not body:
        return False
    return re.search(rf"(?:{prop})\s*:\s*(?:{value})\s*;?", body, re.IGNORECASE) is not None


def has_any_declaration(body: str, alternatives: Iterable[Declaration]) -> bool:
    """True if any of the accepted declaration forms appears in ``body``."""
    return any(has_declaration(body, d.prop, d.value) for d in alternatives)
