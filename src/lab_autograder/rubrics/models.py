"""Rubric data models."""

from dataclasses import dataclass, field
from enum import Enum
from itertools import product

from ..processing.css_rules import Declaration


class SourceFile(Enum):
    """The submitted file a rubric item is graded from."""

    HTML = "html"
    CSS = "css"


class MatchKind(Enum):
    """How a selector query is matched against extracted rules."""

    EXACT = "exact"
    PATTERN = "pattern"


class CheckKind(Enum):
    """What a required check tests."""

    RULE = "rule"
    DECLARATION = "declaration"
    HTML_HEAD = "html-head"
    STYLESHEET_LINK = "stylesheet-link"


@dataclass(frozen=True)
class SelectorQuery:
    """A selector looked up exactly, or a regex over full selector text."""

    text: str
    match: MatchKind = MatchKind.EXACT


@dataclass(frozen=True)
class DeclarationSpec:
    """Accepted property and value forms for one declaration requirement.

    Every property pattern is paired with every value pattern, so
    ``background-color|background`` x ``#fff|#ffffff`` gives four forms.
    """

    properties: tuple[str, ...]
    values: tuple[str, ...]

    def alternatives(self) -> list[Declaration]:
        return [Declaration(prop=p, value=v) for p, v in product(self.properties, self.values)]


@dataclass(frozen=True)
class CheckSpec:
    """A single required check within a rubric item."""

    label: str
    kind: CheckKind
    selectors: tuple[SelectorQuery, ...] = ()
    declaration: DeclarationSpec | None = None
    href: str = "styles.css"


@dataclass(frozen=True)
class RubricItem:
    """One gradable unit of the assignment."""

    id: str
    name: str
    marks: float
    source: SourceFile
    checks: tuple[CheckSpec, ...] = ()


@dataclass(frozen=True)
class Rubric:
    """A complete grading rubric."""

    name: str
    description: str = ""
    items: tuple[RubricItem, ...] = field(default_factory=tuple)

    @property
    def total_marks(self) -> float:
        return sum(item.marks for item in self.items)

    def get_item(self, item_id: str) -> RubricItem | None:
        """Find a rubric item by its id."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None
