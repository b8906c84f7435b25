"""Rubric loader for declarative grading tables."""

import re
from pathlib import Path
from typing import Any

import yaml

from ..utils.logging import get_logger
from .models import (
    CheckKind,
    CheckSpec,
    DeclarationSpec,
    MatchKind,
    Rubric,
    RubricItem,
    SelectorQuery,
    SourceFile,
)

logger = get_logger(__name__)

HTML_CHECKS = {CheckKind.HTML_HEAD, CheckKind.STYLESHEET_LINK}


class RubricError(ValueError):
    """Invalid rubric content."""

    pass


def _as_tuple(value: Any) -> tuple[str, ...]:
    """Accept a single string or a list of strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _compile_check(pattern: str, where: str) -> None:
    try:
        re.compile(pattern)
    except re.error as e:
        raise RubricError(f"{where}: invalid pattern {pattern!r}: {e}") from e


class RubricLoader:
    """Loads and parses grading rubrics from YAML files."""

    def __init__(self, rubrics_dir: Path | None = None):
        """Initialize the rubric loader.

        Args:
            rubrics_dir: Directory containing rubric files. Defaults to the
                packaged rubrics directory.
        """
        self.rubrics_dir = rubrics_dir or Path(__file__).parent

    def load(self, rubric_file: str | Path) -> Rubric:
        """Load a rubric from a YAML file.

        Args:
            rubric_file: Path to the rubric YAML file

        Returns:
            Parsed Rubric object

        Raises:
            FileNotFoundError: If the rubric file doesn't exist
            RubricError: If the rubric content is invalid
        """
        path = self._resolve_path(rubric_file)
        data = self._load_yaml(path)
        rubric = self.parse(data)
        logger.debug(f"Loaded rubric '{rubric.name}' with {len(rubric.items)} items from {path}")
        return rubric

    def _resolve_path(self, file_path: str | Path) -> Path:
        """Resolve a rubric file path; bare names come from the rubrics directory."""
        path = Path(file_path)
        if not path.is_absolute() and path.parent == Path("."):
            path = self.rubrics_dir / path
        return path

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load and parse a YAML file."""
        if not path.exists():
            raise FileNotFoundError(f"Rubric file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise RubricError(f"Rubric file must contain a mapping: {path}")
        return data

    def parse(self, data: dict[str, Any]) -> Rubric:
        """Parse rubric data into a Rubric object."""
        raw_items = data.get("items") or []
        if not raw_items:
            raise RubricError("Rubric must include at least one item")

        items = tuple(self._parse_item(raw, idx) for idx, raw in enumerate(raw_items, start=1))

        seen = set()
        for item in items:
            if item.id in seen:
                raise RubricError(f"Duplicate rubric item id: {item.id}")
            seen.add(item.id)

        rubric = Rubric(
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            items=items,
        )

        declared = data.get("total_marks")
        if declared is not None and abs(rubric.total_marks - float(declared)) > 1e-9:
            raise RubricError(
                f"Item marks sum to {rubric.total_marks}, "
                f"but the rubric declares total_marks: {declared}"
            )
        return rubric

    def _parse_item(self, data: dict[str, Any], idx: int) -> RubricItem:
        """Parse one rubric item and its checks."""
        for key in ("id", "name", "marks"):
            if key not in data:
                raise RubricError(f"Rubric item #{idx} is missing required '{key}' field")

        item_id = str(data["id"])
        try:
            source = SourceFile(data.get("source", "css"))
        except ValueError as e:
            raise RubricError(f"Rubric item {item_id}: unknown source {data.get('source')!r}") from e

        raw_checks = data.get("checks") or []
        if not raw_checks:
            raise RubricError(f"Rubric item {item_id} has no checks")

        checks = tuple(
            self._parse_check(raw, f"{item_id} check #{n}") for n, raw in enumerate(raw_checks, start=1)
        )

        for check in checks:
            if (check.kind in HTML_CHECKS) != (source is SourceFile.HTML):
                raise RubricError(
                    f"Rubric item {item_id}: check '{check.label}' "
                    f"({check.kind.value}) cannot run against {source.value}"
                )

        marks = float(data["marks"])
        if marks < 0:
            raise RubricError(f"Rubric item {item_id} has negative marks")

        return RubricItem(
            id=item_id,
            name=str(data["name"]),
            marks=marks,
            source=source,
            checks=checks,
        )

    def _parse_check(self, data: dict[str, Any], where: str) -> CheckSpec:
        """Parse one required check."""
        if "label" not in data:
            raise RubricError(f"{where} is missing required 'label' field")

        default_kind = "declaration" if "property" in data else "rule"
        try:
            kind = CheckKind(data.get("kind", default_kind))
        except ValueError as e:
            raise RubricError(f"{where}: unknown kind {data.get('kind')!r}") from e

        selectors = tuple(
            SelectorQuery(text=s, match=MatchKind.EXACT) for s in _as_tuple(data.get("exact"))
        ) + tuple(
            SelectorQuery(text=s, match=MatchKind.PATTERN) for s in _as_tuple(data.get("pattern"))
        )
        for query in selectors:
            if query.match is MatchKind.PATTERN:
                _compile_check(query.text, where)

        declaration = None
        if kind is CheckKind.DECLARATION:
            properties = _as_tuple(data.get("property"))
            values = _as_tuple(data.get("value"))
            if not properties or not values:
                raise RubricError(f"{where}: declaration checks need 'property' and 'value'")
            for pattern in properties + values:
                _compile_check(pattern, where)
            declaration = DeclarationSpec(properties=properties, values=values)

        if kind in (CheckKind.RULE, CheckKind.DECLARATION) and not selectors:
            raise RubricError(f"{where}: {kind.value} checks need an 'exact' or 'pattern' selector")

        return CheckSpec(
            label=str(data["label"]),
            kind=kind,
            selectors=selectors,
            declaration=declaration,
            href=str(data.get("href", "styles.css")),
        )
