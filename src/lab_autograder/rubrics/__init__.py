"""
Rubrics module.

Declarative rubric tables: items, their required checks, and the loader
that reads them from YAML.
"""

from .loader import RubricError, RubricLoader
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

__all__ = [
    "RubricError",
    "RubricLoader",
    "CheckKind",
    "CheckSpec",
    "DeclarationSpec",
    "MatchKind",
    "Rubric",
    "RubricItem",
    "SelectorQuery",
    "SourceFile",
]
