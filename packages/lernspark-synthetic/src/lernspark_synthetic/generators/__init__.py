"""Synthetic value generators.

Exports:
- SyntheticValueGenerator: Faker-based per-column value generator
- SemanticCategory, SemanticRule, SEMANTIC_RULES: Ordered name dispatch table
- classify_column: Semantic category of a text column name
"""

from __future__ import annotations

from lernspark_synthetic.generators.semantics import (
    SEMANTIC_RULES,
    SemanticCategory,
    SemanticRule,
    classify_column,
    resolve_rule,
)
from lernspark_synthetic.generators.values import SyntheticValueGenerator

__all__ = [
    "SEMANTIC_RULES",
    "SemanticCategory",
    "SemanticRule",
    "SyntheticValueGenerator",
    "classify_column",
    "resolve_rule",
]
