"""
Shared scoring utilities.

Small, reusable helpers used across feature extractors and strategies:
- `clamp01`: keep values within 0..1 for stable output
- `TermContribution`: one additive term of the heuristic score, for explainability
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


def clamp01(x: float) -> float:
    """Clamp a number into the [0.0, 1.0] range."""
    return max(0.0, min(1.0, float(x)))


TermName = Literal["base", "age", "gender", "location", "interests", "lifestyle"]


@dataclass(frozen=True)
class TermContribution:
    """A single additive term of the heuristic score."""

    name: TermName
    value: float
    available: bool = True


def total(terms: list[TermContribution]) -> float:
    """Sum all terms and clamp into 0..1."""
    return clamp01(sum(t.value for t in terms))
