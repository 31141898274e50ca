# src/matchscore/features/age.py
"""
Age compatibility feature.

Full credit when the candidate's age is inside the viewer's inclusive range;
outside it, credit decays linearly with the distance to the nearest boundary and
reaches zero `decay_years` past it.
"""

from __future__ import annotations

from matchscore.domain.models import AgeRange
from matchscore.scoring.composite import clamp01


def age_distance(age: int, age_range: AgeRange) -> int:
    """Years between `age` and the nearest range boundary (0 when inside)."""
    lo, hi = int(age_range.min), int(age_range.max)
    if lo <= age <= hi:
        return 0
    # A degenerate range (min > max) has no inside; measure to the closer bound.
    return min(abs(age - lo), abs(age - hi))


def age_credit(age: int, age_range: AgeRange, *, decay_years: float) -> float:
    distance = age_distance(age, age_range)
    if distance == 0:
        return 1.0
    return clamp01(1 - distance / max(float(decay_years), 0.1))
