# src/matchscore/features/lifestyle.py
"""
Lifestyle compatibility feature.

The target lifestyle is what the viewer asked for in preferences; when the viewer
left that empty we compare against the viewer's own lifestyle instead. Only
attributes known on both sides count, so a sparse profile is neither rewarded nor
penalized for what it does not say.
"""

from __future__ import annotations

from matchscore.domain.models import Lifestyle, Preferences, Profile

LIFESTYLE_FIELDS: tuple[str, ...] = ("smoking", "drinking", "exercise")


def target_lifestyle(viewer: Profile, preferences: Preferences | None) -> Lifestyle | None:
    if preferences is not None and preferences.lifestyle is not None:
        return preferences.lifestyle
    return viewer.lifestyle


def lifestyle_matches(target: Lifestyle | None, candidate: Lifestyle | None) -> dict[str, bool]:
    """Per-attribute exact-match flags for attributes known on both sides."""
    if target is None or candidate is None:
        return {}
    out: dict[str, bool] = {}
    for field in LIFESTYLE_FIELDS:
        wanted = getattr(target, field)
        actual = getattr(candidate, field)
        if wanted is None or actual is None:
            continue
        out[field] = wanted == actual
    return out


def lifestyle_credit(viewer: Profile, candidate: Profile, preferences: Preferences | None) -> float | None:
    matches = lifestyle_matches(target_lifestyle(viewer, preferences), candidate.lifestyle)
    if not matches:
        return None
    return sum(1 for ok in matches.values() if ok) / len(matches)
