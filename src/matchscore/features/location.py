# src/matchscore/features/location.py
"""
Location proximity feature.

Distance-based (haversine) rather than comparing city strings. The viewer side uses
the profile coordinates and falls back to the location stored in preferences.
Missing coordinates on either side mean "no signal" (None), which scorers treat as
a neutral contribution.
"""

from __future__ import annotations

from matchscore.core.geo import haversine_km
from matchscore.domain.models import GeoPoint, Preferences, Profile
from matchscore.scoring.composite import clamp01


def viewer_anchor(viewer: Profile, preferences: Preferences | None) -> GeoPoint | None:
    if viewer.location is not None:
        return viewer.location
    return preferences.location if preferences is not None else None


def profile_distance_km(viewer: Profile, candidate: Profile, preferences: Preferences | None) -> float | None:
    """Great-circle distance between viewer and candidate, or None when unknown."""
    anchor = viewer_anchor(viewer, preferences)
    if anchor is None or candidate.location is None:
        return None
    return haversine_km(anchor, candidate.location)


def location_credit(distance_km: float | None, *, radius_km: float) -> float | None:
    # Full credit at distance 0, linear decay to zero at `radius_km`.
    if distance_km is None:
        return None
    return clamp01(1 - float(distance_km) / max(float(radius_km), 0.001))
