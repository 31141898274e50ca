# src/matchscore/features/pairwise.py
"""
Pairwise feature extraction (viewer x candidate).

Turns two profiles plus the viewer's preferences into:
- `MatchFeatures`: named, explainable signals consumed by the heuristic scorer and
  by reason generation;
- `model_vector`: a fixed-order numeric vector consumed by the learned scorer.

Signals that cannot be computed (no coordinates, no lifestyle data) stay `None` in
`MatchFeatures`; in the model vector they are encoded with `NEUTRAL_VALUE`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from matchscore.config.settings import Settings
from matchscore.domain.models import KNOWN_GENDERS, Preferences, Profile
from matchscore.features.age import age_credit
from matchscore.features.interests import interest_jaccard, shared_interests
from matchscore.features.lifestyle import lifestyle_credit
from matchscore.features.location import location_credit, profile_distance_km

NEUTRAL_VALUE = 0.5

# Tag vocabulary the learned model was trained on (one-hot per side).
INTEREST_VOCABULARY: tuple[str, ...] = (
    "music",
    "sports",
    "travel",
    "food",
    "movies",
    "reading",
    "art",
    "technology",
    "fitness",
    "fashion",
)

_PAIR_FEATURES: tuple[str, ...] = (
    "age_credit",
    "gender_match",
    "location_credit",
    "interest_jaccard",
    "lifestyle_credit",
)


def _side_feature_names(prefix: str) -> list[str]:
    return [
        f"{prefix}_age",
        *(f"{prefix}_gender_{g}" for g in KNOWN_GENDERS),
        *(f"{prefix}_interest_{t}" for t in INTEREST_VOCABULARY),
    ]


MODEL_FEATURE_NAMES: tuple[str, ...] = (
    *_PAIR_FEATURES,
    *_side_feature_names("viewer"),
    *_side_feature_names("candidate"),
)


@dataclass(frozen=True)
class MatchFeatures:
    """Explainable pairwise signals for one (viewer, candidate) pair."""

    age_credit: float
    age_difference: int
    gender_match: bool
    distance_km: float | None
    viewer_has_coordinates: bool
    location_credit: float | None
    shared_interests: tuple[str, ...]
    interest_jaccard: float
    lifestyle_credit: float | None

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["shared_interests"] = list(self.shared_interests)
        return data


def gender_match(candidate: Profile, preferences: Preferences) -> bool:
    return candidate.gender is not None and candidate.gender in preferences.genders


def extract_features(
    viewer: Profile, candidate: Profile, preferences: Preferences, *, settings: Settings
) -> MatchFeatures:
    cfg = settings.scoring
    distance = profile_distance_km(viewer, candidate, preferences)
    return MatchFeatures(
        age_credit=age_credit(candidate.age, preferences.age_range, decay_years=cfg.age.decay_years),
        age_difference=abs(int(viewer.age) - int(candidate.age)),
        gender_match=gender_match(candidate, preferences),
        distance_km=distance,
        viewer_has_coordinates=viewer.location is not None,
        location_credit=location_credit(distance, radius_km=cfg.location.radius_km),
        shared_interests=tuple(shared_interests(viewer, candidate)),
        interest_jaccard=interest_jaccard(viewer, candidate),
        lifestyle_credit=lifestyle_credit(viewer, candidate, preferences),
    )


def _side_vector(profile: Profile) -> list[float]:
    tags = set(profile.interests)
    return [
        float(profile.age) / 100.0,
        *(1.0 if profile.gender == g else 0.0 for g in KNOWN_GENDERS),
        *(1.0 if t in tags else 0.0 for t in INTEREST_VOCABULARY),
    ]


def _or_neutral(value: float | None) -> float:
    return NEUTRAL_VALUE if value is None else float(value)


def model_vector(features: MatchFeatures, viewer: Profile, candidate: Profile) -> np.ndarray:
    """Encode a pair into a 1 x len(MODEL_FEATURE_NAMES) float matrix."""
    row = [
        float(features.age_credit),
        1.0 if features.gender_match else 0.0,
        _or_neutral(features.location_credit),
        float(features.interest_jaccard),
        _or_neutral(features.lifestyle_credit),
        *_side_vector(viewer),
        *_side_vector(candidate),
    ]
    return np.asarray([row], dtype=float)
