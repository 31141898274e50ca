"""
Match explanation helpers.

Reason generation is independent of scoring arithmetic: fixed predicates are checked
in a stable order and each true one contributes a clause. The clauses are joined
with " and " and terminated with "!". When nothing fires, a generic fallback is
returned so the reason is never empty.
"""

from __future__ import annotations

from matchscore.config.settings import Settings
from matchscore.domain.models import MatchResult
from matchscore.features.pairwise import MatchFeatures

FALLBACK_REASON = "You might be a good match!"


def reason_clauses(features: MatchFeatures, score: float, *, settings: Settings) -> list[str]:
    cfg = settings.scoring.reasons
    clauses: list[str] = []
    if features.age_difference <= cfg.close_age_years:
        clauses.append("You are close in age")
    if features.gender_match:
        clauses.append("You share gender preferences")
    if features.shared_interests:
        clauses.append("You both enjoy " + ", ".join(features.shared_interests))
    # Only profile-to-profile distance counts here, never the preference location.
    if (
        features.viewer_has_coordinates
        and features.distance_km is not None
        and features.distance_km < cfg.same_area_km
    ):
        clauses.append("You live in the same area")
    if score > cfg.high_score_threshold:
        clauses.append("You have a very high compatibility score")
    return clauses


def generate_reason(features: MatchFeatures, score: float, *, settings: Settings) -> str:
    clauses = reason_clauses(features, score, settings=settings)
    if not clauses:
        return FALLBACK_REASON
    return " and ".join(clauses) + "!"


def one_line_summary(result: MatchResult) -> str:
    """Render a compact single-line summary for a scored match."""
    parts = [f"score={result.score:.3f}", f"strategy={result.strategy}"]
    for key in ("age_credit", "location_credit", "interest_jaccard", "lifestyle_credit"):
        value = result.features.get(key)
        if value is not None:
            parts.append(f"{key}={float(value):.2f}")
    return " | ".join(parts)
