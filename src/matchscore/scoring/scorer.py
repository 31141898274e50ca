# src/matchscore/scoring/scorer.py
"""
Single-pair scoring entrypoint.

`score_match` is what callers use: extract features, run the configured strategy,
explain the result. It performs no I/O and never mutates its inputs. It refuses to
score only when a required entity is missing (`InvalidInput`); missing optional data
(location, interests, lifestyle) degrades to neutral contributions instead.
"""

from __future__ import annotations

from matchscore.config.settings import Settings, get_settings
from matchscore.domain.errors import InvalidInput
from matchscore.domain.models import MatchResult, Preferences, Profile
from matchscore.features.pairwise import extract_features
from matchscore.scoring.composite import clamp01
from matchscore.scoring.explain import generate_reason
from matchscore.scoring.strategy import ScoringStrategy, build_strategy


def score_match(
    viewer: Profile | None,
    candidate: Profile | None,
    preferences: Preferences | None,
    *,
    settings: Settings | None = None,
    strategy: ScoringStrategy | None = None,
) -> MatchResult:
    if viewer is None:
        raise InvalidInput("viewer profile is required")
    if candidate is None:
        raise InvalidInput("candidate profile is required")
    if preferences is None:
        raise InvalidInput(f"preferences are required for viewer {viewer.id}")

    settings = settings or get_settings()
    strategy = strategy or build_strategy(settings)

    features = extract_features(viewer, candidate, preferences, settings=settings)
    score = clamp01(strategy.score(viewer, candidate, preferences, features))
    return MatchResult(
        candidate_id=candidate.id,
        display=candidate.display_fields(),
        score=score,
        reason=generate_reason(features, score, settings=settings),
        strategy=strategy.name,
        features=features.as_dict(),
    )
