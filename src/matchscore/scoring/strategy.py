"""
Scoring strategy selection.

Both strategies honor the same contract: given two profiles, the viewer's
preferences and the extracted features, return a score in 0..1. The choice is made
once from settings (`scoring.strategy`); a `learned` selection whose model cannot be
initialized fails closed to the heuristic strategy.
"""

from __future__ import annotations

import logging
from typing import Protocol

from matchscore.config.settings import Settings
from matchscore.core.env import resolve_project_path
from matchscore.domain.errors import ModelUnavailable
from matchscore.domain.models import Preferences, Profile
from matchscore.features.pairwise import MatchFeatures
from matchscore.scoring.heuristic import HeuristicStrategy
from matchscore.scoring.learned import LearnedStrategy, load_model

logger = logging.getLogger(__name__)


class ScoringStrategy(Protocol):
    name: str

    def score(
        self, viewer: Profile, candidate: Profile, preferences: Preferences, features: MatchFeatures
    ) -> float: ...


def build_strategy(settings: Settings) -> ScoringStrategy:
    heuristic = HeuristicStrategy(settings)
    if settings.scoring.strategy != "learned":
        return heuristic

    if not settings.model.path:
        logger.warning("Learned strategy selected but model.path is empty; using heuristic strategy")
        return heuristic

    try:
        model = load_model(str(resolve_project_path(settings.model.path)))
    except ModelUnavailable as e:
        logger.warning("Learned strategy unavailable, using heuristic strategy: %s", e)
        return heuristic
    return LearnedStrategy(settings, model, fallback=heuristic)
