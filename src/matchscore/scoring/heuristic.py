# src/matchscore/scoring/heuristic.py
"""
Heuristic (weighted-feature) scoring strategy.

The score starts from `scoring.base_score` and adds one term per signal:
- age: `+bonus` inside the preferred range, sliding down to `-penalty` once the
  candidate is `decay_years` past the nearest boundary;
- gender: `+bonus` when the candidate's gender is preferred, 0 otherwise;
- location: `+bonus` scaled by proximity, 0 without coordinates;
- interests: Jaccard overlap scaled to `interests.cap`;
- lifestyle: share of matching attributes scaled to `lifestyle.cap`.

The sum is clamped to 0..1. Pure and deterministic.
"""

from __future__ import annotations

from matchscore.config.settings import Settings
from matchscore.domain.models import Preferences, Profile
from matchscore.features.pairwise import MatchFeatures
from matchscore.scoring.composite import TermContribution, total


def heuristic_terms(features: MatchFeatures, *, settings: Settings) -> list[TermContribution]:
    cfg = settings.scoring
    age_bonus = float(cfg.age.bonus)
    age_penalty = float(cfg.age.penalty)

    terms = [
        TermContribution("base", float(cfg.base_score)),
        TermContribution("age", -age_penalty + (age_bonus + age_penalty) * features.age_credit),
        TermContribution("gender", float(cfg.gender.bonus) if features.gender_match else 0.0),
    ]

    if features.location_credit is None:
        terms.append(TermContribution("location", 0.0, available=False))
    else:
        terms.append(TermContribution("location", float(cfg.location.bonus) * features.location_credit))

    terms.append(TermContribution("interests", float(cfg.interests.cap) * features.interest_jaccard))

    if features.lifestyle_credit is None:
        terms.append(TermContribution("lifestyle", 0.0, available=False))
    else:
        terms.append(TermContribution("lifestyle", float(cfg.lifestyle.cap) * features.lifestyle_credit))
    return terms


class HeuristicStrategy:
    """Always-available, deterministic scorer."""

    name = "heuristic"

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def score(
        self, viewer: Profile, candidate: Profile, preferences: Preferences, features: MatchFeatures
    ) -> float:
        return total(heuristic_terms(features, settings=self.settings))
