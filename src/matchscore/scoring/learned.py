# src/matchscore/scoring/learned.py
"""
Learned (predictive-model) scoring strategy.

A pre-trained estimator is loaded from a joblib artifact once per process and then
shared read-only by every scoring call (concurrent readers never block each other).
The artifact is either a bare estimator or a dict of the form:

    {"model": <estimator>, "feature_names": [...]}

When `feature_names` is present it must equal `MODEL_FEATURE_NAMES`, otherwise the
artifact was trained on a different encoding and is rejected.

Any failure while loading raises `ModelUnavailable`; any failure while predicting is
logged and the heuristic score is returned instead, so recommendations never block
on the model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import joblib
import numpy as np

from matchscore.config.settings import Settings
from matchscore.domain.errors import ModelUnavailable
from matchscore.domain.models import Preferences, Profile
from matchscore.features.pairwise import MODEL_FEATURE_NAMES, MatchFeatures, model_vector
from matchscore.scoring.composite import clamp01
from matchscore.scoring.heuristic import HeuristicStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedModel:
    """A loaded estimator plus the feature layout it expects."""

    estimator: Any
    feature_names: tuple[str, ...]
    source: str

    def predict(self, x: np.ndarray) -> float:
        if hasattr(self.estimator, "predict_proba"):
            proba = np.asarray(self.estimator.predict_proba(x), dtype=float)
            # Binary classifiers: probability of the positive ("good match") class.
            value = proba[0, -1]
        else:
            value = np.asarray(self.estimator.predict(x), dtype=float).ravel()[0]
        if not np.isfinite(value):
            raise ModelUnavailable(f"Model {self.source} returned a non-finite prediction")
        return clamp01(float(value))


def wrap_estimator(artifact: Any, *, source: str = "<memory>") -> LoadedModel:
    """Validate an artifact (bare estimator or dict) and wrap it."""
    if isinstance(artifact, dict):
        estimator = artifact.get("model")
        names = artifact.get("feature_names")
    else:
        estimator = artifact
        names = None

    if estimator is None or not (hasattr(estimator, "predict_proba") or hasattr(estimator, "predict")):
        raise ModelUnavailable(f"Artifact {source} does not contain a predictive model")

    if names is not None and tuple(names) != MODEL_FEATURE_NAMES:
        raise ModelUnavailable(
            f"Artifact {source} expects {len(names)} features that do not match the scorer's encoding"
        )
    return LoadedModel(estimator=estimator, feature_names=MODEL_FEATURE_NAMES, source=source)


@lru_cache
def load_model(path: str) -> LoadedModel:
    """Load and cache the model artifact at `path` (process-wide, read-only)."""
    p = Path(path)
    if not p.is_file():
        raise ModelUnavailable(f"Model artifact not found: {p}")
    try:
        artifact = joblib.load(p)
    except Exception as e:
        raise ModelUnavailable(f"Failed to load model artifact {p}: {e}") from e
    model = wrap_estimator(artifact, source=str(p))
    logger.info("Loaded matching model from %s", p)
    return model


class LearnedStrategy:
    """Model-backed scorer blended with (or substituted for) the heuristic score."""

    name = "learned"

    def __init__(self, settings: Settings, model: LoadedModel, *, fallback: HeuristicStrategy | None = None) -> None:
        self.settings = settings
        self.model = model
        self.fallback = fallback or HeuristicStrategy(settings)

    def score(
        self, viewer: Profile, candidate: Profile, preferences: Preferences, features: MatchFeatures
    ) -> float:
        heuristic = self.fallback.score(viewer, candidate, preferences, features)
        try:
            learned = self.model.predict(model_vector(features, viewer, candidate))
        except Exception as e:
            logger.warning("Model prediction failed for candidate %s, using heuristic score: %s", candidate.id, e)
            return heuristic

        blend = float(self.settings.model.blend_weight)
        return clamp01(blend * learned + (1.0 - blend) * heuristic)
