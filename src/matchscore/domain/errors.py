"""
Error taxonomy for the scoring core.

Only structural absence escalates to callers (`InvalidInput`). `ModelUnavailable`
is raised by the learned-model loader and absorbed by the strategy layer, which
falls back to the heuristic scorer.
"""

from __future__ import annotations


class MatchScoreError(Exception):
    """Base class for matchscore errors."""


class InvalidInput(MatchScoreError, ValueError):
    """A required entity (viewer, candidate profile, preferences) is absent."""


class ModelUnavailable(MatchScoreError):
    """The learned model could not be loaded or could not produce a prediction."""
