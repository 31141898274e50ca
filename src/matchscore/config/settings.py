# src/matchscore/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/matchscore/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `MATCHSCORE_STRATEGY`, `MATCHSCORE_MODEL_PATH`)
- an external YAML file via `MATCHSCORE_CONFIG_PATH`

Design rule:
- Scoring weights and thresholds live in YAML, not hard-coded in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from matchscore.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `matchscore.config`."""
    text = resources.files("matchscore.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "MatchScore"
    timezone: str = "UTC"
    log_level: str = "INFO"


class CatalogSettings(BaseModel):
    path: str = "data/users/sample_users.json"


class AgeTermSettings(BaseModel):
    bonus: float = Field(0.15, ge=0, le=1)
    penalty: float = Field(0.35, ge=0, le=1)
    decay_years: float = Field(10, gt=0)


class GenderTermSettings(BaseModel):
    bonus: float = Field(0.2, ge=0, le=1)


class LocationTermSettings(BaseModel):
    bonus: float = Field(0.1, ge=0, le=1)
    radius_km: float = Field(50, gt=0)


class InterestTermSettings(BaseModel):
    cap: float = Field(0.15, ge=0, le=1)


class LifestyleTermSettings(BaseModel):
    cap: float = Field(0.1, ge=0, le=1)


class ReasonSettings(BaseModel):
    close_age_years: int = Field(2, ge=0)
    same_area_km: float = Field(10, ge=0)
    high_score_threshold: float = Field(0.8, ge=0, le=1)


class ScoringSettings(BaseModel):
    strategy: Literal["heuristic", "learned"] = "heuristic"
    base_score: float = Field(0.5, ge=0, le=1)
    age: AgeTermSettings = Field(default_factory=AgeTermSettings)
    gender: GenderTermSettings = Field(default_factory=GenderTermSettings)
    location: LocationTermSettings = Field(default_factory=LocationTermSettings)
    interests: InterestTermSettings = Field(default_factory=InterestTermSettings)
    lifestyle: LifestyleTermSettings = Field(default_factory=LifestyleTermSettings)
    reasons: ReasonSettings = Field(default_factory=ReasonSettings)


class ModelSettings(BaseModel):
    path: str | None = "models/matching_model.joblib"
    blend_weight: float = Field(1.0, ge=0, le=1)


class RankingSettings(BaseModel):
    max_candidates: int = Field(20, ge=1)
    max_workers: int = Field(1, ge=1)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    model: ModelSettings = Field(default_factory=ModelSettings)
    ranking: RankingSettings = Field(default_factory=RankingSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("MATCHSCORE_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    strategy = os.getenv("MATCHSCORE_STRATEGY")
    if strategy:
        data.setdefault("scoring", {})["strategy"] = strategy.strip().lower()

    model_path = os.getenv("MATCHSCORE_MODEL_PATH")
    if model_path:
        data.setdefault("model", {})["path"] = model_path

    users_path = os.getenv("MATCHSCORE_USERS_PATH")
    if users_path:
        data.setdefault("catalog", {})["path"] = users_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("MATCHSCORE_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
