from __future__ import annotations

import pytest

from matchscore.config.overrides import apply_settings_overrides
from matchscore.config.settings import Settings, get_settings


def test_packaged_defaults_load():
    settings = get_settings()
    assert isinstance(settings, Settings)
    assert settings.scoring.base_score == 0.5
    assert settings.scoring.age.decay_years == 10
    assert settings.ranking.max_candidates == 20


def test_apply_settings_overrides_returns_same_object_when_none():
    settings = get_settings()
    # Fast path: no rebuild when nothing is overridden.
    assert apply_settings_overrides(settings, None) is settings


def test_apply_settings_overrides_can_override_scoring_knobs():
    settings = get_settings()
    out = apply_settings_overrides(settings, {"scoring": {"location": {"radius_km": 25}}})

    assert out.scoring.location.radius_km == 25
    # The shared cached settings must stay untouched.
    assert settings.scoring.location.radius_km != 25


def test_apply_settings_overrides_rejects_model_path():
    with pytest.raises(ValueError, match=r"model\.path"):
        apply_settings_overrides(get_settings(), {"model": {"path": "/etc/passwd"}})


def test_apply_settings_overrides_rejects_wrong_value_shapes_for_restricted_subtrees():
    with pytest.raises(ValueError, match=r"settings_overrides key 'ranking' must be a mapping"):
        apply_settings_overrides(get_settings(), {"ranking": 1})


def test_apply_settings_overrides_revalidates_ranges():
    with pytest.raises(ValueError):
        apply_settings_overrides(get_settings(), {"model": {"blend_weight": 2.0}})
