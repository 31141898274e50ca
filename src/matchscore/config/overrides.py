from __future__ import annotations

# Overrides come from JSON payloads (dict-like objects), so typing stays loose here
# and shape errors are reported with the dotted key path.
from typing import Any, Mapping

from matchscore.config.settings import Settings

"""
Per-run settings overrides (safe subset).

A ranking run may pass `settings_overrides` to tune scoring knobs without editing
YAML files. This module:
- validates the override payload against a whitelist,
- deep-merges the safe subset onto current settings,
- re-validates with Pydantic to ensure types/ranges remain correct.

File paths (`model.path`, `catalog.path`) are never overridable per run.
"""

# A value of True means "allow any keys under this subtree".
# A nested dict means "only allow the listed keys, recursively".
ALLOWED_SETTINGS_OVERRIDES_TREE: dict[str, Any] = {
    # Weights and thresholds only change arithmetic.
    "scoring": True,
    "model": {"blend_weight": True},
    "ranking": {"max_candidates": True},
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    # New dict so the caller's `base` object is never mutated.
    merged: dict[str, Any] = dict(base)
    for key, override_value in override.items():
        if isinstance(override_value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(dict(merged[key]), override_value)
            continue
        merged[key] = override_value
    return merged


def _filter_overrides(
    overrides: Mapping[str, Any],
    *,
    allowed_tree: Mapping[str, Any],
    path: tuple[str, ...] = (),
) -> dict[str, Any]:
    filtered: dict[str, Any] = {}
    for key, value in overrides.items():
        # Reject unknown keys early with a precise path.
        if key not in allowed_tree:
            dotted_path = ".".join((*path, key))
            raise ValueError(
                f"settings_overrides contains a disallowed key: '{dotted_path}'"
            )

        allowed = allowed_tree[key]
        if allowed is True:
            filtered[key] = value
            continue

        # Restricted subtrees must be mappings we can recurse into.
        if not isinstance(value, Mapping):
            dotted_path = ".".join((*path, key))
            raise ValueError(
                f"settings_overrides key '{dotted_path}' must be a mapping"
            )

        filtered[key] = _filter_overrides(
            value, allowed_tree=allowed, path=(*path, key)
        )
    return filtered


def apply_settings_overrides(
    settings: Settings, overrides: Mapping[str, Any] | None
) -> Settings:
    # No overrides: hand back the shared Settings object unchanged.
    if not overrides:
        return settings

    safe_overrides = _filter_overrides(
        overrides, allowed_tree=ALLOWED_SETTINGS_OVERRIDES_TREE
    )
    merged_payload = _deep_merge(settings.model_dump(mode="python"), safe_overrides)

    # Re-validate so a run never uses an invalid Settings object.
    return Settings.model_validate(merged_payload)
