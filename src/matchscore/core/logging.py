"""
Logging configuration.

We use a YAML logging config (`src/matchscore/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `MATCHSCORE_LOG_LEVEL`).
"""

from __future__ import annotations

import logging.config

from matchscore.config.settings import get_logging_config, get_settings


def configure_logging() -> None:
    """Configure the Python logging system based on packaged YAML config + settings."""
    settings = get_settings()
    # Copy so the cached config dict is never mutated between calls.
    config = {k: (dict(v) if isinstance(v, dict) else v) for k, v in get_logging_config().items()}

    level = settings.app.log_level.upper()
    config["root"] = {**config.get("root", {}), "level": level}
    handlers = {name: dict(h) for name, h in config.get("handlers", {}).items()}
    for handler in handlers.values():
        if "level" in handler:
            handler["level"] = level
    config["handlers"] = handlers

    logging.config.dictConfig(config)
