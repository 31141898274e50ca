"""
User pool loader.

The pool is a local JSON file (default: `data/users/sample_users.json`) holding a list
of users with optional `profile` and `preferences` relations, as exported from the
application's data store. We validate it into typed Pydantic models so scoring code
can assume a consistent shape.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter

from matchscore.core.env import resolve_project_path
from matchscore.domain.models import UserRecord


_USERS_ADAPTER = TypeAdapter(list[UserRecord])


def load_users(path: str | Path) -> list[UserRecord]:
    """Load and validate a user pool JSON file."""
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("users", [])
    return _USERS_ADAPTER.validate_python(payload)


def find_user(users: list[UserRecord], user_id: str) -> UserRecord:
    for u in users:
        if u.id == user_id:
            return u
    raise KeyError(f"Unknown user id '{user_id}'")
