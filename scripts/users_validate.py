from __future__ import annotations

import argparse
from collections import Counter

from pydantic import ValidationError

from matchscore.catalog.loader import load_users
from matchscore.core.env import resolve_project_path
from matchscore.domain.models import KNOWN_GENDERS


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Validate a MatchScore user pool file (offline).")
    p.add_argument("--users", type=str, default="data/users/sample_users.json")
    args = p.parse_args(argv)

    users_path = resolve_project_path(args.users)
    if not users_path.exists():
        print("Users file not found:", users_path)
        return 2

    try:
        users = load_users(users_path)
    except ValidationError as e:
        print(f"Invalid users file: {e.error_count()} validation error(s)")
        print(e)
        return 2

    ids = Counter(u.id for u in users)
    duplicate_ids = sorted(i for i, n in ids.items() if n > 1)
    no_profile = [u.id for u in users if u.profile is None]
    no_preferences = [u.id for u in users if u.preferences is None]
    no_location = [u.id for u in users if u.profile is not None and u.profile.location is None]
    unknown_gender = [
        u.id for u in users if u.profile is not None and u.profile.gender not in (*KNOWN_GENDERS, None)
    ]
    degenerate_ranges = [
        u.id
        for u in users
        if u.preferences is not None and u.preferences.age_range.min > u.preferences.age_range.max
    ]

    print("Users:", len(users))
    print("Duplicate ids:", duplicate_ids or "none")
    print("Without profile (not rankable):", len(no_profile))
    print("Without preferences (cannot be a viewer):", len(no_preferences))
    print("Without coordinates:", len(no_location))
    print("Unknown gender values:", len(unknown_gender))
    print("Degenerate age ranges (min > max):", len(degenerate_ranges))
    if unknown_gender:
        print("Sample unknown gender ids:", unknown_gender[:10])
    if degenerate_ranges:
        print("Sample degenerate range ids:", degenerate_ranges[:10])

    return 1 if duplicate_ids else 0


if __name__ == "__main__":
    raise SystemExit(main())
