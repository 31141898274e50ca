"""
MatchScore CLI entrypoint.

This CLI is intended for quick local checks of scoring and ranking against a JSON
user pool, without the surrounding web application.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from matchscore.catalog.loader import find_user, load_users
from matchscore.config.overrides import apply_settings_overrides
from matchscore.config.settings import get_settings
from matchscore.core.logging import configure_logging
from matchscore.domain.errors import InvalidInput
from matchscore.recommender.rank import rank_candidates
from matchscore.scoring.explain import one_line_summary
from matchscore.scoring.scorer import score_match


def _parse_override_pairs(pairs: list[str]) -> dict[str, Any]:
    """Parse `dotted.key=VALUE` arguments into a nested override mapping."""
    out: dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid --set '{pair}', expected KEY=VALUE")
        key, raw = pair.split("=", 1)
        try:
            value: Any = json.loads(raw)
        except json.JSONDecodeError:
            value = raw
        node = out
        parts = key.strip().split(".")
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value
    return out


def _settings_for(args: argparse.Namespace):
    settings = get_settings()
    overrides = _parse_override_pairs(args.set or [])
    if args.strategy:
        overrides.setdefault("scoring", {})["strategy"] = args.strategy
    return apply_settings_overrides(settings, overrides)


def _cmd_score(args: argparse.Namespace) -> int:
    """Handle the `score` subcommand."""
    settings = _settings_for(args)
    users = load_users(args.users or settings.catalog.path)
    try:
        viewer = find_user(users, args.viewer)
        candidate = find_user(users, args.candidate)
    except KeyError as e:
        print(f"Cannot score: {e.args[0]}")
        return 2

    try:
        result = score_match(viewer.profile, candidate.profile, viewer.preferences, settings=settings)
    except InvalidInput as e:
        print(f"Cannot score: {e}")
        return 2

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0
    print(f"{candidate.name or candidate.id}: {result.reason}")
    print(f"  {one_line_summary(result)}")
    return 0


def _cmd_rank(args: argparse.Namespace) -> int:
    """Handle the `rank` subcommand."""
    settings = _settings_for(args)
    users = load_users(args.users or settings.catalog.path)
    try:
        viewer = find_user(users, args.viewer)
    except KeyError as e:
        print(f"Cannot rank: {e.args[0]}")
        return 2

    try:
        ranking = rank_candidates(viewer, users, settings=settings, limit=args.limit)
    except InvalidInput as e:
        print(f"Cannot rank: {e}")
        return 2

    if args.json:
        print(json.dumps(ranking.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return 0

    print(f"Generated at: {ranking.generated_at.isoformat()} (strategy={ranking.meta.get('strategy')})")
    for i, item in enumerate(ranking.results, start=1):
        name = item.display.get("name") or item.candidate_id
        print(f"{i:>2}. {name} ({item.display.get('age')})  {one_line_summary(item)}")
        print(f"    {item.reason}")
    for s in ranking.meta.get("skipped", []):
        print(f"  skipped {s['candidate_id']}: {s['reason']}")
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--users", type=str, default=None, help="User pool JSON (defaults to catalog.path)")
    p.add_argument("--viewer", required=True, type=str, help="Viewer user id")
    p.add_argument("--strategy", choices=["heuristic", "learned"], default=None)
    p.add_argument("--set", action="append", default=[], help="Settings override: dotted.key=VALUE")
    p.add_argument("--json", action="store_true", help="Output machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the MatchScore CLI."""
    parser = argparse.ArgumentParser(prog="matchscore")
    sub = parser.add_subparsers(dest="command", required=True)

    sc = sub.add_parser("score", help="Score one candidate against a viewer.")
    _add_common(sc)
    sc.add_argument("--candidate", required=True, type=str, help="Candidate user id")
    sc.set_defaults(func=_cmd_score)

    rk = sub.add_parser("rank", help="Rank candidates from the user pool for a viewer.")
    _add_common(rk)
    rk.add_argument("--limit", type=int, default=None, help="Max candidates to score")
    rk.set_defaults(func=_cmd_rank)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m matchscore.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
