from __future__ import annotations

# This module is the caller-side "orchestrator" for match recommendations.
# It wires together:
# - a viewer record (profile + preferences) and a pool of candidate records
# - per-run settings overrides and strategy selection
# - per-pair scoring (`score_match`)
# - final ranking with a deterministic tie-break (RankingResult)
#
# Candidates that cannot be scored are skipped and reported in `meta`, never surfaced as errors.

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Iterable, Mapping
from zoneinfo import ZoneInfo

from matchscore.config.overrides import apply_settings_overrides
from matchscore.config.settings import Settings, get_settings
from matchscore.domain.errors import InvalidInput
from matchscore.domain.models import MatchResult, Preferences, Profile, RankingResult, UserRecord
from matchscore.scoring.scorer import score_match
from matchscore.scoring.strategy import ScoringStrategy, build_strategy

logger = logging.getLogger(__name__)


def _as_record(item: UserRecord | Profile) -> UserRecord:
    if isinstance(item, UserRecord):
        return item
    return UserRecord(id=item.id, name=item.name, profile=item)


def sort_matches(results: Iterable[MatchResult]) -> list[MatchResult]:
    """Score descending, then candidate id ascending for equal scores."""
    return sorted(results, key=lambda r: (-r.score, r.candidate_id))


def rank_candidates(
    viewer: UserRecord | Profile,
    candidates: Iterable[UserRecord | Profile],
    *,
    preferences: Preferences | None = None,
    settings: Settings | None = None,
    strategy: ScoringStrategy | None = None,
    settings_overrides: Mapping[str, Any] | None = None,
    limit: int | None = None,
) -> RankingResult:
    t0 = time.monotonic()
    settings = settings or get_settings()
    settings = apply_settings_overrides(settings, settings_overrides)

    viewer_record = _as_record(viewer)
    if viewer_record.profile is None:
        raise InvalidInput(f"viewer {viewer_record.id} has no profile")
    preferences = preferences or viewer_record.preferences
    if preferences is None:
        raise InvalidInput(f"viewer {viewer_record.id} has no preferences")

    # Strategy is resolved once per run; a learned model is shared by every pair.
    strategy = strategy or build_strategy(settings)

    # ---- Bound the candidate pool before scoring (caller policy, not a core invariant) ----
    max_candidates = int(limit if limit is not None else settings.ranking.max_candidates)
    if max_candidates < 1:
        raise InvalidInput(f"limit must be a positive number of candidates, got {max_candidates}")
    skipped: list[dict[str, str]] = []
    pool: list[UserRecord] = []
    for item in candidates:
        record = _as_record(item)
        if record.id == viewer_record.id:
            continue
        if record.profile is None:
            logger.warning("Skipping candidate %s: no profile", record.id)
            skipped.append({"candidate_id": record.id, "reason": "no profile"})
            continue
        pool.append(record)
        if len(pool) >= max_candidates:
            break

    # Profiles and preferences are checked above, so every pooled pair is scorable.
    def _score(record: UserRecord) -> MatchResult:
        return score_match(viewer_record.profile, record.profile, preferences, settings=settings, strategy=strategy)

    # ---- Score every pair (independent, so they may run concurrently) ----
    workers = int(settings.ranking.max_workers)
    if workers > 1 and len(pool) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            scored = list(executor.map(_score, pool))
    else:
        scored = [_score(r) for r in pool]

    results = sort_matches(scored)
    elapsed_ms = int((time.monotonic() - t0) * 1000)
    logger.debug(
        "Ranked %d candidates for viewer %s in %d ms (%s)", len(results), viewer_record.id, elapsed_ms, strategy.name
    )

    return RankingResult(
        generated_at=datetime.now(ZoneInfo(settings.app.timezone)),
        viewer_id=viewer_record.id,
        results=results,
        meta={
            "strategy": strategy.name,
            "candidates_considered": len(pool),
            "skipped": skipped,
            "max_candidates": max_candidates,
            "overrides_enabled": bool(settings_overrides),
            "timings_ms": {"total": elapsed_ms},
        },
    )
