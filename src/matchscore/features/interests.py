from __future__ import annotations

from matchscore.domain.models import Profile


def shared_interests(viewer: Profile, candidate: Profile) -> list[str]:
    """Tags both profiles list, in the viewer's order (exact, case-sensitive match)."""
    theirs = set(candidate.interests)
    return [t for t in viewer.interests if t in theirs]


def interest_jaccard(viewer: Profile, candidate: Profile) -> float:
    """|shared| / |union| of the two interest sets; 0.0 when both are empty."""
    mine = set(viewer.interests)
    theirs = set(candidate.interests)
    union = mine | theirs
    if not union:
        return 0.0
    return len(mine & theirs) / len(union)
