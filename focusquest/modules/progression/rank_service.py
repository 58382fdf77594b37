"""
Rank table and rank lookups for FocusQuest.

Purpose
-------
Static, ordered table of the eight rank tiers (E through SSS) keyed by
minimum level, plus the lookups the rest of the engine needs.

Design Notes
------------
- The table is a tuple validated at import: strictly ascending `min_level`,
  unique codes, lowest tier starting at level 1.
- Unknown codes never raise. `rank_by_code` returns None;
  `rank_or_default` and everything built on it fall back to the lowest tier.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Sequence, Tuple

from focusquest.domain.models.progression import RankInfo
from focusquest.modules.shared.constants import BOSS_LEVEL_CAP, MIN_LEVEL

RANKS: Tuple[RankInfo, ...] = (
    RankInfo(code="E", title="Beginner Scholar", min_level=1, color="#4A90A4"),
    RankInfo(code="D", title="Rising Student", min_level=10, color="#CD7F32"),
    RankInfo(code="C", title="Focused Apprentice", min_level=25, color="#4CAF50"),
    RankInfo(code="B", title="Dedicated Learner", min_level=45, color="#2196F3"),
    RankInfo(code="A", title="Elite Scholar", min_level=70, color="#9C27B0"),
    RankInfo(code="S", title="Master of Focus", min_level=100, color="#FFD700"),
    RankInfo(code="SS", title="Legendary Hunter", min_level=130, color="#E6A8D7"),
    RankInfo(code="SSS", title="Transcendent Being", min_level=150, color="#FFFFFF"),
)


class RankProgress(NamedTuple):
    current: RankInfo
    next: RankInfo
    levels_remaining: int


def validate_rank_table(ranks: Sequence[RankInfo]) -> None:
    """
    Raise ValueError unless `ranks` is non-empty, starts at level 1, has
    unique codes and strictly ascending minimum levels.
    """
    if not ranks:
        raise ValueError("rank table cannot be empty")
    if ranks[0].min_level != MIN_LEVEL:
        raise ValueError(f"lowest rank must start at level {MIN_LEVEL}")
    codes = [rank.code for rank in ranks]
    if len(set(codes)) != len(codes):
        raise ValueError(f"duplicate rank codes in {codes}")
    for lower, higher in zip(ranks, ranks[1:]):
        if higher.min_level <= lower.min_level:
            raise ValueError(
                f"rank {higher.code} (min {higher.min_level}) must start above "
                f"{lower.code} (min {lower.min_level})"
            )


validate_rank_table(RANKS)

_INDEX_BY_CODE = {rank.code: index for index, rank in enumerate(RANKS)}


def all_ranks() -> Tuple[RankInfo, ...]:
    return RANKS


def rank_index(code: str) -> Optional[int]:
    return _INDEX_BY_CODE.get(code)


def rank_for_level(level: int) -> RankInfo:
    """Highest tier whose minimum level is <= `level`; lowest tier otherwise."""
    for rank in reversed(RANKS):
        if level >= rank.min_level:
            return rank
    return RANKS[0]


def rank_by_code(code: str) -> Optional[RankInfo]:
    index = _INDEX_BY_CODE.get(code)
    return RANKS[index] if index is not None else None


def rank_or_default(code: str) -> RankInfo:
    return rank_by_code(code) or RANKS[0]


def check_rank_up(old_level: int, new_level: int) -> Optional[Tuple[RankInfo, RankInfo]]:
    """(old_rank, new_rank) when the two levels resolve to different tiers."""
    old_rank = rank_for_level(old_level)
    new_rank = rank_for_level(new_level)
    if old_rank.code != new_rank.code:
        return old_rank, new_rank
    return None


def next_rank_after(code: str) -> Optional[RankInfo]:
    """Successor tier, or None for the top tier and unknown codes."""
    index = _INDEX_BY_CODE.get(code)
    if index is None or index + 1 >= len(RANKS):
        return None
    return RANKS[index + 1]


def progress_to_next_rank(level: int) -> Optional[RankProgress]:
    current = rank_for_level(level)
    following = next_rank_after(current.code)
    if following is None:
        return None
    return RankProgress(
        current=current,
        next=following,
        levels_remaining=following.min_level - level,
    )


def level_range_for_rank(code: str) -> Optional[Tuple[int, int]]:
    """
    Inclusive level band owned by a tier: its minimum up to one below the
    next tier's minimum. The top tier extends to level 200.
    """
    rank = rank_by_code(code)
    if rank is None:
        return None
    following = next_rank_after(code)
    upper = following.min_level - 1 if following else BOSS_LEVEL_CAP
    return rank.min_level, upper


def boss_level_for_rank(code: str, seed: int) -> int:
    """
    Reproducible level inside a tier's band for a stable integer seed.

    >>> boss_level_for_rank("E", 0)
    1
    >>> boss_level_for_rank("D", 17)
    12
    >>> boss_level_for_rank("??", 5)
    1
    """
    band = level_range_for_rank(code)
    if band is None:
        return MIN_LEVEL
    low, high = band
    return low + abs(seed) % (high - low + 1)
