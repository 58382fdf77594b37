"""
Battle outcome domain models for FocusQuest.

Purpose
-------
Immutable descriptions of a resolved battle: the difficulty tier derived
from the stat gap, the simulated exchange trace used for narration, and the
reward-bearing result handed back to the caller.

These objects are output data only. They are built once by
`BattleEngine` and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from focusquest.domain.models.base import (
    validate_non_negative,
    validate_positive,
    validate_range,
)
from focusquest.domain.models.battler import StatType
from focusquest.modules.shared.constants import DIFFICULTY_GAP_THRESHOLD


class DifficultyTier(Enum):
    """
    Battle difficulty from the user's point of view.

    Each tier owns a closed gold range. A stat-total gap of +30 or more is
    easy, -30 or less is hard, anything between is fair.
    """

    EASY = "easy"
    FAIR = "fair"
    HARD = "hard"

    @property
    def gold_range(self) -> Tuple[int, int]:
        return _GOLD_RANGES[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_stat_gap(cls, gap: int) -> "DifficultyTier":
        if gap >= DIFFICULTY_GAP_THRESHOLD:
            return cls.EASY
        if gap <= -DIFFICULTY_GAP_THRESHOLD:
            return cls.HARD
        return cls.FAIR


_GOLD_RANGES: Mapping[DifficultyTier, Tuple[int, int]] = MappingProxyType(
    {
        DifficultyTier.EASY: (5, 12),
        DifficultyTier.FAIR: (18, 32),
        DifficultyTier.HARD: (40, 60),
    }
)


@dataclass(frozen=True)
class BattlePerformance:
    """
    Simulated exchange trace for one battle.

    Ratios are from the user's perspective: attack over the opponent's
    defense, defense over the opponent's attack.
    """

    user_damage_dealt: int
    opponent_damage_dealt: int
    user_damage_blocked: int
    opponent_damage_blocked: int
    user_crits: int
    opponent_crits: int
    user_dodges: int
    opponent_dodges: int
    effective_attack_ratio: float
    effective_defense_ratio: float
    exchange_count: int
    intensity: float
    dominant_stat: StatType

    def __post_init__(self) -> None:
        for field_name in (
            "user_damage_dealt",
            "opponent_damage_dealt",
            "user_damage_blocked",
            "opponent_damage_blocked",
            "user_crits",
            "opponent_crits",
            "user_dodges",
            "opponent_dodges",
        ):
            validate_non_negative(getattr(self, field_name), field_name)
        validate_positive(self.exchange_count, "exchange_count")
        validate_range(self.intensity, 0.0, 1.0, "intensity")

    @property
    def total_crits(self) -> int:
        return self.user_crits + self.opponent_crits

    @property
    def total_dodges(self) -> int:
        return self.user_dodges + self.opponent_dodges

    @property
    def damage_ratio(self) -> float:
        """User damage over opponent damage (denominator floored at 1)."""
        return self.user_damage_dealt / max(self.opponent_damage_dealt, 1)


@dataclass(frozen=True)
class BattleResult:
    """Terminal value returned to the caller for one battle."""

    won: bool
    xp_earned: int
    gold_earned: int
    opponent_name: str
    difficulty: DifficultyTier
    performance: Optional[BattlePerformance] = None

    def __post_init__(self) -> None:
        validate_non_negative(self.xp_earned, "xp_earned")
        validate_non_negative(self.gold_earned, "gold_earned")
