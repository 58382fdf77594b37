"""
Progression domain models for FocusQuest.

Purpose
-------
Value objects for experience, levels, ranks, streaks and the settings rows
that retune XP rates. All are immutable; services return new instances.

Contents
--------
- XPCalculation: one focus session's XP award with its breakdown
- LevelProgress: position inside the current level
- RankInfo: one row of the static rank table
- SessionReward: everything that changed when XP was applied
- FocusStreak: daily visit streak
- GamificationSetting: a `{key: value}` tuning row from storage
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

from focusquest.domain.models.base import (
    validate_non_negative,
    validate_not_empty,
    validate_positive,
    validate_range,
)

if TYPE_CHECKING:
    from focusquest.database.models.gamification_setting import (
        GamificationSetting as GamificationSettingDB,
    )
    from focusquest.domain.models.battler import UserSnapshot

SettingValue = Union[str, int, float]

# Ranks from E through S have badge artwork; SS and SSS use the color only.
_BADGE_RANKS = frozenset({"E", "D", "C", "B", "A", "S"})


@dataclass(frozen=True)
class XPCalculation:
    """Breakdown of one session's XP award."""

    base_xp: int
    session_completion_bonus: int = 0
    first_session_bonus: int = 0
    streak_bonus: int = 0

    def __post_init__(self) -> None:
        validate_non_negative(self.base_xp, "base_xp")
        validate_non_negative(self.session_completion_bonus, "session_completion_bonus")
        validate_non_negative(self.first_session_bonus, "first_session_bonus")
        validate_non_negative(self.streak_bonus, "streak_bonus")

    @property
    def total_xp(self) -> int:
        return (
            self.base_xp
            + self.session_completion_bonus
            + self.first_session_bonus
            + self.streak_bonus
        )

    @property
    def breakdown(self) -> List[Tuple[str, int]]:
        """Labelled non-zero parts in display order."""
        parts = (
            ("Focus Time", self.base_xp),
            ("Session Complete", self.session_completion_bonus),
            ("First Session Bonus", self.first_session_bonus),
            ("Streak Bonus", self.streak_bonus),
        )
        return [(label, amount) for label, amount in parts if amount > 0]


@dataclass(frozen=True)
class LevelProgress:
    """Progress inside the current level, recomputed from total XP on demand."""

    current_level: int
    next_level: int
    xp_in_current_level: int
    xp_needed_for_next: int
    progress_percent: float

    def __post_init__(self) -> None:
        validate_positive(self.current_level, "current_level")
        validate_non_negative(self.xp_in_current_level, "xp_in_current_level")
        validate_non_negative(self.xp_needed_for_next, "xp_needed_for_next")
        validate_range(self.progress_percent, 0.0, 100.0, "progress_percent")

    @property
    def is_max_level(self) -> bool:
        return self.next_level == self.current_level

    @property
    def progress_text(self) -> str:
        return f"{self.xp_in_current_level} / {self.xp_needed_for_next} XP"


@dataclass(frozen=True)
class RankInfo:
    """Static rank tier: code, title, minimum level and display color."""

    code: str
    title: str
    min_level: int
    color: str

    def __post_init__(self) -> None:
        validate_not_empty(self.code, "code")
        validate_not_empty(self.title, "title")
        validate_positive(self.min_level, "min_level")

    @property
    def badge_image_name(self) -> Optional[str]:
        if self.code in _BADGE_RANKS:
            return f"{self.code}_rank"
        return None


@dataclass(frozen=True)
class SessionReward:
    """
    Result of applying XP to a user snapshot.

    `snapshot` is the updated snapshot the caller persists.
    """

    old_total_xp: int
    new_total_xp: int
    old_level: int
    new_level: int
    old_rank: RankInfo
    new_rank: RankInfo
    xp_in_level: int
    stat_points_awarded: int
    snapshot: "UserSnapshot"
    gold_earned: int = 0
    xp_calculation: Optional[XPCalculation] = None

    @property
    def xp_gained(self) -> int:
        return self.new_total_xp - self.old_total_xp

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level

    @property
    def ranked_up(self) -> bool:
        return self.new_rank.code != self.old_rank.code


@dataclass(frozen=True)
class FocusStreak:
    """Consecutive-day visit streak."""

    current_streak: int = 0
    longest_streak: int = 0
    last_visit_date: Optional[date] = None
    total_visits: int = 0

    def __post_init__(self) -> None:
        validate_non_negative(self.current_streak, "current_streak")
        validate_non_negative(self.longest_streak, "longest_streak")
        validate_non_negative(self.total_visits, "total_visits")

    @property
    def is_weekly_milestone(self) -> bool:
        return self.current_streak > 0 and self.current_streak % 7 == 0


@dataclass(frozen=True)
class GamificationSetting:
    """One tuning row; the value arrives as a string, int or float."""

    setting_key: str
    setting_value: SettingValue
    setting_description: str = ""

    @property
    def int_value(self) -> Optional[int]:
        """
        Value as int, or None when it cannot be read as one.

        Floats truncate; strings must be integer literals; bools are rejected.
        """
        value = self.setting_value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if math.isfinite(value) else None
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    @classmethod
    def from_db(cls, row: "GamificationSettingDB") -> "GamificationSetting":
        return cls(
            setting_key=row.setting_key,
            setting_value=row.setting_value,
            setting_description=row.setting_description or "",
        )

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "GamificationSetting":
        return cls(
            setting_key=str(data["setting_key"]),
            setting_value=data["setting_value"],
            setting_description=str(data.get("setting_description", "")),
        )
