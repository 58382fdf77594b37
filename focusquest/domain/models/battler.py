"""
Battler and user snapshot domain models for FocusQuest.

Purpose
-------
Immutable value objects describing a combatant's stat block and the user
progress snapshot the caller loads from storage. Every engine call receives
fresh instances; nothing here is mutated after construction.

Responsibilities
----------------
- Validate stat blocks (non-negative stats, positive level)
- Derive the comparable `total_stats` rating
- Convert between the `user_progress` row and the domain snapshot

Non-Responsibilities
--------------------
- Persistence (the caller writes `to_db_values()` back)
- Level / rank math (see `focusquest.modules.progression`)

Usage Example
-------------
>>> snapshot = UserSnapshot.from_db(user_progress_row)
>>> stats = snapshot.battler_stats()
>>> stats.total_stats
30
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from focusquest.domain.models.base import (
    validate_non_negative,
    validate_not_empty,
    validate_positive,
)
from focusquest.modules.shared.constants import (
    BASE_COMBAT_STAT,
    BASE_HEALTH,
    DAILY_PORTAL_ATTEMPTS,
    MIN_LEVEL,
    POINTS_PER_LEVEL,
)
from focusquest.modules.shared.formulas import calculate_total_stats

if TYPE_CHECKING:
    from focusquest.database.models.user_progress import UserProgress as UserProgressDB


class StatType(str, Enum):
    """The four allocatable stats. Values match stored item `stat_type` strings."""

    HEALTH = "Health"
    ATTACK = "Attack"
    DEFENSE = "Defense"
    SPEED = "Speed"

    @classmethod
    def from_string(cls, value: str) -> Optional["StatType"]:
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        return None


# ============================================================================
# VALUE OBJECTS
# ============================================================================


@dataclass(frozen=True)
class BattlerStats:
    """
    Immutable stat block for one side of an encounter.

    Attributes
    ----------
    health, attack, defense, speed : int
        Allocated stats (non-negative)
    level : int
        Combatant level (>= 1)
    focus_power : int
        Legacy display-only power rating; ignored by combat math
    """

    health: int
    attack: int
    defense: int
    speed: int
    level: int = MIN_LEVEL
    focus_power: int = 0

    def __post_init__(self) -> None:
        validate_non_negative(self.health, "health")
        validate_non_negative(self.attack, "attack")
        validate_non_negative(self.defense, "defense")
        validate_non_negative(self.speed, "speed")
        validate_positive(self.level, "level")
        validate_non_negative(self.focus_power, "focus_power")

    @property
    def total_stats(self) -> int:
        """attack + defense + speed + (health - 150) / 5, truncated toward zero."""
        return calculate_total_stats(self.attack, self.defense, self.speed, self.health)

    def stat(self, stat_type: StatType) -> int:
        return {
            StatType.HEALTH: self.health,
            StatType.ATTACK: self.attack,
            StatType.DEFENSE: self.defense,
            StatType.SPEED: self.speed,
        }[stat_type]


@dataclass(frozen=True)
class StatAllocation:
    """
    Points a user wants to spend, per stat.

    One point adds 1 attack, defense or speed, or 5 health.
    """

    health: int = 0
    attack: int = 0
    defense: int = 0
    speed: int = 0

    def __post_init__(self) -> None:
        validate_non_negative(self.health, "health")
        validate_non_negative(self.attack, "attack")
        validate_non_negative(self.defense, "defense")
        validate_non_negative(self.speed, "speed")

    @property
    def points_spent(self) -> int:
        return self.health + self.attack + self.defense + self.speed


@dataclass(frozen=True)
class UserSnapshot:
    """
    Immutable snapshot of a user's progress as loaded from storage.

    `current_xp` is the XP earned inside the current level (display only);
    `total_xp` drives level and rank.
    """

    user_id: str
    level: int = MIN_LEVEL
    total_xp: int = 0
    current_xp: int = 0
    rank_code: str = "E"
    total_focus_minutes: int = 0
    total_sessions_completed: int = 0
    available_stat_points: int = POINTS_PER_LEVEL
    health: int = BASE_HEALTH
    attack: int = BASE_COMBAT_STAT
    defense: int = BASE_COMBAT_STAT
    speed: int = BASE_COMBAT_STAT
    gold: int = 0
    portal_attempts: int = DAILY_PORTAL_ATTEMPTS
    last_attempt_reset: Optional[date] = None
    display_name: Optional[str] = None

    def __post_init__(self) -> None:
        validate_not_empty(self.user_id, "user_id")
        validate_positive(self.level, "level")
        validate_not_empty(self.rank_code, "rank_code")
        for field_name in (
            "total_xp",
            "current_xp",
            "total_focus_minutes",
            "total_sessions_completed",
            "available_stat_points",
            "health",
            "attack",
            "defense",
            "speed",
            "gold",
            "portal_attempts",
        ):
            validate_non_negative(getattr(self, field_name), field_name)

    @classmethod
    def new_player(cls, user_id: str, today: Optional[date] = None) -> "UserSnapshot":
        """Starting state for a freshly created user."""
        return cls(user_id=user_id, last_attempt_reset=today)

    @property
    def base_stat_total(self) -> int:
        """Raw sum of the four stats (used by focus power)."""
        return self.health + self.attack + self.defense + self.speed

    def battler_stats(self, focus_power: int = 0) -> BattlerStats:
        return BattlerStats(
            health=self.health,
            attack=self.attack,
            defense=self.defense,
            speed=self.speed,
            level=self.level,
            focus_power=focus_power,
        )

    # ========================================================================
    # CONVERSION
    # ========================================================================

    @classmethod
    def from_db(cls, row: "UserProgressDB") -> "UserSnapshot":
        """
        Create a snapshot from a `user_progress` row.

        Missing portal attempts default to the daily allowance.
        """
        return cls(
            user_id=str(row.user_id),
            level=row.current_level,
            total_xp=row.total_xp_earned,
            current_xp=row.current_xp,
            rank_code=row.current_rank,
            total_focus_minutes=row.total_focus_minutes,
            total_sessions_completed=row.total_sessions_completed,
            available_stat_points=row.available_stat_points,
            health=row.stat_health,
            attack=row.stat_attack,
            defense=row.stat_defense,
            speed=row.stat_speed,
            gold=row.gold,
            portal_attempts=(
                row.portal_attempts
                if row.portal_attempts is not None
                else DAILY_PORTAL_ATTEMPTS
            ),
            last_attempt_reset=row.last_attempt_reset,
            display_name=row.display_name,
        )

    def to_db_values(self) -> Dict[str, Any]:
        """Column values for updating the `user_progress` row."""
        return {
            "current_level": self.level,
            "current_xp": self.current_xp,
            "total_xp_earned": self.total_xp,
            "current_rank": self.rank_code,
            "total_focus_minutes": self.total_focus_minutes,
            "total_sessions_completed": self.total_sessions_completed,
            "available_stat_points": self.available_stat_points,
            "stat_health": self.health,
            "stat_attack": self.attack,
            "stat_defense": self.defense,
            "stat_speed": self.speed,
            "gold": self.gold,
            "portal_attempts": self.portal_attempts,
            "last_attempt_reset": self.last_attempt_reset,
            "display_name": self.display_name,
        }
