"""
Portal raid domain models for FocusQuest.

Purpose
-------
Models for the persistent, multi-attempt boss raids:

- `PortalBoss`: read-only boss configuration loaded from storage
- `PortalRaidProgress`: per (user, boss) entity accumulating damage
- `RaidAttemptResult`: outcome of one simulated attempt
- `BossRewards`: XP and gold granted for a defeated boss

Invariants
----------
- `0 <= current_damage <= max_hp` at all times
- `progress_percent` is always derived from `current_damage`
- `completed` implies `current_damage >= max_hp`; `completed_at` is set once,
  on the first crossing, and a `raid.boss_defeated` event is recorded then

Usage Example
-------------
>>> progress = PortalRaidProgress.start("p-1", user_id="u-1", boss_id="b-1", max_hp=500)
>>> progress.apply_damage(480)
480
>>> progress.apply_damage(30)
20
>>> progress.completed
True
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

from focusquest.domain.models.base import (
    DomainValidationError,
    Entity,
    validate_non_negative,
    validate_not_empty,
    validate_positive,
    validate_range,
)
from focusquest.domain.models.battler import BattlerStats
from focusquest.modules.shared.constants import RAID_NEAR_COMPLETION_PERCENT
from focusquest.modules.shared.formulas import calculate_progress_percent

if TYPE_CHECKING:
    from focusquest.database.models.portal_boss import PortalBoss as PortalBossDB
    from focusquest.database.models.portal_progress import (
        PortalProgress as PortalProgressDB,
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# BOSS CONFIGURATION
# ============================================================================


@dataclass(frozen=True)
class PortalBoss:
    """
    Static boss configuration. The engine never creates or mutates bosses.

    `map_order` is the position on the portal map; bosses are presented and
    progressed in ascending order.
    """

    id: str
    name: str
    rank: str
    specialization: str
    health: int
    attack: int
    defense: int
    speed: int
    max_hp: int
    map_order: int = 0
    image_name: str = ""

    def __post_init__(self) -> None:
        validate_not_empty(self.id, "id")
        validate_not_empty(self.name, "name")
        validate_not_empty(self.rank, "rank")
        validate_non_negative(self.health, "health")
        validate_non_negative(self.attack, "attack")
        validate_non_negative(self.defense, "defense")
        validate_non_negative(self.speed, "speed")
        validate_positive(self.max_hp, "max_hp")

    @property
    def level(self) -> int:
        """Reproducible level inside the boss's rank band, seeded by its id."""
        from focusquest.modules.progression.rank_service import boss_level_for_rank
        from focusquest.modules.rewards.deterministic import stable_hash

        return boss_level_for_rank(self.rank, stable_hash(self.id))

    @property
    def battler_stats(self) -> BattlerStats:
        return BattlerStats(
            health=self.health,
            attack=self.attack,
            defense=self.defense,
            speed=self.speed,
            level=self.level,
        )

    @classmethod
    def from_db(cls, row: "PortalBossDB") -> "PortalBoss":
        return cls(
            id=str(row.id),
            name=row.name,
            rank=row.rank,
            specialization=row.specialization,
            health=row.stat_health,
            attack=row.stat_attack,
            defense=row.stat_defense,
            speed=row.stat_speed,
            max_hp=row.max_hp,
            map_order=row.map_order,
            image_name=row.image_name,
        )


# ============================================================================
# RAID PROGRESS (ENTITY)
# ============================================================================


class PortalRaidProgress(Entity):
    """
    Cumulative raid progress for one (user, boss) pair.

    `apply_damage` is the only mutator. Once completed, further damage is
    ignored and `current_damage` stays at `max_hp`.
    """

    def __init__(
        self,
        progress_id: str,
        user_id: str,
        boss_id: str,
        max_hp: int,
        current_damage: int = 0,
        completed: bool = False,
        completed_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        super().__init__(progress_id)
        validate_positive(max_hp, "max_hp")
        validate_range(current_damage, 0, max_hp, "current_damage")
        if completed and current_damage < max_hp:
            raise DomainValidationError(
                "completed progress must have current_damage >= max_hp",
                field="completed",
            )

        self._user_id = user_id
        self._boss_id = boss_id
        self._max_hp = max_hp
        self._current_damage = current_damage
        self._completed = completed
        self._completed_at = completed_at
        self._created_at = created_at or _utcnow()
        self._updated_at = updated_at or self._created_at

    @classmethod
    def start(
        cls,
        progress_id: str,
        user_id: str,
        boss_id: str,
        max_hp: int,
        now: Optional[datetime] = None,
    ) -> "PortalRaidProgress":
        """Progress for a boss the user engages for the first time."""
        return cls(
            progress_id=progress_id,
            user_id=user_id,
            boss_id=boss_id,
            max_hp=max_hp,
            created_at=now,
        )

    # ========================================================================
    # PROPERTIES
    # ========================================================================

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def boss_id(self) -> str:
        return self._boss_id

    @property
    def max_hp(self) -> int:
        return self._max_hp

    @property
    def current_damage(self) -> int:
        return self._current_damage

    @property
    def progress_percent(self) -> float:
        return calculate_progress_percent(self._current_damage, self._max_hp)

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def remaining_hp(self) -> int:
        return max(0, self._max_hp - self._current_damage)

    @property
    def is_near_completion(self) -> bool:
        return self.progress_percent >= RAID_NEAR_COMPLETION_PERCENT

    # ========================================================================
    # BUSINESS LOGIC
    # ========================================================================

    def apply_damage(self, damage: int, now: Optional[datetime] = None) -> int:
        """
        Add damage, clamped at max HP.

        Negative damage is treated as zero. Returns the damage actually
        applied (0 once completed).
        """
        if self._completed:
            return 0

        now = now or _utcnow()
        before = self._current_damage
        self._current_damage = min(self._max_hp, before + max(0, damage))
        self._updated_at = now

        if self._current_damage >= self._max_hp:
            self._completed = True
            self._completed_at = now
            self.add_domain_event(
                "raid.boss_defeated",
                {
                    "progress_id": self.id,
                    "user_id": self._user_id,
                    "boss_id": self._boss_id,
                    "max_hp": self._max_hp,
                },
            )

        return self._current_damage - before

    # ========================================================================
    # CONVERSION
    # ========================================================================

    @classmethod
    def from_db(cls, row: "PortalProgressDB") -> "PortalRaidProgress":
        return cls(
            progress_id=str(row.id),
            user_id=str(row.user_id),
            boss_id=str(row.portal_boss_id),
            max_hp=row.max_hp,
            current_damage=row.current_damage,
            completed=row.completed,
            completed_at=row.completed_at,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def to_db_values(self) -> Dict[str, Any]:
        return {
            "current_damage": self._current_damage,
            "max_hp": self._max_hp,
            "progress_percent": self.progress_percent,
            "completed": self._completed,
            "completed_at": self._completed_at,
            "updated_at": self._updated_at,
        }

    def __repr__(self) -> str:
        return (
            f"PortalRaidProgress(id={self.id!r}, boss_id={self._boss_id!r}, "
            f"damage={self._current_damage}/{self._max_hp}, completed={self._completed})"
        )


# ============================================================================
# RESULTS
# ============================================================================


@dataclass(frozen=True)
class RaidAttemptResult:
    """
    Outcome of one raid attempt.

    `damage_dealt` is the raw damage of this attempt; `new_total_damage` is
    clamped at the boss's max HP.
    """

    damage_dealt: int
    new_total_damage: int
    new_progress_percent: float
    boss_defeated: bool
    user_survived: bool = True

    def __post_init__(self) -> None:
        validate_non_negative(self.damage_dealt, "damage_dealt")
        validate_non_negative(self.new_total_damage, "new_total_damage")
        validate_range(self.new_progress_percent, 0.0, 100.0, "new_progress_percent")

    @classmethod
    def from_damage(
        cls,
        progress: PortalRaidProgress,
        damage: int,
        user_survived: bool = True,
    ) -> "RaidAttemptResult":
        """Project `damage` onto `progress` without mutating it."""
        damage = max(0, damage)
        new_total = min(progress.max_hp, progress.current_damage + damage)
        return cls(
            damage_dealt=damage,
            new_total_damage=new_total,
            new_progress_percent=calculate_progress_percent(new_total, progress.max_hp),
            boss_defeated=new_total >= progress.max_hp,
            user_survived=user_survived,
        )


@dataclass(frozen=True)
class BossRewards:
    xp: int
    gold: int

    def __post_init__(self) -> None:
        validate_non_negative(self.xp, "xp")
        validate_non_negative(self.gold, "gold")
