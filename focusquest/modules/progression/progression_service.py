"""
Progression service for FocusQuest.

Purpose
-------
Apply earned experience (and the session counters that travel with it) to a
user snapshot and report what changed: level ups, rank ups and stat points.

Responsibilities
----------------
- XP application with level and rank recomputation
- Session rewards (XP calculation + application in one call)
- Stat point allocation
- Focus power rating

Design Notes
------------
- Snapshots are immutable. Every operation returns a new snapshot inside
  its result; persisting it is the caller's job.
- Levels never go down: a stored level above what the XP implies is kept.
- Rank always follows the level through the rank table.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Iterable, Optional

from focusquest.core.logging.logger import get_logger
from focusquest.domain.models.battler import StatAllocation, UserSnapshot
from focusquest.domain.models.progression import SessionReward, XPCalculation
from focusquest.modules.progression.level_service import LevelService
from focusquest.modules.progression.rank_service import rank_for_level, rank_or_default
from focusquest.modules.progression.xp_service import XPService
from focusquest.modules.shared.constants import HEALTH_PER_STAT_POINT, POINTS_PER_LEVEL
from focusquest.modules.shared.exceptions import InsufficientResourcesError
from focusquest.modules.shared.formulas import calculate_focus_power, calculate_stat_points

if TYPE_CHECKING:
    from focusquest.core.config.manager import ConfigManager
    from focusquest.domain.models.loot import PortalItem

logger = get_logger(__name__)


class ProgressionService:
    """
    Applies XP and stat changes to user snapshots.

    Dependencies
    ------------
    - ConfigManager: stat points per level
    - LevelService: XP curve
    - XPService: session XP rates

    Public Methods
    --------------
    - apply_xp() -> SessionReward
    - reward_session() -> SessionReward with the XPCalculation attached
    - allocate_stat_points() -> Updated snapshot
    - calculate_focus_power() -> Display power rating
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        level_service: Optional[LevelService] = None,
        xp_service: Optional[XPService] = None,
    ) -> None:
        if config_manager is None:
            from focusquest.core.config.manager import ConfigManager

            config_manager = ConfigManager()

        self._config = config_manager
        self._logger = logger
        self._levels = level_service or LevelService(config_manager)
        self._xp = xp_service or XPService(config_manager)
        self._points_per_level = int(
            self._config.get("progression.level.stat_points_per_level", default=POINTS_PER_LEVEL)
        )

        self._logger.info(
            "ProgressionService initialized",
            extra={"points_per_level": self._points_per_level},
        )

    @property
    def levels(self) -> LevelService:
        return self._levels

    @property
    def xp(self) -> XPService:
        return self._xp

    # ========================================================================
    # XP
    # ========================================================================

    def apply_xp(
        self,
        snapshot: UserSnapshot,
        xp_to_add: int,
        gold: int = 0,
        focus_minutes: int = 0,
        sessions: int = 0,
        xp_calculation: Optional[XPCalculation] = None,
    ) -> SessionReward:
        """
        Add XP (and optional gold / focus counters) to a snapshot.

        Negative amounts count as zero.
        """
        xp_to_add = max(0, xp_to_add)
        gold = max(0, gold)

        old_total = snapshot.total_xp
        new_total = old_total + xp_to_add
        old_level = snapshot.level
        new_level = max(old_level, self._levels.level_from_xp(new_total))

        old_rank = rank_or_default(snapshot.rank_code)
        new_rank = rank_for_level(new_level)
        points = calculate_stat_points(new_level - old_level, self._points_per_level)
        xp_in_level = max(0, new_total - self._levels.xp_for_level(new_level))

        updated = replace(
            snapshot,
            level=new_level,
            total_xp=new_total,
            current_xp=xp_in_level,
            rank_code=new_rank.code,
            available_stat_points=snapshot.available_stat_points + points,
            gold=snapshot.gold + gold,
            total_focus_minutes=snapshot.total_focus_minutes + max(0, focus_minutes),
            total_sessions_completed=snapshot.total_sessions_completed + max(0, sessions),
        )

        reward = SessionReward(
            old_total_xp=old_total,
            new_total_xp=new_total,
            old_level=old_level,
            new_level=new_level,
            old_rank=old_rank,
            new_rank=new_rank,
            xp_in_level=xp_in_level,
            stat_points_awarded=points,
            snapshot=updated,
            gold_earned=gold,
            xp_calculation=xp_calculation,
        )

        if reward.leveled_up:
            self._logger.info(
                "User leveled up",
                extra={
                    "user_id": snapshot.user_id,
                    "old_level": old_level,
                    "new_level": new_level,
                    "stat_points_awarded": points,
                },
            )
        if reward.ranked_up:
            self._logger.info(
                "User ranked up",
                extra={
                    "user_id": snapshot.user_id,
                    "old_rank": old_rank.code,
                    "new_rank": new_rank.code,
                },
            )

        return reward

    def reward_session(
        self,
        snapshot: UserSnapshot,
        duration_minutes: int,
        is_session_complete: bool,
        is_first_session_of_day: bool,
        current_streak: int = 0,
    ) -> SessionReward:
        """
        Calculate session XP and apply it.

        Focus minutes always accumulate; the session counter only moves for
        completed sessions.
        """
        calculation = self._xp.calculate_xp(
            duration_minutes,
            is_session_complete,
            is_first_session_of_day,
            current_streak,
        )
        return self.apply_xp(
            snapshot,
            calculation.total_xp,
            focus_minutes=duration_minutes,
            sessions=1 if is_session_complete else 0,
            xp_calculation=calculation,
        )

    # ========================================================================
    # STATS
    # ========================================================================

    def allocate_stat_points(
        self, snapshot: UserSnapshot, allocation: StatAllocation
    ) -> UserSnapshot:
        """
        Spend available stat points.

        One point adds 1 attack, defense or speed, or 5 health.

        Raises:
            InsufficientResourcesError: More points requested than available
        """
        spent = allocation.points_spent
        if spent > snapshot.available_stat_points:
            raise InsufficientResourcesError(
                resource="stat_points",
                required=spent,
                current=snapshot.available_stat_points,
            )

        updated = replace(
            snapshot,
            available_stat_points=snapshot.available_stat_points - spent,
            health=snapshot.health + allocation.health * HEALTH_PER_STAT_POINT,
            attack=snapshot.attack + allocation.attack,
            defense=snapshot.defense + allocation.defense,
            speed=snapshot.speed + allocation.speed,
        )

        self._logger.debug(
            "Stat points allocated",
            extra={
                "user_id": snapshot.user_id,
                "points_spent": spent,
                "remaining": updated.available_stat_points,
            },
        )
        return updated

    def calculate_focus_power(
        self,
        snapshot: UserSnapshot,
        equipped_items: Iterable[PortalItem] = (),
    ) -> int:
        """1000 + raw stat total + focus minutes + equipped item values."""
        return calculate_focus_power(
            snapshot.base_stat_total,
            snapshot.total_focus_minutes,
            (item.stat_value for item in equipped_items if item.equipped),
        )
