"""
Portal Raid Engine
==================

Purpose
-------
Persistent, multi-attempt damage races against portal bosses. Each attempt
chips away at the boss; progress accumulates on a `PortalRaidProgress`
until the boss falls.

Domain
------
- Boss max HP from rank and specialization
- Raid attempt simulation (user strikes, boss strikes back for narration)
- Daily portal selection (current tier + next tier)
- Attempt estimates and boss rewards
- Boss map ordering (defeated / current / locked)
- Daily attempt allowance

Design Decisions
----------------
- The user cannot lose a raid attempt, only fail to finish the boss. The
  boss's counter-attacks only decide `user_survived` and can end the
  attempt early.
- The boss never dodges; every user strike lands through damage reduction.
- `execute_raid_attempt` never mutates progress. The caller applies the
  result with `PortalRaidProgress.apply_damage`.
- Unknown ranks fall back to E values; unknown specializations to 1.0x.

Dependencies
------------
- ConfigManager: exchange counts, daily attempts, portal counts
- CombatFormulas: damage primitives shared with battles
"""

from __future__ import annotations

import math
import random
import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Set, Tuple

from focusquest.core.logging.logger import get_logger
from focusquest.domain.models.battler import BattlerStats
from focusquest.domain.models.raid import BossRewards, PortalBoss, PortalRaidProgress, RaidAttemptResult
from focusquest.modules.combat.formulas import CombatFormulas
from focusquest.modules.progression.rank_service import next_rank_after, rank_or_default
from focusquest.modules.shared.constants import (
    BOSS_BASE_HP_BY_RANK,
    BOSS_BASE_REWARDS_BY_RANK,
    BOSS_REWARD_LEVEL_SCALE,
    CRIT_MULTIPLIER,
    DAILY_PORTAL_ATTEMPTS,
    MAX_EXCHANGES,
    MIN_EXCHANGES,
    PORTALS_FROM_CURRENT_RANK,
    PORTALS_FROM_NEXT_RANK,
    RAID_AVERAGE_EXCHANGES,
    RAID_CRIT_HIT_WEIGHT,
    RAID_ESTIMATE_HIGH,
    RAID_ESTIMATE_LOW,
    RAID_NORMAL_HIT_WEIGHT,
    RAID_USER_HEALTH_MULTIPLIER,
    SPECIALIZATION_HP_MULTIPLIERS,
)
from focusquest.modules.shared.exceptions import InsufficientResourcesError
from focusquest.modules.shared.formulas import scale_reward_by_level

if TYPE_CHECKING:
    from focusquest.core.config.manager import ConfigManager

logger = get_logger(__name__)

_DEFAULT_RANK = "E"


class RaidEngine:
    """
    Portal raid resolution and map progression.

    Public Methods
    --------------
    - boss_max_hp(rank, specialization) -> int
    - execute_raid_attempt(user, boss, progress) -> RaidAttemptResult
    - generate_available_portals(user_level, user_rank, bosses) -> List[PortalBoss]
    - estimate_attempts_needed(user, boss, remaining_hp) -> (min, max)
    - calculate_boss_rewards(rank, level) -> BossRewards
    - current_boss / categorize_bosses -> Map progression
    - create_progress(user_id, boss) -> PortalRaidProgress
    - refresh_daily_attempts / consume_attempt -> Daily allowance

    Configuration Keys
    ------------------
    - raid.min_exchanges (default: 3)
    - raid.max_exchanges (default: 5)
    - raid.daily_attempts (default: 50)
    - raid.portals_from_current_rank (default: 3)
    - raid.portals_from_next_rank (default: 2)
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        rng: Optional[random.Random] = None,
        formulas: Optional[CombatFormulas] = None,
    ) -> None:
        if config_manager is None:
            from focusquest.core.config.manager import ConfigManager

            config_manager = ConfigManager()

        self._config = config_manager
        self._rng = rng or random.Random()
        self._formulas = formulas or CombatFormulas()
        self._logger = logger

        self._min_exchanges = int(self._config.get("raid.min_exchanges", default=MIN_EXCHANGES))
        self._max_exchanges = max(
            self._min_exchanges,
            int(self._config.get("raid.max_exchanges", default=MAX_EXCHANGES)),
        )
        self._daily_attempts = int(self._config.get("raid.daily_attempts", default=DAILY_PORTAL_ATTEMPTS))
        self._portals_current = int(
            self._config.get("raid.portals_from_current_rank", default=PORTALS_FROM_CURRENT_RANK)
        )
        self._portals_next = int(
            self._config.get("raid.portals_from_next_rank", default=PORTALS_FROM_NEXT_RANK)
        )

        self._logger.info(
            "RaidEngine initialized",
            extra={
                "min_exchanges": self._min_exchanges,
                "max_exchanges": self._max_exchanges,
                "daily_attempts": self._daily_attempts,
                "portals": self._portals_current + self._portals_next,
            },
        )

    @property
    def daily_attempts(self) -> int:
        return self._daily_attempts

    # ========================================================================
    # BOSS STATS
    # ========================================================================

    @staticmethod
    def boss_max_hp(rank: str, specialization: str) -> int:
        """
        Example:
            >>> RaidEngine.boss_max_hp("D", "Tank")
            750
        """
        base = BOSS_BASE_HP_BY_RANK.get(rank, BOSS_BASE_HP_BY_RANK[_DEFAULT_RANK])
        multiplier = SPECIALIZATION_HP_MULTIPLIERS.get(specialization, 1.0)
        return int(base * multiplier)

    # ========================================================================
    # ATTEMPTS
    # ========================================================================

    def execute_raid_attempt(
        self,
        user: BattlerStats,
        boss: BattlerStats,
        progress: PortalRaidProgress,
    ) -> RaidAttemptResult:
        """
        Simulate one attempt against the boss's remaining HP.

        The user gets twice their health for the attempt. Each exchange the
        user strikes; if the boss is still standing it strikes back for its
        plain reduced damage, never a crit. The attempt ends after the rolled
        exchange count or when either side runs out of HP.
        """
        user_hp = user.health * RAID_USER_HEALTH_MULTIPLIER
        boss_hp = progress.remaining_hp
        damage_dealt = 0

        exchanges = self._rng.randint(self._min_exchanges, self._max_exchanges)
        for _ in range(exchanges):
            strike = self._formulas.resolve_strike(user, boss, self._rng, allow_dodge=False)
            boss_hp -= strike.damage
            damage_dealt += strike.damage
            if boss_hp <= 0:
                break

            counter = self._formulas.resolve_strike(
                boss, user, self._rng, allow_dodge=False, allow_crit=False
            )
            user_hp -= counter.damage
            if user_hp <= 0:
                break

        result = RaidAttemptResult.from_damage(progress, damage_dealt, user_survived=user_hp > 0)

        self._logger.debug(
            "Raid attempt resolved",
            extra={
                "boss_id": progress.boss_id,
                "exchanges": exchanges,
                "damage_dealt": damage_dealt,
                "new_total_damage": result.new_total_damage,
                "boss_defeated": result.boss_defeated,
            },
        )
        if result.boss_defeated and not progress.completed:
            self._logger.info(
                "Portal boss defeated",
                extra={"user_id": progress.user_id, "boss_id": progress.boss_id},
            )
        return result

    def estimate_attempts_needed(
        self,
        user: BattlerStats,
        boss: BattlerStats,
        remaining_hp: int,
    ) -> Tuple[int, int]:
        """(min, max) attempts, an 80% to 120% spread around the average."""
        incoming = self._formulas.base_damage(user.attack)
        reduced = self._formulas.damage_reduction(boss.defense, incoming)

        per_exchange = (
            reduced * RAID_NORMAL_HIT_WEIGHT
            + reduced * CRIT_MULTIPLIER * RAID_CRIT_HIT_WEIGHT
        )
        per_attempt = per_exchange * RAID_AVERAGE_EXCHANGES
        needed = max(0, remaining_hp) / per_attempt

        low = max(1, math.ceil(needed * RAID_ESTIMATE_LOW))
        high = max(low + 1, math.ceil(needed * RAID_ESTIMATE_HIGH))
        return low, high

    @staticmethod
    def calculate_boss_rewards(rank: str, level: int) -> BossRewards:
        """
        Example:
            >>> RaidEngine.calculate_boss_rewards("E", 5)
            BossRewards(xp=110, gold=55)
        """
        base_xp, base_gold = BOSS_BASE_REWARDS_BY_RANK.get(
            rank, BOSS_BASE_REWARDS_BY_RANK[_DEFAULT_RANK]
        )
        return BossRewards(
            xp=scale_reward_by_level(base_xp, level, BOSS_REWARD_LEVEL_SCALE),
            gold=scale_reward_by_level(base_gold, level, BOSS_REWARD_LEVEL_SCALE),
        )

    # ========================================================================
    # PORTAL SELECTION
    # ========================================================================

    def generate_available_portals(
        self,
        user_level: int,
        user_rank: str,
        bosses: Sequence[PortalBoss],
    ) -> List[PortalBoss]:
        """
        Pick today's portals: some from the user's tier, some from the next.

        When the next tier is missing or too small, the shortfall is filled
        with more bosses from the user's tier. No boss appears twice.
        Result is sorted by map order.
        """
        rank = rank_or_default(user_rank)
        following = next_rank_after(rank.code)

        current_pool = [boss for boss in bosses if boss.rank == rank.code]
        next_pool = [boss for boss in bosses if following and boss.rank == following.code]

        chosen = self._sample(current_pool, self._portals_current)
        chosen += self._sample(next_pool, self._portals_next)

        target = self._portals_current + self._portals_next
        if len(chosen) < target:
            chosen_ids = {boss.id for boss in chosen}
            unused = [boss for boss in current_pool if boss.id not in chosen_ids]
            chosen += self._sample(unused, target - len(chosen))

        self._logger.debug(
            "Portals generated",
            extra={
                "user_level": user_level,
                "user_rank": rank.code,
                "next_rank": following.code if following else None,
                "count": len(chosen),
            },
        )
        return sorted(chosen, key=lambda boss: boss.map_order)

    def _sample(self, pool: Sequence[PortalBoss], count: int) -> List[PortalBoss]:
        return self._rng.sample(list(pool), min(max(0, count), len(pool)))

    # ========================================================================
    # MAP PROGRESSION
    # ========================================================================

    @staticmethod
    def current_boss(bosses: Iterable[PortalBoss], completed_ids: Set[str]) -> Optional[PortalBoss]:
        """First boss in map order that is not yet defeated."""
        for boss in sorted(bosses, key=lambda b: b.map_order):
            if boss.id not in completed_ids:
                return boss
        return None

    @staticmethod
    def categorize_bosses(
        bosses: Iterable[PortalBoss],
        completed_ids: Set[str],
    ) -> Tuple[List[PortalBoss], Optional[PortalBoss], List[PortalBoss]]:
        """(defeated, current, locked) in map order."""
        defeated: List[PortalBoss] = []
        current: Optional[PortalBoss] = None
        locked: List[PortalBoss] = []

        for boss in sorted(bosses, key=lambda b: b.map_order):
            if boss.id in completed_ids:
                defeated.append(boss)
            elif current is None:
                current = boss
            else:
                locked.append(boss)

        return defeated, current, locked

    def create_progress(
        self,
        user_id: str,
        boss: PortalBoss,
        progress_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PortalRaidProgress:
        """
        Fresh progress for a boss the user engages for the first time.

        Max HP is fixed here from the boss's rank and specialization.
        """
        max_hp = self.boss_max_hp(boss.rank, boss.specialization)
        progress = PortalRaidProgress.start(
            progress_id=progress_id or str(uuid.uuid4()),
            user_id=user_id,
            boss_id=boss.id,
            max_hp=max_hp,
            now=now,
        )
        self._logger.debug(
            "Raid progress created",
            extra={"user_id": user_id, "boss_id": boss.id, "max_hp": max_hp},
        )
        return progress

    # ========================================================================
    # DAILY ATTEMPTS
    # ========================================================================

    def refresh_daily_attempts(
        self,
        remaining: int,
        last_reset: Optional[date],
        today: date,
    ) -> Tuple[int, date]:
        """
        (attempts, reset_date) after the daily check.

        A reset already done today keeps the remaining count; otherwise the
        allowance refills.
        """
        if last_reset is not None and last_reset >= today:
            return max(0, remaining), last_reset
        return self._daily_attempts, today

    @staticmethod
    def consume_attempt(remaining: int) -> int:
        """
        Spend one attempt.

        Raises:
            InsufficientResourcesError: No attempts left today
        """
        if remaining <= 0:
            raise InsufficientResourcesError(resource="portal_attempts", required=1, current=max(0, remaining))
        return remaining - 1
