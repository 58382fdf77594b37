"""
Battle Engine
=============

Purpose
-------
Resolve one stat-vs-stat battle between a user and an opponent into an
outcome, a narrated exchange trace and rewards.

Domain
------
- Win probability from four stat matchups
- Difficulty tier from the stat-total gap
- Exchange simulation (3 to 5 rounds, user strikes first each round)
- Outcome-consistency correction of the simulated damage
- Base rewards plus performance bonuses on a win
- Deterministic gold per opponent id

Design Decisions
----------------
- Stateless: nothing survives between calls.
- The win/loss roll is decided first and is the source of truth. The
  exchange simulation is narration; after it runs, the winner's damage is
  scaled up when needed so the trace never contradicts the result.
- Outcome rolls and simulation use the injected `random.Random`. Exact gold
  uses a `SeededRandom` built from the opponent id. The two never share
  state, otherwise outcomes could be predicted from the opponent id.

Dependencies
------------
- ConfigManager: exchange counts, base rewards, bonus thresholds
- CombatFormulas: damage primitives
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Optional, Tuple

from focusquest.core.logging.logger import get_logger
from focusquest.domain.models.battle import BattlePerformance, BattleResult, DifficultyTier
from focusquest.domain.models.battler import BattlerStats, StatType
from focusquest.modules.combat.formulas import CombatFormulas
from focusquest.modules.rewards.deterministic import SeededRandom
from focusquest.modules.shared.constants import (
    ATTACK_MODIFIER_SCALE,
    ATTACK_MODIFIER_WEIGHT,
    BASE_COMBAT_STAT,
    BASE_FOCUS_POWER,
    BASE_HEALTH,
    BONUS_MIN_CRITS,
    BONUS_MIN_DODGES,
    CRIT_BONUS_GOLD,
    CRIT_BONUS_XP,
    DEFENSE_MODIFIER_SCALE,
    DEFENSE_MODIFIER_WEIGHT,
    DODGE_BONUS_GOLD,
    DODGE_BONUS_XP,
    DOMINANCE_BONUS_GOLD,
    DOMINANCE_BONUS_XP,
    DOMINANCE_RATIO,
    DOMINANT_ATTACK_WEIGHT,
    DOMINANT_DEFENSE_WEIGHT,
    DOMINANT_HEALTH_WEIGHT,
    DOMINANT_SPEED_WEIGHT,
    HEALTH_MODIFIER_SCALE,
    HEALTH_MODIFIER_WEIGHT,
    HEALTH_PER_STAT_POINT,
    LOSS_XP,
    MAX_EXCHANGES,
    MIN_EXCHANGES,
    OUTCOME_CORRECTION_MARGIN,
    OUTCOME_CORRECTION_MIN_FACTOR,
    SPEED_MODIFIER_SCALE,
    SPEED_MODIFIER_WEIGHT,
    WIN_PROBABILITY_BASE,
    WIN_PROBABILITY_MAX,
    WIN_PROBABILITY_MIN,
    WIN_XP,
)
from focusquest.modules.shared.formulas import apply_bonus_multiplier, clamp

if TYPE_CHECKING:
    from focusquest.core.config.manager import ConfigManager

logger = get_logger(__name__)


class BattleEngine:
    """
    Stat-based battle resolution.

    Public Methods
    --------------
    - win_probability(user, opponent) -> float in [0.15, 0.85]
    - determine_difficulty(user, opponent) -> DifficultyTier
    - resolve_battle(user, opponent) -> (won, tier, performance)
    - dominant_stat(...) -> StatType that decided the fight
    - calculate_rewards(won, tier, performance, exact_gold) -> (xp, gold)
    - calculate_exact_gold(opponent_id, tier) -> Reproducible gold
    - execute_battle(...) -> BattleResult
    - stats_from_focus_power(focus_power) -> Legacy BattlerStats

    Configuration Keys
    ------------------
    - combat.battle.min_exchanges (default: 3)
    - combat.battle.max_exchanges (default: 5)
    - combat.battle.win_xp (default: 50)
    - combat.battle.loss_xp (default: 10)
    - combat.battle.bonus_min_crits (default: 2)
    - combat.battle.bonus_min_dodges (default: 2)
    - combat.battle.dominance_ratio (default: 1.5)
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

        self._min_exchanges = int(self._config.get("combat.battle.min_exchanges", default=MIN_EXCHANGES))
        self._max_exchanges = max(
            self._min_exchanges,
            int(self._config.get("combat.battle.max_exchanges", default=MAX_EXCHANGES)),
        )
        self._win_xp = int(self._config.get("combat.battle.win_xp", default=WIN_XP))
        self._loss_xp = int(self._config.get("combat.battle.loss_xp", default=LOSS_XP))
        self._bonus_min_crits = int(
            self._config.get("combat.battle.bonus_min_crits", default=BONUS_MIN_CRITS)
        )
        self._bonus_min_dodges = int(
            self._config.get("combat.battle.bonus_min_dodges", default=BONUS_MIN_DODGES)
        )
        self._dominance_ratio = float(
            self._config.get("combat.battle.dominance_ratio", default=DOMINANCE_RATIO)
        )

        self._logger.info(
            "BattleEngine initialized",
            extra={
                "min_exchanges": self._min_exchanges,
                "max_exchanges": self._max_exchanges,
                "win_xp": self._win_xp,
                "loss_xp": self._loss_xp,
            },
        )

    @property
    def formulas(self) -> CombatFormulas:
        return self._formulas

    # ========================================================================
    # ODDS
    # ========================================================================

    def win_probability(self, user: BattlerStats, opponent: BattlerStats) -> float:
        """
        0.5 plus four clamped matchup modifiers, clamped to [0.15, 0.85].

        Example:
            >>> same = BattlerStats(health=300, attack=50, defense=50, speed=50)
            >>> engine.win_probability(same, same)
            0.5
        """
        attack_mod = clamp((user.attack - opponent.defense) / ATTACK_MODIFIER_SCALE, -1.0, 1.0)
        defense_mod = clamp((user.defense - opponent.attack) / DEFENSE_MODIFIER_SCALE, -1.0, 1.0)
        speed_mod = clamp((user.speed - opponent.speed) / SPEED_MODIFIER_SCALE, -1.0, 1.0)
        health_mod = clamp((user.health - opponent.health) / HEALTH_MODIFIER_SCALE, -1.0, 1.0)

        probability = (
            WIN_PROBABILITY_BASE
            + attack_mod * ATTACK_MODIFIER_WEIGHT
            + defense_mod * DEFENSE_MODIFIER_WEIGHT
            + speed_mod * SPEED_MODIFIER_WEIGHT
            + health_mod * HEALTH_MODIFIER_WEIGHT
        )
        return clamp(probability, WIN_PROBABILITY_MIN, WIN_PROBABILITY_MAX)

    def determine_difficulty(self, user: BattlerStats, opponent: BattlerStats) -> DifficultyTier:
        return DifficultyTier.from_stat_gap(user.total_stats - opponent.total_stats)

    # ========================================================================
    # RESOLUTION
    # ========================================================================

    def resolve_battle(
        self, user: BattlerStats, opponent: BattlerStats
    ) -> Tuple[bool, DifficultyTier, BattlePerformance]:
        """
        Decide the outcome, then narrate it.

        1. Roll the outcome against `win_probability`.
        2. Simulate the exchanges; each round the user strikes, then the
           opponent strikes back.
        3. If the winner did not deal strictly more damage, scale the
           winner's total up so the trace agrees with the outcome.
        """
        probability = self.win_probability(user, opponent)
        tier = self.determine_difficulty(user, opponent)
        won = self._rng.random() < probability

        exchanges = self._rng.randint(self._min_exchanges, self._max_exchanges)

        user_dealt = opponent_dealt = 0
        user_blocked = opponent_blocked = 0
        user_crits = opponent_crits = 0
        user_dodges = opponent_dodges = 0

        for _ in range(exchanges):
            strike = self._formulas.resolve_strike(user, opponent, self._rng)
            user_dealt += strike.damage
            opponent_blocked += strike.blocked
            user_crits += int(strike.crit)
            opponent_dodges += int(strike.dodged)

            strike = self._formulas.resolve_strike(opponent, user, self._rng)
            opponent_dealt += strike.damage
            user_blocked += strike.blocked
            opponent_crits += int(strike.crit)
            user_dodges += int(strike.dodged)

        if won and user_dealt <= opponent_dealt:
            user_dealt = self._correct_winner_damage(user_dealt, opponent_dealt)
        elif not won and opponent_dealt <= user_dealt:
            opponent_dealt = self._correct_winner_damage(opponent_dealt, user_dealt)

        performance = BattlePerformance(
            user_damage_dealt=user_dealt,
            opponent_damage_dealt=opponent_dealt,
            user_damage_blocked=user_blocked,
            opponent_damage_blocked=opponent_blocked,
            user_crits=user_crits,
            opponent_crits=opponent_crits,
            user_dodges=user_dodges,
            opponent_dodges=opponent_dodges,
            effective_attack_ratio=user.attack / max(opponent.defense, 1),
            effective_defense_ratio=user.defense / max(opponent.attack, 1),
            exchange_count=exchanges,
            intensity=self.intensity(
                user_dealt,
                opponent_dealt,
                user_crits + opponent_crits,
                user_dodges + opponent_dodges,
                exchanges,
            ),
            dominant_stat=self.dominant_stat(user, opponent, user_blocked, user_crits, user_dodges),
        )

        self._logger.debug(
            "Battle resolved",
            extra={
                "won": won,
                "win_probability": round(probability, 4),
                "difficulty": tier.value,
                "exchanges": exchanges,
                "user_damage": user_dealt,
                "opponent_damage": opponent_dealt,
            },
        )
        return won, tier, performance

    @staticmethod
    def _correct_winner_damage(winner_damage: int, loser_damage: int) -> int:
        factor = max(
            OUTCOME_CORRECTION_MIN_FACTOR,
            loser_damage / max(winner_damage, 1) * OUTCOME_CORRECTION_MARGIN,
        )
        return max(loser_damage + 1, int(winner_damage * factor))

    def dominant_stat(
        self,
        user: BattlerStats,
        opponent: BattlerStats,
        user_blocked: int,
        user_crits: int,
        user_dodges: int,
    ) -> StatType:
        """Highest-scoring stat; earlier entries win ties."""
        scores = (
            (StatType.ATTACK, abs(user.attack - opponent.defense) * DOMINANT_ATTACK_WEIGHT),
            (StatType.DEFENSE, user_blocked * DOMINANT_DEFENSE_WEIGHT),
            (StatType.SPEED, (user_crits + user_dodges) * DOMINANT_SPEED_WEIGHT),
            (StatType.HEALTH, abs(user.health - opponent.health) * DOMINANT_HEALTH_WEIGHT),
        )
        best, best_score = scores[0]
        for stat, score in scores[1:]:
            if score > best_score:
                best, best_score = stat, score
        return best

    @staticmethod
    def intensity(
        user_dealt: int,
        opponent_dealt: int,
        total_crits: int,
        total_dodges: int,
        exchanges: int,
    ) -> float:
        """Half closeness of the damage totals, half special-event rate."""
        closeness = 1.0 - abs(user_dealt - opponent_dealt) / max(user_dealt + opponent_dealt, 1)
        event_rate = (total_crits + total_dodges) / max(2 * exchanges, 1)
        return clamp(0.5 * closeness + 0.5 * event_rate, 0.0, 1.0)

    # ========================================================================
    # REWARDS
    # ========================================================================

    def calculate_rewards(
        self,
        won: bool,
        tier: DifficultyTier,
        performance: Optional[BattlePerformance] = None,
        exact_gold: Optional[int] = None,
    ) -> Tuple[int, int]:
        """
        (xp, gold) for a battle.

        Losses pay flat XP and no gold. Wins pay base XP and gold from the
        tier (or `exact_gold`), plus additive performance bonuses.
        """
        if not won:
            return self._loss_xp, 0

        low, high = tier.gold_range
        gold = exact_gold if exact_gold is not None else self._rng.randint(low, high)
        xp = self._win_xp

        if performance is None:
            return xp, gold

        xp_bonus = 0.0
        gold_bonus = 0.0
        if performance.user_crits >= self._bonus_min_crits:
            xp_bonus += CRIT_BONUS_XP
            gold_bonus += CRIT_BONUS_GOLD
        if performance.user_dodges >= self._bonus_min_dodges:
            xp_bonus += DODGE_BONUS_XP
            gold_bonus += DODGE_BONUS_GOLD
        if performance.user_damage_dealt > performance.opponent_damage_dealt * self._dominance_ratio:
            xp_bonus += DOMINANCE_BONUS_XP
            gold_bonus += DOMINANCE_BONUS_GOLD

        return apply_bonus_multiplier(xp, xp_bonus), apply_bonus_multiplier(gold, gold_bonus)

    @staticmethod
    def calculate_exact_gold(opponent_id: str, tier: DifficultyTier) -> int:
        """Same opponent id and tier always give the same gold."""
        low, high = tier.gold_range
        return SeededRandom.from_identifier(opponent_id).randint(low, high)

    def execute_battle(
        self,
        user: BattlerStats,
        opponent: BattlerStats,
        opponent_name: str,
        opponent_id: Optional[str] = None,
        exact_gold: Optional[int] = None,
    ) -> BattleResult:
        """
        Full battle: resolve, price, wrap.

        Gold precedence: `exact_gold`, then the opponent id's deterministic
        gold, then a random roll in the tier range.
        """
        won, tier, performance = self.resolve_battle(user, opponent)

        if exact_gold is None and opponent_id is not None:
            exact_gold = self.calculate_exact_gold(opponent_id, tier)

        xp, gold = self.calculate_rewards(won, tier, performance, exact_gold)

        result = BattleResult(
            won=won,
            xp_earned=xp,
            gold_earned=gold,
            opponent_name=opponent_name,
            difficulty=tier,
            performance=performance,
        )

        self._logger.info(
            "Battle completed",
            extra={
                "opponent": opponent_name,
                "won": won,
                "difficulty": tier.value,
                "xp": xp,
                "gold": gold,
            },
        )
        return result

    # ========================================================================
    # LEGACY
    # ========================================================================

    @staticmethod
    def stats_from_focus_power(focus_power: int, level: int = 1) -> BattlerStats:
        """
        Synthetic stats for old call sites that only carry a power rating.

        Power above 1000 is split evenly across attack, defense and speed;
        health gets five times the per-stat share.
        """
        per_stat = max(0, focus_power - BASE_FOCUS_POWER) // 3
        return BattlerStats(
            health=BASE_HEALTH + per_stat * HEALTH_PER_STAT_POINT,
            attack=BASE_COMBAT_STAT + per_stat,
            defense=BASE_COMBAT_STAT + per_stat,
            speed=BASE_COMBAT_STAT + per_stat,
            level=max(1, level),
            focus_power=max(0, focus_power),
        )
