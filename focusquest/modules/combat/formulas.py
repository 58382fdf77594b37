"""
Combat Formulas
===============

Purpose
-------
Damage primitives shared by battles and portal raids.

Formulas
--------
- Base damage:     50 + floor(attack / 10 * 8)
- Reduction:       min(0.70, defense / 150) of incoming damage, never below
                   10 damage (chip damage always lands)
- Critical chance: min(0.40, 0.10 + speed / 200); a crit doubles base damage
- Dodge chance:    min(0.30, 0.05 + speed / 250)

Design Decisions
----------------
- Every primitive is stateless; only `resolve_strike` consumes randomness,
  and it takes the generator as an argument.
- Strike order is fixed: dodge roll, then crit roll, then the hit goes
  through damage reduction.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from focusquest.core.logging.logger import get_logger
from focusquest.domain.models.battler import BattlerStats
from focusquest.modules.shared.constants import (
    BASE_DAMAGE,
    CRIT_BASE_CHANCE,
    CRIT_MAX_CHANCE,
    CRIT_MULTIPLIER,
    CRIT_SPEED_SCALE,
    DAMAGE_PER_ATTACK_TENTH,
    DEFENSE_REDUCTION_SCALE,
    DODGE_BASE_CHANCE,
    DODGE_MAX_CHANCE,
    DODGE_SPEED_SCALE,
    MAX_DAMAGE_REDUCTION,
    MIN_DAMAGE,
)
from focusquest.modules.shared.formulas import clamp

logger = get_logger(__name__)


# ============================================================================
# Data Models
# ============================================================================


@dataclass(frozen=True)
class StrikeResult:
    """
    Outcome of one strike.

    `blocked` is the part of the incoming hit absorbed by defense.
    """

    damage: int
    blocked: int = 0
    crit: bool = False
    dodged: bool = False


# ============================================================================
# CombatFormulas
# ============================================================================


class CombatFormulas:
    """
    Stat-based damage resolution.

    Public Methods
    --------------
    - base_damage(attack) -> Raw hit before defense
    - damage_reduction(defense, incoming) -> Damage after defense
    - critical_chance(speed) -> Crit probability
    - dodge_chance(speed) -> Dodge probability
    - resolve_strike(attacker, defender, rng) -> StrikeResult
    """

    def __init__(self) -> None:
        self._logger = logger

    @staticmethod
    def base_damage(attack: int) -> int:
        """
        Example:
            >>> CombatFormulas.base_damage(50)
            90
        """
        return BASE_DAMAGE + math.floor(attack / 10 * DAMAGE_PER_ATTACK_TENTH)

    @staticmethod
    def damage_reduction(defense: int, incoming: int) -> int:
        """
        Incoming damage after defense, floored at 10.

        Example:
            >>> CombatFormulas.damage_reduction(75, 90)
            45
        """
        reduction = clamp(defense / DEFENSE_REDUCTION_SCALE, 0.0, MAX_DAMAGE_REDUCTION)
        return max(MIN_DAMAGE, int(incoming * (1.0 - reduction)))

    @staticmethod
    def critical_chance(speed: int) -> float:
        return min(CRIT_MAX_CHANCE, CRIT_BASE_CHANCE + speed / CRIT_SPEED_SCALE)

    @staticmethod
    def dodge_chance(speed: int) -> float:
        return min(DODGE_MAX_CHANCE, DODGE_BASE_CHANCE + speed / DODGE_SPEED_SCALE)

    def resolve_strike(
        self,
        attacker: BattlerStats,
        defender: BattlerStats,
        rng: random.Random,
        allow_dodge: bool = True,
        allow_crit: bool = True,
    ) -> StrikeResult:
        """
        Resolve one strike from `attacker` against `defender`.

        Args:
            attacker: Striking side
            defender: Receiving side
            rng: Outcome generator
            allow_dodge: Raids disable the defender's dodge roll
            allow_crit: Raid bosses strike without a crit roll

        Returns:
            StrikeResult with the damage that landed
        """
        if allow_dodge and rng.random() < self.dodge_chance(defender.speed):
            return StrikeResult(damage=0, dodged=True)

        crit = allow_crit and rng.random() < self.critical_chance(attacker.speed)
        incoming = self.base_damage(attacker.attack)
        if crit:
            incoming *= CRIT_MULTIPLIER

        damage = self.damage_reduction(defender.defense, incoming)
        return StrikeResult(damage=damage, blocked=max(0, incoming - damage), crit=crit)
