"""
Unit Tests for CombatFormulas
=============================

Test Coverage
-------------
- Base damage and defense reduction (including the chip-damage floor)
- Crit and dodge chance caps
- Strike resolution order: dodge roll, crit roll, then reduction
- Dodge and crit rolls can each be switched off
"""

import pytest

from focusquest.modules.combat import CombatFormulas, StrikeResult


class ScriptedRandom:
    """Returns queued values from random(); fails loudly when over-consumed."""

    def __init__(self, *values: float) -> None:
        self._values = list(values)

    def random(self) -> float:
        return self._values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._values)


@pytest.mark.unit
@pytest.mark.combat
class TestDamage:
    @pytest.mark.parametrize("attack,expected", [(0, 50), (10, 58), (15, 62), (50, 90)])
    def test_base_damage(self, attack, expected):
        assert CombatFormulas.base_damage(attack) == expected

    def test_reduction_caps_at_seventy_percent(self):
        assert CombatFormulas.damage_reduction(150, 100) == 30
        assert CombatFormulas.damage_reduction(9000, 100) == 30

    def test_zero_defense_takes_full_hit(self):
        assert CombatFormulas.damage_reduction(0, 58) == 58

    def test_chip_damage_floor(self):
        assert CombatFormulas.damage_reduction(1000, 10) == 10
        assert CombatFormulas.damage_reduction(0, 3) == 10

    def test_damage_never_below_floor(self):
        for defense in range(0, 400, 13):
            for incoming in range(0, 300, 17):
                assert CombatFormulas.damage_reduction(defense, incoming) >= 10


@pytest.mark.unit
@pytest.mark.combat
class TestChances:
    def test_crit_chance_scales_then_caps(self):
        assert CombatFormulas.critical_chance(0) == pytest.approx(0.10)
        assert CombatFormulas.critical_chance(60) == pytest.approx(0.40)
        assert CombatFormulas.critical_chance(1000) == 0.40

    def test_dodge_chance_scales_then_caps(self):
        assert CombatFormulas.dodge_chance(0) == pytest.approx(0.05)
        assert CombatFormulas.dodge_chance(25) == pytest.approx(0.15)
        assert CombatFormulas.dodge_chance(1000) == 0.30


@pytest.mark.unit
@pytest.mark.combat
class TestResolveStrike:
    """Attacker 10 attack / 10 speed against 15 defense / 10 speed."""

    @pytest.fixture
    def sides(self, make_stats):
        return make_stats(attack=10, speed=10), make_stats(defense=15, speed=10)

    def test_dodge_short_circuits(self, formulas, sides):
        # Arrange
        attacker, defender = sides
        rng = ScriptedRandom(0.01, 0.0)

        # Act
        strike = formulas.resolve_strike(attacker, defender, rng)

        # Assert
        assert strike == StrikeResult(damage=0, dodged=True)
        assert rng.remaining == 1

    def test_normal_hit_is_reduced(self, formulas, sides):
        attacker, defender = sides

        strike = formulas.resolve_strike(attacker, defender, ScriptedRandom(0.99, 0.99))

        assert strike == StrikeResult(damage=52, blocked=6, crit=False)

    def test_crit_doubles_before_reduction(self, formulas, sides):
        attacker, defender = sides

        strike = formulas.resolve_strike(attacker, defender, ScriptedRandom(0.99, 0.01))

        assert strike == StrikeResult(damage=104, blocked=12, crit=True)

    def test_no_dodge_roll_when_disabled(self, formulas, sides):
        # Arrange
        attacker, defender = sides
        rng = ScriptedRandom(0.01)

        # Act
        strike = formulas.resolve_strike(attacker, defender, rng, allow_dodge=False)

        # Assert
        assert strike.crit
        assert not strike.dodged
        assert rng.remaining == 0

    def test_no_crit_roll_when_disabled(self, formulas, sides):
        # Arrange
        attacker, defender = sides
        rng = ScriptedRandom()

        # Act
        strike = formulas.resolve_strike(attacker, defender, rng, allow_dodge=False, allow_crit=False)

        # Assert
        assert strike == StrikeResult(damage=52, blocked=6, crit=False)
        assert rng.remaining == 0
