"""
FocusQuest Game Formulas

Purpose
-------
Pure calculation functions for game mechanics shared by several services:
the level curve, stat totals, percent and bonus arithmetic, and reward
scaling.

Design Notes
------------
All formulas:
- Accept parameters explicitly (no config access)
- Return calculated values
- Have no side effects
- Use type hints for clarity

Usage
-----
    from focusquest.modules.shared.formulas import calculate_xp_for_level

    xp_needed = calculate_xp_for_level(10)
    total = calculate_total_stats(attack=50, defense=50, speed=50, health=300)
"""

from __future__ import annotations

from typing import Iterable

from focusquest.modules.shared.constants import (
    BASE_FOCUS_POWER,
    BASE_HEALTH,
    HEALTH_PER_STAT_POINT,
    XP_CURVE_BASE,
    XP_CURVE_EXPONENT,
)

PROGRESSIVE_CURVE = "progressive"
LINEAR_CURVE = "linear"


def clamp(value: float, low: float, high: float) -> float:
    """
    Constrain `value` to the inclusive range [low, high].

    Example:
        >>> clamp(1.7, -1.0, 1.0)
        1.0
    """
    return max(low, min(high, value))


def calculate_xp_for_level(level: int, curve: str = PROGRESSIVE_CURVE) -> int:
    """
    Total XP required to reach `level` from level 1.

    Progressive: floor(100 * (level - 1) ^ 1.5). Linear: 100 * (level - 1).
    Level 1 and below need 0 XP.

    Example:
        >>> calculate_xp_for_level(2)
        100
        >>> calculate_xp_for_level(5)
        800
        >>> calculate_xp_for_level(5, curve="linear")
        400
    """
    if level <= 1:
        return 0
    steps = level - 1
    if curve == LINEAR_CURVE:
        return XP_CURVE_BASE * steps
    return int(XP_CURVE_BASE * steps**XP_CURVE_EXPONENT)


def calculate_total_stats(attack: int, defense: int, speed: int, health: int) -> int:
    """
    Single comparable stat rating.

    Health above the 150 baseline counts one point per 5 health; the
    division truncates toward zero.

    Example:
        >>> calculate_total_stats(attack=50, defense=50, speed=50, health=300)
        180
    """
    return attack + defense + speed + int((health - BASE_HEALTH) / HEALTH_PER_STAT_POINT)


def calculate_progress_percent(current: float, required: float) -> float:
    """
    Percent of `required` covered by `current`, clamped to [0, 100].

    A non-positive `required` counts as complete.
    """
    if required <= 0:
        return 100.0
    return clamp(current / required * 100.0, 0.0, 100.0)


def calculate_stat_points(levels_gained: int, points_per_level: int) -> int:
    """Stat points awarded for a level change; never negative."""
    return max(0, levels_gained) * points_per_level


def apply_bonus_multiplier(amount: int, bonus_fraction: float) -> int:
    """
    Apply an additive bonus fraction to an integer reward, truncating.

    Example:
        >>> apply_bonus_multiplier(50, 0.35)
        67
    """
    return int(amount * (1.0 + bonus_fraction))


def scale_reward_by_level(base: int, level: int, per_level: float) -> int:
    """
    Scale a reward by `1 + level * per_level`, truncating.

    Example:
        >>> scale_reward_by_level(100, 10, 0.02)
        120
    """
    return int(base * (1.0 + level * per_level))


def calculate_focus_power(
    base_stat_total: int,
    total_focus_minutes: int,
    equipment_values: Iterable[int] = (),
) -> int:
    """
    Display-only power rating.

    1000 + (health + attack + defense + speed) + focus minutes + equipped
    item stat values.

    Example:
        >>> calculate_focus_power(200, 90, [5, 12])
        1307
    """
    return BASE_FOCUS_POWER + base_stat_total + total_focus_minutes + sum(equipment_values)
