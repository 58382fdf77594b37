"""
FocusQuest Domain Constants

Purpose
-------
Domain-level constants for the progression and battle engine: stat
baselines, the level curve, battle odds and damage primitives, raid tables,
and loot rules. These values define how the game plays.

IMPORTANT:
This module contains GAMEPLAY constants only. Process settings (log level,
environment) live in `focusquest.core.config.config`.

Design Notes
------------
- Values are annotated with typing.Final to signal immutability
- Reference tables are wrapped in MappingProxyType so nothing can add or
  remove tiers at runtime
- Grouped by game system
- Values that hosts commonly retune (XP rates, level curve, exchange counts,
  base battle XP) also have YAML keys read through ConfigManager; the
  constants here are the fallbacks
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping, Tuple

# ============================================================================
# STATS
# ============================================================================

BASE_HEALTH: Final[int] = 150  # Health every character starts with
BASE_COMBAT_STAT: Final[int] = 10  # Attack / defense / speed starting value
HEALTH_PER_STAT_POINT: Final[int] = 5  # Health counts 1/5 toward stat totals
POINTS_PER_LEVEL: Final[int] = 5  # Stat points granted per level up
BASE_FOCUS_POWER: Final[int] = 1000  # Display-only power rating floor

# ============================================================================
# LEVELING SYSTEM
# ============================================================================

MIN_LEVEL: Final[int] = 1
MAX_LEVEL: Final[int] = 150
XP_CURVE_BASE: Final[int] = 100
XP_CURVE_EXPONENT: Final[float] = 1.5

# ============================================================================
# SESSION XP (defaults; hot-swappable via settings)
# ============================================================================

XP_PER_MINUTE: Final[int] = 1
SESSION_COMPLETION_BONUS: Final[int] = 25
FIRST_SESSION_BONUS: Final[int] = 50
STREAK_7_DAY_BONUS: Final[int] = 200
PERFECT_WEEK_BONUS: Final[int] = 500
MINIMUM_BONUS_MINUTES: Final[int] = 5
STREAK_MILESTONE_DAYS: Final[int] = 7

# ============================================================================
# BATTLE ODDS
# ============================================================================

WIN_PROBABILITY_BASE: Final[float] = 0.5
WIN_PROBABILITY_MIN: Final[float] = 0.15
WIN_PROBABILITY_MAX: Final[float] = 0.85

ATTACK_MODIFIER_WEIGHT: Final[float] = 0.15
ATTACK_MODIFIER_SCALE: Final[float] = 100.0
DEFENSE_MODIFIER_WEIGHT: Final[float] = 0.15
DEFENSE_MODIFIER_SCALE: Final[float] = 100.0
SPEED_MODIFIER_WEIGHT: Final[float] = 0.10
SPEED_MODIFIER_SCALE: Final[float] = 150.0
HEALTH_MODIFIER_WEIGHT: Final[float] = 0.10
HEALTH_MODIFIER_SCALE: Final[float] = 200.0

DIFFICULTY_GAP_THRESHOLD: Final[int] = 30  # Stat-total gap for easy / hard

# ============================================================================
# DAMAGE PRIMITIVES
# ============================================================================

BASE_DAMAGE: Final[int] = 50
DAMAGE_PER_ATTACK_TENTH: Final[int] = 8  # +8 damage per 10 attack
MAX_DAMAGE_REDUCTION: Final[float] = 0.70
DEFENSE_REDUCTION_SCALE: Final[float] = 150.0
MIN_DAMAGE: Final[int] = 10  # Chip damage always lands

CRIT_BASE_CHANCE: Final[float] = 0.10
CRIT_MAX_CHANCE: Final[float] = 0.40
CRIT_SPEED_SCALE: Final[float] = 200.0
CRIT_MULTIPLIER: Final[int] = 2

DODGE_BASE_CHANCE: Final[float] = 0.05
DODGE_MAX_CHANCE: Final[float] = 0.30
DODGE_SPEED_SCALE: Final[float] = 250.0

MIN_EXCHANGES: Final[int] = 3
MAX_EXCHANGES: Final[int] = 5

# ============================================================================
# BATTLE REWARDS
# ============================================================================

WIN_XP: Final[int] = 50
LOSS_XP: Final[int] = 10
BONUS_MIN_CRITS: Final[int] = 2
BONUS_MIN_DODGES: Final[int] = 2
DOMINANCE_RATIO: Final[float] = 1.5  # Dealt / taken ratio for the dominance bonus

CRIT_BONUS_XP: Final[float] = 0.10
CRIT_BONUS_GOLD: Final[float] = 0.15
DODGE_BONUS_XP: Final[float] = 0.10
DODGE_BONUS_GOLD: Final[float] = 0.15
DOMINANCE_BONUS_XP: Final[float] = 0.15
DOMINANCE_BONUS_GOLD: Final[float] = 0.20

# Winner damage is rescaled to at least this multiple of the loser's ratio
OUTCOME_CORRECTION_MIN_FACTOR: Final[float] = 1.3
OUTCOME_CORRECTION_MARGIN: Final[float] = 1.1

# ============================================================================
# DOMINANT STAT SCORING
# ============================================================================

DOMINANT_ATTACK_WEIGHT: Final[float] = 1.5
DOMINANT_DEFENSE_WEIGHT: Final[float] = 0.8
DOMINANT_SPEED_WEIGHT: Final[float] = 50.0
DOMINANT_HEALTH_WEIGHT: Final[float] = 0.5

# ============================================================================
# PORTAL RAIDS
# ============================================================================

BOSS_BASE_HP_BY_RANK: Final[Mapping[str, int]] = MappingProxyType(
    {"E": 300, "D": 500, "C": 800, "B": 1200, "A": 1800, "S": 2500}
)

SPECIALIZATION_HP_MULTIPLIERS: Final[Mapping[str, float]] = MappingProxyType(
    {"Tank": 1.5, "Balanced": 1.0, "Speedster": 0.7, "Glass Cannon": 0.6}
)

# (xp, gold) before the level multiplier
BOSS_BASE_REWARDS_BY_RANK: Final[Mapping[str, Tuple[int, int]]] = MappingProxyType(
    {
        "E": (100, 50),
        "D": (200, 100),
        "C": (350, 200),
        "B": (500, 350),
        "A": (750, 500),
        "S": (1000, 750),
    }
)

BOSS_REWARD_LEVEL_SCALE: Final[float] = 0.02
RAID_USER_HEALTH_MULTIPLIER: Final[int] = 2
RAID_AVERAGE_EXCHANGES: Final[int] = 4
RAID_NORMAL_HIT_WEIGHT: Final[float] = 0.85
RAID_CRIT_HIT_WEIGHT: Final[float] = 0.15
RAID_ESTIMATE_LOW: Final[float] = 0.8
RAID_ESTIMATE_HIGH: Final[float] = 1.2
RAID_NEAR_COMPLETION_PERCENT: Final[float] = 70.0

DAILY_PORTAL_ATTEMPTS: Final[int] = 50
PORTALS_FROM_CURRENT_RANK: Final[int] = 3
PORTALS_FROM_NEXT_RANK: Final[int] = 2

BOSS_LEVEL_CAP: Final[int] = 200  # Upper bound of the top rank's level band

# ============================================================================
# LOOT
# ============================================================================

ITEM_RANKS: Final[Tuple[str, ...]] = ("E", "D", "C", "B", "A", "S")

ITEM_SELL_PRICES: Final[Mapping[str, int]] = MappingProxyType(
    {"E": 5, "D": 15, "C": 40, "B": 80, "A": 150, "S": 300}
)

# Cumulative roll ceilings on 1..100 for (same rank, +1 rank); above is +2
FREE_DROP_THRESHOLDS: Final[Tuple[int, int]] = (70, 95)
PRO_DROP_THRESHOLDS: Final[Tuple[int, int]] = (50, 85)

INVENTORY_CAPACITY: Final[int] = 20
MAX_EQUIPPED_ITEMS: Final[int] = 8

STAT_TYPES: Final[Tuple[str, ...]] = ("Health", "Attack", "Defense", "Speed")

# ============================================================================
# DETERMINISTIC REWARDS
# ============================================================================

FNV64_OFFSET_BASIS: Final[int] = 0xCBF29CE484222325
FNV64_PRIME: Final[int] = 0x100000001B3
LCG_MULTIPLIER: Final[int] = 1103515245
LCG_INCREMENT: Final[int] = 12345
LCG_MODULUS: Final[int] = 2**31
