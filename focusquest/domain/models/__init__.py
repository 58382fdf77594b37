"""
Domain models package for FocusQuest.

Purpose
-------
Value objects and entities for the progression and battle engine. These
models validate themselves and encapsulate the few state transitions the
engine owns (raid damage accumulation).

Design Notes
------------
Domain models are separate from database models:
- Database models (focusquest/database/models/): schema-only SQLAlchemy tables
- Domain models (focusquest/domain/models/): validated objects with behavior

Callers convert with `from_db(row)` and write back `to_db_values()`.
"""

from .base import (
    DomainEvent,
    DomainValidationError,
    Entity,
    validate_non_negative,
    validate_not_empty,
    validate_positive,
    validate_range,
)
from .battle import BattlePerformance, BattleResult, DifficultyTier
from .battler import BattlerStats, StatAllocation, StatType, UserSnapshot
from .loot import PortalItem, PortalItemConfig
from .progression import (
    FocusStreak,
    GamificationSetting,
    LevelProgress,
    RankInfo,
    SessionReward,
    XPCalculation,
)
from .raid import BossRewards, PortalBoss, PortalRaidProgress, RaidAttemptResult

__all__ = [
    # Base classes
    "Entity",
    "DomainEvent",
    "DomainValidationError",
    # Validators
    "validate_positive",
    "validate_non_negative",
    "validate_range",
    "validate_not_empty",
    # Combatants
    "BattlerStats",
    "StatAllocation",
    "StatType",
    "UserSnapshot",
    # Battles
    "BattlePerformance",
    "BattleResult",
    "DifficultyTier",
    # Progression
    "FocusStreak",
    "GamificationSetting",
    "LevelProgress",
    "RankInfo",
    "SessionReward",
    "XPCalculation",
    # Raids
    "BossRewards",
    "PortalBoss",
    "PortalRaidProgress",
    "RaidAttemptResult",
    # Loot
    "PortalItem",
    "PortalItemConfig",
]
