"""
Database Models Package
=======================

SQLAlchemy 2.0 schema-only models for the records FocusQuest's host
application persists. No business logic lives here.

- user_progress:          level, XP, rank, stats, gold, portal attempts
- portal_bosses:          static boss reference data
- portal_progress:        raid progress per (user, boss)
- gamification_settings:  tuning values that override XP rates
"""

from focusquest.database.base import Base
from focusquest.database.models.gamification_setting import GamificationSetting
from focusquest.database.models.portal_boss import PortalBoss
from focusquest.database.models.portal_progress import PortalProgress
from focusquest.database.models.user_progress import UserProgress

__all__ = [
    "Base",
    "GamificationSetting",
    "PortalBoss",
    "PortalProgress",
    "UserProgress",
]
