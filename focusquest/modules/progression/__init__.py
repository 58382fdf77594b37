from focusquest.modules.progression.level_service import LevelService
from focusquest.modules.progression.progression_service import ProgressionService
from focusquest.modules.progression.rank_service import (
    RANKS,
    RankProgress,
    boss_level_for_rank,
    check_rank_up,
    next_rank_after,
    progress_to_next_rank,
    rank_by_code,
    rank_for_level,
    rank_or_default,
)
from focusquest.modules.progression.streak_service import advance_streak
from focusquest.modules.progression.xp_service import XPRates, XPService

__all__ = [
    "LevelService",
    "ProgressionService",
    "RANKS",
    "RankProgress",
    "XPRates",
    "XPService",
    "advance_streak",
    "boss_level_for_rank",
    "check_rank_up",
    "next_rank_after",
    "progress_to_next_rank",
    "rank_by_code",
    "rank_for_level",
    "rank_or_default",
]
