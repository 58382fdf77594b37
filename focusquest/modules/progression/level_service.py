"""
Level curve service for FocusQuest.

Purpose
-------
Map total experience to a level and back, and describe progress inside the
current level.

Curve
-----
- Level 1 starts at 0 XP.
- Progressive (default): level N starts at floor(100 * (N - 1) ^ 1.5) XP,
  so level 2 = 100, level 3 = 282, level 4 = 519.
- Linear: level N starts at 100 * (N - 1) XP.
- Levels cap at `progression.level.max_level` (150).

Design Notes
------------
- Thresholds for every level are precomputed at construction; lookups are a
  bisect over that table.
- The curve is strictly increasing, so `level_from_xp(xp_for_level(L)) == L`
  for every L up to the cap.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import TYPE_CHECKING, List, Optional, Tuple

from focusquest.core.logging.logger import get_logger
from focusquest.domain.models.progression import LevelProgress
from focusquest.modules.shared.constants import MAX_LEVEL, MIN_LEVEL
from focusquest.modules.shared.formulas import (
    LINEAR_CURVE,
    PROGRESSIVE_CURVE,
    calculate_progress_percent,
    calculate_xp_for_level,
)

if TYPE_CHECKING:
    from focusquest.core.config.manager import ConfigManager

logger = get_logger(__name__)

_SUPPORTED_CURVES = (PROGRESSIVE_CURVE, LINEAR_CURVE)


class LevelService:
    """
    XP curve and level lookups.

    Public Methods
    --------------
    - xp_for_level(level) -> Total XP needed to reach a level
    - xp_between_levels(level) -> XP from `level` to `level + 1`
    - level_from_xp(xp) -> Level for a total XP amount
    - level_progress(total_xp) -> LevelProgress
    - check_level_up(old_xp, new_xp) -> (old_level, new_level) or None

    Configuration Keys
    ------------------
    - progression.level.curve (default: "progressive")
    - progression.level.max_level (default: 150)
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None) -> None:
        if config_manager is None:
            from focusquest.core.config.manager import ConfigManager

            config_manager = ConfigManager()

        self._config = config_manager
        self._logger = logger

        curve = str(self._config.get("progression.level.curve", default=PROGRESSIVE_CURVE))
        if curve not in _SUPPORTED_CURVES:
            self._logger.warning(
                "Unknown XP curve, falling back to progressive",
                extra={"curve": curve},
            )
            curve = PROGRESSIVE_CURVE
        self._curve = curve
        self._max_level = max(
            MIN_LEVEL, int(self._config.get("progression.level.max_level", default=MAX_LEVEL))
        )

        # _thresholds[i] is the XP needed to reach level i + 1
        self._thresholds: List[int] = [
            calculate_xp_for_level(level, self._curve)
            for level in range(MIN_LEVEL, self._max_level + 1)
        ]

        self._logger.info(
            "LevelService initialized",
            extra={
                "curve": self._curve,
                "max_level": self._max_level,
                "max_level_xp": self._thresholds[-1],
            },
        )

    @property
    def curve(self) -> str:
        return self._curve

    @property
    def max_level(self) -> int:
        return self._max_level

    # ========================================================================
    # PUBLIC API
    # ========================================================================

    def xp_for_level(self, level: int) -> int:
        """Total XP required to reach `level`. Level 1 and below need 0."""
        if MIN_LEVEL <= level <= self._max_level:
            return self._thresholds[level - MIN_LEVEL]
        return calculate_xp_for_level(level, self._curve)

    def xp_between_levels(self, level: int) -> int:
        return self.xp_for_level(level + 1) - self.xp_for_level(level)

    def level_from_xp(self, xp: int) -> int:
        """Largest level up to the cap whose threshold is <= xp."""
        if xp < 0:
            return MIN_LEVEL
        return max(MIN_LEVEL, bisect_right(self._thresholds, xp))

    def level_progress(self, total_xp: int) -> LevelProgress:
        current_level = self.level_from_xp(total_xp)

        if current_level >= self._max_level:
            return LevelProgress(
                current_level=current_level,
                next_level=current_level,
                xp_in_current_level=0,
                xp_needed_for_next=0,
                progress_percent=100.0,
            )

        xp_for_current = self.xp_for_level(current_level)
        xp_for_next = self.xp_for_level(current_level + 1)
        xp_in_level = max(0, total_xp - xp_for_current)
        xp_needed = xp_for_next - xp_for_current

        return LevelProgress(
            current_level=current_level,
            next_level=current_level + 1,
            xp_in_current_level=xp_in_level,
            xp_needed_for_next=xp_needed,
            progress_percent=calculate_progress_percent(xp_in_level, xp_needed),
        )

    def check_level_up(self, old_xp: int, new_xp: int) -> Optional[Tuple[int, int]]:
        old_level = self.level_from_xp(old_xp)
        new_level = self.level_from_xp(new_xp)

        if new_level > old_level:
            self._logger.debug(
                "Level up detected",
                extra={"old_level": old_level, "new_level": new_level},
            )
            return old_level, new_level
        return None
