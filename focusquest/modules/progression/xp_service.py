"""
Session XP service for FocusQuest.

Purpose
-------
Convert a finished (or abandoned) focus session into experience.

Rules
-----
- Base XP: minutes * xp_per_minute, never negative.
- Bonuses require at least `minimum_bonus_minutes` of focus:
    - completion bonus when the session ran to the end
    - first-session bonus for the first session of the day
    - streak bonus on the first session of a day that lands on a 7-day
      streak milestone (7, 14, 21, ...)

Design Notes
------------
- Rates live in a frozen `XPRates`. `apply_settings` builds a new instance
  and assigns it in one step, so a reader sees the old rates or the new
  ones, never a mix.
- Defaults come from `progression.xp.*` in the balance YAML.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Union

from focusquest.core.logging.logger import get_logger
from focusquest.domain.models.progression import GamificationSetting, XPCalculation
from focusquest.modules.shared.constants import (
    FIRST_SESSION_BONUS,
    MINIMUM_BONUS_MINUTES,
    PERFECT_WEEK_BONUS,
    SESSION_COMPLETION_BONUS,
    STREAK_7_DAY_BONUS,
    STREAK_MILESTONE_DAYS,
    XP_PER_MINUTE,
)

if TYPE_CHECKING:
    from focusquest.core.config.manager import ConfigManager

logger = get_logger(__name__)

SettingInput = Union[GamificationSetting, Mapping[str, Any]]

# setting_key -> XPRates field
SETTING_FIELDS: Dict[str, str] = {
    "xp_per_minute": "xp_per_minute",
    "session_completion_bonus": "session_completion_bonus",
    "first_session_bonus": "first_session_bonus",
    "streak_7_day_bonus": "streak_7_day_bonus",
}


@dataclass(frozen=True)
class XPRates:
    xp_per_minute: int = XP_PER_MINUTE
    session_completion_bonus: int = SESSION_COMPLETION_BONUS
    first_session_bonus: int = FIRST_SESSION_BONUS
    streak_7_day_bonus: int = STREAK_7_DAY_BONUS
    perfect_week_bonus: int = PERFECT_WEEK_BONUS
    minimum_bonus_minutes: int = MINIMUM_BONUS_MINUTES

    @classmethod
    def from_config(cls, config_manager: ConfigManager) -> "XPRates":
        get = config_manager.get
        return cls(
            xp_per_minute=int(get("progression.xp.per_minute", default=XP_PER_MINUTE)),
            session_completion_bonus=int(
                get("progression.xp.session_completion_bonus", default=SESSION_COMPLETION_BONUS)
            ),
            first_session_bonus=int(
                get("progression.xp.first_session_bonus", default=FIRST_SESSION_BONUS)
            ),
            streak_7_day_bonus=int(
                get("progression.xp.streak_7_day_bonus", default=STREAK_7_DAY_BONUS)
            ),
            perfect_week_bonus=int(
                get("progression.xp.perfect_week_bonus", default=PERFECT_WEEK_BONUS)
            ),
            minimum_bonus_minutes=int(
                get("progression.xp.minimum_bonus_minutes", default=MINIMUM_BONUS_MINUTES)
            ),
        )


class XPService:
    """
    Session XP calculation with hot-swappable rates.

    Public Methods
    --------------
    - calculate_xp(...) -> XPCalculation
    - apply_settings(settings) -> List of applied setting keys
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None) -> None:
        if config_manager is None:
            from focusquest.core.config.manager import ConfigManager

            config_manager = ConfigManager()

        self._config = config_manager
        self._logger = logger
        self._rates = XPRates.from_config(config_manager)

        self._logger.info(
            "XPService initialized",
            extra={
                "xp_per_minute": self._rates.xp_per_minute,
                "session_completion_bonus": self._rates.session_completion_bonus,
                "first_session_bonus": self._rates.first_session_bonus,
                "streak_7_day_bonus": self._rates.streak_7_day_bonus,
                "minimum_bonus_minutes": self._rates.minimum_bonus_minutes,
            },
        )

    @property
    def rates(self) -> XPRates:
        return self._rates

    # ========================================================================
    # CALCULATION
    # ========================================================================

    def calculate_xp(
        self,
        duration_minutes: int,
        is_session_complete: bool,
        is_first_session_of_day: bool,
        current_streak: int = 0,
    ) -> XPCalculation:
        """
        XP for one session.

        Example:
            >>> service.calculate_xp(25, True, True, 7).total_xp
            300
        """
        rates = self._rates
        base_xp = max(0, duration_minutes * rates.xp_per_minute)

        completion = 0
        first = 0
        streak = 0
        if duration_minutes >= rates.minimum_bonus_minutes:
            if is_session_complete:
                completion = rates.session_completion_bonus
            if is_first_session_of_day:
                first = rates.first_session_bonus
                if current_streak > 0 and current_streak % STREAK_MILESTONE_DAYS == 0:
                    streak = rates.streak_7_day_bonus

        calculation = XPCalculation(
            base_xp=base_xp,
            session_completion_bonus=completion,
            first_session_bonus=first,
            streak_bonus=streak,
        )

        self._logger.debug(
            "Session XP calculated",
            extra={
                "duration_minutes": duration_minutes,
                "complete": is_session_complete,
                "first_of_day": is_first_session_of_day,
                "streak": current_streak,
                "total_xp": calculation.total_xp,
            },
        )
        return calculation

    # ========================================================================
    # SETTINGS
    # ========================================================================

    def apply_settings(self, settings: Iterable[SettingInput]) -> List[str]:
        """
        Override XP rates from tuning rows.

        Unknown keys are ignored. Values that cannot be read as an integer
        are skipped with a warning. Returns the keys that were applied, in
        input order.
        """
        changes: Dict[str, int] = {}
        applied: List[str] = []

        for raw in settings:
            setting = (
                raw if isinstance(raw, GamificationSetting) else GamificationSetting.from_mapping(dict(raw))
            )
            field_name = SETTING_FIELDS.get(setting.setting_key)
            if field_name is None:
                continue

            value = setting.int_value
            if value is None:
                self._logger.warning(
                    "Ignoring non-integer XP setting",
                    extra={"key": setting.setting_key, "value": repr(setting.setting_value)},
                )
                continue

            changes[field_name] = value
            if setting.setting_key not in applied:
                applied.append(setting.setting_key)

        if changes:
            self._rates = replace(self._rates, **changes)
            self._logger.info(
                "XP rates updated from settings",
                extra={"keys": applied},
            )

        return applied
