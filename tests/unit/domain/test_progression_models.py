"""
Unit Tests for the progression value objects.
"""

import math

import pytest

from focusquest.database.models import GamificationSetting as GamificationSettingRow
from focusquest.domain.models import (
    DomainValidationError,
    FocusStreak,
    GamificationSetting,
    LevelProgress,
    RankInfo,
    XPCalculation,
)


@pytest.mark.unit
@pytest.mark.domain
class TestXPCalculation:
    def test_total_and_breakdown_skip_zeroes(self):
        # Arrange & Act
        calculation = XPCalculation(base_xp=30, first_session_bonus=50)

        # Assert
        assert calculation.total_xp == 80
        assert calculation.breakdown == [("Focus Time", 30), ("First Session Bonus", 50)]

    def test_negative_parts_rejected(self):
        with pytest.raises(DomainValidationError):
            XPCalculation(base_xp=-1)


@pytest.mark.unit
@pytest.mark.domain
class TestLevelProgress:
    def test_percent_must_be_bounded(self):
        with pytest.raises(DomainValidationError):
            LevelProgress(
                current_level=2,
                next_level=3,
                xp_in_current_level=10,
                xp_needed_for_next=182,
                progress_percent=101.0,
            )

    def test_max_level_detection(self):
        progress = LevelProgress(150, 150, 0, 0, 100.0)

        assert progress.is_max_level
        assert progress.progress_text == "0 / 0 XP"


@pytest.mark.unit
@pytest.mark.domain
class TestRankInfo:
    def test_badge_name(self):
        assert RankInfo("B", "Skilled Scholar", 45, "#3498db").badge_image_name == "B_rank"
        assert RankInfo("SSS", "Grandmaster", 150, "#ffffff").badge_image_name is None

    def test_requires_code(self):
        with pytest.raises(DomainValidationError):
            RankInfo("", "Nobody", 1, "#000000")


@pytest.mark.unit
@pytest.mark.domain
class TestFocusStreak:
    @pytest.mark.parametrize("days,expected", [(0, False), (6, False), (7, True), (14, True)])
    def test_weekly_milestone(self, days, expected):
        assert FocusStreak(current_streak=days).is_weekly_milestone is expected


@pytest.mark.unit
@pytest.mark.domain
class TestGamificationSetting:
    """Reading tuning values of mixed types as integers."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (2, 2),
            ("3", 3),
            (" 40 ", 40),
            (75.9, 75),
            ("2.5", None),
            ("abc", None),
            (True, None),
            (math.inf, None),
            (math.nan, None),
            (None, None),
        ],
    )
    def test_int_value(self, raw, expected):
        assert GamificationSetting("xp_per_minute", raw).int_value == expected

    def test_from_mapping(self):
        setting = GamificationSetting.from_mapping({"setting_key": "first_session_bonus", "setting_value": "60"})

        assert setting.setting_key == "first_session_bonus"
        assert setting.int_value == 60
        assert setting.setting_description == ""

    def test_from_db(self):
        # Arrange
        row = GamificationSettingRow(setting_key="xp_per_minute", setting_value=2, setting_description=None)

        # Act
        setting = GamificationSetting.from_db(row)

        # Assert
        assert setting == GamificationSetting("xp_per_minute", 2, "")
