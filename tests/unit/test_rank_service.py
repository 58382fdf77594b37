"""
Unit Tests for the rank table and rank lookups.
"""

import pytest

from focusquest.domain.models import RankInfo
from focusquest.modules.progression.rank_service import (
    RANKS,
    boss_level_for_rank,
    check_rank_up,
    level_range_for_rank,
    next_rank_after,
    progress_to_next_rank,
    rank_by_code,
    rank_for_level,
    rank_or_default,
    validate_rank_table,
)


@pytest.mark.unit
@pytest.mark.progression
class TestRankTable:
    def test_eight_tiers_in_order(self):
        assert [rank.code for rank in RANKS] == ["E", "D", "C", "B", "A", "S", "SS", "SSS"]
        assert [rank.min_level for rank in RANKS] == [1, 10, 25, 45, 70, 100, 130, 150]

    def test_table_is_immutable(self):
        assert isinstance(RANKS, tuple)

    def test_validation_rejects_unordered_table(self):
        # Arrange
        ranks = (
            RankInfo(code="E", title="One", min_level=1, color="#000000"),
            RankInfo(code="D", title="Two", min_level=10, color="#000000"),
            RankInfo(code="C", title="Three", min_level=10, color="#000000"),
        )

        # Act & Assert
        with pytest.raises(ValueError):
            validate_rank_table(ranks)

    def test_validation_rejects_duplicate_codes(self):
        ranks = (
            RankInfo(code="E", title="One", min_level=1, color="#000000"),
            RankInfo(code="E", title="Two", min_level=5, color="#000000"),
        )

        with pytest.raises(ValueError):
            validate_rank_table(ranks)

    def test_badges_only_through_s(self):
        assert rank_by_code("S").badge_image_name == "S_rank"
        assert rank_by_code("SS").badge_image_name is None


@pytest.mark.unit
@pytest.mark.progression
class TestRankLookups:
    @pytest.mark.parametrize(
        "level,code",
        [(0, "E"), (1, "E"), (9, "E"), (10, "D"), (44, "C"), (45, "B"), (99, "A"), (100, "S"),
         (149, "SS"), (150, "SSS"), (999, "SSS")],
    )
    def test_rank_for_level(self, level, code):
        assert rank_for_level(level).code == code

    def test_rank_by_code_unknown_is_none(self):
        assert rank_by_code("Z") is None

    def test_rank_or_default_falls_back_to_lowest(self):
        assert rank_or_default("Z").code == "E"
        assert rank_or_default("A").title == "Elite Scholar"

    def test_next_rank_after(self):
        assert next_rank_after("E").code == "D"
        assert next_rank_after("SS").code == "SSS"
        assert next_rank_after("SSS") is None
        assert next_rank_after("Z") is None


@pytest.mark.unit
@pytest.mark.progression
class TestRankUp:
    def test_rank_up_at_threshold(self):
        # Act
        result = check_rank_up(9, 10)

        # Assert
        assert result is not None
        old_rank, new_rank = result
        assert (old_rank.code, new_rank.code) == ("E", "D")

    def test_no_rank_up_same_level(self):
        assert check_rank_up(9, 9) is None

    def test_no_rank_up_inside_tier(self):
        assert check_rank_up(10, 24) is None

    def test_progress_to_next_rank(self):
        # Act
        progress = progress_to_next_rank(12)

        # Assert
        assert progress.current.code == "D"
        assert progress.next.code == "C"
        assert progress.levels_remaining == 13

    def test_progress_to_next_rank_at_top(self):
        assert progress_to_next_rank(150) is None


@pytest.mark.unit
@pytest.mark.progression
class TestBossLevelForRank:
    def test_level_bands(self):
        assert level_range_for_rank("E") == (1, 9)
        assert level_range_for_rank("SS") == (130, 149)
        assert level_range_for_rank("SSS") == (150, 200)
        assert level_range_for_rank("Z") is None

    def test_known_values(self):
        assert boss_level_for_rank("E", 0) == 1
        assert boss_level_for_rank("D", 17) == 12
        assert boss_level_for_rank("SSS", 50) == 200

    def test_unknown_rank_is_level_one(self):
        assert boss_level_for_rank("??", 12345) == 1

    def test_level_always_inside_band(self):
        for rank in RANKS:
            low, high = level_range_for_rank(rank.code)
            for seed in range(-50, 500, 7):
                assert low <= boss_level_for_rank(rank.code, seed) <= high

    def test_same_seed_same_level(self):
        seed = 987654321987
        assert boss_level_for_rank("C", seed) == boss_level_for_rank("C", seed)
