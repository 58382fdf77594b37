"""
Unit Tests for BattleEngine
===========================

Test Coverage
-------------
- Win probability bounds and symmetry
- Difficulty tiers from the stat-total gap
- Outcome consistency of the narrated exchanges
- Dominant stat and intensity
- Rewards, performance bonuses and deterministic gold
- Legacy focus-power stats
"""

import random

import pytest

from focusquest.domain.models import BattlePerformance, BattleResult, DifficultyTier, StatType
from focusquest.modules.combat import BattleEngine


def _performance(**overrides):
    values = dict(
        user_damage_dealt=100,
        opponent_damage_dealt=100,
        user_damage_blocked=0,
        opponent_damage_blocked=0,
        user_crits=0,
        opponent_crits=0,
        user_dodges=0,
        opponent_dodges=0,
        effective_attack_ratio=1.0,
        effective_defense_ratio=1.0,
        exchange_count=4,
        intensity=0.5,
        dominant_stat=StatType.ATTACK,
    )
    values.update(overrides)
    return BattlePerformance(**values)


@pytest.mark.unit
@pytest.mark.combat
class TestWinProbability:
    def test_identical_stats_are_even(self, battle_engine, make_stats):
        # Arrange
        same = make_stats(health=300, attack=50, defense=50, speed=50)

        # Act & Assert
        assert battle_engine.win_probability(same, same) == 0.5
        assert battle_engine.determine_difficulty(same, same) is DifficultyTier.FAIR

    def test_extremes_are_clamped(self, battle_engine, make_stats):
        # Arrange
        strong = make_stats(health=1000, attack=500, defense=500, speed=500)
        weak = make_stats(health=0, attack=0, defense=0, speed=0)

        # Act & Assert
        assert battle_engine.win_probability(strong, weak) == 0.85
        assert battle_engine.win_probability(weak, strong) == 0.15

    def test_always_inside_bounds(self, battle_engine, make_stats):
        rng = random.Random(7)
        for _ in range(200):
            user = make_stats(*(rng.randint(0, 400) for _ in range(4)))
            opponent = make_stats(*(rng.randint(0, 400) for _ in range(4)))
            assert 0.15 <= battle_engine.win_probability(user, opponent) <= 0.85

    def test_better_attack_raises_odds(self, battle_engine, make_stats):
        base = make_stats()
        assert battle_engine.win_probability(make_stats(attack=40), base) > 0.5


@pytest.mark.unit
@pytest.mark.combat
class TestDifficulty:
    @pytest.mark.parametrize(
        "attack,tier",
        [(40, DifficultyTier.EASY), (39, DifficultyTier.FAIR), (10, DifficultyTier.FAIR)],
    )
    def test_gap_thresholds(self, battle_engine, make_stats, attack, tier):
        assert battle_engine.determine_difficulty(make_stats(attack=attack), make_stats()) is tier

    def test_hard_when_far_behind(self, battle_engine, make_stats):
        assert (
            battle_engine.determine_difficulty(make_stats(), make_stats(defense=40))
            is DifficultyTier.HARD
        )

    def test_gold_ranges(self):
        assert DifficultyTier.EASY.gold_range == (5, 12)
        assert DifficultyTier.FAIR.gold_range == (18, 32)
        assert DifficultyTier.HARD.gold_range == (40, 60)


@pytest.mark.unit
@pytest.mark.combat
class TestResolveBattle:
    def test_trace_agrees_with_outcome(self, config_manager, make_stats):
        # Arrange
        user = make_stats(health=200, attack=30, defense=20, speed=25)
        opponent = make_stats(health=250, attack=35, defense=15, speed=20)

        for seed in range(150):
            engine = BattleEngine(config_manager, rng=random.Random(seed))

            # Act
            won, _, performance = engine.resolve_battle(user, opponent)

            # Assert
            if won:
                assert performance.user_damage_dealt > performance.opponent_damage_dealt
            else:
                assert performance.opponent_damage_dealt > performance.user_damage_dealt
            assert 3 <= performance.exchange_count <= 5
            assert 0.0 <= performance.intensity <= 1.0

    def test_same_seed_same_battle(self, config_manager, make_stats):
        user, opponent = make_stats(attack=25), make_stats(defense=25)

        first = BattleEngine(config_manager, rng=random.Random(99)).resolve_battle(user, opponent)
        second = BattleEngine(config_manager, rng=random.Random(99)).resolve_battle(user, opponent)

        assert first == second

    @pytest.mark.parametrize(
        "winner,loser,expected",
        [(100, 200, 220), (0, 50, 51), (100, 100, 130)],
    )
    def test_winner_damage_correction(self, winner, loser, expected):
        assert BattleEngine._correct_winner_damage(winner, loser) == expected


@pytest.mark.unit
@pytest.mark.combat
class TestPerformanceHelpers:
    def test_attack_dominates_on_matchup_gap(self, battle_engine, make_stats):
        user, opponent = make_stats(attack=50), make_stats()

        assert battle_engine.dominant_stat(user, opponent, 0, 0, 0) is StatType.ATTACK

    def test_specials_can_dominate(self, battle_engine, make_stats):
        user, opponent = make_stats(attack=50), make_stats()

        assert battle_engine.dominant_stat(user, opponent, 0, 1, 1) is StatType.SPEED

    def test_blocked_damage_favors_defense(self, battle_engine, make_stats):
        user, opponent = make_stats(), make_stats(defense=10)

        assert battle_engine.dominant_stat(user, opponent, 100, 0, 0) is StatType.DEFENSE

    def test_health_gap(self, battle_engine, make_stats):
        user, opponent = make_stats(health=450), make_stats()

        assert battle_engine.dominant_stat(user, opponent, 0, 0, 0) is StatType.HEALTH

    def test_ties_keep_first_stat(self, battle_engine, make_stats):
        same = make_stats()

        assert battle_engine.dominant_stat(same, same, 0, 0, 0) is StatType.ATTACK

    def test_intensity(self):
        assert BattleEngine.intensity(100, 100, 0, 0, 3) == 0.5
        assert BattleEngine.intensity(100, 0, 6, 0, 3) == 0.5
        assert BattleEngine.intensity(100, 100, 6, 0, 3) == 1.0


@pytest.mark.unit
@pytest.mark.combat
class TestRewards:
    def test_loss_pays_flat_xp(self, battle_engine):
        assert battle_engine.calculate_rewards(False, DifficultyTier.HARD) == (10, 0)

    def test_win_without_performance(self, battle_engine):
        # Act
        xp, gold = battle_engine.calculate_rewards(True, DifficultyTier.FAIR)

        # Assert
        assert xp == 50
        assert 18 <= gold <= 32

    def test_all_bonuses_stack_additively(self, battle_engine):
        # Arrange
        performance = _performance(
            user_damage_dealt=300,
            opponent_damage_dealt=100,
            user_crits=2,
            user_dodges=2,
        )

        # Act
        rewards = battle_engine.calculate_rewards(True, DifficultyTier.FAIR, performance, exact_gold=20)

        # Assert
        assert rewards == (67, 30)

    def test_dominance_must_be_strict(self, battle_engine):
        performance = _performance(user_damage_dealt=150, opponent_damage_dealt=100)

        assert battle_engine.calculate_rewards(True, DifficultyTier.FAIR, performance, exact_gold=20) == (50, 20)


@pytest.mark.unit
@pytest.mark.combat
class TestExactGold:
    def test_same_id_same_gold(self):
        first = BattleEngine.calculate_exact_gold("opponent-42", DifficultyTier.HARD)
        second = BattleEngine.calculate_exact_gold("opponent-42", DifficultyTier.HARD)

        assert first == second

    def test_gold_spreads_inside_tier_range(self):
        # Act
        values = [
            BattleEngine.calculate_exact_gold(f"opponent-{index}", DifficultyTier.FAIR)
            for index in range(200)
        ]

        # Assert
        assert all(18 <= value <= 32 for value in values)
        assert len(set(values)) >= 10


@pytest.mark.unit
@pytest.mark.combat
class TestExecuteBattle:
    def test_result_fields(self, battle_engine, make_stats):
        # Act
        result = battle_engine.execute_battle(make_stats(attack=30), make_stats(), "Shadow Bookworm")

        # Assert
        assert isinstance(result, BattleResult)
        assert result.opponent_name == "Shadow Bookworm"
        assert result.performance is not None
        if result.won:
            assert result.xp_earned >= 50
        else:
            assert (result.xp_earned, result.gold_earned) == (10, 0)

    def test_opponent_id_gold_is_the_floor(self, config_manager, make_stats):
        user, opponent = make_stats(), make_stats()

        for seed in range(40):
            engine = BattleEngine(config_manager, rng=random.Random(seed))
            result = engine.execute_battle(user, opponent, "Rival", opponent_id="rival-7")
            if result.won:
                assert result.gold_earned >= BattleEngine.calculate_exact_gold("rival-7", result.difficulty)
            else:
                assert result.gold_earned == 0

    def test_explicit_gold_wins_over_opponent_id(self, config_manager, make_stats):
        strong, weak = make_stats(health=1000, attack=500, defense=500, speed=500), make_stats(speed=0)

        for seed in range(20):
            engine = BattleEngine(config_manager, rng=random.Random(seed))
            result = engine.execute_battle(strong, weak, "Dummy", opponent_id="dummy", exact_gold=7)
            if result.won:
                assert result.gold_earned >= 7
                assert result.gold_earned <= int(7 * 1.5)


@pytest.mark.unit
@pytest.mark.combat
class TestLegacyStats:
    def test_focus_power_split(self):
        # Act
        stats = BattleEngine.stats_from_focus_power(1300, level=4)

        # Assert
        assert stats.attack == 110
        assert stats.defense == 110
        assert stats.speed == 110
        assert stats.health == 650
        assert stats.level == 4
        assert stats.focus_power == 1300

    def test_low_power_gives_starter_stats(self):
        stats = BattleEngine.stats_from_focus_power(400)

        assert (stats.health, stats.attack) == (150, 10)
