"""
Unit Tests for PortalRaidProgress Domain Model
==============================================

Purpose
-------
Test damage accumulation on raid progress without a database session.

Test Coverage
-------------
- Damage clamping at max HP
- Completion and the one-time boss defeated event
- Construction invariants
- Projection of an attempt onto progress (RaidAttemptResult)
- Conversion from and to the `portal_progress` row
"""

from datetime import datetime, timedelta, timezone

import pytest

from focusquest.database.models import PortalBoss as PortalBossRow
from focusquest.database.models import PortalProgress
from focusquest.domain.models import (
    DomainValidationError,
    PortalBoss,
    PortalRaidProgress,
    RaidAttemptResult,
)

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def progress():
    return PortalRaidProgress.start("p-1", user_id="user-1", boss_id="boss-1", max_hp=500, now=T0)


# ============================================================================
# DAMAGE TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
@pytest.mark.raid
class TestApplyDamage:
    """Test cumulative damage and completion."""

    def test_damage_accumulates(self, progress):
        # Act
        applied = progress.apply_damage(120)

        # Assert
        assert applied == 120
        assert progress.current_damage == 120
        assert progress.remaining_hp == 380
        assert progress.progress_percent == pytest.approx(24.0)
        assert not progress.completed

    def test_overkill_is_clamped(self, progress):
        """Test the 480 + 30 case: only 20 lands and the raid completes."""
        # Arrange
        progress.apply_damage(480, now=T0)

        # Act
        applied = progress.apply_damage(30, now=T0 + timedelta(minutes=5))

        # Assert
        assert applied == 20
        assert progress.current_damage == 500
        assert progress.progress_percent == 100.0
        assert progress.completed
        assert progress.completed_at == T0 + timedelta(minutes=5)

    def test_damage_after_completion_is_ignored(self, progress):
        # Arrange
        progress.apply_damage(500, now=T0)

        # Act
        applied = progress.apply_damage(100, now=T0 + timedelta(days=1))

        # Assert
        assert applied == 0
        assert progress.current_damage == 500
        assert progress.completed_at == T0

    def test_negative_damage_counts_as_zero(self, progress):
        progress.apply_damage(50)

        assert progress.apply_damage(-30) == 0
        assert progress.current_damage == 50

    def test_damage_is_monotonic(self, progress):
        seen = []
        for damage in (40, -10, 0, 200, 90, 500, 30):
            progress.apply_damage(damage)
            seen.append(progress.current_damage)

        assert seen == sorted(seen)
        assert all(0 <= value <= 500 for value in seen)

    def test_near_completion(self, progress):
        progress.apply_damage(349)
        assert not progress.is_near_completion

        progress.apply_damage(1)
        assert progress.is_near_completion


@pytest.mark.unit
@pytest.mark.domain
@pytest.mark.raid
class TestDomainEvents:
    def test_boss_defeated_event_emitted_once(self, progress):
        # Act
        progress.apply_damage(600)
        progress.apply_damage(10)

        # Assert
        events = progress.get_pending_events()
        assert [event.event_name for event in events] == ["raid.boss_defeated"]
        assert events[0].payload == {
            "progress_id": "p-1",
            "user_id": "user-1",
            "boss_id": "boss-1",
            "max_hp": 500,
        }

    def test_clear_drains_events(self, progress):
        progress.apply_damage(500)

        assert len(progress.clear_domain_events()) == 1
        assert progress.get_pending_events() == []

    def test_no_event_before_completion(self, progress):
        progress.apply_damage(499)

        assert progress.get_pending_events() == []


@pytest.mark.unit
@pytest.mark.domain
@pytest.mark.raid
class TestInvariants:
    def test_damage_above_max_rejected(self):
        with pytest.raises(DomainValidationError):
            PortalRaidProgress("p-1", "user-1", "boss-1", max_hp=100, current_damage=101)

    def test_completed_requires_full_damage(self):
        with pytest.raises(DomainValidationError):
            PortalRaidProgress("p-1", "user-1", "boss-1", max_hp=100, current_damage=50, completed=True)

    def test_max_hp_must_be_positive(self):
        with pytest.raises(DomainValidationError):
            PortalRaidProgress.start("p-1", "user-1", "boss-1", max_hp=0)

    def test_identity_equality(self):
        first = PortalRaidProgress.start("p-1", "user-1", "boss-1", max_hp=100)
        second = PortalRaidProgress("p-1", "user-1", "boss-1", max_hp=100, current_damage=40)

        assert first == second
        assert hash(first) == hash(second)


@pytest.mark.unit
@pytest.mark.domain
@pytest.mark.raid
class TestRaidAttemptResult:
    def test_projection_does_not_mutate(self, progress):
        # Arrange
        progress.apply_damage(480)

        # Act
        result = RaidAttemptResult.from_damage(progress, 30)

        # Assert
        assert result.damage_dealt == 30
        assert result.new_total_damage == 500
        assert result.boss_defeated
        assert progress.current_damage == 480

    def test_negative_damage_projects_as_zero(self, progress):
        result = RaidAttemptResult.from_damage(progress, -5, user_survived=False)

        assert result.damage_dealt == 0
        assert not result.boss_defeated
        assert not result.user_survived


@pytest.mark.unit
@pytest.mark.domain
@pytest.mark.raid
class TestConversion:
    def test_progress_from_db_and_back(self):
        # Arrange
        row = PortalProgress(
            id="p-9",
            user_id="user-9",
            portal_boss_id="boss-9",
            current_damage=250,
            max_hp=1000,
            progress_percent=25.0,
            completed=False,
            completed_at=None,
            created_at=T0,
            updated_at=T0,
        )

        # Act
        progress = PortalRaidProgress.from_db(row)
        progress.apply_damage(750, now=T0 + timedelta(hours=1))
        values = progress.to_db_values()

        # Assert
        assert progress.boss_id == "boss-9"
        assert values["current_damage"] == 1000
        assert values["progress_percent"] == 100.0
        assert values["completed"] is True
        assert values["completed_at"] == T0 + timedelta(hours=1)

    def test_boss_from_db(self):
        # Arrange
        row = PortalBossRow(
            id="boss-e-1",
            name="Procrastination Imp",
            rank="E",
            specialization="Speedster",
            image_name="imp.png",
            stat_health=180,
            stat_attack=14,
            stat_defense=8,
            stat_speed=25,
            max_hp=210,
            map_order=1,
        )

        # Act
        boss = PortalBoss.from_db(row)

        # Assert
        assert boss.name == "Procrastination Imp"
        assert boss.battler_stats.speed == 25
        assert 1 <= boss.level <= 9
        assert boss.level == PortalBoss.from_db(row).level
