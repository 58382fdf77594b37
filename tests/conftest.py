"""
Pytest Configuration and Fixtures for FocusQuest Tests
======================================================

Purpose
-------
Shared fixtures for the FocusQuest unit test suite.

Responsibilities
----------------
- Config manager built from the bundled balance YAML
- Seeded `random.Random` so simulations are reproducible
- Stat, snapshot and boss factories
- Engine and service instances wired to the shared config

Architecture Notes
------------------
- Every test gets fresh engines; nothing is shared across tests.
- Fixtures never touch a database. The schema models are imported only by
  conversion tests.
"""

from __future__ import annotations

import os
import random
from datetime import date
from typing import Callable

import pytest

from focusquest.core.config.manager import ConfigManager
from focusquest.domain.models import BattlerStats, PortalBoss, UserSnapshot
from focusquest.modules.combat import BattleEngine, CombatFormulas
from focusquest.modules.loot import DropService
from focusquest.modules.progression import LevelService, ProgressionService, XPService
from focusquest.modules.raid import RaidEngine

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["FOCUSQUEST_ENV"] = "testing"
    os.environ["FOCUSQUEST_LOG_LEVEL"] = "DEBUG"


# ============================================================================
# CONFIG & RANDOMNESS
# ============================================================================


@pytest.fixture
def config_manager() -> ConfigManager:
    """Config manager loaded from the bundled balance YAML."""
    return ConfigManager()


@pytest.fixture
def rng() -> random.Random:
    """Seeded outcome generator."""
    return random.Random(1234)


# ============================================================================
# FACTORIES
# ============================================================================


@pytest.fixture
def make_stats() -> Callable[..., BattlerStats]:
    """Factory for BattlerStats with starter defaults."""

    def _make(
        health: int = 150,
        attack: int = 10,
        defense: int = 10,
        speed: int = 10,
        level: int = 1,
    ) -> BattlerStats:
        return BattlerStats(health=health, attack=attack, defense=defense, speed=speed, level=level)

    return _make


@pytest.fixture
def make_boss() -> Callable[..., PortalBoss]:
    """Factory for PortalBoss reference data."""

    def _make(
        boss_id: str = "boss-1",
        rank: str = "E",
        map_order: int = 1,
        specialization: str = "Balanced",
        max_hp: int = 300,
        **stats: int,
    ) -> PortalBoss:
        return PortalBoss(
            id=boss_id,
            name=f"Boss {boss_id}",
            rank=rank,
            specialization=specialization,
            health=stats.get("health", 200),
            attack=stats.get("attack", 20),
            defense=stats.get("defense", 15),
            speed=stats.get("speed", 10),
            max_hp=max_hp,
            map_order=map_order,
        )

    return _make


@pytest.fixture
def new_player() -> UserSnapshot:
    return UserSnapshot.new_player("user-1", today=date(2025, 1, 1))


# ============================================================================
# ENGINES & SERVICES
# ============================================================================


@pytest.fixture
def level_service(config_manager) -> LevelService:
    return LevelService(config_manager)


@pytest.fixture
def xp_service(config_manager) -> XPService:
    return XPService(config_manager)


@pytest.fixture
def progression_service(config_manager) -> ProgressionService:
    return ProgressionService(config_manager)


@pytest.fixture
def formulas() -> CombatFormulas:
    return CombatFormulas()


@pytest.fixture
def battle_engine(config_manager, rng) -> BattleEngine:
    return BattleEngine(config_manager, rng=rng)


@pytest.fixture
def raid_engine(config_manager, rng) -> RaidEngine:
    return RaidEngine(config_manager, rng=rng)


@pytest.fixture
def drop_service(config_manager, rng) -> DropService:
    return DropService(config_manager, rng=rng)


