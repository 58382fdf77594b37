"""
Unit Tests for the portal item models.
"""

import pytest

from focusquest.domain.models import DomainValidationError, PortalItem, PortalItemConfig, StatType


@pytest.fixture
def config_row():
    row = {"id": "cfg-1", "name": "Focus Lens", "stat_type": "Defense", "icon_url": "lens.png"}
    for index, rank in enumerate("EDCBAS"):
        row[f"rank_{rank.lower()}_min"] = index * 5 + 1
        row[f"rank_{rank.lower()}_max"] = index * 5 + 4
    return row


@pytest.mark.unit
@pytest.mark.domain
@pytest.mark.loot
class TestPortalItemConfig:
    def test_from_mapping(self, config_row):
        # Act
        config = PortalItemConfig.from_mapping(config_row)

        # Assert
        assert config.stat_type is StatType.DEFENSE
        assert config.range_for("E") == (1, 4)
        assert config.range_for("S") == (26, 29)

    def test_missing_rank_falls_back_to_e(self):
        config = PortalItemConfig("cfg", "Quill", StatType.SPEED, {"E": (1, 2)})

        assert config.range_for("A") == (1, 2)

    def test_rank_e_required(self):
        with pytest.raises(DomainValidationError):
            PortalItemConfig("cfg", "Quill", StatType.SPEED, {"D": (1, 2)})

    def test_inverted_range_rejected(self):
        with pytest.raises(DomainValidationError):
            PortalItemConfig("cfg", "Quill", StatType.SPEED, {"E": (5, 2)})

    def test_unknown_stat_type(self, config_row):
        config_row["stat_type"] = "Luck"

        with pytest.raises(DomainValidationError):
            PortalItemConfig.from_mapping(config_row)


@pytest.mark.unit
@pytest.mark.domain
@pytest.mark.loot
class TestPortalItem:
    def test_dict_round_trip(self):
        # Arrange
        item = PortalItem(
            id="i-1",
            name="Focus Lens",
            stat_type=StatType.DEFENSE,
            stat_value=12,
            rolled_rank="B",
            equipped=True,
            icon_url="lens.png",
        )

        # Act & Assert
        assert item.to_dict()["stat_type"] == "Defense"
        assert PortalItem.from_dict(item.to_dict()) == item

    def test_legacy_item_without_rank(self):
        item = PortalItem.from_dict({"id": "i-2", "name": "Quill", "stat_type": "speed", "stat_value": 3})

        assert item.rolled_rank == "E"
        assert not item.equipped
        assert item.sell_price == 5

    def test_sell_price_and_display(self):
        item = PortalItem(id="i-3", name="Crown", stat_type=StatType.HEALTH, stat_value=40, rolled_rank="S")

        assert item.sell_price == 300
        assert item.rank_display_name == "S-Rank"

    def test_with_equipped_returns_new_item(self):
        item = PortalItem(id="i-4", name="Quill", stat_type=StatType.SPEED, stat_value=3)

        equipped = item.with_equipped(True)

        assert equipped.equipped
        assert not item.equipped
