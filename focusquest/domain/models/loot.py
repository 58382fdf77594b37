"""
Portal item domain models for FocusQuest.

`PortalItemConfig` is read-only reference data describing an item type and
its stat range per rank. `PortalItem` is one rolled instance in a user's
inventory. Both are immutable; equipping returns a new item.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Tuple

from focusquest.domain.models.base import (
    DomainValidationError,
    validate_non_negative,
    validate_not_empty,
)
from focusquest.domain.models.battler import StatType
from focusquest.modules.shared.constants import ITEM_RANKS, ITEM_SELL_PRICES


@dataclass(frozen=True)
class PortalItemConfig:
    """
    Item type with an inclusive stat range for each rank E..S.

    Ranks missing from `stat_ranges` fall back to the E range.
    """

    id: str
    name: str
    stat_type: StatType
    stat_ranges: Mapping[str, Tuple[int, int]]
    icon_url: str = ""

    def __post_init__(self) -> None:
        validate_not_empty(self.name, "name")
        if "E" not in self.stat_ranges:
            raise DomainValidationError("stat_ranges must define rank E", field="stat_ranges")
        for rank, (low, high) in self.stat_ranges.items():
            validate_non_negative(low, f"stat_ranges[{rank}].min")
            if high < low:
                raise DomainValidationError(
                    f"stat range for rank {rank} is inverted: {low} > {high}",
                    field="stat_ranges",
                )

    def range_for(self, rank: str) -> Tuple[int, int]:
        return self.stat_ranges.get(rank, self.stat_ranges["E"])

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PortalItemConfig":
        """
        Build from a `portal_items_config` row shaped as a mapping
        (`rank_e_min`, `rank_e_max`, ... `rank_s_max`).
        """
        stat_type = StatType.from_string(str(data["stat_type"]))
        if stat_type is None:
            raise DomainValidationError(
                f"unknown stat_type {data['stat_type']!r}", field="stat_type"
            )
        ranges = {
            rank: (int(data[f"rank_{rank.lower()}_min"]), int(data[f"rank_{rank.lower()}_max"]))
            for rank in ITEM_RANKS
            if f"rank_{rank.lower()}_min" in data
        }
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            stat_type=stat_type,
            stat_ranges=ranges,
            icon_url=str(data.get("icon_url", "")),
        )


@dataclass(frozen=True)
class PortalItem:
    """One item instance in a user's inventory."""

    id: str
    name: str
    stat_type: StatType
    stat_value: int
    rolled_rank: str = "E"
    equipped: bool = False
    icon_url: str = ""

    def __post_init__(self) -> None:
        validate_not_empty(self.id, "id")
        validate_not_empty(self.name, "name")
        validate_non_negative(self.stat_value, "stat_value")

    @property
    def sell_price(self) -> int:
        return ITEM_SELL_PRICES.get(self.rolled_rank, ITEM_SELL_PRICES["E"])

    @property
    def rank_display_name(self) -> str:
        return f"{self.rolled_rank}-Rank"

    def with_equipped(self, equipped: bool) -> "PortalItem":
        return replace(self, equipped=equipped)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form matching the stored inventory item shape."""
        return {
            "id": self.id,
            "name": self.name,
            "icon_url": self.icon_url,
            "stat_type": self.stat_type.value,
            "stat_value": self.stat_value,
            "rolled_rank": self.rolled_rank,
            "equipped": self.equipped,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PortalItem":
        """Items stored before ranks were recorded default to rank E."""
        stat_type = StatType.from_string(str(data["stat_type"]))
        if stat_type is None:
            raise DomainValidationError(
                f"unknown stat_type {data['stat_type']!r}", field="stat_type"
            )
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            stat_type=stat_type,
            stat_value=int(data["stat_value"]),
            rolled_rank=str(data.get("rolled_rank") or "E"),
            equipped=bool(data.get("equipped", False)),
            icon_url=str(data.get("icon_url", "")),
        )
