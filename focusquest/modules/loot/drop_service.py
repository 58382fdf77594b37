"""
Portal item drops and inventory rules.

Purpose
-------
Roll item drops (daily drops and boss drops), and apply the inventory rules
around them: the 20-item capacity, the 8 equipped-item limit, selling items
for gold and the per-stat equipment bonuses.

Drop Rarity
-----------
A 1..100 roll decides how many ranks above the source rank the item rolls
at:

    Free: 70% same rank, 25% +1, 5% +2
    Pro:  50% same rank, 35% +1, 15% +2

Item ranks cap at S. Sources ranked above S (SS, SSS) roll as S.

Design Notes
------------
- Inventories are plain lists of immutable `PortalItem`s. Every mutation
  returns a new list.
- The same roll logic serves daily drops and boss drops; only the source
  rank differs.
"""

from __future__ import annotations

import random
import uuid
from datetime import date
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from focusquest.core.logging.logger import get_logger
from focusquest.domain.models.battler import StatType
from focusquest.domain.models.loot import PortalItem, PortalItemConfig
from focusquest.modules.shared.constants import (
    FREE_DROP_THRESHOLDS,
    INVENTORY_CAPACITY,
    ITEM_RANKS,
    ITEM_SELL_PRICES,
    MAX_EQUIPPED_ITEMS,
    PRO_DROP_THRESHOLDS,
)
from focusquest.modules.shared.exceptions import InvalidOperationError, NotFoundError

if TYPE_CHECKING:
    from focusquest.core.config.manager import ConfigManager

logger = get_logger(__name__)


def normalize_item_rank(rank: str) -> str:
    """Item rank for a user or boss rank: E..S pass through, above S caps at S."""
    if rank in ITEM_RANKS:
        return rank
    if rank.startswith("S"):
        return ITEM_RANKS[-1]
    return ITEM_RANKS[0]


def raise_item_rank(rank: str, steps: int) -> str:
    index = ITEM_RANKS.index(normalize_item_rank(rank))
    return ITEM_RANKS[min(index + max(0, steps), len(ITEM_RANKS) - 1)]


class DropService:
    """
    Item drop rolls and inventory operations.

    Public Methods
    --------------
    - roll_drop_rank(source_rank, is_pro) -> Item rank
    - roll_stat_value(config, rank) -> Stat value
    - roll_drop(configs, source_rank, inventory, is_pro) -> PortalItem or None
    - sell_price(rank) -> Gold
    - sell_item(items, item_id) -> (remaining items, gold)
    - set_equipped(items, item_id, equipped) -> Updated items
    - equipment_bonuses(items) -> Per-stat totals of equipped items
    - daily_drop_available(last_drop_date, today) -> bool

    Configuration Keys
    ------------------
    - loot.inventory_capacity (default: 20)
    - loot.max_equipped (default: 8)
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if config_manager is None:
            from focusquest.core.config.manager import ConfigManager

            config_manager = ConfigManager()

        self._config = config_manager
        self._rng = rng or random.Random()
        self._logger = logger

        self._capacity = int(self._config.get("loot.inventory_capacity", default=INVENTORY_CAPACITY))
        self._max_equipped = int(self._config.get("loot.max_equipped", default=MAX_EQUIPPED_ITEMS))

        self._logger.info(
            "DropService initialized",
            extra={"inventory_capacity": self._capacity, "max_equipped": self._max_equipped},
        )

    @property
    def inventory_capacity(self) -> int:
        return self._capacity

    @property
    def max_equipped(self) -> int:
        return self._max_equipped

    # ========================================================================
    # ROLLS
    # ========================================================================

    def roll_drop_rank(self, source_rank: str, is_pro: bool = False) -> str:
        same_ceiling, plus_one_ceiling = PRO_DROP_THRESHOLDS if is_pro else FREE_DROP_THRESHOLDS
        roll = self._rng.randint(1, 100)

        if roll <= same_ceiling:
            steps = 0
        elif roll <= plus_one_ceiling:
            steps = 1
        else:
            steps = 2
        return raise_item_rank(source_rank, steps)

    def roll_stat_value(self, config: PortalItemConfig, rank: str) -> int:
        low, high = config.range_for(rank)
        return self._rng.randint(low, high)

    def roll_drop(
        self,
        configs: Sequence[PortalItemConfig],
        source_rank: str,
        inventory: Sequence[PortalItem],
        is_pro: bool = False,
    ) -> Optional[PortalItem]:
        """
        Roll one new item, or None when there is nothing to drop or the
        inventory is full.

        The item is equipped right away while equipped slots remain.
        """
        if not configs:
            return None
        if len(inventory) >= self._capacity:
            self._logger.debug(
                "Drop skipped, inventory full",
                extra={"items": len(inventory), "capacity": self._capacity},
            )
            return None

        config = self._rng.choice(list(configs))
        rank = self.roll_drop_rank(source_rank, is_pro)
        equipped_count = sum(1 for item in inventory if item.equipped)

        item = PortalItem(
            id=str(uuid.uuid4()),
            name=config.name,
            stat_type=config.stat_type,
            stat_value=self.roll_stat_value(config, rank),
            rolled_rank=rank,
            equipped=equipped_count < self._max_equipped,
            icon_url=config.icon_url,
        )

        self._logger.info(
            "Item dropped",
            extra={
                "item": item.name,
                "source_rank": source_rank,
                "rolled_rank": rank,
                "stat_type": item.stat_type.value,
                "stat_value": item.stat_value,
                "equipped": item.equipped,
                "pro": is_pro,
            },
        )
        return item

    # ========================================================================
    # INVENTORY
    # ========================================================================

    @staticmethod
    def sell_price(rank: str) -> int:
        return ITEM_SELL_PRICES.get(rank, ITEM_SELL_PRICES[ITEM_RANKS[0]])

    def sell_item(self, items: Sequence[PortalItem], item_id: str) -> Tuple[List[PortalItem], int]:
        """
        Remove an item and price it.

        Raises:
            NotFoundError: No item with `item_id`
        """
        for index, item in enumerate(items):
            if item.id == item_id:
                remaining = list(items[:index]) + list(items[index + 1:])
                gold = self.sell_price(item.rolled_rank)
                self._logger.info(
                    "Item sold",
                    extra={"item_id": item_id, "rank": item.rolled_rank, "gold": gold},
                )
                return remaining, gold
        raise NotFoundError("PortalItem", item_id)

    def set_equipped(
        self, items: Sequence[PortalItem], item_id: str, equipped: bool
    ) -> List[PortalItem]:
        """
        Equip or unequip one item.

        Raises:
            NotFoundError: No item with `item_id`
            InvalidOperationError: Equipping past the equipped-item limit
        """
        target = next((item for item in items if item.id == item_id), None)
        if target is None:
            raise NotFoundError("PortalItem", item_id)

        if equipped and not target.equipped:
            equipped_count = sum(1 for item in items if item.equipped)
            if equipped_count >= self._max_equipped:
                raise InvalidOperationError(
                    "equip_item",
                    f"at most {self._max_equipped} items can be equipped",
                )

        return [item.with_equipped(equipped) if item.id == item_id else item for item in items]

    @staticmethod
    def equipment_bonuses(items: Sequence[PortalItem]) -> Dict[StatType, int]:
        """Sum of equipped item values per stat; every stat is present."""
        bonuses = {stat: 0 for stat in StatType}
        for item in items:
            if item.equipped:
                bonuses[item.stat_type] += item.stat_value
        return bonuses

    @staticmethod
    def daily_drop_available(last_drop_date: Optional[date], today: date) -> bool:
        return last_drop_date is None or last_drop_date < today
