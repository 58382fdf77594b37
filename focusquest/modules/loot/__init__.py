from focusquest.modules.loot.drop_service import DropService, normalize_item_rank, raise_item_rank

__all__ = ["DropService", "normalize_item_rank", "raise_item_rank"]
