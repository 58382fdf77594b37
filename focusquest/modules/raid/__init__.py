from focusquest.modules.raid.raid_engine import RaidEngine

__all__ = ["RaidEngine"]
