from focusquest.modules.combat.battle_engine import BattleEngine
from focusquest.modules.combat.formulas import CombatFormulas, StrikeResult

__all__ = ["BattleEngine", "CombatFormulas", "StrikeResult"]
