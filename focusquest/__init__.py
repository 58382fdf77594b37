"""
FocusQuest progression and battle resolution engine.

Turns focus-session time into experience, levels and ranks, and resolves
stat-based battles and portal boss raids into outcomes and rewards.
"""

__version__ = "1.0.0"
