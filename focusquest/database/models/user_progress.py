"""
User Progress Model
===================

One row per user: level, experience, rank, stat allocation, gold and the
daily portal attempt allowance.

Schema-only. All game rules live in `focusquest.modules`; convert with
`UserSnapshot.from_db` / `UserSnapshot.to_db_values`.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import BigInteger, Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from focusquest.database.base import Base, IdMixin, TimestampMixin


class UserProgress(Base, IdMixin, TimestampMixin):
    # ========================================================================
    # TABLE CONFIGURATION
    # ========================================================================

    __tablename__ = "user_progress"
    __table_args__ = (
        Index("ix_user_progress_user_id", "user_id", unique=True),
        Index("ix_user_progress_level", "current_level"),
    )

    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    display_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # ========================================================================
    # LEVEL & EXPERIENCE
    # ========================================================================

    current_level: Mapped[int] = mapped_column(nullable=False, default=1)
    current_xp: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        doc="XP earned inside the current level",
    )
    total_xp_earned: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    current_rank: Mapped[str] = mapped_column(String(3), nullable=False, default="E")

    total_focus_minutes: Mapped[int] = mapped_column(nullable=False, default=0)
    total_sessions_completed: Mapped[int] = mapped_column(nullable=False, default=0)

    # ========================================================================
    # STATS
    # ========================================================================

    available_stat_points: Mapped[int] = mapped_column(nullable=False, default=5)
    stat_health: Mapped[int] = mapped_column(nullable=False, default=150)
    stat_attack: Mapped[int] = mapped_column(nullable=False, default=10)
    stat_defense: Mapped[int] = mapped_column(nullable=False, default=10)
    stat_speed: Mapped[int] = mapped_column(nullable=False, default=10)

    # ========================================================================
    # ECONOMY & RAIDS
    # ========================================================================

    gold: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    portal_attempts: Mapped[Optional[int]] = mapped_column(nullable=True, default=50)
    last_attempt_reset: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<UserProgress(user_id={self.user_id}, level={self.current_level}, "
            f"rank={self.current_rank})>"
        )
