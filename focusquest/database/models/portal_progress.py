"""
Portal Progress Model
=====================

Cumulative raid progress per (user, boss). Convert with
`PortalRaidProgress.from_db` / `PortalRaidProgress.to_db_values`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from focusquest.database.base import Base, IdMixin, TimestampMixin


class PortalProgress(Base, IdMixin, TimestampMixin):
    __tablename__ = "portal_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "portal_boss_id", name="uq_portal_progress_user_boss"),
        Index("ix_portal_progress_user_id", "user_id"),
    )

    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    portal_boss_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("portal_bosses.id", ondelete="CASCADE"),
        nullable=False,
    )

    current_damage: Mapped[int] = mapped_column(nullable=False, default=0)
    max_hp: Mapped[int] = mapped_column(nullable=False, doc="Fixed when the raid is created")
    progress_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    completed: Mapped[bool] = mapped_column(nullable=False, default=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Set once, on the first crossing of max_hp",
    )

    def __repr__(self) -> str:
        return (
            f"<PortalProgress(user_id={self.user_id}, boss={self.portal_boss_id}, "
            f"damage={self.current_damage}/{self.max_hp})>"
        )
