"""
Portal Boss Model
=================

Static boss reference data. Read-only for the engine; convert with
`PortalBoss.from_db`.
"""

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from focusquest.database.base import Base, IdMixin, TimestampMixin


class PortalBoss(Base, IdMixin, TimestampMixin):
    __tablename__ = "portal_bosses"
    __table_args__ = (
        Index("ix_portal_bosses_rank", "rank"),
        Index("ix_portal_bosses_map_order", "map_order"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    rank: Mapped[str] = mapped_column(String(3), nullable=False)
    specialization: Mapped[str] = mapped_column(String(30), nullable=False, default="Balanced")
    image_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    stat_health: Mapped[int] = mapped_column(nullable=False)
    stat_attack: Mapped[int] = mapped_column(nullable=False)
    stat_defense: Mapped[int] = mapped_column(nullable=False)
    stat_speed: Mapped[int] = mapped_column(nullable=False)
    max_hp: Mapped[int] = mapped_column(nullable=False)

    map_order: Mapped[int] = mapped_column(nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<PortalBoss(name={self.name!r}, rank={self.rank}, map_order={self.map_order})>"
