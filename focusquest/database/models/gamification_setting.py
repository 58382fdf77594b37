from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from focusquest.database.base import Base, IdMixin, TimestampMixin


class GamificationSetting(Base, IdMixin, TimestampMixin):
    """
    Tuning value keyed by name (e.g. `xp_per_minute`).

    Schema-only model:
    - setting_key: unique setting name
    - setting_value: JSON scalar, a string, integer or float
    - setting_description: human-friendly description
    """

    __tablename__ = "gamification_settings"

    setting_key: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )

    setting_value: Mapped[Any] = mapped_column(
        JSON,
        nullable=False,
    )

    setting_description: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )
