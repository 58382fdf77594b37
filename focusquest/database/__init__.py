from focusquest.database.base import Base, IdMixin, TimestampMixin

__all__ = ["Base", "IdMixin", "TimestampMixin"]
