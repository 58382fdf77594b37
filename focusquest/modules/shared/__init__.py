"""
Shared building blocks for FocusQuest services.

- **constants**: gameplay constants and reference tables
- **formulas**: pure calculation helpers
- **exceptions**: domain exception hierarchy
"""

from focusquest.modules.shared.exceptions import (
    FocusQuestDomainException,
    InsufficientResourcesError,
    InvalidOperationError,
    NotFoundError,
)

__all__ = [
    "FocusQuestDomainException",
    "InsufficientResourcesError",
    "InvalidOperationError",
    "NotFoundError",
]
