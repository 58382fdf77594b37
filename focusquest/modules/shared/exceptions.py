"""
Domain exceptions for FocusQuest.

Purpose
-------
The few player-facing rule violations the engine can detect: spending a
portal attempt or stat point that is not there, selling or equipping an item
that does not exist, equipping past the slot limit. Numeric edge cases never
raise; the engine clamps them.

Design Notes
------------
- All domain exceptions inherit from `FocusQuestDomainException`.
- Each carries a human-readable `message`, structured `details` and a
  stable `error_code` the host can branch on (e.g. `INSUFFICIENT_PORTAL_ATTEMPTS`).
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FocusQuestDomainException(Exception):
    """
    Base exception for FocusQuest rule violations.

    Args:
        message: Human-readable error message
        details: Structured context for logging
        error_code: Stable identifier, defaults to the class name
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ) -> None:
        self.message: str = message
        self.details: Dict[str, Any] = details or {}
        self.error_code: str = error_code or self.__class__.__name__
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return f"[{self.error_code}] {self.message}"
        return f"[{self.error_code}] {self.message} | Details: {self.details}"


class InsufficientResourcesError(FocusQuestDomainException):
    """
    A user tried to spend more of something than they have.

    Args:
        resource: What is being spent ("portal_attempts", "stat_points")
        required: Amount the action needs
        current: Amount available
    """

    def __init__(self, resource: str, required: int, current: int) -> None:
        self.resource = resource
        self.required = required
        self.current = current
        super().__init__(
            f"Insufficient {resource}: need {required:,}, have {current:,}",
            details={"resource": resource, "required": required, "current": current},
            error_code=f"INSUFFICIENT_{resource.upper()}",
        )

    @property
    def deficit(self) -> int:
        return self.required - self.current


class NotFoundError(FocusQuestDomainException):
    """An id handed to the engine matches nothing in the given collection."""

    def __init__(self, resource_type: str, identifier: Optional[Any] = None) -> None:
        self.resource_type = resource_type
        self.identifier = identifier
        message = f"{resource_type} not found"
        if identifier is not None:
            message = f"{message}: {identifier}"
        super().__init__(
            message,
            details={"resource_type": resource_type, "identifier": identifier},
            error_code=f"{resource_type.upper()}_NOT_FOUND",
        )


class InvalidOperationError(FocusQuestDomainException):
    """
    An action breaks a game rule.

    Example:
        >>> raise InvalidOperationError("equip_item", "All 8 equipment slots are filled")
    """

    def __init__(self, action: str, reason: str) -> None:
        self.action = action
        self.reason = reason
        super().__init__(
            f"Invalid operation '{action}': {reason}",
            details={"action": action, "reason": reason},
            error_code=f"INVALID_{action.upper()}",
        )
