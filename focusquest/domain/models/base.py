"""
Base domain model classes for FocusQuest.

Purpose
-------
Foundational abstractions shared by the domain models: identity-bearing
entities that record domain events, and the validation helpers value
objects call from `__post_init__`.

Responsibilities
----------------
- Define the `Entity` base with identity equality and a pending-event list
- Define `DomainEvent` for state changes callers may forward elsewhere
- Provide the validation framework used by every value object

Non-Responsibilities
--------------------
- Persistence (collaborators own it; see `focusquest.database`)
- Publishing events (the caller drains `clear_domain_events()`)

Design Patterns
---------------
- **Entity**: mutable object with an identity that persists over time
  (e.g. `PortalRaidProgress`)
- **Value Object**: immutable frozen dataclass validated on construction
  (e.g. `BattlerStats`, `RankInfo`)
- **Domain Events**: recorded on the entity, drained by the orchestrator

Usage Example
-------------
>>> progress.apply_damage(30)
>>> for event in progress.clear_domain_events():
...     notify(event.event_name, event.payload)
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


# ============================================================================
# DOMAIN EVENTS
# ============================================================================


@dataclass
class DomainEvent:
    """
    A domain event that has occurred.

    Attributes
    ----------
    event_name : str
        Event name (e.g., "raid.boss_defeated")
    payload : Dict[str, Any]
        Event payload with relevant data
    occurred_at : datetime
        When the event occurred (UTC)
    """

    event_name: str
    payload: Dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ============================================================================
# ENTITY
# ============================================================================


class Entity(ABC):
    """
    Base class for entities with identity.

    Two entities with the same ID are the same entity, even if their
    attributes differ. Entities record domain events for significant state
    transitions; the orchestrator drains them after persisting.
    """

    def __init__(self, entity_id: str) -> None:
        self._id = entity_id
        self._domain_events: List[DomainEvent] = []

    @property
    def id(self) -> str:
        """Get entity ID (immutable)."""
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return False
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def add_domain_event(self, event_name: str, payload: Dict[str, Any]) -> None:
        """
        Add a domain event to be published.

        Examples
        --------
        >>> self.add_domain_event("raid.boss_defeated", {
        ...     "progress_id": self.id,
        ...     "boss_id": self.boss_id,
        ... })
        """
        self._domain_events.append(DomainEvent(event_name=event_name, payload=payload))

    def clear_domain_events(self) -> List[DomainEvent]:
        """Clear and return all domain events."""
        events = self._domain_events.copy()
        self._domain_events.clear()
        return events

    def get_pending_events(self) -> List[DomainEvent]:
        """Get domain events without clearing them."""
        return self._domain_events.copy()


# ============================================================================
# DOMAIN MODEL VALIDATION
# ============================================================================


class DomainValidationError(Exception):
    """
    Exception raised when domain model validation fails.

    This is the base exception for all business rule violations
    in domain models.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        """
        Initialize validation error.

        Parameters
        ----------
        message : str
            Human-readable error message
        field : Optional[str]
            Field name that failed validation (if applicable)
        """
        super().__init__(message)
        self.field = field


def validate_positive(value: float, field_name: str) -> None:
    """
    Validate that a value is positive.

    Raises
    ------
    DomainValidationError
        If value is not positive
    """
    if value <= 0:
        raise DomainValidationError(
            f"{field_name} must be positive, got {value}",
            field=field_name,
        )


def validate_non_negative(value: float, field_name: str) -> None:
    """
    Validate that a value is non-negative.

    Raises
    ------
    DomainValidationError
        If value is negative
    """
    if value < 0:
        raise DomainValidationError(
            f"{field_name} must be non-negative, got {value}",
            field=field_name,
        )


def validate_range(value: float, min_val: float, max_val: float, field_name: str) -> None:
    """
    Validate that a value is within an inclusive range.

    Raises
    ------
    DomainValidationError
        If value is outside the range
    """
    if not (min_val <= value <= max_val):
        raise DomainValidationError(
            f"{field_name} must be between {min_val} and {max_val}, got {value}",
            field=field_name,
        )


def validate_not_empty(value: str, field_name: str) -> None:
    """
    Validate that a string is not empty.

    Raises
    ------
    DomainValidationError
        If value is empty or whitespace-only
    """
    if not value or not value.strip():
        raise DomainValidationError(
            f"{field_name} cannot be empty",
            field=field_name,
        )
