"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
They are recorded inside a unit of work and published after commit.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from shared.domain.base import DomainEvent
from shared.domain.value_objects import TimeRange


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A booking was confirmed

    Triggers:
    - Audit log entry
    """
    booking_id: Optional[int] = None
    user_name: str = ''
    window: Optional[TimeRange] = None
    total_price: Decimal = Decimal('0.00')
    resources: Tuple[Tuple[str, int, int], ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': self.booking_id,
            'user_name': self.user_name,
            'window': str(self.window) if self.window else None,
            'total_price': str(self.total_price),
            'resources': [list(resource) for resource in self.resources],
        })
        return data


@dataclass
class BookingCancelled(DomainEvent):
    """
    Event: A booking and all of its items were cancelled

    Triggers:
    - Audit log entry
    """
    booking_id: Optional[int] = None
    released_items: int = 0

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({'booking_id': self.booking_id, 'released_items': self.released_items})
        return data


@dataclass
class WaitlistEntryPromoted(DomainEvent):
    """
    Event: A pending waitlist entry was moved to notified

    Triggers:
    - Slot-available notice for the waiting user (logged only; delivery
      is outside this service)
    """
    entry_id: Optional[int] = None
    user_name: str = ''
    resource_type: str = ''
    resource_id: Optional[int] = None
    window: Optional[TimeRange] = None
    released_by_booking_id: Optional[int] = None

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'entry_id': self.entry_id,
            'user_name': self.user_name,
            'resource_type': self.resource_type,
            'resource_id': self.resource_id,
            'window': str(self.window) if self.window else None,
            'released_by_booking_id': self.released_by_booking_id,
        })
        return data
