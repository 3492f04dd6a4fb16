"""
Common Value Objects

Value objects used across multiple domains:
- TimeRange: Represents a half-open [start, end) window of time
- ResourceRequest: One (resource_type, resource_id, quantity) line of a booking
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from decimal import Decimal

from shared.domain.base import ValueObject

MINUTES_PER_HOUR = Decimal(60)


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Time range value object

    Represents a range from start (inclusive) to end (exclusive).
    Used for booking windows, waitlist windows and busy-slot queries.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Start ({self.start.isoformat()}) must be before end ({self.end.isoformat()})")

    @classmethod
    def for_day(cls, day: date, tz: tzinfo) -> 'TimeRange':
        """The [00:00, next 00:00) range of a calendar day in the given zone"""
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
        return cls(start, end)

    def overlaps_with(self, other: 'TimeRange') -> bool:
        """
        Check if this range overlaps with another

        Adjacent ranges do not overlap because end is exclusive:
            - [10:00, 12:00) overlaps with [11:00, 13:00) -> True
            - [10:00, 12:00) overlaps with [12:00, 13:00) -> False
        """
        if not isinstance(other, TimeRange):
            raise TypeError("Can only check overlap with another TimeRange")

        return self.start < other.end and self.end > other.start

    @property
    def duration_minutes(self) -> int:
        """Whole minutes between start and end (seconds are truncated)"""
        return int((self.end - self.start).total_seconds() // 60)

    @property
    def duration_hours(self) -> Decimal:
        """Fractional hours derived from whole minutes, never rounded"""
        return Decimal(self.duration_minutes) / MINUTES_PER_HOUR

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"TimeRange({self.start.isoformat()}, {self.end.isoformat()})"


@dataclass(frozen=True)
class ResourceRequest(ValueObject):
    """
    One requested resource of a booking

    Quantity only matters for pooled resources; exclusive ones are
    always requested once.
    """
    resource_type: str
    resource_id: int
    quantity: int = 1

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")
