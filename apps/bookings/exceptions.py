"""Booking errors raised by the command handlers."""

from __future__ import annotations


class BookingError(Exception):
    """Base exception for booking operation failures."""


class BookingValidationError(BookingError, ValueError):
    """Malformed or incomplete booking request."""


class BookingConflict(BookingError):
    """An exclusive resource is already booked for an overlapping window."""

    default_message = "One or more selected resources are already booked for this time slot."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InsufficientInventory(BookingError):
    """Not enough pooled equipment left for the requested window."""

    def __init__(self, resource_id, requested: int, available: int) -> None:
        self.resource_id = resource_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Not enough equipment (ID: {resource_id}) available: "
            f"requested {requested}, available {available}."
        )


class BookingBusy(BookingConflict):
    """Gave up waiting for another booking to release its locks."""

    default_message = "The selected resources are being booked right now. Please retry."
