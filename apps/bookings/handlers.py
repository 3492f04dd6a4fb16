"""Domain event handlers and message bus wiring for bookings."""

from __future__ import annotations

import logging

from apps.bookings.application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    JoinWaitlistCommand,
    JoinWaitlistHandler,
)
from apps.bookings.domain.events import BookingCancelled, BookingCreated, WaitlistEntryPromoted

logger = logging.getLogger(__name__)


def log_booking_created(event: BookingCreated) -> None:
    logger.info(f"Booking {event.booking_id} created", extra={"domain_event": event.to_dict()})


def log_booking_cancelled(event: BookingCancelled) -> None:
    logger.info(f"Booking {event.booking_id} cancelled", extra={"domain_event": event.to_dict()})


def announce_waitlist_promotion(event: WaitlistEntryPromoted) -> None:
    """Slot-available notice. Delivery to the user is not part of this service."""
    logger.info(
        f"Slot available: notifying {event.user_name} for {event.resource_type} {event.resource_id}",
        extra={"domain_event": event.to_dict()},
    )


def register_handlers(bus) -> None:
    """Wire booking commands and events onto ``bus``."""

    commands = {
        CreateBookingCommand: CreateBookingHandler(bus=bus).handle,
        CancelBookingCommand: CancelBookingHandler(bus=bus).handle,
        JoinWaitlistCommand: JoinWaitlistHandler().handle,
    }
    for command_type, handler in commands.items():
        if not bus.has_command_handler(command_type):
            bus.register_command_handler(command_type, handler)

    bus.register_event_handler(BookingCreated, log_booking_created)
    bus.register_event_handler(BookingCancelled, log_booking_cancelled)
    bus.register_event_handler(WaitlistEntryPromoted, announce_waitlist_promotion)
