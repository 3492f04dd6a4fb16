"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Check inventory, price and persist a booking
- CancelBookingCommand: Cancel a booking and promote waitlist entries
- JoinWaitlistCommand: Queue a user for a resource window
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple
import logging

from django.db import IntegrityError, OperationalError
from django.utils import timezone

from apps.bookings.constraints import is_exclusive_overlap_violation, is_lock_contention
from apps.bookings.domain.events import BookingCancelled, BookingCreated, WaitlistEntryPromoted
from apps.bookings.domain.inventory import InventoryChecker
from apps.bookings.exceptions import BookingBusy, BookingConflict, BookingValidationError
from apps.bookings.models import Booking, BookingItem, BookingStatus, WaitlistEntry
from apps.catalog.exceptions import ResourceNotFound
from apps.catalog.models import ResourceType, resource_model
from apps.pricing.exceptions import InvalidInterval
from apps.pricing.services import PricingEngine
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import ResourceRequest, TimeRange
from shared.infrastructure.locking import lock_queryset_if_possible

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Booking cancelled. Waitlist processed."


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    Every item shares the booking window.
    """
    user_name: str
    start_time: datetime
    end_time: datetime
    items: Sequence[ResourceRequest] = field(default_factory=list)


@dataclass
class CancelBookingCommand:
    """Command to cancel a booking"""
    booking_id: int


@dataclass
class JoinWaitlistCommand:
    """Command to wait for a resource window to free up"""
    user_name: str
    resource_type: str
    resource_id: int
    start_time: datetime
    end_time: datetime


# ===== Results =====

@dataclass(frozen=True)
class BookingResult:
    booking_id: int
    total_price: Decimal


@dataclass(frozen=True)
class CancellationResult:
    booking_id: int
    released: int
    promoted: Tuple[int, ...]
    message: str = CANCELLED_MESSAGE


def _validate_window(start_time: Optional[datetime], end_time: Optional[datetime]) -> TimeRange:
    if start_time is None or end_time is None:
        raise BookingValidationError("Missing required fields: start_time, end_time")
    if end_time <= start_time:
        raise BookingValidationError("end_time must be after start_time")
    window = TimeRange(start_time, end_time)
    if window.duration_minutes == 0:
        raise InvalidInterval("Invalid duration: window is shorter than one minute")
    return window


def _validate_resource_type(resource_type: str):
    if resource_type not in ResourceType.values:
        raise BookingValidationError(f"Unknown resource type: {resource_type}")


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    One pass, no retries:
    1. Validate the request shape
    2. Start a unit of work (atomic transaction)
    3. Check equipment inventory with the equipment rows locked
    4. Compute the price from the catalog and the active rules
    5. Insert the booking header and one item per requested resource
    6. Commit; the database rejects overlapping court/coach items
       (exclusive overlap constraint), which surfaces as BookingConflict
    Any failure rolls the whole unit back, so nothing partially persists.
    """

    def __init__(
        self,
        using: Optional[str] = None,
        inventory: Optional[InventoryChecker] = None,
        pricing: Optional[PricingEngine] = None,
        bus=None,
    ):
        self.using = using
        self.inventory = inventory or InventoryChecker(using=using)
        self.pricing = pricing or PricingEngine(using=using)
        self.bus = bus

    def validate(self, command: CreateBookingCommand):
        missing = [
            name for name in ('user_name', 'start_time', 'end_time')
            if not getattr(command, name)
        ]
        if not command.items:
            missing.append('items')
        if missing:
            raise BookingValidationError(f"Missing required fields: {', '.join(missing)}")

        _validate_window(command.start_time, command.end_time)
        for item in command.items:
            _validate_resource_type(item.resource_type)

    def handle(self, command: CreateBookingCommand) -> BookingResult:
        """
        Handle booking creation

        Raises:
            BookingValidationError: If the request is malformed
            ResourceNotFound: If a resource is not in the catalog
            InsufficientInventory: If an equipment pool is exhausted
            BookingConflict: If a court or coach is already booked
            BookingBusy: If a competing booking held the locks too long
        """
        self.validate(command)
        items = list(command.items)

        logger.info(
            f"Creating booking for {command.user_name}, "
            f"{len(items)} item(s), {command.start_time.isoformat()} - {command.end_time.isoformat()}"
        )

        try:
            with DjangoUnitOfWork(using=self.using, bus=self.bus) as uow:
                self.inventory.check(items, command.start_time, command.end_time)

                total_price = self.pricing.compute_price(items, command.start_time, command.end_time)

                booking = Booking.objects.using(uow.using).create(
                    user_name=command.user_name,
                    start_time=command.start_time,
                    end_time=command.end_time,
                    total_price=total_price,
                    status=BookingStatus.CONFIRMED,
                )

                for item in items:
                    BookingItem.objects.using(uow.using).create(
                        booking=booking,
                        resource_type=item.resource_type,
                        resource_id=item.resource_id,
                        quantity=item.quantity,
                        start_time=command.start_time,
                        end_time=command.end_time,
                        status=BookingStatus.CONFIRMED,
                    )

                uow.record(BookingCreated(
                    aggregate_id=booking.pk,
                    booking_id=booking.pk,
                    user_name=booking.user_name,
                    window=TimeRange(command.start_time, command.end_time),
                    total_price=total_price,
                    resources=tuple((i.resource_type, i.resource_id, i.quantity) for i in items),
                ))
        except IntegrityError as exc:
            if is_exclusive_overlap_violation(exc):
                logger.info(f"Booking for {command.user_name} rejected: exclusive resource already booked")
                raise BookingConflict() from exc
            raise
        except OperationalError as exc:
            if is_lock_contention(exc):
                logger.warning(f"Booking for {command.user_name} gave up waiting for a lock: {exc}")
                raise BookingBusy() from exc
            raise

        logger.info(f"Booking {booking.pk} confirmed for {booking.user_name}, total {total_price}")

        return BookingResult(booking_id=booking.pk, total_price=total_price)


class CancelBookingHandler:
    """
    Handler for cancelling a booking

    Cancels the booking and its items in one unit of work and, for every
    released item, promotes the earliest pending waitlist entry whose
    window overlaps the released one. Only one entry is promoted per
    released item. Cancelling an unknown or already cancelled booking is a
    no-op.
    """

    def __init__(self, using: Optional[str] = None, bus=None):
        self.using = using
        self.bus = bus

    def handle(self, command: CancelBookingCommand) -> CancellationResult:
        logger.info(f"Cancelling booking {command.booking_id}")

        with DjangoUnitOfWork(using=self.using, bus=self.bus) as uow:
            booking = lock_queryset_if_possible(
                Booking.objects.using(uow.using).filter(pk=command.booking_id)
            ).first()
            if booking is None:
                logger.info(f"Booking {command.booking_id} does not exist, nothing to cancel")
                return CancellationResult(booking_id=command.booking_id, released=0, promoted=())

            if booking.is_cancelled:
                logger.info(f"Booking {booking.pk} is already cancelled")
                return CancellationResult(booking_id=booking.pk, released=0, promoted=())

            booking.status = BookingStatus.CANCELLED
            booking.save(update_fields=['status'])

            items = BookingItem.objects.using(uow.using).filter(booking=booking)
            released = list(items.filter(status=BookingStatus.CONFIRMED))
            items.update(status=BookingStatus.CANCELLED)

            promoted: List[int] = []
            for item in released:
                entry = self.promote_next(uow, item)
                if entry is not None:
                    promoted.append(entry.pk)

            uow.record(BookingCancelled(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                released_items=len(released),
            ))

        logger.info(
            f"Booking {booking.pk} cancelled: {len(released)} item(s) released, "
            f"{len(promoted)} waitlist entr{'y' if len(promoted) == 1 else 'ies'} promoted"
        )

        return CancellationResult(booking_id=booking.pk, released=len(released), promoted=tuple(promoted))

    def next_in_line(self, uow: DjangoUnitOfWork, item: BookingItem) -> Optional[WaitlistEntry]:
        """Earliest pending entry for the item's resource overlapping its window"""
        candidates = (
            WaitlistEntry.objects.using(uow.using)
            .filter(status=WaitlistEntry.Status.PENDING)
            .for_resource(item.resource_type, item.resource_id)
            .overlapping(item.window)
            .order_by('created_at', 'id')
        )
        return lock_queryset_if_possible(candidates, skip_locked=True).first()

    def promote_next(self, uow: DjangoUnitOfWork, item: BookingItem) -> Optional[WaitlistEntry]:
        entry = self.next_in_line(uow, item)
        if entry is None:
            return None

        entry.status = WaitlistEntry.Status.NOTIFIED
        entry.notified_at = timezone.now()
        entry.save(update_fields=['status', 'notified_at'])

        uow.record(WaitlistEntryPromoted(
            aggregate_id=entry.pk,
            entry_id=entry.pk,
            user_name=entry.user_name,
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            window=item.window,
            released_by_booking_id=item.booking_id,
        ))
        logger.debug(f"Waitlist entry {entry.pk} promoted for {item.resource_type} {item.resource_id}")
        return entry


class JoinWaitlistHandler:
    """Handler for queueing a user on the waitlist of a resource"""

    def __init__(self, using: Optional[str] = None):
        self.using = using

    def handle(self, command: JoinWaitlistCommand) -> WaitlistEntry:
        if not command.user_name:
            raise BookingValidationError("Missing required fields: user_name")
        _validate_resource_type(command.resource_type)
        _validate_window(command.start_time, command.end_time)

        model = resource_model(command.resource_type)
        manager = model.objects.using(self.using) if self.using else model.objects
        if not manager.filter(pk=command.resource_id).exists():
            raise ResourceNotFound(command.resource_type, command.resource_id)

        manager = WaitlistEntry.objects.using(self.using) if self.using else WaitlistEntry.objects
        entry = manager.create(
            user_name=command.user_name,
            resource_type=command.resource_type,
            resource_id=command.resource_id,
            start_time=command.start_time,
            end_time=command.end_time,
        )

        logger.info(
            f"{entry.user_name} joined the waitlist for {entry.resource_type} {entry.resource_id} "
            f"({entry.start_time.isoformat()} - {entry.end_time.isoformat()})"
        )
        return entry
