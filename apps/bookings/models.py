"""Booking domain models: bookings, their items and the waitlist."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.catalog.models import ResourceType
from shared.domain.value_objects import TimeRange


class BookingStatus(models.TextChoices):
    CONFIRMED = "confirmed", _("Confirmed")
    CANCELLED = "cancelled", _("Cancelled")


class OverlappingQuerySet(models.QuerySet):
    """Half-open overlap filtering shared by items and waitlist entries."""

    def overlapping(self, window: TimeRange):
        return self.filter(start_time__lt=window.end, end_time__gt=window.start)

    def for_resource(self, resource_type: str, resource_id: int):
        return self.filter(resource_type=resource_type, resource_id=resource_id)


class Booking(models.Model):
    """Reservation header; confirmed on creation, cancelled at most once."""

    user_name = models.CharField(max_length=150)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.CONFIRMED,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="booking_valid_window",
            ),
        ]
        indexes = [
            models.Index(fields=["user_name", "start_time"], name="booking_user_start_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for {self.user_name}"

    @property
    def window(self) -> TimeRange:
        return TimeRange(self.start_time, self.end_time)

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED


class BookingItem(models.Model):
    """One held resource of a booking.

    Confirmed items of courts and coaches never overlap for the same
    resource; the database enforces this with the
    ``bookingitem_exclusive_no_overlap`` constraint (see migrations).
    """

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="items")
    resource_type = models.CharField(max_length=20, choices=ResourceType.choices)
    resource_id = models.PositiveBigIntegerField()
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=BookingStatus.CONFIRMED,
    )

    objects = OverlappingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking item")
        verbose_name_plural = _("Booking items")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="bookingitem_positive_quantity",
            ),
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="bookingitem_valid_window",
            ),
        ]
        indexes = [
            models.Index(
                fields=["resource_type", "resource_id", "status", "start_time", "end_time"],
                name="bookingitem_resource_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.resource_type} {self.resource_id} x{self.quantity} ({self.status})"

    @property
    def window(self) -> TimeRange:
        return TimeRange(self.start_time, self.end_time)


class WaitlistEntry(models.Model):
    """A user waiting for a resource window to become free."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        NOTIFIED = "notified", _("Notified")

    user_name = models.CharField(max_length=150)
    resource_type = models.CharField(max_length=20, choices=ResourceType.choices)
    resource_id = models.PositiveBigIntegerField()
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    notified_at = models.DateTimeField(null=True, blank=True)

    objects = OverlappingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Waitlist entry")
        verbose_name_plural = _("Waitlist entries")
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="waitlist_valid_window",
            ),
        ]
        indexes = [
            models.Index(
                fields=["resource_type", "resource_id", "status", "created_at"],
                name="waitlist_resource_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user_name} waiting for {self.resource_type} {self.resource_id} ({self.status})"
