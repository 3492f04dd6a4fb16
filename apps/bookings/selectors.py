"""Read-side queries for bookings."""

from __future__ import annotations

from typing import Dict, List

from django.db.models import Prefetch  # type: ignore

from apps.catalog.models import resolve_resource_names

from .models import Booking, BookingItem


def booking_history(user_name: str) -> List[Booking]:
    """A user's bookings, newest start first, with items and resource names.

    Items are attached as ``item_list``; each item gets a ``resource_name``
    attribute which is ``None`` when the catalog entry was deleted after
    booking.
    """

    bookings = list(
        Booking.objects.filter(user_name=user_name)
        .order_by("-start_time", "-id")
        .prefetch_related(Prefetch("items", queryset=BookingItem.objects.order_by("id"), to_attr="item_list"))
    )

    keys = {(item.resource_type, item.resource_id) for booking in bookings for item in booking.item_list}
    names: Dict = resolve_resource_names(keys)
    for booking in bookings:
        for item in booking.item_list:
            item.resource_name = names.get((item.resource_type, item.resource_id))
    return bookings
