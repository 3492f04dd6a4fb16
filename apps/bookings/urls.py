"""URL routing for the booking domain."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    BookingCancelView,
    BookingHistoryView,
    BookingListCreateView,
    QuoteView,
    WaitlistView,
)

urlpatterns = [
    path("bookings/", BookingListCreateView.as_view(), name="booking-list"),
    path("bookings/quote/", QuoteView.as_view(), name="booking-quote"),
    path("bookings/<int:pk>/cancel/", BookingCancelView.as_view(), name="booking-cancel"),
    path("waitlist/", WaitlistView.as_view(), name="waitlist"),
    path("my-bookings/", BookingHistoryView.as_view(), name="booking-history"),
]
