"""Integration tests for booking API endpoints."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking, BookingItem, BookingStatus, WaitlistEntry
from apps.catalog.models import Coach, Court, Equipment
from apps.pricing.models import PricingRule


class BookingAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.court = Court.objects.create(name="Court 1", court_type="indoor", base_price_per_hour=Decimal("20.00"))
        self.coach = Coach.objects.create(name="Anna", bio="", hourly_rate=Decimal("30.00"))
        self.rackets = Equipment.objects.create(name="Racket", total_quantity=5, price_per_use=Decimal("5.00"))
        self.list_url = reverse("booking-list")

    def _payload(self, start="2025-03-03T10:00:00Z", end="2025-03-03T12:00:00Z", items=None, user_name="alice"):
        return {
            "user_name": user_name,
            "start_time": start,
            "end_time": end,
            "items": items if items is not None else [{"resource_type": "court", "resource_id": self.court.id}],
        }

    def _book(self, **kwargs):
        response = self.client.post(self.list_url, self._payload(**kwargs), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data["booking_id"]


class CreateBookingAPITests(BookingAPITestCase):
    def test_create_booking(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["total_price"], "40.00")
        self.assertIn("message", response.data)
        booking = Booking.objects.get(pk=response.data["booking_id"])
        self.assertEqual(booking.user_name, "alice")
        self.assertEqual(booking.items.count(), 1)

    def test_weekend_rule_applies_on_saturday(self) -> None:
        PricingRule.objects.create(
            name="Weekend",
            rule_type=PricingRule.RuleType.MULTIPLIER,
            value=Decimal("1.2"),
            conditions={"days_of_week": [0, 6]},
        )

        response = self.client.post(
            self.list_url,
            self._payload(start="2025-03-01T10:00:00Z", end="2025-03-01T12:00:00Z"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["total_price"], "48.00")

    def test_overlapping_court_returns_conflict(self) -> None:
        self._book()

        response = self.client.post(
            self.list_url,
            self._payload(start="2025-03-03T11:00:00Z", end="2025-03-03T13:00:00Z", user_name="bob"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertIn("error", response.data)
        self.assertEqual(Booking.objects.count(), 1)

    def test_adjacent_booking_is_accepted(self) -> None:
        self._book()
        self._book(start="2025-03-03T12:00:00Z", end="2025-03-03T13:00:00Z", user_name="bob")

        self.assertEqual(Booking.objects.count(), 2)

    def test_equipment_over_capacity_is_server_error(self) -> None:
        rackets = [{"resource_type": "equipment", "resource_id": self.rackets.id, "quantity": 3}]
        self._book(items=rackets)

        response = self.client.post(self.list_url, self._payload(items=rackets, user_name="bob"), format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR, response.data)
        self.assertIn("Not enough equipment", response.data["error"])
        self.assertFalse(Booking.objects.filter(user_name="bob").exists())

    def test_unknown_resource_is_server_error(self) -> None:
        items = [{"resource_type": "coach", "resource_id": self.coach.id + 100}]

        response = self.client.post(self.list_url, self._payload(items=items), format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR, response.data)
        self.assertEqual(Booking.objects.count(), 0)

    def test_sub_minute_window_is_rejected(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(start="2025-03-03T10:00:00Z", end="2025-03-03T10:00:30Z"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("Invalid duration", response.data["error"])
        self.assertEqual(Booking.objects.count(), 0)

    def test_missing_fields(self) -> None:
        response = self.client.post(self.list_url, {"user_name": "alice"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("start_time", response.data)
        self.assertIn("items", response.data)

    def test_empty_items(self) -> None:
        response = self.client.post(self.list_url, self._payload(items=[]), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_end_before_start(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(start="2025-03-03T12:00:00Z", end="2025-03-03T10:00:00Z"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Booking.objects.count(), 0)

    def test_quote_does_not_book(self) -> None:
        payload = self._payload(
            items=[
                {"resource_type": "court", "resource_id": self.court.id},
                {"resource_type": "equipment", "resource_id": self.rackets.id, "quantity": 2},
            ]
        )
        payload.pop("user_name")

        response = self.client.post(reverse("booking-quote"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["total_price"], "50.00")
        self.assertEqual(Booking.objects.count(), 0)


class BusySlotsAPITests(BookingAPITestCase):
    def test_lists_confirmed_items_of_the_day(self) -> None:
        self._book()
        self._book(start="2025-03-03T23:00:00Z", end="2025-03-04T01:00:00Z", user_name="bob")
        self._book(start="2025-03-04T10:00:00Z", end="2025-03-04T11:00:00Z", user_name="carol")
        cancelled = self._book(start="2025-03-03T14:00:00Z", end="2025-03-03T15:00:00Z", user_name="dave")
        self.client.post(reverse("booking-cancel", kwargs={"pk": cancelled}))

        response = self.client.get(self.list_url, {"date": "2025-03-03"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [slot["start_time"] for slot in response.data],
            ["2025-03-03T10:00:00Z", "2025-03-03T23:00:00Z"],
        )
        self.assertEqual(
            set(response.data[0].keys()),
            {"start_time", "end_time", "resource_type", "resource_id"},
        )

    def test_filters_by_resource(self) -> None:
        self._book(items=[
            {"resource_type": "court", "resource_id": self.court.id},
            {"resource_type": "coach", "resource_id": self.coach.id},
        ])

        by_resource = self.client.get(
            self.list_url,
            {"date": "2025-03-03", "resource_type": "coach", "resource_id": self.coach.id},
        )

        self.assertEqual(
            [(slot["resource_type"], slot["resource_id"]) for slot in by_resource.data],
            [("coach", self.coach.id)],
        )

    def test_resource_filter_needs_type_and_id(self) -> None:
        self._book(items=[
            {"resource_type": "court", "resource_id": self.court.id},
            {"resource_type": "coach", "resource_id": self.coach.id},
        ])

        type_only = self.client.get(self.list_url, {"date": "2025-03-03", "resource_type": "coach"})
        id_only = self.client.get(self.list_url, {"date": "2025-03-03", "resource_id": self.court.id})

        self.assertEqual(len(type_only.data), 2)
        self.assertEqual(len(id_only.data), 2)

    def test_date_is_required(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_date(self) -> None:
        response = self.client.get(self.list_url, {"date": "2025-13-45"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class CancelBookingAPITests(BookingAPITestCase):
    def test_cancel_promotes_waitlist(self) -> None:
        booking_id = self._book()
        waitlist = {
            "user_name": "bob",
            "resource_type": "court",
            "resource_id": self.court.id,
            "start_time": "2025-03-03T10:00:00Z",
            "end_time": "2025-03-03T11:00:00Z",
        }
        first = self.client.post(reverse("waitlist"), waitlist, format="json")
        second = self.client.post(reverse("waitlist"), {**waitlist, "user_name": "carol"}, format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        response = self.client.post(reverse("booking-cancel", kwargs={"pk": booking_id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Booking cancelled. Waitlist processed.")
        self.assertEqual(Booking.objects.get(pk=booking_id).status, BookingStatus.CANCELLED)
        self.assertFalse(BookingItem.objects.filter(status=BookingStatus.CONFIRMED).exists())
        self.assertEqual(WaitlistEntry.objects.get(pk=first.data["id"]).status, WaitlistEntry.Status.NOTIFIED)
        self.assertEqual(WaitlistEntry.objects.get(pk=second.data["id"]).status, WaitlistEntry.Status.PENDING)

    def test_cancel_twice(self) -> None:
        booking_id = self._book()
        url = reverse("booking-cancel", kwargs={"pk": booking_id})

        self.assertEqual(self.client.post(url).status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.post(url).status_code, status.HTTP_200_OK)

    def test_cancel_unknown_booking(self) -> None:
        response = self.client.post(reverse("booking-cancel", kwargs={"pk": 999}))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Booking cancelled. Waitlist processed.")
        self.assertFalse(Booking.objects.exists())


class WaitlistAPITests(BookingAPITestCase):
    def _entry(self, **overrides):
        data = {
            "user_name": "bob",
            "resource_type": "coach",
            "resource_id": self.coach.id,
            "start_time": "2025-03-03T10:00:00Z",
            "end_time": "2025-03-03T11:00:00Z",
        }
        data.update(overrides)
        return data

    def test_join_waitlist(self) -> None:
        response = self.client.post(reverse("waitlist"), self._entry(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        entry = WaitlistEntry.objects.get(pk=response.data["id"])
        self.assertEqual(entry.status, WaitlistEntry.Status.PENDING)
        self.assertEqual(entry.resource_type, "coach")

    def test_invalid_window(self) -> None:
        response = self.client.post(
            reverse("waitlist"),
            self._entry(end_time="2025-03-03T09:00:00Z"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_resource(self) -> None:
        response = self.client.post(reverse("waitlist"), self._entry(resource_id=self.coach.id + 50), format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(WaitlistEntry.objects.exists())


class BookingHistoryAPITests(BookingAPITestCase):
    def test_history_is_newest_first_with_resource_names(self) -> None:
        self._book()
        self._book(
            start="2025-03-05T10:00:00Z",
            end="2025-03-05T11:00:00Z",
            items=[
                {"resource_type": "coach", "resource_id": self.coach.id},
                {"resource_type": "equipment", "resource_id": self.rackets.id, "quantity": 2},
            ],
        )
        self._book(user_name="bob", start="2025-03-06T10:00:00Z", end="2025-03-06T11:00:00Z")

        response = self.client.get(reverse("booking-history"), {"user_name": "alice"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        latest, earliest = response.data
        self.assertEqual(latest["start_time"], "2025-03-05T10:00:00Z")
        self.assertEqual([item["resource_name"] for item in latest["items"]], ["Anna", "Racket"])
        self.assertEqual(latest["items"][1]["quantity"], 2)
        self.assertEqual(earliest["items"][0]["resource_name"], "Court 1")

    def test_deleted_resource_has_no_name(self) -> None:
        self._book()
        self.court.delete()

        response = self.client.get(reverse("booking-history"), {"user_name": "alice"})

        self.assertIsNone(response.data[0]["items"][0]["resource_name"])

    def test_user_name_is_required(self) -> None:
        response = self.client.get(reverse("booking-history"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_user_has_empty_history(self) -> None:
        response = self.client.get(reverse("booking-history"), {"user_name": "nobody"})

        self.assertEqual(response.data, [])
