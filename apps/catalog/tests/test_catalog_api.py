"""Integration tests for catalog administration endpoints."""

from __future__ import annotations

from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.models import Coach, Court, Equipment
from apps.pricing.models import PricingRule


class CatalogAPITests(APITestCase):
    def test_create_and_list_courts(self) -> None:
        response = self.client.post(
            reverse("court-list"),
            {"name": "Center court", "court_type": "clay", "base_price_per_hour": "25.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        listing = self.client.get(reverse("court-list"))
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual([court["name"] for court in listing.data], ["Center court"])
        self.assertEqual(listing.data[0]["base_price_per_hour"], "25.00")

    def test_create_coach_without_bio(self) -> None:
        response = self.client.post(
            reverse("coach-list"),
            {"name": "Marat", "hourly_rate": "35.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Coach.objects.get().bio, "")

    def test_equipment_needs_quantity(self) -> None:
        response = self.client.post(
            reverse("equipment-list"),
            {"name": "Racket", "price_per_use": "5.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("total_quantity", response.data)

    def test_negative_price_is_rejected(self) -> None:
        response = self.client.post(
            reverse("court-list"),
            {"name": "Broken", "base_price_per_hour": "-1.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_retrieve_and_delete_equipment(self) -> None:
        equipment = Equipment.objects.create(name="Shoes", total_quantity=8, price_per_use=Decimal("3.00"))
        url = reverse("equipment-detail", kwargs={"pk": equipment.pk})

        self.assertEqual(self.client.get(url).data["total_quantity"], 8)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Equipment.objects.exists())

    def test_courts_cannot_be_updated(self) -> None:
        court = Court.objects.create(name="Court 1", base_price_per_hour=Decimal("20.00"))

        response = self.client.patch(
            reverse("court-detail", kwargs={"pk": court.pk}),
            {"name": "Renamed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)


class SeedCatalogCommandTests(APITestCase):
    def test_seed_is_idempotent(self) -> None:
        call_command("seed_catalog", stdout=StringIO())
        counts = (Court.objects.count(), Coach.objects.count(), Equipment.objects.count(), PricingRule.objects.count())

        call_command("seed_catalog", stdout=StringIO())

        self.assertTrue(all(counts))
        self.assertEqual(
            (Court.objects.count(), Coach.objects.count(), Equipment.objects.count(), PricingRule.objects.count()),
            counts,
        )
