"""Integration tests for pricing rule administration."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.models import Court
from apps.pricing.models import PricingRule


class PricingRuleAPITests(APITestCase):
    def setUp(self) -> None:
        self.list_url = reverse("pricing-rule-list")

    def _create(self, **overrides):
        payload = {
            "name": "Weekend",
            "type": "multiplier",
            "value": "1.2",
            "conditions": {"days_of_week": [0, 6]},
        }
        payload.update(overrides)
        return self.client.post(self.list_url, payload, format="json")

    def test_create_rule(self) -> None:
        response = self._create()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        rule = PricingRule.objects.get()
        self.assertEqual(rule.rule_type, PricingRule.RuleType.MULTIPLIER)
        self.assertTrue(rule.is_active)
        self.assertEqual(rule.conditions, {"days_of_week": [0, 6]})
        self.assertEqual(response.data["type"], "multiplier")

    def test_conditions_may_be_a_json_string(self) -> None:
        response = self._create(type="flat_fee", value="2.00", conditions='{"start_hour": 18, "end_hour": 21}')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(PricingRule.objects.get().conditions, {"start_hour": 18, "end_hour": 21})

    def test_conditions_default_to_empty(self) -> None:
        response = self._create(conditions=None)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        response = self.client.post(self.list_url, {"name": "Always", "type": "flat_fee", "value": "1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(PricingRule.objects.get(name="Always").conditions, {})

    def test_invalid_conditions_are_rejected(self) -> None:
        for conditions in ({"days_of_week": [9]}, {"start_hour": 18}, "not json", [1, 2]):
            response = self._create(conditions=conditions)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, conditions)
        self.assertFalse(PricingRule.objects.exists())

    def test_unknown_type(self) -> None:
        response = self._create(type="discount")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_toggle_rule(self) -> None:
        rule_id = self._create().data["id"]
        url = reverse("pricing-rule-detail", kwargs={"pk": rule_id})

        response = self.client.patch(url, {"is_active": False}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(PricingRule.objects.get(pk=rule_id).is_active)

    def test_toggle_requires_flag(self) -> None:
        rule_id = self._create().data["id"]

        response = self.client.patch(reverse("pricing-rule-detail", kwargs={"pk": rule_id}), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_put_is_not_allowed(self) -> None:
        rule_id = self._create().data["id"]

        response = self.client.put(
            reverse("pricing-rule-detail", kwargs={"pk": rule_id}),
            {"name": "x", "type": "multiplier", "value": "2"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_delete_rule(self) -> None:
        rule_id = self._create().data["id"]

        response = self.client.delete(reverse("pricing-rule-detail", kwargs={"pk": rule_id}))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(PricingRule.objects.exists())

    def test_disabled_rule_stops_affecting_quotes(self) -> None:
        court = Court.objects.create(name="Court 1", base_price_per_hour=Decimal("20.00"))
        rule_id = self._create(conditions={}).data["id"]
        quote = {
            "start_time": "2025-03-03T10:00:00Z",
            "end_time": "2025-03-03T12:00:00Z",
            "items": [{"resource_type": "court", "resource_id": court.id}],
        }

        before = self.client.post(reverse("booking-quote"), quote, format="json")
        self.client.patch(reverse("pricing-rule-detail", kwargs={"pk": rule_id}), {"is_active": False}, format="json")
        after = self.client.post(reverse("booking-quote"), quote, format="json")

        self.assertEqual(before.data["total_price"], "48.00")
        self.assertEqual(after.data["total_price"], "40.00")
