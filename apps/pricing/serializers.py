"""Serializers for pricing rules."""

from __future__ import annotations

import json

from rest_framework import serializers  # type: ignore

from .domain.rules import RuleConditions
from .models import PricingRule


class RuleConditionsField(serializers.JSONField):
    """Conditions object; a JSON-encoded string is accepted as well."""

    def validate_empty_values(self, data):  # type: ignore
        if data is None:
            return True, {}
        return super().validate_empty_values(data)

    def to_internal_value(self, data):  # type: ignore
        if isinstance(data, str):
            try:
                data = json.loads(data) if data.strip() else {}
            except ValueError:
                raise serializers.ValidationError("Conditions must be a JSON object.")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise serializers.ValidationError("Conditions must be a JSON object.")
        try:
            conditions = RuleConditions.from_dict(data)
            conditions.validate()
        except (TypeError, ValueError) as exc:
            raise serializers.ValidationError(str(exc))
        return conditions.to_dict()


class PricingRuleSerializer(serializers.ModelSerializer):
    type = serializers.ChoiceField(source="rule_type", choices=PricingRule.RuleType.choices)
    conditions = RuleConditionsField(default=dict)

    class Meta:
        model = PricingRule
        fields = ["id", "name", "type", "value", "is_active", "conditions", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate(self, attrs):  # type: ignore
        if attrs.get("rule_type") == PricingRule.RuleType.MULTIPLIER and attrs.get("value") is not None:
            if attrs["value"] < 0:
                raise serializers.ValidationError({"value": "Multiplier must not be negative."})
        return attrs


class PricingRuleToggleSerializer(serializers.ModelSerializer):
    """Only the active flag of an existing rule can change."""

    class Meta:
        model = PricingRule
        fields = ["id", "is_active"]
        read_only_fields = ["id"]
        extra_kwargs = {"is_active": {"required": True}}

    def validate(self, attrs):  # type: ignore
        if "is_active" not in attrs:
            raise serializers.ValidationError({"is_active": "This field is required."})
        return attrs
