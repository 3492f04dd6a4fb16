"""Serializers for the resource catalog."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Coach, Court, Equipment


class CourtSerializer(serializers.ModelSerializer):
    class Meta:
        model = Court
        fields = ["id", "name", "court_type", "base_price_per_hour"]
        read_only_fields = ["id"]


class CoachSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coach
        fields = ["id", "name", "bio", "hourly_rate"]
        read_only_fields = ["id"]
        extra_kwargs = {
            "bio": {"required": False, "allow_blank": True},
        }


class EquipmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Equipment
        fields = ["id", "name", "total_quantity", "price_per_use"]
        read_only_fields = ["id"]
