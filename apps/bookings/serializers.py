"""Serializers for the booking domain."""

from __future__ import annotations

from typing import List

from rest_framework import serializers  # type: ignore

from apps.catalog.models import ResourceType
from shared.domain.value_objects import ResourceRequest

from .models import Booking, BookingItem, WaitlistEntry


class ResourceRequestSerializer(serializers.Serializer):
    """One requested resource; quantity only matters for equipment."""

    resource_type = serializers.ChoiceField(choices=ResourceType.choices)
    resource_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, default=1)


class BookingWindowMixin:
    def validate(self, attrs):  # type: ignore
        if attrs["end_time"] <= attrs["start_time"]:
            raise serializers.ValidationError({"end_time": "end_time must be after start_time."})
        return attrs


class QuoteSerializer(BookingWindowMixin, serializers.Serializer):
    """Resources and a window to price without booking."""

    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    items = ResourceRequestSerializer(many=True, allow_empty=False)

    def resource_requests(self) -> List[ResourceRequest]:
        return [
            ResourceRequest(
                resource_type=item["resource_type"],
                resource_id=item["resource_id"],
                quantity=item["quantity"],
            )
            for item in self.validated_data["items"]
        ]


class BookingCreateSerializer(QuoteSerializer):
    """Booking request: who books, the shared window and the resources."""

    user_name = serializers.CharField(max_length=150)


class WaitlistEntrySerializer(BookingWindowMixin, serializers.ModelSerializer):
    resource_type = serializers.ChoiceField(choices=ResourceType.choices)
    resource_id = serializers.IntegerField(min_value=1)

    class Meta:
        model = WaitlistEntry
        fields = [
            "id",
            "user_name",
            "resource_type",
            "resource_id",
            "start_time",
            "end_time",
            "status",
            "created_at",
            "notified_at",
        ]
        read_only_fields = ["id", "status", "created_at", "notified_at"]


class BusySlotSerializer(serializers.ModelSerializer):
    class Meta:
        model = BookingItem
        fields = ["start_time", "end_time", "resource_type", "resource_id"]
        read_only_fields = fields


class BookingHistoryItemSerializer(serializers.ModelSerializer):
    resource_name = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = BookingItem
        fields = ["id", "resource_type", "resource_id", "resource_name", "quantity", "status"]
        read_only_fields = fields


class BookingHistorySerializer(serializers.ModelSerializer):
    """A past or upcoming booking with its items."""

    items = BookingHistoryItemSerializer(source="item_list", many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_name",
            "start_time",
            "end_time",
            "total_price",
            "status",
            "created_at",
            "items",
        ]
        read_only_fields = fields


class BookingHistoryQuerySerializer(serializers.Serializer):
    user_name = serializers.CharField(max_length=150)
