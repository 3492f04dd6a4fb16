"""FilterSet definitions for busy-slot listings."""

from __future__ import annotations

import django_filters  # type: ignore
from django.utils import timezone  # type: ignore

from apps.catalog.models import ResourceType
from shared.domain.value_objects import TimeRange

from .models import BookingItem


class BusySlotFilterSet(django_filters.FilterSet):
    """Confirmed items overlapping one calendar day, optionally for one resource.

    The resource narrows the listing only when both ``resource_type`` and
    ``resource_id`` are given; either one alone is ignored.
    """

    date = django_filters.DateFilter(method="filter_day", required=True)
    resource_type = django_filters.ChoiceFilter(method="filter_resource", choices=ResourceType.choices)
    resource_id = django_filters.NumberFilter(method="filter_resource")

    class Meta:
        model = BookingItem
        fields = ["date", "resource_type", "resource_id"]

    def filter_day(self, queryset, name, value):  # type: ignore
        # Day boundaries follow the facility time zone (TIME_ZONE setting).
        window = TimeRange.for_day(value, timezone.get_current_timezone())
        return queryset.overlapping(window)

    def filter_resource(self, queryset, name, value):  # type: ignore
        # Applied once, from the type filter, with the id read alongside it.
        if name != "resource_type":
            return queryset
        resource_id = self.form.cleaned_data.get("resource_id")
        if resource_id is None:
            return queryset
        return queryset.for_resource(value, int(resource_id))
