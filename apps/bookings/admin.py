"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, BookingItem, WaitlistEntry


class BookingItemInline(admin.TabularInline):
    model = BookingItem
    extra = 0
    fields = ("resource_type", "resource_id", "quantity", "start_time", "end_time", "status")
    readonly_fields = fields
    can_delete = False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user_name",
        "start_time",
        "end_time",
        "total_price",
        "status",
        "created_at",
    )
    list_filter = ("status", "start_time")
    search_fields = ("user_name",)
    readonly_fields = ("total_price", "created_at")
    inlines = [BookingItemInline]


@admin.register(WaitlistEntry)
class WaitlistEntryAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user_name",
        "resource_type",
        "resource_id",
        "start_time",
        "end_time",
        "status",
        "created_at",
        "notified_at",
    )
    list_filter = ("status", "resource_type")
    search_fields = ("user_name",)
    readonly_fields = ("created_at", "notified_at")
