"""Admin registration for the resource catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import Coach, Court, Equipment


@admin.register(Court)
class CourtAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "court_type", "base_price_per_hour")
    list_filter = ("court_type",)
    search_fields = ("name",)


@admin.register(Coach)
class CoachAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "hourly_rate")
    search_fields = ("name", "bio")


@admin.register(Equipment)
class EquipmentAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "total_quantity", "price_per_use")
    search_fields = ("name",)
