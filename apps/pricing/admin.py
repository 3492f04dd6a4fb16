"""Admin registration for pricing rules."""

from __future__ import annotations

from django.contrib import admin

from .models import PricingRule


@admin.register(PricingRule)
class PricingRuleAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "rule_type", "value", "is_active", "conditions", "created_at")
    list_filter = ("rule_type", "is_active")
    list_editable = ("is_active",)
    search_fields = ("name",)
    readonly_fields = ("created_at",)
    actions = ["activate", "deactivate"]

    @admin.action(description="Activate selected rules")
    def activate(self, request, queryset):  # type: ignore
        queryset.update(is_active=True)

    @admin.action(description="Deactivate selected rules")
    def deactivate(self, request, queryset):  # type: ignore
        queryset.update(is_active=False)
