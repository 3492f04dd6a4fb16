"""URL routing for pricing rules."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import PricingRuleViewSet

router = DefaultRouter()
router.register(r"rules", PricingRuleViewSet, basename="pricing-rule")

urlpatterns = [
    path("", include(router.urls)),
]
