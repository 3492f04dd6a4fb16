"""URL routing for the resource catalog."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CoachViewSet, CourtViewSet, EquipmentViewSet

router = DefaultRouter()
router.register(r"courts", CourtViewSet, basename="court")
router.register(r"coaches", CoachViewSet, basename="coach")
router.register(r"equipment", EquipmentViewSet, basename="equipment")

urlpatterns = [
    path("", include(router.urls)),
]
