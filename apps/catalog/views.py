"""API views for the resource catalog."""

from __future__ import annotations

from rest_framework import mixins, viewsets  # type: ignore

from .models import Coach, Court, Equipment
from .serializers import CoachSerializer, CourtSerializer, EquipmentSerializer


class CatalogViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """List, create, retrieve and delete catalog entries.

    Deleting a resource keeps existing booking items intact; their
    resource name resolves to null in booking history afterwards.
    """


class CourtViewSet(CatalogViewSet):
    queryset = Court.objects.all()
    serializer_class = CourtSerializer


class CoachViewSet(CatalogViewSet):
    queryset = Coach.objects.all()
    serializer_class = CoachSerializer


class EquipmentViewSet(CatalogViewSet):
    queryset = Equipment.objects.all()
    serializer_class = EquipmentSerializer
