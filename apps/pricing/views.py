"""API views for pricing rules."""

from __future__ import annotations

import logging

from rest_framework import mixins, viewsets  # type: ignore

from .models import PricingRule
from .serializers import PricingRuleSerializer, PricingRuleToggleSerializer

logger = logging.getLogger(__name__)


class PricingRuleViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Pricing rule administration: create, list, toggle and delete."""

    queryset = PricingRule.objects.all()
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "partial_update":
            return PricingRuleToggleSerializer
        return PricingRuleSerializer

    def perform_create(self, serializer):  # type: ignore
        rule = serializer.save()
        logger.info(f"Pricing rule {rule.id} '{rule.name}' created ({rule.rule_type} {rule.value})")

    def perform_update(self, serializer):  # type: ignore
        rule = serializer.save()
        logger.info(f"Pricing rule {rule.id} '{rule.name}' is_active={rule.is_active}")
