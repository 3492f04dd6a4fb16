"""Pricing rule models."""

from __future__ import annotations

from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.rules import FLAT_FEE, MULTIPLIER, Rule, RuleConditions, make_effect


class PricingRuleQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class PricingRule(models.Model):
    """Conditional price adjustment managed by facility staff."""

    class RuleType(models.TextChoices):
        MULTIPLIER = MULTIPLIER, _("Multiplier")
        FLAT_FEE = FLAT_FEE, _("Flat fee")

    name = models.CharField(max_length=120)
    rule_type = models.CharField(max_length=20, choices=RuleType.choices)
    value = models.DecimalField(max_digits=10, decimal_places=4)
    is_active = models.BooleanField(default=True)
    conditions = models.JSONField(
        default=dict,
        blank=True,
        help_text=_("Optional keys: days_of_week (0=Sunday..6=Saturday), start_hour, end_hour."),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = PricingRuleQuerySet.as_manager()

    class Meta:
        verbose_name = _("Pricing rule")
        verbose_name_plural = _("Pricing rules")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["is_active"], name="pricing_rule_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.rule_type} {self.value})"

    def clean(self) -> None:
        try:
            RuleConditions.from_dict(self.conditions).validate()
        except (TypeError, ValueError) as exc:
            raise ValidationError({"conditions": str(exc)})

    def to_domain(self) -> Rule:
        return Rule(
            name=self.name,
            effect=make_effect(self.rule_type, self.value),
            conditions=RuleConditions.from_dict(self.conditions),
        )
