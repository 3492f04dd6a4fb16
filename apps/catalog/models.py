"""Resource catalog models: courts, coaches and equipment."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple, Type

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class ResourceType(models.TextChoices):
    COURT = "court", _("Court")
    COACH = "coach", _("Coach")
    EQUIPMENT = "equipment", _("Equipment")


class Court(models.Model):
    """Playing court, booked exclusively and billed per hour."""

    name = models.CharField(max_length=120)
    court_type = models.CharField(
        max_length=60,
        blank=True,
        help_text=_("Surface or kind of court, e.g. indoor, clay."),
    )
    base_price_per_hour = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        verbose_name = _("Court")
        verbose_name_plural = _("Courts")
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name

    @property
    def hourly_price(self) -> Decimal:
        return self.base_price_per_hour


class Coach(models.Model):
    """Coach, booked exclusively and billed per hour."""

    name = models.CharField(max_length=120)
    bio = models.TextField(blank=True)
    hourly_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        verbose_name = _("Coach")
        verbose_name_plural = _("Coaches")
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name

    @property
    def hourly_price(self) -> Decimal:
        return self.hourly_rate


class Equipment(models.Model):
    """Pooled equipment, charged once per booking per unit."""

    name = models.CharField(max_length=120)
    total_quantity = models.PositiveIntegerField()
    price_per_use = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        verbose_name = _("Equipment")
        verbose_name_plural = _("Equipment")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} (x{self.total_quantity})"


RESOURCE_MODELS: Dict[str, Type[models.Model]] = {
    ResourceType.COURT: Court,
    ResourceType.COACH: Coach,
    ResourceType.EQUIPMENT: Equipment,
}


def resource_model(resource_type: str) -> Optional[Type[models.Model]]:
    return RESOURCE_MODELS.get(resource_type)


def resolve_resource_names(
    keys: Iterable[Tuple[str, int]],
    *,
    using: Optional[str] = None,
) -> Dict[Tuple[str, int], str]:
    """Map (resource_type, resource_id) pairs to catalog names.

    Pairs whose catalog row no longer exists are left out of the result.
    """

    wanted: Dict[str, set] = {}
    for resource_type, resource_id in keys:
        wanted.setdefault(resource_type, set()).add(resource_id)

    names: Dict[Tuple[str, int], str] = {}
    for resource_type, ids in wanted.items():
        model = resource_model(resource_type)
        if model is None:
            continue
        manager = model.objects.using(using) if using else model.objects
        for pk, name in manager.filter(pk__in=ids).values_list("pk", "name"):
            names[(resource_type, pk)] = name
    return names
