"""Pricing engine.

Turns requested resources and a booking window into a final price:

1. Base cost from the catalog. Courts and coaches are billed per hour of
   the window (fractional hours, whole minutes); equipment is a flat
   ``price_per_use * quantity`` per booking.
2. Active pricing rules evaluated at the start instant, in the facility
   time zone, and folded into one adjustment.
3. ``base * multiplier + flat_fees`` rounded half-up to cents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from django.utils import timezone  # type: ignore

from apps.catalog.exceptions import ResourceNotFound
from apps.catalog.models import ResourceType, resource_model
from shared.domain.value_objects import ResourceRequest, TimeRange

from .domain.rules import Rule, fold_rules
from .exceptions import InvalidInterval
from .models import PricingRule

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class PriceQuote:
    base_total: Decimal
    multiplier: Decimal
    flat_fees: Decimal
    applied_rules: Tuple[str, ...]
    total: Decimal


class PricingEngine:
    """Computes booking prices from the catalog and the active rule set.

    The engine only reads. Pass ``using`` to run its queries against a
    specific database alias, e.g. the one of an open unit of work.
    """

    def __init__(self, using: Optional[str] = None, tz: Optional[tzinfo] = None) -> None:
        self.using = using
        self.tz = tz

    def _manager(self, model):
        return model.objects.using(self.using) if self.using else model.objects

    def _window(self, start: datetime, end: datetime) -> TimeRange:
        if end <= start:
            raise InvalidInterval("Invalid duration: end_time must be after start_time")
        window = TimeRange(start, end)
        if window.duration_minutes == 0:
            raise InvalidInterval("Invalid duration: window is shorter than one minute")
        return window

    def _local(self, instant: datetime) -> datetime:
        if timezone.is_naive(instant):
            return instant
        return timezone.localtime(instant, self.tz)

    def base_cost(self, item: ResourceRequest, window: TimeRange) -> Decimal:
        model = resource_model(item.resource_type)
        if model is None:
            raise ResourceNotFound(item.resource_type, item.resource_id)
        resource = self._manager(model).filter(pk=item.resource_id).first()
        if resource is None:
            raise ResourceNotFound(item.resource_type, item.resource_id)

        if item.resource_type == ResourceType.EQUIPMENT:
            return resource.price_per_use * item.quantity
        return resource.hourly_price * window.duration_hours

    def active_rules(self) -> List[Rule]:
        return [rule.to_domain() for rule in self._manager(PricingRule).active().order_by("id")]

    def quote(
        self,
        items: Iterable[ResourceRequest],
        start: datetime,
        end: datetime,
    ) -> PriceQuote:
        window = self._window(start, end)

        base_total = sum((self.base_cost(item, window) for item in items), Decimal("0"))

        adjustment, applied = fold_rules(self.active_rules(), self._local(start))
        total = adjustment.apply_to(base_total).quantize(CENT, rounding=ROUND_HALF_UP)

        logger.debug(
            f"Priced window {window}: base={base_total} multiplier={adjustment.multiplier} "
            f"flat_fees={adjustment.flat_fees} rules={list(applied)} total={total}"
        )
        return PriceQuote(
            base_total=base_total,
            multiplier=adjustment.multiplier,
            flat_fees=adjustment.flat_fees,
            applied_rules=applied,
            total=total,
        )

    def compute_price(
        self,
        items: Sequence[ResourceRequest],
        start: datetime,
        end: datetime,
    ) -> Decimal:
        return self.quote(items, start, end).total
