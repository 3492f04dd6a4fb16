"""
Equipment inventory

Courts and coaches are exclusive and are guarded by the database
constraint installed in migration 0002, so nothing is checked for them
here; a conflict surfaces when the booking item is inserted.

Equipment is pooled. No database constraint can express
"sum of overlapping quantities <= total_quantity", so the pool is checked
explicitly. The check is only race free inside a unit of work: the
equipment rows are locked (SELECT ... FOR UPDATE, ascending id) before
their usage is summed, which serializes concurrent bookings of the same
equipment until the first one commits or rolls back.
"""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional

from django.db.models import Sum

from apps.catalog.exceptions import ResourceNotFound
from apps.catalog.models import Equipment, ResourceType
from apps.bookings.exceptions import InsufficientInventory
from apps.bookings.models import BookingItem, BookingStatus
from shared.domain.value_objects import ResourceRequest, TimeRange
from shared.infrastructure.locking import lock_queryset_if_possible


@dataclass
class EquipmentPool:
    """
    Capacity of one equipment id over a requested window

    ``used`` is the sum of quantities of confirmed items whose window
    overlaps the requested one.
    """
    equipment_id: int
    total_quantity: int
    used: int = 0

    @property
    def available(self) -> int:
        return max(self.total_quantity - self.used, 0)

    def can_allocate(self, quantity: int) -> bool:
        return self.used + quantity <= self.total_quantity

    def allocate(self, quantity: int):
        """
        Reserve units from the pool

        Raises:
            InsufficientInventory: If the pool cannot cover the quantity
        """
        if not self.can_allocate(quantity):
            raise InsufficientInventory(self.equipment_id, quantity, self.available)
        self.used += quantity


def requested_equipment(items: Iterable[ResourceRequest]) -> Dict[int, int]:
    """Total quantity per equipment id, in first-requested order"""
    totals: Dict[int, int] = OrderedDict()
    for item in items:
        if item.resource_type == ResourceType.EQUIPMENT:
            totals[item.resource_id] = totals.get(item.resource_id, 0) + item.quantity
    return totals


class InventoryChecker:
    """Availability check for the pooled resources of a booking request"""

    def __init__(self, using: Optional[str] = None):
        self.using = using

    def _manager(self, model):
        return model.objects.using(self.using) if self.using else model.objects

    def usage(self, equipment_id: int, window: TimeRange) -> int:
        used = (
            self._manager(BookingItem)
            .filter(status=BookingStatus.CONFIRMED)
            .for_resource(ResourceType.EQUIPMENT, equipment_id)
            .overlapping(window)
            .aggregate(used=Sum('quantity'))['used']
        )
        return used or 0

    def load_pools(self, equipment_ids: Iterable[int], window: TimeRange) -> Dict[int, EquipmentPool]:
        """Lock the equipment rows and load their pools for the window"""
        ids = sorted(set(equipment_ids))
        rows = lock_queryset_if_possible(
            self._manager(Equipment).filter(pk__in=ids).order_by('pk')
        )
        return {
            equipment.pk: EquipmentPool(
                equipment_id=equipment.pk,
                total_quantity=equipment.total_quantity,
                used=self.usage(equipment.pk, window),
            )
            for equipment in rows
        }

    def check(self, items: Iterable[ResourceRequest], start: datetime, end: datetime):
        """
        Ensure every requested equipment id has enough free units

        Raises:
            ResourceNotFound: If an equipment id is not in the catalog
            InsufficientInventory: If a pool is exhausted for the window
        """
        requested = requested_equipment(items)
        if not requested:
            return

        window = TimeRange(start, end)
        pools = self.load_pools(requested.keys(), window)

        for equipment_id, quantity in requested.items():
            pool = pools.get(equipment_id)
            if pool is None:
                raise ResourceNotFound(ResourceType.EQUIPMENT, equipment_id)
            pool.allocate(quantity)
