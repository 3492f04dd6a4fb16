"""
Pricing rule domain

A pricing rule is a tagged variant, either ``Multiplier`` or ``FlatFee``,
guarded by ``RuleConditions``. Pricing folds every applicable rule into a
single ``Adjustment``:

    fold(rules.filter(applies), Adjustment(multiplier=1, flat_fees=0))

Multipliers combine by multiplication (1.2 and 1.5 give 1.8) and flat
fees by addition. The adjustment turns a base cost into the final price
as ``base * multiplier + flat_fees``.

Conditions are evaluated against the start instant of a booking only.
A peak window of 18-21 matches a booking starting at 20:00 even when the
booking runs past 21:00.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from functools import reduce
from typing import Any, FrozenSet, Iterable, Mapping, Optional, Tuple, Union

from shared.domain.base import ValueObject

MULTIPLIER = 'multiplier'
FLAT_FEE = 'flat_fee'

DAYS_IN_WEEK = 7
HOURS_IN_DAY = 24


def day_of_week(instant: datetime) -> int:
    """Day of week with 0=Sunday .. 6=Saturday"""
    return instant.isoweekday() % DAYS_IN_WEEK


@dataclass(frozen=True)
class RuleConditions(ValueObject):
    """
    Predicate over the start instant of a booking

    Absent clauses are wildcards. The hour clause is only active when both
    ``start_hour`` and ``end_hour`` are given and is half-open:
    ``start_hour <= hour < end_hour``.
    """
    days_of_week: Optional[FrozenSet[int]] = None
    start_hour: Optional[int] = None
    end_hour: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'RuleConditions':
        data = data or {}
        days = data.get('days_of_week')
        start_hour = data.get('start_hour')
        end_hour = data.get('end_hour')
        return cls(
            days_of_week=frozenset(int(d) for d in days) if days is not None else None,
            start_hour=int(start_hour) if start_hour is not None else None,
            end_hour=int(end_hour) if end_hour is not None else None,
        )

    def validate(self):
        """Raise ValueError when a clause is out of range or half specified"""
        if self.days_of_week is not None:
            bad = sorted(d for d in self.days_of_week if not 0 <= d < DAYS_IN_WEEK)
            if bad:
                raise ValueError(f"days_of_week must be within 0..6 (0=Sunday), got {bad}")
        for name in ('start_hour', 'end_hour'):
            hour = getattr(self, name)
            if hour is not None and not 0 <= hour < HOURS_IN_DAY:
                raise ValueError(f"{name} must be within 0..23, got {hour}")
        if (self.start_hour is None) != (self.end_hour is None):
            raise ValueError("start_hour and end_hour must be given together")

    @property
    def has_hour_window(self) -> bool:
        return self.start_hour is not None and self.end_hour is not None

    def matches(self, start: datetime) -> bool:
        if self.days_of_week is not None and day_of_week(start) not in self.days_of_week:
            return False
        if self.has_hour_window and not (self.start_hour <= start.hour < self.end_hour):
            return False
        return True

    def to_dict(self) -> dict:
        data = {}
        if self.days_of_week is not None:
            data['days_of_week'] = sorted(self.days_of_week)
        if self.start_hour is not None:
            data['start_hour'] = self.start_hour
        if self.end_hour is not None:
            data['end_hour'] = self.end_hour
        return data


@dataclass(frozen=True)
class Adjustment(ValueObject):
    """Fold accumulator: combined multiplier and summed flat fees"""
    multiplier: Decimal = Decimal(1)
    flat_fees: Decimal = Decimal(0)

    def apply_to(self, base: Decimal) -> Decimal:
        return base * self.multiplier + self.flat_fees


@dataclass(frozen=True)
class Multiplier(ValueObject):
    value: Decimal

    def combine(self, adjustment: Adjustment) -> Adjustment:
        return Adjustment(adjustment.multiplier * self.value, adjustment.flat_fees)


@dataclass(frozen=True)
class FlatFee(ValueObject):
    value: Decimal

    def combine(self, adjustment: Adjustment) -> Adjustment:
        return Adjustment(adjustment.multiplier, adjustment.flat_fees + self.value)


Effect = Union[Multiplier, FlatFee]

EFFECTS = {
    MULTIPLIER: Multiplier,
    FLAT_FEE: FlatFee,
}


def make_effect(rule_type: str, value) -> Effect:
    try:
        effect_cls = EFFECTS[rule_type]
    except KeyError:
        raise ValueError(f"Unknown rule type: {rule_type}") from None
    return effect_cls(Decimal(str(value)))


@dataclass(frozen=True)
class Rule(ValueObject):
    """An active pricing rule as seen by the pricing engine"""
    name: str
    effect: Effect
    conditions: RuleConditions = field(default_factory=RuleConditions)

    def applies_to(self, start: datetime) -> bool:
        return self.conditions.matches(start)


def fold_rules(rules: Iterable[Rule], start: datetime) -> Tuple[Adjustment, Tuple[str, ...]]:
    """Combine every rule that applies at ``start``

    Returns the resulting adjustment and the names of the applied rules
    in evaluation order.
    """
    applicable = [rule for rule in rules if rule.applies_to(start)]
    adjustment = reduce(lambda acc, rule: rule.effect.combine(acc), applicable, Adjustment())
    return adjustment, tuple(rule.name for rule in applicable)
