"""Unit tests for rule conditions and the rule fold."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from apps.pricing.domain.rules import (
    Adjustment,
    FlatFee,
    Multiplier,
    Rule,
    RuleConditions,
    day_of_week,
    fold_rules,
    make_effect,
)

SATURDAY_10 = datetime(2025, 3, 1, 10)
SUNDAY_10 = datetime(2025, 3, 2, 10)
MONDAY_10 = datetime(2025, 3, 3, 10)


def test_day_of_week_counts_from_sunday():
    assert day_of_week(SUNDAY_10) == 0
    assert day_of_week(MONDAY_10) == 1
    assert day_of_week(SATURDAY_10) == 6


def test_multipliers_stack_multiplicatively():
    rules = [
        Rule("Weekend", Multiplier(Decimal("1.2"))),
        Rule("Peak", Multiplier(Decimal("1.5"))),
    ]

    adjustment, applied = fold_rules(rules, MONDAY_10)

    assert adjustment.apply_to(Decimal("100")) == Decimal("180.00")
    assert applied == ("Weekend", "Peak")


def test_flat_fees_are_added_after_multipliers():
    rules = [
        Rule("Lights", FlatFee(Decimal("2.50"))),
        Rule("Peak", Multiplier(Decimal("2"))),
        Rule("Towels", FlatFee(Decimal("1.00"))),
    ]

    adjustment, _ = fold_rules(rules, MONDAY_10)

    assert adjustment == Adjustment(multiplier=Decimal("2"), flat_fees=Decimal("3.50"))
    assert adjustment.apply_to(Decimal("10")) == Decimal("23.50")


def test_no_rules_leave_price_unchanged():
    adjustment, applied = fold_rules([], MONDAY_10)

    assert adjustment.apply_to(Decimal("40")) == Decimal("40")
    assert applied == ()


def test_day_condition():
    weekend = RuleConditions.from_dict({"days_of_week": [0, 6]})

    assert weekend.matches(SATURDAY_10)
    assert weekend.matches(SUNDAY_10)
    assert not weekend.matches(MONDAY_10)


def test_hour_window_checks_start_hour_only():
    peak = RuleConditions.from_dict({"start_hour": 18, "end_hour": 21})

    assert peak.matches(datetime(2025, 3, 3, 18))
    assert peak.matches(datetime(2025, 3, 3, 20, 59))
    assert not peak.matches(datetime(2025, 3, 3, 21))
    assert not peak.matches(datetime(2025, 3, 3, 17, 59))


def test_half_specified_hour_window_is_ignored_when_matching():
    conditions = RuleConditions.from_dict({"start_hour": 18})

    assert conditions.matches(MONDAY_10)
    with pytest.raises(ValueError):
        conditions.validate()


@pytest.mark.parametrize(
    "data",
    [
        {"days_of_week": [7]},
        {"start_hour": 24, "end_hour": 25},
        {"end_hour": 5},
    ],
)
def test_invalid_conditions(data):
    with pytest.raises(ValueError):
        RuleConditions.from_dict(data).validate()


def test_empty_conditions_always_match():
    conditions = RuleConditions.from_dict(None)

    assert conditions.matches(MONDAY_10)
    assert conditions.to_dict() == {}


def test_unknown_rule_type():
    with pytest.raises(ValueError):
        make_effect("discount", "0.9")
