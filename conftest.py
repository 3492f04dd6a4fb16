"""Shared pytest fixtures: a small catalog to book against."""

from __future__ import annotations

from decimal import Decimal

import pytest

from apps.catalog.models import Coach, Court, Equipment


@pytest.fixture
def court(db):
    return Court.objects.create(name="Court 1", court_type="indoor", base_price_per_hour=Decimal("20.00"))


@pytest.fixture
def coach(db):
    return Coach.objects.create(name="Anna", bio="Junior groups", hourly_rate=Decimal("30.00"))


@pytest.fixture
def rackets(db):
    return Equipment.objects.create(name="Racket", total_quantity=5, price_per_use=Decimal("5.00"))
