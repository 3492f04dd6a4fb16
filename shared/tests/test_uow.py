"""Tests for event publishing around the unit of work."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent


@dataclass
class Recorded(DomainEvent):
    pass


@pytest.fixture
def bus_with_sink():
    received = []
    bus = MessageBus()
    bus.register_event_handler(Recorded, received.append)
    return bus, received


@pytest.mark.django_db
def test_events_are_published_after_commit(bus_with_sink, django_capture_on_commit_callbacks):
    bus, received = bus_with_sink

    with django_capture_on_commit_callbacks(execute=True):
        with DjangoUnitOfWork(bus=bus) as uow:
            uow.record(Recorded(aggregate_id=1))
            assert uow.pending_events
            assert received == []

    assert [event.aggregate_id for event in received] == [1]


@pytest.mark.django_db
def test_rollback_discards_events(bus_with_sink, django_capture_on_commit_callbacks):
    bus, received = bus_with_sink

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork(bus=bus) as uow:
                uow.record(Recorded(aggregate_id=2))
                raise RuntimeError("abort")

    assert callbacks == []
    assert received == []
