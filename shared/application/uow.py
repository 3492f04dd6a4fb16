"""
Unit of Work

One booking or cancellation is one unit of work: a single database
transaction plus the domain events it produced. Events are held until
the transaction commits and are dropped if it rolls back, so subscribers
never hear about state that was not persisted.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging

from django.db import DEFAULT_DB_ALIAS, transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Context manager protocol: commit on a clean exit, roll back otherwise"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()

    @abstractmethod
    def commit(self):
        raise NotImplementedError

    @abstractmethod
    def rollback(self):
        raise NotImplementedError

    @abstractmethod
    def record(self, event: DomainEvent):
        """Queue ``event`` for publication once the work is committed"""
        raise NotImplementedError


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    ``transaction.atomic`` on one database alias

    Reads and writes issued against ``uow.using`` inside the block share
    the transaction. Raising out of the block undoes all of them.

        with DjangoUnitOfWork() as uow:
            booking = Booking.objects.using(uow.using).create(...)
            uow.record(BookingCreated(...))

    When the block is nested in an outer atomic block (tests, or a caller
    owning the transaction) publication waits for the outermost commit.
    """

    def __init__(self, using: Optional[str] = None, bus=None):
        self.using = using or DEFAULT_DB_ALIAS
        self._bus = bus
        self._events: List[DomainEvent] = []
        self._atomic = None

    def __enter__(self):
        self._atomic = transaction.atomic(using=self.using)
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            atomic, self._atomic = self._atomic, None
            if atomic is not None:
                atomic.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        events, self._events = self._events, []
        logger.debug(f"Unit of work on '{self.using}' done, {len(events)} event(s) waiting for commit")
        if events:
            transaction.on_commit(lambda: self._publish(events), using=self.using)

    def rollback(self):
        logger.warning(f"Unit of work on '{self.using}' rolled back, dropping {len(self._events)} event(s)")
        self._events = []

    def record(self, event: DomainEvent):
        self._events.append(event)
        logger.debug(f"Recorded {type(event).__name__} for aggregate {event.aggregate_id}")

    @property
    def pending_events(self) -> List[DomainEvent]:
        return list(self._events)

    def _publish(self, events: List[DomainEvent]):
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.debug(f"Publishing {len(events)} event(s) from '{self.using}'")
        try:
            bus.publish_events(events)
        except Exception as e:
            # The transaction is already committed; only report.
            logger.error(f"Publishing events failed: {e}", exc_info=True)
