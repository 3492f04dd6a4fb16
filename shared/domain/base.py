"""
Base Domain Classes

- ValueObject: immutable, compared by value
- DomainEvent: a fact recorded by a unit of work and published after commit
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """Frozen dataclass base; equality is field equality, there is no id"""


@dataclass
class DomainEvent:
    """
    Something that happened to an aggregate

    ``aggregate_id`` is the primary key of the row the event is about.
    Subclasses add their payload fields and extend ``to_dict``.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    aggregate_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event_id': str(self.event_id),
            'event_type': type(self).__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': self.aggregate_id,
        }
