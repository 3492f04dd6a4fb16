"""
Message Bus

Routes booking commands to their single handler and fans domain events
out to every subscriber. Views talk to the bus, never to handlers
directly; handlers are wired once in ``BookingsConfig.ready()``.
"""

from typing import Any, Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Any], Any]
EventHandler = Callable[[DomainEvent], None]


class UnknownCommand(LookupError):
    """No handler is registered for a command type."""


class MessageBus:
    """
    Commands map to exactly one handler whose return value is passed back
    to the caller. Events may have any number of subscribers; a subscriber
    registered for a base event class also receives its subclasses.
    """

    def __init__(self):
        self._subscribers: Dict[Type[DomainEvent], List[EventHandler]] = {}
        self._routes: Dict[Type, CommandHandler] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """Subscribe ``handler`` to ``event_type``; repeated subscriptions are ignored."""
        subscribers = self._subscribers.setdefault(event_type, [])
        if handler in subscribers:
            return
        subscribers.append(handler)
        logger.debug(f"{_name(handler)} subscribed to {event_type.__name__}")

    def register_command_handler(self, command_type: Type, handler: CommandHandler):
        if command_type in self._routes:
            raise ValueError(f"{command_type.__name__} already has a handler")
        self._routes[command_type] = handler
        logger.debug(f"{command_type.__name__} routed to {_name(handler)}")

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._routes

    def clear(self):
        """Drop every route and subscription."""
        self._routes.clear()
        self._subscribers.clear()

    def handle_command(self, command: Any) -> Any:
        """
        Run the handler registered for ``type(command)`` and return its result

        Domain exceptions raised by the handler propagate unchanged.
        """
        name = type(command).__name__
        handler = self._routes.get(type(command))
        if handler is None:
            raise UnknownCommand(f"No handler registered for command {name}")

        logger.debug(f"Dispatching {name}")
        try:
            return handler(command)
        except Exception as e:
            logger.info(f"{name} rejected: {e}")
            raise

    def subscribers_for(self, event: DomainEvent) -> List[EventHandler]:
        found: List[EventHandler] = []
        for klass in type(event).__mro__:
            for handler in self._subscribers.get(klass, ()):
                if handler not in found:
                    found.append(handler)
        return found

    def publish_events(self, events: List[DomainEvent]):
        """
        Deliver each event to its subscribers in registration order

        A failing subscriber is logged and skipped; the rest still run.
        """
        for event in events:
            name = type(event).__name__
            subscribers = self.subscribers_for(event)
            if not subscribers:
                logger.debug(f"{name} has no subscribers")
                continue

            for handler in subscribers:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Subscriber {_name(handler)} failed on {name} {event.event_id}: {e}", exc_info=True)


def _name(handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


message_bus = MessageBus()
