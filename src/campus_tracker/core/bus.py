"""
Message Bus for campus-wide change notifications.

The store announces entity changes ("person.added", "location.added", ...) and the
modules keep their derived state in sync by subscribing to the types they care about.
Dispatch is synchronous, in subscription order.
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


@dataclass
class Message:
    """
    A change notification.

    Attributes:
        type: What changed (e.g., "person.removed", "people.replaced")
        source: Who published it (e.g., "store")
        location_id: Location concerned, if any
        person_id: Person concerned, if any
        payload: Extra data (e.g., {"count": 7} for a people import)
        timestamp: When the message was created (UTC)
    """

    type: str
    source: str
    location_id: Optional[str] = None
    person_id: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


MessageHandler = Callable[[Message], None]


class MessageBus:
    """
    Synchronous dispatcher keyed by message type.

    A failing handler is logged and skipped; the publisher and the remaining handlers
    are unaffected.
    """

    def __init__(self) -> None:
        self._handlers: List[Tuple[Optional[str], MessageHandler]] = []

    def subscribe(self, handler: MessageHandler, message_type: Optional[str] = None) -> None:
        """
        Register a handler.

        Args:
            handler: Called with every matching Message
            message_type: Only deliver this type (None = every message)
        """
        self._handlers.append((message_type, handler))
        logger.debug(f"Subscribed {handler.__name__} to {message_type or 'all messages'}")

    def publish(self, message: Message) -> None:
        """
        Deliver a message to every matching handler.

        Args:
            message: The message to publish
        """
        logger.debug(f"Publishing {message.type} from {message.source}")

        for message_type, handler in self._handlers:
            if message_type is not None and message_type != message.type:
                continue
            try:
                handler(message)
            except Exception as e:
                logger.error(
                    f"Handler {handler.__name__} failed on {message.type}: {e}",
                    exc_info=True,
                )
