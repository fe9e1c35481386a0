"""
Base classes and protocols for campus-tracker modules.

Modules are plug-ins that add behavior on top of the EntityStore.
"""

from abc import ABC, abstractmethod


class CampusModule(ABC):
    """
    Base class for campus modules.

    A module:
    - Receives messages from the Message Bus
    - Reads entities from the EntityStore
    - Maintains its own derived state
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier for this module type."""
        pass

    @abstractmethod
    def attach(self, bus, store) -> None:
        """
        Attach the module to the kernel.

        Register message subscriptions and capture references to bus and store.

        Args:
            bus: MessageBus instance
            store: EntityStore instance
        """
        pass
