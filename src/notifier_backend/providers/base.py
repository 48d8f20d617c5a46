from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from notifier_backend.core.models import Message, Notifier, NotifierSecret


# PUBLIC_INTERFACE
class Provider(ABC):
    """Abstract base class for all notification providers."""

    type: str
    name: str

    # PUBLIC_INTERFACE
    @abstractmethod
    async def send(self, notifier: Notifier, body: bytes) -> Message:
        """Deliver one notification described by the raw body using the notifier's configuration.

        Raises a ProviderError subclass on failure; never returns a partial Message.
        """
        raise NotImplementedError

    # PUBLIC_INTERFACE
    @abstractmethod
    async def get_opt_values(self, secret: NotifierSecret) -> Dict[str, Any]:
        """Enumerate the dynamic option values valid for the given credential."""
        raise NotImplementedError
