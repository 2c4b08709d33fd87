"""Resolution of the in-memory listener every service binds to."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from falafel.errors import ListenerResolutionError

logger = logging.getLogger(__name__)


def resolve_listener(service_key: str, listeners: Mapping[str, str], default_listener: str = "") -> str:
    """Find the listener of a service.

    Args:
        service_key (str): The lower-cased service name.
        listeners (Mapping[str, str]): Explicit service to listener assignments.
        default_listener (str, optional): Fallback for unassigned services. Defaults to "".

    Raises:
        ListenerResolutionError: If the service is unassigned and there is no fallback.

    Returns:
        str: The listener identifier.
    """
    listener = listeners.get(service_key, "")
    if listener:
        return listener

    if not default_listener:
        raise ListenerResolutionError(service_key)

    logger.debug("Using default listener '%s' for service '%s'.", default_listener, service_key)
    return default_listener


class ListenerRegistry:
    """The listeners used by the generated services, without duplicates and in first-seen order."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._listeners: list[str] = []

    def add(self, listener: str) -> None:
        """Register a listener, unless it is already known.

        Args:
            listener (str): The listener identifier.
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def resolve(self, service_key: str, listeners: Mapping[str, str], default_listener: str = "") -> str:
        """Resolve the listener of a service and register it.

        See `resolve_listener` for the arguments.

        Returns:
            str: The listener identifier.
        """
        listener = resolve_listener(service_key, listeners, default_listener)
        self.add(listener)
        return listener

    @property
    def listeners(self) -> list[str]:
        """A copy of the registered listeners."""
        return list(self._listeners)

    def __iter__(self) -> Iterator[str]:
        return iter(self._listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners

    def __repr__(self) -> str:
        """Return a readable representation for debugging."""
        return f"ListenerRegistry({self._listeners!r})"
