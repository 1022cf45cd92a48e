"""
Transport Registry

In-process catalog of transport classes keyed by backend name.

Lookups return a tagged LookupResult instead of raising, so the loader can
branch explicitly between "found", "try the plugin package" and "give up".

Thread Safety:
    Registration is not synchronized. Register transports during startup,
    before lookups happen from several threads.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Type

from .base import BaseTransport

logger = logging.getLogger(__name__)


class LookupStatus(str, Enum):
    """Outcome of a transport lookup."""

    FOUND = "found"
    NOT_FOUND_LOCALLY = "not_found_locally"  # try the external plugin package
    NOT_FOUND = "not_found"  # terminal, surfaced as PluginNotFoundError


@dataclass(frozen=True)
class LookupResult:
    """
    Tagged result of resolving a backend name.

    Attributes:
        status: Lookup outcome
        name: Requested backend name
        transport: Transport class when status is FOUND
    """

    status: LookupStatus
    name: str
    transport: Optional[Type[BaseTransport]] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


class TransportRegistry:
    """
    Registry of transport classes.

    Example:
        >>> registry = TransportRegistry()
        >>> @registry.register("mock")
        ... class MockTransport(BaseTransport):
        ...     def connection(self):
        ...         return None
        >>> registry.lookup("mock").found
        True
    """

    def __init__(self) -> None:
        self._transports: Dict[str, Type[BaseTransport]] = {}

    def add(self, name: str, transport: Type[BaseTransport]) -> Type[BaseTransport]:
        """Register transport under name, replacing an earlier registration."""
        if name in self._transports and self._transports[name] is not transport:
            logger.warning("Replacing transport registered as %s", name)
        self._transports[name] = transport
        if not transport.name:
            transport.name = name
        logger.debug("Registered transport %s -> %s", name, transport.__name__)
        return transport

    def register(self, name: str) -> Callable[[Type[BaseTransport]], Type[BaseTransport]]:
        """Class decorator registering a transport under name."""

        def decorator(transport: Type[BaseTransport]) -> Type[BaseTransport]:
            return self.add(name, transport)

        return decorator

    def unregister(self, name: str) -> None:
        self._transports.pop(name, None)

    def get(self, name: str) -> Optional[Type[BaseTransport]]:
        return self._transports.get(name)

    def lookup(self, name: str) -> LookupResult:
        transport = self._transports.get(name)
        if transport is None:
            return LookupResult(LookupStatus.NOT_FOUND_LOCALLY, name)
        return LookupResult(LookupStatus.FOUND, name, transport)

    def names(self) -> List[str]:
        return list(self._transports)

    def __contains__(self, name: object) -> bool:
        return name in self._transports

    def __len__(self) -> int:
        return len(self._transports)


__all__ = [
    "LookupResult",
    "LookupStatus",
    "TransportRegistry",
]
