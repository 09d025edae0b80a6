"""IResolver — turns deferred references into live objects."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IResolver(Protocol):
    """Protocol for the host's object resolver.

    Used for deferred middleware references and for handler locators.
    Implementations raise
    :class:`~cqrs_message_bus.primitives.exceptions.ResolutionError` when
    *reference* cannot be resolved.
    """

    def resolve(self, reference: str | type[Any]) -> Any: ...
