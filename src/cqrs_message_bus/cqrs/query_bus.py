"""QueryBus — synchronous query dispatch through middleware."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..config import QUERY_MIDDLEWARE_KEY
from ..ports.bus import IQueryBus
from .bus import PipelineBus

if TYPE_CHECKING:
    from .query import Query


class QueryBus(PipelineBus, IQueryBus):
    """Query-side twin of :class:`~cqrs_message_bus.cqrs.command_bus.CommandBus`.

    Base middleware comes from ``cqrs.query.middleware``.
    """

    config_key = QUERY_MIDDLEWARE_KEY

    def ask(self, query: Query[Any] | Any) -> Any:
        """Ask *query* and return the handler's result."""
        return self._send(query)
