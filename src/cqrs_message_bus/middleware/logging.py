"""LogExecutionTimeMiddleware — logs how long a message took to handle."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ..cqrs.command import Command
from ..cqrs.query import Query
from ..primitives.naming import type_name

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("cqrs_message_bus.middleware")


def message_kind(message: Any) -> str:
    """Return ``"command"``, ``"query"`` or ``"message"`` for *message*."""
    if isinstance(message, Query):
        return "query"
    if isinstance(message, Command):
        return "command"
    return "message"


class LogExecutionTimeMiddleware:
    """Logs message name and elapsed time at DEBUG once the chain returns.

    The record carries ``cqrs_message`` (qualified type name) and
    ``elapsed_ms`` (rounded to two decimals) as extra attributes. Nothing
    is logged when an inner stage raises.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def handle(
        self,
        message: Any,
        next_handler: Callable[[Any], Any],
    ) -> Any:
        start = time.perf_counter()
        result = next_handler(message)
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

        self._logger.debug(
            "CQRS %s executed",
            message_kind(message).upper(),
            extra={"cqrs_message": type_name(message), "elapsed_ms": elapsed_ms},
        )
        return result
