"""CQRS primitives: commands, queries, handlers, buses, dispatching."""

from __future__ import annotations

from .bus import MiddlewareTiers, PipelineBus
from .command import Command
from .command_bus import CommandBus
from .dispatcher import HandlerDispatcher
from .handler import CommandHandler, QueryHandler
from .query import Query
from .query_bus import QueryBus
from .registry import (
    HandlerDeclaration,
    command_handler,
    declarations_of,
    query_handler,
)

__all__ = [
    "Command",
    "CommandBus",
    "CommandHandler",
    "HandlerDeclaration",
    "HandlerDispatcher",
    "MiddlewareTiers",
    "PipelineBus",
    "Query",
    "QueryBus",
    "QueryHandler",
    "command_handler",
    "declarations_of",
    "query_handler",
]
