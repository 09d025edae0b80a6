"""Synchronous command/query buses for cqrs-message-bus.

Three-tier middleware pipelines around a terminal handler dispatcher, plus
classmap-driven handler discovery. Message models, settings and cache
files are validated with pydantic.
"""

from __future__ import annotations

from .bootstrap import (
    MessageBus,
    create_message_bus,
    load_handler_maps,
    merge_handler_maps,
)
from .cache import (
    cache_handlers,
    clear_handler_cache,
    load_handler_map,
    write_handler_map,
)
from .config import (
    COMMAND_MIDDLEWARE_KEY,
    QUERY_MIDDLEWARE_KEY,
    CachePaths,
    ConfigRepository,
    DiscoverySettings,
    MessageBusSettings,
    middleware_from_config,
)

# ── CQRS ─────────────────────────────────────────────────────────
from .cqrs import (
    Command,
    CommandBus,
    CommandHandler,
    HandlerDeclaration,
    HandlerDispatcher,
    MiddlewareTiers,
    PipelineBus,
    Query,
    QueryBus,
    QueryHandler,
    command_handler,
    declarations_of,
    query_handler,
)

# ── Discovery ────────────────────────────────────────────────────
from .discovery import (
    ClassmapEntry,
    HandlerDiscovery,
    HandlerLocator,
    HandlerMaps,
    SkipReason,
    classmap_from_mapping,
    load_classmap,
    scan_package,
)

# ── Middleware ───────────────────────────────────────────────────
from .middleware import (
    DeferredMiddleware,
    FunctionMiddleware,
    HandlerMiddleware,
    LogExecutionTimeMiddleware,
    as_middleware_unit,
    build_pipeline,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import ICommandBus, IMiddleware, IQueryBus, IResolver

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
    ConfigurationError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    InvalidHandlerKindError,
    MessageBusError,
    MiddlewareError,
    ResolutionError,
    type_name,
)
from .resolver import ImportResolver

__all__: list[str] = [
    # CQRS
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
    # Bootstrap & config
    "COMMAND_MIDDLEWARE_KEY",
    "QUERY_MIDDLEWARE_KEY",
    "CachePaths",
    "ConfigRepository",
    "DiscoverySettings",
    "MessageBus",
    "MessageBusSettings",
    "cache_handlers",
    "clear_handler_cache",
    "create_message_bus",
    "load_handler_map",
    "load_handler_maps",
    "merge_handler_maps",
    "middleware_from_config",
    "write_handler_map",
    # Discovery
    "ClassmapEntry",
    "HandlerDiscovery",
    "HandlerLocator",
    "HandlerMaps",
    "SkipReason",
    "classmap_from_mapping",
    "load_classmap",
    "scan_package",
    # Middleware
    "DeferredMiddleware",
    "FunctionMiddleware",
    "HandlerMiddleware",
    "LogExecutionTimeMiddleware",
    "as_middleware_unit",
    "build_pipeline",
    # Ports
    "ICommandBus",
    "IMiddleware",
    "IQueryBus",
    "IResolver",
    "ImportResolver",
    # Primitives
    "ConfigurationError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "InvalidHandlerKindError",
    "MessageBusError",
    "MiddlewareError",
    "ResolutionError",
    "type_name",
]
