"""Wire dispatcher, buses and handler maps together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .cache import load_handler_map
from .config import ConfigRepository, MessageBusSettings
from .cqrs.command_bus import CommandBus
from .cqrs.dispatcher import HandlerDispatcher
from .cqrs.query_bus import QueryBus
from .discovery.handlers import HandlerDiscovery, HandlerMaps
from .primitives.exceptions import InvalidHandlerKindError
from .resolver import ImportResolver

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from pathlib import Path

    from .discovery.classmap import ClassmapEntry
    from .ports.resolver import IResolver

logger = logging.getLogger(__name__)

COMMAND_HANDLERS = "command-handlers"
QUERY_HANDLERS = "query-handlers"


def _cache_path(settings: MessageBusSettings, kind: str) -> Path | None:
    if kind == COMMAND_HANDLERS:
        return settings.paths.command_handlers
    if kind == QUERY_HANDLERS:
        return settings.paths.query_handlers
    raise InvalidHandlerKindError(kind)


def _load_cached(settings: MessageBusSettings, kind: str) -> dict[str, str] | None:
    path = _cache_path(settings, kind)
    if path is None:
        return None
    mapping = load_handler_map(path)
    if mapping is not None:
        logger.debug("Loaded %d %s from %s", len(mapping), kind, path)
    return mapping


def merge_handler_maps(
    commands: Mapping[str, str], queries: Mapping[str, str]
) -> dict[str, str]:
    """Merge both maps for one dispatcher; command entries win."""
    return {**queries, **commands}


def load_handler_maps(
    settings: MessageBusSettings,
    classmap: Iterable[ClassmapEntry] | None = None,
    loader: Callable[[str], Any] | None = None,
) -> HandlerMaps:
    """Prefer cached maps; otherwise discover (if enabled) or stay empty.

    Discovery runs at most once even when both kinds are uncached.
    """
    kinds = (COMMAND_HANDLERS, QUERY_HANDLERS)
    cached = {kind: _load_cached(settings, kind) for kind in kinds}

    discovered: HandlerMaps | None = None
    uncached = any(mapping is None for mapping in cached.values())
    if uncached and settings.discover_when_uncached:
        discovered = HandlerDiscovery(settings.discovery, loader).discover(classmap)

    def _pick(kind: str, fallback_kind: str) -> dict[str, str]:
        mapping = cached[kind]
        if mapping is not None:
            return mapping
        if discovered is None:
            return {}
        return discovered.for_kind(fallback_kind)

    return HandlerMaps(
        commands=_pick(COMMAND_HANDLERS, "command"),
        queries=_pick(QUERY_HANDLERS, "query"),
    )


@dataclass(frozen=True)
class MessageBus:
    """The wired-up pair of buses sharing one dispatcher."""

    dispatcher: HandlerDispatcher
    commands: CommandBus
    queries: QueryBus


def create_message_bus(
    config: ConfigRepository | Mapping[str, Any] | None = None,
    *,
    classmap: Iterable[ClassmapEntry] | None = None,
    resolver: IResolver | None = None,
    loader: Callable[[str], Any] | None = None,
) -> MessageBus:
    """Build a dispatcher, install the handler maps and create both buses."""
    repository = (
        config if isinstance(config, ConfigRepository) else ConfigRepository(config)
    )
    settings = MessageBusSettings.from_config(repository)
    resolver = resolver or ImportResolver()

    dispatcher = HandlerDispatcher(resolver)
    maps = load_handler_maps(settings, classmap, loader)
    merged = merge_handler_maps(maps.commands, maps.queries)
    if merged:
        dispatcher.map(merged)

    return MessageBus(
        dispatcher=dispatcher,
        commands=CommandBus(dispatcher.dispatch, repository, resolver=resolver),
        queries=QueryBus(dispatcher.dispatch, repository, resolver=resolver),
    )
