"""Handler-map cache files, stored as JSON ``{message type: locator}``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .config import MessageBusSettings
    from .discovery.handlers import HandlerMaps

logger = logging.getLogger(__name__)

_HANDLER_MAP_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])


def write_handler_map(path: str | Path, mapping: Mapping[str, str]) -> None:
    """Write *mapping* to *path*, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(_HANDLER_MAP_ADAPTER.dump_json(dict(mapping), indent=2))
    logger.debug("Wrote %d handler(s) to %s", len(mapping), path)


def load_handler_map(path: str | Path) -> dict[str, str] | None:
    """Read a handler map, or ``None`` when *path* does not exist.

    A file that exists but is not a string-to-string JSON object raises
    ``pydantic.ValidationError``.
    """
    path = Path(path)
    if not path.is_file():
        return None
    return _HANDLER_MAP_ADAPTER.validate_json(path.read_bytes())


def cache_handlers(settings: MessageBusSettings, maps: HandlerMaps) -> list[Path]:
    """Persist discovered *maps* to the configured cache paths.

    Kinds without a configured path are not written. Returns the paths
    that were written.
    """
    written: list[Path] = []
    targets = (
        (settings.paths.command_handlers, maps.commands),
        (settings.paths.query_handlers, maps.queries),
    )
    for path, mapping in targets:
        if path is None:
            continue
        write_handler_map(path, mapping)
        written.append(path)
    return written


def clear_handler_cache(settings: MessageBusSettings) -> list[Path]:
    """Delete cached handler maps; returns the paths that were removed."""
    removed: list[Path] = []
    for path in (settings.paths.command_handlers, settings.paths.query_handlers):
        if path is not None and path.is_file():
            path.unlink()
            removed.append(path)
    return removed
