"""Dotted-key configuration repository and typed bus settings."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .primitives.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

COMMAND_MIDDLEWARE_KEY = "cqrs.command.middleware"
QUERY_MIDDLEWARE_KEY = "cqrs.query.middleware"
SETTINGS_KEY = "message_bus"

_MISSING = object()


class ConfigRepository:
    """Nested-mapping configuration store addressed by dotted keys.

    Usage::

        config = ConfigRepository({"cqrs": {"command": {"middleware": [...]}}})
        config.get("cqrs.command.middleware", [])
        config.set("cqrs.query.middleware", [LogExecutionTimeMiddleware()])
    """

    def __init__(self, items: Mapping[str, Any] | None = None) -> None:
        self._items: dict[str, Any] = _copy_sections(items or {})

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._items
        for part in key.split("."):
            if not isinstance(node, Mapping):
                return default
            node = node.get(part, _MISSING)
            if node is _MISSING:
                return default
        return node

    def set(self, key: str, value: Any) -> None:
        node = self._items
        *parents, leaf = key.split(".")
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = value

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def all(self) -> dict[str, Any]:
        return dict(self._items)


def _copy_sections(items: Mapping[str, Any]) -> dict[str, Any]:
    # Sections are rebuilt, leaves are shared.
    return {
        key: _copy_sections(value) if isinstance(value, Mapping) else value
        for key, value in items.items()
    }


def _as_repository(
    config: ConfigRepository | Mapping[str, Any] | None,
) -> ConfigRepository:
    if isinstance(config, ConfigRepository):
        return config
    return ConfigRepository(config)


def middleware_from_config(
    config: ConfigRepository | Mapping[str, Any] | None, key: str
) -> list[Any]:
    """Return the ordered middleware list stored under *key*.

    Absent configuration yields ``[]``; so does anything that is not a
    list or tuple (logged, never raised).
    """
    value = _as_repository(config).get(key, [])
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        logger.warning(
            "Ignoring malformed middleware config %s: expected a list, got %s",
            key,
            type(value).__name__,
        )
        return []
    return list(value)


class CachePaths(BaseModel):
    """Locations of the generated handler maps."""

    model_config = ConfigDict(frozen=True)

    command_handlers: Path | None = None
    query_handlers: Path | None = None

    @field_validator("command_handlers", "query_handlers", mode="before")
    @classmethod
    def ignore_invalid_path(cls, value: Any) -> Any:
        """Treat anything that is not a path as "no cache file"."""
        if value is None or isinstance(value, (str, os.PathLike)):
            return value
        logger.warning(
            "Ignoring invalid handler cache path %r: expected a string or path",
            value,
        )
        return None


class DiscoverySettings(BaseModel):
    """Where discovery looks for handlers.

    ``namespace_root`` is matched against qualified type names; the
    directory markers are matched against normalised ``/``-separated
    source paths.
    """

    model_config = ConfigDict(frozen=True)

    namespace_root: str = "app."
    application_dir: str = "/application/"
    legacy_dirs: tuple[str, ...] = ("/command_handler/", "/query_handler/")
    current_dirs: tuple[str, ...] = (
        "/application/command/handlers/",
        "/application/query/handlers/",
    )
    #: Raise on two different types claiming one message type.
    strict: bool = False


class MessageBusSettings(BaseModel):
    """Typed view of the ``message_bus`` configuration section."""

    model_config = ConfigDict(frozen=True)

    paths: CachePaths = Field(default_factory=CachePaths)
    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)
    #: Fall back to live discovery when no cached map exists (development).
    discover_when_uncached: bool = False

    @classmethod
    def from_config(
        cls, config: ConfigRepository | Mapping[str, Any] | None
    ) -> MessageBusSettings:
        section = _as_repository(config).get(SETTINGS_KEY, {})
        if section is None:
            section = {}
        try:
            return cls.model_validate(section)
        except PydanticValidationError as exc:
            raise ConfigurationError(f"Invalid {SETTINGS_KEY} settings: {exc}") from exc
