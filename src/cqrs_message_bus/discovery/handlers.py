"""HandlerDiscovery — build handler maps from a classmap.

Each classmap entry goes through the same stages, in order:

1. namespace: type name must start with the application namespace root
2. layer: source path must sit under the application directory
3. convention: source path must sit in a legacy or current handler directory
4. load: the type must import (any failure skips it)
5. concrete: abstract classes, protocols and non-classes are skipped
6. declarations: class-level first, then public members

Every entry ends as either :class:`DiscoveredType` or :class:`SkippedType`;
:meth:`HandlerDiscovery.discover` folds the discovered ones into two maps.
"""

from __future__ import annotations

import enum
import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from ..config import DiscoverySettings
from ..cqrs.registry import declarations_of, public_members
from ..primitives.exceptions import HandlerRegistrationError, InvalidHandlerKindError
from .classmap import import_type
from .locator import HandlerLocator

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..cqrs.registry import HandlerKind
    from .classmap import ClassmapEntry

logger = logging.getLogger(__name__)


class SkipReason(str, enum.Enum):
    OUTSIDE_NAMESPACE = "outside_namespace"
    OUTSIDE_APPLICATION = "outside_application"
    OUTSIDE_HANDLER_DIRECTORY = "outside_handler_directory"
    UNLOADABLE = "unloadable"
    NOT_CONCRETE = "not_concrete"


@dataclass(frozen=True)
class Registration:
    kind: HandlerKind
    message_type: str
    locator: HandlerLocator


@dataclass(frozen=True)
class DiscoveredType:
    entry: ClassmapEntry
    registrations: tuple[Registration, ...]


@dataclass(frozen=True)
class SkippedType:
    entry: ClassmapEntry
    reason: SkipReason
    detail: str | None = None


DiscoveryOutcome = Union[DiscoveredType, SkippedType]


@dataclass(frozen=True)
class HandlerMaps:
    """Discovery result: message type name -> handler locator, per kind."""

    commands: dict[str, str] = field(default_factory=dict)
    queries: dict[str, str] = field(default_factory=dict)

    def for_kind(self, kind: str) -> dict[str, str]:
        if kind == "command":
            return self.commands
        if kind == "query":
            return self.queries
        raise InvalidHandlerKindError(kind)

    def is_empty(self) -> bool:
        return not self.commands and not self.queries


def _normalise(path: str) -> str:
    return path.replace("\\", "/")


def _is_concrete_class(obj: Any) -> bool:
    if not inspect.isclass(obj):
        return False
    if getattr(obj, "_is_protocol", False):
        return False
    return not inspect.isabstract(obj)


class HandlerDiscovery:
    """Scans a classmap for ``@command_handler`` / ``@query_handler`` types.

    Parameters
    ----------
    settings:
        Namespace root, directory conventions and collision policy.
    loader:
        ``type_name -> object``; defaults to importing the name. Whatever it
        raises marks that entry as unloadable.

    The scan holds no state between calls: the same classmap always yields
    the same maps.
    """

    def __init__(
        self,
        settings: DiscoverySettings | None = None,
        loader: Callable[[str], Any] | None = None,
    ) -> None:
        self._settings = settings or DiscoverySettings()
        self._loader = loader or import_type

    # ── Stages ───────────────────────────────────────────────────

    def _in_namespace(self, entry: ClassmapEntry) -> bool:
        return entry.type_name.startswith(self._settings.namespace_root)

    def _in_application_layer(self, path: str) -> bool:
        return self._settings.application_dir in path

    def _in_handler_directory(self, path: str) -> bool:
        markers = (*self._settings.legacy_dirs, *self._settings.current_dirs)
        return any(marker in path for marker in markers)

    def _registrations(
        self, entry: ClassmapEntry, cls: type[Any]
    ) -> list[Registration]:
        found: list[Registration] = []
        for decl in declarations_of(cls):
            found.append(
                Registration(
                    decl.kind,
                    decl.message_type,
                    HandlerLocator.for_type(entry.type_name),
                )
            )
        for name, member in public_members(cls):
            for decl in declarations_of(member):
                found.append(
                    Registration(
                        decl.kind,
                        decl.message_type,
                        HandlerLocator.for_member(entry.type_name, name),
                    )
                )
        return found

    def inspect(self, entry: ClassmapEntry) -> DiscoveryOutcome:
        """Classify a single classmap entry."""
        if not self._in_namespace(entry):
            return SkippedType(entry, SkipReason.OUTSIDE_NAMESPACE)

        path = _normalise(entry.source_path)
        if not self._in_application_layer(path):
            return SkippedType(entry, SkipReason.OUTSIDE_APPLICATION)
        if not self._in_handler_directory(path):
            return SkippedType(entry, SkipReason.OUTSIDE_HANDLER_DIRECTORY)

        try:
            obj = self._loader(entry.type_name)
        except Exception as exc:  # noqa: BLE001 - a broken type must not stop the scan
            return SkippedType(entry, SkipReason.UNLOADABLE, repr(exc))

        if not _is_concrete_class(obj):
            return SkippedType(entry, SkipReason.NOT_CONCRETE)

        return DiscoveredType(entry, tuple(self._registrations(entry, obj)))

    # ── Scan ─────────────────────────────────────────────────────

    def discover(self, classmap: Iterable[ClassmapEntry] | None) -> HandlerMaps:
        """Build the command and query maps from *classmap*.

        ``None`` (no classmap available) gives two empty maps.
        """
        maps = HandlerMaps()
        if classmap is None:
            return maps

        owners: dict[tuple[str, str], str] = {}
        for entry in classmap:
            outcome = self.inspect(entry)
            if isinstance(outcome, SkippedType):
                logger.debug(
                    "Skipped %s (%s)%s",
                    entry.type_name,
                    outcome.reason.value,
                    f": {outcome.detail}" if outcome.detail else "",
                )
                continue

            for reg in outcome.registrations:
                target = maps.for_kind(reg.kind)
                owner_key = (reg.kind, reg.message_type)
                previous_owner = owners.get(owner_key)
                if (
                    self._settings.strict
                    and previous_owner is not None
                    and previous_owner != entry.type_name
                ):
                    raise HandlerRegistrationError(
                        f"Duplicate {reg.kind} handler for {reg.message_type}: "
                        f"{target[reg.message_type]} already registered, "
                        f"cannot register {reg.locator}"
                    )
                owners[owner_key] = entry.type_name
                target[reg.message_type] = str(reg.locator)
                logger.debug(
                    "Discovered %s handler %s -> %s",
                    reg.kind,
                    reg.message_type,
                    reg.locator,
                )

        return maps
