"""Default IResolver backed by importlib."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Any

from .primitives.exceptions import ResolutionError
from .primitives.naming import type_name

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


def import_object(path: str) -> Any:
    """Import ``package.module.Attr`` or ``package.module:Attr.inner``.

    Raises ``ImportError`` / ``AttributeError`` untouched; callers decide
    whether that is fatal.
    """
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
        target: Any = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
        return target

    parts = path.split(".")
    # Longest importable module prefix wins, the remainder is attribute access.
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            if exc.name is not None and not module_name.startswith(exc.name):
                raise
            continue
        for attr in parts[split:]:
            target = getattr(target, attr)
        return target
    return importlib.import_module(path)


class ImportResolver:
    """Resolve references from explicit bindings, then by import.

    Parameters
    ----------
    instances:
        Optional ``{reference: object}`` bindings consulted first. Keys may
        be dotted names or classes; classes are keyed by their qualified name.

    Classes (bound or imported) are instantiated with no arguments, so a
    class reference yields a fresh instance per resolution.
    """

    def __init__(self, instances: Mapping[str | type[Any], Any] | None = None) -> None:
        self._instances: dict[str, Any] = {}
        for key, value in (instances or {}).items():
            self.bind(key, value)

    def bind(self, reference: str | type[Any], instance: Any) -> None:
        """Bind *reference* to a ready-made *instance*."""
        self._instances[type_name(reference)] = instance
        logger.debug("Bound %s to %r", type_name(reference), instance)

    def resolve(self, reference: str | type[Any]) -> Any:
        key = type_name(reference)
        if key in self._instances:
            return self._instances[key]

        if isinstance(reference, type):
            target: Any = reference
        else:
            try:
                target = import_object(reference)
            except (ImportError, AttributeError, ValueError) as exc:
                raise ResolutionError(reference, str(exc)) from exc

        if isinstance(target, type):
            try:
                return target()
            except TypeError as exc:
                raise ResolutionError(reference, str(exc)) from exc
        return target
