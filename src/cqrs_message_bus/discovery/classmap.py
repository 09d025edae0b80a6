"""Classmap — the universe of candidate types fed to discovery."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import TYPE_CHECKING, Any, NamedTuple

from pydantic import TypeAdapter

from ..resolver import import_object

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from types import ModuleType

logger = logging.getLogger(__name__)

_CLASSMAP_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])


class ClassmapEntry(NamedTuple):
    """One candidate: a qualified type name and the file it lives in."""

    type_name: str
    source_path: str


Classmap = tuple[ClassmapEntry, ...]


def classmap_from_mapping(mapping: Mapping[str, str | Path]) -> Classmap:
    """Build a classmap from ``{type_name: source_path}`` (order kept)."""
    return tuple(ClassmapEntry(name, str(path)) for name, path in mapping.items())


def load_classmap(path: str | Path) -> Classmap | None:
    """Load a JSON ``{type_name: source_path}`` classmap file.

    Returns ``None`` when the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No classmap at %s", path)
        return None
    return classmap_from_mapping(_CLASSMAP_ADAPTER.validate_json(path.read_bytes()))


def write_classmap(path: str | Path, classmap: Iterable[ClassmapEntry]) -> None:
    """Write *classmap* as JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {entry.type_name: entry.source_path for entry in classmap}
    path.write_bytes(_CLASSMAP_ADAPTER.dump_json(payload, indent=2))


def _classes_of(module: ModuleType) -> Iterable[ClassmapEntry]:
    try:
        source = inspect.getsourcefile(module) or getattr(module, "__file__", None)
    except TypeError:
        source = None
    if not source:
        return
    for _, obj in inspect.getmembers(module, inspect.isclass):
        if obj.__module__ == module.__name__:
            yield ClassmapEntry(f"{module.__name__}.{obj.__qualname__}", source)


def scan_package(package: str | ModuleType) -> Classmap:
    """List the classes defined in *package* and all its submodules.

    Submodules that fail to import are skipped.
    """
    if isinstance(package, str):
        package = importlib.import_module(package)

    entries: list[ClassmapEntry] = list(_classes_of(package))
    search_path = getattr(package, "__path__", None)
    if search_path is None:
        return tuple(entries)

    def _on_error(name: str) -> None:
        logger.debug("Skipping unimportable package %s", name)

    for info in pkgutil.walk_packages(
        search_path, prefix=f"{package.__name__}.", onerror=_on_error
    ):
        try:
            module = importlib.import_module(info.name)
        except Exception:  # noqa: BLE001 - a broken module must not stop the scan
            logger.debug("Skipping unimportable module %s", info.name, exc_info=True)
            continue
        entries.extend(_classes_of(module))
    return tuple(entries)


def import_type(type_name: str) -> Any:
    """Default discovery loader: import the object named *type_name*."""
    return import_object(type_name)
