"""Handler discovery: classmaps in, handler maps out."""

from __future__ import annotations

from .classmap import (
    Classmap,
    ClassmapEntry,
    classmap_from_mapping,
    import_type,
    load_classmap,
    scan_package,
    write_classmap,
)
from .handlers import (
    DiscoveredType,
    DiscoveryOutcome,
    HandlerDiscovery,
    HandlerMaps,
    Registration,
    SkippedType,
    SkipReason,
)
from .locator import HandlerLocator

__all__ = [
    "Classmap",
    "ClassmapEntry",
    "DiscoveredType",
    "DiscoveryOutcome",
    "HandlerDiscovery",
    "HandlerLocator",
    "HandlerMaps",
    "Registration",
    "SkipReason",
    "SkippedType",
    "classmap_from_mapping",
    "import_type",
    "load_classmap",
    "scan_package",
    "write_classmap",
]
