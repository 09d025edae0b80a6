"""Qualified type names used as handler-map keys."""

from __future__ import annotations


def type_name(obj: object) -> str:
    """Return ``module.QualName`` for a class, or for the class of *obj*.

    Strings are returned unchanged so callers may pass either a message
    type or its already-qualified name.
    """
    if isinstance(obj, str):
        return obj
    cls = obj if isinstance(obj, type) else type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"
