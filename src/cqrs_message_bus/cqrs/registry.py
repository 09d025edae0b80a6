"""Handler declarations — ``@command_handler`` / ``@query_handler``.

The decorators only attach :class:`HandlerDeclaration` metadata to the
decorated class or method. Nothing is registered globally; discovery reads
the metadata back when it scans a classmap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, TypeVar

from ..primitives.exceptions import InvalidHandlerKindError
from ..primitives.naming import type_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

HandlerKind = Literal["command", "query"]
HANDLER_KINDS: tuple[HandlerKind, ...] = ("command", "query")

_ATTR = "__cqrs_handlers__"

T = TypeVar("T")


@dataclass(frozen=True)
class HandlerDeclaration:
    """One declared ``message type -> handler`` link."""

    kind: HandlerKind
    message_type: str


def _unwrap(target: Any) -> Any:
    if isinstance(target, (staticmethod, classmethod)):
        return target.__func__
    return target


def _declare(kind: HandlerKind, message_type: type[Any] | str) -> Callable[[T], T]:
    if kind not in HANDLER_KINDS:
        raise InvalidHandlerKindError(kind)
    declaration = HandlerDeclaration(kind, type_name(message_type))

    def decorator(target: T) -> T:
        holder = _unwrap(target)
        # Read from __dict__ so a subclass never extends its parent's tuple.
        existing = vars(holder).get(_ATTR, ()) if hasattr(holder, "__dict__") else ()
        setattr(holder, _ATTR, (*existing, declaration))
        logger.debug(
            "Declared %s handler %s -> %s",
            kind,
            declaration.message_type,
            getattr(holder, "__qualname__", holder),
        )
        return target

    return decorator


def command_handler(command_type: type[Any] | str) -> Callable[[T], T]:
    """Declare the decorated class or method as handler of *command_type*.

    Repeatable; usable at class level and on public methods::

        @command_handler(CreateUser)
        @command_handler(ImportUser)
        class UserHandler: ...

        class AccountHandler:
            @command_handler(CloseAccount)
            def close(self, command: CloseAccount) -> None: ...
    """
    return _declare("command", command_type)


def query_handler(query_type: type[Any] | str) -> Callable[[T], T]:
    """Declare the decorated class or method as handler of *query_type*."""
    return _declare("query", query_type)


def declarations_of(target: Any) -> tuple[HandlerDeclaration, ...]:
    """Return declarations attached directly to *target* (not inherited)."""
    holder = _unwrap(target)
    if not hasattr(holder, "__dict__"):
        return ()
    return tuple(vars(holder).get(_ATTR, ()))


def public_members(cls: type[Any]) -> Iterator[tuple[str, Any]]:
    """Yield public attributes of *cls*, inherited ones included.

    Base classes come first; an override keeps the position of the member
    it replaces.
    """
    members: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if not name.startswith("_"):
                members[name] = value
    yield from members.items()
