"""HandlerDispatcher — terminal stage: look up and invoke the handler."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import HandlerNotFoundError, ResolutionError
from ..primitives.naming import type_name
from ..resolver import ImportResolver

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ..ports.resolver import IResolver

logger = logging.getLogger(__name__)

MEMBER_SEPARATOR = "#"


class HandlerDispatcher:
    """Maps message types to handlers and invokes exactly one per message.

    Handler targets are either live objects (a callable or an object with
    ``handle``) or locator strings: ``"pkg.mod.Handler"`` resolves the
    handler and calls its ``handle`` (or the instance itself when callable);
    ``"pkg.mod.Handler#method"`` calls that member.

    Locators are resolved through *resolver* on every dispatch, so handler
    lifetimes follow the resolver's bindings.
    """

    def __init__(self, resolver: IResolver | None = None) -> None:
        self._resolver: IResolver = resolver or ImportResolver()
        self._handlers: dict[str, Any] = {}
        self._lock = threading.Lock()

    # ── Registration ─────────────────────────────────────────────

    def map(self, mapping: Mapping[type[Any] | str, Any]) -> None:
        """Install ``{message type: handler target}`` entries.

        Later calls override earlier entries for the same message type.
        """
        entries = {type_name(key): target for key, target in mapping.items()}
        with self._lock:
            self._handlers = {**self._handlers, **entries}
        for key, target in entries.items():
            logger.debug("Mapped %s -> %s", key, target)

    def get_handler(self, message_type: type[Any] | str) -> Any | None:
        return self._handlers.get(type_name(message_type))

    def has_handler(self, message_type: type[Any] | str) -> bool:
        return type_name(message_type) in self._handlers

    def get_registered_handlers(self) -> dict[str, Any]:
        """Return a snapshot of all mapped handlers (for debugging)."""
        return dict(self._handlers)

    # ── Dispatch ─────────────────────────────────────────────────

    def dispatch(self, message: Any) -> Any:
        """Invoke the handler mapped for ``type(message)``."""
        key = type_name(message)
        target = self._handlers.get(key)
        if target is None:
            raise HandlerNotFoundError(key)
        return self._callable_for(target)(message)

    __call__ = dispatch

    def _callable_for(self, target: Any) -> Callable[[Any], Any]:
        if isinstance(target, str):
            locator, _, member = target.partition(MEMBER_SEPARATOR)
            handler = self._resolver.resolve(locator)
            if member:
                bound = getattr(handler, member, None)
                if bound is None or not callable(bound):
                    raise ResolutionError(target, f"no callable member {member!r}")
                return bound  # type: ignore[no-any-return]
            target = handler
        elif isinstance(target, type):
            target = self._resolver.resolve(target)

        handle = getattr(target, "handle", None)
        if handle is not None and callable(handle):
            return handle  # type: ignore[no-any-return]
        if callable(target):
            return target  # type: ignore[no-any-return]
        raise ResolutionError(target, "handler is neither callable nor has handle()")
