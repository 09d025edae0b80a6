"""Bus protocols — ICommandBus and IQueryBus."""

from __future__ import annotations

from typing import Any, Protocol

from typing_extensions import Self


class ICommandBus(Protocol):
    """
    Interface for dispatching commands through the middleware pipeline.
    """

    def dispatch(self, command: Any) -> Any: ...

    def middleware(self, middleware: Any) -> Self: ...

    def with_middleware(self, middleware: Any) -> Self: ...


class IQueryBus(Protocol):
    """
    Interface for asking queries through the middleware pipeline.
    """

    def ask(self, query: Any) -> Any: ...

    def middleware(self, middleware: Any) -> Self: ...

    def with_middleware(self, middleware: Any) -> Self: ...
