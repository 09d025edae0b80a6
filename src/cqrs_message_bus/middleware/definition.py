"""Middleware units — the three shapes a pipeline stage can take."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from ..primitives.exceptions import MiddlewareError, ResolutionError

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.middleware import IMiddleware
    from ..ports.resolver import IResolver


@dataclass(frozen=True)
class FunctionMiddleware:
    """A bare callable ``fn(message, next_handler)``."""

    fn: Callable[[Any, Callable[[Any], Any]], Any]

    def __call__(self, message: Any, next_handler: Callable[[Any], Any]) -> Any:
        return self.fn(message, next_handler)


@dataclass(frozen=True)
class HandlerMiddleware:
    """An object exposing ``handle(message, next_handler)``."""

    instance: IMiddleware

    def __call__(self, message: Any, next_handler: Callable[[Any], Any]) -> Any:
        return self.instance.handle(message, next_handler)


@dataclass(frozen=True)
class DeferredMiddleware:
    """A reference (dotted name or class) resolved when its stage runs.

    Supports **deferred instantiation**: nothing is looked up until the
    pipeline actually reaches this position.
    """

    reference: str | type[Any]

    def bind(self, resolver: IResolver) -> FunctionMiddleware | HandlerMiddleware:
        """Resolve the reference and return the concrete unit it names."""
        resolved = resolver.resolve(self.reference)
        if isinstance(resolved, (str, DeferredMiddleware)):
            raise ResolutionError(
                self.reference, "resolver returned another reference"
            )
        try:
            return _concrete_unit(resolved)
        except MiddlewareError as exc:
            raise ResolutionError(self.reference, str(exc)) from exc


MiddlewareUnit = Union[FunctionMiddleware, HandlerMiddleware, DeferredMiddleware]


def _concrete_unit(value: Any) -> FunctionMiddleware | HandlerMiddleware:
    if isinstance(value, (FunctionMiddleware, HandlerMiddleware)):
        return value
    handle = getattr(value, "handle", None)
    if handle is not None and callable(handle) and not inspect.isroutine(value):
        return HandlerMiddleware(value)
    if callable(value):
        return FunctionMiddleware(value)
    raise MiddlewareError(
        f"{type(value).__name__} is not usable as middleware: expected a "
        "callable or an object with handle(message, next_handler)"
    )


def as_middleware_unit(value: Any) -> MiddlewareUnit:
    """Coerce a raw middleware value into a :data:`MiddlewareUnit`.

    - strings and classes become :class:`DeferredMiddleware`;
    - objects with a ``handle`` method become :class:`HandlerMiddleware`;
    - any other callable becomes :class:`FunctionMiddleware`.
    """
    if isinstance(value, DeferredMiddleware):
        return value
    if isinstance(value, (str, type)):
        return DeferredMiddleware(value)
    return _concrete_unit(value)


def as_middleware_units(value: Any) -> tuple[MiddlewareUnit, ...]:
    """Accept one middleware value or an ordered list/tuple of them."""
    if isinstance(value, (list, tuple)):
        return tuple(as_middleware_unit(item) for item in value)
    return (as_middleware_unit(value),)
