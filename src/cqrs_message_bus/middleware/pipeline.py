"""build_pipeline — construct middleware chain."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .definition import DeferredMiddleware, as_middleware_unit

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ..ports.resolver import IResolver
    from .definition import FunctionMiddleware, HandlerMiddleware, MiddlewareUnit

logger = logging.getLogger(__name__)


def build_pipeline(
    middlewares: Sequence[MiddlewareUnit | Any],
    handler_fn: Callable[[Any], Any],
    resolver: IResolver | None = None,
) -> Callable[[Any], Any]:
    """Build a middleware chain ending at *handler_fn*.

    The first middleware in the list is the **outermost** wrapper.
    Each stage receives ``(message, next_handler)``; calling
    ``next_handler(message)`` runs the rest of the chain.

    :class:`DeferredMiddleware` stages are resolved through *resolver* only
    when the chain reaches them, so a broken reference fails that call and
    nothing earlier.
    """
    units = [as_middleware_unit(mw) for mw in middlewares]
    active_resolver = resolver
    pipeline: Callable[[Any], Any] = handler_fn

    for unit in reversed(units):
        if isinstance(unit, DeferredMiddleware):
            if active_resolver is None:
                from ..resolver import ImportResolver

                active_resolver = ImportResolver()
            pipeline = _deferred_stage(unit, pipeline, active_resolver)
        else:
            pipeline = _stage(unit, pipeline)

    logger.debug("Built pipeline with %d middleware stage(s)", len(units))
    return pipeline


def _stage(
    unit: FunctionMiddleware | HandlerMiddleware,
    next_handler: Callable[[Any], Any],
) -> Callable[[Any], Any]:
    def _wrapper(message: Any) -> Any:
        return unit(message, next_handler)

    return _wrapper


def _deferred_stage(
    unit: DeferredMiddleware,
    next_handler: Callable[[Any], Any],
    resolver: IResolver,
) -> Callable[[Any], Any]:
    def _wrapper(message: Any) -> Any:
        logger.debug("Resolving deferred middleware %r", unit.reference)
        return unit.bind(resolver)(message, next_handler)

    return _wrapper
