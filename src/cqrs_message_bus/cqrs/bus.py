"""PipelineBus — three-tier middleware around a terminal dispatch function."""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, ClassVar

from typing_extensions import Self

from ..config import middleware_from_config
from ..middleware.definition import as_middleware_units
from ..middleware.pipeline import build_pipeline
from ..primitives.exceptions import MiddlewareError
from ..resolver import ImportResolver

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ..config import ConfigRepository
    from ..middleware.definition import MiddlewareUnit
    from ..ports.resolver import IResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MiddlewareTiers:
    """The base, extra and scoped middleware of one bus instance.

    Every tier is a tuple and every change returns a new value, so two
    buses holding tiers never share anything mutable.
    """

    base: tuple[MiddlewareUnit, ...] = ()
    extra: tuple[MiddlewareUnit, ...] = ()
    scoped: tuple[MiddlewareUnit, ...] = ()

    def with_extra(self, units: tuple[MiddlewareUnit, ...]) -> MiddlewareTiers:
        return replace(self, extra=self.extra + units)

    def with_scoped(self, units: tuple[MiddlewareUnit, ...]) -> MiddlewareTiers:
        return replace(self, scoped=self.scoped + units)

    def without_scoped(self) -> MiddlewareTiers:
        return replace(self, scoped=())

    def chain(self) -> tuple[MiddlewareUnit, ...]:
        """Effective order for one call: base, then extra, then scoped."""
        return self.base + self.extra + self.scoped


class PipelineBus:
    """Shared machinery of :class:`CommandBus` and :class:`QueryBus`.

    Parameters
    ----------
    handler_fn:
        Terminal stage ``invoke(message) -> result``; usually
        :meth:`HandlerDispatcher.dispatch
        <cqrs_message_bus.cqrs.dispatcher.HandlerDispatcher.dispatch>`.
    config:
        Configuration read once for the base tier under :attr:`config_key`.
        Missing or malformed configuration gives an empty base tier.
    resolver:
        Resolves deferred middleware references. Defaults to
        :class:`~cqrs_message_bus.resolver.ImportResolver`.

    Instances are safe to share between threads: tier updates happen under
    a lock and each call works on its own snapshot of the chain.
    """

    config_key: ClassVar[str]

    def __init__(
        self,
        handler_fn: Callable[[Any], Any],
        config: ConfigRepository | Mapping[str, Any] | None = None,
        *,
        resolver: IResolver | None = None,
    ) -> None:
        self._handler_fn = handler_fn
        self._resolver: IResolver = resolver or ImportResolver()
        self._tiers = MiddlewareTiers(base=self._base_tier(config))
        self._lock = threading.Lock()

    def _base_tier(
        self, config: ConfigRepository | Mapping[str, Any] | None
    ) -> tuple[MiddlewareUnit, ...]:
        try:
            return as_middleware_units(middleware_from_config(config, self.config_key))
        except MiddlewareError as exc:
            logger.warning(
                "Ignoring malformed middleware config %s: %s", self.config_key, exc
            )
            return ()

    @property
    def tiers(self) -> MiddlewareTiers:
        """Current tiers (an immutable snapshot)."""
        return self._tiers

    # ── Middleware ───────────────────────────────────────────────

    def middleware(self, middleware: Any) -> Self:
        """Append *middleware* to the extra tier of this instance.

        Accepts one unit or an ordered list/tuple. The extra tier persists
        across calls. Returns ``self`` for chaining.
        """
        units = as_middleware_units(middleware)
        with self._lock:
            self._tiers = self._tiers.with_extra(units)
        logger.debug("%s: added %d extra middleware", type(self).__name__, len(units))
        return self

    def with_middleware(self, middleware: Any) -> Self:
        """Return a copy whose next call runs *middleware* as the scoped tier.

        The receiver is left untouched.
        """
        units = as_middleware_units(middleware)
        with self._lock:
            tiers = self._tiers
        clone = copy.copy(self)
        clone._tiers = tiers.with_scoped(units)
        clone._lock = threading.Lock()
        return clone

    # ── Dispatch ─────────────────────────────────────────────────

    def _consume_chain(self) -> tuple[MiddlewareUnit, ...]:
        with self._lock:
            chain = self._tiers.chain()
            self._tiers = self._tiers.without_scoped()
        return chain

    def _send(self, message: Any) -> Any:
        chain = self._consume_chain()
        pipeline = build_pipeline(chain, self._handler_fn, self._resolver)
        return pipeline(message)
