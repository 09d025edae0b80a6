"""CommandBus — synchronous command dispatch through middleware."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..config import COMMAND_MIDDLEWARE_KEY
from ..ports.bus import ICommandBus
from .bus import PipelineBus

if TYPE_CHECKING:
    from .command import Command


class CommandBus(PipelineBus, ICommandBus):
    """Routes a command through base, extra and scoped middleware, then
    hands it to the terminal handler function.

    Usage::

        bus = CommandBus(dispatcher.dispatch, config)
        bus.middleware(AuditMiddleware())          # every later call
        bus.with_middleware(trace).dispatch(cmd)   # this call only
    """

    config_key = COMMAND_MIDDLEWARE_KEY

    def dispatch(self, command: Command[Any] | Any) -> Any:
        """Dispatch *command* and return the handler's result.

        Errors raised by any stage propagate unchanged.
        """
        return self._send(command)
