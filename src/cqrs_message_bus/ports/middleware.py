"""IMiddleware — one stage of a bus pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable


@runtime_checkable
class IMiddleware(Protocol):
    """An object the pipeline calls with the message and the rest of the chain.

    A stage may pass a different message on, rewrite the result, return
    without calling ``next_handler`` at all, or raise. Stages run in chain
    order: the first one registered wraps all the others.
    """

    def handle(
        self,
        message: Any,
        next_handler: Callable[[Any], Any],
    ) -> Any:
        """Run this stage.

        Parameters
        ----------
        message:
            The command or query being dispatched.
        next_handler:
            ``next_handler(message)`` runs the remaining stages and the
            handler, returning the handler's result.
        """
        ...
