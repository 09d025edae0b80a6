"""Optional base classes for command and query handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from .command import Command
    from .query import Query

TResult = TypeVar("TResult")


class CommandHandler(ABC, Generic[TResult]):
    """Base class for command handlers.

    Subclasses are abstract until ``handle`` is implemented, so discovery
    never picks up a half-written handler.

    Usage::

        @command_handler(RegisterUser)
        class RegisterUserHandler(CommandHandler[UserId]):
            def handle(self, command: RegisterUser) -> UserId:
                ...
    """

    @abstractmethod
    def handle(self, command: Command[Any]) -> TResult:
        """Execute the command and return its result."""
        ...


class QueryHandler(ABC, Generic[TResult]):
    """Base class for query handlers.

    Usage::

        @query_handler(FindUser)
        class FindUserHandler(QueryHandler[UserView]):
            def handle(self, query: FindUser) -> UserView:
                ...
    """

    @abstractmethod
    def handle(self, query: Query[Any]) -> TResult:
        """Execute the query and return its result."""
        ...
