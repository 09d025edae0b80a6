import pytest

from cqrs_message_bus.cqrs.command import Command
from cqrs_message_bus.cqrs.registry import (
    HandlerDeclaration,
    _declare,
    command_handler,
    declarations_of,
    public_members,
    query_handler,
)
from cqrs_message_bus.primitives.exceptions import InvalidHandlerKindError


class CreateUser(Command[None]):
    name: str


def test_class_level_declaration_uses_qualified_name() -> None:
    @command_handler(CreateUser)
    class CreateUserHandler:
        pass

    assert declarations_of(CreateUserHandler) == (
        HandlerDeclaration("command", f"{__name__}.CreateUser"),
    )


def test_declarations_are_repeatable_in_source_order() -> None:
    @command_handler("app.domain.CreateUser")
    @query_handler("app.domain.GetUser")
    class UserHandler:
        pass

    # Decorators apply bottom-up.
    assert declarations_of(UserHandler) == (
        HandlerDeclaration("query", "app.domain.GetUser"),
        HandlerDeclaration("command", "app.domain.CreateUser"),
    )


def test_method_level_declarations() -> None:
    class AccountHandler:
        @command_handler("app.domain.CloseAccount")
        def close(self, command: object) -> None: ...

        @query_handler("app.domain.GetBalance")
        @staticmethod
        def balance(query: object) -> int:
            return 0

    assert declarations_of(AccountHandler) == ()
    assert declarations_of(AccountHandler.close) == (
        HandlerDeclaration("command", "app.domain.CloseAccount"),
    )
    assert declarations_of(vars(AccountHandler)["balance"]) == (
        HandlerDeclaration("query", "app.domain.GetBalance"),
    )


def test_declarations_are_not_inherited() -> None:
    @command_handler("app.domain.CreateUser")
    class BaseHandler:
        pass

    class ChildHandler(BaseHandler):
        pass

    @query_handler("app.domain.GetUser")
    class OtherChild(BaseHandler):
        pass

    assert declarations_of(ChildHandler) == ()
    assert declarations_of(OtherChild) == (
        HandlerDeclaration("query", "app.domain.GetUser"),
    )
    assert len(declarations_of(BaseHandler)) == 1


def test_undecorated_targets_have_no_declarations() -> None:
    assert declarations_of(object()) == ()
    assert declarations_of(len) == ()


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(InvalidHandlerKindError, match="Invalid handler type: event"):
        _declare("event", "app.domain.Something")  # type: ignore[arg-type]


def test_invalid_kind_error_is_a_value_error() -> None:
    assert issubclass(InvalidHandlerKindError, ValueError)


def test_public_members_skip_private_and_keep_base_order() -> None:
    class Base:
        def first(self) -> None: ...

        def second(self) -> None: ...

        def _hidden(self) -> None: ...

    class Child(Base):
        def second(self) -> None: ...

        def third(self) -> None: ...

    names = [name for name, _ in public_members(Child)]

    assert names == ["first", "second", "third"]
    assert dict(public_members(Child))["second"] is vars(Child)["second"]
