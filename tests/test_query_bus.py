from typing import Any

import pytest

from cqrs_message_bus.cqrs.dispatcher import HandlerDispatcher
from cqrs_message_bus.cqrs.query import Query
from cqrs_message_bus.cqrs.query_bus import QueryBus
from cqrs_message_bus.primitives.exceptions import HandlerNotFoundError

# --- Test Models ---


class GetUser(Query[dict[str, Any]]):
    user_id: str


class GetUserHandler:
    def handle(self, query: GetUser) -> dict[str, Any]:
        return {"id": query.user_id, "name": "Alice"}


class TagMiddleware:
    def __init__(self, tag: str, calls: list[str]) -> None:
        self.tag = tag
        self.calls = calls

    def handle(self, query: Any, next_handler: Any) -> Any:
        self.calls.append(self.tag)
        return next_handler(query)


def make_bus(config: Any = None) -> QueryBus:
    dispatcher = HandlerDispatcher()
    dispatcher.map({GetUser: GetUserHandler()})
    return QueryBus(dispatcher.dispatch, config)


def test_ask_returns_handler_result() -> None:
    bus = make_bus()

    assert bus.ask(GetUser(user_id="u-1")) == {"id": "u-1", "name": "Alice"}


def test_base_tier_comes_from_query_key_only() -> None:
    calls: list[str] = []
    config = {
        "cqrs": {
            "command": {"middleware": [TagMiddleware("command", calls)]},
            "query": {"middleware": [TagMiddleware("query", calls)]},
        }
    }
    bus = make_bus(config)

    bus.ask(GetUser(user_id="u-1"))

    assert calls == ["query"]


def test_query_tiers_run_in_order_and_scoped_resets() -> None:
    calls: list[str] = []
    bus = make_bus({"cqrs": {"query": {"middleware": [TagMiddleware("base", calls)]}}})
    bus.middleware(TagMiddleware("extra", calls))
    scoped = bus.with_middleware(TagMiddleware("scoped", calls))

    scoped.ask(GetUser(user_id="1"))
    scoped.ask(GetUser(user_id="2"))

    assert calls == ["base", "extra", "scoped", "base", "extra"]


def test_middleware_can_short_circuit_the_handler() -> None:
    handler_calls: list[Any] = []

    def handler(query: Any) -> Any:
        handler_calls.append(query)
        return "from handler"

    bus = QueryBus(handler)
    bus.middleware(lambda query, next_handler: "cached")

    assert bus.ask(GetUser(user_id="1")) == "cached"
    assert handler_calls == []


def test_middleware_can_replace_the_result() -> None:
    bus = make_bus()
    bus.middleware(lambda query, next_handler: {**next_handler(query), "seen": True})

    assert bus.ask(GetUser(user_id="1"))["seen"] is True


def test_unmapped_query_raises_handler_not_found() -> None:
    class UnknownQuery(Query[None]):
        pass

    with pytest.raises(HandlerNotFoundError):
        make_bus().ask(UnknownQuery())
