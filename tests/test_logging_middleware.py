import logging
from typing import Any

import pytest

from cqrs_message_bus.cqrs.command import Command
from cqrs_message_bus.cqrs.query import Query
from cqrs_message_bus.middleware.logging import (
    LogExecutionTimeMiddleware,
    message_kind,
)

LOGGER = "cqrs_message_bus.middleware"


class RenameUser(Command[None]):
    name: str


class FindUser(Query[str]):
    user_id: str


class PlainMessage:
    pass


def test_message_kind() -> None:
    assert message_kind(RenameUser(name="bob")) == "command"
    assert message_kind(FindUser(user_id="1")) == "query"
    assert message_kind(PlainMessage()) == "message"


def test_logs_command_execution_with_timing(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    mw = LogExecutionTimeMiddleware()

    result = mw.handle(RenameUser(name="bob"), lambda message: "done")

    assert result == "done"
    records = [r for r in caplog.records if r.name == LOGGER]
    assert len(records) == 1
    record = records[0]
    assert record.levelno == logging.DEBUG
    assert record.getMessage() == "CQRS COMMAND executed"
    assert record.cqrs_message.endswith("RenameUser")
    assert isinstance(record.elapsed_ms, float)
    assert record.elapsed_ms >= 0
    assert record.elapsed_ms == round(record.elapsed_ms, 2)


def test_logs_query_and_plain_message(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    mw = LogExecutionTimeMiddleware()

    mw.handle(FindUser(user_id="1"), lambda message: None)
    mw.handle(PlainMessage(), lambda message: None)

    messages = [r.getMessage() for r in caplog.records if r.name == LOGGER]
    assert messages == ["CQRS QUERY executed", "CQRS MESSAGE executed"]


def test_nothing_logged_when_inner_stage_raises(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    mw = LogExecutionTimeMiddleware()

    def failing(message: Any) -> Any:
        raise RuntimeError("handler failed")

    with pytest.raises(RuntimeError, match="handler failed"):
        mw.handle(RenameUser(name="bob"), failing)

    assert [r for r in caplog.records if r.name == LOGGER] == []


def test_uses_injected_logger(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="app.timing")
    mw = LogExecutionTimeMiddleware(logging.getLogger("app.timing"))

    mw.handle(RenameUser(name="bob"), lambda message: None)

    assert [r.name for r in caplog.records] == ["app.timing"]
