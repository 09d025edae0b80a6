"""Command base class — immutable intent to change state."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeVar

TResult = TypeVar("TResult", default=None)


class Command(BaseModel, Generic[TResult]):
    """
    Base for all commands.

    Commands represent write operations that change system state. They:
    - Are named with imperative verbs (e.g., CreateUser, TransferFunds)
    - Have exactly one handler
    - Are frozen; middleware that needs a different command builds a new one
      with ``model_copy(update=...)`` and passes that forward
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
