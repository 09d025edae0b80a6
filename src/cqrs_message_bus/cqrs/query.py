"""Query base class — immutable request for data."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeVar

TResult = TypeVar("TResult", default=None)


class Query(BaseModel, Generic[TResult]):
    """Base class for all Queries.

    Queries represent a request for data and **must** be immutable.
    Each query has exactly one handler.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    query_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
