"""Primitives: exceptions and type naming."""

from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    InvalidHandlerKindError,
    MessageBusError,
    MiddlewareError,
    ResolutionError,
)
from .naming import type_name

__all__ = [
    "ConfigurationError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "InvalidHandlerKindError",
    "MessageBusError",
    "MiddlewareError",
    "ResolutionError",
    "type_name",
]
