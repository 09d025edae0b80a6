"""Exceptions raised by cqrs-message-bus."""

from __future__ import annotations


class MessageBusError(Exception):
    """Root exception for the entire message-bus package."""


class ConfigurationError(MessageBusError):
    """Raised when bus settings cannot be built from configuration."""


class MiddlewareError(MessageBusError):
    """Raised when a value cannot be used as a middleware unit.

    Usage: ``as_middleware_unit`` raises this for values that are neither
    a reference, an object with ``handle`` nor a callable.
    """


class ResolutionError(MiddlewareError):
    """Raised when a deferred reference cannot be resolved to an object.

    The resolver raises this at the moment the reference is needed, so for
    middleware it surfaces only when that position of the chain is reached.
    """

    def __init__(self, reference: object, reason: str | None = None) -> None:
        self.reference = reference
        self.reason = reason
        msg = f"Cannot resolve {reference!r}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class HandlerError(MessageBusError):
    """Base class for all handler related errors (registration, lookup)."""


class HandlerNotFoundError(HandlerError):
    """Raised when no handler is mapped for a dispatched message type."""

    def __init__(self, message_type: str) -> None:
        self.message_type = message_type
        super().__init__(f"No handler registered for {message_type}")


class HandlerRegistrationError(HandlerError):
    """Raised when two different types register the same message type.

    Only raised by discovery in strict mode; the default policy lets the
    last type in classmap order win.
    """


class InvalidHandlerKindError(HandlerError, ValueError):
    """Raised when an internal helper receives an unknown handler kind."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Invalid handler type: {kind}")
