"""Middleware components."""

from .definition import (
    DeferredMiddleware,
    FunctionMiddleware,
    HandlerMiddleware,
    MiddlewareUnit,
    as_middleware_unit,
    as_middleware_units,
)
from .logging import LogExecutionTimeMiddleware
from .pipeline import build_pipeline

__all__ = [
    "DeferredMiddleware",
    "FunctionMiddleware",
    "HandlerMiddleware",
    "LogExecutionTimeMiddleware",
    "MiddlewareUnit",
    "as_middleware_unit",
    "as_middleware_units",
    "build_pipeline",
]
