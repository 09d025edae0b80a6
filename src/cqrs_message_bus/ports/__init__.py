from .bus import ICommandBus, IQueryBus
from .middleware import IMiddleware
from .resolver import IResolver

__all__ = [
    "ICommandBus",
    "IMiddleware",
    "IQueryBus",
    "IResolver",
]
