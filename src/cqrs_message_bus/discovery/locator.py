"""HandlerLocator — string reference to a handler type or member."""

from __future__ import annotations

from ..cqrs.dispatcher import MEMBER_SEPARATOR


class HandlerLocator(str):
    """``"pkg.mod.Handler"`` or ``"pkg.mod.Handler#member"``.

    A plain ``str`` at rest, so handler maps serialise as ordinary JSON.
    """

    __slots__ = ()

    @classmethod
    def for_type(cls, type_name: str) -> HandlerLocator:
        return cls(type_name)

    @classmethod
    def for_member(cls, type_name: str, member: str) -> HandlerLocator:
        return cls(f"{type_name}{MEMBER_SEPARATOR}{member}")

    @property
    def type_name(self) -> str:
        return self.partition(MEMBER_SEPARATOR)[0]

    @property
    def member(self) -> str | None:
        return self.partition(MEMBER_SEPARATOR)[2] or None
