"""Postponed attributes.

A postponed attribute is computed by its generator on first read and then
frozen as a plain read-only record. Amendments queued against it run once,
in the order they were queued, right after that first read.

    ns = Namespace()
    registry.postpone(ns, "Foo", lambda host, name: {"greeting": "hi"})
    registry.amend(ns, "Foo", lambda host, name: getattr(host, name).update(extra="x"))
    ns.Foo  # {"greeting": "hi", "extra": "x"}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from ..errors import AttributeViolation, ResolutionError
from ..validators import ensure_callable, ensure_host, ensure_name
from .attributes import AttributeWriter
from .host import AttributeRecord, describe, own_table, read

logger = logging.getLogger(__name__)


class _Assigned:
    __slots__ = ()

    def __repr__(self) -> str:
        return "ASSIGNED"

    def __reduce__(self) -> str:
        return "ASSIGNED"


# Generator return marker: the generator assigned the attribute itself.
ASSIGNED = _Assigned()


@dataclass
class Amendment:
    modifier: Callable[..., Any]
    args: tuple = ()
    kwargs: dict = field(default_factory=dict)

    def apply(self, host: Any, name: str) -> None:
        self.modifier(host, name, *self.args, **self.kwargs)


@dataclass
class Unresolved:
    generator: Optional[Callable[..., Any]]
    args: tuple = ()
    kwargs: dict = field(default_factory=dict)
    amendments: list[Amendment] = field(default_factory=list)


@dataclass(frozen=True)
class Resolved:
    value: Any


SlotState = Union[Unresolved, Resolved]


class PostponedSlot:
    """State of one postponed ``(host, name)`` pair.

    While unresolved, the host carries :attr:`placeholder`, a non-enumerable
    accessor record whose getter resolves the slot and whose setter
    pre-empts it.
    """

    __slots__ = ("host", "name", "state", "placeholder", "_writer", "_resolving")

    def __init__(
        self, writer: AttributeWriter, host: Any, name: str, state: Unresolved
    ) -> None:
        self._writer = writer
        self._resolving = False
        self.host = host
        self.name = name
        self.state: SlotState = state
        self.placeholder = AttributeRecord(
            getter=self._get,
            setter=self._set,
            enumerable=False,
            configurable=True,
        )

    @property
    def resolved(self) -> bool:
        return isinstance(self.state, Resolved)

    def _get(self, obj: Any) -> Any:
        state = self.state
        if isinstance(state, Resolved):
            return state.value
        if state.generator is None:
            raise AttributeError(
                f"postponed attribute {self.name!r} has amendments but no generator"
            )
        value = self.resolve()
        record = describe(self.host, self.name)
        if record is None or record is self.placeholder:
            return value
        # Same binding as every later read through the frozen record.
        return read(record, obj, self.host, self.name)

    def _set(self, obj: Any, value: Any) -> None:
        if self._resolving:
            # The generator assigns its own result; amendments still follow.
            self._writer.freeze(self.host, self.name, value)
            return
        state = self.state
        self._writer.freeze(self.host, self.name, value)
        self._settle(value)
        if isinstance(state, Unresolved) and state.amendments:
            logger.debug(
                "assignment to %r discarded %d pending amendment(s)",
                self.name,
                len(state.amendments),
            )

    def _assigned(self) -> bool:
        record = describe(self.host, self.name)
        return record is not None and record is not self.placeholder

    def _settle(self, value: Any) -> None:
        self.state = Resolved(value)
        table = own_table(self.host)
        if table is not None and table.slots.get(self.name) is self:
            del table.slots[self.name]

    def resolve(self) -> Any:
        state = self.state
        if isinstance(state, Resolved):
            return state.value
        if state.generator is None:
            raise ResolutionError(f"postponed attribute {self.name!r} has no generator")
        self._resolving = True
        try:
            value = state.generator(self.host, self.name, *state.args, **state.kwargs)
        finally:
            self._resolving = False
        if not self._assigned():
            if value is ASSIGNED:
                raise ResolutionError(
                    f"generator for {self.name!r} returned ASSIGNED without assigning"
                )
            self._writer.freeze(self.host, self.name, value)
        elif value is ASSIGNED or value is None:
            value = getattr(self.host, self.name)
        else:
            try:
                self._writer.freeze(self.host, self.name, value)
            except AttributeViolation:
                # The generator's own assignment stands.
                self._settle(getattr(self.host, self.name))
                self._apply(state.amendments)
                raise
        self._settle(value)
        logger.debug("resolved postponed attribute %r", self.name)
        self._apply(state.amendments)
        return value

    def _apply(self, amendments: list[Amendment]) -> None:
        pending = list(amendments)
        amendments.clear()
        for amendment in pending:
            amendment.apply(self.host, self.name)


def _exists(host: Any, name: str) -> bool:
    # Native class-body or instance attributes count as defined values.
    return describe(host, name) is not None or name in vars(host)


class PostponementRegistry:
    def __init__(self, writer: AttributeWriter) -> None:
        self._writer = writer

    def pending_slot(self, host: Any, name: str) -> Optional[PostponedSlot]:
        """The unresolved slot for ``(host, name)``, if its placeholder is in place."""
        table = own_table(host)
        if table is None:
            return None
        slot = table.slots.get(name)
        if slot is None or table.get(name) is not slot.placeholder:
            return None
        return slot

    def is_pending(self, host: Any, name: str) -> bool:
        return self.pending_slot(host, name) is not None

    def needs_generator(self, host: Any, name: str) -> bool:
        """True when ``name`` is undeclared or only carries queued amendments."""
        slot = self.pending_slot(host, name)
        if slot is not None:
            return slot.state.generator is None
        return not _exists(host, name)

    def _declare(self, host: Any, name: str, state: Unresolved) -> PostponedSlot:
        slot = PostponedSlot(self._writer, host, name, state)
        self._writer.place(host, name, slot.placeholder)
        own_table(host, create=True).slots[name] = slot
        return slot

    def postpone(
        self,
        host: Any,
        name: str,
        generator: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Compute ``host.name`` with ``generator`` on first read.

        The generator is called as ``generator(host, name, *args, **kwargs)``.
        It returns the value, or :data:`ASSIGNED` after assigning the
        attribute itself. Amendments queued before this call are kept.
        """
        ensure_host(host)
        ensure_name(name)
        ensure_callable(generator, "invalid generator function")
        slot = self.pending_slot(host, name)
        if slot is not None:
            slot.state = Unresolved(generator, args, kwargs, slot.state.amendments)
            logger.debug("replaced generator of pending attribute %r", name)
            return
        self._declare(host, name, Unresolved(generator, args, kwargs))
        logger.debug("postponed attribute %r", name)

    def amend(
        self,
        host: Any,
        name: str,
        modifier: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Run ``modifier(host, name, *args, **kwargs)`` once ``host.name`` resolves.

        Amendments run in the order they were added. If the attribute is
        already resolved the modifier runs before this call returns.
        """
        ensure_host(host)
        ensure_name(name)
        ensure_callable(modifier, "invalid modifier function")
        amendment = Amendment(modifier, args, kwargs)
        slot = self.pending_slot(host, name)
        if slot is None and not _exists(host, name):
            slot = self._declare(host, name, Unresolved(None))
        if slot is None:
            amendment.apply(host, name)
            return
        slot.state.amendments.append(amendment)
        logger.debug(
            "queued amendment #%d for %r", len(slot.state.amendments), name
        )
