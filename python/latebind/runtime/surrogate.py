"""Surrogate classes: alternate implementations picked from construction arguments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from ..validators import ensure_host_class, ensure_name, ensure_namespace
from .host import has_own
from .postpone import PostponementRegistry
from .selectors import Selector, as_selector

logger = logging.getLogger(__name__)

SURROGATES = "surrogates"


@dataclass(frozen=True)
class SurrogateEntry:
    namespace: Any
    class_name: str
    selector: Selector

    @property
    def implementation(self) -> Any:
        # Looked up late so the implementation may itself be postponed.
        return getattr(self.namespace, self.class_name)


class SurrogateList:
    """Append-only, ordered entries of one class."""

    __slots__ = ("_entries",)

    def __init__(self, entries=()) -> None:
        self._entries: list[SurrogateEntry] = list(entries)

    def append(self, entry: SurrogateEntry) -> None:
        self._entries.append(entry)

    def __iter__(self) -> Iterator[SurrogateEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> SurrogateEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"SurrogateList({self._entries!r})"


def _inherited_list(cls: Any) -> Optional[SurrogateList]:
    for base in cls.__mro__[1:]:
        if has_own(base, SURROGATES):
            surrogates = getattr(base, SURROGATES)
            if isinstance(surrogates, SurrogateList):
                return surrogates
    return None


def _create_list(cls: Any, name: str, copy_from_parent: bool) -> SurrogateList:
    if copy_from_parent:
        parent = _inherited_list(cls)
        if parent is not None:
            return SurrogateList(parent)
    return SurrogateList()


class SurrogateRegistry:
    def __init__(self, postponement: PostponementRegistry) -> None:
        self._postponement = postponement

    def add_surrogate(
        self,
        cls: Any,
        namespace: Any,
        class_name: str,
        selector: Any,
        *,
        copy_from_parent: bool = False,
    ) -> Any:
        """Register ``namespace.<class_name>`` as a surrogate of ``cls``.

        ``selector`` is a callable receiving the construction arguments, a
        JMESPath query string, or a :class:`Selector`. The class's list is
        created on first registration; ``copy_from_parent`` seeds it with the
        nearest ancestor's entries instead of starting empty.
        """
        ensure_host_class(cls)
        ensure_namespace(namespace)
        ensure_name(class_name, "invalid class name")
        entry = SurrogateEntry(namespace, class_name, as_selector(selector))
        if self._postponement.needs_generator(cls, SURROGATES):
            self._postponement.postpone(cls, SURROGATES, _create_list, copy_from_parent)
        getattr(cls, SURROGATES).append(entry)
        logger.debug(
            "added surrogate %r to %s (%s)", class_name, cls.__name__, entry.selector
        )
        return cls

    def resolve_surrogate(self, cls: Any, *args: Any, **kwargs: Any) -> Any:
        """First implementation whose selector accepts the arguments, else ``None``."""
        ensure_host_class(cls)
        surrogates = getattr(cls, SURROGATES, None)
        if not isinstance(surrogates, SurrogateList):
            return None
        for entry in surrogates:
            if entry.selector.matches(args, kwargs):
                logger.debug("%s resolved to surrogate %r", cls.__name__, entry.class_name)
                return entry.implementation
        return None

    def own_surrogates(self, cls: Any) -> Optional[SurrogateList]:
        ensure_host_class(cls)
        if not has_own(cls, SURROGATES):
            return None
        return getattr(cls, SURROGATES)
