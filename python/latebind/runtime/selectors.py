"""Selector strategies deciding whether a surrogate fits construction arguments."""

from __future__ import annotations

from typing import Any, Callable

from ..errors import InvalidArgument


class Selector:
    """Base class; subclasses answer :meth:`matches` for one argument set."""

    __slots__ = ()

    def matches(self, args: tuple, kwargs: dict) -> bool:
        raise NotImplementedError


class PredicateSelector(Selector):
    """Calls ``predicate(*args, **kwargs)`` and tests the result for truth."""

    __slots__ = ("predicate",)

    def __init__(self, predicate: Callable[..., Any]) -> None:
        self.predicate = predicate

    def matches(self, args: tuple, kwargs: dict) -> bool:
        return bool(self.predicate(*args, **kwargs))

    def __repr__(self) -> str:
        name = getattr(self.predicate, "__qualname__", repr(self.predicate))
        return f"PredicateSelector({name})"


class QuerySelector(Selector):
    """Evaluates a JMESPath expression against the construction arguments.

    The expression sees ``{"args": [...], "kwargs": {...}}``; a truthy result
    selects the surrogate. String literals use JMESPath raw quotes, e.g.
    ``args[0].format == 'csv'``.
    """

    __slots__ = ("expression", "_compiled")

    def __init__(self, expression: str) -> None:
        import jmespath as _jmespath  # type: ignore[import-untyped]
        from jmespath.exceptions import JMESPathError  # type: ignore[import-untyped]

        try:
            self._compiled = _jmespath.compile(expression)
        except JMESPathError as exc:
            raise InvalidArgument(f"invalid selector query {expression!r}: {exc}") from exc
        self.expression = expression

    def matches(self, args: tuple, kwargs: dict) -> bool:
        return bool(self._compiled.search({"args": list(args), "kwargs": dict(kwargs)}))

    def __repr__(self) -> str:
        return f"QuerySelector({self.expression!r})"


def as_selector(value: Any) -> Selector:
    if isinstance(value, Selector):
        return value
    if isinstance(value, str):
        return QuerySelector(value)
    if callable(value):
        return PredicateSelector(value)
    raise InvalidArgument(
        f"invalid selector, expected a callable or a query, got {type(value).__name__}"
    )
