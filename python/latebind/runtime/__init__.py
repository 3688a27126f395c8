from __future__ import annotations

from typing import Any, Callable, Optional

from ..config import Config
from .composer import Base, extend, hostmethod, instantiate
from .engine import Runtime
from .host import (
    Accessor,
    AttributeRecord,
    Host,
    HostMeta,
    Namespace,
    describe,
    enumerable_names,
    has_own,
    is_host,
    own_names,
    snapshot,
)
from .postpone import ASSIGNED
from .selectors import PredicateSelector, QuerySelector, Selector
from .surrogate import SURROGATES, SurrogateEntry, SurrogateList

__all__ = [
    "ASSIGNED",
    "Accessor",
    "AttributeRecord",
    "Base",
    "Host",
    "HostMeta",
    "Namespace",
    "PredicateSelector",
    "QuerySelector",
    "Runtime",
    "SURROGATES",
    "Selector",
    "SurrogateEntry",
    "SurrogateList",
    "default_runtime",
    "describe",
    "enumerable_names",
    "extend",
    "has_own",
    "hostmethod",
    "instantiate",
    "is_host",
    "own_names",
    "snapshot",
    "DEFAULT_RUNTIME_OPERATIONS",
]

# Operations re-exported as module-level functions bound to the default runtime.
DEFAULT_RUNTIME_OPERATIONS: tuple[str, ...] = (
    "define",
    "define_all",
    "define_prefixed",
    "remove_all_callable",
    "target",
    "add_method",
    "add_private_method",
    "add_public",
    "add_private",
    "add_constant",
    "add_private_constant",
    "add_mock",
    "remove_mocks",
    "postpone",
    "amend",
    "add_surrogate",
    "resolve_surrogate",
)

_DEFAULT_RUNTIME: Optional[Runtime] = None


def default_runtime() -> Runtime:
    """The process-wide runtime, configured from the environment on first use."""
    global _DEFAULT_RUNTIME
    if _DEFAULT_RUNTIME is None:
        _DEFAULT_RUNTIME = Runtime(Config.from_env())
    return _DEFAULT_RUNTIME


def _make_default_wrapper(operation: str) -> Callable[..., Any]:
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return getattr(default_runtime(), operation)(*args, **kwargs)

    wrapper.__name__ = operation
    wrapper.__qualname__ = operation
    wrapper.__doc__ = getattr(Runtime, operation).__doc__
    return wrapper


for _operation in DEFAULT_RUNTIME_OPERATIONS:
    globals()[_operation] = _make_default_wrapper(_operation)
    __all__.append(_operation)
