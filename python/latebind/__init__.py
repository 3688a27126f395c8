from __future__ import annotations

from .config import Config
from .errors import (
    AttributeViolation,
    ConfigError,
    InvalidArgument,
    LatebindError,
    ResolutionError,
    UnimplementedInitializer,
)
from .runtime import (
    ASSIGNED,
    Accessor,
    AttributeRecord,
    Base,
    Host,
    HostMeta,
    Namespace,
    PredicateSelector,
    QuerySelector,
    Runtime,
    Selector,
    add_constant,
    add_method,
    add_mock,
    add_private,
    add_private_constant,
    add_private_method,
    add_public,
    add_surrogate,
    amend,
    default_runtime,
    define,
    define_all,
    define_prefixed,
    describe,
    enumerable_names,
    extend,
    has_own,
    instantiate,
    own_names,
    postpone,
    remove_all_callable,
    target,
    remove_mocks,
    resolve_surrogate,
    snapshot,
)


def _resolve_version() -> str:
    try:
        from importlib.metadata import version

        return version("latebind")
    except Exception:  # pragma: no cover - during development
        return "0.0.0"


def __getattr__(name: str):
    if name == "__version__":
        value = _resolve_version()
        globals()["__version__"] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["__version__"])


__all__ = [
    "ASSIGNED",
    "Accessor",
    "AttributeRecord",
    "AttributeViolation",
    "Base",
    "Config",
    "ConfigError",
    "Host",
    "HostMeta",
    "InvalidArgument",
    "LatebindError",
    "Namespace",
    "PredicateSelector",
    "QuerySelector",
    "ResolutionError",
    "Runtime",
    "Selector",
    "UnimplementedInitializer",
    "add_constant",
    "add_method",
    "add_mock",
    "add_private",
    "add_private_constant",
    "add_private_method",
    "add_public",
    "add_surrogate",
    "amend",
    "default_runtime",
    "define",
    "define_all",
    "define_prefixed",
    "describe",
    "enumerable_names",
    "extend",
    "has_own",
    "instantiate",
    "own_names",
    "postpone",
    "remove_all_callable",
    "target",
    "remove_mocks",
    "resolve_surrogate",
    "snapshot",
    "__version__",
]
