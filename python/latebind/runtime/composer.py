"""Minimal class derivation and instantiation on top of host classes."""

from __future__ import annotations

import functools
import types
from typing import Any, Mapping, Optional

from ..errors import InvalidArgument, UnimplementedInitializer
from ..validators import ensure_host_class
from .host import Host, HostMeta


def extend(
    base: Any,
    name: Optional[str] = None,
    *,
    layered: bool = False,
    runtime: Any = None,
) -> Any:
    """Derive a new host class from ``base``.

    With ``layered`` the result sits on top of an intermediate member layer,
    the target of class member writers in dual-layer mode.
    """
    ensure_host_class(base, "invalid base class")
    name = base.__name__ if name is None else name
    namespace: dict[str, Any] = {"__module__": base.__module__}
    if runtime is not None:
        namespace["__runtime__"] = runtime
    metaclass = type(base)
    if layered:
        base = metaclass(f"{name}Members", (base,), dict(namespace))
    return metaclass(name, (base,), namespace)


def instantiate(cls: Any) -> Any:
    """Create an instance of ``cls`` without running any initializer."""
    ensure_host_class(cls)
    return object.__new__(cls)


def _runtime_of(obj: Any):
    cls = obj if isinstance(obj, type) else type(obj)
    return cls.runtime()


class hostmethod:
    """Method bound to the instance when there is one, else to the class."""

    def __init__(self, func) -> None:
        self.__func__ = func
        functools.update_wrapper(self, func)

    def __get__(self, instance, owner=None):
        return types.MethodType(self.__func__, owner if instance is None else instance)


class Base(Host, metaclass=HostMeta):
    """Root of composed classes.

    Subclasses implement ``init`` and are instantiated through
    :meth:`create`, which first consults the class's surrogates.
    """

    __runtime__: Any = None

    @classmethod
    def runtime(cls):
        if cls.__runtime__ is not None:
            return cls.__runtime__
        from . import default_runtime

        return default_runtime()

    @classmethod
    def extend(cls, name: Optional[str] = None):
        return cls.runtime().extend(cls, name)

    @classmethod
    def create(cls, *args: Any, **kwargs: Any):
        surrogate = cls.runtime().resolve_surrogate(cls, *args, **kwargs)
        target = cls
        if surrogate is not None:
            if not isinstance(surrogate, HostMeta):
                raise InvalidArgument(
                    f"surrogate of {cls.__name__!r} is not a class, got {type(surrogate).__name__}"
                )
            target = surrogate
        instance = instantiate(target)
        init = getattr(instance, "init", None)
        if not callable(init):
            raise UnimplementedInitializer(
                f"class {target.__name__!r} doesn't implement .init()"
            )
        init(*args, **kwargs)
        return instance

    @classmethod
    def add_method(cls, methods: Mapping[str, Any]):
        return cls.runtime().add_method(cls, methods)

    @classmethod
    def add_private_method(cls, methods: Mapping[str, Any]):
        return cls.runtime().add_private_method(cls, methods)

    @classmethod
    def add_surrogate(
        cls, namespace: Any, class_name: str, selector: Any, *, copy_from_parent: bool = False
    ):
        return cls.runtime().add_surrogate(
            cls, namespace, class_name, selector, copy_from_parent=copy_from_parent
        )

    @hostmethod
    def add_public(self, properties: Mapping[str, Any]):
        return _runtime_of(self).add_public(self, properties)

    @hostmethod
    def add_private(self, properties: Mapping[str, Any]):
        return _runtime_of(self).add_private(self, properties)

    @hostmethod
    def add_constant(self, properties: Mapping[str, Any]):
        return _runtime_of(self).add_constant(self, properties)

    @hostmethod
    def add_private_constant(self, properties: Mapping[str, Any]):
        return _runtime_of(self).add_private_constant(self, properties)

    @hostmethod
    def add_mock(self, methods: Mapping[str, Any]):
        return _runtime_of(self).add_mock(self, methods)

    @hostmethod
    def remove_mocks(self):
        return _runtime_of(self).remove_mocks(self)
