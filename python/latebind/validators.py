"""Argument checks shared by the public entry points."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import InvalidArgument


def _type_name(value: Any) -> str:
    return type(value).__name__


def is_reserved(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def ensure_host(host: Any, message: str = "host is not an attribute host") -> None:
    from .runtime.host import is_host

    if not is_host(host):
        raise InvalidArgument(f"{message}, got {_type_name(host)}")


def ensure_host_class(cls: Any, message: str = "invalid class") -> None:
    from .runtime.host import HostMeta

    if not isinstance(cls, HostMeta):
        raise InvalidArgument(f"{message}, got {_type_name(cls)}")


def ensure_name(name: Any, message: str = "invalid property name") -> None:
    if not isinstance(name, str) or not name:
        raise InvalidArgument(f"{message}, got {name!r}")
    if is_reserved(name):
        raise InvalidArgument(f"{message}, {name!r} is reserved")


def ensure_callable(value: Any, message: str) -> None:
    if not callable(value):
        raise InvalidArgument(f"{message}, got {_type_name(value)}")


def ensure_properties(
    properties: Any, message: str = "invalid property mapping"
) -> None:
    if not isinstance(properties, Mapping):
        raise InvalidArgument(f"{message}, got {_type_name(properties)}")
    for name in properties:
        ensure_name(name)


def ensure_all_callable(properties: Any, message: str = "invalid methods") -> None:
    ensure_properties(properties, message)
    for name, value in properties.items():
        if not callable(value):
            raise InvalidArgument(f"{message}, {name!r} is {_type_name(value)}")


def ensure_namespace(namespace: Any, message: str = "invalid namespace object") -> None:
    if namespace is None or isinstance(namespace, (str, bytes, int, float, bool)):
        raise InvalidArgument(f"{message}, got {_type_name(namespace)}")
