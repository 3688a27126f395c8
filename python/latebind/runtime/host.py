"""Attribute tables and the access protocol of host objects.

Every host keeps an :class:`AttributeTable` mapping names to
:class:`AttributeRecord` entries. Reads consult the host's own table first,
then the tables of the classes along the MRO. A native class-body attribute
met first at some MRO position wins, as it would in plain Python.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, NamedTuple, Optional

from ..errors import AttributeViolation, InvalidArgument
from ..validators import is_reserved

TABLE_KEY = "__attributes__"

_PRIMITIVES = (str, bytes, int, float, bool, type(None))


class Accessor(NamedTuple):
    """Getter/setter pair; pass one to ``define`` to get an accessor record."""

    get: Optional[Callable[[Any], Any]] = None
    set: Optional[Callable[[Any, Any], None]] = None


@dataclass(frozen=True)
class AttributeRecord:
    """One named slot on a host: a stored value or an accessor pair."""

    value: Any = None
    getter: Optional[Callable[[Any], Any]] = None
    setter: Optional[Callable[[Any, Any], None]] = None
    writable: bool = False
    enumerable: bool = False
    configurable: bool = False

    @property
    def is_accessor(self) -> bool:
        return self.getter is not None or self.setter is not None

    @classmethod
    def of(
        cls, value: Any, *, writable: bool, enumerable: bool, configurable: bool
    ) -> "AttributeRecord":
        if isinstance(value, Accessor):
            if value.get is None and value.set is None:
                raise InvalidArgument("accessor needs a getter or a setter")
            return cls(
                getter=value.get,
                setter=value.set,
                enumerable=enumerable,
                configurable=configurable,
            )
        return cls(
            value=value,
            writable=writable,
            enumerable=enumerable,
            configurable=configurable,
        )


class AttributeTable:
    """Records of one host, in definition order, plus its postponed slots."""

    __slots__ = ("_records", "slots")

    def __init__(self) -> None:
        self._records: dict[str, AttributeRecord] = {}
        self.slots: dict[str, Any] = {}

    def get(self, name: str) -> Optional[AttributeRecord]:
        return self._records.get(name)

    def put(self, name: str, record: AttributeRecord) -> None:
        self._records[name] = record

    def remove(self, name: str) -> None:
        del self._records[name]

    def items(self) -> list[tuple[str, AttributeRecord]]:
        return list(self._records.items())

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self):
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)


def is_host(obj: Any) -> bool:
    return isinstance(obj, (Host, HostMeta))


def _label(obj: Any) -> str:
    if isinstance(obj, type):
        return f"class {obj.__name__!r}"
    return f"{type(obj).__name__!r} object"


def own_table(obj: Any, create: bool = False) -> Optional[AttributeTable]:
    namespace = obj.__dict__
    table = namespace.get(TABLE_KEY)
    if table is None and create:
        table = AttributeTable()
        if isinstance(obj, type):
            type.__setattr__(obj, TABLE_KEY, table)
        else:
            namespace[TABLE_KEY] = table
    return table


def lookup(obj: Any, name: str) -> tuple[Optional[AttributeRecord], Any]:
    """Find the record for ``name`` and the object that owns it.

    Returns ``(None, owner)`` when a native attribute wins at ``owner``'s MRO
    position, and ``(None, None)`` when nothing is found.
    """
    if isinstance(obj, type):
        chain = obj.__mro__
    else:
        table = own_table(obj)
        if table is not None:
            record = table.get(name)
            if record is not None:
                return record, obj
        chain = type(obj).__mro__
    for klass in chain:
        namespace = klass.__dict__
        table = namespace.get(TABLE_KEY)
        if table is not None:
            record = table.get(name)
            if record is not None:
                return record, klass
        if name in namespace:
            return None, klass
    return None, None


def read(record: AttributeRecord, obj: Any, owner: Any, name: str) -> Any:
    if record.is_accessor:
        if record.getter is None:
            raise AttributeViolation(f"attribute {name!r} of {_label(obj)} has no getter")
        return record.getter(obj)
    value = record.value
    if owner is obj and not isinstance(obj, type):
        return value
    binder = getattr(type(value), "__get__", None)
    if binder is None:
        return value
    if isinstance(obj, type):
        return binder(value, None, obj)
    return binder(value, obj, type(obj))


def _loose(value: Any) -> AttributeRecord:
    return AttributeRecord(value=value, writable=True, enumerable=True, configurable=True)


def assign(obj: Any, name: str, value: Any, native_setattr: Callable) -> None:
    record, owner = lookup(obj, name)
    if record is None:
        native = owner is obj or (
            owner is not None
            and not isinstance(obj, type)
            and hasattr(type(owner.__dict__[name]), "__set__")
        )
        if native:
            native_setattr(obj, name, value)
        else:
            own_table(obj, create=True).put(name, _loose(value))
        return
    if record.is_accessor:
        if record.setter is None:
            raise AttributeViolation(f"attribute {name!r} of {_label(obj)} has no setter")
        record.setter(obj, value)
        return
    if not record.writable:
        raise AttributeViolation(
            f"cannot assign to read-only attribute {name!r} of {_label(obj)}"
        )
    table = own_table(obj, create=True)
    if owner is obj:
        table.put(name, replace(record, value=value))
    else:
        table.put(name, _loose(value))


def delete(obj: Any, name: str, native_delattr: Callable) -> None:
    table = own_table(obj)
    record = table.get(name) if table is not None else None
    if record is None:
        native_delattr(obj, name)
        return
    if not record.configurable:
        raise AttributeViolation(
            f"cannot delete non-configurable attribute {name!r} of {_label(obj)}"
        )
    table.remove(name)


def _same_value(left: Any, right: Any) -> bool:
    if left is right:
        return True
    return (
        type(left) is type(right) and isinstance(left, _PRIMITIVES) and left == right
    )


def check_redefinition(
    name: str, current: Optional[AttributeRecord], record: AttributeRecord
) -> None:
    if current is None or current.configurable:
        return
    if record.configurable:
        raise AttributeViolation(f"attribute {name!r} is not configurable")
    if record.enumerable != current.enumerable:
        raise AttributeViolation(
            f"cannot change enumerability of non-configurable attribute {name!r}"
        )
    if current.is_accessor or record.is_accessor:
        same = (
            current.is_accessor == record.is_accessor
            and current.getter is record.getter
            and current.setter is record.setter
        )
        if not same:
            raise AttributeViolation(f"cannot redefine non-configurable attribute {name!r}")
        return
    if current.writable:
        return
    if record.writable or not _same_value(current.value, record.value):
        raise AttributeViolation(f"cannot redefine read-only attribute {name!r}")


def install_many(obj: Any, items: Iterable[tuple[str, AttributeRecord]]) -> None:
    """Install records on ``obj``; every record is checked before any is written."""
    items = list(items)
    table = own_table(obj)
    for name, record in items:
        check_redefinition(name, table.get(name) if table is not None else None, record)
    table = own_table(obj, create=True)
    namespace = obj.__dict__
    for name, record in items:
        if name in namespace:
            if isinstance(obj, type):
                type.__delattr__(obj, name)
            else:
                del namespace[name]
        table.put(name, record)


def install(obj: Any, name: str, record: AttributeRecord) -> None:
    install_many(obj, [(name, record)])


def describe(obj: Any, name: str) -> Optional[AttributeRecord]:
    """Return the own record for ``name``, or ``None``."""
    table = own_table(obj)
    return table.get(name) if table is not None else None


def has_own(obj: Any, name: str) -> bool:
    return describe(obj, name) is not None


def own_names(obj: Any) -> list[str]:
    table = own_table(obj)
    return list(table) if table is not None else []


def enumerable_names(obj: Any) -> list[str]:
    table = own_table(obj)
    if table is None:
        return []
    return [name for name, record in table.items() if record.enumerable]


def snapshot(obj: Any) -> dict[str, Any]:
    """Own enumerable stored values, without triggering any accessor."""
    table = own_table(obj)
    if table is None:
        return {}
    return {
        name: record.value
        for name, record in table.items()
        if record.enumerable and not record.is_accessor
    }


def _table_names(chain: Iterable[Any]) -> set[str]:
    names: set[str] = set()
    for klass in chain:
        table = klass.__dict__.get(TABLE_KEY)
        if table is not None:
            names.update(table)
    return names


class HostMeta(type):
    """Metaclass giving each class its own attribute table."""

    def __getattribute__(cls, name):
        if is_reserved(name):
            return type.__getattribute__(cls, name)
        record, owner = lookup(cls, name)
        if record is None:
            return type.__getattribute__(cls, name)
        return read(record, cls, owner, name)

    def __setattr__(cls, name, value):
        if is_reserved(name):
            type.__setattr__(cls, name, value)
            return
        assign(cls, name, value, type.__setattr__)

    def __delattr__(cls, name):
        if is_reserved(name):
            type.__delattr__(cls, name)
            return
        delete(cls, name, type.__delattr__)

    def __dir__(cls):
        return sorted(set(type.__dir__(cls)) | _table_names(cls.__mro__))


class Host:
    """Instance side of the attribute table protocol."""

    def __getattribute__(self, name):
        if is_reserved(name):
            return object.__getattribute__(self, name)
        record, owner = lookup(self, name)
        if record is None:
            return object.__getattribute__(self, name)
        return read(record, self, owner, name)

    def __setattr__(self, name, value):
        if is_reserved(name):
            object.__setattr__(self, name, value)
            return
        assign(self, name, value, object.__setattr__)

    def __delattr__(self, name):
        if is_reserved(name):
            object.__delattr__(self, name)
            return
        delete(self, name, object.__delattr__)

    def __dir__(self):
        names = set(object.__dir__(self)) | set(own_names(self))
        return sorted(names | _table_names(type(self).__mro__))


class Namespace(Host):
    """Plain attribute host, handy as a registry of postponed classes."""

    def __repr__(self) -> str:
        return f"Namespace({', '.join(own_names(self))})"
