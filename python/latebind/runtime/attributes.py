"""Property definition with explicit writable/enumerable/configurable flags."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..config import Config
from ..errors import InvalidArgument
from ..validators import (
    ensure_all_callable,
    ensure_host,
    ensure_name,
    ensure_properties,
)
from .host import (
    AttributeRecord,
    HostMeta,
    install,
    install_many,
    is_host,
    own_table,
)

logger = logging.getLogger(__name__)


def add_prefix(name: str, prefix: str) -> str:
    if name.startswith(prefix):
        return name
    return prefix + name


class AttributeWriter:
    """Writes attribute records onto hosts under one :class:`Config` policy."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def flags(
        self,
        writable: Optional[bool],
        enumerable: Optional[bool],
        configurable: Optional[bool],
    ) -> tuple[bool, bool, bool]:
        default = self.config.loose_defaults
        resolved = tuple(
            default if flag is None else bool(flag)
            for flag in (writable, enumerable, configurable)
        )
        if self.config.force_writable:
            return (True, resolved[1], resolved[2])
        return resolved  # type: ignore[return-value]

    def record(
        self,
        value: Any,
        writable: Optional[bool] = None,
        enumerable: Optional[bool] = None,
        configurable: Optional[bool] = None,
    ) -> AttributeRecord:
        is_writable, is_enumerable, is_configurable = self.flags(
            writable, enumerable, configurable
        )
        return AttributeRecord.of(
            value,
            writable=is_writable,
            enumerable=is_enumerable,
            configurable=is_configurable,
        )

    def define(
        self,
        host: Any,
        name: str,
        value: Any,
        writable: Optional[bool] = None,
        enumerable: Optional[bool] = None,
        configurable: Optional[bool] = None,
    ) -> Any:
        """Install a single record for ``name`` on ``host``.

        ``value`` may be an :class:`Accessor` to define a getter/setter pair.
        Flags left as ``None`` follow the configured default policy.
        """
        ensure_host(host)
        ensure_name(name)
        install(host, name, self.record(value, writable, enumerable, configurable))
        return host

    def define_all(
        self,
        host: Any,
        properties: Mapping[str, Any],
        writable: Optional[bool] = None,
        enumerable: Optional[bool] = None,
        configurable: Optional[bool] = None,
    ) -> Any:
        ensure_host(host)
        ensure_properties(properties)
        install_many(
            host,
            [
                (name, self.record(value, writable, enumerable, configurable))
                for name, value in properties.items()
            ],
        )
        return host

    def define_prefixed(
        self,
        host: Any,
        prefix: str,
        properties: Mapping[str, Any],
        writable: Optional[bool] = None,
        enumerable: Optional[bool] = None,
        configurable: Optional[bool] = None,
    ) -> Any:
        """Like :meth:`define_all`, adding ``prefix`` to names that lack it."""
        ensure_host(host)
        if not isinstance(prefix, str) or not prefix:
            raise InvalidArgument(f"invalid prefix, got {prefix!r}")
        ensure_properties(properties)
        items = []
        for name, value in properties.items():
            prefixed = add_prefix(name, prefix)
            ensure_name(prefixed)
            items.append(
                (prefixed, self.record(value, writable, enumerable, configurable))
            )
        install_many(host, items)
        return host

    def place(self, host: Any, name: str, record: AttributeRecord) -> Any:
        """Install an exact record, bypassing the default flag policy."""
        install(host, name, record)
        return host

    def freeze(self, host: Any, name: str, value: Any) -> Any:
        return self.place(
            host,
            name,
            AttributeRecord(value=value, writable=False, enumerable=True, configurable=False),
        )

    def remove_all_callable(self, host: Any) -> Any:
        """Delete every own configurable record holding a callable value."""
        ensure_host(host)
        table = own_table(host)
        if table is None:
            return host
        for name, record in table.items():
            if record.is_accessor or not callable(record.value):
                continue
            if not record.configurable:
                logger.debug("keeping non-configurable callable %r", name)
                continue
            table.remove(name)
        return host

    def target(self, host: Any) -> Any:
        """Where class members go: one level down in dual-layer mode."""
        if not self.config.dual_layer:
            return host
        if isinstance(host, HostMeta):
            bases = host.__bases__
            if bases and is_host(bases[0]):
                return bases[0]
            return host
        return type(host)

    # property families

    def add_method(self, host: Any, methods: Mapping[str, Any]) -> Any:
        ensure_host(host)
        ensure_all_callable(methods)
        self.define_all(self.target(host), methods, False, True, False)
        return host

    def add_private_method(self, host: Any, methods: Mapping[str, Any]) -> Any:
        ensure_host(host)
        ensure_all_callable(methods)
        self.define_prefixed(
            self.target(host), self.config.private_prefix, methods, False, False, False
        )
        return host

    def add_public(self, host: Any, properties: Mapping[str, Any]) -> Any:
        return self.define_all(host, properties, True, True, False)

    def add_private(self, host: Any, properties: Mapping[str, Any]) -> Any:
        return self.define_prefixed(
            host, self.config.private_prefix, properties, True, False, False
        )

    def add_constant(self, host: Any, properties: Mapping[str, Any]) -> Any:
        return self.define_all(host, properties, False, True, False)

    def add_private_constant(self, host: Any, properties: Mapping[str, Any]) -> Any:
        return self.define_prefixed(
            host, self.config.private_prefix, properties, False, False, False
        )

    def add_mock(self, host: Any, methods: Mapping[str, Any]) -> Any:
        ensure_all_callable(methods, "invalid mock methods")
        return self.define_all(host, methods, False, True, True)

    def remove_mocks(self, host: Any) -> Any:
        return self.remove_all_callable(host)
