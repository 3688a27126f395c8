from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from ..config import Config
from . import composer
from .attributes import AttributeWriter
from .postpone import PostponementRegistry
from .surrogate import SurrogateList, SurrogateRegistry


class Runtime:
    """One attribute policy plus the registries that write through it.

    Every operation works on caller-supplied hosts; the runtime itself only
    holds the :class:`Config` and the component objects.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = Config() if config is None else config
        self.attributes = AttributeWriter(self.config)
        self.postponement = PostponementRegistry(self.attributes)
        self.surrogates = SurrogateRegistry(self.postponement)

    def __repr__(self) -> str:
        return f"Runtime({self.config!r})"

    # attributes

    def define(
        self,
        host: Any,
        name: str,
        value: Any,
        writable: Optional[bool] = None,
        enumerable: Optional[bool] = None,
        configurable: Optional[bool] = None,
    ) -> Any:
        return self.attributes.define(host, name, value, writable, enumerable, configurable)

    def define_all(
        self,
        host: Any,
        properties: Mapping[str, Any],
        writable: Optional[bool] = None,
        enumerable: Optional[bool] = None,
        configurable: Optional[bool] = None,
    ) -> Any:
        return self.attributes.define_all(host, properties, writable, enumerable, configurable)

    def define_prefixed(
        self,
        host: Any,
        prefix: str,
        properties: Mapping[str, Any],
        writable: Optional[bool] = None,
        enumerable: Optional[bool] = None,
        configurable: Optional[bool] = None,
    ) -> Any:
        return self.attributes.define_prefixed(
            host, prefix, properties, writable, enumerable, configurable
        )

    def remove_all_callable(self, host: Any) -> Any:
        return self.attributes.remove_all_callable(host)

    def target(self, host: Any) -> Any:
        return self.attributes.target(host)

    def add_method(self, host: Any, methods: Mapping[str, Any]) -> Any:
        return self.attributes.add_method(host, methods)

    def add_private_method(self, host: Any, methods: Mapping[str, Any]) -> Any:
        return self.attributes.add_private_method(host, methods)

    def add_public(self, host: Any, properties: Mapping[str, Any]) -> Any:
        return self.attributes.add_public(host, properties)

    def add_private(self, host: Any, properties: Mapping[str, Any]) -> Any:
        return self.attributes.add_private(host, properties)

    def add_constant(self, host: Any, properties: Mapping[str, Any]) -> Any:
        return self.attributes.add_constant(host, properties)

    def add_private_constant(self, host: Any, properties: Mapping[str, Any]) -> Any:
        return self.attributes.add_private_constant(host, properties)

    def add_mock(self, host: Any, methods: Mapping[str, Any]) -> Any:
        return self.attributes.add_mock(host, methods)

    def remove_mocks(self, host: Any) -> Any:
        return self.attributes.remove_mocks(host)

    # postponement

    def postpone(
        self, host: Any, name: str, generator: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> None:
        self.postponement.postpone(host, name, generator, *args, **kwargs)

    def amend(
        self, host: Any, name: str, modifier: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> None:
        self.postponement.amend(host, name, modifier, *args, **kwargs)

    def is_pending(self, host: Any, name: str) -> bool:
        return self.postponement.is_pending(host, name)

    # surrogates

    def add_surrogate(
        self,
        cls: Any,
        namespace: Any,
        class_name: str,
        selector: Any,
        *,
        copy_from_parent: bool = False,
    ) -> Any:
        return self.surrogates.add_surrogate(
            cls, namespace, class_name, selector, copy_from_parent=copy_from_parent
        )

    def resolve_surrogate(self, cls: Any, *args: Any, **kwargs: Any) -> Any:
        return self.surrogates.resolve_surrogate(cls, *args, **kwargs)

    def own_surrogates(self, cls: Any) -> Optional[SurrogateList]:
        return self.surrogates.own_surrogates(cls)

    # classes

    def extend(self, base: Any = None, name: Optional[str] = None) -> Any:
        if base is None:
            base = composer.Base
        return composer.extend(base, name, layered=self.config.dual_layer, runtime=self)

    def instantiate(self, cls: Any) -> Any:
        return composer.instantiate(cls)
