"""Runtime configuration, optionally read from the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError, InvalidArgument

ENV_PREFIX = "LATEBIND_"

_TRUE = frozenset(("1", "true", "yes", "on"))
_FALSE = frozenset(("0", "false", "no", "off"))


class EnvSettings:
    __slots__ = ("_env",)

    def __init__(self, env: Optional[Mapping[str, str]] = None) -> None:
        self._env = os.environ if env is None else env

    def _lookup(self, key: str) -> Optional[str]:
        value = self._env.get(ENV_PREFIX + key)
        if value is None or not value.strip():
            return None
        return value.strip()

    def flag(self, key: str, default: bool) -> bool:
        raw = self._lookup(key)
        if raw is None:
            return default
        lowered = raw.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ConfigError(f"{ENV_PREFIX}{key} must be a boolean, got {raw!r}")

    def text(self, key: str, default: str) -> str:
        raw = self._lookup(key)
        return default if raw is None else raw


@dataclass(frozen=True)
class Config:
    """Attribute policy shared by everything a :class:`Runtime` writes.

    ``loose_defaults`` flips omitted flags from ``False`` to ``True``.
    ``dual_layer`` makes class members land one class below the class they
    are added to, so an outer layer can shadow them. ``force_writable``
    makes every value written through the flag policy writable.
    """

    loose_defaults: bool = False
    dual_layer: bool = False
    force_writable: bool = False
    private_prefix: str = "_"

    def __post_init__(self) -> None:
        if not isinstance(self.private_prefix, str) or not self.private_prefix:
            raise InvalidArgument(
                f"private prefix must be a non-empty string, got {self.private_prefix!r}"
            )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Config":
        settings = EnvSettings(env)
        return cls(
            loose_defaults=settings.flag("LOOSE_DEFAULTS", False),
            dual_layer=settings.flag("DUAL_LAYER", False),
            force_writable=settings.flag("FORCE_WRITABLE", False),
            private_prefix=settings.text("PRIVATE_PREFIX", "_"),
        )
