from __future__ import annotations


class LatebindError(Exception):
    """Base class for every error raised by latebind."""


class InvalidArgument(LatebindError, TypeError):
    """Raised when a public entry point receives a value of the wrong shape."""


class AttributeViolation(LatebindError, AttributeError):
    """Raised when a write contradicts the flags of an existing record."""


class ResolutionError(LatebindError, RuntimeError):
    """Raised when a postponed attribute cannot produce a value."""


class UnimplementedInitializer(LatebindError, NotImplementedError):
    """Raised when a class without an ``init`` method is instantiated."""


class ConfigError(LatebindError, ValueError):
    """Raised when configuration read from the environment is malformed."""
