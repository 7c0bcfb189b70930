"""Dispatch error taxonomy.

Every failure the registry or dispatcher detects derives from
``DispatchError``.  Errors raised by a strategy's own ``execute`` are
never wrapped in one of these.
"""

from typing import Optional


class DispatchError(Exception):
    """Base class for registry and dispatcher failures."""


class InvalidArgumentError(DispatchError, ValueError):
    """Blank key or absent input, detected before any lookup."""


class StrategyNotFoundError(DispatchError, LookupError):
    """No implementation is registered for ``key`` in ``family``."""

    def __init__(
        self,
        family: type,
        key: str,
        available: Optional[list[str]] = None,
    ) -> None:
        self.family = family
        self.key = key
        self.available = list(available or [])
        family_name = getattr(family, "name", getattr(family, "__name__", str(family)))
        message = f"Unknown strategy '{key}' in family '{family_name}'."
        if self.available:
            message += f" Available: {', '.join(self.available)}"
        super().__init__(message)


class DuplicateStrategyError(DispatchError, ValueError):
    """A key was registered twice for the same family."""


class RegistrySealedError(DispatchError, RuntimeError):
    """Registration attempted after the registry was sealed."""
