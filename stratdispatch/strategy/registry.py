"""Strategy registry: maps (family, key) pairs to strategy instances.

Populated once at startup (see ``stratdispatch.bootstrap``), sealed, and
then only read by the dispatcher.
"""

import logging
from typing import Any, Optional

from stratdispatch.errors import (
    DuplicateStrategyError,
    InvalidArgumentError,
    RegistrySealedError,
)
from stratdispatch.strategy.arithmetic import AddStrategy, SubtractStrategy
from stratdispatch.strategy.base import StrategyProtocol, is_family

logger = logging.getLogger("stratdispatch.registry")

DUPLICATE_POLICIES = ("fail", "replace")

ARITHMETIC_STRATEGIES: dict[str, type] = {
    "Add": AddStrategy,
    "Sub": SubtractStrategy,
}


def is_valid_key(key: Any) -> bool:
    """Return ``True`` if *key* is a string with a non-whitespace character."""
    return isinstance(key, str) and bool(key.strip())


class StrategyRegistry:
    """Keyed strategy store partitioned by capability family.

    Args:
        duplicate_policy: ``"fail"`` raises ``DuplicateStrategyError`` when
            a key is registered twice in one family; ``"replace"`` keeps
            the most recent registration.
    """

    def __init__(self, duplicate_policy: str = "fail") -> None:
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicate_policy must be one of {DUPLICATE_POLICIES}, "
                f"got '{duplicate_policy}'"
            )
        self._duplicate_policy = duplicate_policy
        self._families: dict[type, dict[str, StrategyProtocol]] = {}
        self._sealed = False

    # ── Registration ─────────────────────────────────────────────────────

    def register(self, family: type, key: str, implementation: StrategyProtocol) -> None:
        """Add *implementation* under *key* in *family*.

        Raises:
            TypeError: *family* is not a ``StrategyFamily`` subclass or
                *implementation* has no callable ``execute``.
            InvalidArgumentError: *key* is blank.
            DuplicateStrategyError: *key* already taken under the
                ``"fail"`` policy, or another family already uses
                *family*.name (regardless of policy).
            RegistrySealedError: the registry has been sealed.
        """
        if self._sealed:
            raise RegistrySealedError(
                f"Cannot register '{key}': registry is sealed."
            )
        if not is_family(family):
            raise TypeError(f"family must be a StrategyFamily subclass, got {family!r}")
        if not is_valid_key(key):
            raise InvalidArgumentError(f"Strategy key must be a non-blank string, got {key!r}")
        if isinstance(implementation, type):
            raise TypeError(
                f"Register an instance of {implementation.__name__}, not the class"
            )
        if not isinstance(implementation, StrategyProtocol) or not callable(implementation.execute):
            raise TypeError(
                f"{type(implementation).__name__} does not implement StrategyProtocol"
            )

        clash = self.family_by_name(family.name)
        if clash is not None and clash is not family:
            raise DuplicateStrategyError(
                f"Family name '{family.name}' is already used by {clash.__qualname__}."
            )

        entries = self._families.setdefault(family, {})
        existing = entries.get(key)
        if existing is not None and existing is not implementation:
            if self._duplicate_policy == "fail":
                raise DuplicateStrategyError(
                    f"Strategy '{key}' is already registered in family '{family.name}'."
                )
            logger.warning(
                "Replacing strategy '%s' in family '%s' (%s -> %s).",
                key,
                family.name,
                type(existing).__name__,
                type(implementation).__name__,
            )
        entries[key] = implementation

    def seal(self) -> None:
        """End the initialisation phase; further ``register`` calls fail."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def duplicate_policy(self) -> str:
        return self._duplicate_policy

    # ── Lookup ───────────────────────────────────────────────────────────

    def resolve(self, family: type, key: str) -> Optional[StrategyProtocol]:
        """Return the implementation for *key* in *family*, or ``None``."""
        if not is_family(family) or not isinstance(key, str):
            return None
        entries = self._families.get(family)
        if entries is None:
            return None
        return entries.get(key)

    def keys(self, family: type) -> list[str]:
        """Sorted keys registered for *family* (empty if unknown)."""
        if not is_family(family):
            return []
        return sorted(self._families.get(family, {}))

    def families(self) -> list[type]:
        """Families with at least one registration, ordered by name."""
        return sorted(
            (f for f, entries in self._families.items() if entries),
            key=lambda f: f.name,
        )

    def family_by_name(self, name: str) -> Optional[type]:
        """Look up a registered family by its ``name`` attribute."""
        for family in self._families:
            if family.name == name:
                return family
        return None

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        family, key = item
        return self.resolve(family, key) is not None

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._families.values())
