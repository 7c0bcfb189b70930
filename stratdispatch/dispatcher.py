"""Strategy dispatcher: resolves a key and invokes the strategy.

Three outcomes per call: the strategy's return value, an
``InvalidArgumentError`` (bad key or missing input, raised before any
lookup), or a ``StrategyNotFoundError``.  Anything the strategy itself
raises, cancellation included, reaches the caller unchanged.
"""

import inspect
import logging
from typing import Any, Generic

from stratdispatch.errors import InvalidArgumentError, StrategyNotFoundError
from stratdispatch.strategy.base import In, Out, StrategyFamily
from stratdispatch.strategy.registry import StrategyRegistry, is_valid_key

logger = logging.getLogger("stratdispatch.dispatcher")


class StrategyDispatcher:
    """Single entry point for executing registered strategies.

    Args:
        registry: A populated ``StrategyRegistry`` (or any object with a
                  compatible ``resolve(family, key)``).
    """

    def __init__(self, registry: StrategyRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> StrategyRegistry:
        return self._registry

    async def execute_strategy(
        self,
        family: "type[StrategyFamily[In, Out]]",
        key: str,
        request: In,
    ) -> Out:
        """Run the strategy registered as *key* in *family* on *request*.

        Raises:
            InvalidArgumentError: *key* is blank or *request* is ``None``.
            StrategyNotFoundError: nothing is registered for *key*.
        """
        if not is_valid_key(key):
            raise InvalidArgumentError(
                f"Strategy key must be a non-blank string, got {key!r}"
            )
        if request is None:
            raise InvalidArgumentError(f"Input for strategy '{key}' must not be None")

        implementation = self._registry.resolve(family, key)
        if implementation is None:
            family_name = getattr(family, "name", family)
            logger.warning("No strategy '%s' in family '%s'.", key, family_name)
            raise StrategyNotFoundError(family, key, self._available_keys(family))

        logger.debug(
            "Dispatching '%s' -> %s", key, type(implementation).__name__
        )
        result = implementation.execute(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    def for_family(self, family: "type[StrategyFamily[In, Out]]") -> "FamilyDispatcher[In, Out]":
        """Return a dispatcher bound to *family*."""
        return FamilyDispatcher(self, family)

    def _available_keys(self, family: Any) -> list[str]:
        keys = getattr(self._registry, "keys", None)
        if keys is None:
            return []
        return keys(family)


class FamilyDispatcher(Generic[In, Out]):
    """``StrategyDispatcher`` view fixed to one capability family."""

    def __init__(
        self,
        dispatcher: StrategyDispatcher,
        family: "type[StrategyFamily[In, Out]]",
    ) -> None:
        self._dispatcher = dispatcher
        self.family = family

    async def execute(self, key: str, request: In) -> Out:
        return await self._dispatcher.execute_strategy(self.family, key, request)

    def keys(self) -> list[str]:
        return self._dispatcher.registry.keys(self.family)
