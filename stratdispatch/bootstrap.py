"""Startup wiring: builds the sealed registry and the dispatcher.

All registration happens here, before the first dispatch call.
"""

import logging
from typing import Optional

from stratdispatch.config import Config
from stratdispatch.dispatcher import StrategyDispatcher
from stratdispatch.strategy.models import ArithmeticFamily
from stratdispatch.strategy.registry import ARITHMETIC_STRATEGIES, StrategyRegistry

logger = logging.getLogger("stratdispatch.bootstrap")


def build_registry(config: Optional[Config] = None) -> StrategyRegistry:
    """Create, populate and seal the process-wide strategy registry."""
    policy = config.duplicate_policy if config is not None else "fail"
    registry = StrategyRegistry(duplicate_policy=policy)

    for key, strategy_cls in ARITHMETIC_STRATEGIES.items():
        registry.register(ArithmeticFamily, key, strategy_cls())

    registry.seal()
    logger.info(
        "Registered %d strateg%s across %d famil%s.",
        len(registry),
        "y" if len(registry) == 1 else "ies",
        len(registry.families()),
        "y" if len(registry.families()) == 1 else "ies",
    )
    return registry


def build_dispatcher(config: Optional[Config] = None) -> StrategyDispatcher:
    """Return a dispatcher over a freshly built registry."""
    return StrategyDispatcher(build_registry(config))
