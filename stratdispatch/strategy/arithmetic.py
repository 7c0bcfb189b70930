"""Built-in arithmetic strategies.

Implement ``StrategyProtocol`` for ``ArithmeticFamily``.
"""

from stratdispatch.strategy.models import Operands


class AddStrategy:
    """Returns ``a + b``."""

    async def execute(self, request: Operands) -> float:
        return request.a + request.b


class SubtractStrategy:
    """Returns ``a - b``."""

    async def execute(self, request: Operands) -> float:
        return request.a - request.b
