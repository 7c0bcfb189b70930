"""Arithmetic domain models.

Input type and family marker shared by the built-in arithmetic strategies.
"""

from dataclasses import dataclass

from stratdispatch.strategy.base import StrategyFamily


@dataclass(frozen=True)
class Operands:
    """A pair of numbers fed to an arithmetic strategy."""

    a: float
    b: float


class ArithmeticFamily(StrategyFamily[Operands, float]):
    """Binary arithmetic operations over ``Operands``."""

    name = "arithmetic"
