"""Strategy protocol and capability-family marker.

Defines the interface that all strategies must implement and the marker
base class that scopes which registry partition a key is looked up in.
"""

from __future__ import annotations

from typing import Any, Awaitable, ClassVar, Generic, Protocol, TypeVar, Union, runtime_checkable

In = TypeVar("In")
Out = TypeVar("Out")
In_contra = TypeVar("In_contra", contravariant=True)
Out_co = TypeVar("Out_co", covariant=True)


@runtime_checkable
class StrategyProtocol(Protocol[In_contra, Out_co]):
    """Interface that all dispatchable strategies must satisfy.

    ``execute`` may be a coroutine function or a plain function; the
    dispatcher awaits the result only when it is awaitable.
    """

    def execute(self, request: In_contra) -> Union[Out_co, Awaitable[Out_co]]:
        """Run the strategy against *request* and return its output."""
        ...


class StrategyFamily(Generic[In, Out]):
    """Marker base for a capability family.

    Subclass once per (input type, output type) pair::

        class ArithmeticFamily(StrategyFamily[Operands, float]):
            name = "arithmetic"

    The subclass itself is the registry partition key, so two families
    can register the same key string without seeing each other's
    implementations.  Families are never instantiated.
    """

    name: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not cls.__dict__.get("name"):
            cls.name = cls.__name__.lower()


def is_family(obj: Any) -> bool:
    """Return ``True`` if *obj* is a concrete ``StrategyFamily`` subclass."""
    return isinstance(obj, type) and issubclass(obj, StrategyFamily) and obj is not StrategyFamily
