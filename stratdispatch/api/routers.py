"""Internal API routers: /strategies listing and per-family dispatch.

No business logic. Delegates to the dispatcher injected at startup.
"""

import logging
import math
from numbers import Real
from typing import Any, Callable, Optional

from fastapi import APIRouter, Body, HTTPException

from stratdispatch.dispatcher import StrategyDispatcher
from stratdispatch.errors import InvalidArgumentError, StrategyNotFoundError
from stratdispatch.strategy.models import ArithmeticFamily, Operands

logger = logging.getLogger("stratdispatch.api")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_dispatcher: Optional[StrategyDispatcher] = None  # Set via configure_routers()


def configure_routers(dispatcher: Optional[StrategyDispatcher]) -> None:
    """Inject the dispatcher built at application startup.

    Args:
        dispatcher: A ``StrategyDispatcher`` (or duck-type for tests).
            ``None`` detaches the routers again.
    """
    global _dispatcher  # noqa: PLW0603
    _dispatcher = dispatcher


def _require_dispatcher() -> StrategyDispatcher:
    if _dispatcher is None:
        raise HTTPException(status_code=503, detail="Dispatcher not configured")
    return _dispatcher


def _parse_operands(body: Any) -> Operands:
    """Build ``Operands`` from a JSON body, rejecting missing, non-numeric or non-finite values."""
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Body must be a JSON object with 'a' and 'b'")
    errors = []
    values = {}
    for name in ("a", "b"):
        value = body.get(name)
        # bool is a Real subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, Real):
            errors.append(f"'{name}' must be a number")
        elif not math.isfinite(value):
            errors.append(f"'{name}' must be finite")
        else:
            values[name] = value
    if errors:
        raise HTTPException(status_code=400, detail=errors)
    return Operands(**values)


# Families reachable over HTTP, with the parser that turns a JSON body into
# the family's input type.
_REQUEST_PARSERS: dict[type, Callable[[Any], Any]] = {
    ArithmeticFamily: _parse_operands,
}


def _is_json_safe(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    return True


@router.get("/strategies")
async def list_strategies():
    """Return every registered family with its strategy keys."""
    registry = _require_dispatcher().registry
    return {family.name: registry.keys(family) for family in registry.families()}


@router.post("/strategies/{family_name}/{key}")
async def execute_strategy(family_name: str, key: str, body: Any = Body(None)):
    """Dispatch a JSON body to strategy *key* of the family called *family_name*.

    400 for a malformed body, a blank key or a non-finite result; 404 for
    an unknown family, a family without an HTTP binding, or an unknown key.
    """
    dispatcher = _require_dispatcher()
    family = dispatcher.registry.family_by_name(family_name)
    parser = _REQUEST_PARSERS.get(family)
    if family is None or parser is None:
        raise HTTPException(status_code=404, detail=f"Unknown strategy family '{family_name}'")

    request = parser(body)
    try:
        result = await dispatcher.execute_strategy(family, key, request)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StrategyNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    if not _is_json_safe(result):
        raise HTTPException(
            status_code=400,
            detail=f"Strategy '{key}' produced a non-finite result ({result})",
        )

    logger.info("Executed %s/%s -> %s", family.name, key, result)
    return {"family": family.name, "key": key, "result": result}
