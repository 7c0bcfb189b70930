"""stratdispatch: application entry point.

Boots the FastAPI internal server and provides the CLI entry point for
listing, one-shot dispatch, and serve modes.
"""

import logging
import sys

from fastapi import FastAPI

from stratdispatch.api.routers import router

app = FastAPI(title="stratdispatch Internal API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("stratdispatch")


@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}


def _number(text: str):
    """argparse type: int when the literal is integral, else float."""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"not a number: {text!r}") from None


# ── CLI ──────────────────────────────────────────────────────────────────


def _run_cli(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and dispatch to the appropriate mode.

    Returns the process exit code.
    """
    import argparse
    import asyncio

    from stratdispatch.api.routers import configure_routers
    from stratdispatch.bootstrap import build_dispatcher
    from stratdispatch.cli.listing import print_registry
    from stratdispatch.config import load_config
    from stratdispatch.errors import DispatchError
    from stratdispatch.strategy.models import ArithmeticFamily, Operands

    parser = argparse.ArgumentParser(description="stratdispatch strategy runner")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--list", action="store_true", help="List registered strategies")
    mode.add_argument(
        "--run",
        nargs=3,
        metavar=("KEY", "A", "B"),
        help="Execute the arithmetic strategy KEY on operands A and B",
    )
    mode.add_argument("--serve", action="store_true", help="Start the HTTP API")
    parser.add_argument("--env-file", help="Path to a .env file (default: ./.env)")
    args = parser.parse_args(argv)

    config = load_config(env_path=args.env_file)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    dispatcher = build_dispatcher(config)

    if args.list:
        print_registry(dispatcher.registry)
        return 0

    if args.run:
        key, raw_a, raw_b = args.run
        try:
            operands = Operands(_number(raw_a), _number(raw_b))
        except ValueError as exc:
            parser.error(str(exc))
        try:
            result = asyncio.run(
                dispatcher.execute_strategy(ArithmeticFamily, key, operands)
            )
        except DispatchError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        print(result)
        return 0

    configure_routers(dispatcher)
    _serve(config)
    return 0


def _serve(config) -> None:
    """Run the API server until interrupted."""
    import uvicorn

    logger.info("Serving stratdispatch API at %s", config.api_url)
    uvicorn.run(
        app,
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level.lower(),
    )


def main() -> None:
    sys.exit(_run_cli())


if __name__ == "__main__":
    main()
