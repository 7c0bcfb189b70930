"""Tests for startup wiring, the registry listing and the CLI entry point."""

import logging

import pytest

from stratdispatch import main as main_module
from stratdispatch.bootstrap import build_dispatcher, build_registry
from stratdispatch.cli.listing import print_registry
from stratdispatch.config import Config
from stratdispatch.errors import RegistrySealedError
from stratdispatch.main import _number, _run_cli
from stratdispatch.strategy.arithmetic import AddStrategy, SubtractStrategy
from stratdispatch.strategy.models import ArithmeticFamily, Operands
from stratdispatch.strategy.registry import StrategyRegistry


# ── Helpers ──────────────────────────────────────────────────────────────


def _make_config(**overrides) -> Config:
    defaults = dict(
        log_level="WARNING",
        duplicate_policy="fail",
        api_host="127.0.0.1",
        api_port=8080,
    )
    defaults.update(overrides)
    return Config(**defaults)


@pytest.fixture
def env_file(tmp_path, monkeypatch):
    for var in ["LOG_LEVEL", "DUPLICATE_KEY_POLICY", "API_HOST", "API_PORT"]:
        monkeypatch.delenv(var, raising=False)
    path = tmp_path / ".env"
    path.write_text("LOG_LEVEL=WARNING\n", encoding="utf-8")
    return str(path)


# ── Bootstrap ────────────────────────────────────────────────────────────


class TestBootstrap:
    def test_build_registry_registers_arithmetic(self):
        reg = build_registry()
        assert reg.keys(ArithmeticFamily) == ["Add", "Sub"]
        assert isinstance(reg.resolve(ArithmeticFamily, "Add"), AddStrategy)
        assert isinstance(reg.resolve(ArithmeticFamily, "Sub"), SubtractStrategy)

    def test_registry_is_sealed(self):
        reg = build_registry()
        assert reg.sealed is True
        with pytest.raises(RegistrySealedError):
            reg.register(ArithmeticFamily, "Mul", AddStrategy())

    def test_policy_from_config(self):
        reg = build_registry(_make_config(duplicate_policy="replace"))
        assert reg.duplicate_policy == "replace"

    def test_logs_count(self, caplog):
        with caplog.at_level(logging.INFO, logger="stratdispatch.bootstrap"):
            build_registry()
        assert "Registered 2 strategies across 1 family." in caplog.text

    @pytest.mark.asyncio
    async def test_build_dispatcher(self):
        dispatcher = build_dispatcher(_make_config())
        assert await dispatcher.execute_strategy(ArithmeticFamily, "Add", Operands(6, 2)) == 8


# ── Listing ──────────────────────────────────────────────────────────────


class TestPrintRegistry:
    def test_print_registry_format(self, capsys):
        output = print_registry(build_registry())
        captured = capsys.readouterr()
        assert output in captured.out
        assert "Strategies:      2" in output
        assert "State:           sealed" in output
        assert "[arithmetic]" in output
        assert "AddStrategy" in output
        assert "SubtractStrategy" in output

    def test_empty_registry(self):
        output = print_registry(StrategyRegistry())
        assert "Strategies:      0" in output
        assert "State:           open" in output


# ── CLI ──────────────────────────────────────────────────────────────────


class TestNumberParsing:
    @pytest.mark.parametrize("text, expected", [("6", 6), ("-2", -2), ("1.5", 1.5), ("1e3", 1000.0)])
    def test_numbers(self, text, expected):
        value = _number(text)
        assert value == expected
        assert type(value) is type(expected)

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            _number("six")


class TestRunCli:
    def test_run_add(self, env_file, capsys):
        assert _run_cli(["--run", "Add", "6", "2", "--env-file", env_file]) == 0
        assert capsys.readouterr().out.strip() == "8"

    def test_run_sub(self, env_file, capsys):
        assert _run_cli(["--run", "Sub", "6", "2", "--env-file", env_file]) == 0
        assert capsys.readouterr().out.strip() == "4"

    def test_run_unknown_key(self, env_file, capsys):
        assert _run_cli(["--run", "Mul", "6", "2", "--env-file", env_file]) == 2
        assert "Mul" in capsys.readouterr().err

    def test_run_blank_key(self, env_file, capsys):
        assert _run_cli(["--run", "  ", "6", "2", "--env-file", env_file]) == 2
        assert "error:" in capsys.readouterr().err

    def test_run_bad_operand(self, env_file):
        with pytest.raises(SystemExit) as exc_info:
            _run_cli(["--run", "Add", "six", "2", "--env-file", env_file])
        assert exc_info.value.code == 2

    def test_list(self, env_file, capsys):
        assert _run_cli(["--list", "--env-file", env_file]) == 0
        assert "[arithmetic]" in capsys.readouterr().out

    def test_mode_required(self, env_file):
        with pytest.raises(SystemExit):
            _run_cli(["--env-file", env_file])

    def test_serve_configures_routers(self, env_file, monkeypatch):
        served = {}
        monkeypatch.setattr(main_module, "_serve", lambda config: served.setdefault("config", config))
        from stratdispatch.api import routers

        try:
            assert _run_cli(["--serve", "--env-file", env_file]) == 0
            assert routers._dispatcher is not None
        finally:
            routers.configure_routers(None)
        assert served["config"].api_port == 8080
