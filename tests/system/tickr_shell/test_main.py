"""Tests for the TickrShell CLI entry point."""

from unittest.mock import MagicMock, patch

import pytest

from system.tickr_shell import main as main_module
from system.tickr_shell.config import TickrShellConfig
from system.tickr_shell.errors import TickrShellError, TransportError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TICKR_TRANSPORT", "TICKR_DISPLAY_CURRENCY", "TICKR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_engine():
    with patch.object(main_module, "SessionEngine") as engine_cls:
        yield engine_cls


@pytest.fixture
def mock_bus():
    bus = MagicMock()
    with patch.object(main_module, "build_bus", return_value=bus):
        yield bus


class TestArguments:
    def test_overrides_reach_config(self):
        args = main_module.parse_args(["--transport", "redis", "--currency", "gbp", "--log-level", "DEBUG"])

        config = main_module.build_config(args)

        assert config.transport == "redis"
        assert config.display_currency == "GBP"
        assert config.log_level == "DEBUG"

    def test_defaults_leave_config_alone(self):
        config = main_module.build_config(main_module.parse_args([]))

        assert config.transport == "zmq"
        assert config.display_currency == "USD"

    def test_invalid_transport_exits(self):
        with pytest.raises(SystemExit):
            main_module.parse_args(["--transport", "carrier-pigeon"])


class TestBuildBus:
    def test_zmq_by_default(self):
        config = TickrShellConfig()
        with patch.object(main_module, "ZmqBus") as zmq_bus:
            bus = main_module.build_bus(config)

        zmq_bus.assert_called_once_with(config=config.zmq)
        assert bus is zmq_bus.return_value

    def test_redis_transport(self):
        config = TickrShellConfig(transport="redis")
        with patch.object(main_module, "RedisBus") as redis_bus:
            main_module.build_bus(config)

        redis_bus.assert_called_once_with(
            namespace="tickrshell", config=config.redis, receive_timeout=1.0
        )


class TestMain:
    def test_normal_exit(self, mock_engine, mock_bus):
        assert main_module.main([]) == 0

        engine = mock_engine.return_value
        engine.print_banner.assert_called_once_with()
        engine.run.assert_called_once_with()
        mock_bus.close.assert_called_once_with()

    def test_no_banner(self, mock_engine, mock_bus):
        main_module.main(["--no-banner"])

        mock_engine.return_value.print_banner.assert_not_called()

    def test_interrupt_is_clean_exit(self, mock_engine, mock_bus):
        mock_engine.return_value.run.side_effect = KeyboardInterrupt

        assert main_module.main([]) == 0
        mock_bus.close.assert_called_once_with()

    def test_session_failure_exits_nonzero(self, mock_engine, mock_bus, capsys):
        mock_engine.return_value.run.side_effect = TickrShellError("Receive loop failed: boom")

        assert main_module.main([]) == 1
        assert "Error: Receive loop failed: boom" in capsys.readouterr().err
        mock_bus.close.assert_called_once_with()

    def test_bus_failure_exits_nonzero(self, mock_engine, capsys):
        with patch.object(main_module, "build_bus", side_effect=TransportError("port in use")):
            assert main_module.main([]) == 1

        assert "Error: port in use" in capsys.readouterr().err
        mock_engine.assert_not_called()
