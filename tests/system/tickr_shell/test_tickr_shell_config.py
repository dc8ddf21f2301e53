"""Tests for TickrShellConfig."""

import pytest
from pydantic import ValidationError

from system.tickr_shell.config import TickrShellConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TICKR_TRANSPORT", "TICKR_DISPLAY_CURRENCY", "TICKR_LOG_LEVEL", "ZMQ_RECEIVE_TIMEOUT_MS"):
        monkeypatch.delenv(name, raising=False)


class TestTickrShellConfig:
    def test_defaults(self):
        config = TickrShellConfig()

        assert config.transport == "zmq"
        assert config.history_size == 15
        assert config.chart_height == 10
        assert config.display_currency == "USD"
        assert config.log_level == "WARNING"
        assert config.currency_rates["USD"] == 1.0
        assert config.zmq.publish_endpoint == "tcp://*:5556"
        assert config.zmq.subscribe_endpoint == "tcp://localhost:5555"
        assert config.receive_timeout == 1.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TICKR_TRANSPORT", "redis")
        monkeypatch.setenv("TICKR_DISPLAY_CURRENCY", "eur")
        monkeypatch.setenv("ZMQ_RECEIVE_TIMEOUT_MS", "250")

        config = TickrShellConfig.from_env()

        assert config.transport == "redis"
        assert config.display_currency == "EUR"
        assert config.receive_timeout == 0.25

    def test_rate_keys_uppercased(self):
        config = TickrShellConfig(currency_rates={"usd": 1.0, "sek": 10.5})

        assert config.currency_rates == {"USD": 1.0, "SEK": 10.5}

    def test_invalid_transport(self):
        with pytest.raises(ValidationError):
            TickrShellConfig(transport="carrier-pigeon")

    def test_history_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            TickrShellConfig(history_size=0)
