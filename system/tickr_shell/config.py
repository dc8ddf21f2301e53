"""Configuration models for TickrShell.

Composes the infrastructure configs (ZeroMQ, Redis, threads) with the
session settings. Everything can be overridden with TICKR_* environment
variables; nested sub-configs read their own prefixes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.config import RedisConfig, ThreadConfig, ZmqConfig
from system.tickr_shell.domain.models import DEFAULT_CURRENCY, MAX_HISTORY


def _default_currency_rates() -> dict[str, float]:
    # Units of each currency per 1 USD.
    return {
        "USD": 1.0,
        "EUR": 0.92,
        "GBP": 0.79,
        "JPY": 150.0,
        "CAD": 1.36,
        "AUD": 1.52,
        "CHF": 0.88,
    }


class TickrShellConfig(BaseSettings):
    """Complete TickrShell configuration.

    Attributes:
        transport: Bus implementation, ``zmq`` (default) or ``redis``.
        redis_namespace: Channel namespace when using the Redis transport.
        startup_delay: Seconds to wait before the first outbound send.
        poll_interval: Seconds slept between inbound polls.
        handshake_interval: Seconds between RequestSubscriptions retries.
        handshake_retries: Retries after the first RequestSubscriptions.
        history_size: Prices kept per symbol.
        chart_height: Number of level bands in the ASCII chart.
        display_currency: Currency prices are shown in at startup.
        currency_rates: Units of each currency per 1 USD.
        log_level: Logging level for the interactive program.
        zmq: ZeroMQ configuration.
        redis: Redis configuration.
        threads: Thread manager configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="TICKR_",
        env_file=None,
        extra="ignore",
    )

    transport: Literal["zmq", "redis"] = Field(default="zmq")
    redis_namespace: str = Field(default="tickrshell")
    startup_delay: float = Field(default=1.0, ge=0)
    poll_interval: float = Field(default=0.01, ge=0)
    handshake_interval: float = Field(default=5.0, gt=0)
    handshake_retries: int = Field(default=3, ge=0)
    history_size: int = Field(default=MAX_HISTORY, gt=0)
    chart_height: int = Field(default=10, gt=0)
    display_currency: str = Field(default=DEFAULT_CURRENCY)
    currency_rates: dict[str, float] = Field(default_factory=_default_currency_rates)
    log_level: str = Field(default="WARNING")

    zmq: ZmqConfig = Field(default_factory=ZmqConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    threads: ThreadConfig = Field(default_factory=ThreadConfig)

    @field_validator("display_currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()

    @field_validator("currency_rates")
    @classmethod
    def _upper_rate_keys(cls, value: dict[str, float]) -> dict[str, float]:
        return {code.upper(): rate for code, rate in value.items()}

    @property
    def receive_timeout(self) -> float:
        """Inbound poll timeout in seconds."""
        return self.zmq.receive_timeout_ms / 1000

    @classmethod
    def from_env(cls) -> TickrShellConfig:
        """Create complete config from environment variables."""
        return cls()
