"""Configuration models for infrastructure components.

Provides Pydantic-based configuration classes for the ZeroMQ and Redis
transports and the thread manager. Each class reads its own prefixed
environment variables so systems can compose them freely.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ZmqConfig(BaseSettings):
    """ZeroMQ publish/subscribe configuration with environment variable support.

    Reads from ZMQ_* environment variables automatically.

    Attributes:
        publish_endpoint: Address the outbound PUB socket binds to.
        subscribe_endpoint: Address the inbound SUB socket connects to.
        topic_filter: Subscription prefix filter. Empty accepts everything.
        receive_timeout_ms: Receive timeout on the SUB socket in milliseconds.
        linger_ms: Linger period applied when sockets are closed.
    """

    publish_endpoint: str = Field(default="tcp://*:5556")
    subscribe_endpoint: str = Field(default="tcp://localhost:5555")
    topic_filter: str = Field(default="")
    receive_timeout_ms: int = Field(default=1000)
    linger_ms: int = Field(default=0)

    model_config = SettingsConfigDict(
        env_prefix="ZMQ_",
        env_file=None,
    )


class RedisConfig(BaseSettings):
    """Redis connection configuration with environment variable support.

    Reads from REDIS_* environment variables automatically.

    Attributes:
        host: Redis server hostname.
        port: Redis server port.
        db: Redis database number.
        max_connections: Maximum connection pool size.
        socket_timeout: Socket timeout in seconds.
        health_check_interval: Seconds between idle connection health checks.
    """

    host: str = Field(default="localhost")
    port: int = Field(default=6379)
    db: int = Field(default=0)
    max_connections: int = Field(default=10)
    socket_timeout: int = Field(default=30)
    health_check_interval: int = Field(default=30)

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        env_file=None,
    )


class ThreadConfig(BaseSettings):
    """Thread manager configuration with environment variable support.

    Reads from THREAD_* environment variables automatically.

    Attributes:
        daemon_threads: Whether threads should be daemon threads.
        max_threads: Maximum number of concurrent threads allowed.
        thread_timeout: Default timeout for thread operations in seconds.
    """

    daemon_threads: bool = Field(default=True)
    max_threads: int = Field(default=10)
    thread_timeout: int = Field(default=30)

    model_config = SettingsConfigDict(
        env_prefix="THREAD_",
        env_file=None,
    )
