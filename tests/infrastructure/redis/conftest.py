"""Shared fixtures for Redis infrastructure tests.

The ``redis`` module is patched so tests run without a Redis server.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import redis

from infrastructure.config import RedisConfig
from infrastructure.redis.redis_pub_sub_client import RedisPubSubClient


@pytest.fixture
def redis_mocks() -> dict[str, Any]:
    """Mock the `redis` module and logger used by the pub/sub client.

    Provides:
    - redis_module: patched `redis` module (exception classes stay real)
    - pool: mocked ConnectionPool instance
    - client: mocked Redis client instance
    - logger: mocked logger instance
    """
    with (
        patch("infrastructure.redis.redis_pub_sub_client.redis") as mock_redis_module,
        patch("infrastructure.redis.redis_pub_sub_client.get_logger") as mock_get_logger,
    ):
        mock_redis_module.RedisError = redis.RedisError
        mock_pool = MagicMock()
        mock_client = MagicMock()
        mock_redis_module.ConnectionPool.return_value = mock_pool
        mock_redis_module.Redis.return_value = mock_client

        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        yield {
            "redis_module": mock_redis_module,
            "pool": mock_pool,
            "client": mock_client,
            "logger": mock_logger,
        }


@pytest.fixture
def redis_config() -> RedisConfig:
    return RedisConfig(host="redis-test", port=6390, db=2, max_connections=4, socket_timeout=5)


@pytest.fixture
def redis_pub_sub_client(redis_mocks: dict[str, Any], redis_config) -> RedisPubSubClient:
    """Pub/sub client wired to the mocked pool, namespace ``test_namespace``."""
    return RedisPubSubClient(namespace="test_namespace", config=redis_config)
