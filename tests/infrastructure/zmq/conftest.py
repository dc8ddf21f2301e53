"""Shared fixtures for ZeroMQ infrastructure tests.

Sockets are mocked through an injected context so tests never bind real
ports.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from infrastructure.config import ZmqConfig


@pytest.fixture
def zmq_mocks() -> dict[str, Any]:
    """Mock context, socket and logger used by the ZeroMQ clients.

    Provides:
    - context: mocked zmq.Context whose ``socket`` returns ``socket``
    - socket: mocked zmq socket
    - logger: mocked logger instance
    """
    with patch("infrastructure.zmq.base_zmq_client.get_logger") as mock_get_logger:
        mock_socket = MagicMock()
        mock_context = MagicMock()
        mock_context.socket.return_value = mock_socket

        mock_logger_instance = MagicMock()
        mock_get_logger.return_value = mock_logger_instance

        yield {
            "context": mock_context,
            "socket": mock_socket,
            "logger": mock_logger_instance,
        }


@pytest.fixture
def zmq_config() -> ZmqConfig:
    return ZmqConfig(
        publish_endpoint="tcp://*:6556",
        subscribe_endpoint="tcp://localhost:6555",
        topic_filter="",
        receive_timeout_ms=1000,
        linger_ms=0,
    )
