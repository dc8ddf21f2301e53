"""Unit tests for the Redis pub/sub bus adapter."""

from unittest.mock import MagicMock, patch

import pytest
import redis

from system.tickr_shell.adapters.redis.bus import (
    COMMANDS_CHANNEL,
    UPDATES_CHANNEL,
    RedisBus,
)
from system.tickr_shell.domain.messages import encode, error_message, subscribe_message
from system.tickr_shell.errors import TransportError


@pytest.fixture
def client():
    mock = MagicMock()
    mock.get_message.return_value = None
    return mock


@pytest.fixture
def bus(client):
    return RedisBus(client=client, receive_timeout=0.5)


@pytest.mark.unit
class TestRedisBus:
    def test_subscribes_to_updates(self, bus, client):
        client.subscribe.assert_called_once_with([UPDATES_CHANNEL])
        assert bus.pubsub is client.subscribe.return_value

    def test_subscribe_failure_raises_transport_error(self, client):
        client.subscribe.side_effect = redis.ConnectionError("refused")

        with pytest.raises(TransportError):
            RedisBus(client=client)

        client.close.assert_called_once_with()

    def test_unreachable_server_raises_transport_error(self, client):
        client.ping.return_value = False

        with pytest.raises(TransportError, match="not reachable"):
            RedisBus(client=client)

        client.subscribe.assert_not_called()
        client.close.assert_called_once_with()

    def test_open_checks_connectivity(self, bus, client):
        client.ping.assert_called_once_with()

    def test_send_publishes_on_commands_channel(self, bus, client):
        bus.send(subscribe_message("AAPL"))

        client.publish.assert_called_once_with(COMMANDS_CHANNEL, encode(subscribe_message("AAPL")))

    def test_send_failure_raises_transport_error(self, bus, client):
        client.publish.side_effect = redis.ConnectionError("down")

        with pytest.raises(TransportError, match="Subscribe"):
            bus.send(subscribe_message("AAPL"))

    def test_receive_uses_timeout(self, bus, client):
        client.get_message.return_value = encode(error_message("boom"))

        assert bus.receive() == error_message("boom")
        client.get_message.assert_called_once_with(bus.pubsub, timeout=0.5)

    def test_receive_nothing(self, bus):
        assert bus.receive() is None

    def test_receive_drops_malformed_frame(self, bus, client):
        client.get_message.return_value = b"\x00garbage"

        assert bus.receive() is None

    def test_receive_swallows_redis_errors(self, bus, client):
        client.get_message.side_effect = redis.TimeoutError()

        assert bus.receive() is None

    def test_close(self, bus, client):
        bus.close()

        client.close.assert_called_once_with()

    def test_builds_namespaced_client(self):
        with patch("system.tickr_shell.adapters.redis.bus.RedisPubSubClient") as client_cls:
            bus = RedisBus(namespace="desk1", config=None)

        client_cls.assert_called_once_with(namespace="desk1", config=None)
        assert bus.client is client_cls.return_value
