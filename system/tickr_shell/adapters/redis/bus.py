"""Redis pub/sub bus adapter for TickrShell.

Alternative to the ZeroMQ bus for deployments where the DataService speaks
Redis. Commands are published on ``<namespace>:commands`` and updates are
read from ``<namespace>:updates``.
"""

from __future__ import annotations

import redis

from infrastructure.logging.logger import get_logger
from infrastructure.redis.redis_pub_sub_client import RedisPubSubClient
from system.tickr_shell.domain.messages import Message, decode, encode
from system.tickr_shell.errors import DecodeError, TransportError

COMMANDS_CHANNEL = "commands"
UPDATES_CHANNEL = "updates"


class RedisBus:
    """BusPort implementation over Redis pub/sub channels."""

    def __init__(
        self,
        namespace: str = "tickrshell",
        config=None,
        receive_timeout: float = 1.0,
        client: RedisPubSubClient | None = None,
    ):
        self.logger = get_logger(self.__class__.__name__)
        self.receive_timeout = receive_timeout
        self.client = client or RedisPubSubClient(namespace=namespace, config=config)
        if not self.client.ping():
            self.client.close()
            raise TransportError("Redis server is not reachable")
        try:
            self.pubsub = self.client.subscribe([UPDATES_CHANNEL])
        except redis.RedisError as e:
            self.client.close()
            raise TransportError(f"Could not subscribe to {UPDATES_CHANNEL}: {e}") from e

    def send(self, message: Message) -> None:
        try:
            self.client.publish(COMMANDS_CHANNEL, encode(message))
        except redis.RedisError as e:
            raise TransportError(f"Failed to send {message.type.value}: {e}") from e
        self.logger.debug(f"Sent {message.type.value}")

    def receive(self) -> Message | None:
        try:
            frame = self.client.get_message(self.pubsub, timeout=self.receive_timeout)
        except redis.RedisError as e:
            self.logger.debug(f"Transient receive error: {e}")
            return None

        if frame is None:
            return None

        try:
            return decode(frame)
        except DecodeError as e:
            self.logger.warning(f"Dropping inbound frame: {e}")
            return None

    def close(self) -> None:
        self.client.close()
