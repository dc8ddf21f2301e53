"""Redis pub/sub client.

Publishes frames to namespaced channels and polls subscriptions with a
bounded wait. Channels are prefixed with ``<namespace>:`` so several
deployments can share one Redis server.
"""

from __future__ import annotations

import redis

from infrastructure.client import Client
from infrastructure.logging.logger import get_logger


class RedisPubSubClient(Client):
    """Namespaced Redis publisher/subscriber over one connection pool.

    Attributes:
        logger: Configured logger instance.
        namespace: Channel prefix for this client.
        config: RedisConfig the pool was built from.
        pool: Redis connection pool instance.
        client: Redis client instance.
    """

    def __init__(self, namespace: str, config=None):
        """Create the connection pool.

        No connection is opened until the first command.

        Args:
            namespace: Prefix applied to every channel name.
            config: Optional RedisConfig object. If None, auto-populates from environment.
        """
        super().__init__()
        self.logger = get_logger(self.__class__.__name__)
        self.namespace = namespace

        if config is None:
            from infrastructure.config import RedisConfig  # noqa: PLC0415

            config = RedisConfig()
        self.config = config

        self.pool = redis.ConnectionPool(
            host=config.host,
            port=config.port,
            db=config.db,
            max_connections=config.max_connections,
            socket_timeout=config.socket_timeout,
            health_check_interval=config.health_check_interval,
        )
        self.client = redis.Redis(connection_pool=self.pool)
        self._pubsubs: list = []
        self.logger.debug(
            f"Redis pool ready for {namespace} ({config.host}:{config.port}/{config.db})"
        )

    def channel(self, name: str) -> str:
        """Namespaced channel name: namespace:name."""
        return f"{self.namespace}:{name}"

    def publish(self, channel: str, message: str | bytes) -> int:
        """Publish a message to a channel.

        Args:
            channel: Channel name, without namespace.
            message: The message content to publish.

        Returns:
            Number of subscribers that received the message. Zero is not an
            error; pub/sub drops messages nobody listens to.

        Raises:
            redis.RedisError: If the server rejects the publish.
        """
        target = self.channel(channel)
        try:
            receivers = self.client.publish(target, message)
        except redis.RedisError as e:
            self.logger.error(f"Failed to publish to {target}: {e}")
            raise

        self.logger.debug(f"Published to {target} ({receivers} receivers)")
        return receivers

    def subscribe(self, channels: list[str]):
        """Subscribe to one or more channels.

        Args:
            channels: Channel names, without namespace.

        Returns:
            Redis pubsub object to pass to ``get_message``.

        Raises:
            redis.RedisError: If the subscription cannot be registered.
        """
        pubsub = self.client.pubsub()
        pubsub.subscribe(*(self.channel(c) for c in channels))
        self._pubsubs.append(pubsub)
        self.logger.debug(f"Subscribed to {channels} in {self.namespace}")
        return pubsub

    def get_message(self, pubsub, timeout: float) -> bytes | None:
        """Wait up to ``timeout`` seconds for one data message.

        Subscribe confirmations and other control messages are skipped.

        Returns:
            Raw message payload, or None if nothing arrived in time.
        """
        message = pubsub.get_message(ignore_subscribe_messages=True, timeout=timeout)
        if message is None or message.get("type") != "message":
            return None
        return message["data"]

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            self.logger.error(f"Redis ping failed: {e}")
            return False

    def close(self) -> None:
        """Close open subscriptions, then the client and its pool."""
        while self._pubsubs:
            self._pubsubs.pop().close()
        self.client.close()
        self.pool.disconnect()
        self.logger.debug(f"Redis pool closed for {self.namespace}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
