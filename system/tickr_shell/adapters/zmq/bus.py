"""ZeroMQ bus adapter for TickrShell.

Outbound commands go through a PUB socket bound locally; inbound updates come
from a SUB socket connected to the DataService's publisher.
"""

from __future__ import annotations

import zmq

from infrastructure.logging.logger import get_logger
from infrastructure.zmq.zmq_pub_client import ZmqPublisherClient
from infrastructure.zmq.zmq_sub_client import ZmqSubscriberClient
from system.tickr_shell.domain.messages import Message, decode, encode
from system.tickr_shell.errors import DecodeError, TransportError


class ZmqBus:
    """BusPort implementation over a ZeroMQ PUB/SUB socket pair."""

    def __init__(
        self,
        config=None,
        publisher: ZmqPublisherClient | None = None,
        subscriber: ZmqSubscriberClient | None = None,
    ):
        """Open both channels.

        Args:
            config: Optional ZmqConfig shared by both sockets.
            publisher: Pre-built publisher client, mainly for tests.
            subscriber: Pre-built subscriber client, mainly for tests.

        Raises:
            TransportError: If either socket cannot be bound or connected.
        """
        self.logger = get_logger(self.__class__.__name__)
        try:
            self.publisher = publisher or ZmqPublisherClient(config=config)
        except zmq.ZMQError as e:
            raise TransportError(f"Could not open ZeroMQ channels: {e}") from e
        try:
            self.subscriber = subscriber or ZmqSubscriberClient(config=config)
        except zmq.ZMQError as e:
            self.publisher.close()
            raise TransportError(f"Could not open ZeroMQ channels: {e}") from e

    def send(self, message: Message) -> None:
        frame = encode(message)
        try:
            self.publisher.publish(frame)
        except zmq.ZMQError as e:
            raise TransportError(f"Failed to send {message.type.value}: {e}") from e
        self.logger.debug(f"Sent {message.type.value}")

    def receive(self) -> Message | None:
        try:
            frame = self.subscriber.receive()
        except zmq.ZMQError as e:
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
        self.publisher.close()
        self.subscriber.close()
