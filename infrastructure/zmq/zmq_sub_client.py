"""ZeroMQ subscriber client.

Connects a SUB socket to the configured endpoint, installs the topic filter
and receives frames with a bounded timeout.
"""

import zmq

from infrastructure.zmq.base_zmq_client import BaseZmqClient


class ZmqSubscriberClient(BaseZmqClient):
    """SUB socket connected to ``config.subscribe_endpoint``."""

    def _socket_type(self) -> int:
        return zmq.SUB

    def _attach(self) -> None:
        self.socket.setsockopt(zmq.RCVTIMEO, self.config.receive_timeout_ms)
        self.socket.setsockopt_string(zmq.SUBSCRIBE, self.config.topic_filter)
        self.socket.connect(self.config.subscribe_endpoint)
        self.logger.debug(
            f"Subscriber connected to {self.config.subscribe_endpoint} "
            f"(filter={self.config.topic_filter!r}, timeout={self.config.receive_timeout_ms}ms)"
        )

    def receive(self) -> bytes | None:
        """Wait for one frame, up to the configured receive timeout.

        Returns:
            Frame bytes, or None if the timeout expired.

        Raises:
            zmq.ZMQError: For socket errors other than a timeout.
        """
        try:
            return self.socket.recv()
        except zmq.Again:
            return None
