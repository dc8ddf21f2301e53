"""ZeroMQ publisher client.

Binds a PUB socket to the configured publish endpoint and sends frames.
"""

import threading

import zmq

from infrastructure.zmq.base_zmq_client import BaseZmqClient


class ZmqPublisherClient(BaseZmqClient):
    """PUB socket bound to ``config.publish_endpoint``.

    ZeroMQ sockets are not thread-safe, so sends are serialized with a lock;
    both the input and receive threads publish through the same socket.
    """

    def __init__(self, config=None, context: zmq.Context | None = None):
        self._send_lock = threading.Lock()
        super().__init__(config=config, context=context)

    def _socket_type(self) -> int:
        return zmq.PUB

    def _attach(self) -> None:
        self.socket.bind(self.config.publish_endpoint)
        self.logger.debug(f"Publisher bound to {self.config.publish_endpoint}")

    def publish(self, frame: bytes) -> None:
        """Send one frame.

        Args:
            frame: Encoded message bytes.

        Raises:
            zmq.ZMQError: If the socket rejects the frame.
        """
        with self._send_lock:
            try:
                self.socket.send(frame)
            except zmq.ZMQError as e:
                self.logger.error(f"Failed to publish frame: {e}")
                raise
        self.logger.debug(f"Published {len(frame)} bytes")
