"""ZeroMQ client base class with socket lifecycle management.

This module provides the BaseZmqClient abstract class that owns one ZeroMQ
socket created from a shared context. Direction-specific behavior (binding a
publisher, connecting a subscriber) lives in dedicated clients.
"""

from abc import abstractmethod

import zmq

from infrastructure.client import Client
from infrastructure.logging.logger import get_logger


class BaseZmqClient(Client):
    """Base class owning a single ZeroMQ socket.

    Attributes:
        logger: Configured logger instance.
        config: ZmqConfig with endpoints and timeouts.
        context: ZeroMQ context the socket was created from.
        socket: The underlying ZeroMQ socket.
    """

    def __init__(self, config=None, context: zmq.Context | None = None):
        """Create the socket and attach it to its endpoint.

        Args:
            config: Optional ZmqConfig object. If None, auto-populates from environment.
            context: Optional ZeroMQ context. Defaults to the process-wide instance.
        """
        super().__init__()
        self.logger = get_logger(self.__class__.__name__)

        if config is None:
            from infrastructure.config import ZmqConfig  # noqa: PLC0415

            config = ZmqConfig()

        self.config = config
        self.context = context or zmq.Context.instance()
        self.socket = None
        self._create_socket()

    @abstractmethod
    def _socket_type(self) -> int:
        """Inheriting class returns the zmq socket type constant."""
        pass

    @abstractmethod
    def _attach(self) -> None:
        """Inheriting class binds or connects ``self.socket``."""
        pass

    def _create_socket(self):
        """Create the socket, apply common options and attach it."""
        try:
            self.socket = self.context.socket(self._socket_type())
            self.socket.setsockopt(zmq.LINGER, self.config.linger_ms)
            self._attach()
        except zmq.ZMQError as e:
            self.logger.error(f"Failed to create ZeroMQ socket: {e}")
            if self.socket is not None:
                self.socket.close()
            raise

    def close(self):
        """Close the socket."""
        if self.socket is None:
            self.logger.warning("ZeroMQ socket not initialized, skipping close")
            return
        self.socket.close()
        self.socket = None
        self.logger.debug(f"{self.__class__.__name__} socket closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
