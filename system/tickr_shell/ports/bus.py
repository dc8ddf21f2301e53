"""Bus port interface.

Defines the protocol the session engine uses to talk to the DataService,
independent of the transport underneath.
"""

from __future__ import annotations

from typing import Protocol

from system.tickr_shell.domain.messages import Message


class BusPort(Protocol):
    """Protocol for a bidirectional message bus endpoint."""

    def send(self, message: Message) -> None:
        """Encode and publish a message on the outbound channel.

        Raises:
            TransportError: If the transport rejects the frame.
        """
        ...

    def receive(self) -> Message | None:
        """Return the next inbound message, or None after the poll timeout."""
        ...

    def close(self) -> None:
        """Release both channels."""
        ...
