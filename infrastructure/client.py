"""Abstract base class for infrastructure clients.

Every transport and runtime helper in the infrastructure layer (ZeroMQ
sockets, Redis pub/sub, the thread manager) derives from ``Client`` so that
systems can accept any of them behind one common type.
"""

from abc import ABC


class Client(ABC):  # noqa: B024
    """Marker base class for infrastructure clients.

    Carries no abstract methods; subclasses define their own lifecycle
    (typically a ``close`` method and context manager support).
    """

    ...
