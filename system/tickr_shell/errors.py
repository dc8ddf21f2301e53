"""Exception hierarchy for TickrShell.

Recoverable errors (bad input, transport hiccups, undecodable frames) are
reported and the session continues. Error messages from the service are
printed as they arrive. Anything else escaping the session loops is fatal
and handled in ``main``.
"""


class TickrShellError(Exception):
    """Base class for all TickrShell errors."""


class InputFormatError(TickrShellError):
    """User typed an unknown verb, omitted an argument or gave a bad symbol."""


class TransportError(TickrShellError):
    """The transport rejected a frame or could not be set up."""


class DecodeError(TickrShellError):
    """An inbound frame could not be parsed into a message."""
