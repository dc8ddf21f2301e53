"""Shared fixtures for TickrShell tests.

The engine is exercised against an in-memory bus and a scripted console so
no sockets or terminals are involved.
"""

from __future__ import annotations

import queue
from io import StringIO

import pytest

from infrastructure.config import ThreadConfig, ZmqConfig
from system.tickr_shell.config import TickrShellConfig
from system.tickr_shell.domain.messages import Message
from system.tickr_shell.errors import TransportError
from system.tickr_shell.session.console import Console
from system.tickr_shell.session.engine import SessionEngine


class FakeBus:
    """In-memory BusPort recording outbound messages."""

    def __init__(self):
        self.sent: list[Message] = []
        self.inbound: queue.Queue[Message] = queue.Queue()
        self.fail_sends = False
        self.closed = False

    def send(self, message: Message) -> None:
        if self.fail_sends:
            raise TransportError("frame rejected")
        self.sent.append(message)

    def receive(self) -> Message | None:
        try:
            return self.inbound.get(timeout=0.01)
        except queue.Empty:
            return None

    def close(self) -> None:
        self.closed = True

    def sent_types(self) -> list[str]:
        return [m.type.value for m in self.sent]


class ScriptedInput:
    """Line source that replays canned input, then signals end of input."""

    def __init__(self, lines=()):
        self.lines = list(lines)

    def feed(self, *lines: str) -> None:
        self.lines.extend(lines)

    def __call__(self) -> str:
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def fake_bus() -> FakeBus:
    return FakeBus()


@pytest.fixture
def scripted_input() -> ScriptedInput:
    return ScriptedInput()


@pytest.fixture
def output() -> StringIO:
    return StringIO()


@pytest.fixture
def console(output, scripted_input) -> Console:
    return Console(out=output, read_line=scripted_input)


@pytest.fixture
def session_config() -> TickrShellConfig:
    return TickrShellConfig(
        startup_delay=0,
        poll_interval=0.001,
        handshake_interval=60,
        handshake_retries=3,
        display_currency="USD",
        zmq=ZmqConfig(receive_timeout_ms=50),
        threads=ThreadConfig(daemon_threads=True, max_threads=2, thread_timeout=2),
    )


@pytest.fixture
def engine(fake_bus, session_config, console) -> SessionEngine:
    """Engine wired to the fake bus; the receive loop is not started."""
    return SessionEngine(fake_bus, config=session_config, console=console)
