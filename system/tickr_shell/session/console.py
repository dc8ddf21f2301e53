"""Shared terminal for the input and receive threads.

Every write takes one lock and is flushed immediately so inbound updates and
the prompt do not interleave mid-line.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable
from typing import TextIO

CLEAR_SCREEN = "\033[2J\033[H"


class Console:
    """Serialized, eagerly flushed terminal output plus line input."""

    def __init__(self, out: TextIO | None = None, read_line: Callable[[], str] | None = None):
        self.out = out or sys.stdout
        self._read_line = read_line or input
        self._lock = threading.Lock()

    def write(self, text: str) -> None:
        with self._lock:
            self.out.write(text)
            self.out.flush()

    def print(self, *lines: str) -> None:
        self.write("".join(f"{line}\n" for line in lines))

    def read_line(self, prompt: str = "") -> str:
        """Show ``prompt`` and block for one line.

        Raises:
            EOFError: When input is exhausted.
        """
        if prompt:
            self.write(prompt)
        return self._read_line()

    def clear(self) -> None:
        self.write(CLEAR_SCREEN)
