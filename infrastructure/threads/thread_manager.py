"""Named background threads with cooperative shutdown.

ThreadManager starts long-running loops (socket pollers, receive loops) on
named threads, records how each one ended and joins them when the owning
system shuts down. Python threads cannot be killed, so every target must
watch ``shutdown_event`` or its own flag and return by itself.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from infrastructure.client import Client
from infrastructure.logging.logger import get_logger

RUNNING = "running"
STOPPED = "stopped"
ERROR = "error"


@dataclass
class ThreadStatus:
    """Bookkeeping for one managed thread.

    Attributes:
        name: Thread identifier.
        thread: Thread object.
        started_at: UTC start time.
        status: ``running``, ``stopped`` or ``error``.
        exception: Exception that ended the target, if any.
    """

    name: str
    thread: threading.Thread
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: str = RUNNING
    exception: BaseException | None = None

    @property
    def active(self) -> bool:
        return self.status == RUNNING and self.thread.is_alive()

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "alive": self.thread.is_alive(),
            "started_at": self.started_at.isoformat(),
            "status": self.status,
            "exception": str(self.exception) if self.exception else None,
        }


class ThreadManager(Client):
    """Starts, tracks and joins named threads.

    Attributes:
        logger: Configured logger instance.
        config: Thread configuration settings.
        threads: ThreadStatus per thread name.
        shutdown_event: Set by ``request_shutdown``; targets poll it.
        lock: Guards ``threads``.
    """

    def __init__(self, config=None):
        """Initialize ThreadManager with configuration.

        Args:
            config: Optional ThreadConfig object. If None, auto-populates from environment.
        """
        super().__init__()
        self.logger = get_logger(self.__class__.__name__)

        if config is None:
            from infrastructure.config import ThreadConfig  # noqa: PLC0415

            config = ThreadConfig()

        self.config = config
        self.threads: dict[str, ThreadStatus] = {}
        self.shutdown_event = threading.Event()
        self.lock = threading.Lock()

    def _run(self, name: str, target: Callable, args: tuple, kwargs: dict) -> None:
        try:
            target(*args, **kwargs)
        except BaseException as e:
            self.logger.exception(f"Thread '{name}' died: {e}")
            self._finish(name, ERROR, exception=e)
            return
        self.logger.debug(f"Thread '{name}' returned")
        self._finish(name, STOPPED)

    def _finish(self, name: str, status: str, exception=None) -> None:
        with self.lock:
            entry = self.threads.get(name)
            # The name may already belong to a newer thread.
            if entry is None or entry.thread is not threading.current_thread():
                return
            entry.status = status
            entry.exception = exception

    def start_thread(
        self,
        target: Callable,
        name: str,
        args: tuple = (),
        kwargs: dict | None = None,
    ) -> threading.Thread:
        """Start ``target`` on a new thread called ``name``.

        A finished thread's name may be reused; its old status is replaced.

        Args:
            target: Function to execute in thread.
            name: Thread name, unique among running threads.
            args: Positional arguments for target function.
            kwargs: Keyword arguments for target function.

        Returns:
            The started Thread.

        Raises:
            RuntimeError: If ``name`` is still running or max_threads are active.
        """
        with self.lock:
            current = self.threads.get(name)
            if current is not None and current.active:
                raise RuntimeError(f"Thread '{name}' already exists and is running")

            active = sum(1 for entry in self.threads.values() if entry.active)
            if active >= self.config.max_threads:
                raise RuntimeError(f"Max threads ({self.config.max_threads}) limit reached")

            thread = threading.Thread(
                target=self._run,
                args=(name, target, args, kwargs or {}),
                name=name,
                daemon=self.config.daemon_threads,
            )
            self.threads[name] = ThreadStatus(name=name, thread=thread)
            thread.start()

        self.logger.debug(f"Started thread '{name}' (daemon={self.config.daemon_threads})")
        return thread

    def request_shutdown(self) -> None:
        """Ask every cooperating target to return."""
        self.shutdown_event.set()

    def get_thread_status(self, name: str) -> dict | None:
        """Status snapshot for ``name``, or None if it was never started."""
        with self.lock:
            entry = self.threads.get(name)
            return entry.as_dict() if entry is not None else None

    def is_thread_alive(self, name: str) -> bool:
        with self.lock:
            entry = self.threads.get(name)
            return entry is not None and entry.thread.is_alive()

    def wait_for_thread(self, name: str, timeout: float | None = None) -> bool:
        """Join ``name`` for up to ``timeout`` seconds.

        Args:
            name: Thread name to wait for.
            timeout: Seconds to wait. Uses ``config.thread_timeout`` if None.

        Returns:
            True if the thread has finished, False if it is unknown or still running.
        """
        with self.lock:
            entry = self.threads.get(name)
        if entry is None:
            self.logger.warning(f"Thread '{name}' not found")
            return False

        entry.thread.join(timeout=self.config.thread_timeout if timeout is None else timeout)
        if entry.thread.is_alive():
            self.logger.warning(f"Thread '{name}' still running after join timeout")
            return False
        return True
