"""
Polling monitor that drives observers from a background thread.

The monitor owns a single thread which, every interval, asks each registered
observer to check for changes. Observers run serially in registration order.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from polling_monitor.config.settings import get_config
from polling_monitor.core.interfaces import IFileAlterationObserver
from polling_monitor.models.exceptions import InitializationError, MonitoringError, ShutdownError

logger = logging.getLogger(__name__)

ThreadFactory = Callable[[Callable[[], None]], threading.Thread]

_MAX_RECORDED_ERRORS = 100


class FileAlterationMonitor:
    """
    Runs observers periodically on one background thread.

    The monitor is either idle or running. start() initializes every observer
    and launches the polling thread; stop() asks the thread to finish, waits a
    bounded time for it and destroys every observer.
    """

    def __init__(
        self,
        interval: float | None = None,
        *observers: IFileAlterationObserver,
        thread_factory: ThreadFactory | None = None,
    ):
        """
        Initialize the monitor.

        Args:
            interval: Seconds between poll passes (configured default if None)
            observers: Observers to register in order
            thread_factory: Optional callable creating the polling thread from a target

        Raises:
            MonitoringError: If the interval is not positive
        """
        self.interval = get_config().poll_interval_seconds if interval is None else float(interval)
        if self.interval <= 0:
            raise MonitoringError(f"Interval must be positive, got {self.interval}", operation="init")

        self.thread_factory = thread_factory

        # Copy-on-write observer registry; mutations replace the tuple
        self._observers: tuple[IFileAlterationObserver, ...] = ()
        self._observers_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._running = False

        # Statistics tracking
        self._stats = {"passes": 0, "observer_failures": 0, "errors": []}

        for observer in observers:
            self.add_observer(observer)

    def add_observer(self, observer: IFileAlterationObserver | None) -> None:
        """Register an observer; None is ignored."""
        if observer is None:
            return
        with self._observers_lock:
            self._observers = self._observers + (observer,)

    def remove_observer(self, observer: IFileAlterationObserver | None) -> None:
        """Remove every registration of an observer; None is ignored."""
        if observer is None:
            return
        with self._observers_lock:
            self._observers = tuple(registered for registered in self._observers if registered is not observer)

    @property
    def observers(self) -> tuple[IFileAlterationObserver, ...]:
        """Get a snapshot of the registered observers."""
        return self._observers

    @property
    def is_running(self) -> bool:
        """Check if the polling thread has been started and not stopped."""
        return self._running

    def start(self) -> None:
        """
        Initialize all observers and start the polling thread.

        Raises:
            MonitoringError: If the monitor or a previous polling thread is still running
            InitializationError: If an observer fails to initialize
        """
        with self._state_lock:
            if self._running:
                raise MonitoringError("Monitor is already running", operation="start")

            previous = self._thread
            if previous is not None and previous.is_alive() and previous is not threading.current_thread():
                # A pass that outlived stop() still owns the snapshot trees
                raise MonitoringError("Previous polling thread is still running", operation="start")

            for observer in self._observers:
                try:
                    observer.initialize()
                except Exception as e:
                    logger.error("Failed to initialize observer %r: %s", observer, e)
                    raise InitializationError(
                        f"Failed to initialize observer: {e}", observer=repr(observer), cause=e
                    ) from e

            self._stop_event = threading.Event()
            self._running = True
            if self.thread_factory is not None:
                self._thread = self.thread_factory(self.run)
            else:
                self._thread = threading.Thread(target=self.run, name="FileAlterationMonitor", daemon=True)
            self._thread.start()

            logger.info("Monitor started with %d observers (interval: %ss)", len(self._observers), self.interval)

    def stop(self, stop_interval: float | None = None) -> None:
        """
        Stop the polling thread and destroy all observers.

        Args:
            stop_interval: Seconds to wait for the thread to finish (one interval if None)

        Raises:
            MonitoringError: If the monitor is not running
            ShutdownError: If one or more observers fail to be destroyed
        """
        with self._state_lock:
            if not self._running:
                raise MonitoringError("Monitor is not running", operation="stop")

            logger.info("Stopping monitor...")
            self._running = False
            self._stop_event.set()

            timeout = self.interval if stop_interval is None else stop_interval
            thread = self._thread
            if thread is not None and thread is not threading.current_thread():
                thread.join(timeout)
                if thread.is_alive():
                    logger.warning("Polling thread did not finish within %ss", timeout)

            failures = []
            for observer in self._observers:
                try:
                    observer.destroy()
                except Exception as e:
                    logger.error("Failed to destroy observer %r: %s", observer, e)
                    failures.append(e)

            if failures:
                raise ShutdownError(f"{len(failures)} observer(s) failed to shut down", failures=failures)

            logger.info("Monitor stopped")

    def run(self) -> None:
        """Polling loop executed by the background thread."""
        # Bound to this run so a thread outliving stop() never resumes after a restart
        stop_event = self._stop_event
        while not stop_event.is_set():
            for observer in self._observers:
                if stop_event.is_set():
                    break
                try:
                    observer.check_and_notify()
                except Exception as e:
                    self._record_failure(observer, e)
            else:
                self._stats["passes"] += 1

            # Interruptible sleep; stop() sets the event to wake early
            if stop_event.wait(self.interval):
                break

    def _record_failure(self, observer: IFileAlterationObserver, error: Exception) -> None:
        logger.error("Observer %r failed during check: %s", observer, error)
        self._stats["observer_failures"] += 1
        self._stats["errors"].append(f"{observer!r}: {error}")

        # Keep only the most recent errors
        if len(self._stats["errors"]) > _MAX_RECORDED_ERRORS:
            self._stats["errors"] = self._stats["errors"][-_MAX_RECORDED_ERRORS:]

    def get_monitoring_stats(self) -> dict[str, Any]:
        """
        Get monitoring statistics.

        Returns:
            Dictionary with state, configuration and processing counters
        """
        return {
            "running": self._running,
            "interval": self.interval,
            "observers": [repr(observer) for observer in self._observers],
            "passes": self._stats["passes"],
            "observer_failures": self._stats["observer_failures"],
            "errors": list(self._stats["errors"]),
        }

    def __repr__(self) -> str:
        return (
            f"FileAlterationMonitor(interval={self.interval}, "
            f"observers={len(self._observers)}, running={self._running})"
        )
