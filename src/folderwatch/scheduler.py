"""Fixed-rate periodic task running on a single background thread."""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Runs a callable now and then on a fixed-rate grid of ticks.
    
    Runs never overlap: the next run starts only after the previous one
    returned. Ticks that fall due while a run is still in progress are
    skipped, and the following run happens at its originally scheduled
    time on the grid.
    """

    def __init__(
        self,
        target: Callable[[], None],
        interval: float,
        name: str = "PeriodicTask",
    ):
        """
        Initialize the task.
        
        Args:
            target: Callable invoked on every tick
            interval: Seconds between ticks
            name: Name of the background thread
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive: {interval}")
        self.target = target
        self.interval = interval
        self.name = name
        self.runs = 0
        self.skipped = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def start(self) -> bool:
        """
        Start ticking in a daemon thread.
        
        Returns:
            True if the thread was started, False if already started
        """
        with self._lock:
            if self._thread is not None:
                return False
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()
            return True

    def cancel(self, timeout: Optional[float] = None) -> None:
        """
        Stop scheduling runs and wait for an in-flight run to finish.
        
        Waiting is skipped when called from the task's own thread.
        
        Args:
            timeout: Maximum seconds to wait for the thread to exit
        """
        self._stop_event.set()
        with self._lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def in_task_thread(self) -> bool:
        """Check if the caller runs on the task's own thread."""
        with self._lock:
            return self._thread is threading.current_thread()

    @property
    def cancelled(self) -> bool:
        """Check if cancel() has been called."""
        return self._stop_event.is_set()

    def is_alive(self) -> bool:
        """Check if the background thread is running."""
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        next_run = time.monotonic()
        logger.debug(f"{self.name} started, interval={self.interval}s")

        while not self._stop_event.is_set():
            try:
                self.target()
            except Exception:
                logger.exception(f"{self.name} run failed")
            self.runs += 1

            next_run += self.interval
            now = time.monotonic()
            if next_run <= now:
                missed = int((now - next_run) // self.interval) + 1
                next_run += missed * self.interval
                self.skipped += missed
                logger.debug(f"{self.name} overran, skipped {missed} tick(s)")

            self._stop_event.wait(timeout=max(0.0, next_run - time.monotonic()))

        logger.debug(f"{self.name} exited after {self.runs} run(s)")
