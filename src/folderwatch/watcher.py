"""Polling watcher that tracks new files under a directory tree."""

import logging
import os
import threading
import time
from collections import deque
from pathlib import Path
from typing import List, Optional, Sequence, Set, Union

from .config import WatcherConfig
from .exceptions import (
    DirectoryListingError,
    RootNotADirectoryError,
    RootNotFoundError,
    WatcherStoppedError,
)
from .filters import EntryFilter, accept_all_files, extension_filter, folder_filter
from .listeners import CallbackListener, FolderListener
from .models import PollStats, WatcherState
from .scheduler import PeriodicTask

logger = logging.getLogger(__name__)


class FolderWatcher:
    """
    Watches a folder tree by polling it at a fixed interval.

    Every poll cycle expands the set of tracked folders with newly found
    subfolders, lists the accepted files of every tracked folder, records
    which of them were never seen before, and notifies the observers.

    The watcher starts idle. start() begins polling on a background
    thread, stop() ends it for good.
    """

    def __init__(
        self,
        root: Union[str, Path],
        interval_ms: float,
        file_filter: Union[EntryFilter, Sequence[str], None] = None,
        dir_filter: Optional[EntryFilter] = None,
    ):
        """
        Initialize the watcher. Does not touch the filesystem.

        Args:
            root: Folder to watch
            interval_ms: Poll interval in milliseconds
            file_filter: Filter for files of interest, or a list of accepted
                extensions; defaults to every regular file
            dir_filter: Filter for folders to traverse; defaults to every
                folder that is not a trakem2 cache folder
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive: {interval_ms}")

        self._root = Path(root)
        self._interval_ms = interval_ms

        if file_filter is None:
            file_filter = accept_all_files
        elif isinstance(file_filter, str):
            file_filter = extension_filter(file_filter)
        elif not callable(file_filter):
            file_filter = extension_filter(*file_filter)
        self._file_filter: EntryFilter = file_filter
        self._dir_filter: EntryFilter = dir_filter or folder_filter()

        self._folders: List[Path] = [self._root]
        self._folder_keys: Set[str] = set()
        self._seen: List[Path] = []
        self._seen_set: Set[Path] = set()
        self._fresh: List[Path] = []
        self._observers: List[FolderListener] = []
        self._last_poll: Optional[PollStats] = None
        self._cycles = 0

        self._state = WatcherState.IDLE
        self._task: Optional[PeriodicTask] = None
        self._lock = threading.RLock()
        self._cycle_lock = threading.Lock()

    @classmethod
    def from_config(cls, root: Union[str, Path], config: WatcherConfig) -> "FolderWatcher":
        """Create a watcher using the interval and filters of a config."""
        return cls(
            root,
            config.interval_ms,
            file_filter=config.file_filter(),
            dir_filter=config.dir_filter(),
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """
        Start polling: one cycle right away, then one per interval.

        Does nothing if the watcher is already running.

        Raises:
            RootNotFoundError: If the root folder does not exist
            RootNotADirectoryError: If the root is not a directory
            WatcherStoppedError: If the watcher was stopped
        """
        with self._lock:
            if self._state is WatcherState.RUNNING:
                return
            if self._state is WatcherState.STOPPED:
                raise WatcherStoppedError("Watcher has been stopped")

            if not self._root.exists():
                raise RootNotFoundError(f"Root folder does not exist: {self._root}")
            if not self._root.is_dir():
                raise RootNotADirectoryError(f"Root is not a directory: {self._root}")

            self._task = PeriodicTask(
                self._tick,
                self._interval_ms / 1000.0,
                name=f"FolderWatcher-{self._root.name or self._root}",
            )
            self._state = WatcherState.RUNNING
            self._task.start()

        logger.info(f"Watching {self._root} every {self._interval_ms} ms")

    def stop(self, timeout: Optional[float] = 5.0) -> bool:
        """
        Stop polling for good and call on_stop() on every observer.

        A cycle in progress is allowed to finish. Only the first call on a
        running watcher has an effect.

        Args:
            timeout: Seconds to wait for a cycle in progress

        Returns:
            True if the watcher was stopped, False if it was not running
        """
        with self._lock:
            if self._state is not WatcherState.RUNNING:
                return False
            self._state = WatcherState.STOPPED
            task = self._task
            observers = list(self._observers)

        task.cancel(timeout=timeout)
        if task.is_alive() and not task.in_task_thread():
            logger.warning(f"Poll cycle still running after {timeout}s, not waiting")

        for observer in observers:
            try:
                observer.on_stop()
            except Exception:
                logger.exception(f"Observer {observer!r} failed to stop")

        logger.info(f"Stopped watching {self._root}")
        return True

    def add_observer(self, observer) -> FolderListener:
        """
        Register an observer for the following poll cycles.

        Args:
            observer: A FolderListener, any object with on_poll(), or a
                function taking the watcher

        Returns:
            The registered listener

        Raises:
            WatcherStoppedError: If the watcher was stopped
        """
        if not hasattr(observer, "on_poll"):
            if not callable(observer):
                raise TypeError(f"Not an observer: {observer!r}")
            observer = CallbackListener(observer)

        with self._lock:
            if self._state is WatcherState.STOPPED:
                raise WatcherStoppedError("Watcher has been stopped")
            self._observers.append(observer)
        return observer

    def remove_observer(self, observer) -> bool:
        """
        Unregister an observer.

        Returns:
            True if the observer was registered
        """
        with self._lock:
            try:
                self._observers.remove(observer)
                return True
            except ValueError:
                return False

    # ------------------------------------------------------------------
    # Poll cycle
    # ------------------------------------------------------------------

    def _tick(self) -> None:
        if self._state is WatcherState.RUNNING:
            self.poll_once()

    def poll_once(self) -> bool:
        """
        Run one poll cycle and notify the observers.

        Returns:
            True if a cycle ran, False if another cycle was in progress or
            the watcher is stopped
        """
        if self._state is WatcherState.STOPPED:
            return False
        if not self._cycle_lock.acquire(blocking=False):
            logger.debug(f"Poll cycle already in progress for {self._root}, skipping")
            return False

        try:
            stats = self._discover()
            logger.debug(f"Poll cycle finished: {stats.to_dict()}")
            self._notify()
            return True
        finally:
            self._cycle_lock.release()

    def _discover(self) -> PollStats:
        started = time.monotonic()
        failed: List[Path] = []

        with self._lock:
            folders = list(self._folders)

        if not self._folder_keys:
            self._folder_keys.add(self._identity(self._root))

        # Breadth first: new subfolders are scanned in this same cycle
        new_folders: List[Path] = []
        frontier = deque(folders)
        while frontier:
            folder = frontier.popleft()
            for child in self._scan(folder, self._dir_filter, failed):
                key = self._identity(child)
                if key in self._folder_keys:
                    continue
                self._folder_keys.add(key)
                new_folders.append(child)
                frontier.append(child)

        fresh: List[Path] = []
        fresh_set: Set[Path] = set()
        for folder in folders + new_folders:
            for path in self._scan(folder, self._file_filter, failed):
                if path not in self._seen_set and path not in fresh_set:
                    fresh.append(path)
                    fresh_set.add(path)

        with self._lock:
            self._folders.extend(new_folders)
            self._seen.extend(fresh)
            self._seen_set.update(fresh)
            self._fresh = fresh
            self._cycles += 1
            self._last_poll = PollStats(
                cycle=self._cycles,
                folders=len(self._folders),
                new_folders=len(new_folders),
                fresh_files=len(fresh),
                seen_files=len(self._seen),
                listing_errors=len(failed),
                duration=time.monotonic() - started,
            )
            return self._last_poll

    def _notify(self) -> None:
        with self._lock:
            observers = list(self._observers)

        for observer in observers:
            try:
                observer.on_poll(self)
            except Exception:
                logger.exception(f"Observer {observer!r} failed during poll")

    def _scan(self, folder: Path, accept: EntryFilter, failed: List[Path]) -> List[Path]:
        """List accepted children of a folder, treating failures as empty."""
        try:
            return list_children(folder, accept)
        except DirectoryListingError as e:
            logger.warning(str(e))
            failed.append(e.path)
            return []

    @staticmethod
    def _identity(path: Path) -> str:
        return os.path.realpath(path)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_seen_files(self) -> List[Path]:
        """
        Get all files seen since the watcher was created.

        Returns:
            A copy of the seen files, in discovery order
        """
        with self._lock:
            return list(self._seen)

    def get_fresh_files(self) -> List[Path]:
        """
        Get the files first seen in the last poll cycle.

        Returns:
            A copy of the fresh files, in discovery order
        """
        with self._lock:
            return list(self._fresh)

    def get_folders(self) -> List[Path]:
        """
        Get the tracked folders; the root always comes first.

        Returns:
            A copy of the tracked folders
        """
        with self._lock:
            return list(self._folders)

    @property
    def observers(self) -> List[FolderListener]:
        with self._lock:
            return list(self._observers)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @property
    def state(self) -> WatcherState:
        return self._state

    @property
    def is_running(self) -> bool:
        """Check if the watcher is polling."""
        return self._state is WatcherState.RUNNING

    @property
    def last_poll(self) -> Optional[PollStats]:
        """Statistics of the last completed cycle, None before the first."""
        with self._lock:
            return self._last_poll

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False

    def __repr__(self) -> str:
        return f"FolderWatcher(root={str(self._root)!r}, state={self._state.value})"


def list_children(folder: Path, accept: EntryFilter) -> List[Path]:
    """
    List the immediate children of a folder accepted by a filter.

    Children are returned in sorted order. An entry that vanishes or cannot
    be inspected while being filtered is left out.

    Args:
        folder: Folder to list
        accept: Filter applied to each child

    Returns:
        Accepted children

    Raises:
        DirectoryListingError: If the folder itself cannot be listed
    """
    try:
        children = sorted(folder.iterdir())
    except OSError as e:
        raise DirectoryListingError(f"Cannot list folder {folder}: {e}", folder) from e

    accepted = []
    for child in children:
        try:
            if accept(child):
                accepted.append(child)
        except OSError as e:
            logger.debug(f"Skipping {child}: {e}")
    return accepted
