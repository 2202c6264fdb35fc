"""Observers notified by a FolderWatcher after each poll cycle."""

import logging
import sys
from typing import TYPE_CHECKING, Callable, Optional, TextIO

from watchdog.events import FileCreatedEvent, FileSystemEventHandler

if TYPE_CHECKING:
    from .watcher import FolderWatcher

logger = logging.getLogger(__name__)


class FolderListener:
    """
    Base class for FolderWatcher observers.
    
    Subclasses implement on_poll(); on_stop() is optional and is called
    exactly once when the watcher stops.
    """

    def on_poll(self, watcher: "FolderWatcher") -> None:
        raise NotImplementedError

    def on_stop(self) -> None:
        pass


class CallbackListener(FolderListener):
    """Listener that forwards to plain functions."""

    def __init__(
        self,
        on_poll: Callable[["FolderWatcher"], None],
        on_stop: Optional[Callable[[], None]] = None,
    ):
        self._on_poll = on_poll
        self._on_stop = on_stop

    def on_poll(self, watcher: "FolderWatcher") -> None:
        self._on_poll(watcher)

    def on_stop(self) -> None:
        if self._on_stop is not None:
            self._on_stop()


class EventHandlerListener(FolderListener):
    """
    Feeds fresh files to a watchdog event handler.
    
    Every file first seen in a cycle is dispatched to the handler as a
    FileCreatedEvent, so handlers written for watchdog observers can be
    driven by polling instead.
    """

    def __init__(self, handler: FileSystemEventHandler):
        self.handler = handler

    def on_poll(self, watcher: "FolderWatcher") -> None:
        for path in watcher.get_fresh_files():
            self.handler.dispatch(FileCreatedEvent(str(path)))


class PrintListener(FolderListener):
    """Prints the fresh files of every cycle, one path per line."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def on_poll(self, watcher: "FolderWatcher") -> None:
        out = self.stream or sys.stdout
        fresh = watcher.get_fresh_files()
        if fresh:
            for path in fresh:
                print(path, file=out)
        else:
            print("No new files", file=out)
        print(file=out)
        out.flush()

    def on_stop(self) -> None:
        logger.debug("PrintListener stopped")
