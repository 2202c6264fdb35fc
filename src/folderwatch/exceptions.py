"""Custom exceptions for the folder watcher package."""

from pathlib import Path


class WatcherError(Exception):
    """Base exception for all watcher errors."""
    pass


class RootError(WatcherError):
    """Error related to the watched root folder."""
    pass


class RootNotFoundError(RootError, FileNotFoundError):
    """Root folder does not exist."""
    pass


class RootNotADirectoryError(RootError, NotADirectoryError):
    """Root path exists but is not a directory."""
    pass


class DirectoryListingError(WatcherError):
    """A tracked directory could not be listed during a poll cycle."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class WatcherStoppedError(WatcherError):
    """Watcher has been stopped and cannot be used again."""
    pass
