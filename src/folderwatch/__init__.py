"""
Folder Watcher Package

Polls a folder tree at a fixed interval and reports the files that
appeared since the previous poll.

Features:
- Breadth-first discovery of new subfolders on every poll
- Seen/fresh file tracking per poll cycle
- Pluggable file and folder filters
- Observers notified after every cycle and once on shutdown
- Non-overlapping fixed-rate scheduling on a single thread
"""

from .models import WatcherState, PollStats

from .config import WatcherConfig

from .exceptions import (
    WatcherError,
    RootError,
    RootNotFoundError,
    RootNotADirectoryError,
    DirectoryListingError,
    WatcherStoppedError,
)

from .filters import (
    CACHE_FOLDER_PREFIX,
    EntryFilter,
    accept_all_files,
    extension_filter,
    folder_filter,
)
from .scheduler import PeriodicTask
from .listeners import (
    FolderListener,
    CallbackListener,
    EventHandlerListener,
    PrintListener,
)
from .watcher import FolderWatcher, list_children


__all__ = [
    # Models
    "WatcherState",
    "PollStats",
    # Config
    "WatcherConfig",
    # Exceptions
    "WatcherError",
    "RootError",
    "RootNotFoundError",
    "RootNotADirectoryError",
    "DirectoryListingError",
    "WatcherStoppedError",
    # Filters
    "CACHE_FOLDER_PREFIX",
    "EntryFilter",
    "accept_all_files",
    "extension_filter",
    "folder_filter",
    # Components
    "PeriodicTask",
    "FolderListener",
    "CallbackListener",
    "EventHandlerListener",
    "PrintListener",
    # Watcher
    "FolderWatcher",
    "list_children",
]

__version__ = "0.1.0"
