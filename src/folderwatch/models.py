"""Data models for the folder watcher package."""

from dataclasses import dataclass
from enum import Enum


class WatcherState(Enum):
    """Lifecycle states of a FolderWatcher."""
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class PollStats:
    """
    Summary of one completed poll cycle.
    
    Attributes:
        cycle: 1-based number of the cycle
        folders: Number of tracked folders after the cycle
        new_folders: Folders discovered during the cycle
        fresh_files: Files first seen during the cycle
        seen_files: Files seen across all cycles so far
        listing_errors: Folders that could not be listed
        duration: Wall time spent on discovery, in seconds
    """
    cycle: int
    folders: int
    new_folders: int
    fresh_files: int
    seen_files: int
    listing_errors: int = 0
    duration: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for logging or serialization."""
        return {
            "cycle": self.cycle,
            "folders": self.folders,
            "new_folders": self.new_folders,
            "fresh_files": self.fresh_files,
            "seen_files": self.seen_files,
            "listing_errors": self.listing_errors,
            "duration": self.duration,
        }
