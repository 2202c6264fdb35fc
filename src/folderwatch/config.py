"""Configuration for the folder watcher package."""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .filters import (
    CACHE_FOLDER_PREFIX,
    EntryFilter,
    accept_all_files,
    extension_filter,
    folder_filter,
)

ENV_PREFIX = "FOLDERWATCH_"


@dataclass
class WatcherConfig:
    """
    Configuration options for the folder watcher.
    
    Attributes:
        interval_ms: Milliseconds between the starts of two poll cycles
        extensions: File extensions of interest; empty accepts every file
        cache_prefix: Name prefix of folders that are never traversed
    """
    interval_ms: int = 1100
    extensions: List[str] = field(default_factory=list)
    cache_prefix: str = CACHE_FOLDER_PREFIX

    def __post_init__(self):
        if self.interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive: {self.interval_ms}")

    def file_filter(self) -> EntryFilter:
        """Build the acceptance filter for this configuration."""
        if self.extensions:
            return extension_filter(*self.extensions)
        return accept_all_files

    def dir_filter(self) -> EntryFilter:
        """Build the traversal filter for this configuration."""
        return folder_filter(self.cache_prefix)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WatcherConfig":
        """
        Create a configuration from FOLDERWATCH_* environment variables.
        
        Args:
            environ: Mapping to read instead of os.environ
            
        Returns:
            Configuration with defaults for unset variables
            
        Raises:
            ValueError: If FOLDERWATCH_INTERVAL_MS is not a positive integer
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        interval = env.get(f"{ENV_PREFIX}INTERVAL_MS")
        if interval:
            try:
                kwargs["interval_ms"] = int(interval)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}INTERVAL_MS must be an integer: {interval!r}")

        extensions = env.get(f"{ENV_PREFIX}EXTENSIONS")
        if extensions:
            kwargs["extensions"] = [e.strip() for e in extensions.split(",") if e.strip()]

        prefix = env.get(f"{ENV_PREFIX}CACHE_PREFIX")
        if prefix is not None:
            kwargs["cache_prefix"] = prefix

        return cls(**kwargs)
