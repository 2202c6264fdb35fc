"""Tests for data models."""

import pytest
from dataclasses import FrozenInstanceError

from src.folderwatch.models import PollStats, WatcherState


class TestWatcherState:
    """Tests for WatcherState enum."""

    def test_values(self):
        assert WatcherState.IDLE.value == "idle"
        assert WatcherState.RUNNING.value == "running"
        assert WatcherState.STOPPED.value == "stopped"


class TestPollStats:
    """Tests for PollStats dataclass."""

    def test_to_dict(self):
        stats = PollStats(cycle=3, folders=4, new_folders=1, fresh_files=2, seen_files=9)
        assert stats.to_dict() == {
            "cycle": 3,
            "folders": 4,
            "new_folders": 1,
            "fresh_files": 2,
            "seen_files": 9,
            "listing_errors": 0,
            "duration": 0.0,
        }

    def test_frozen(self):
        stats = PollStats(cycle=1, folders=1, new_folders=0, fresh_files=0, seen_files=0)
        with pytest.raises(FrozenInstanceError):
            stats.cycle = 2
