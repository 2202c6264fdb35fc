"""Tests for config module."""

import pytest

from src.folderwatch.config import WatcherConfig
from src.folderwatch.filters import accept_all_files


class TestWatcherConfig:
    """Tests for WatcherConfig class."""

    def test_default_values(self):
        config = WatcherConfig()
        assert config.interval_ms == 1100
        assert config.extensions == []
        assert config.cache_prefix == "trakem2."

    def test_custom_values(self):
        config = WatcherConfig(interval_ms=200, extensions=["tif"], cache_prefix="tmp.")
        assert config.interval_ms == 200
        assert config.extensions == ["tif"]
        assert config.cache_prefix == "tmp."

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            WatcherConfig(interval_ms=0)

    def test_default_file_filter_accepts_all(self):
        assert WatcherConfig().file_filter() is accept_all_files

    def test_extension_file_filter(self, tmp_path):
        (tmp_path / "a.tif").write_text("")
        (tmp_path / "b.txt").write_text("")

        accept = WatcherConfig(extensions=["tif"]).file_filter()
        assert accept(tmp_path / "a.tif") is True
        assert accept(tmp_path / "b.txt") is False

    def test_dir_filter_uses_prefix(self, tmp_path):
        (tmp_path / "tmp.x").mkdir()
        (tmp_path / "trakem2.x").mkdir()

        accept = WatcherConfig(cache_prefix="tmp.").dir_filter()
        assert accept(tmp_path / "tmp.x") is False
        assert accept(tmp_path / "trakem2.x") is True


class TestWatcherConfigFromEnv:
    """Tests for WatcherConfig.from_env."""

    def test_empty_environment(self):
        config = WatcherConfig.from_env({})
        assert config == WatcherConfig()

    def test_reads_variables(self):
        config = WatcherConfig.from_env({
            "FOLDERWATCH_INTERVAL_MS": "500",
            "FOLDERWATCH_EXTENSIONS": "tif, png,,",
            "FOLDERWATCH_CACHE_PREFIX": "cache.",
        })
        assert config.interval_ms == 500
        assert config.extensions == ["tif", "png"]
        assert config.cache_prefix == "cache."

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            WatcherConfig.from_env({"FOLDERWATCH_INTERVAL_MS": "soon"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("FOLDERWATCH_INTERVAL_MS", "750")
        assert WatcherConfig.from_env().interval_ms == 750
