"""Tests for the stock entry filters."""

import pytest

from src.folderwatch.filters import (
    CACHE_FOLDER_PREFIX,
    accept_all_files,
    extension_filter,
    folder_filter,
    normalize_extensions,
)


class TestAcceptAllFiles:
    """Tests for accept_all_files."""

    def test_accepts_files(self, tmp_path):
        path = tmp_path / "any.bin"
        path.write_bytes(b"")
        assert accept_all_files(path) is True

    def test_rejects_directories(self, tmp_path):
        assert accept_all_files(tmp_path) is False

    def test_rejects_missing(self, tmp_path):
        assert accept_all_files(tmp_path / "missing") is False


class TestExtensionFilter:
    """Tests for extension_filter."""

    def test_matches_extension(self, tmp_path):
        txt = tmp_path / "a.txt"
        png = tmp_path / "b.png"
        txt.write_text("")
        png.write_text("")

        accept = extension_filter(".txt")
        assert accept(txt) is True
        assert accept(png) is False

    def test_case_insensitive_and_optional_dot(self, tmp_path):
        upper = tmp_path / "SCAN.TIF"
        upper.write_text("")

        assert extension_filter("tif")(upper) is True
        assert extension_filter(".Tif")(upper) is True

    def test_multiple_extensions(self, tmp_path):
        accept = extension_filter("png", "jpg")
        for name in ("a.png", "b.jpg", "c.gif"):
            (tmp_path / name).write_text("")

        assert accept(tmp_path / "a.png") is True
        assert accept(tmp_path / "b.jpg") is True
        assert accept(tmp_path / "c.gif") is False
        assert accept.extensions == frozenset({".png", ".jpg"})

    def test_rejects_matching_directory(self, tmp_path):
        folder = tmp_path / "looks.txt"
        folder.mkdir()
        assert extension_filter("txt")(folder) is False

    def test_requires_extension(self):
        with pytest.raises(ValueError):
            extension_filter()
        with pytest.raises(ValueError):
            extension_filter("", "  ")

    def test_normalize_extensions(self):
        assert normalize_extensions(["TXT", ".png", " .Jpg "]) == frozenset({".txt", ".png", ".jpg"})


class TestFolderFilter:
    """Tests for folder_filter."""

    def test_default_prefix(self):
        assert CACHE_FOLDER_PREFIX == "trakem2."

    def test_accepts_regular_folder(self, tmp_path):
        sub = tmp_path / "sub1"
        sub.mkdir()
        assert folder_filter()(sub) is True

    def test_rejects_cache_folder(self, tmp_path):
        cache = tmp_path / "trakem2.cache"
        cache.mkdir()
        assert folder_filter()(cache) is False

    def test_rejects_files(self, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("")
        assert folder_filter()(path) is False

    def test_custom_prefix(self, tmp_path):
        skip = tmp_path / "_skip"
        keep = tmp_path / "trakem2.cache"
        skip.mkdir()
        keep.mkdir()

        accept = folder_filter("_")
        assert accept(skip) is False
        assert accept(keep) is True

    def test_empty_prefix_accepts_all_folders(self, tmp_path):
        cache = tmp_path / "trakem2.cache"
        cache.mkdir()
        assert folder_filter("")(cache) is True
