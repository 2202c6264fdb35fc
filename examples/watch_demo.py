#!/usr/bin/env python3
"""
Folder watcher demo.

This example demonstrates:
1. Polling a temporary folder tree
2. Seeing files appear in new and existing subfolders
3. Feeding the results to a watchdog event handler
4. Skipping trakem2 cache folders

Usage:
    python examples/watch_demo.py
"""

import logging
import sys
import tempfile
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from watchdog.events import FileSystemEventHandler

from src.folderwatch import EventHandlerListener, FolderWatcher, PrintListener


class CreatedPrinter(FileSystemEventHandler):
    def on_created(self, event):
        print(f"[HANDLER] created: {event.src_path}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        (root / "section1").mkdir()
        (root / "section1" / "tile_000.tif").write_text("")

        watcher = FolderWatcher(root, 300, file_filter=["tif"])
        watcher.add_observer(PrintListener())
        watcher.add_observer(EventHandlerListener(CreatedPrinter()))

        with watcher:
            watcher.start()
            time.sleep(0.5)

            print("[DEMO] Adding files...")
            (root / "section1" / "tile_001.tif").write_text("")
            (root / "section2" / "deep").mkdir(parents=True)
            (root / "section2" / "deep" / "tile_002.tif").write_text("")
            (root / "trakem2.cache").mkdir()
            (root / "trakem2.cache" / "ignored.tif").write_text("")
            (root / "notes.txt").write_text("")
            time.sleep(1.0)

        print(f"[DEMO] Tracked folders: {[str(p) for p in watcher.get_folders()]}")
        print(f"[DEMO] Seen files: {len(watcher.get_seen_files())}")


if __name__ == "__main__":
    main()
