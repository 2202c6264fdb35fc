#!/usr/bin/env python3
"""
CLI for watching a folder and printing the files that appear in it.

Usage:
    python -m src.cli /path/to/folder
    python -m src.cli /path/to/folder --interval-ms 500 --ext tif --ext png

Settings can also come from FOLDERWATCH_* environment variables or a .env
file; command-line flags take precedence.
"""

import argparse
import logging
import signal
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from src.folderwatch import (
    FolderWatcher,
    PrintListener,
    RootError,
    WatcherConfig,
)


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("cli")


class GracefulShutdown:
    """Handle graceful shutdown on SIGINT/SIGTERM."""

    def __init__(self):
        self.should_exit = False
        signal.signal(signal.SIGINT, self._handler)
        signal.signal(signal.SIGTERM, self._handler)

    def _handler(self, signum, frame):
        logger.info("Received shutdown signal, stopping...")
        self.should_exit = True


def build_config(args) -> WatcherConfig:
    """Merge environment settings with command-line flags."""
    config = WatcherConfig.from_env()
    overrides = {}
    if args.interval_ms is not None:
        overrides["interval_ms"] = args.interval_ms
    if args.ext:
        overrides["extensions"] = list(args.ext)
    if args.cache_prefix is not None:
        overrides["cache_prefix"] = args.cache_prefix
    return replace(config, **overrides)


def cmd_watch(args, shutdown=None) -> int:
    """Watch a folder until interrupted, printing fresh files every cycle."""
    config = build_config(args)
    root = Path(args.path)

    watcher = FolderWatcher.from_config(root, config)
    watcher.add_observer(PrintListener())

    try:
        watcher.start()
    except RootError as e:
        logger.error(str(e))
        return 1

    if shutdown is None:
        shutdown = GracefulShutdown()

    logger.info(f"Interval: {config.interval_ms} ms")
    if config.extensions:
        logger.info(f"Extensions: {', '.join(config.extensions)}")
    logger.info("Press Ctrl+C to stop")

    with watcher:
        while not shutdown.should_exit:
            time.sleep(0.2)

    stats = watcher.last_poll
    if stats is not None:
        logger.info(f"Watcher stopped after {stats.cycle} cycle(s), {stats.seen_files} file(s) seen")
    else:
        logger.info("Watcher stopped")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folderwatch",
        description="Poll a folder tree and print newly appearing files",
    )
    parser.add_argument("path", help="Folder to watch")
    parser.add_argument("--interval-ms", type=int, default=None,
                        help="Poll interval in milliseconds (default: 1100)")
    parser.add_argument("--ext", action="append", default=None,
                        help="Accepted file extension, may be repeated (default: all files)")
    parser.add_argument("--cache-prefix", default=None,
                        help="Skip folders whose name starts with this (default: trakem2.)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        code = cmd_watch(args)
    except ValueError as e:
        logger.error(str(e))
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
