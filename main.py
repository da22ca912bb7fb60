#!/usr/bin/env python3
"""
bbcd core: command-line entry point.

Usage:
    python3 main.py sources            # list source ids, groups and names
    python3 main.py maxday YEAR MONTH  # day count for a month
    python3 main.py diagnose           # probe every source's stream url
"""

import sys
import json
import logging
from pathlib import Path
from datetime import datetime

# ── Determine project root ────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bbcd.core.constants import APP_NAME, APP_VERSION, LOG_DIR
from bbcd.core.config import AppConfig
from bbcd.core.calendar_rules import max_day
from bbcd.core.diagnostics import get_diagnostics
from bbcd.core.error_codes import CoreError

LOG_FILE = LOG_DIR / "bbcd.log"

logger = logging.getLogger(APP_NAME)


def setup_logging(level: str):
    """Log to the app log file, and to stderr when run from a terminal."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    handlers = [logging.FileHandler(LOG_FILE, encoding="utf-8")]
    if sys.stderr.isatty():
        handlers.append(logging.StreamHandler())
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def cmd_sources(config: AppConfig) -> int:
    catalog = config.load_catalog()
    for group in catalog.group_names():
        print(f"{group}:")
        for source in catalog.sources_in(group):
            print(f"  {source.id:3d}  {source.name}")
    return 0


def cmd_maxday(config: AppConfig, args: list[str]) -> int:
    if len(args) != 2:
        print("usage: main.py maxday YEAR MONTH", file=sys.stderr)
        return 2
    try:
        year, month = int(args[0]), int(args[1])
    except ValueError:
        print("YEAR and MONTH must be integers", file=sys.stderr)
        return 2
    print(max_day(year, month, config.legacy_leap_rule))
    return 0


def cmd_diagnose(config: AppConfig) -> int:
    catalog = config.load_catalog()
    print(json.dumps(get_diagnostics(catalog, config.probe_timeout_sec), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    config = AppConfig()
    setup_logging(config.log_level)

    logger.info("%s v%s starting at %s", APP_NAME, APP_VERSION, datetime.now().isoformat())

    if not argv:
        print(__doc__.strip(), file=sys.stderr)
        return 2

    command, args = argv[0], argv[1:]
    try:
        if command == "sources":
            return cmd_sources(config)
        if command == "maxday":
            return cmd_maxday(config, args)
        if command == "diagnose":
            return cmd_diagnose(config)
    except (CoreError, OSError, ValueError) as e:
        logger.error("%s failed: %s", command, e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"unknown command {command!r}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    sys.exit(main())
