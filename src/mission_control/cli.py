"""Command-line entry point for one-off dashboard aggregation."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import load_runtime_config
from .runtime.aggregation import build_snapshot
from .runtime.settings import SettingsCache
from .runtime.storage import Container, load_tasks


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mission-control",
        description="Mission Control - aggregate file-based task records into a dashboard snapshot",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level for diagnostics on stderr (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    snapshot = sub.add_parser("snapshot", help="Print one aggregated snapshot as JSON")
    snapshot.add_argument(
        "--tasks-dir",
        type=Path,
        default=None,
        help="Task directory (default: $OPENCLAW_TASKS_DIR or ./tasks)",
    )
    snapshot.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings JSON/YAML file (default: $OPENCLAW_SETTINGS_PATH or ./settings.json)",
    )
    snapshot.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )

    check = sub.add_parser("check", help="List task files that would be skipped")
    check.add_argument(
        "--tasks-dir",
        type=Path,
        default=None,
        help="Task directory (default: $OPENCLAW_TASKS_DIR or ./tasks)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_runtime_config()
    tasks_dir = args.tasks_dir or config.tasks_dir

    if args.command == "check":
        result = load_tasks(tasks_dir)
        for skip in result.skipped:
            print(f"{skip.reason}\t{skip.file}\t{skip.detail}")
        return 1 if result.skipped else 0

    settings_path = args.settings or config.settings_path
    container = Container(tasks_dir, SettingsCache.for_path(settings_path))
    snapshot = build_snapshot(container)
    print(json.dumps(snapshot.to_dict(), indent=args.indent or None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
