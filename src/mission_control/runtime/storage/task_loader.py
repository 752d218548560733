"""Read task records from a directory of JSON files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from ..domain.models import TaskRecord, now_ms
from ..domain.normalize import normalize_task

logger = logging.getLogger(__name__)

MAX_TASK_FILE_BYTES = 1_048_576
AGENT_STATUS_FILE = "agents-status.json"
FEED_ITEMS_FILE = "feed-items.json"
# Sidecar files share the task directory but are not task records.
RESERVED_FILES = frozenset({AGENT_STATUS_FILE, FEED_ITEMS_FILE})

SkipReason = Literal[
    "missing_directory",
    "unreadable_directory",
    "path_escape",
    "oversized",
    "unreadable",
    "invalid_json",
    "not_an_object",
    "normalize_error",
]


@dataclass(frozen=True)
class SkipDiagnostic:
    """Why one file (or the whole directory) contributed no task."""
    file: str
    reason: SkipReason
    detail: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"file": self.file, "reason": self.reason, "detail": self.detail}


@dataclass
class LoadResult:
    """Tasks loaded from disk, newest first, plus the files that were skipped."""
    tasks: list[TaskRecord] = field(default_factory=list)
    skipped: list[SkipDiagnostic] = field(default_factory=list)


def _is_contained(path: Path, root: Path) -> bool:
    return path != root and root in path.parents


def _load_one(path: Path, resolved_dir: Path, *, now: int) -> TaskRecord | SkipDiagnostic:
    name = path.name
    resolved = path.resolve()
    if not _is_contained(resolved, resolved_dir):
        logger.warning("Skipping path traversal attempt: %s", name)
        return SkipDiagnostic(name, "path_escape", str(resolved))

    try:
        size = resolved.stat().st_size
    except OSError as exc:
        logger.error("Error loading %s: %s", name, exc)
        return SkipDiagnostic(name, "unreadable", str(exc))
    if size > MAX_TASK_FILE_BYTES:
        logger.warning("Skipping oversized task file: %s (%d bytes)", name, size)
        return SkipDiagnostic(name, "oversized", f"{size} bytes")

    try:
        content = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error loading %s: %s", name, exc)
        return SkipDiagnostic(name, "unreadable", str(exc))
    try:
        raw = json.loads(content)
    except (json.JSONDecodeError, RecursionError) as exc:
        # Pathologically deep nesting exhausts the decoder stack.
        logger.error("Error loading %s: %s", name, exc)
        return SkipDiagnostic(name, "invalid_json", str(exc))
    if not isinstance(raw, dict):
        logger.error("Error loading %s: expected a JSON object, got %s", name, type(raw).__name__)
        return SkipDiagnostic(name, "not_an_object", type(raw).__name__)

    try:
        return normalize_task(raw, path.stem, now=now)
    except Exception as exc:
        logger.exception("Error normalizing %s", name)
        return SkipDiagnostic(name, "normalize_error", str(exc))


def load_tasks(tasks_dir: Path, *, now: Optional[int] = None) -> LoadResult:
    """Load and normalize every task file directly inside ``tasks_dir``.

    Files are visited in name order. Files whose resolved location falls
    outside the directory, files over ``MAX_TASK_FILE_BYTES``, and files that
    cannot be decoded are skipped and reported in ``LoadResult.skipped``; none
    of them aborts the load.

    Args:
        tasks_dir (Path): Directory holding one ``*.json`` file per task.
        now (Optional[int]): Epoch millis substituted for missing task dates.

    Returns:
        LoadResult: Tasks sorted newest first by ``created_at`` (stable for
        ties) together with the skip diagnostics.
    """
    result = LoadResult()
    instant = now if now is not None else now_ms()
    if not tasks_dir.is_dir():
        logger.warning("Tasks directory not found: %s", tasks_dir)
        result.skipped.append(SkipDiagnostic(str(tasks_dir), "missing_directory"))
        return result

    try:
        resolved_dir = tasks_dir.resolve()
        candidates = sorted(
            (path for path in tasks_dir.iterdir() if path.suffix == ".json" and path.name not in RESERVED_FILES),
            key=lambda path: path.name,
        )
    except OSError as exc:
        logger.warning("Cannot read tasks directory %s: %s", tasks_dir, exc)
        result.skipped.append(SkipDiagnostic(str(tasks_dir), "unreadable_directory", str(exc)))
        return result

    for path in candidates:
        if path.is_dir():
            continue
        outcome = _load_one(path, resolved_dir, now=instant)
        if isinstance(outcome, SkipDiagnostic):
            result.skipped.append(outcome)
        else:
            result.tasks.append(outcome)

    result.tasks.sort(key=lambda task: task.created_at, reverse=True)
    if result.skipped:
        logger.info("Loaded %d task(s) from %s, skipped %d", len(result.tasks), tasks_dir, len(result.skipped))
    return result
