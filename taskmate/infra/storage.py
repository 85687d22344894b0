from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from datetime import date, time
from pathlib import Path

from taskmate.domain.datetimes import NO_TIME_MARKER, parse_clock_time, parse_iso_date
from taskmate.domain.entities import TaskEntity
from taskmate.domain.enums import DoneFlag, TaskKind
from taskmate.domain.errors import CorruptedDataError, LoadError, SaveError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR_RE = re.compile(r"\s*\|\s*")

MIN_FIELDS = {
    TaskKind.TODO: 3,
    TaskKind.DEADLINE: 5,
    TaskKind.EVENT: 7,
}


def _parse_date(raw: str, line: str) -> date:
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise CorruptedDataError(line, f"invalid date {raw.strip()!r}") from None


def _parse_time(raw: str, line: str) -> time | None:
    token = raw.strip()
    if token == NO_TIME_MARKER:
        return None
    try:
        return parse_clock_time(token)
    except ValueError:
        raise CorruptedDataError(line, f"invalid time {token!r}") from None


def decode_line(line: str) -> TaskEntity:
    """Decode one stored record; raises ``CorruptedDataError`` on any defect."""
    parts = FIELD_SEPARATOR_RE.split(line.strip())
    if len(parts) < 3:
        raise CorruptedDataError(line, "too few fields")

    try:
        kind = TaskKind(parts[0])
    except ValueError:
        raise CorruptedDataError(line, f"unknown task type {parts[0]!r}") from None

    try:
        is_done = DoneFlag(parts[1]) is DoneFlag.DONE
    except ValueError:
        raise CorruptedDataError(line, f"invalid done flag {parts[1]!r}") from None

    if len(parts) < MIN_FIELDS[kind]:
        raise CorruptedDataError(line, "too few fields")

    description = parts[2]
    if not description:
        raise CorruptedDataError(line, "empty description")

    if kind is TaskKind.TODO:
        return TaskEntity.todo(description, is_done)
    if kind is TaskKind.DEADLINE:
        return TaskEntity.deadline(
            description,
            _parse_date(parts[3], line),
            _parse_time(parts[4], line),
            is_done,
        )
    return TaskEntity.event(
        description,
        _parse_date(parts[3], line),
        _parse_time(parts[4], line),
        _parse_date(parts[5], line),
        _parse_time(parts[6], line),
        is_done,
    )


def encode_task(task: TaskEntity) -> str:
    return task.to_data_string()


class TaskStorage:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[TaskEntity]:
        if not self.path.exists():
            logger.info("No data file at %s, starting with an empty list", self.path)
            return []

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(f"Failed to load tasks: {exc}") from exc

        tasks = [decode_line(line) for line in text.splitlines() if line.strip()]
        logger.info("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Iterable[TaskEntity]) -> None:
        lines = [encode_task(task) for task in tasks]
        content = "".join(f"{line}\n" for line in lines)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise SaveError(f"Failed to save tasks: {exc}") from exc
        logger.debug("Saved %d task(s) to %s", len(lines), self.path)
