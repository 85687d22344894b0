from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from .datetimes import format_date_for_storage, format_for_display, format_time_for_storage
from .enums import DoneFlag, TaskKind

_WHITESPACE_RE = re.compile(r"\s+")

DATA_SEPARATOR = " | "


def normalize_description(raw: str) -> str:
    return _WHITESPACE_RE.sub(" ", raw.strip()).casefold()


@dataclass
class TaskEntity:
    """One task of any kind.

    ``kind`` selects which date fields are meaningful: deadlines carry
    ``due_date``/``due_time``, events carry ``start_*`` and ``end_*``, todos
    carry none. ``__post_init__`` rejects any other combination.
    """

    kind: TaskKind
    description: str
    is_done: bool = False
    due_date: Optional[date] = None
    due_time: Optional[time] = None
    start_date: Optional[date] = None
    start_time: Optional[time] = None
    end_date: Optional[date] = None
    end_time: Optional[time] = None

    def __post_init__(self) -> None:
        self.kind = TaskKind(self.kind)
        self.description = self.description.strip()
        if not self.description:
            raise ValueError("task description must not be empty")

        deadline_fields = (self.due_date, self.due_time)
        event_fields = (self.start_date, self.start_time, self.end_date, self.end_time)

        if self.kind is TaskKind.TODO:
            if any(f is not None for f in deadline_fields + event_fields):
                raise ValueError("a todo carries no dates")
        elif self.kind is TaskKind.DEADLINE:
            if self.due_date is None:
                raise ValueError("a deadline needs a due date")
            if any(f is not None for f in event_fields):
                raise ValueError("a deadline carries no event dates")
        else:
            if self.start_date is None or self.end_date is None:
                raise ValueError("an event needs start and end dates")
            if any(f is not None for f in deadline_fields):
                raise ValueError("an event carries no due date")

    @classmethod
    def todo(cls, description: str, is_done: bool = False) -> TaskEntity:
        return cls(TaskKind.TODO, description, is_done)

    @classmethod
    def deadline(
        cls,
        description: str,
        due_date: date,
        due_time: time | None = None,
        is_done: bool = False,
    ) -> TaskEntity:
        return cls(TaskKind.DEADLINE, description, is_done, due_date=due_date, due_time=due_time)

    @classmethod
    def event(
        cls,
        description: str,
        start_date: date,
        start_time: time | None,
        end_date: date,
        end_time: time | None,
        is_done: bool = False,
    ) -> TaskEntity:
        return cls(
            TaskKind.EVENT,
            description,
            is_done,
            start_date=start_date,
            start_time=start_time,
            end_date=end_date,
            end_time=end_time,
        )

    def mark_done(self) -> None:
        self.is_done = True

    def mark_undone(self) -> None:
        self.is_done = False

    def matches(self, keyword: str | None) -> bool:
        needle = (keyword or "").strip().casefold()
        return bool(needle) and needle in self.description.casefold()

    def identity_key(self, match_time: bool = True) -> tuple:
        """Fields that decide whether two tasks are the same task.

        Completion status is never part of the key.
        """
        if self.kind is TaskKind.TODO:
            moments: tuple = ()
        elif self.kind is TaskKind.DEADLINE:
            moments = (self.due_date, self.due_time if match_time else None)
        else:
            moments = (
                self.start_date,
                self.start_time if match_time else None,
                self.end_date,
                self.end_time if match_time else None,
            )
        return (self.kind, normalize_description(self.description), *moments)

    def is_same_task(self, other: TaskEntity | None, match_time: bool = True) -> bool:
        if other is None:
            return False
        return self.identity_key(match_time) == other.identity_key(match_time)

    @property
    def status_icon(self) -> str:
        return "X" if self.is_done else " "

    def to_display_string(self) -> str:
        text = f"[{self.kind.value}][{self.status_icon}] {self.description}"
        if self.kind is TaskKind.DEADLINE:
            return f"{text} (by: {format_for_display(self.due_date, self.due_time)})"
        if self.kind is TaskKind.EVENT:
            start = format_for_display(self.start_date, self.start_time)
            end = format_for_display(self.end_date, self.end_time)
            return f"{text} (from: {start} to: {end})"
        return text

    def to_data_string(self) -> str:
        flag = DoneFlag.DONE if self.is_done else DoneFlag.NOT_DONE
        fields = [self.kind.value, flag.value, self.description]
        if self.kind is TaskKind.DEADLINE:
            fields += [format_date_for_storage(self.due_date), format_time_for_storage(self.due_time)]
        elif self.kind is TaskKind.EVENT:
            fields += [
                format_date_for_storage(self.start_date),
                format_time_for_storage(self.start_time),
                format_date_for_storage(self.end_date),
                format_time_for_storage(self.end_time),
            ]
        return DATA_SEPARATOR.join(fields)

    def __str__(self) -> str:
        return self.to_display_string()
