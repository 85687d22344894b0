from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, time

from taskmate.domain.datetimes import parse_clock_time, parse_iso_date
from taskmate.domain.entities import TaskEntity
from taskmate.domain.errors import (
    EmptyInputError,
    TaskIndexError,
    TaskParseError,
    UnknownCommandError,
    UsageError,
)

TASK_COMMANDS = ("todo", "deadline", "event")

DEADLINE_USAGE = "Usage: deadline <description> /by yyyy-MM-dd [HHmm|HH:mm] (e.g. 2019-10-15 1800)"
EVENT_USAGE = (
    "Usage: event <description> /from yyyy-MM-dd [HHmm|HH:mm] /to yyyy-MM-dd [HHmm|HH:mm]"
)
TODO_USAGE = "Usage: todo <description>"
FIND_USAGE = "Usage: find <keyword>"

_FOUR_DIGITS_RE = re.compile(r"[0-9]{4}")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ParsedCommand:
    command_word: str
    arguments: str


def _split_on_separator(text: str, separator: str) -> tuple[str, str] | None:
    """Split ``text`` at the first ``separator`` that stands as a separate word.

    Either side may be empty, so ``"x /by"`` reports an empty date and
    ``"/by 2019-10-15"`` an empty description rather than a missing ``/by``.
    """
    start = 0
    while True:
        pos = text.find(separator, start)
        if pos < 0:
            return None
        end = pos + len(separator)
        before_ok = pos == 0 or text[pos - 1].isspace()
        after_ok = end == len(text) or text[end].isspace()
        if before_ok and after_ok:
            return text[:pos].strip(), text[end:].strip()
        start = pos + 1


def _check_description(description: str, label: str, usage: str) -> str:
    if not description:
        raise TaskParseError(f"{label} description cannot be empty. {usage}")
    if "|" in description:
        raise TaskParseError(f"{label} description cannot contain '|'. {usage}")
    if len(description.splitlines()) != 1:
        raise TaskParseError(f"{label} description cannot contain line breaks. {usage}")
    return description


def parse_user_date(token: str, usage: str) -> date:
    try:
        return parse_iso_date(token)
    except ValueError:
        raise TaskParseError(f"Invalid date. {usage}") from None


def parse_user_time(token: str, usage: str) -> time:
    if _FOUR_DIGITS_RE.fullmatch(token):
        hour, minute = int(token[:2]), int(token[2:])
        if hour > 23 or minute > 59:
            raise TaskParseError(f"Invalid time. {usage}")
        return time(hour, minute)
    try:
        return parse_clock_time(token)
    except ValueError:
        raise TaskParseError(f"Invalid time. {usage}") from None


def parse_user_datetime(raw: str, usage: str) -> tuple[date, time | None]:
    tokens = raw.strip().replace("T", " ").split()
    if len(tokens) == 1:
        return parse_user_date(tokens[0], usage), None
    if len(tokens) == 2:
        return parse_user_date(tokens[0], usage), parse_user_time(tokens[1], usage)
    raise TaskParseError(f"Invalid date/time. {usage}")


class CommandParser:
    def parse(self, raw_line: str | None) -> ParsedCommand:
        text = (raw_line or "").strip()
        if not text:
            raise EmptyInputError("Please enter a command.")
        parts = text.split(maxsplit=1)
        arguments = parts[1].strip() if len(parts) == 2 else ""
        return ParsedCommand(parts[0], arguments)

    def parse_task(self, command_word: str, arguments: str) -> TaskEntity:
        if command_word == "todo":
            return self._parse_todo(arguments)
        if command_word == "deadline":
            return self._parse_deadline(arguments)
        if command_word == "event":
            return self._parse_event(arguments)
        raise UnknownCommandError("I don't know what that means.")

    def parse_task_index(self, arguments: str, keyword: str, task_count: int) -> int:
        if task_count == 0:
            raise TaskIndexError(f"There are no tasks to {keyword}. Add a task first.")
        arguments = arguments.strip()
        if not arguments:
            raise TaskIndexError(f"Usage: {keyword} <taskNumber>")
        if not _INTEGER_RE.fullmatch(arguments):
            raise TaskIndexError(f"Task number must be an integer. Usage: {keyword} <taskNumber>")
        number = int(arguments)
        if number < 1 or number > task_count:
            raise TaskIndexError(f"Task number must be between 1 and {task_count}.")
        return number - 1

    def parse_find_keyword(self, arguments: str) -> str:
        keyword = arguments.strip()
        if not keyword:
            raise UsageError(f"Please give a keyword to search for. {FIND_USAGE}")
        return keyword

    @staticmethod
    def _parse_todo(arguments: str) -> TaskEntity:
        description = arguments.strip()
        if not description:
            raise TaskParseError(f"A todo needs a description. {TODO_USAGE}")
        _check_description(description, "Todo", TODO_USAGE)
        return TaskEntity.todo(description)

    @staticmethod
    def _parse_deadline(arguments: str) -> TaskEntity:
        if not arguments.strip():
            raise TaskParseError(DEADLINE_USAGE)

        split = _split_on_separator(arguments, "/by")
        if split is None:
            raise TaskParseError(f"A deadline needs '/by'. {DEADLINE_USAGE}")
        description, by_raw = split

        _check_description(description, "Deadline", DEADLINE_USAGE)
        if not by_raw:
            raise TaskParseError(f"Deadline date/time cannot be empty. {DEADLINE_USAGE}")

        due_date, due_time = parse_user_datetime(by_raw, DEADLINE_USAGE)
        return TaskEntity.deadline(description, due_date, due_time)

    @staticmethod
    def _parse_event(arguments: str) -> TaskEntity:
        if not arguments.strip():
            raise TaskParseError(EVENT_USAGE)

        from_split = _split_on_separator(arguments, "/from")
        if from_split is None:
            raise TaskParseError(f"An event needs '/from'. {EVENT_USAGE}")
        description, rest = from_split

        # "/to" is only searched for after "/from".
        to_split = _split_on_separator(rest, "/to")
        if to_split is None:
            raise TaskParseError(f"An event needs '/to'. {EVENT_USAGE}")
        from_raw, to_raw = to_split

        _check_description(description, "Event", EVENT_USAGE)
        if not from_raw or not to_raw:
            raise TaskParseError(f"Event date/time cannot be empty. {EVENT_USAGE}")

        start_date, start_time = parse_user_datetime(from_raw, EVENT_USAGE)
        end_date, end_time = parse_user_datetime(to_raw, EVENT_USAGE)
        return TaskEntity.event(description, start_date, start_time, end_date, end_time)
