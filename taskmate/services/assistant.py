from __future__ import annotations

import logging
from collections.abc import Callable

from taskmate.domain.entities import TaskEntity
from taskmate.domain.errors import (
    CorruptedDataError,
    LoadError,
    SaveError,
    UnknownCommandError,
    UserInputError,
)
from taskmate.infra.storage import TaskStorage
from taskmate.services.parser import TASK_COMMANDS, CommandParser, ParsedCommand
from taskmate.services.task_list import TaskList
from taskmate.ui.formatter import ResponseFormatter

logger = logging.getLogger(__name__)

KNOWN_COMMANDS = ("todo", "deadline", "event", "list", "find", "mark", "unmark", "delete", "bye")


class Assistant:
    """Request/response core used by the console loop (or any other front-end).

    Every call to ``get_response`` fully handles one line: parse, apply,
    save when the list changed, and render.
    """

    def __init__(
        self,
        storage: TaskStorage,
        parser: CommandParser | None = None,
        formatter: ResponseFormatter | None = None,
        match_time: bool = True,
    ) -> None:
        self._storage = storage
        self._parser = parser or CommandParser()
        self._formatter = formatter or ResponseFormatter()
        self._is_exit = False
        self.startup_error: str | None = None
        self.tasks = TaskList(self._load_tasks(), match_time=match_time)

        self._handlers: dict[str, Callable[[ParsedCommand], str]] = {
            "list": self._handle_list,
            "find": self._handle_find,
            "mark": self._handle_mark,
            "unmark": self._handle_unmark,
            "delete": self._handle_delete,
        }
        for command in TASK_COMMANDS:
            self._handlers[command] = self._handle_add

    @property
    def is_exit(self) -> bool:
        return self._is_exit

    def get_welcome_message(self) -> str:
        return self._formatter.welcome(self.startup_error)

    def get_response(self, line: str | None) -> str:
        try:
            command = self._parser.parse(line)
            if command.command_word == "bye":
                self._is_exit = True
                return self._formatter.goodbye()

            handler = self._handlers.get(command.command_word)
            if handler is None:
                raise UnknownCommandError(
                    f"I don't know what that means. Try: {', '.join(KNOWN_COMMANDS)}"
                )
            return handler(command)
        except UserInputError as exc:
            logger.debug("Rejected input %r: %s", line, exc.message)
            return self._formatter.error(exc.message)

    def _load_tasks(self) -> list[TaskEntity]:
        try:
            return self._storage.load()
        except (LoadError, CorruptedDataError) as exc:
            logger.warning("Could not load tasks from %s: %s", self._storage.path, exc.message)
            self.startup_error = exc.message
            return []

    def _save(self, response: str) -> str:
        try:
            self._storage.save(self.tasks.as_list())
        except SaveError as exc:
            logger.error("Could not save tasks to %s: %s", self._storage.path, exc.message)
            return response + self._formatter.error(
                f"{exc.message} Your changes are kept for this session only."
            )
        return response

    def _handle_list(self, command: ParsedCommand) -> str:
        return self._formatter.task_list(self.tasks.as_list())

    def _handle_find(self, command: ParsedCommand) -> str:
        keyword = self._parser.parse_find_keyword(command.arguments)
        return self._formatter.find_results(self.tasks.find(keyword))

    def _handle_add(self, command: ParsedCommand) -> str:
        task = self._parser.parse_task(command.command_word, command.arguments)
        duplicate_index = self.tasks.index_of_duplicate(task)
        if duplicate_index is not None:
            existing = self.tasks.get(duplicate_index)
            logger.info("Skipped duplicate of task %d: %s", duplicate_index + 1, existing)
            return self._formatter.duplicate(existing, duplicate_index + 1)

        self.tasks.add(task)
        logger.debug("Added task: %s", task.to_data_string())
        return self._save(self._formatter.added(task, len(self.tasks)))

    def _handle_mark(self, command: ParsedCommand) -> str:
        index = self._parser.parse_task_index(command.arguments, "mark", len(self.tasks))
        task = self.tasks.mark_done(index)
        logger.debug("Marked task %d as done", index + 1)
        return self._save(self._formatter.marked(task, done=True))

    def _handle_unmark(self, command: ParsedCommand) -> str:
        index = self._parser.parse_task_index(command.arguments, "unmark", len(self.tasks))
        task = self.tasks.mark_undone(index)
        logger.debug("Marked task %d as not done", index + 1)
        return self._save(self._formatter.marked(task, done=False))

    def _handle_delete(self, command: ParsedCommand) -> str:
        index = self._parser.parse_task_index(command.arguments, "delete", len(self.tasks))
        task = self.tasks.remove(index)
        logger.debug("Deleted task %d: %s", index + 1, task.to_data_string())
        return self._save(self._formatter.deleted(task, len(self.tasks)))
