from __future__ import annotations

from pathlib import Path

import pytest

from taskmate.domain.entities import TaskEntity
from taskmate.domain.errors import CorruptedDataError, LoadError, SaveError
from taskmate.infra.storage import TaskStorage
from taskmate.services.assistant import Assistant


class FakeStorage:
    def __init__(self, tasks: list[TaskEntity] | None = None) -> None:
        self.path = Path("fake.txt")
        self.tasks = list(tasks or [])
        self.saves: list[list[str]] = []
        self.load_error: Exception | None = None
        self.save_error: Exception | None = None

    def load(self) -> list[TaskEntity]:
        if self.load_error:
            raise self.load_error
        return list(self.tasks)

    def save(self, tasks: list[TaskEntity]) -> None:
        if self.save_error:
            raise self.save_error
        self.saves.append([t.to_data_string() for t in tasks])


def _task_lines(response: str) -> list[str]:
    return [line.strip() for line in response.splitlines() if line.strip()[:1].isdigit()]


def test_scenario_add_mark_delete_list(tmp_path: Path) -> None:
    storage = TaskStorage(tmp_path / "data" / "tasks.txt")
    assistant = Assistant(storage)

    assert "[T][ ] read book" in assistant.get_response("todo read book")
    added = assistant.get_response("deadline return book /by 2019-10-15 1800")
    assert "[D][ ] return book (by: Oct 15 2019 18:00)" in added
    assert "Now you have 2 tasks" in added

    assert "[D][X] return book" in assistant.get_response("mark 2")
    assert "[T][ ] read book" in assistant.get_response("delete 1")

    listing = assistant.get_response("list")
    assert _task_lines(listing) == ["1. [D][X] return book (by: Oct 15 2019 18:00)"]

    reloaded = Assistant(TaskStorage(tmp_path / "data" / "tasks.txt"))
    assert [t.to_data_string() for t in reloaded.tasks] == [
        "D | 1 | return book | 2019-10-15 | 18:00"
    ]


def test_every_mutation_saves_the_whole_list() -> None:
    storage = FakeStorage()
    assistant = Assistant(storage)

    assistant.get_response("todo read book")
    assistant.get_response("todo write essay")
    assistant.get_response("mark 1")
    assistant.get_response("unmark 1")
    assistant.get_response("delete 2")
    assistant.get_response("list")
    assistant.get_response("find book")

    assert storage.saves == [
        ["T | 0 | read book"],
        ["T | 0 | read book", "T | 0 | write essay"],
        ["T | 1 | read book", "T | 0 | write essay"],
        ["T | 0 | read book", "T | 0 | write essay"],
        ["T | 0 | read book"],
    ]


def test_duplicate_is_reported_not_added() -> None:
    storage = FakeStorage([TaskEntity.todo("read   book")])
    assistant = Assistant(storage)

    response = assistant.get_response("todo Read Book")

    assert "already in your list" in response
    assert len(assistant.tasks) == 1
    assert storage.saves == []

    assistant.get_response("deadline Read Book /by 2019-10-15")
    assert len(assistant.tasks) == 2


def test_find_returns_only_matches() -> None:
    storage = FakeStorage([TaskEntity.todo("read book"), TaskEntity.todo("return magazine")])
    assistant = Assistant(storage)

    assert _task_lines(assistant.get_response("find book")) == ["1. [T][ ] read book"]


def test_user_errors_become_error_replies() -> None:
    assistant = Assistant(FakeStorage())

    assert "Please enter a command" in assistant.get_response("   ")
    assert "There are no tasks to mark" in assistant.get_response("mark 1")
    assert "needs a description" in assistant.get_response("todo")
    assert "Usage: find" in assistant.get_response("find")
    unknown = assistant.get_response("blah")
    assert "I don't know what that means" in unknown
    assert "deadline" in unknown
    assert assistant.is_exit is False


def test_command_word_is_case_sensitive() -> None:
    assistant = Assistant(FakeStorage())

    assert "I don't know what that means" in assistant.get_response("TODO read book")


def test_bye_sets_exit_flag() -> None:
    assistant = Assistant(FakeStorage())

    response = assistant.get_response("bye")

    assert "Bye" in response
    assert assistant.is_exit is True


def test_load_failure_falls_back_to_empty_list() -> None:
    storage = FakeStorage([TaskEntity.todo("lost")])
    storage.load_error = CorruptedDataError("D | 0 | return book | 2019-99-99 | -")

    assistant = Assistant(storage)

    assert len(assistant.tasks) == 0
    assert "Saved data is corrupted" in assistant.get_welcome_message()

    storage.load_error = LoadError("Failed to load tasks: denied")
    assert "Failed to load tasks" in Assistant(storage).get_welcome_message()


def test_save_failure_keeps_in_memory_change() -> None:
    storage = FakeStorage()
    storage.save_error = SaveError("Failed to save tasks: disk full")
    assistant = Assistant(storage)

    response = assistant.get_response("todo read book")

    assert "I've added this task" in response
    assert "Failed to save tasks: disk full" in response
    assert len(assistant.tasks) == 1
    assert _task_lines(assistant.get_response("list")) == ["1. [T][ ] read book"]


@pytest.mark.parametrize("breaker", ["\x85", "\u2028", "\x0c", "\r"])
def test_line_break_in_description_does_not_corrupt_saved_list(
    tmp_path: Path, breaker: str
) -> None:
    path = tmp_path / "tasks.txt"
    assistant = Assistant(TaskStorage(path))

    assistant.get_response("todo keep me")
    response = assistant.get_response(f"todo a{breaker}b")

    assert "cannot contain line breaks" in response
    reloaded = Assistant(TaskStorage(path))
    assert reloaded.startup_error is None
    assert [t.to_data_string() for t in reloaded.tasks] == ["T | 0 | keep me"]
