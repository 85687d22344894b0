from __future__ import annotations

from collections.abc import Sequence

from taskmate.domain.entities import TaskEntity

INDENT = "    "
DIVIDER = INDENT + "_" * 55
APP_NAME = "Taskmate"


def _plural(count: int) -> str:
    return "task" if count == 1 else "tasks"


class ResponseFormatter:
    """Builds the text blocks shown to the user. No IO happens here."""

    def _block(self, *lines: str) -> str:
        body = "".join(f"{INDENT}{line}\n" for line in lines)
        return f"{DIVIDER}\n{body}{DIVIDER}\n"

    def _numbered(self, tasks: Sequence[TaskEntity]) -> list[str]:
        return [f"{number}. {task}" for number, task in enumerate(tasks, start=1)]

    def welcome(self, warning: str | None = None) -> str:
        lines = [f"Hello! I'm {APP_NAME}", "What can I do for you?"]
        if warning:
            lines += ["", warning, "Starting with an empty task list."]
        return self._block(*lines)

    def goodbye(self) -> str:
        return self._block("Bye. Hope to see you again soon!")

    def error(self, message: str) -> str:
        return self._block(message)

    def task_list(self, tasks: Sequence[TaskEntity]) -> str:
        if not tasks:
            return self._block("Your task list is empty.")
        return self._block("Here are the tasks in your list:", *self._numbered(tasks))

    def added(self, task: TaskEntity, count: int) -> str:
        return self._block(
            "Got it. I've added this task:",
            f"  {task}",
            f"Now you have {count} {_plural(count)} in the list.",
        )

    def marked(self, task: TaskEntity, done: bool) -> str:
        header = (
            "Nice! I've marked this task as done:"
            if done
            else "OK, I've marked this task as not done yet:"
        )
        return self._block(header, f"  {task}")

    def deleted(self, task: TaskEntity, count: int) -> str:
        return self._block(
            "Noted. I've removed this task:",
            f"  {task}",
            f"Now you have {count} {_plural(count)} in the list.",
        )

    def find_results(self, matches: Sequence[TaskEntity]) -> str:
        if not matches:
            return self._block("No matching tasks found.")
        return self._block("Here are the matching tasks in your list:", *self._numbered(matches))

    def duplicate(self, existing: TaskEntity, number: int) -> str:
        return self._block(
            "This task is already in your list:",
            f"  {number}. {existing}",
            "Nothing was added.",
        )
