from __future__ import annotations

from collections.abc import Iterable, Iterator

from taskmate.domain.entities import TaskEntity


class TaskList:
    """Ordered tasks; list order is display order and file order.

    Indices are 0-based and are expected to be validated by the parser
    already, so an out-of-range index raises ``IndexError``.
    """

    def __init__(self, tasks: Iterable[TaskEntity] | None = None, match_time: bool = True) -> None:
        self._tasks: list[TaskEntity] = list(tasks or [])
        self.match_time = match_time

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[TaskEntity]:
        return iter(self._tasks)

    def as_list(self) -> list[TaskEntity]:
        return list(self._tasks)

    def add(self, task: TaskEntity) -> None:
        self._tasks.append(task)

    def get(self, index: int) -> TaskEntity:
        self._check_index(index, "get")
        return self._tasks[index]

    def remove(self, index: int) -> TaskEntity:
        self._check_index(index, "remove")
        return self._tasks.pop(index)

    def mark_done(self, index: int) -> TaskEntity:
        task = self.get(index)
        task.mark_done()
        return task

    def mark_undone(self, index: int) -> TaskEntity:
        task = self.get(index)
        task.mark_undone()
        return task

    def index_of_duplicate(self, candidate: TaskEntity) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.is_same_task(candidate, self.match_time):
                return index
        return None

    def find(self, keyword: str) -> list[TaskEntity]:
        return [task for task in self._tasks if task.matches(keyword)]

    def _check_index(self, index: int, caller: str) -> None:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"{caller}(): index {index} out of range (size={len(self._tasks)})")
