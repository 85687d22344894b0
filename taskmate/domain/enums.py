from __future__ import annotations

from enum import StrEnum


class TaskKind(StrEnum):
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


class DoneFlag(StrEnum):
    NOT_DONE = "0"
    DONE = "1"
