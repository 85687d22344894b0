from __future__ import annotations


class TaskmateError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserInputError(TaskmateError):
    """Bad input from the user; rendered as an error reply, never fatal."""


class EmptyInputError(UserInputError):
    pass


class UnknownCommandError(UserInputError):
    pass


class TaskParseError(UserInputError):
    pass


class TaskIndexError(UserInputError):
    pass


class UsageError(UserInputError):
    pass


class StorageError(TaskmateError):
    pass


class LoadError(StorageError):
    pass


class SaveError(StorageError):
    pass


class CorruptedDataError(StorageError):
    def __init__(self, line: str, reason: str | None = None) -> None:
        detail = f"Saved data is corrupted: {line}"
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(detail)
        self.line = line
        self.reason = reason
