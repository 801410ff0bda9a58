"""Exceptions raised by todo-cli."""


class TodoError(Exception):
    """Base class for every todo-cli failure."""


class DecodeError(TodoError):
    """The backup file exists but does not hold a valid snapshot."""


class IndexOutOfRange(TodoError):
    """An instruction referenced an index outside the list."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        if length:
            bounds = f"valid indices are 0-{length - 1}"
        else:
            bounds = "the list is empty"
        super().__init__(f"No item at index {index} ({bounds})")


class ParseFailure(TodoError):
    """Command line tokens did not match any instruction."""


class BackupIOError(TodoError):
    """Reading or writing the backup file failed at the OS level."""
