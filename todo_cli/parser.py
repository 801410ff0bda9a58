"""
Command line parsing for todo-cli.

Maps argv tokens onto one of the four instructions.
"""

from typing import List, Sequence

from pydantic import ValidationError

from .errors import ParseFailure
from .models.schema import (
    AddInstruction,
    CompleteInstruction,
    ListInstruction,
    RemoveInstruction,
)

# Accepted command words for each instruction kind
COMMAND_ALIASES = {
    "add": "add",
    "done": "complete",
    "complete": "complete",
    "remove": "remove",
    "rm": "remove",
    "list": "list",
    "ls": "list",
}


def _parse_index(command: str, args: List[str]):
    if len(args) != 1:
        raise ParseFailure(f"'{command}' takes exactly one index, got {len(args)} arguments")
    raw = args[0]
    if not (raw.isascii() and raw.isdigit()):
        raise ParseFailure(f"'{command}' expects a non-negative integer index, got '{raw}'")
    return int(raw)


def parse(argv: Sequence[str]):
    """Turn command tokens (without the program name) into an instruction.

    An empty argv means `list`. Raises ParseFailure for anything that does
    not match a known command shape.
    """
    tokens = list(argv)
    if not tokens:
        return ListInstruction()

    command = tokens[0].lower()
    args = tokens[1:]
    kind = COMMAND_ALIASES.get(command)
    if kind is None:
        raise ParseFailure(f"Unknown command: '{tokens[0]}'")

    try:
        if kind == "add":
            if not args:
                raise ParseFailure("'add' needs the item text")
            return AddInstruction(text=" ".join(args))
        if kind == "complete":
            return CompleteInstruction(index=_parse_index(command, args))
        if kind == "remove":
            return RemoveInstruction(index=_parse_index(command, args))
        if args:
            raise ParseFailure(f"'{command}' takes no arguments")
        return ListInstruction()
    except ValidationError as e:
        raise ParseFailure(f"Invalid arguments for '{command}': {e}") from e
