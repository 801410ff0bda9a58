"""
ToDoList engine.

Owns the ordered item collection and the owner identity, and executes
one instruction per process run against it.
"""

from typing import Iterable, Iterator, List, Optional

from . import output
from .errors import IndexOutOfRange
from .models.schema import (
    AddInstruction,
    CompleteInstruction,
    Instruction,
    ListInstruction,
    RemoveInstruction,
    RunOutput,
    StoredItem,
    TodoItem,
    ToDoListSnapshot,
)


class ToDoList:
    """Ordered todo items belonging to a single owner.

    Items are addressed by their 0-based position; removing an item shifts
    every later item down by one.
    """

    def __init__(self, owner: str, items: Optional[Iterable[TodoItem]] = None):
        self._owner = owner
        self.items: List[TodoItem] = list(items) if items is not None else []

    @property
    def owner(self) -> str:
        return self._owner

    @classmethod
    def from_snapshot(cls, snapshot: ToDoListSnapshot) -> "ToDoList":
        return cls(snapshot.owner, [TodoItem(text=item.text, done=item.done) for item in snapshot.items])

    def snapshot(self) -> ToDoListSnapshot:
        return ToDoListSnapshot(
            owner=self._owner,
            items=[StoredItem(text=item.text, done=item.done) for item in self.items],
        )

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[TodoItem]:
        return iter(self.items)

    def __eq__(self, other):
        if not isinstance(other, ToDoList):
            return NotImplemented
        return self._owner == other._owner and self.items == other.items

    def __repr__(self):
        return f"ToDoList(owner={self._owner!r}, items={self.items!r})"

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            raise IndexOutOfRange(index, len(self.items))

    def _copy_items(self) -> List[TodoItem]:
        return [item.model_copy() for item in self.items]

    def add(self, text: str) -> TodoItem:
        """Append a new, not yet done item."""
        item = TodoItem(text=text, done=False)
        self.items.append(item)
        return item

    def complete(self, index: int) -> TodoItem:
        """Mark items[index] done. Completing a done item is a no-op."""
        self._check_index(index)
        item = self.items[index]
        item.done = True
        return item

    def remove(self, index: int) -> TodoItem:
        """Delete items[index] and return it."""
        self._check_index(index)
        return self.items.pop(index)

    def render(self) -> List[str]:
        """Display lines: index, completion marker and text."""
        width = len(str(max(len(self.items) - 1, 0)))
        return [
            f"{i:>{width}} [{'x' if item.done else ' '}] {item.text}"
            for i, item in enumerate(self.items)
        ]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def run(self, instruction: Instruction) -> RunOutput:
        """Execute one instruction, print its outcome and report the result.

        An out-of-range index is reported to the user and leaves the items
        untouched.
        """
        kind = instruction.kind
        try:
            if isinstance(instruction, AddInstruction):
                self.add(instruction.text)
                message = f"Added #{len(self.items) - 1}: {instruction.text}"
                changed = True
            elif isinstance(instruction, CompleteInstruction):
                self._check_index(instruction.index)
                changed = not self.items[instruction.index].done
                item = self.complete(instruction.index)
                message = f"Completed #{instruction.index}: {item.text}"
            elif isinstance(instruction, RemoveInstruction):
                item = self.remove(instruction.index)
                message = f"Removed #{instruction.index}: {item.text}"
                changed = True
            elif isinstance(instruction, ListInstruction):
                output.print_items(self._owner, self.render(), [item.done for item in self.items])
                return RunOutput(
                    instruction=kind,
                    success=True,
                    changed=False,
                    message=f"{len(self.items)} items",
                    items=self._copy_items(),
                )
            else:
                raise TypeError(f"Unknown instruction: {instruction!r}")
        except IndexOutOfRange as e:
            output.print_error(str(e))
            return RunOutput(
                instruction=kind,
                success=False,
                changed=False,
                message=str(e),
                items=self._copy_items(),
            )

        output.print_success(message)
        return RunOutput(
            instruction=kind,
            success=True,
            changed=changed,
            message=message,
            items=self._copy_items(),
        )
