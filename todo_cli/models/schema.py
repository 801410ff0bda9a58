"""
Centralized schemas for todo-cli.

Items, the on-disk snapshot, the instruction set and run results,
all as Pydantic models.
"""

from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# ITEMS & SNAPSHOT
# ============================================================================

class TodoItem(BaseModel):
    """Single todo item."""
    model_config = ConfigDict(strict=True)

    text: str = Field(..., description="The task description")
    done: bool = Field(False, description="Whether the task is complete")


class StoredItem(BaseModel):
    """Item as written to the backup file. Both fields are required."""
    model_config = ConfigDict(strict=True, extra="forbid")

    text: str = Field(..., description="The task description")
    done: bool = Field(..., description="Whether the task is complete")


class ToDoListSnapshot(BaseModel):
    """Serialized state of a todo list, as stored in the backup file."""
    model_config = ConfigDict(strict=True, extra="forbid")

    owner: str = Field(..., description="User the list belongs to")
    items: List[StoredItem] = Field(..., description="Items in insertion order")


# ============================================================================
# INSTRUCTIONS
# ============================================================================

class AddInstruction(BaseModel):
    """Append a new item."""
    kind: Literal["add"] = "add"
    text: str = Field(..., description="Text of the new item")


class CompleteInstruction(BaseModel):
    """Mark the item at index as done."""
    kind: Literal["complete"] = "complete"
    index: int = Field(..., description="0-based item index")

    @field_validator("index")
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("index must be non-negative")
        return v


class RemoveInstruction(BaseModel):
    """Delete the item at index."""
    kind: Literal["remove"] = "remove"
    index: int = Field(..., description="0-based item index")

    @field_validator("index")
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("index must be non-negative")
        return v


class ListInstruction(BaseModel):
    """Show every item."""
    kind: Literal["list"] = "list"


Instruction = Annotated[
    Union[AddInstruction, CompleteInstruction, RemoveInstruction, ListInstruction],
    Field(discriminator="kind"),
]


# ============================================================================
# RESULTS
# ============================================================================

class RunOutput(BaseModel):
    """
    Result of running one instruction against a list.

    `changed` tells the host whether a new snapshot has to be written.
    """
    instruction: Literal["add", "complete", "remove", "list"] = Field(
        ..., description="Instruction kind that produced this result"
    )
    success: bool = Field(..., description="Whether the instruction was applied")
    changed: bool = Field(False, description="Whether the list was modified")
    message: Optional[str] = Field(
        None, description="Human-readable message about the result"
    )
    items: List[TodoItem] = Field(
        default_factory=list, description="Items after the instruction"
    )
