"""
Persistence codec for todo-cli.

Converts a ToDoList to and from its JSON snapshot and reads/writes the
backup file. Writes go through a temporary sibling file that replaces
the target in one step, so the previous snapshot survives a failed save.
"""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .engine import ToDoList
from .errors import BackupIOError, DecodeError
from .models.schema import ToDoListSnapshot


def encode(todo_list: ToDoList) -> bytes:
    """Serialize owner and items to UTF-8 JSON, items in list order."""
    return todo_list.snapshot().model_dump_json(indent=2).encode("utf-8") + b"\n"


def decode(data: Union[bytes, str]) -> ToDoList:
    """Rebuild a ToDoList from a snapshot.

    Raises DecodeError on invalid JSON or when the document does not match
    the snapshot schema (missing owner, non-boolean done, and so on).
    """
    try:
        snapshot = ToDoListSnapshot.model_validate_json(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise DecodeError(f"Invalid todo snapshot: {details}") from e
    return ToDoList.from_snapshot(snapshot)


def load_backup(path: Union[str, Path]) -> Optional[ToDoList]:
    """Load the list stored at path, or None when there is no backup yet."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise BackupIOError(f"Could not read {p}: {e}") from e
    try:
        return decode(data)
    except DecodeError as e:
        raise DecodeError(f"{p}: {e}") from e


def save_backup(todo_list: ToDoList, path: Union[str, Path]) -> int:
    """Write the list to path. Returns the number of bytes written."""
    p = Path(path)
    payload = encode(todo_list)
    tmp_name = None
    try:
        if p.parent and not p.parent.exists():
            p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=str(p.parent))
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, p)
        tmp_name = None
    except OSError as e:
        raise BackupIOError(f"Could not write {p}: {e}") from e
    finally:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    return len(payload)


def quarantine_backup(path: Union[str, Path]) -> Optional[Path]:
    """Move an unreadable backup aside so a fresh list can be started.

    Returns the new location, or None if there was nothing to move.
    """
    p = Path(path)
    if not p.exists():
        return None
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    target = p.with_name(f"{p.name}.corrupt-{stamp}")
    try:
        os.replace(p, target)
    except OSError as e:
        raise BackupIOError(f"Could not move {p} aside: {e}") from e
    return target
