# File Summary: Console rendering helpers for item panels and status lines.

"""
Output formatting utilities for todo-cli.

Status lines (success/info on stdout, warnings/errors on stderr) and a
single boxed panel style used for listings, help and version output.
"""

import os
import re
import shutil
import sys
import textwrap
from typing import List

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")

PANEL_MIN_WIDTH = 40
PANEL_MAX_WIDTH = 100


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _sgr(code: str) -> str:
    return f"\033[{code}m" if _color_enabled() else ""


class Color:
    """ANSI sequences, empty when stdout is not a colour terminal."""

    RESET = _sgr("0")
    BOLD = _sgr("1")
    BORDER = _sgr("38;5;244")
    TITLE = _sgr("38;5;81")
    SUCCESS = _sgr("38;5;82")
    ERROR = _sgr("38;5;203")
    CODE = _sgr("38;5;215")
    WARNING = _sgr("38;5;208")
    MUTED = _sgr("38;5;245")
    ACCENT = _sgr("38;5;141")


def _plain_width(text: str) -> int:
    return len(ANSI_ESCAPE_RE.sub("", text))


def _panel_width() -> int:
    forced = os.environ.get("TODO_BOX_WIDTH", "")
    if forced.isdigit():
        return max(PANEL_MIN_WIDTH, min(int(forced), PANEL_MAX_WIDTH))
    columns = shutil.get_terminal_size(fallback=(96, 24)).columns
    return max(PANEL_MIN_WIDTH, min(columns - 4, PANEL_MAX_WIDTH))


def _panel_body(content: str, inner: int) -> List[str]:
    # Coloured lines are kept whole; wrapping would split escape sequences.
    body: List[str] = []
    for line in content.splitlines() or [""]:
        if ANSI_ESCAPE_RE.search(line) or len(line) <= inner:
            body.append(line)
        else:
            body.extend(textwrap.wrap(line, width=inner) or [""])
    return body


def print_boxed(title: str, content: str):
    """Display content in a rounded box with an upper-cased title bar."""
    width = _panel_width()
    inner = width - 4
    rule = "─" * (width - 2)
    edge = f"{Color.BORDER}│{Color.RESET}"

    rows = [f"{Color.BORDER}╭{rule}╮{Color.RESET}"]
    if title:
        rows.append(f"{edge} {Color.TITLE}{Color.BOLD}{title.upper().center(inner)}{Color.RESET} {edge}")
        rows.append(f"{Color.BORDER}├{rule}┤{Color.RESET}")
    for line in _panel_body(content, inner):
        pad = " " * max(0, inner - _plain_width(line))
        rows.append(f"{edge} {line}{Color.RESET}{pad} {edge}")
    rows.append(f"{Color.BORDER}╰{rule}╯{Color.RESET}")

    print()
    print("\n".join(rows))


def print_error(message: str):
    """Display error message on stderr - COMPACT."""
    print(f"\n{Color.ERROR}✗ Error: {message}{Color.RESET}", file=sys.stderr)


def print_info(message: str):
    """Display informational text - COMPACT."""
    print(f"\n{Color.TITLE}[{message}]{Color.RESET}")


def print_success(message: str):
    """Display success feedback - COMPACT."""
    print(f"\n{Color.SUCCESS}✓ {message}{Color.RESET}")


def print_warning(message: str):
    """Display warnings on stderr - COMPACT."""
    print(f"\n{Color.WARNING}⚠ {message}{Color.RESET}", file=sys.stderr)


def print_items(owner: str, lines: List[str], done: List[bool]):
    """Display rendered item lines in a panel titled with the owner.

    Completed items are dimmed.
    """
    title = f"{owner}'s todos"
    if not lines:
        print_boxed(title, "No items. Add one with: todo add <text>")
        return
    colored = [
        f"{Color.MUTED}{line}{Color.RESET}" if is_done else line
        for line, is_done in zip(lines, done)
    ]
    print_boxed(title, "\n".join(colored))


def print_help(backup_path=None):
    """Display help information."""
    help_text = f"""todo - personal task list

{Color.ACCENT}Commands:{Color.RESET}
  • {Color.CODE}todo add <text...>{Color.RESET}      Append a new item
  • {Color.CODE}todo done <index>{Color.RESET}       Mark an item complete (alias: complete)
  • {Color.CODE}todo remove <index>{Color.RESET}     Delete an item (alias: rm)
  • {Color.CODE}todo list{Color.RESET}               Show all items (default)

Indices start at 0 and shift down when an earlier item is removed.

{Color.ACCENT}Options:{Color.RESET}
  --help, -h          Show this help
  --version, -v       Show the installed version
  --reset-backup      Move an unreadable backup aside and start a fresh list

{Color.ACCENT}Environment:{Color.RESET}
  TODO_BACKUP_PATH    Backup file location (default: ./todo_backup.json)
  TODO_OWNER          Owner name for new lists (default: current user)
  TODO_DEBUG=1        Print tracebacks for unexpected errors
  NO_COLOR            Disable colored output"""

    if backup_path:
        help_text += f"\n\n{Color.MUTED}Backup file:{Color.RESET} {backup_path}"

    print_boxed("todo - Help", help_text)
