# File Summary: Application bootstrap running the load, run and save cycle for one command.


"""
todo-cli - personal task list

Loads the backup file (or starts a fresh list), applies exactly one
instruction from the command line, and writes the list back when it changed.
"""

import sys
import traceback
from typing import List, Optional

from . import config, output
from .codec import load_backup, quarantine_backup, save_backup
from .engine import ToDoList
from .errors import BackupIOError, DecodeError, ParseFailure
from .parser import parse

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _get_installed_version() -> str:
    try:
        import importlib.metadata as _m
        return _m.version("todo-cli")
    except Exception:
        return "unknown"


def load_list(backup_path) -> ToDoList:
    """Restore the list from backup_path, or create a fresh one for the current user."""
    restored = load_backup(backup_path)
    if restored is not None:
        return restored
    return ToDoList(config.resolve_owner())


def _reset_backup(backup_path) -> int:
    """Move the backup aside only when it cannot be decoded."""
    try:
        restored = load_backup(backup_path)
    except DecodeError:
        moved = quarantine_backup(backup_path)
        output.print_warning(f"Moved unreadable backup to {moved}")
        save_backup(ToDoList(config.resolve_owner()), backup_path)
        output.print_success(f"Started a fresh list at {backup_path}")
        return EXIT_OK

    if restored is None:
        output.print_info(f"No backup at {backup_path}; nothing to reset.")
    else:
        output.print_info(f"Backup at {backup_path} is readable ({len(restored)} items); left untouched.")
    return EXIT_OK


def run(argv: List[str]) -> int:
    """Execute one command and return the process exit code."""
    config.load_environment()
    backup_path = config.resolve_backup_path()

    if argv:
        arg = argv[0].lower()
        if arg in ("--version", "-v", "version"):
            body = "\n".join([
                f"{output.Color.ACCENT}{output.Color.BOLD}todo-cli v{_get_installed_version()}{output.Color.RESET}",
                "Personal task list for the command line",
            ])
            output.print_boxed("Version", body)
            return EXIT_OK
        if arg in ("--help", "-h", "help"):
            output.print_help(backup_path)
            return EXIT_OK
        if arg in ("--reset-backup", "reset-backup"):
            return _reset_backup(backup_path)
        if arg.startswith("-"):
            output.print_error(f"Unknown option: {argv[0]}")
            output.print_info("Use 'todo --help' for usage information")
            return EXIT_USAGE

    try:
        instruction = parse(argv)
    except ParseFailure as e:
        output.print_error(str(e))
        output.print_info("Use 'todo --help' for usage information")
        return EXIT_USAGE

    try:
        todo_list = load_list(backup_path)
    except DecodeError as e:
        output.print_error(str(e))
        output.print_warning(
            "The backup file was left untouched. Fix it by hand, or run "
            "'todo --reset-backup' to move it aside and start a fresh list."
        )
        return EXIT_FAILURE

    result = todo_list.run(instruction)
    if not result.success:
        return EXIT_FAILURE

    if result.changed:
        save_backup(todo_list, backup_path)
    return EXIT_OK


def main(argv: Optional[List[str]] = None):
    """Main entry point with command line argument support."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        code = run(argv)
    except BackupIOError as e:
        output.print_error(str(e))
        code = EXIT_FAILURE
    except KeyboardInterrupt:
        output.print_warning("Aborted.")
        code = EXIT_FAILURE
    except Exception as e:
        if config.debug_enabled():
            output.print_error(f"{e}\n{traceback.format_exc()}")
        else:
            output.print_error(f"{e} (set TODO_DEBUG=1 for details)")
        code = EXIT_FAILURE
    sys.exit(code)


if __name__ == "__main__":
    main()
