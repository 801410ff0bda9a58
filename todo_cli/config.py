# File Summary: Environment loading and resolution of the backup path and owner name.

"""
Configuration for todo-cli.

Settings come from the process environment, then from .env files.
"""

import getpass
import os
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

DEFAULT_BACKUP_FILE = "todo_backup.json"
USER_CONFIG_DIR = Path.home() / ".config" / "todo-cli"
SETTINGS = ("TODO_BACKUP_PATH", "TODO_OWNER")


def load_environment(cwd: Path = None, config_dir: Path = None) -> None:
    """Load TODO_* settings from .env files without overriding the environment.

    Load order (first non-empty wins):
      1) Existing process environment
      2) Project .env (cwd/.env)
      3) User config .env (~/.config/todo-cli/.env), TODO_* keys only
    """
    cwd = cwd or Path.cwd()
    config_dir = config_dir or USER_CONFIG_DIR

    load_dotenv(cwd / ".env", override=False)

    user_env = dotenv_values(config_dir / ".env")
    for key in SETTINGS:
        if not os.environ.get(key) and user_env.get(key):
            os.environ[key] = user_env[key]


def resolve_backup_path() -> Path:
    env_override = os.environ.get("TODO_BACKUP_PATH")
    if env_override:
        return Path(env_override).expanduser()
    return Path.cwd() / DEFAULT_BACKUP_FILE


def resolve_owner() -> str:
    """Owner name for a freshly created list."""
    env_owner = os.environ.get("TODO_OWNER")
    if env_owner:
        return env_owner
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def debug_enabled() -> bool:
    return os.environ.get("TODO_DEBUG") == "1"
