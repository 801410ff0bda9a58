import pytest


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run in an empty directory with TODO_* settings pinned to tmp_path."""
    monkeypatch.chdir(tmp_path)
    backup = tmp_path / "todo_backup.json"
    monkeypatch.setenv("TODO_BACKUP_PATH", str(backup))
    monkeypatch.setenv("TODO_OWNER", "alice")
    monkeypatch.delenv("TODO_DEBUG", raising=False)
    return backup
