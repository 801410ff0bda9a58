"""
End-to-end tests for the load -> run -> save cycle and the configuration layer.
"""
import json
import os

import pytest

from todo_cli import config
from todo_cli.codec import encode
from todo_cli.engine import ToDoList
from todo_cli.main import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, load_list, main, run


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


# ─────────────────────────────────────────────
#  Command cycle
# ─────────────────────────────────────────────

class TestRun:
    def test_missing_backup_starts_fresh(self, isolated_env):
        todo = load_list(isolated_env)
        assert todo == ToDoList("alice")

    def test_scenario_persists_between_invocations(self, isolated_env):
        assert run(["add", "buy", "milk"]) == EXIT_OK
        assert run(["add", "walk", "dog"]) == EXIT_OK
        assert run(["done", "0"]) == EXIT_OK
        assert _read(isolated_env) == {
            "owner": "alice",
            "items": [
                {"text": "buy milk", "done": True},
                {"text": "walk dog", "done": False},
            ],
        }
        assert run(["remove", "0"]) == EXIT_OK
        assert _read(isolated_env) == {
            "owner": "alice",
            "items": [{"text": "walk dog", "done": False}],
        }

    def test_restored_owner_wins_over_environment(self, isolated_env, monkeypatch):
        isolated_env.write_bytes(encode(ToDoList("carol")))
        monkeypatch.setenv("TODO_OWNER", "dave")
        assert run(["add", "x"]) == EXIT_OK
        assert _read(isolated_env)["owner"] == "carol"

    def test_list_does_not_create_backup(self, isolated_env, capsys):
        assert run(["list"]) == EXIT_OK
        assert not isolated_env.exists()
        assert "No items" in capsys.readouterr().out

    def test_complete_out_of_range_does_not_rewrite(self, isolated_env, capsys):
        run(["add", "a"])
        before = isolated_env.read_bytes()
        assert run(["done", "1"]) == EXIT_FAILURE
        assert isolated_env.read_bytes() == before
        assert "No item at index 1" in capsys.readouterr().err

    def test_out_of_range_does_not_rewrite(self, isolated_env, capsys):
        run(["add", "a"])
        before = isolated_env.read_bytes()
        mtime = isolated_env.stat().st_mtime_ns
        assert run(["remove", "5"]) == EXIT_FAILURE
        assert isolated_env.read_bytes() == before
        assert isolated_env.stat().st_mtime_ns == mtime
        assert "No item at index 5" in capsys.readouterr().err

    def test_parse_failure_exits_with_usage(self, isolated_env, capsys):
        assert run(["frobnicate"]) == EXIT_USAGE
        assert not isolated_env.exists()
        captured = capsys.readouterr()
        assert "Unknown command" in captured.err
        assert "--help" in captured.out

    def test_unknown_option(self, isolated_env):
        assert run(["--frobnicate"]) == EXIT_USAGE

    def test_malformed_backup_is_left_alone(self, isolated_env, capsys):
        isolated_env.write_bytes(b"{broken")
        assert run(["add", "x"]) == EXIT_FAILURE
        assert isolated_env.read_bytes() == b"{broken"
        assert "--reset-backup" in capsys.readouterr().err

    def test_reset_backup_moves_file_and_starts_fresh(self, isolated_env):
        isolated_env.write_bytes(b"{broken")
        assert run(["--reset-backup"]) == EXIT_OK
        assert _read(isolated_env) == {"owner": "alice", "items": []}
        moved = [p for p in isolated_env.parent.iterdir() if ".corrupt-" in p.name]
        assert len(moved) == 1
        assert moved[0].read_bytes() == b"{broken"

    def test_reset_backup_keeps_readable_list(self, isolated_env, capsys):
        run(["add", "keep me"])
        before = isolated_env.read_bytes()
        assert run(["--reset-backup"]) == EXIT_OK
        assert isolated_env.read_bytes() == before
        assert [p.name for p in isolated_env.parent.iterdir()] == [isolated_env.name]
        assert "readable" in capsys.readouterr().out

    def test_reset_backup_without_file(self, isolated_env):
        assert run(["--reset-backup"]) == EXIT_OK
        assert not isolated_env.exists()

    def test_help_and_version(self, isolated_env, capsys):
        assert run(["--help"]) == EXIT_OK
        assert "todo add <text...>" in capsys.readouterr().out
        assert run(["--version"]) == EXIT_OK
        assert "todo-cli v" in capsys.readouterr().out


class TestMain:
    def test_exits_with_run_code(self, isolated_env):
        with pytest.raises(SystemExit) as exc:
            main(["add", "x"])
        assert exc.value.code == EXIT_OK

    def test_backup_io_error_is_reported(self, isolated_env, monkeypatch, capsys):
        monkeypatch.setenv("TODO_BACKUP_PATH", str(isolated_env.parent))
        with pytest.raises(SystemExit) as exc:
            main(["list"])
        assert exc.value.code == EXIT_FAILURE
        assert "Could not read" in capsys.readouterr().err


# ─────────────────────────────────────────────
#  Configuration
# ─────────────────────────────────────────────

class TestConfig:
    def test_default_backup_path_is_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("TODO_BACKUP_PATH", raising=False)
        assert config.resolve_backup_path() == tmp_path / config.DEFAULT_BACKUP_FILE

    def test_owner_falls_back_to_login_name(self, monkeypatch):
        monkeypatch.delenv("TODO_OWNER", raising=False)
        monkeypatch.setattr(config.getpass, "getuser", lambda: "erin")
        assert config.resolve_owner() == "erin"

    def test_owner_unknown_when_lookup_fails(self, monkeypatch):
        def _fail():
            raise KeyError("no user")
        monkeypatch.delenv("TODO_OWNER", raising=False)
        monkeypatch.setattr(config.getpass, "getuser", _fail)
        assert config.resolve_owner() == "unknown"

    def test_project_env_file(self, tmp_path, monkeypatch):
        # setenv first so monkeypatch restores whatever load_environment writes
        monkeypatch.setenv("TODO_BACKUP_PATH", "placeholder")
        monkeypatch.delenv("TODO_BACKUP_PATH")
        (tmp_path / ".env").write_text("TODO_BACKUP_PATH=/srv/todo.json\n", encoding="utf-8")
        config.load_environment(cwd=tmp_path, config_dir=tmp_path / "cfg")
        assert os.environ["TODO_BACKUP_PATH"] == "/srv/todo.json"

    def test_user_config_env_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TODO_OWNER", "placeholder")
        monkeypatch.delenv("TODO_OWNER")
        cfg = tmp_path / "cfg"
        cfg.mkdir()
        (cfg / ".env").write_text("# owner\nexport TODO_OWNER='frank'\n", encoding="utf-8")
        config.load_environment(cwd=tmp_path, config_dir=cfg)
        assert config.resolve_owner() == "frank"

    def test_user_config_strips_inline_comments(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TODO_OWNER", "placeholder")
        monkeypatch.delenv("TODO_OWNER")
        cfg = tmp_path / "cfg"
        cfg.mkdir()
        (cfg / ".env").write_text("TODO_OWNER=frank  # me\n", encoding="utf-8")
        config.load_environment(cwd=tmp_path, config_dir=cfg)
        assert config.resolve_owner() == "frank"

    def test_user_config_ignores_other_keys(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TODO_UNRELATED", "placeholder")
        monkeypatch.delenv("TODO_UNRELATED")
        cfg = tmp_path / "cfg"
        cfg.mkdir()
        (cfg / ".env").write_text("TODO_UNRELATED=1\n", encoding="utf-8")
        config.load_environment(cwd=tmp_path, config_dir=cfg)
        assert "TODO_UNRELATED" not in os.environ

    def test_environment_is_not_overridden(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TODO_OWNER", "grace")
        cfg = tmp_path / "cfg"
        cfg.mkdir()
        (cfg / ".env").write_text("TODO_OWNER=frank\n", encoding="utf-8")
        (tmp_path / ".env").write_text("TODO_OWNER=heidi\n", encoding="utf-8")
        config.load_environment(cwd=tmp_path, config_dir=cfg)
        assert config.resolve_owner() == "grace"
