from __future__ import annotations

from pathlib import Path

import pytest

from user_registry import cli
from user_registry.settings import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("USER_DB_PATH", "USER_REGISTRY_HOST", "USER_REGISTRY_PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)

    assert s.db_path == "db.json"
    assert s.host == "0.0.0.0"
    assert s.port == 8080
    assert s.log_level == "INFO"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("USER_DB_PATH", "/tmp/users.json")
    monkeypatch.setenv("USER_REGISTRY_PORT", "9090")

    s = Settings(_env_file=None)

    assert s.db_path == "/tmp/users.json"
    assert s.port == 9090


def test_cli_flags_override_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None))

    s = cli._resolve_settings(cli._parse_args(["--db-path", "x.json", "--port", "9000"]))

    assert s.db_path == "x.json"
    assert s.port == 9000
    assert s.host == "0.0.0.0"


def test_cli_serves_loaded_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn

    calls: list[dict] = []

    def fake_run(app, **kwargs):
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(uvicorn, "run", fake_run)
    monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None))
    db_path = tmp_path / "db.json"

    status = cli.main(["--db-path", str(db_path), "--port", "8181", "--host", "127.0.0.1"])

    assert status == 0
    assert db_path.exists()
    assert len(calls) == 1
    assert calls[0]["host"] == "127.0.0.1"
    assert calls[0]["port"] == 8181
    assert calls[0]["app"].state.repository.find_by_email("nobody@x.com")[1] is False


def test_cli_exits_when_store_is_malformed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn

    def fail_run(*_args, **_kwargs):
        raise AssertionError("server must not start")

    monkeypatch.setattr(uvicorn, "run", fail_run)
    monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None))
    db_path = tmp_path / "db.json"
    db_path.write_text("{broken", encoding="utf-8")

    assert cli.main(["--db-path", str(db_path)]) == 1


def test_settings_normalise_and_reject_log_levels(monkeypatch: pytest.MonkeyPatch) -> None:
    from pydantic import ValidationError

    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_cli_log_level_flag_is_restricted() -> None:
    assert cli._parse_args(["--log-level", "warning"]).log_level == "WARNING"

    with pytest.raises(SystemExit):
        cli._parse_args(["--log-level", "verbose"])


def test_cli_exits_on_invalid_log_level_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import uvicorn

    def fail_run(*_args, **_kwargs):
        raise AssertionError("server must not start")

    monkeypatch.setattr(uvicorn, "run", fail_run)
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    monkeypatch.setattr(cli, "get_settings", lambda: Settings(_env_file=None))
    db_path = tmp_path / "db.json"

    assert cli.main(["--db-path", str(db_path)]) == 1
    assert not db_path.exists()
