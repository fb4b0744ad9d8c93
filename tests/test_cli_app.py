from __future__ import annotations

import importlib
from pathlib import Path

from typer.testing import CliRunner

from jk.errors import JjLaunchError

cli_app_module = importlib.import_module("jk.cli.app")


class _FakeTerminal:
    instances: list[_FakeTerminal] = []

    def __init__(self, session) -> None:
        self.session = session
        self.startup: list[str] | None = None
        _FakeTerminal.instances.append(self)

    def run(self, startup_tokens) -> None:
        self.startup = list(startup_tokens)


def _isolate(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("JK_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("JK_KEYBINDS_PATH", str(tmp_path / "keybinds.yaml"))
    monkeypatch.setattr(cli_app_module, "configure_logging", lambda **_kwargs: None)


def test_startup_command_is_forwarded(monkeypatch, tmp_path: Path) -> None:
    _isolate(monkeypatch, tmp_path)
    _FakeTerminal.instances.clear()
    monkeypatch.setattr(cli_app_module, "TerminalUI", _FakeTerminal)

    result = CliRunner().invoke(cli_app_module.app, ["log", "-r", "trunk()", "--cwd", str(tmp_path)])

    assert result.exit_code == 0, result.output
    terminal = _FakeTerminal.instances[-1]
    assert terminal.startup == ["log", "-r", "trunk()"]
    assert terminal.session.viewport_rows == 20


def test_no_arguments_starts_empty(monkeypatch, tmp_path: Path) -> None:
    _isolate(monkeypatch, tmp_path)
    _FakeTerminal.instances.clear()
    monkeypatch.setattr(cli_app_module, "TerminalUI", _FakeTerminal)

    result = CliRunner().invoke(cli_app_module.app, [])

    assert result.exit_code == 0, result.output
    assert _FakeTerminal.instances[-1].startup == []


def test_invalid_keybinds_exit_with_error(monkeypatch, tmp_path: Path) -> None:
    _isolate(monkeypatch, tmp_path)
    (tmp_path / "keybinds.yaml").write_text("normal:\n  fly: [x]\n", encoding="utf-8")

    result = CliRunner().invoke(cli_app_module.app, [])

    assert result.exit_code == 1
    assert "keybinds.yaml" in result.output


def test_launch_error_exits_with_error(monkeypatch, tmp_path: Path) -> None:
    _isolate(monkeypatch, tmp_path)

    class _FailingTerminal(_FakeTerminal):
        def run(self, startup_tokens) -> None:
            raise JjLaunchError("jj", "No such file or directory")

    monkeypatch.setattr(cli_app_module, "TerminalUI", _FailingTerminal)

    result = CliRunner().invoke(cli_app_module.app, ["status"])

    assert result.exit_code == 1
    assert "failed to run `jj`" in result.output
