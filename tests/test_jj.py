from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from jk import jj as jj_module
from jk.errors import JjLaunchError
from jk.jj import NO_OUTPUT, JjRunner, combine_output


def test_combine_output_prefers_non_empty_stream() -> None:
    assert combine_output("a\nb\n", "") == ["a", "b"]
    assert combine_output("  \n", "warn") == ["warn"]
    assert combine_output("out", "err") == ["out", "err"]
    assert combine_output("", " ") == [NO_OUTPUT]


def test_combine_output_splits_on_newlines_only() -> None:
    assert combine_output("a\x0cb\u2028c\r\nd\n", "") == ["a\x0cb\u2028c", "d"]
    assert combine_output("a\n\nb", "") == ["a", "", "b"]


def test_runner_builds_argv_and_captures_output(monkeypatch, tmp_path: Path) -> None:
    seen: dict[str, object] = {}

    def fake_run(argv, **kwargs):
        seen["argv"] = argv
        seen["cwd"] = kwargs["cwd"]
        seen["env"] = kwargs["env"]
        return subprocess.CompletedProcess(argv, 1, stdout="", stderr="Error: nope\n")

    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(jj_module.subprocess, "run", fake_run)

    result = JjRunner("jj", tmp_path).run(["log", "-r", "@"])

    assert seen["argv"] == ["jj", "--no-pager", "--color", "always", "log", "-r", "@"]
    assert seen["cwd"] == tmp_path
    assert "NO_COLOR" not in seen["env"]
    assert result.command == ["log", "-r", "@"]
    assert result.output == ["Error: nope"]
    assert result.success is False


def test_plain_runner_disables_color(monkeypatch) -> None:
    captured: list[list[str]] = []

    def fake_run(argv, **_kwargs):
        captured.append(argv)
        return subprocess.CompletedProcess(argv, 0, stdout="abc 123\n", stderr="")

    monkeypatch.setattr(jj_module.subprocess, "run", fake_run)
    result = JjRunner().run_plain(["log"])
    assert captured[0][:4] == ["jj", "--no-pager", "--color", "never"]
    assert result.success


def test_runner_wraps_launch_failures(monkeypatch) -> None:
    def fake_run(argv, **_kwargs):
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(jj_module.subprocess, "run", fake_run)
    with pytest.raises(JjLaunchError, match="failed to run `jj-missing`"):
        JjRunner("jj-missing").run(["status"])
