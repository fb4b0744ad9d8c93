from __future__ import annotations

import pytest

from jk.app.preview import confirmation_preview_tokens, find_flag_value, toggle_patch_flag


@pytest.mark.parametrize(
    ("tokens", "preview"),
    [
        (["git", "push"], ["git", "push", "--dry-run"]),
        (["git", "push", "--dry-run"], None),
        (["operation", "restore", "abc"], ["operation", "show", "abc", "--no-op-diff"]),
        (["operation", "revert"], ["operation", "show", "@", "--no-op-diff"]),
        (["rebase", "-d", "main"], ["log", "-r", "@ | main", "-n", "20"]),
        (["rebase", "-r", "x", "--destination=dev"], ["log", "-r", "x | dev", "-n", "20"]),
        (["rebase", "-r", "x"], None),
        (["squash", "--from", "x", "--into", "y"], ["log", "-r", "x | y", "-n", "20"]),
        (["split", "-r", "x", "a.txt"], ["show", "x"]),
        (["abandon", "x"], ["log", "-r", "x", "-n", "20"]),
        (["restore", "--from", "a", "--to", "b"], ["log", "-r", "a | b", "-n", "20"]),
        (["revert", "-r", "x", "-o", "@"], ["log", "-r", "x | @", "-n", "20"]),
        (["bookmark", "delete", "x"], ["bookmark", "list", "--all"]),
        (["undo"], ["operation", "log", "-n", "5"]),
        (["fix", "-s", "x"], ["operation", "log", "-n", "5"]),
        (["log"], None),
    ],
)
def test_confirmation_preview_tokens(tokens: list[str], preview: list[str] | None) -> None:
    assert confirmation_preview_tokens(tokens) == preview


def test_find_flag_value_forms() -> None:
    assert find_flag_value(["-d", "main"], ("-d",)) == "main"
    assert find_flag_value(["--onto=x"], ("--onto",)) == "x"
    assert find_flag_value(["-d"], ("-d",)) is None


def test_toggle_patch_flag() -> None:
    assert toggle_patch_flag(["log"]) == ["log", "--patch"]
    assert toggle_patch_flag(["log", "-p", "-r", "@"]) == ["log", "-r", "@"]
