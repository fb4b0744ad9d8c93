from __future__ import annotations

import pytest

from jk.commands import (
    TOP_LEVEL_SPECS,
    ExecutionMode,
    SafetyTier,
    command_overview_lines,
    command_safety,
    is_dangerous,
    lookup_top_level,
)


def test_registry_has_unique_names() -> None:
    names = [spec.name for spec in TOP_LEVEL_SPECS]
    assert len(names) == len(set(names))
    assert lookup_top_level("log").mode is ExecutionMode.NATIVE
    assert lookup_top_level("nope") is None


@pytest.mark.parametrize(
    ("tokens", "tier"),
    [
        ([], SafetyTier.A),
        (["log"], SafetyTier.A),
        (["status"], SafetyTier.A),
        (["new"], SafetyTier.B),
        (["rebase", "-d", "main"], SafetyTier.C),
        (["git", "fetch"], SafetyTier.B),
        (["git", "push"], SafetyTier.C),
        (["operation", "log"], SafetyTier.A),
        (["operation", "restore", "abc"], SafetyTier.C),
        (["operation", "revert"], SafetyTier.C),
        (["operation", "abandon"], SafetyTier.B),
        (["workspace", "list"], SafetyTier.A),
        (["workspace", "add", "../x"], SafetyTier.B),
        (["resolve", "-l"], SafetyTier.A),
        (["resolve"], SafetyTier.B),
        (["bookmark", "list"], SafetyTier.A),
        (["bookmark", "create", "x"], SafetyTier.B),
        (["bookmark", "set", "x"], SafetyTier.C),
        (["file", "show", "a"], SafetyTier.A),
        (["file", "chmod", "x", "a"], SafetyTier.B),
        (["tag", "list"], SafetyTier.A),
        (["tag", "set", "v1"], SafetyTier.B),
        (["frobnicate"], SafetyTier.B),
    ],
)
def test_command_safety(tokens: list[str], tier: SafetyTier) -> None:
    assert command_safety(tokens) is tier


def test_only_tier_c_is_dangerous() -> None:
    assert is_dangerous(["undo"])
    assert not is_dangerous(["new"])
    assert not is_dangerous([])


def test_command_overview_shows_groups_and_registry() -> None:
    lines = command_overview_lines()
    assert lines[0] == "jk command registry"
    text = "\n".join(lines)
    assert "Navigation" in text
    assert "Safety" in text
    assert "all top-level commands" in text
    assert "bookmark (b)" in text


def test_command_overview_filter_without_match() -> None:
    lines = command_overview_lines("zzzz-no-match")
    assert "(no matching flows)" in lines
    assert "(no matching commands)" in lines
