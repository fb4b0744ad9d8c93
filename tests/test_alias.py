from __future__ import annotations

import pytest

from jk.alias import ALIAS_CATALOG, alias_overview_lines, has_flag, normalize_alias


def test_empty_input_defaults_to_log() -> None:
    assert normalize_alias([]) == ["log"]


@pytest.mark.parametrize(
    ("tokens", "expected"),
    [
        (["gf"], ["git", "fetch"]),
        (["gpt", "--dry-run"], ["git", "push", "--tracked", "--dry-run"]),
        (["jjla"], ["log", "-r", "all()"]),
        (["jjbs", "feature"], ["bookmark", "set", "feature"]),
        (["st"], ["status"]),
    ],
)
def test_prefix_aliases_expand(tokens: list[str], expected: list[str]) -> None:
    assert normalize_alias(tokens) == expected


@pytest.mark.parametrize("tokens", [["log", "-r", "@"], ["rebase", "-d", "main"], ["git", "push"]])
def test_canonical_tokens_pass_through(tokens: list[str]) -> None:
    assert normalize_alias(tokens) == tokens


def test_rebase_aliases_use_default_destination() -> None:
    assert normalize_alias(["rbm"]) == ["rebase", "-d", "main"]
    assert normalize_alias(["rbt"]) == ["rebase", "-d", "trunk()"]
    assert normalize_alias(["jjrbm"]) == ["rebase", "-d", "trunk()"]


def test_rebase_alias_positional_destination_overrides_default() -> None:
    assert normalize_alias(["rbm", "release", "-r", "x"]) == ["rebase", "-d", "release", "-r", "x"]


def test_rebase_alias_respects_explicit_destination_flag() -> None:
    assert normalize_alias(["rbm", "-r", "x", "--destination=dev"]) == ["rebase", "-r", "x", "--destination=dev"]
    assert normalize_alias(["rbt", "-d", "dev"]) == ["rebase", "-d", "dev"]


def test_rebase_alias_keeps_leading_flags_after_default() -> None:
    assert normalize_alias(["rbm", "-r", "abc"]) == ["rebase", "-d", "main", "-r", "abc"]


def test_has_flag_matches_equals_form() -> None:
    flags = frozenset({"-r", "--revision"})
    assert has_flag(["--revision=abc"], flags)
    assert has_flag(["x", "-r", "abc"], flags)
    assert not has_flag(["--revisions", "abc"], flags)


def test_alias_overview_lists_whole_catalog() -> None:
    lines = alias_overview_lines()
    assert lines[0] == "jk alias catalog"
    assert len(lines) == 3 + len(ALIAS_CATALOG)


def test_alias_overview_filters_case_insensitively() -> None:
    lines = alias_overview_lines("PUSH")
    body = lines[3:]
    assert body
    assert all("push" in line for line in body)
    assert any(line.startswith("jjgpt") for line in body)
