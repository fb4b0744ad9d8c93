from __future__ import annotations

import pytest

from jk.flow import Execute, Prompt, Quit, Render, Status, canonicalize_tokens, plan_command
from jk.flow import prompts


def test_blank_and_quit_lines() -> None:
    assert plan_command("   ") == Status("Ready")
    assert plan_command("q") == Quit()
    assert plan_command(" quit ") == Quit()


def test_unbalanced_quotes_report_status() -> None:
    assert plan_command('describe -m "oops') == Status("Invalid command quoting")


def test_quoted_arguments_survive_tokenizing() -> None:
    assert plan_command('log -r "trunk() | @"') == Execute(["log", "-r", "trunk() | @"])


def test_local_views_render_without_execution() -> None:
    action = plan_command("commands")
    assert isinstance(action, Render)
    assert action.status == "Showing command registry"

    action = plan_command("help rebase")
    assert isinstance(action, Render)
    assert action.status == "Showing command registry for `rebase`"

    action = plan_command("aliases push")
    assert isinstance(action, Render)
    assert action.status == "Showing alias catalog for `push`"


@pytest.mark.parametrize(
    ("line", "tokens"),
    [
        ("op", ["operation", "log"]),
        ("workspace", ["workspace", "list"]),
        ("resolve", ["resolve", "-l"]),
        ("file", ["file", "list"]),
        ("tag", ["tag", "list"]),
        ("b", ["bookmark", "list"]),
        ("jjb", ["bookmark", "list"]),
    ],
)
def test_bare_groups_default_to_list_views(line: str, tokens: list[str]) -> None:
    assert plan_command(line) == Execute(tokens)


def test_passthrough_subcommands_execute_directly() -> None:
    assert plan_command("op show") == Execute(["operation", "show"])
    assert plan_command("workspace root") == Execute(["workspace", "root"])


def test_selection_commands_use_selected_revision() -> None:
    assert plan_command("show", "abcdefgh") == Execute(["show", "abcdefgh"])
    assert plan_command("diff", "abcdefgh") == Execute(["diff", "-r", "abcdefgh"])
    assert plan_command("abandon", "abcdefgh") == Execute(["abandon", "abcdefgh"])


def test_selection_commands_fall_back_to_working_copy() -> None:
    assert plan_command("edit") == Execute(["edit", "@"])


def test_message_commands_open_prompts() -> None:
    action = plan_command("describe", "abcdefgh")
    assert isinstance(action, Prompt)
    assert action.request.kind == prompts.DescribeMessage("abcdefgh")
    assert not action.request.allow_empty

    action = plan_command("new")
    assert isinstance(action, Prompt)
    assert action.request.allow_empty


def test_rewrite_commands_open_prompts() -> None:
    action = plan_command("rebase", "abcdefgh")
    assert isinstance(action, Prompt)
    assert action.request.kind == prompts.RebaseDestination("abcdefgh")

    action = plan_command("squash")
    assert isinstance(action, Prompt)
    assert action.request.kind == prompts.SquashInto("@")


def test_bookmark_shorthands_open_prompts() -> None:
    action = plan_command("b s", "abcdefgh")
    assert isinstance(action, Prompt)
    assert action.request.kind == prompts.BookmarkSet("abcdefgh")

    action = plan_command("jjbm")
    assert isinstance(action, Prompt)
    assert action.request.kind == prompts.BookmarkMove("@")


def test_subcommand_prompts() -> None:
    assert plan_command("op restore").request.kind == prompts.OperationRestore()
    assert plan_command("tag set", "abcdefgh").request.kind == prompts.TagSet("abcdefgh")
    assert plan_command("workspace add").request.kind == prompts.WorkspaceAdd()
    assert plan_command("file chmod").request.kind == prompts.FileChmod("@")
    assert plan_command("gp").request.kind == prompts.GitPushBookmark()


def test_explicit_arguments_skip_prompts() -> None:
    assert plan_command("describe -m hello") == Execute(["describe", "-m", "hello"])
    assert plan_command("bookmark set main -r @-") == Execute(["bookmark", "set", "main", "-r", "@-"])
    assert plan_command("rbm") == Execute(["rebase", "-d", "main"])


def test_unknown_commands_execute_verbatim() -> None:
    assert plan_command("frobnicate --all") == Execute(["frobnicate", "--all"])


def test_canonicalize_expands_subcommand_shorthands() -> None:
    assert canonicalize_tokens(["b", "l"]) == ["bookmark", "list"]
    assert canonicalize_tokens(["tag", "d", "v1"]) == ["tag", "delete", "v1"]
    assert canonicalize_tokens(["ci"]) == ["commit"]
    assert canonicalize_tokens([]) == []
