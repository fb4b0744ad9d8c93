"""Command planner from command-line text to flow actions.

Planning prefers local render views and guided prompts before falling back to direct execution.
It never runs anything itself.
"""

from __future__ import annotations

import shlex

from jk.alias import DEFAULT_VIEW, alias_overview_lines, normalize_alias
from jk.commands import command_overview_lines
from jk.flow import prompts
from jk.flow.actions import Execute, FlowAction, Prompt, PromptRequest, Quit, Render, Status

CURRENT_REVISION = "@"

_TOP_LEVEL_SHORTHANDS = {
    "desc": "describe",
    "st": "status",
    "ci": "commit",
    "b": "bookmark",
    "op": "operation",
}

_SUBCOMMAND_SHORTHANDS: dict[str, dict[str, str]] = {
    "bookmark": {
        "c": "create",
        "d": "delete",
        "f": "forget",
        "l": "list",
        "m": "move",
        "r": "rename",
        "s": "set",
        "t": "track",
        "u": "untrack",
    },
    "tag": {"d": "delete", "l": "list", "s": "set"},
}

# Commands whose bare form lists things.
_LIST_DEFAULTS: dict[str, list[str]] = {
    "operation": ["operation", "log"],
    "workspace": ["workspace", "list"],
    "resolve": ["resolve", "-l"],
    "file": ["file", "list"],
    "tag": ["tag", "list"],
    "bookmark": ["bookmark", "list"],
}

_PASSTHROUGH_PAIRS = frozenset(
    {
        ("operation", "show"),
        ("operation", "diff"),
        ("workspace", "root"),
        ("workspace", "update-stale"),
    }
)


def plan_command(raw: str, selected: str | None = None) -> FlowAction:
    """Plan one command-mode line.

    `selected` is the revision under the cursor; flows that act on a revision fall back to `@`
    when it is missing so they still work outside `log` views.
    """
    trimmed = raw.strip()
    if not trimmed:
        return Status("Ready")
    if trimmed in ("q", "quit"):
        return Quit()

    try:
        raw_tokens = shlex.split(trimmed)
    except ValueError:
        return Status("Invalid command quoting")

    tokens = canonicalize_tokens(normalize_alias(raw_tokens))
    if not tokens:
        return Execute([DEFAULT_VIEW])

    revision = selected or CURRENT_REVISION
    command, tail = tokens[0], tokens[1:]

    action = _plan_local_view(command, tail)
    if action is not None:
        return action

    if not tail and command in _LIST_DEFAULTS:
        return Execute(list(_LIST_DEFAULTS[command]))

    if len(tail) == 1:
        if (command, tail[0]) in _PASSTHROUGH_PAIRS:
            return Execute(tokens)
        request = _subcommand_prompt(command, tail[0], revision)
        if request is not None:
            return Prompt(request)

    if not tail:
        request = _command_prompt(command, revision)
        if request is not None:
            return Prompt(request)
        selected_tokens = _selection_tokens(command, revision)
        if selected_tokens is not None:
            return Execute(selected_tokens)

    return Execute(tokens)


def canonicalize_tokens(tokens: list[str]) -> list[str]:
    """Expand top-level and subcommand shorthands left over after alias normalization."""
    if not tokens:
        return tokens

    result = list(tokens)
    result[0] = _TOP_LEVEL_SHORTHANDS.get(result[0], result[0])
    subcommands = _SUBCOMMAND_SHORTHANDS.get(result[0])
    if subcommands and len(result) > 1:
        result[1] = subcommands.get(result[1], result[1])
    return result


def _plan_local_view(command: str, tail: list[str]) -> FlowAction | None:
    if tail:
        query = " ".join(tail)
        if command in ("commands", "help"):
            return Render(command_overview_lines(query), f"Showing command registry for `{query}`")
        if command == "aliases":
            return Render(alias_overview_lines(query), f"Showing alias catalog for `{query}`")
        return None

    if command in ("commands", "help", "?"):
        return Render(command_overview_lines(), "Showing command registry")
    if command == "aliases":
        return Render(alias_overview_lines(), "Showing alias catalog")
    return None


def _command_prompt(command: str, revision: str) -> PromptRequest | None:
    if command == "new":
        return PromptRequest("new message (blank for none)", prompts.NewMessage(), allow_empty=True)
    if command == "describe":
        return PromptRequest(f"describe message for {revision}", prompts.DescribeMessage(revision))
    if command == "commit":
        return PromptRequest("commit message (blank for default)", prompts.CommitMessage(), allow_empty=True)
    if command == "metaedit":
        return PromptRequest(f"metaedit message for {revision}", prompts.MetaeditMessage(revision))
    if command == "restore":
        return PromptRequest(
            f"restore from revset into {revision} (blank = @-)", prompts.RestoreFrom(revision), allow_empty=True
        )
    if command == "revert":
        return PromptRequest(
            f"revert revset (blank = {revision})",
            prompts.RevertRevisions(revision, onto_revision=CURRENT_REVISION),
            allow_empty=True,
        )
    if command == "rebase":
        return PromptRequest(f"rebase destination revset for {revision}", prompts.RebaseDestination(revision))
    if command == "squash":
        return PromptRequest(
            f"squash into revset (blank = @-) from {revision}", prompts.SquashInto(revision), allow_empty=True
        )
    if command == "split":
        return PromptRequest("split fileset (required for non-interactive mode)", prompts.SplitFileset(revision))
    return None


def _subcommand_prompt(command: str, subcommand: str, revision: str) -> PromptRequest | None:
    pair = (command, subcommand)

    if pair == ("operation", "restore"):
        return PromptRequest("operation id to restore (required)", prompts.OperationRestore())
    if pair == ("operation", "revert"):
        return PromptRequest(
            "operation id to revert (blank = @)", prompts.OperationRevert(CURRENT_REVISION), allow_empty=True
        )

    if pair == ("file", "track"):
        return PromptRequest("file paths/filesets to track", prompts.FileTrack())
    if pair == ("file", "untrack"):
        return PromptRequest("file paths/filesets to untrack", prompts.FileUntrack())
    if pair == ("file", "chmod"):
        return PromptRequest(
            f"file chmod: <mode> <path...> [--revision REVSET] (defaults to {revision})",
            prompts.FileChmod(revision),
        )

    if pair == ("tag", "set"):
        return PromptRequest(
            f"tag set: <name...> [revision] (blank revision defaults to {revision})", prompts.TagSet(revision)
        )
    if pair == ("tag", "delete"):
        return PromptRequest("tag names to delete (space-separated)", prompts.TagDelete())

    if pair == ("workspace", "rename"):
        return PromptRequest("new workspace name", prompts.WorkspaceRename())
    if pair == ("workspace", "forget"):
        return PromptRequest(
            "workspace names to forget (blank = current)", prompts.WorkspaceForget(), allow_empty=True
        )
    if pair == ("workspace", "add"):
        return PromptRequest("workspace add: <destination> [name]", prompts.WorkspaceAdd())

    if command == "bookmark":
        return _bookmark_prompt(subcommand, revision)

    if pair == ("git", "fetch"):
        return PromptRequest("fetch remote (blank for default)", prompts.GitFetchRemote(), allow_empty=True)
    if pair == ("git", "push"):
        return PromptRequest(
            "push bookmark (blank for default tracked push)", prompts.GitPushBookmark(), allow_empty=True
        )
    return None


def _bookmark_prompt(subcommand: str, revision: str) -> PromptRequest | None:
    if subcommand == "create":
        return PromptRequest(f"bookmark name for revision {revision}", prompts.BookmarkCreate(revision))
    if subcommand == "set":
        return PromptRequest(f"bookmark name for revision {revision}", prompts.BookmarkSet(revision))
    if subcommand == "move":
        return PromptRequest(f"bookmark name to move to {revision}", prompts.BookmarkMove(revision))
    if subcommand == "delete":
        return PromptRequest("delete bookmarks (space-separated names)", prompts.BookmarkDelete())
    if subcommand == "forget":
        return PromptRequest("forget bookmarks (space-separated names)", prompts.BookmarkForget())
    if subcommand == "rename":
        return PromptRequest("rename bookmark: <old> <new>", prompts.BookmarkRename())
    if subcommand == "track":
        return PromptRequest("track: <name> [remote]", prompts.BookmarkTrack())
    if subcommand == "untrack":
        return PromptRequest("untrack: <name> [remote]", prompts.BookmarkUntrack())
    return None


def _selection_tokens(command: str, revision: str) -> list[str] | None:
    """Fixed token patterns for commands fully determined by the selected revision."""
    patterns: dict[str, list[str]] = {
        "next": ["next"],
        "prev": ["prev"],
        "undo": ["undo"],
        "redo": ["redo"],
        "edit": ["edit", revision],
        "show": ["show", revision],
        "diff": ["diff", "-r", revision],
        "evolog": ["evolog", "-r", revision],
        "interdiff": ["interdiff", "--from", "@-", "--to", revision],
        "diffedit": ["diffedit", "-r", revision],
        "fix": ["fix", "-s", revision],
        "abandon": ["abandon", revision],
        "absorb": ["absorb", "--from", revision],
        "duplicate": ["duplicate", revision],
        "parallelize": ["parallelize", revision],
        "simplify-parents": ["simplify-parents", revision],
    }
    return patterns.get(command)
