"""Token builders for guided prompt input.

Builders enforce minimal argument contracts and turn shorthand prompt text into concrete
`jj` tokens. Every failure raises `PromptInputError` with a message fit for the status line.
"""

from __future__ import annotations

from jk.alias import has_flag
from jk.errors import PromptInputError

REVISION_FLAGS: frozenset[str] = frozenset({"-r", "--revision", "--to"})


def bookmark_target_command(
    subcommand: str, text: str, target_revision: str, *, empty_message: str, target_flag: str
) -> list[str]:
    """Build bookmark mutations that point a name at one revision."""
    if not text:
        raise PromptInputError(empty_message)
    return ["bookmark", subcommand, text, target_flag, target_revision]


def bookmark_track_command(subcommand: str, text: str) -> list[str]:
    """Build `bookmark track/untrack` from `<bookmark> [remote]`.

    `"feature origin"` becomes `["bookmark", "track", "feature", "--remote", "origin"]`.
    """
    if not text:
        raise PromptInputError("bookmark name is required")

    segments = text.split()
    if len(segments) > 2:
        raise PromptInputError("use format: <bookmark> [remote]")

    tokens = ["bookmark", subcommand, segments[0]]
    if len(segments) == 2:
        tokens.extend(["--remote", segments[1]])
    return tokens


def bookmark_names_command(subcommand: str, text: str) -> list[str]:
    names = text.split()
    if not names:
        raise PromptInputError("at least one bookmark name is required")
    return ["bookmark", subcommand, *names]


def bookmark_rename_command(text: str) -> list[str]:
    names = text.split()
    if len(names) != 2:
        raise PromptInputError("use format: <old> <new>")
    return ["bookmark", "rename", names[0], names[1]]


def tag_set_command(text: str, default_revision: str) -> list[str]:
    """Build `tag set`, injecting the default revision when none is given.

    A bare second word is read as the revision: `"v1 release"` sets `v1` on `release`.
    """
    segments = text.split()
    if not segments:
        raise PromptInputError("at least one tag name is required")

    explicit = has_flag(segments, REVISION_FLAGS)
    if len(segments) >= 2 and not segments[1].startswith("-") and not explicit:
        return ["tag", "set", segments[0], "--revision", segments[1], *segments[2:]]

    tokens = ["tag", "set", *segments]
    if not explicit:
        tokens.extend(["--revision", default_revision])
    return tokens


def tag_delete_command(text: str) -> list[str]:
    names = text.split()
    if not names:
        raise PromptInputError("at least one tag name is required")
    return ["tag", "delete", *names]


def workspace_add_command(text: str) -> list[str]:
    """Build `workspace add` from `<destination> [name]`."""
    segments = text.split()
    if len(segments) == 1:
        return ["workspace", "add", segments[0]]
    if len(segments) == 2:
        destination, name = segments
        return ["workspace", "add", "--name", name, destination]
    raise PromptInputError("use format: <destination> [name]")


def workspace_forget_command(text: str) -> list[str]:
    # No names means the current workspace.
    return ["workspace", "forget", *text.split()]


def file_paths_command(subcommand: str, text: str) -> list[str]:
    paths = text.split()
    if not paths:
        raise PromptInputError("at least one file/fileset is required")
    return ["file", subcommand, *paths]


def file_chmod_command(text: str, default_revision: str) -> list[str]:
    parts = text.split()
    if len(parts) < 2:
        raise PromptInputError("use format: <mode> <path...> [--revision REVSET]")

    tokens = ["file", "chmod", *parts]
    if not has_flag(parts, REVISION_FLAGS):
        tokens.extend(["--revision", default_revision])
    return tokens
