"""Read-only previews shown before a dangerous command is confirmed."""

from __future__ import annotations

from collections.abc import Sequence

from jk.commands import is_dangerous

_BOOKMARK_PREVIEWED = frozenset({"set", "move", "delete", "forget", "rename"})


def confirmation_preview_tokens(tokens: Sequence[str]) -> list[str] | None:
    """Derive best-effort read-only preview tokens for a dangerous command.

    `None` means no preview strategy is known. Callers still require explicit confirmation.
    """
    first = tokens[0] if tokens else None
    sub = tokens[1] if len(tokens) > 1 else None

    if (first, sub) == ("git", "push"):
        if "--dry-run" in tokens:
            return None
        return [*tokens, "--dry-run"]

    if first == "operation" and sub in ("restore", "revert"):
        operation = tokens[2] if len(tokens) > 2 and not tokens[2].startswith("-") else "@"
        return ["operation", "show", operation, "--no-op-diff"]

    if first == "rebase":
        source = find_flag_value(tokens, ("-r", "--revision", "-b", "--branch")) or "@"
        destination = find_flag_value(tokens, ("-d", "--destination", "--onto"))
        if destination is None:
            return None
        return log_preview_tokens(f"{source} | {destination}")
    if first == "squash":
        source = find_flag_value(tokens, ("--from",)) or "@"
        target = find_flag_value(tokens, ("--into",)) or "@-"
        return log_preview_tokens(f"{source} | {target}")
    if first == "split":
        return ["show", find_flag_value(tokens, ("-r", "--revision")) or "@"]
    if first == "abandon":
        return log_preview_tokens(sub or "@")
    if first == "restore":
        source = find_flag_value(tokens, ("--from",)) or "@-"
        target = find_flag_value(tokens, ("--to",)) or "@"
        return log_preview_tokens(f"{source} | {target}")
    if first == "revert":
        revisions = find_flag_value(tokens, ("-r", "--revisions")) or "@"
        onto = find_flag_value(tokens, ("-o", "--onto")) or "@"
        return log_preview_tokens(f"{revisions} | {onto}")
    if first == "bookmark" and sub in _BOOKMARK_PREVIEWED:
        return ["bookmark", "list", "--all"]

    if first in ("undo", "redo") or is_dangerous(tokens):
        return operation_log_preview_tokens()
    return None


def find_flag_value(tokens: Sequence[str], flags: Sequence[str]) -> str | None:
    """Return the value of the first matching flag, in `flag value` or `flag=value` form."""
    for index, token in enumerate(tokens):
        for flag in flags:
            if token == flag:
                if index + 1 < len(tokens):
                    return tokens[index + 1]
            elif token.startswith(f"{flag}="):
                return token[len(flag) + 1 :]
    return None


def log_preview_tokens(revset: str) -> list[str]:
    return ["log", "-r", revset, "-n", "20"]


def operation_log_preview_tokens() -> list[str]:
    return ["operation", "log", "-n", "5"]


def toggle_patch_flag(tokens: Sequence[str]) -> list[str]:
    """Drop `-p`/`--patch` when present, otherwise append `--patch`."""
    result = [token for token in tokens if token not in ("-p", "--patch")]
    if len(result) == len(tokens):
        result.append("--patch")
    return result
