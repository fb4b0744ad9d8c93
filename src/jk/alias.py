"""Alias normalization and alias-catalog rendering."""

from __future__ import annotations

from collections.abc import Sequence

DEFAULT_VIEW = "log"

ALIAS_PREFIXES: dict[str, tuple[str, ...]] = {
    "b": ("bookmark",),
    "ci": ("commit",),
    "desc": ("describe",),
    "jjds": ("describe",),
    "jjdmsg": ("describe", "--message"),
    "op": ("operation",),
    "st": ("status",),
    "jjst": ("status",),
    "gf": ("git", "fetch"),
    "jjgf": ("git", "fetch"),
    "gfa": ("git", "fetch", "--all-remotes"),
    "jjgfa": ("git", "fetch", "--all-remotes"),
    "gp": ("git", "push"),
    "jjgp": ("git", "push"),
    "gpt": ("git", "push", "--tracked"),
    "jjgpt": ("git", "push", "--tracked"),
    "gpa": ("git", "push", "--all"),
    "jjgpa": ("git", "push", "--all"),
    "gpd": ("git", "push", "--deleted"),
    "jjgpd": ("git", "push", "--deleted"),
    "jjrb": ("rebase",),
    "jjl": ("log",),
    "jjla": ("log", "-r", "all()"),
    "jjd": ("diff",),
    "jjc": ("commit",),
    "jjcmsg": ("commit", "--message"),
    "jjn": ("new",),
    "jjnt": ("new", "trunk()"),
    "jje": ("edit",),
    "jjsp": ("split",),
    "jjsq": ("squash",),
    "jjrs": ("restore",),
    "jja": ("abandon",),
    "jjgcl": ("git", "clone"),
    "jjb": ("bookmark",),
    "jjbc": ("bookmark", "create"),
    "jjbd": ("bookmark", "delete"),
    "jjbf": ("bookmark", "forget"),
    "jjbl": ("bookmark", "list"),
    "jjbm": ("bookmark", "move"),
    "jjbr": ("bookmark", "rename"),
    "jjbs": ("bookmark", "set"),
    "jjbt": ("bookmark", "track"),
    "jjbu": ("bookmark", "untrack"),
    "jjrt": ("root",),
}

# Shortcuts that mean "rebase onto a default destination".
DESTINATION_ALIASES: dict[str, str] = {
    "rbm": "main",
    "rbt": "trunk()",
    "jjrbm": "trunk()",
}

DESTINATION_FLAGS: frozenset[str] = frozenset({"-d", "-t", "--destination", "--to", "--into"})

ALIAS_CATALOG: tuple[tuple[str, str], ...] = (
    ("b", "bookmark"),
    ("ci", "commit"),
    ("desc", "describe"),
    ("gf", "git fetch"),
    ("gp", "git push"),
    ("op", "operation"),
    ("rbm", "rebase -d main"),
    ("rbt", "rebase -d trunk()"),
    ("st", "status"),
    ("jja", "abandon"),
    ("jjb", "bookmark (defaults to list in jk)"),
    ("jjbc", "bookmark create"),
    ("jjbd", "bookmark delete"),
    ("jjbf", "bookmark forget"),
    ("jjbl", "bookmark list"),
    ("jjbm", "bookmark move"),
    ("jjbr", "bookmark rename"),
    ("jjbs", "bookmark set"),
    ("jjbt", "bookmark track"),
    ("jjbu", "bookmark untrack"),
    ("jjc", "commit"),
    ("jjcmsg", "commit --message"),
    ("jjd", "diff"),
    ("jjdmsg", "describe --message"),
    ("jjds", "describe"),
    ("jje", "edit"),
    ("jjgcl", "git clone"),
    ("jjgf", "git fetch"),
    ("jjgfa", "git fetch --all-remotes"),
    ("jjgp", "git push"),
    ("jjgpa", "git push --all"),
    ("jjgpd", "git push --deleted"),
    ("jjgpt", "git push --tracked"),
    ("jjl", "log"),
    ("jjla", "log -r all()"),
    ("jjn", "new"),
    ("jjnt", "new trunk()"),
    ("jjrb", "rebase"),
    ("jjrbm", "rebase -d trunk()"),
    ("jjrs", "restore"),
    ("jjrt", "root (in-app equivalent of plugin cd alias)"),
    ("jjsp", "split"),
    ("jjsq", "squash"),
    ("jjst", "status"),
)


def normalize_alias(tokens: Sequence[str]) -> list[str]:
    """Expand a leading alias into canonical command tokens.

    Empty input becomes the default `log` view. Tokens without a known alias are returned as-is.
    """
    if not tokens:
        return [DEFAULT_VIEW]

    first = tokens[0]
    if first in DESTINATION_ALIASES:
        return _normalize_destination_alias(first, list(tokens[1:]))

    prefix = ALIAS_PREFIXES.get(first)
    if prefix is None:
        return list(tokens)
    return [*prefix, *tokens[1:]]


def _normalize_destination_alias(alias: str, remainder: list[str]) -> list[str]:
    # An explicit destination flag anywhere in the remainder wins over the default.
    if has_flag(remainder, DESTINATION_FLAGS):
        return ["rebase", *remainder]

    if remainder and not remainder[0].startswith("-"):
        destination, tail = remainder[0], remainder[1:]
    else:
        destination, tail = DESTINATION_ALIASES[alias], remainder
    return ["rebase", "-d", destination, *tail]


def has_flag(tokens: Sequence[str], flags: frozenset[str]) -> bool:
    """Return whether any token is one of `flags`, alone or in `flag=value` form."""
    for token in tokens:
        if token in flags:
            return True
        name, sep, _ = token.partition("=")
        if sep and name in flags:
            return True
    return False


def alias_overview_lines(query: str | None = None) -> list[str]:
    """Render the alias catalog, optionally filtered by a case-insensitive query."""
    needle = (query or "").strip().lower()
    lines = [
        "jk alias catalog",
        f"{'alias':<8} expands to",
        "-" * 40,
    ]
    for alias, expansion in ALIAS_CATALOG:
        if needle and needle not in alias.lower() and needle not in expansion.lower():
            continue
        lines.append(f"{alias:<8} {expansion}")
    return lines
