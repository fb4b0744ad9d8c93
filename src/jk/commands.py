"""Command registry metadata and safety classification.

The planner and runtime consult this module to decide the wrapper style and whether confirmation
gating is required for a command.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class ExecutionMode(str, Enum):
    """Rendering/execution strategy used for a top-level command."""

    NATIVE = "native"
    GUIDED = "guided"
    PASSTHROUGH = "passthrough"


class SafetyTier(str, Enum):
    """Risk classification: read-only, reversible mutation, destructive."""

    A = "A"
    B = "B"
    C = "C"


@dataclass(frozen=True)
class CommandSpec:
    """Static metadata for one top-level `jj` command."""

    name: str
    mode: ExecutionMode
    tier: SafetyTier


_N, _G, _P = ExecutionMode.NATIVE, ExecutionMode.GUIDED, ExecutionMode.PASSTHROUGH
_A, _B, _C = SafetyTier.A, SafetyTier.B, SafetyTier.C

TOP_LEVEL_SPECS: tuple[CommandSpec, ...] = (
    CommandSpec("abandon", _G, _C),
    CommandSpec("absorb", _G, _C),
    CommandSpec("bisect", _P, _B),
    CommandSpec("bookmark", _G, _B),
    CommandSpec("commit", _G, _B),
    CommandSpec("config", _P, _B),
    CommandSpec("describe", _G, _B),
    CommandSpec("diff", _N, _A),
    CommandSpec("diffedit", _G, _C),
    CommandSpec("duplicate", _G, _B),
    CommandSpec("edit", _G, _B),
    CommandSpec("evolog", _G, _A),
    CommandSpec("file", _G, _B),
    CommandSpec("fix", _G, _C),
    CommandSpec("gerrit", _P, _B),
    CommandSpec("git", _G, _B),
    CommandSpec("help", _P, _A),
    CommandSpec("interdiff", _G, _A),
    CommandSpec("log", _N, _A),
    CommandSpec("metaedit", _G, _B),
    CommandSpec("new", _G, _B),
    CommandSpec("next", _G, _B),
    CommandSpec("operation", _G, _B),
    CommandSpec("parallelize", _G, _C),
    CommandSpec("prev", _G, _B),
    CommandSpec("rebase", _G, _C),
    CommandSpec("redo", _G, _C),
    CommandSpec("resolve", _G, _B),
    CommandSpec("restore", _G, _C),
    CommandSpec("revert", _G, _C),
    CommandSpec("root", _P, _A),
    CommandSpec("show", _N, _A),
    CommandSpec("sign", _P, _B),
    CommandSpec("simplify-parents", _G, _C),
    CommandSpec("sparse", _P, _B),
    CommandSpec("split", _G, _C),
    CommandSpec("squash", _G, _C),
    CommandSpec("status", _N, _A),
    CommandSpec("tag", _G, _B),
    CommandSpec("undo", _G, _C),
    CommandSpec("unsign", _P, _B),
    CommandSpec("util", _P, _A),
    CommandSpec("version", _P, _A),
    CommandSpec("workspace", _G, _B),
)

_SPECS_BY_NAME: dict[str, CommandSpec] = {spec.name: spec for spec in TOP_LEVEL_SPECS}

_BOOKMARK_DESTRUCTIVE = frozenset({"set", "move", "delete", "forget", "rename"})
_BOOKMARK_MUTATING = frozenset({"create", "track", "untrack"})
_FILE_READ_ONLY = frozenset({"annotate", "list", "search", "show"})
_RESOLVE_LIST_FLAGS = frozenset({"-l", "--list"})


def lookup_top_level(command: str) -> CommandSpec | None:
    """Return metadata for a known top-level command name."""
    return _SPECS_BY_NAME.get(command)


def command_safety(tokens: Sequence[str]) -> SafetyTier:
    """Classify command safety with subcommand-aware overrides.

    Empty input is `A`, unknown commands are `B`. Overrides escalate destructive subcommands
    such as `git push` and `operation restore` to `C`.
    """
    if not tokens:
        return SafetyTier.A

    first = tokens[0]
    sub = tokens[1] if len(tokens) > 1 else None

    if first == "git":
        return SafetyTier.C if sub == "push" else SafetyTier.B
    if first == "operation":
        if sub in ("restore", "revert"):
            return SafetyTier.C
        if sub in ("log", "show", "diff"):
            return SafetyTier.A
        return SafetyTier.B
    if first == "workspace":
        return SafetyTier.A if sub in ("list", "root") else SafetyTier.B
    if first == "resolve":
        return SafetyTier.A if any(token in _RESOLVE_LIST_FLAGS for token in tokens) else SafetyTier.B
    if first == "bookmark":
        if sub in _BOOKMARK_DESTRUCTIVE:
            return SafetyTier.C
        if sub in _BOOKMARK_MUTATING:
            return SafetyTier.B
        return SafetyTier.A
    if first == "file":
        return SafetyTier.A if sub in _FILE_READ_ONLY else SafetyTier.B
    if first == "tag":
        return SafetyTier.A if sub == "list" else SafetyTier.B

    spec = lookup_top_level(first)
    return spec.tier if spec is not None else SafetyTier.B


def is_dangerous(tokens: Sequence[str]) -> bool:
    """Only tier C commands require explicit confirmation."""
    return command_safety(tokens) is SafetyTier.C


# Command registry view

_HELP_GROUPS: tuple[tuple[str, tuple[tuple[str, str, str, str], ...]], ...] = (
    (
        "Navigation",
        (
            ("j/k, Up/Down", "move by item", "native", "A"),
            ("PgUp/PgDn", "page by viewport", "native", "A"),
            ("Ctrl+u/d", "page up/down", "native", "A"),
            ("g/G, Home/End", "jump top/bottom", "native", "A"),
            ("Left/Right", "screen history", "native", "A"),
            (":", "run exact command", "native", "A"),
        ),
    ),
    (
        "Views",
        (
            ("l", "log history", "native", "A"),
            ("s", "status working copy", "native", "A"),
            ("Enter", "show selected revision", "native", "A"),
            ("d", "diff selected revision", "native", "A"),
            ("o", "operation log", "guided", "B"),
            ("L", "bookmark list", "guided", "B"),
            ("v", "resolve list", "guided", "B"),
            ("f", "file list", "guided", "B"),
            ("t", "tag list", "guided", "B"),
            ("w", "workspace root", "passthrough", "A"),
            ("?", "commands help", "native", "A"),
            ("K", "keys keymap", "native", "A"),
        ),
    ),
    (
        "Actions",
        (
            ("n", "new change", "guided", "B"),
            ("c", "commit", "guided", "B"),
            ("D", "describe selected", "guided", "B"),
            ("b", "bookmark set", "guided", "C"),
            ("F / P", "git fetch / push", "guided", "B/C"),
            ("B/S/X", "rebase/squash/split", "guided", "C"),
            ("a", "abandon selected", "guided", "C"),
            ("u/U", "undo / redo", "guided", "C"),
            ("p", "toggle log patch", "native", "A"),
        ),
    ),
    (
        "Safety",
        (
            ("y", "accept confirm prompt", "native", "C"),
            ("n / Esc", "reject or cancel", "native", "A"),
            ("p", "run preview instead", "native", "A"),
            ("Tier C", "explicit confirmation", "native", "C"),
        ),
    ),
)

_COMMON_COMMANDS = frozenset(
    {
        "log", "status", "show", "diff", "operation", "bookmark", "file", "resolve", "tag", "root",
        "git", "help", "new", "commit", "describe", "rebase", "squash", "split", "abandon", "undo",
        "redo",
    }
)

_TOP_LEVEL_DEFAULT_ALIASES: dict[str, str] = {
    "bookmark": "b",
    "commit": "ci",
    "describe": "desc",
    "operation": "op",
    "status": "st",
}

_LOCAL_VIEWS: tuple[tuple[str, str, str], ...] = (
    ("aliases (local)", "native", "A"),
    ("keys (local)", "native", "A"),
    ("keymap (local)", "native", "A"),
)


def command_overview_lines(query: str | None = None) -> list[str]:
    """Render the in-app command registry, optionally filtered by command or alias."""
    needle = (query or "").strip().lower() or None

    lines = ["jk command registry", "", "common flows (grouped, condensed)", ""]
    _push_help_groups(lines, needle)
    lines.append("")
    _push_registry(lines, needle)

    if needle is None:
        lines.extend(
            [
                "",
                "aliases: b ci desc op st gf gp rbm rbt jjgf jjgp jjrbm jjst jjl",
                "tips: :aliases shows mappings, :keys shows active keybinds",
                "defaults: bookmark/file/tag/workspace -> list, resolve -> resolve -l, operation -> log",
            ]
        )
    return lines


def _matches(needle: str | None, *values: str) -> bool:
    if needle is None:
        return True
    return any(needle in value.lower() for value in values)


def _push_help_groups(lines: list[str], needle: str | None) -> None:
    matched_any = False
    for title, entries in _HELP_GROUPS:
        rows = [
            f"{key:<12} {flow:<22} {mode:<10} {tier}"
            for key, flow, mode, tier in entries
            if _matches(needle, title, key, flow, mode, tier)
        ]
        if not rows:
            continue
        matched_any = True
        lines.append(f"{title}:")
        lines.append(f"{'key':<12} {'flow':<22} {'mode':<10} tier")
        lines.append("-" * 50)
        lines.extend(_two_columns(rows, 50))
        lines.append("")

    if not matched_any:
        lines.append("(no matching flows)")


def _push_registry(lines: list[str], needle: str | None) -> None:
    lines.append("all top-level commands (common first, condensed)")

    specs = sorted(TOP_LEVEL_SPECS, key=lambda spec: (spec.name not in _COMMON_COMMANDS, spec.name))
    entries: list[str] = []
    for spec in specs:
        alias = _TOP_LEVEL_DEFAULT_ALIASES.get(spec.name)
        display = f"{spec.name} ({alias})" if alias else spec.name
        if _matches(needle, display, spec.mode.value, spec.tier.value):
            entries.append(f"{display:<18} {spec.mode.value:<10} {spec.tier.value}")

    for name, mode, tier in _LOCAL_VIEWS:
        if _matches(needle, name, mode, tier):
            entries.append(f"{name:<18} {mode:<10} {tier}")

    if not entries:
        lines.append("(no matching commands)")
        return

    lines.append(f"{'command':<18} {'mode':<10} tier")
    lines.append("-" * 32)
    lines.extend(_two_columns(entries, 40))


def _two_columns(entries: list[str], width: int) -> list[str]:
    packed = []
    for index in range(0, len(entries), 2):
        pair = entries[index : index + 2]
        if len(pair) == 1:
            packed.append(pair[0])
        else:
            packed.append(f"{pair[0]:<{width}}  {pair[1]}")
    return packed
