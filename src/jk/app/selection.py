"""Revision selection helpers for log-like views.

Rendered output is mapped back to revisions so selection-driven commands keep working across
wrapped descriptions, graph connector lines and diff bodies.
"""

from __future__ import annotations

import re
import string
from collections.abc import Sequence

from loguru import logger

from jk.errors import JjLaunchError
from jk.jj import Runner

RowRevisionMap = list[str | None]

METADATA_TEMPLATE = 'change_id.short() ++ " " ++ commit_id.short()'

_ANSI_ESCAPE = re.compile(r"\x1b\[[^@-~]*[@-~]?")
_CHANGE_ID = re.compile(r"[a-z]+(?:/\d+)?")
_GRAPH_CONNECTORS = frozenset("│┃┆┊┄┈─┬┴┼╭╮╯╰|/\\")
_GRAPH_NODES = frozenset("@○◉●◆◌xX*")
_HEX_DIGITS = frozenset(string.hexdigits)


def derive_row_revision_map(tokens: Sequence[str], lines: Sequence[str], runner: Runner) -> RowRevisionMap:
    """Build a line-indexed revision map for rendered output.

    Only `log` output is mapped. `runner` should disable color; it is used for one metadata lookup
    that lists the same revisions without graph glyphs.
    """
    metadata_tokens = metadata_log_tokens(tokens)
    if metadata_tokens is None:
        return [None] * len(lines)

    try:
        result = runner(metadata_tokens)
    except JjLaunchError as exc:
        logger.warning("selection.metadata.error command={} error={}", " ".join(metadata_tokens), exc)
        revisions: list[str] = []
    else:
        revisions = parse_log_revisions(result.output) if result.success else []
    return build_row_revision_map(lines, revisions)


def metadata_log_tokens(tokens: Sequence[str]) -> list[str] | None:
    """Derive a compact, graph-free variant of a `log` command for revision extraction."""
    if not tokens or tokens[0] != "log":
        return None

    metadata = ["log", "--no-graph", "-T", METADATA_TEMPLATE]
    skip_value = False
    for token in tokens[1:]:
        if skip_value:
            skip_value = False
            continue
        if token in ("-T", "--template"):
            skip_value = True
            continue
        if token.startswith(("--template=", "-T")):
            continue
        if token in ("--graph", "--no-graph", "-p", "--patch"):
            continue
        metadata.append(token)
    return metadata


def parse_log_revisions(lines: Sequence[str]) -> list[str]:
    revisions = []
    for line in lines:
        words = strip_ansi(line).split()
        if not words:
            continue
        token = trim_revision_token(words[0])
        if is_change_id(token) or is_commit_id(token):
            revisions.append(token)
    return revisions


def build_row_revision_map(lines: Sequence[str], ordered_revisions: Sequence[str]) -> RowRevisionMap:
    """Associate each rendered line with the nearest revision above it.

    An explicit id is adopted only when it appears in `ordered_revisions`, or when that list is
    empty. Graph rows without an explicit id consume the next unclaimed metadata revision.
    """
    positions = {revision: index for index, revision in enumerate(ordered_revisions)}
    mapping: RowRevisionMap = []
    current: str | None = None
    next_ordinal = 0

    for line in lines:
        explicit = extract_revision(line)
        if explicit is not None:
            if explicit in positions:
                current = explicit
                next_ordinal = max(positions[explicit] + 1, next_ordinal)
            elif not ordered_revisions:
                current = explicit
        elif looks_like_graph_commit_row(line) and next_ordinal < len(ordered_revisions):
            current = ordered_revisions[next_ordinal]
            next_ordinal += 1
        mapping.append(current)
    return mapping


def looks_like_graph_commit_row(line: str) -> bool:
    """Return whether the first non-connector glyph is a graph node marker."""
    for char in strip_ansi(line):
        if char.isspace() or char in _GRAPH_CONNECTORS:
            continue
        return char in _GRAPH_NODES
    return False


def extract_revision(line: str) -> str | None:
    """Extract the revision shown on one rendered line.

    A change id wins over the commit id that follows it; lines without a commit id yield nothing.
    """
    tokens = [token for token in map(trim_revision_token, strip_ansi(line).split()) if token]
    commit_index = next((index for index, token in enumerate(tokens) if is_commit_id(token)), None)
    if commit_index is None:
        return None
    for token in tokens[:commit_index]:
        if is_change_id(token):
            return token
    return tokens[commit_index]


def trim_revision_token(token: str) -> str:
    start, end = 0, len(token)
    while start < end and not _is_revision_char(token[start]):
        start += 1
    while end > start and not _is_revision_char(token[end - 1]):
        end -= 1
    return token[start:end]


def _is_revision_char(char: str) -> bool:
    return char == "/" or (char.isascii() and char.isalnum())


def is_commit_id(value: str) -> bool:
    return len(value) >= 8 and all(char in _HEX_DIGITS for char in value)


def is_change_id(value: str) -> bool:
    return len(value) >= 8 and _CHANGE_ID.fullmatch(value) is not None


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def trim_to_width(text: str, width: int) -> str:
    """Trim to `width` visible characters without splitting escape sequences.

    Escapes directly after the cut are kept so a trailing reset still closes the styled span.
    """
    if width <= 0:
        return ""

    parts: list[str] = []
    visible = 0
    index = 0
    while index < len(text):
        escape = _ANSI_ESCAPE.match(text, index)
        if escape is not None:
            parts.append(escape.group())
            index = escape.end()
            continue
        if visible >= width:
            index += 1
            break
        parts.append(text[index])
        visible += 1
        index += 1

    if visible >= width:
        while (escape := _ANSI_ESCAPE.match(text, index)) is not None:
            parts.append(escape.group())
            index = escape.end()
    return "".join(parts)


# Cursor navigation


def item_boundaries(lines: Sequence[str], row_map: Sequence[str | None], history_view: bool) -> list[int]:
    """Return the line indexes where a logical item starts.

    An empty result means navigation falls back to plain line steps.
    """
    boundaries = []
    previous: str | None = None
    for index, (line, revision) in enumerate(zip(lines, row_map)):
        if revision is not None and (revision != previous or (history_view and looks_like_graph_commit_row(line))):
            boundaries.append(index)
        previous = revision

    if not boundaries and history_view:
        boundaries = [index for index, line in enumerate(lines) if looks_like_graph_commit_row(line)]
    return boundaries


def step_target(cursor: int, line_count: int, boundaries: Sequence[int], delta: int) -> int:
    """Move one item (or one line) up or down."""
    if not boundaries:
        return _clamp(cursor + delta, line_count)
    if delta > 0:
        return next((boundary for boundary in boundaries if boundary > cursor), cursor)
    return next((boundary for boundary in reversed(boundaries) if boundary < cursor), cursor)


def page_target(cursor: int, line_count: int, boundaries: Sequence[int], step: int, forward: bool) -> int:
    """Move about one viewport, landing on the nearest item boundary."""
    if not boundaries:
        return _clamp(cursor + step if forward else cursor - step, line_count)
    if forward:
        target = next((boundary for boundary in boundaries if boundary >= cursor + step), boundaries[-1])
        return max(target, cursor)
    return next((boundary for boundary in reversed(boundaries) if boundary <= cursor - step), boundaries[0])


def _clamp(index: int, line_count: int) -> int:
    if line_count <= 0:
        return 0
    return min(max(index, 0), line_count - 1)
