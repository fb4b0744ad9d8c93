"""Locally rendered screens that never call `jj`."""

from __future__ import annotations

from jk.keybinds import KeybindConfig, key_labels

_ACTION_DESCRIPTIONS: dict[str, str] = {
    "normal.quit": "quit",
    "normal.refresh": "rerun last command",
    "normal.up": "previous item",
    "normal.down": "next item",
    "normal.page_up": "page up",
    "normal.page_down": "page down",
    "normal.top": "jump to top",
    "normal.bottom": "jump to bottom",
    "normal.back": "previous screen",
    "normal.forward": "next screen",
    "normal.command_mode": "command line",
    "normal.help": "command registry",
    "normal.keymap": "keymap",
    "normal.aliases": "alias catalog",
    "normal.show": "show selected revision",
    "normal.diff": "diff selected revision",
    "normal.status": "status",
    "normal.log": "log",
    "normal.operation_log": "operation log",
    "normal.bookmark_list": "bookmark list",
    "normal.resolve_list": "resolve list",
    "normal.file_list": "file list",
    "normal.tag_list": "tag list",
    "normal.root": "workspace root",
    "normal.repeat_last": "repeat last command",
    "normal.toggle_patch": "toggle log patch",
    "normal.fetch": "git fetch",
    "normal.push": "git push",
    "normal.rebase_main": "rebase onto main",
    "normal.rebase_trunk": "rebase onto trunk()",
    "normal.new": "new change",
    "normal.next": "next change",
    "normal.prev": "previous change",
    "normal.edit": "edit selected",
    "normal.commit": "commit",
    "normal.describe": "describe selected",
    "normal.bookmark_set": "bookmark set",
    "normal.abandon": "abandon selected",
    "normal.rebase": "rebase selected",
    "normal.squash": "squash selected",
    "normal.split": "split selected",
    "normal.restore": "restore into selected",
    "normal.revert": "revert selected",
    "normal.undo": "undo",
    "normal.redo": "redo",
    "command.submit": "run command",
    "command.cancel": "cancel input",
    "command.backspace": "delete character",
    "command.history_prev": "older history entry",
    "command.history_next": "newer history entry",
    "confirm.accept": "run dangerous command",
    "confirm.reject": "cancel dangerous command",
    "confirm.preview": "run preview instead",
}


def keymap_overview_lines(config: KeybindConfig, query: str | None = None) -> list[str]:
    """Render active keybindings, optionally filtered by action, key or description."""
    needle = (query or "").strip().lower()
    lines = [
        "jk keymap",
        f"{'action':<24} {'keys':<18} does",
        "-" * 60,
    ]
    for action, keys in config.entries():
        labels = key_labels(keys)
        description = _ACTION_DESCRIPTIONS.get(action, "")
        if needle and not any(needle in value.lower() for value in (action, labels, description)):
            continue
        lines.append(f"{action:<24} {labels:<18} {description}".rstrip())
    return lines
