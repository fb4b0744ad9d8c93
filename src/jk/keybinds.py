"""Keybinding configuration loading and validation.

Defaults live on the models below. User overrides are read from a YAML file and overlay the
defaults section by section, so a file only needs to list the actions it changes:

    normal:
      push: ["P", "Ctrl+p"]
    confirm:
      accept: ["y", "Enter"]

Key tokens are a single character, a named key (`Enter`, `Esc`, `Backspace`, `Up`, `Down`,
`Left`, `Right`, `Home`, `End`, `PageUp`, `PageDown`, `Tab`) or `Ctrl+<char>`. They are stored as
prompt_toolkit key names (`c-d`, `pageup`, `escape`).
"""

from __future__ import annotations

from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jk.errors import KeybindConfigError

NAMED_KEYS: dict[str, str] = {
    "Enter": "enter",
    "Esc": "escape",
    "Backspace": "backspace",
    "Up": "up",
    "Down": "down",
    "Left": "left",
    "Right": "right",
    "Home": "home",
    "End": "end",
    "PageUp": "pageup",
    "PageDown": "pagedown",
    "Tab": "tab",
}
_KEY_LABELS = {value: label for label, value in NAMED_KEYS.items()}
_CTRL_PREFIX = "Ctrl+"
# Terminals send these as Backspace, Enter and Tab, so they never arrive as Ctrl keys.
_TERMINAL_ALIASED_CTRL = {"h": "Backspace", "m": "Enter", "j": "Enter", "i": "Tab"}


def parse_key_token(token: str) -> str:
    """Convert one configured key token into a prompt_toolkit key name."""
    if token in NAMED_KEYS:
        return NAMED_KEYS[token]
    if token.startswith(_CTRL_PREFIX) and len(token) == len(_CTRL_PREFIX) + 1:
        letter = token[-1].lower()
        if letter in _TERMINAL_ALIASED_CTRL:
            raise ValueError(
                f"keybinding `{token}` is indistinguishable from {_TERMINAL_ALIASED_CTRL[letter]} in a terminal"
            )
        return f"c-{letter}"
    if len(token) == 1:
        return token
    raise ValueError(f"unknown keybinding `{token}`")


def key_label(key: str) -> str:
    """Render a stored key name the way it is written in config files."""
    if key in _KEY_LABELS:
        return _KEY_LABELS[key]
    if key.startswith("c-") and len(key) == 3:
        return f"{_CTRL_PREFIX}{key[-1]}"
    return key


def key_labels(keys: list[str]) -> str:
    return ", ".join(key_label(key) for key in keys)


class _KeySection(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_default=True)

    @field_validator("*", mode="after")
    @classmethod
    def _parse_tokens(cls, value: list[str]) -> list[str]:
        return [parse_key_token(token) for token in value]


def _keys(*tokens: str) -> list[str]:
    return Field(default_factory=lambda: list(tokens))


class NormalKeys(_KeySection):
    """Normal-mode bindings: navigation, views and high-frequency mutations."""

    quit: list[str] = _keys("q")
    refresh: list[str] = _keys("r")
    up: list[str] = _keys("k", "Up")
    down: list[str] = _keys("j", "Down")
    page_up: list[str] = _keys("PageUp", "Ctrl+u")
    page_down: list[str] = _keys("PageDown", "Ctrl+d")
    top: list[str] = _keys("g", "Home")
    bottom: list[str] = _keys("G", "End")
    back: list[str] = _keys("Left", "h")
    forward: list[str] = _keys("Right")
    command_mode: list[str] = _keys(":")
    help: list[str] = _keys("?")
    keymap: list[str] = _keys("K")
    aliases: list[str] = _keys("A")
    show: list[str] = _keys("Enter")
    diff: list[str] = _keys("d")
    status: list[str] = _keys("s")
    log: list[str] = _keys("l")
    operation_log: list[str] = _keys("o")
    bookmark_list: list[str] = _keys("L")
    resolve_list: list[str] = _keys("v")
    file_list: list[str] = _keys("f")
    tag_list: list[str] = _keys("t")
    root: list[str] = _keys("w")
    repeat_last: list[str] = _keys(".")
    toggle_patch: list[str] = _keys("p")
    fetch: list[str] = _keys("F")
    push: list[str] = _keys("P")
    rebase_main: list[str] = _keys("M")
    rebase_trunk: list[str] = _keys("T")
    new: list[str] = _keys("n")
    next: list[str] = _keys("]")
    prev: list[str] = _keys("[")
    edit: list[str] = _keys("e")
    commit: list[str] = _keys("c")
    describe: list[str] = _keys("D")
    bookmark_set: list[str] = _keys("b")
    abandon: list[str] = _keys("a")
    rebase: list[str] = _keys("B")
    squash: list[str] = _keys("S")
    split: list[str] = _keys("X")
    restore: list[str] = _keys("O")
    revert: list[str] = _keys("R")
    undo: list[str] = _keys("u")
    redo: list[str] = _keys("U")


class CommandKeys(_KeySection):
    """Command-mode and prompt-mode editing bindings."""

    submit: list[str] = _keys("Enter")
    cancel: list[str] = _keys("Esc")
    backspace: list[str] = _keys("Backspace")
    history_prev: list[str] = _keys("Up")
    history_next: list[str] = _keys("Down")


class ConfirmKeys(_KeySection):
    accept: list[str] = _keys("y")
    reject: list[str] = _keys("n", "Esc")
    preview: list[str] = _keys("p")


class KeybindConfig(BaseModel):
    """Resolved keybindings for every input mode."""

    model_config = ConfigDict(extra="forbid")

    normal: NormalKeys = Field(default_factory=NormalKeys)
    command: CommandKeys = Field(default_factory=CommandKeys)
    confirm: ConfirmKeys = Field(default_factory=ConfirmKeys)

    def entries(self) -> list[tuple[str, list[str]]]:
        """Return `(section.action, keys)` pairs in declaration order."""
        pairs: list[tuple[str, list[str]]] = []
        for section_name in type(self).model_fields:
            section = getattr(self, section_name)
            for action in type(section).model_fields:
                pairs.append((f"{section_name}.{action}", getattr(section, action)))
        return pairs


def load_keybinds(path: Path | None = None) -> KeybindConfig:
    """Load defaults plus optional overrides from `path`.

    A missing file means defaults. Read, parse and validation failures raise
    `KeybindConfigError` with the path in the message.
    """
    if path is None or not path.is_file():
        return KeybindConfig()

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise KeybindConfigError(f"{path}: cannot read keybind config: {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise KeybindConfigError(f"{path}: keybind config must be a mapping of sections")

    try:
        config = KeybindConfig.model_validate(payload)
    except ValidationError as exc:
        raise KeybindConfigError(f"{path}: invalid keybind config: {exc}") from exc

    logger.info("keybinds.loaded path={}", path)
    return config
