"""Interactive session state and key handling.

Key events are dispatched by mode and can trigger navigation, local views, planning, guided
prompts, confirmation gating or direct execution. One `App` owns all mutable session state, so
tests build independent sessions with fake runners.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from jk.app.history import CommandHistory, ViewHistory
from jk.app.preview import confirmation_preview_tokens, toggle_patch_flag
from jk.app.selection import (
    RowRevisionMap,
    derive_row_revision_map,
    extract_revision,
    item_boundaries,
    page_target,
    step_target,
    trim_to_width,
)
from jk.app.views import keymap_overview_lines
from jk.commands import is_dangerous
from jk.errors import JjLaunchError, PromptInputError
from jk.flow import Execute, FlowAction, Prompt, PromptKind, PromptRequest, Quit, Render, Status, plan_command
from jk.jj import Runner
from jk.keybinds import KeybindConfig

QUIT_KEY = "c-c"
DEFAULT_COMMAND = ["log"]


class Mode(str, Enum):
    NORMAL = "normal"
    COMMAND = "command"
    CONFIRM = "confirm"
    PROMPT = "prompt"


@dataclass
class PromptState:
    """Active guided prompt: the request it came from plus the text typed so far."""

    kind: PromptKind
    label: str
    allow_empty: bool
    input: str = ""


def is_navigable_view_tokens(tokens: Sequence[str]) -> bool:
    """Return whether canonical tokens open a read-only screen worth keeping in back/forward history."""
    if not tokens:
        return False
    first = tokens[0]
    sub = tokens[1] if len(tokens) > 1 else None
    if first in ("log", "status", "show", "diff", "root", "version", "evolog", "interdiff"):
        return True
    if first == "operation":
        return sub in ("log", "show", "diff")
    if first in ("bookmark", "tag"):
        return sub == "list"
    if first == "resolve":
        return "-l" in tokens or "--list" in tokens
    if first == "file":
        return sub in ("list", "show", "search", "annotate")
    if first == "workspace":
        return sub in ("list", "root")
    return False


class App:
    """Interactive `jj` session driven one key at a time."""

    def __init__(
        self,
        keybinds: KeybindConfig | None = None,
        *,
        runner: Runner,
        metadata_runner: Runner | None = None,
        viewport_rows: int = 20,
    ) -> None:
        self.keybinds = keybinds or KeybindConfig()
        self.runner = runner
        self.metadata_runner = metadata_runner or runner

        self.mode = Mode.NORMAL
        self.lines: list[str] = ["Initializing jk..."]
        self.row_revision_map: RowRevisionMap = []
        self.cursor = 0
        self.scroll = 0
        self.viewport_rows = viewport_rows
        self.status_line = "Press : for commands, q to quit"

        self.command_input = ""
        self.history = CommandHistory()
        self.views = ViewHistory()

        self.pending_confirm: list[str] | None = None
        self.pending_prompt: PromptState | None = None
        self.last_command: list[str] = list(DEFAULT_COMMAND)
        self.last_log_tokens: list[str] = list(DEFAULT_COMMAND)
        self.should_quit = False

        self._normal_actions: list[tuple[list[str], Callable[[], None]]] = self._build_normal_actions()

    # Startup

    def start(self, startup_tokens: Sequence[str] = ()) -> None:
        """Apply the command given on the process command line, or open `log`."""
        if not startup_tokens:
            self.apply_flow_action(Execute(list(DEFAULT_COMMAND)))
            return

        command = shlex.join(startup_tokens)
        action = self.local_view_action(command)
        if action is None:
            action = plan_command(command, None)
        self.apply_flow_action(action)

    # Key dispatch

    def handle_key(self, key: str) -> None:
        """Dispatch one key according to the current mode.

        `key` is a prompt_toolkit key name (`up`, `c-d`, `enter`) or a single typed character.
        `Ctrl+C` always quits.
        """
        if key == QUIT_KEY:
            self.should_quit = True
            return

        if self.mode is Mode.NORMAL:
            self._handle_normal_key(key)
        elif self.mode is Mode.COMMAND:
            self._handle_command_key(key)
        elif self.mode is Mode.CONFIRM:
            self._handle_confirm_key(key)
        else:
            self._handle_prompt_key(key)

    def _build_normal_actions(self) -> list[tuple[list[str], Callable[[], None]]]:
        # Order defines precedence when user bindings overlap.
        keys = self.keybinds.normal

        def run(command: str) -> Callable[[], None]:
            return lambda: self.execute_command_line(command)

        return [
            (keys.quit, self._quit),
            (keys.refresh, self._rerun_last),
            (keys.command_mode, self._enter_command_mode),
            (keys.help, run("commands")),
            (keys.keymap, run("keys")),
            (keys.aliases, run("aliases")),
            (keys.repeat_last, self._rerun_last),
            (keys.up, lambda: self.move_cursor(-1)),
            (keys.down, lambda: self.move_cursor(1)),
            (keys.page_up, lambda: self.page_cursor(forward=False)),
            (keys.page_down, lambda: self.page_cursor(forward=True)),
            (keys.top, self._jump_top),
            (keys.bottom, self._jump_bottom),
            (keys.back, self.navigate_view_back),
            (keys.forward, self.navigate_view_forward),
            (keys.show, lambda: self._run_on_selection(lambda revision: ["show", revision])),
            (keys.diff, lambda: self._run_on_selection(lambda revision: ["diff", "-r", revision])),
            (keys.status, run("status")),
            (keys.log, run("log")),
            (keys.operation_log, run("operation log")),
            (keys.bookmark_list, run("bookmark list")),
            (keys.resolve_list, run("resolve -l")),
            (keys.file_list, run("file list")),
            (keys.tag_list, run("tag list")),
            (keys.root, run("root")),
            (keys.toggle_patch, self._toggle_patch),
            (keys.fetch, run("gf")),
            (keys.push, run("gp")),
            (keys.rebase_main, run("rbm")),
            (keys.rebase_trunk, run("rbt")),
            (keys.new, run("new")),
            (keys.next, run("next")),
            (keys.prev, run("prev")),
            (keys.edit, run("edit")),
            (keys.commit, run("commit")),
            (keys.describe, run("describe")),
            (keys.bookmark_set, run("bookmark set")),
            (keys.abandon, run("abandon")),
            (keys.rebase, run("rebase")),
            (keys.squash, run("squash")),
            (keys.split, run("split")),
            (keys.restore, run("restore")),
            (keys.revert, run("revert")),
            (keys.undo, run("undo")),
            (keys.redo, run("redo")),
        ]

    def _handle_normal_key(self, key: str) -> None:
        for bound, action in self._normal_actions:
            if key in bound:
                action()
                return

    def _handle_command_key(self, key: str) -> None:
        keys = self.keybinds.command
        if key in keys.cancel:
            self.mode = Mode.NORMAL
            self.status_line = "Command canceled"
        elif key in keys.history_prev:
            text = self.history.previous(self.command_input)
            if text is not None:
                self.command_input = text
        elif key in keys.history_next:
            text = self.history.next()
            if text is not None:
                self.command_input = text
        elif key in keys.backspace:
            self.history.index = None
            self.command_input = self.command_input[:-1]
        elif key in keys.submit:
            command = self.command_input
            self.history.record(command)
            self.mode = Mode.NORMAL
            self.command_input = ""
            self.history.reset()
            self.execute_command_line(command)
        elif _is_text(key):
            self.history.index = None
            self.command_input += key

    def _handle_confirm_key(self, key: str) -> None:
        keys = self.keybinds.confirm
        if key in keys.reject:
            self.pending_confirm = None
            self.mode = Mode.NORMAL
            self.status_line = "Command canceled"
        elif key in keys.accept and self.pending_confirm is not None:
            tokens, self.pending_confirm = self.pending_confirm, None
            self.mode = Mode.NORMAL
            self.execute_tokens(tokens)
        elif key in keys.preview and self.pending_confirm is not None:
            preview = confirmation_preview_tokens(self.pending_confirm)
            if preview is None:
                self.status_line = "No preview available for this command"
                return
            self.pending_confirm = None
            self.mode = Mode.NORMAL
            self.execute_tokens(preview)

    def _handle_prompt_key(self, key: str) -> None:
        keys = self.keybinds.command
        prompt = self.pending_prompt
        if prompt is None:
            self.mode = Mode.NORMAL
            self.status_line = "Prompt unavailable"
            return

        if key in keys.cancel:
            self.pending_prompt = None
            self.mode = Mode.NORMAL
            self.status_line = "Prompt canceled"
        elif key in keys.backspace:
            prompt.input = prompt.input[:-1]
        elif key in keys.submit:
            self._submit_prompt(prompt)
        elif _is_text(key):
            prompt.input += key

    def _submit_prompt(self, prompt: PromptState) -> None:
        text = prompt.input.strip()
        if not text and not prompt.allow_empty:
            self.status_line = "Input required for this flow"
            return

        try:
            tokens = prompt.kind.resolve(text)
        except PromptInputError as exc:
            self.status_line = exc.message
            return

        self.pending_prompt = None
        self.mode = Mode.NORMAL
        self.execute_with_confirmation(tokens)

    # Planning and execution

    def execute_command_line(self, command: str) -> None:
        """Run one command-mode line through local views or the planner."""
        trimmed = command.strip()
        action = self.local_view_action(command)
        if action is None:
            action = plan_command(command, self.selected_revision())
        logger.debug("session.plan command={} action={}", trimmed, type(action).__name__)
        if isinstance(action, Render) and trimmed:
            self.views.record_visit(trimmed)
        self.apply_flow_action(action)

    def local_view_action(self, command: str) -> FlowAction | None:
        """Render the keymap locally; it depends on session keybinds, so the planner never sees it."""
        words = command.split()
        if not words or words[0] not in ("keys", "keymap"):
            return None

        query = " ".join(words[1:])
        if not query:
            return Render(keymap_overview_lines(self.keybinds), "Showing keymap")
        return Render(keymap_overview_lines(self.keybinds, query), f"Showing keymap for `{query}`")

    def apply_flow_action(self, action: FlowAction) -> None:
        if isinstance(action, Quit):
            self.should_quit = True
        elif isinstance(action, Render):
            self._show_lines(action.lines, [None] * len(action.lines))
            self.status_line = action.status
        elif isinstance(action, Status):
            self.status_line = action.message
        elif isinstance(action, Execute):
            self.execute_with_confirmation(action.tokens)
        elif isinstance(action, Prompt):
            self.start_prompt(action.request)
        else:
            raise TypeError(f"unhandled flow action: {action!r}")

    def start_prompt(self, request: PromptRequest) -> None:
        self.pending_prompt = PromptState(kind=request.kind, label=request.label, allow_empty=request.allow_empty)
        self.mode = Mode.PROMPT
        self.status_line = f"Prompt: {request.label}"

    def execute_with_confirmation(self, tokens: list[str]) -> None:
        """Run tokens now, or hold them in confirm mode when they are tier C."""
        if not is_dangerous(tokens):
            self.execute_tokens(tokens)
            return

        command = " ".join(tokens)
        self.pending_confirm = list(tokens)
        self.mode = Mode.CONFIRM
        self.status_line = f"Confirm dangerous command: jj {command}"
        logger.info("session.confirm.pending command={}", command)

        lines = [f"Confirm: jj {command}"]
        preview = confirmation_preview_tokens(tokens)
        if preview is not None:
            output = self._run_preview(preview)
            if output is not None:
                lines.extend(["", f"Preview: jj {' '.join(preview)}", *output])
        self._show_lines(lines, [None] * len(lines))

    def _run_preview(self, tokens: list[str]) -> list[str] | None:
        # A failed preview never blocks confirmation.
        try:
            result = self.runner(tokens)
        except JjLaunchError as exc:
            logger.warning("session.preview.error command={} error={}", " ".join(tokens), exc)
            return None
        return result.output if result.success else None

    def execute_tokens(self, tokens: list[str]) -> None:
        """Run `jj` and replace the screen with its output.

        Launch failures propagate; a non-zero exit only changes the status line.
        """
        result = self.runner(tokens)
        command = result.command
        if command[:1] == ["log"]:
            self.last_log_tokens = list(command)

        row_map = derive_row_revision_map(command, result.output, self.metadata_runner)
        self._show_lines(list(result.output), row_map)
        self.last_command = list(command)
        outcome = "ok" if result.success else "error"
        self.status_line = f"{outcome}: jj {' '.join(command)}"

        if is_navigable_view_tokens(command):
            self.views.record_visit(shlex.join(command))

    def _show_lines(self, lines: list[str], row_map: RowRevisionMap) -> None:
        self.lines = lines
        self.row_revision_map = row_map
        self.cursor = 0
        self.scroll = 0

    # Normal-mode helpers

    def _quit(self) -> None:
        self.should_quit = True

    def _rerun_last(self) -> None:
        # Tier C commands go back through confirmation on every re-run.
        self.execute_with_confirmation(list(self.last_command) or list(DEFAULT_COMMAND))

    def _enter_command_mode(self) -> None:
        self.mode = Mode.COMMAND
        self.command_input = ""
        self.history.reset()

    def _run_on_selection(self, build: Callable[[str], list[str]]) -> None:
        revision = self.selected_revision()
        if revision is None:
            self.status_line = "No revision selected on this line"
            return
        self.execute_with_confirmation(build(revision))

    def _toggle_patch(self) -> None:
        if self.last_log_tokens[:1] != ["log"]:
            self.status_line = "Patch toggle is available after running log"
            return
        self.execute_tokens(toggle_patch_flag(self.last_log_tokens))

    def navigate_view_back(self) -> None:
        self.status_line = self.views.back(self.execute_command_line)

    def navigate_view_forward(self) -> None:
        self.status_line = self.views.forward(self.execute_command_line)

    # Cursor and selection

    def _boundaries(self) -> list[int]:
        return item_boundaries(self.lines, self.row_revision_map, self.last_command[:1] == ["log"])

    def move_cursor(self, delta: int) -> None:
        self.cursor = step_target(self.cursor, len(self.lines), self._boundaries(), delta)
        self.ensure_cursor_visible()

    def page_cursor(self, *, forward: bool) -> None:
        step = max(self.viewport_rows - 1, 1)
        self.cursor = page_target(self.cursor, len(self.lines), self._boundaries(), step, forward)
        self.ensure_cursor_visible()

    def _jump_top(self) -> None:
        self.cursor = 0
        self.scroll = 0

    def _jump_bottom(self) -> None:
        if self.lines:
            self.cursor = len(self.lines) - 1
            self.ensure_cursor_visible()

    def ensure_cursor_visible(self, content_height: int | None = None) -> None:
        height = max(content_height or self.viewport_rows, 1)
        if self.cursor < self.scroll:
            self.scroll = self.cursor
        elif self.cursor >= self.scroll + height:
            self.scroll = self.cursor - (height - 1)

    def selected_revision(self) -> str | None:
        """Return the revision owning the cursor line, scanning upward."""
        for index in range(min(self.cursor, len(self.row_revision_map) - 1), -1, -1):
            revision = self.row_revision_map[index]
            if revision is not None:
                return revision
        for index in range(min(self.cursor, len(self.lines) - 1), -1, -1):
            revision = extract_revision(self.lines[index])
            if revision is not None:
                return revision
        return None

    # Rendering

    def render_frame(self, width: int, height: int) -> list[str]:
        """Build header, visible content rows and mode footer, each trimmed to `width`."""
        content_height = max(height - 2, 0)
        self.viewport_rows = max(content_height, 1)
        self.ensure_cursor_visible(self.viewport_rows)

        rows = [trim_to_width(f"jk [{self.mode.value}] :: jj {' '.join(self.last_command)}", width)]
        for offset in range(content_height):
            index = self.scroll + offset
            if index < len(self.lines):
                marker = ">" if index == self.cursor and self.mode is Mode.NORMAL else " "
                rows.append(trim_to_width(f"{marker} {self.lines[index]}", width))
            else:
                rows.append("")
        rows.append(trim_to_width(self.footer_text(), width))
        return rows

    def footer_text(self) -> str:
        if self.mode is Mode.COMMAND:
            return f":{self.command_input}"
        if self.mode is Mode.CONFIRM:
            return f"Run `jj {' '.join(self.pending_confirm or [])}` ? [y/n]"
        if self.mode is Mode.PROMPT:
            if self.pending_prompt is None:
                return "prompt unavailable"
            return f"{self.pending_prompt.label} > {self.pending_prompt.input}"
        return self.status_line


def _is_text(key: str) -> bool:
    return len(key) == 1 and key.isprintable()
