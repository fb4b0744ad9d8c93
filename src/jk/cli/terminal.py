"""Full-screen terminal shell around an `App` session."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger
from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from jk.app import App
from jk.errors import JkError

# prompt_toolkit reports some keys by their control-code aliases.
_KEY_ALIASES = {
    "c-m": "enter",
    "c-j": "enter",
    "c-h": "backspace",
    "c-i": "tab",
}
_CHROME_ROWS = 2


def normalize_key(key: Keys | str) -> str:
    """Map a prompt_toolkit key press to the names used by keybinding config."""
    name = key.value if isinstance(key, Keys) else key
    return _KEY_ALIASES.get(name, name)


class TerminalUI:
    """Draw frames from `App.render_frame` and forward every key press to the session."""

    def __init__(self, session: App) -> None:
        self.session = session
        self.application = self._build_application()

    def _build_application(self) -> Application[None]:
        bindings = KeyBindings()

        @bindings.add(Keys.Any, eager=True)
        def _on_key(event: KeyPressEvent) -> None:
            self._dispatch(event)

        body = Window(content=FormattedTextControl(self._frame_text), wrap_lines=False)
        return Application(layout=Layout(body), key_bindings=bindings, full_screen=True)

    def _terminal_size(self) -> tuple[int, int]:
        size = self.application.output.get_size()
        return size.columns, size.rows

    def _frame_text(self) -> ANSI:
        columns, rows = self._terminal_size()
        return ANSI("\n".join(self.session.render_frame(columns, rows)))

    def _dispatch(self, event: KeyPressEvent) -> None:
        key = normalize_key(event.key_sequence[0].key)
        try:
            self.session.handle_key(key)
        except JkError as exc:
            logger.error("terminal.key.error key={} error={}", key, exc)
            event.app.exit(exception=exc)
            return

        if self.session.should_quit:
            event.app.exit()
            return
        event.app.invalidate()

    def run(self, startup_tokens: Sequence[str] = ()) -> None:
        """Run the startup command, then the key loop until the session quits.

        Launch failures raised by the session propagate to the caller.
        """
        _, rows = self._terminal_size()
        self.session.viewport_rows = max(rows - _CHROME_ROWS, 1)
        self.session.start(startup_tokens)
        if self.session.should_quit:
            return
        self.application.run()
