"""Command-line history and screen back/forward stacks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from jk.errors import JkError


@dataclass
class CommandHistory:
    """Submitted command lines plus the browsing cursor used in command mode.

    `index` is `None` while not browsing. `draft` holds the text typed before browsing started.
    """

    entries: list[str] = field(default_factory=list)
    index: int | None = None
    draft: str = ""

    def record(self, command: str) -> None:
        text = command.strip()
        if not text or (self.entries and self.entries[-1] == text):
            return
        self.entries.append(text)

    def reset(self) -> None:
        self.index = None
        self.draft = ""

    def previous(self, current_input: str) -> str | None:
        """Step toward older entries; returns the new input text, or `None` when empty."""
        if not self.entries:
            return None
        if self.index is None:
            self.draft = current_input
            self.index = len(self.entries) - 1
        elif self.index > 0:
            self.index -= 1
        return self.entries[self.index]

    def next(self) -> str | None:
        """Step toward newer entries, restoring the draft once past the newest."""
        if self.index is None:
            return None
        if self.index + 1 < len(self.entries):
            self.index += 1
            return self.entries[self.index]
        self.index = None
        return self.draft


@dataclass
class ViewHistory:
    """Back/forward stacks of navigable screens, keyed by the command line that opened them."""

    current: str = "log"
    back_stack: list[str] = field(default_factory=list)
    forward_stack: list[str] = field(default_factory=list)
    navigating: bool = False

    def record_visit(self, command: str) -> None:
        text = command.strip()
        if not text:
            return
        if self.navigating:
            self.current = text
            return
        if text == self.current:
            return
        if self.current:
            self.back_stack.append(self.current)
        self.current = text
        self.forward_stack.clear()

    def back(self, open_view: Callable[[str], None]) -> str:
        """Reopen the previous screen through `open_view` and return a status message."""
        if not self.back_stack:
            return "No previous screen"
        self._travel(self.back_stack, self.forward_stack, open_view)
        return f"back: {self.current}"

    def forward(self, open_view: Callable[[str], None]) -> str:
        if not self.forward_stack:
            return "No next screen"
        self._travel(self.forward_stack, self.back_stack, open_view)
        return f"forward: {self.current}"

    def _travel(self, source: list[str], target: list[str], open_view: Callable[[str], None]) -> None:
        destination = source.pop()
        if self.current:
            target.append(self.current)

        self.navigating = True
        try:
            open_view(destination)
        except JkError:
            if target:
                self.current = target.pop()
            source.append(destination)
            raise
        finally:
            self.navigating = False
