from __future__ import annotations

import pytest

from jk.app.history import CommandHistory, ViewHistory
from jk.errors import JjLaunchError


def test_command_history_skips_blank_and_repeated_entries() -> None:
    history = CommandHistory()
    history.record("log")
    history.record("log")
    history.record("   ")
    history.record("status")
    assert history.entries == ["log", "status"]


def test_command_history_browsing_restores_draft() -> None:
    history = CommandHistory(entries=["log", "status", "show"])
    assert history.previous("dra") == "show"
    assert history.previous("ignored") == "status"
    assert history.previous("ignored") == "log"
    assert history.previous("ignored") == "log"
    assert history.next() == "status"
    assert history.next() == "show"
    assert history.next() == "dra"
    assert history.index is None
    assert history.next() is None


def test_command_history_empty() -> None:
    assert CommandHistory().previous("x") is None


def test_view_history_back_and_forward() -> None:
    views = ViewHistory()
    opened: list[str] = []

    def open_view(command: str) -> None:
        opened.append(command)
        views.record_visit(command)

    views.record_visit("status")
    views.record_visit("operation log")
    assert views.back(open_view) == "back: status"
    assert views.back(open_view) == "back: log"
    assert views.back(open_view) == "No previous screen"
    assert views.forward(open_view) == "forward: status"
    assert views.forward(open_view) == "forward: operation log"
    assert views.forward(open_view) == "No next screen"
    assert opened == ["status", "log", "status", "operation log"]


def test_new_visit_clears_forward_stack() -> None:
    views = ViewHistory()
    views.record_visit("status")
    views.back(views.record_visit)
    views.record_visit("show")
    assert views.forward_stack == []
    assert views.back_stack == ["log"]


def test_repeat_visit_is_ignored() -> None:
    views = ViewHistory()
    views.record_visit("log")
    assert views.back_stack == []


def test_failed_travel_restores_stacks() -> None:
    views = ViewHistory()
    views.record_visit("status")

    def broken(_command: str) -> None:
        raise JjLaunchError("jj", "missing")

    with pytest.raises(JjLaunchError):
        views.back(broken)
    assert views.current == "status"
    assert views.back_stack == ["log"]
    assert views.forward_stack == []
    assert not views.navigating
