from __future__ import annotations

from prompt_toolkit.keys import Keys

from jk.cli.terminal import normalize_key


def test_normalize_key_maps_control_aliases() -> None:
    assert normalize_key(Keys.ControlM) == "enter"
    assert normalize_key(Keys.ControlH) == "backspace"
    assert normalize_key(Keys.PageDown) == "pagedown"
    assert normalize_key(Keys.ControlD) == "c-d"
    assert normalize_key(Keys.Escape) == "escape"
    assert normalize_key("x") == "x"
