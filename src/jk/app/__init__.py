"""Interactive session runtime."""

from jk.app.session import App, Mode, PromptState

__all__ = ["App", "Mode", "PromptState"]
