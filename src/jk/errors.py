"""Application-level exception types for jk."""

from __future__ import annotations


class JkError(Exception):
    """Base exception for jk."""


class ConfigurationError(JkError):
    """Base exception for configuration and startup validation errors."""


class KeybindConfigError(ConfigurationError):
    """Raised when a keybinding file cannot be read or contains unknown keys."""


class JjLaunchError(JkError):
    """Raised when the `jj` executable cannot be spawned at all."""

    def __init__(self, binary: str, reason: str) -> None:
        super().__init__(f"failed to run `{binary}`: {reason}")
        self.binary = binary
        self.reason = reason


class PromptInputError(JkError):
    """Raised by prompt resolvers when submitted text does not fit the expected format."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
