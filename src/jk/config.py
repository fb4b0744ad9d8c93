"""Configuration management for jk."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="JK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Execution
    jj_binary: str = Field(default="jj", description="Executable used for every wrapped command")

    # Interface
    viewport_rows: int = Field(default=20, ge=1, description="Content rows assumed before the first draw")
    keybinds_path: Path | None = Field(default=None, description="Keybinding override file (YAML)")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    home: Path = Field(default=Path.home() / ".jk", description="Directory for jk state and logs")

    def resolve_home(self) -> Path:
        return self.home.expanduser().resolve()

    def resolve_keybinds_path(self) -> Path:
        """Return the keybinding override path, falling back to the XDG-style default."""
        if self.keybinds_path is not None:
            return self.keybinds_path.expanduser()
        return Path.home() / ".config" / "jk" / "keybinds.yaml"


def load_settings() -> Settings:
    """Load settings from the environment and an optional `.env` file.

    `JK_KEYBINDS` is accepted as a shorter alias for `JK_KEYBINDS_PATH`.
    """
    settings = Settings()
    alias = os.getenv("JK_KEYBINDS")
    if alias and settings.keybinds_path is None:
        settings = settings.model_copy(update={"keybinds_path": Path(alias)})
    return settings
