"""jk command-line entry point."""

from __future__ import annotations

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from jk.app import App
from jk.cli.terminal import TerminalUI
from jk.config import load_settings
from jk.errors import JkError
from jk.jj import JjRunner
from jk.keybinds import load_keybinds
from jk.logging_utils import configure_logging

app = typer.Typer(
    name="jk",
    help="Log-first interactive front end for jj.",
    add_completion=False,
)
_error_console = Console(stderr=True)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def main(
    command: list[str] | None = typer.Argument(  # noqa: B008
        None,
        help="Optional jj command or alias to open first, e.g. `jk log -r 'trunk()'` or `jk rbm`.",
    ),
    cwd: Path | None = typer.Option(None, "--cwd", "-C", help="Repository directory to run jj in."),  # noqa: B008
) -> None:
    """Open the interactive jj shell."""
    settings = load_settings()
    configure_logging(profile="tui", level=settings.log_level, home=settings.resolve_home())

    try:
        keybinds = load_keybinds(settings.resolve_keybinds_path())
        jj = JjRunner(settings.jj_binary, cwd)
        session = App(
            keybinds,
            runner=jj.run,
            metadata_runner=jj.run_plain,
            viewport_rows=settings.viewport_rows,
        )
        logger.info("jk.start cwd={} command={}", cwd or Path.cwd(), " ".join(command or []))
        TerminalUI(session).run(command or [])
    except JkError as exc:
        logger.error("jk.error error={}", exc)
        _error_console.print(f"[bold red]jk:[/bold red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1) from exc
