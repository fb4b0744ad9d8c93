"""`jj` subprocess execution helpers.

All command execution goes through this module so `--no-pager` and color policy stay consistent
across the runtime, confirmation previews, and metadata lookups.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from jk.errors import JjLaunchError

NO_OUTPUT = "(no output)"


@dataclass(frozen=True)
class CommandResult:
    """Captured output and success flag for one `jj` invocation."""

    command: list[str]
    output: list[str] = field(default_factory=list)
    success: bool = True


Runner = Callable[[Sequence[str]], CommandResult]


class JjRunner:
    """Spawn `jj` with a fixed binary and working directory."""

    def __init__(self, binary: str = "jj", cwd: Path | None = None) -> None:
        self.binary = binary
        self.cwd = cwd

    def run(self, tokens: Sequence[str]) -> CommandResult:
        """Run with color enabled for terminal rendering."""
        return self._run(tokens, color="always")

    def run_plain(self, tokens: Sequence[str]) -> CommandResult:
        """Run with color disabled for parser-friendly output."""
        return self._run(tokens, color="never")

    def _run(self, tokens: Sequence[str], *, color: str) -> CommandResult:
        argv = [self.binary, "--no-pager", "--color", color, *tokens]
        env = dict(os.environ)
        env.pop("NO_COLOR", None)
        env.update({"CLICOLOR_FORCE": "1", "COLORTERM": "truecolor", "TERM": "xterm-256color"})
        try:
            # The argument list is built from planner tokens, never through a shell.
            completed = subprocess.run(  # noqa: S603
                argv,
                cwd=self.cwd,
                env=env,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise JjLaunchError(self.binary, str(exc)) from exc

        success = completed.returncode == 0
        logger.debug("jj.run command={} exit={}", " ".join(tokens), completed.returncode)
        return CommandResult(
            command=list(tokens),
            output=combine_output(completed.stdout or "", completed.stderr or ""),
            success=success,
        )


def combine_output(stdout: str, stderr: str) -> list[str]:
    """Merge captured streams into display lines.

    The non-empty stream wins when the other is blank; both are joined otherwise so warnings
    stay next to regular output.
    """
    if not stdout.strip():
        body = stderr
    elif not stderr.strip():
        body = stdout
    else:
        body = f"{stdout}\n{stderr}"

    if not body.strip():
        return [NO_OUTPUT]
    lines = body.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]
