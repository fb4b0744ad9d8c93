from __future__ import annotations

from collections.abc import Sequence

import pytest

from jk.jj import CommandResult


class FakeRunner:
    """Scripted stand-in for `JjRunner.run`, recording every call."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.outputs: dict[tuple[str, ...], CommandResult] = {}
        self.failures: dict[tuple[str, ...], Exception] = {}

    def script(self, tokens: Sequence[str], output: list[str], *, success: bool = True) -> None:
        self.outputs[tuple(tokens)] = CommandResult(command=list(tokens), output=output, success=success)

    def fail(self, tokens: Sequence[str], exc: Exception) -> None:
        self.failures[tuple(tokens)] = exc

    def __call__(self, tokens: Sequence[str]) -> CommandResult:
        key = tuple(tokens)
        self.calls.append(list(tokens))
        if key in self.failures:
            raise self.failures[key]
        if key in self.outputs:
            return self.outputs[key]
        return CommandResult(command=list(tokens), output=[f"ran {' '.join(tokens)}"], success=True)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def metadata_runner() -> FakeRunner:
    return FakeRunner()
