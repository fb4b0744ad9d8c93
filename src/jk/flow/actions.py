"""Outcomes produced by planning one command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from jk.flow.prompts import PromptKind


@dataclass(frozen=True)
class PromptRequest:
    """Guided-input request: what to ask and how to resolve the answer."""

    label: str
    kind: PromptKind
    allow_empty: bool = False


@dataclass(frozen=True)
class Execute:
    tokens: list[str]


@dataclass(frozen=True)
class Render:
    """Show locally generated lines without running `jj`."""

    lines: list[str]
    status: str


@dataclass(frozen=True)
class Prompt:
    request: PromptRequest


@dataclass(frozen=True)
class Status:
    message: str


@dataclass(frozen=True)
class Quit:
    pass


FlowAction = Union[Execute, Render, Prompt, Status, Quit]
