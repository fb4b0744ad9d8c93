"""Command planning and guided prompt flows."""

from jk.flow.actions import Execute, FlowAction, Prompt, PromptRequest, Quit, Render, Status
from jk.flow.planner import canonicalize_tokens, plan_command
from jk.flow.prompts import PromptKind

__all__ = [
    "Execute",
    "FlowAction",
    "Prompt",
    "PromptKind",
    "PromptRequest",
    "Quit",
    "Render",
    "Status",
    "canonicalize_tokens",
    "plan_command",
]
