"""MCP prompts."""

from .prompts import PromptManager


__all__ = ["PromptManager"]
