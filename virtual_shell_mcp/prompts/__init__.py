"""Prompt and reference texts served by the shell and the MCP server."""

from .system import get_prompts as get_system_prompts


def get_all_prompts() -> dict[str, str]:
    """Merges the prompt components of every prompt module, keyed by name."""
    return {**get_system_prompts()}


def get_help_text() -> str:
    """The command reference printed by `help`."""
    return get_all_prompts()["help"]
