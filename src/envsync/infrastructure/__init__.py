"""
Infrastructure layer for interaction with the outside world.

This module contains the terminal prompt used by the interactive
update flow.
"""

from .terminal_prompt import TerminalPrompt

__all__ = ["TerminalPrompt"]
