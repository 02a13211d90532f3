"""
Type aliases for envsync.

Provides reusable, descriptive type aliases for common patterns
to improve code readability and type safety.
"""

from typing import Awaitable, Callable, Dict, Optional


# Key/value view of an env file: {KEY: value}
EnvMapping = Dict[str, str]

# Blocking prompt: receives the prompt text, returns the answer or None at end of input
PromptFn = Callable[[str], Optional[str]]

# Awaitable counterpart of PromptFn
AsyncPromptFn = Callable[[str], Awaitable[Optional[str]]]
