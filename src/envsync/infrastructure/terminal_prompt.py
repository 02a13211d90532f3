"""
Terminal prompts for the interactive update flow.

Prompt text goes to stderr so that stdout stays free for rendered output
(``envsync update --dry-run > preview.env``). Answers are read from stdin
one line at a time.

Calls return:
    - the answer with trailing whitespace removed (possibly empty)
    - None when stdin reached end of input
"""

import asyncio
import sys
from typing import Optional, TextIO


CLEARED_NOTICE = "(cleared)"


class TerminalPrompt:
    """
    Prompt bound to a pair of streams.

    Usage:
        prompt = TerminalPrompt()
        answer = prompt("# Database URL\\nDATABASE_URL (sqlite://)")
    """

    def __init__(self, stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stderr = stderr if stderr is not None else sys.stderr

    def __call__(self, text: str) -> Optional[str]:
        self.stderr.write(f"{text}: ")
        self.stderr.flush()

        line = self.stdin.readline()
        # readline() returns "" only at end of input; a bare Enter gives "\n"
        if line == "":
            self.stderr.write(f"{CLEARED_NOTICE}\n")
            self.stderr.flush()
            return None
        return line.rstrip()

    async def ask(self, text: str) -> Optional[str]:
        """Awaitable variant; the blocking read runs in a worker thread."""
        return await asyncio.to_thread(self, text)
