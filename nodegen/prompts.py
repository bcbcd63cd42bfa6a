"""Interactive prompt capability.

The pipeline never reads from stdin directly; it talks to an object
implementing :class:`Prompt`.  :class:`ConsolePrompt` backs it with Rich
prompts for real terminals; tests substitute a scripted implementation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rich.prompt import Confirm, Prompt as RichPrompt

from .utils import console


@runtime_checkable
class Prompt(Protocol):
    """Yes/no and free-text questions."""

    def confirm(self, message: str) -> bool: ...

    def ask(self, message: str) -> str: ...


class ConsolePrompt:
    """Asks questions on the shared Rich console."""

    def confirm(self, message: str) -> bool:
        return Confirm.ask(message, console=console, default=False)

    def ask(self, message: str) -> str:
        answer = RichPrompt.ask(message, console=console, default="", show_default=False)
        return answer or ""
