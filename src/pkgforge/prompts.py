"""
pkgforge.prompts - Interactive Prompt Layer
===========================================

The interactive builder and the plugins ask questions through the
:class:`Prompter` protocol, never through a terminal library directly.
:class:`QuestionaryPrompter` is the terminal implementation; tests use a
scripted prompter that replays canned answers.
"""

from __future__ import annotations

from typing import Protocol

import questionary
from rich.console import Console

from pkgforge.errors import PromptAborted


class Prompter(Protocol):
    """Question/answer interface used for interactive configuration."""

    def text(self, message: str, default: str = "") -> str:
        """Ask a free-text question."""
        ...

    def select(self, message: str, choices: list[str], default: str | None = None) -> str:
        """Ask the user to pick exactly one of ``choices``."""
        ...

    def confirm(self, message: str, default: bool = True) -> bool:
        """Ask a yes/no question."""
        ...

    def echo(self, message: str) -> None:
        """Show information without asking anything."""
        ...


class QuestionaryPrompter:
    """
    Terminal prompts via questionary.

    Raises
    ------
    PromptAborted
        When the user cancels a prompt (Ctrl-C).
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    @staticmethod
    def _answer(question: questionary.Question):
        result = question.ask()
        if result is None:
            raise PromptAborted("Prompt cancelled")
        return result

    def text(self, message: str, default: str = "") -> str:
        return self._answer(questionary.text(f"{message}:", default=default))

    def select(self, message: str, choices: list[str], default: str | None = None) -> str:
        return self._answer(questionary.select(f"{message}:", choices=choices, default=default))

    def confirm(self, message: str, default: bool = True) -> bool:
        return self._answer(questionary.confirm(message, default=default))

    def echo(self, message: str) -> None:
        self.console.print(message)
