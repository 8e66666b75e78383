"""Interactive prompts.

Commands never read the terminal directly; they receive a ``Prompter``.
``TerminalPrompter`` talks to the user through typer on stderr so stdout
stays clean for ``eval "$(sekret env)"``. ``ScriptedPrompter`` replays
canned answers.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import Protocol

import typer

from sekret.core.errors import PromptError


class Prompter(Protocol):
    """Capability bundle for reading operator input."""

    def read_secret(self, prompt: str) -> str:
        """Read a value without echoing it."""
        ...

    def read_line(self, prompt: str) -> str:
        """Read a visible line; empty string on bare Enter."""
        ...

    def read_confirm(self, prompt: str) -> bool:
        """Ask a yes/no question defaulting to no."""
        ...

    def read_choice(self, prompt: str) -> str:
        """Read a raw choice token; empty string on bare Enter."""
        ...


class TerminalPrompter:
    """Prompter reading from the controlling terminal."""

    def read_secret(self, prompt: str) -> str:
        return self._prompt(prompt, hide_input=True)

    def read_line(self, prompt: str) -> str:
        return self._prompt(prompt)

    def read_confirm(self, prompt: str) -> bool:
        try:
            return typer.confirm(prompt, default=False, err=True)
        except typer.Abort as e:
            raise PromptError("failed to read confirmation") from e

    def read_choice(self, prompt: str) -> str:
        return self._prompt(prompt)

    def _prompt(self, prompt: str, hide_input: bool = False) -> str:
        try:
            value = typer.prompt(
                prompt,
                default="",
                show_default=False,
                hide_input=hide_input,
                err=True,
            )
        except typer.Abort as e:
            raise PromptError("failed to read input") from e
        return str(value)


class ScriptedPrompter:
    """Prompter that replays queued answers.

    Each method consumes from its own queue. Running out of answers raises
    ``PromptError``, the same as hitting EOF on a terminal. Every prompt
    shown is recorded in ``asked``.
    """

    def __init__(
        self,
        choices: Iterable[str] = (),
        secrets: Iterable[str] = (),
        lines: Iterable[str] = (),
        confirms: Iterable[bool] = (),
    ) -> None:
        self.choices: deque[str] = deque(choices)
        self.secrets: deque[str] = deque(secrets)
        self.lines: deque[str] = deque(lines)
        self.confirms: deque[bool] = deque(confirms)
        self.asked: list[str] = []

    def read_secret(self, prompt: str) -> str:
        return self._next(self.secrets, prompt)

    def read_line(self, prompt: str) -> str:
        return self._next(self.lines, prompt)

    def read_confirm(self, prompt: str) -> bool:
        return self._next(self.confirms, prompt)

    def read_choice(self, prompt: str) -> str:
        return self._next(self.choices, prompt)

    def _next(self, queue: deque, prompt: str):
        self.asked.append(prompt)
        if not queue:
            raise PromptError(f"failed to read input: no answer scripted for {prompt!r}")
        return queue.popleft()
