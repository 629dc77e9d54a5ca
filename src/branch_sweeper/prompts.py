"""Interactive choice providers."""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

T = TypeVar("T")


class ChoiceProvider(Protocol):
    """Answers a multiple-choice question.

    Returns ``None`` when there is nothing to choose from.
    """

    def ask_choice(self, prompt: str, options: Sequence[T], default_index: int = 0) -> T | None:
        ...


class TerminalChoiceProvider:
    """Ask questions on the terminal.

    Options are listed with their index; the answer may be either the index or
    the option itself, and a blank answer picks the default. An answer that
    names an option is taken as that option before it is read as an index.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def ask_choice(self, prompt: str, options: Sequence[T], default_index: int = 0) -> T | None:
        if not options:
            return None

        default_label = str(options[default_index])
        self._console.print(f"[green]{escape(prompt)}[/green] [[yellow]{escape(default_label)}[/yellow]]")
        for index, option in enumerate(options):
            self._console.print(f"  [[yellow]{index}[/yellow]] {escape(str(option))}")

        labels = [str(option) for option in options]
        indices = [str(index) for index in range(len(options))]
        answer = Prompt.ask(
            " >",
            console=self._console,
            choices=indices + [label for label in labels if label not in indices],
            default="",
            show_choices=False,
            show_default=False,
        )
        if answer == "":
            return options[default_index]
        if answer in labels:
            return options[labels.index(answer)]
        return options[int(answer)]


class DefaultChoiceProvider:
    """Pick the default option of every question without asking."""

    def ask_choice(self, prompt: str, options: Sequence[T], default_index: int = 0) -> T | None:
        if not options:
            return None
        return options[default_index]


class ScriptedChoiceProvider:
    """Test double that answers from a fixed script and records the questions."""

    def __init__(self, answers: Iterable[Any] | None = None) -> None:
        self._answers = list(answers or [])
        self.questions: list[tuple[str, tuple[Any, ...], int]] = []

    def ask_choice(self, prompt: str, options: Sequence[T], default_index: int = 0) -> T | None:
        self.questions.append((prompt, tuple(options), default_index))
        if not options:
            return None
        if not self._answers:
            return options[default_index]
        answer = self._answers.pop(0)
        if answer not in options:
            raise ValueError(f"Scripted answer {answer!r} is not one of {list(options)!r}")
        return answer


__all__ = [
    "ChoiceProvider",
    "DefaultChoiceProvider",
    "ScriptedChoiceProvider",
    "TerminalChoiceProvider",
]
