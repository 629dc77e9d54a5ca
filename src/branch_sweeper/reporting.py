"""Status output for a sweep."""

from __future__ import annotations

from typing import Iterable, Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .retention.models import BranchReference, DecisionOutcome, OutcomeKind

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class Reporter(Protocol):
    def line(self, message: str) -> None:
        ...

    def warning_block(self, lines: Iterable[str]) -> None:
        ...


class ConsoleReporter:
    """Write status lines to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    def line(self, message: str) -> None:
        self._console.print(escape(message), highlight=False, soft_wrap=True)

    def warning_block(self, lines: Iterable[str]) -> None:
        body = "\n".join(escape(line) for line in lines)
        self._console.print(Panel(body, style="bold white on red", expand=False))


class RecordingReporter:
    """Keep reported lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.warnings: list[list[str]] = []

    def line(self, message: str) -> None:
        self.lines.append(message)

    def warning_block(self, lines: Iterable[str]) -> None:
        self.warnings.append(list(lines))


def format_outcome(
    branch: BranchReference,
    outcome: DecisionOutcome,
    *,
    dry_run: bool = False,
    dry_run_notice: bool = False,
) -> str:
    """Render the status line for one branch decision.

    Dry runs report deletions with the same wording as real runs unless
    ``dry_run_notice`` is set.
    """

    name = branch.qualified_name
    if outcome.kind is OutcomeKind.PROTECTED:
        return f'  ==> "{name}" is reserved.'
    if outcome.kind is OutcomeKind.CURRENT:
        return f'  ==> "{name}" is skipped (current branch).'

    stamp = outcome.last_commit_at.strftime(TIMESTAMP_FORMAT) if outcome.last_commit_at else "unknown"
    if outcome.kind is OutcomeKind.SKIPPED:
        return f'  ==> "{name}" is skipped (last commit at: "{stamp}").'
    verb = "would be deleted" if dry_run and dry_run_notice else "is deleted"
    return f'  ==> "{name}" {verb} (last commit at: "{stamp}").'


__all__ = [
    "ConsoleReporter",
    "RecordingReporter",
    "Reporter",
    "TIMESTAMP_FORMAT",
    "format_outcome",
]
