"""Command line entry point for branch-sweeper."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import SweeperSettings, get_settings
from .git import GitRepository, RepositoryError
from .policy import PolicyLoadError, load_policy
from .prompts import ChoiceProvider, DefaultChoiceProvider, TerminalChoiceProvider
from .reporting import ConsoleReporter
from .retention.models import Mode
from .session import SessionError, SweepSession

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def configure_logging(level: str) -> None:
    """Configure root logging for the command."""

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def _positive_int(value: str) -> int:
    try:
        days = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number of days") from exc
    if days < 1:
        raise argparse.ArgumentTypeError("the day threshold must be at least 1")
    return days


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="branch-sweeper",
        description="Clean old branches",
    )
    parser.add_argument("repo", nargs="?", default=None, help="The repository path")
    parser.add_argument("--dry-run", action="store_true", help="Dry run")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in Mode],
        default=None,
        help="Sweep local branches or the branches of a remote",
    )
    parser.add_argument("--remote", default=None, help="Remote to sweep in remote mode")
    parser.add_argument(
        "--days",
        type=_positive_int,
        default=None,
        help="Delete branches whose last commit is older than this many days",
    )
    parser.add_argument(
        "-n",
        "--no-interaction",
        action="store_true",
        help="Do not ask any question; use the default answers",
    )
    parser.add_argument("--policy", type=Path, default=None, help="Retention policy YAML file")
    parser.add_argument("--log-level", default=None, help="Override BRANCH_SWEEPER_LOG_LEVEL")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(
    args: argparse.Namespace,
    settings: SweeperSettings,
    *,
    choices: ChoiceProvider | None = None,
    console: Console | None = None,
) -> int:
    console = console or Console(highlight=False)
    error_console = Console(stderr=True, highlight=False)

    repo_path = Path(args.repo) if args.repo else Path(os.getcwd())
    mode = args.mode
    if args.remote is not None and mode is None:
        mode = Mode.REMOTE.value

    try:
        repository = GitRepository.open(repo_path)
        policy = load_policy(repository.path, args.policy or settings.policy_path)
        if choices is None:
            choices = DefaultChoiceProvider() if args.no_interaction else TerminalChoiceProvider(console)
        session = SweepSession(
            repository,
            choices,
            ConsoleReporter(console),
            policy=policy,
            dry_run=args.dry_run,
            mode=mode,
            remote_name=args.remote,
            threshold_days=args.days,
            dry_run_notice=settings.dry_run_notice,
            require_remote=settings.require_remote,
        )
        session.run()
    except (RepositoryError, PolicyLoadError, SessionError) as exc:
        logging.getLogger(__name__).debug("Sweep aborted", exc_info=True)
        error_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", soft_wrap=True)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        error_console.print("[yellow]Interrupted.[/yellow]")
        return EXIT_INTERRUPTED
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``branch-sweeper`` console script."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.mode == Mode.LOCAL.value and args.remote is not None:
        parser.error("--remote cannot be combined with --mode local")

    settings = get_settings()
    if args.log_level:
        settings = settings.model_copy(update={"log_level": args.log_level.strip().upper()})
    configure_logging(settings.log_level)

    return run(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
