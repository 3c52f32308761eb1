"""Command-line entry point: fetch one tactic and quiz the user on it."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from tactics_trainer import __version__
from tactics_trainer.board import help_table, puzzle_info_table, render_board
from tactics_trainer.commands import classify_command, prompt_text
from tactics_trainer.config import Settings, load_settings
from tactics_trainer.errors import TrainerError
from tactics_trainer.models import Puzzle, PuzzleRequest, parse_rating_range
from tactics_trainer.puzzle_source import fetch_puzzle, load_puzzle_file
from tactics_trainer.session import PuzzleSession, ReplyKind


def _rating_arg(text: str) -> tuple[int, int]:
    try:
        return parse_rating_range(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tactics-trainer",
        description="Solve a chess tactic in your terminal",
    )
    parser.add_argument(
        "-r", "--rating", type=_rating_arg, default=None, metavar="LOW-HIGH",
        help="The rating range of the tactics to fetch. Try 0-1200 for easy, "
             "1200-1800 for intermediate, or 1800-3000 for difficult tactics.",
    )
    parser.add_argument(
        "-t", "--tags", action="append", default=[], metavar="TAG",
        help="Only fetch tactics with this tag (repeatable). Every tactic "
             "returned will have one of these tags.",
    )
    parser.add_argument(
        "--puzzle-file", type=Path, default=None,
        help="Play a puzzle from a local JSON file instead of the server",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    return parser


def build_request(args: argparse.Namespace) -> PuzzleRequest:
    low, high = args.rating if args.rating is not None else (None, None)
    return PuzzleRequest(rating_gte=low, rating_lte=high, tags=list(args.tags))


def load_puzzle(args: argparse.Namespace, settings: Settings) -> Puzzle:
    if args.puzzle_file is not None:
        return load_puzzle_file(args.puzzle_file)
    return fetch_puzzle(build_request(args), settings)


def _plain_reader(console: Console) -> Callable[[str], str]:
    """Prompt reader that prints the prompt without markup or highlighting."""

    def read(prompt: str) -> str:
        console.print(prompt, end="", markup=False, highlight=False)
        return input()

    return read


def run_session(
    session: PuzzleSession,
    console: Console,
    read_line: Callable[[str], str] | None = None,
) -> bool:
    """Drive the prompt loop until the tactic is completed.

    Args:
        session: A freshly constructed session.
        console: Where board, help and messages are printed.
        read_line: Prompt reader. Defaults to printing the prompt
            verbatim on ``console`` and reading stdin.

    Returns:
        True if the tactic was completed, False if input ran out.
    """
    reader = read_line or _plain_reader(console)

    console.print()
    console.print(render_board(session.board))

    while not session.is_complete:
        console.print()
        try:
            line = reader(prompt_text(session.board))
        except EOFError:
            return False
        console.print()

        reply = session.handle(classify_command(line))

        if reply.kind == ReplyKind.SHOW_BOARD:
            console.print(render_board(session.board))
        elif reply.kind == ReplyKind.HELP:
            console.print(help_table())
        elif reply.kind == ReplyKind.INFO:
            console.print(puzzle_info_table(session.puzzle))
        else:
            for message in reply.lines:
                console.print(message, markup=False, highlight=False)

    console.print(session.summary(), style="dim")
    return True


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for tactics-trainer."""
    args = build_parser().parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)

    try:
        settings = load_settings()
        puzzle = load_puzzle(args, settings)
        session = PuzzleSession(puzzle)
    except KeyboardInterrupt:
        console.print()
        return 0
    except (TrainerError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1

    try:
        run_session(session, console)
    except KeyboardInterrupt:
        console.print()
    except TrainerError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
