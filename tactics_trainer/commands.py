"""Classify one line of user input into a session command."""

from __future__ import annotations

from dataclasses import dataclass

import chess


@dataclass(frozen=True)
class ShowBoard:
    pass


@dataclass(frozen=True)
class PrintFen:
    pass


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class Hint:
    pass


@dataclass(frozen=True)
class Info:
    pass


@dataclass(frozen=True)
class NoInput:
    """Empty line: reveal the answer and move on."""


@dataclass(frozen=True)
class AttemptedMove:
    text: str


Command = ShowBoard | PrintFen | Help | Hint | Info | NoInput | AttemptedMove

# Keywords are case-sensitive: "S" is an attempted move, not "show"
_KEYWORDS: dict[str, Command] = {
    "s": ShowBoard(),
    "show": ShowBoard(),
    "f": PrintFen(),
    "fen": PrintFen(),
    "?": Help(),
    "help": Help(),
    "h": Hint(),
    "hint": Hint(),
    "i": Info(),
    "info": Info(),
}


def classify_command(line: str) -> Command:
    """Map a line of input to a Command.

    The line is used verbatim; move text keeps its case and whitespace.
    """
    if line == "":
        return NoInput()
    keyword = _KEYWORDS.get(line)
    if keyword is not None:
        return keyword
    return AttemptedMove(line)


def side_name(color: chess.Color) -> str:
    return "White" if color == chess.WHITE else "Black"


def prompt_text(board: chess.Board) -> str:
    return f"{side_name(board.turn)} to move, enter the best move, or '?' for help: "
