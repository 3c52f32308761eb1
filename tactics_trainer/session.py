"""Puzzle session state machine.

Walks a puzzle's forced line one ply at a time. The setup move is
played on construction; after that every user ply is resolved by a
correct answer or a reveal, and the opponent's scripted reply is played
automatically until the line runs out.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import chess

from tactics_trainer.commands import (
    AttemptedMove,
    Command,
    Help,
    Hint,
    Info,
    NoInput,
    PrintFen,
    ShowBoard,
    side_name,
)
from tactics_trainer.errors import PuzzleDataError, SessionCompletedError
from tactics_trainer.models import Puzzle

_ANNOTATIONS = "+#"


class SessionState(Enum):
    SETTING_UP = "setting_up"
    AWAITING_USER_MOVE = "awaiting_user_move"
    COMPLETED = "completed"


class ReplyKind(Enum):
    SHOW_BOARD = "show_board"
    PRINT_FEN = "print_fen"
    HELP = "help"
    HINT = "hint"
    INFO = "info"
    REJECTED = "rejected"
    ADVANCED = "advanced"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Reply:
    """Outcome of one command. ``lines`` are messages for the user."""

    kind: ReplyKind
    lines: tuple[str, ...] = ()


def _parse_uci(board: chess.Board, uci: str) -> chess.Move:
    """Parse a puzzle-supplied UCI move and check it is legal here.

    Raises:
        PuzzleDataError: If the move is malformed or illegal.
    """
    try:
        move = chess.Move.from_uci(uci)
    except ValueError as e:
        raise PuzzleDataError(f"Invalid UCI move '{uci}' in puzzle: {e}") from e
    if move not in board.legal_moves:
        raise PuzzleDataError(
            f"Illegal move '{uci}' in puzzle (FEN: {board.fen()})"
        )
    return move


def _played(board: chess.Board, move: chess.Move) -> chess.Board:
    """Return a new board with ``move`` applied; ``board`` is untouched."""
    after = board.copy()
    after.push(move)
    return after


def matches_expected(text: str, expected_san: str) -> bool:
    """Compare a typed move to the canonical SAN.

    Exact and case-sensitive. A trailing ``+`` or ``#`` on the expected
    move may be left off, but an annotation the expected move lacks is
    never accepted.
    """
    if text == expected_san:
        return True
    stripped = expected_san.rstrip(_ANNOTATIONS)
    return stripped != expected_san and text == stripped


class PuzzleSession:
    """Owns the position and the unplayed remainder of a puzzle's line."""

    def __init__(self, puzzle: Puzzle) -> None:
        """Set up the puzzle position by playing its first move.

        Args:
            puzzle: The puzzle to solve.

        Raises:
            PuzzleDataError: If the FEN or the setup move is invalid.
        """
        self.puzzle = puzzle
        self.state = SessionState.SETTING_UP
        self.ply_missed = False
        self.first_try: list[bool] = []

        try:
            start = chess.Board(puzzle.fen)
        except ValueError as e:
            raise PuzzleDataError(f"Invalid FEN '{puzzle.fen}': {e}") from e

        setup = _parse_uci(start, puzzle.moves[0])
        self._board = _played(start, setup)
        self._remaining: tuple[str, ...] = tuple(puzzle.moves[1:])
        self.solver_side: chess.Color = self._board.turn
        self._expected = _parse_uci(self._board, self._remaining[0])
        self.state = SessionState.AWAITING_USER_MOVE

    @property
    def board(self) -> chess.Board:
        return self._board.copy()

    @property
    def remaining_moves(self) -> tuple[str, ...]:
        return self._remaining

    @property
    def opponent_side(self) -> chess.Color:
        return not self.solver_side

    @property
    def is_complete(self) -> bool:
        return self.state == SessionState.COMPLETED

    @property
    def expected_san(self) -> str:
        return self._board.san(self._expected)

    def handle(self, command: Command) -> Reply:
        """Apply one command and report what happened.

        Raises:
            SessionCompletedError: If the session already completed.
        """
        if self.state == SessionState.COMPLETED:
            raise SessionCompletedError("This tactic is already completed")

        if isinstance(command, ShowBoard):
            return Reply(ReplyKind.SHOW_BOARD)
        if isinstance(command, PrintFen):
            return Reply(ReplyKind.PRINT_FEN, (self._board.fen(),))
        if isinstance(command, Help):
            return Reply(ReplyKind.HELP)
        if isinstance(command, Hint):
            return Reply(ReplyKind.HINT, (self.hint_text(),))
        if isinstance(command, Info):
            return Reply(ReplyKind.INFO)
        if isinstance(command, NoInput):
            return self._resolve_ply(correct=False)
        if isinstance(command, AttemptedMove):
            if matches_expected(command.text, self.expected_san):
                return self._resolve_ply(correct=True)
            self.ply_missed = True
            return Reply(
                ReplyKind.REJECTED, (f"{command.text} is not the correct move",)
            )
        raise TypeError(f"Unknown command: {command!r}")

    def _resolve_ply(self, correct: bool) -> Reply:
        expected_san = self.expected_san
        self.first_try.append(correct and not self.ply_missed)
        self.ply_missed = False

        self._board = _played(self._board, self._expected)
        self._remaining = self._remaining[1:]

        if correct:
            prefix = "Correct! "
        else:
            prefix = f"The correct move was {expected_san}. "

        if not self._remaining:
            self.state = SessionState.COMPLETED
            return Reply(ReplyKind.COMPLETED, (f"{prefix}Completed this tactic.",))

        reply = _parse_uci(self._board, self._remaining[0])
        reply_san = self._board.san(reply)
        self._board = _played(self._board, reply)
        self._remaining = self._remaining[1:]
        lines = [f"{prefix}{side_name(self.opponent_side)} responds with {reply_san}"]

        if not self._remaining:
            self.state = SessionState.COMPLETED
            lines.append(f"{prefix}Completed this tactic.")
            return Reply(ReplyKind.COMPLETED, tuple(lines))

        self._expected = _parse_uci(self._board, self._remaining[0])
        return Reply(ReplyKind.ADVANCED, tuple(lines))

    def hint_text(self) -> str:
        piece = self._board.piece_at(self._expected.from_square)
        # Legal moves always start from an occupied square
        name = chess.piece_name(piece.piece_type)
        square = chess.square_name(self._expected.from_square)
        return f"Move the {name} on {square}."

    def summary(self) -> str:
        solved = sum(self.first_try)
        return f"Solved {solved} of {len(self.first_try)} moves on the first try."
