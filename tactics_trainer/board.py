"""Rich renderables for the terminal: board grid, help and puzzle info.

The board is always drawn from White's side: rank 8 on top, file a on
the left.
"""

from __future__ import annotations

import chess
from rich.table import Table
from rich.text import Text

from tactics_trainer.models import Puzzle

_PAWN_GLYPH = "▲"
_EMPTY_GLYPH = "·"

_WHITE_PIECE = "bold blue"
_BLACK_PIECE = "bold red"
_LIGHT_SQ = "grey70"
_DARK_SQ = "grey30"

_HELP_ROWS = [
    ("Any move, ex. Qxd7", "Attempt to solve the tactic with the given move"),
    ("No input", "Reveal the answer, and continue the tactic if there are more moves."),
    ("'f' or 'fen'", "Print out the current board, in FEN notation"),
    ("'s' or 'show'", "Show the current board."),
    ("'h' or 'hint'", "Name the piece that should move."),
    ("'i' or 'info'", "Show the puzzle's rating, tags and source game."),
    ("'?' or 'help'", "Display this help"),
]


def piece_glyph(piece: chess.Piece) -> str:
    if piece.piece_type == chess.PAWN:
        return _PAWN_GLYPH
    return piece.symbol().upper()


def _square_cell(board: chess.Board, square: chess.Square) -> Text:
    piece = board.piece_at(square)
    if piece is not None:
        style = _WHITE_PIECE if piece.color == chess.WHITE else _BLACK_PIECE
        return Text(piece_glyph(piece), style=style)
    is_light = (chess.square_rank(square) + chess.square_file(square)) % 2 == 1
    return Text(_EMPTY_GLYPH, style=_LIGHT_SQ if is_light else _DARK_SQ)


def render_board(board: chess.Board) -> Table:
    """Render a position as an 8x8 grid with rank and file labels.

    Args:
        board: Position to draw.

    Returns:
        Rich Table ready for ``Console.print``.
    """
    table = Table(show_header=False, show_edge=False, pad_edge=False,
                  box=None, padding=(0, 1))

    table.add_column(width=3, justify="right")
    for _ in range(8):
        table.add_column(width=1, justify="center")

    for rank in range(7, -1, -1):
        row: list[Text] = [Text(str(rank + 1), style="bold")]
        for file in range(8):
            row.append(_square_cell(board, chess.square(file, rank)))
        table.add_row(*row)

    file_labels = [Text("")]
    for name in chess.FILE_NAMES:
        file_labels.append(Text(name, style="bold"))
    table.add_row(*file_labels)

    return table


def help_table() -> Table:
    table = Table(show_header=False, show_lines=True)
    table.add_column(style="bold")
    table.add_column()
    for command, description in _HELP_ROWS:
        table.add_row(command, description)
    return table


def puzzle_info_table(puzzle: Puzzle) -> Table:
    """Summarize a puzzle's metadata.

    Args:
        puzzle: The puzzle being played.

    Returns:
        Two-column Rich Table.
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Puzzle", puzzle.id)
    table.add_row("Rating", f"{puzzle.rating} ± {puzzle.rating_deviation}")
    table.add_row("Popularity", str(puzzle.popularity))
    table.add_row("Plays", str(puzzle.number_plays))
    table.add_row("Tags", ", ".join(puzzle.tags) if puzzle.tags else "-")
    if puzzle.game_link:
        table.add_row("Game", puzzle.game_link)
    return table
