"""Shared puzzle fixtures.

All puzzles start from the standard position so the expected SAN of
every ply is easy to read off:

    three_move_puzzle  - 1. e4 (setup) e5, 2. Nf3 (opponent)
    two_move_puzzle    - 1. e4 (setup) e5
    four_move_puzzle   - 1. e4 (setup) e5, 2. Nf3 (opponent) Nc6
    mate_puzzle        - Fool's mate, final user ply is Qh4#
"""

from __future__ import annotations

import chess
import pytest

from tactics_trainer.models import Puzzle


def make_puzzle_dict(moves: list[str], fen: str = chess.STARTING_FEN, **overrides) -> dict:
    """Build a server-shaped puzzle object."""
    data = {
        "id": "abc12",
        "fen": fen,
        "moves": moves,
        "rating": 1500,
        "rating_deviation": 75,
        "popularity": 92,
        "tags": ["opening", "short"],
        "number_plays": 1234,
        "game_link": "https://lichess.org/abcdefgh#3",
    }
    data.update(overrides)
    return data


@pytest.fixture()
def puzzle_factory():
    """Return the make_puzzle_dict builder for tests that need odd lines."""
    return make_puzzle_dict


@pytest.fixture()
def puzzle_dict() -> dict:
    return make_puzzle_dict(["e2e4", "e7e5", "g1f3"])


@pytest.fixture()
def three_move_puzzle(puzzle_dict) -> Puzzle:
    return Puzzle.from_dict(puzzle_dict)


@pytest.fixture()
def two_move_puzzle() -> Puzzle:
    return Puzzle.from_dict(make_puzzle_dict(["e2e4", "e7e5"]))


@pytest.fixture()
def four_move_puzzle() -> Puzzle:
    return Puzzle.from_dict(make_puzzle_dict(["e2e4", "e7e5", "g1f3", "b8c6"]))


@pytest.fixture()
def mate_puzzle() -> Puzzle:
    return Puzzle.from_dict(
        make_puzzle_dict(["f2f3", "e7e5", "g2g4", "d8h4"], tags=["mateIn2"])
    )
