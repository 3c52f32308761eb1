"""Data models shared by the puzzle source, the session and the CLI.

Puzzle mirrors the JSON object returned by the tactics server.
PuzzleRequest is the body sent to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tactics_trainer.errors import PuzzleDataError

# Minimum line length: one setup move plus one solution move
_MIN_MOVES = 2


def _require(data: dict, key: str, kind: type | tuple[type, ...]):
    """Fetch a typed field from a puzzle dict or raise PuzzleDataError."""
    if key not in data:
        raise PuzzleDataError(f"Puzzle is missing field '{key}'")
    value = data[key]
    # bool is an int subclass; a rating of True is still garbage
    if isinstance(value, bool) or not isinstance(value, kind):
        raise PuzzleDataError(
            f"Puzzle field '{key}' has unexpected type {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Puzzle:
    """A tactic: starting FEN plus the full forced line in UCI notation.

    ``moves[0]`` is the setup move played by the opponent; the solver
    answers ``moves[1]``, the opponent replies with ``moves[2]`` and so on.
    """

    id: str
    fen: str
    moves: tuple[str, ...]
    rating: int = 0
    rating_deviation: int = 0
    popularity: int = 0
    tags: tuple[str, ...] = ()
    number_plays: int = 0
    game_link: str = ""

    def __post_init__(self) -> None:
        if len(self.moves) < _MIN_MOVES:
            raise PuzzleDataError(
                f"Puzzle {self.id} has {len(self.moves)} move(s), "
                f"expected at least {_MIN_MOVES}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> Puzzle:
        """Build a Puzzle from the server's JSON object.

        Args:
            data: Decoded JSON object.

        Returns:
            The validated Puzzle.

        Raises:
            PuzzleDataError: If a field is missing, mistyped, or the
                line is shorter than two moves.
        """
        if not isinstance(data, dict):
            raise PuzzleDataError("Puzzle payload must be a JSON object")

        moves = _require(data, "moves", list)
        tags = _require(data, "tags", list)
        if not all(isinstance(m, str) for m in moves):
            raise PuzzleDataError("Puzzle moves must be strings")
        if not all(isinstance(t, str) for t in tags):
            raise PuzzleDataError("Puzzle tags must be strings")

        return cls(
            id=_require(data, "id", str),
            fen=_require(data, "fen", str),
            moves=tuple(moves),
            rating=_require(data, "rating", int),
            rating_deviation=_require(data, "rating_deviation", int),
            popularity=_require(data, "popularity", int),
            tags=tuple(tags),
            number_plays=_require(data, "number_plays", int),
            game_link=_require(data, "game_link", str),
        )


@dataclass(frozen=True)
class PuzzleRequest:
    """Filters sent to the tactics server. Bounds are inclusive."""

    rating_gte: int | None = None
    rating_lte: int | None = None
    tags: list[str] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {
            "rating_gte": self.rating_gte,
            "rating_lte": self.rating_lte,
            "tags": list(self.tags),
        }


def parse_rating_range(text: str) -> tuple[int, int]:
    """Parse a ``"<low>-<high>"`` rating range.

    Args:
        text: Range such as ``"1200-1800"``.

    Returns:
        Tuple of (low, high).

    Raises:
        ValueError: If the text is not two integers joined by a dash,
            or low is greater than high.
    """
    parts = text.split("-")
    if len(parts) != 2:
        raise ValueError(
            f"Could not parse rating '{text}', make sure it's in the form '500-1200'"
        )
    bounds = []
    for part in parts:
        try:
            bounds.append(int(part.strip()))
        except ValueError:
            raise ValueError(f"Failed to parse '{part}' as a rating") from None
    low, high = bounds
    if low > high:
        raise ValueError(f"Rating lower bound {low} is above upper bound {high}")
    return low, high
