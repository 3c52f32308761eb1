"""Exception hierarchy for the tactics trainer.

Everything here is fatal for the current run: ``cli.main`` is the only
place that catches these. A wrong move from the user is not an error.
"""

from __future__ import annotations


class TrainerError(Exception):
    """Base class for all tactics trainer failures."""


class PuzzleFetchError(TrainerError):
    """The puzzle server could not be reached or returned garbage."""


class PuzzleDataError(TrainerError, ValueError):
    """Puzzle data is malformed or its moves do not apply to its position."""


class SessionCompletedError(TrainerError):
    """A command was sent to a session that has already finished."""
