"""Fetch a tactic from the tactics server, or load one from disk.

The server takes a JSON body with optional rating bounds and tags and
answers with a single puzzle object. One attempt only; any failure is
fatal for the caller.
"""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from pathlib import Path

from tactics_trainer.config import Settings
from tactics_trainer.errors import PuzzleDataError, PuzzleFetchError
from tactics_trainer.models import Puzzle, PuzzleRequest

USER_AGENT = "tactics-trainer-cli"


def fetch_puzzle(request: PuzzleRequest, settings: Settings) -> Puzzle:
    """POST a puzzle request and decode the response.

    Args:
        request: Rating bounds and tags to filter by.
        settings: Resolved settings carrying the endpoint and timeout.

    Returns:
        The Puzzle returned by the server.

    Raises:
        PuzzleFetchError: On network, HTTP or JSON decoding failure.
        PuzzleDataError: If the JSON does not describe a valid puzzle.
    """
    body = json.dumps(request.to_payload()).encode("utf-8")
    req = urllib.request.Request(
        settings.tactic_endpoint,
        data=body,
        method="POST",
        headers={
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
    )
    try:
        with urllib.request.urlopen(req, timeout=settings.request_timeout) as resp:
            raw = resp.read()
    except urllib.error.HTTPError as e:
        raise PuzzleFetchError(
            f"Tactics server returned HTTP {e.code} for {settings.tactic_endpoint}"
        ) from e
    except (urllib.error.URLError, OSError) as e:
        raise PuzzleFetchError(
            f"Could not reach tactics server at {settings.tactic_endpoint}: {e}"
        ) from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PuzzleFetchError(f"Tactics server sent invalid JSON: {e}") from e

    return Puzzle.from_dict(data)


def load_puzzle_file(path: Path) -> Puzzle:
    """Load a puzzle saved in the server's JSON format.

    Raises:
        PuzzleDataError: If the file is unreadable or not a valid puzzle.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        raise PuzzleDataError(f"Could not read puzzle file {path}: {e}") from e
    return Puzzle.from_dict(data)
