"""Process-wide settings, resolved once at startup from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_SERVER_URL = "https://tactics.exoapi.app"
DEFAULT_TIMEOUT_S = 10.0

_TACTIC_PATH = "/api/v1/tactic"


@dataclass(frozen=True)
class Settings:
    server_url: str = DEFAULT_SERVER_URL
    request_timeout: float = DEFAULT_TIMEOUT_S

    @property
    def tactic_endpoint(self) -> str:
        return f"{self.server_url}{_TACTIC_PATH}"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Settings with TACTICS_SERVER_URL and TACTICS_REQUEST_TIMEOUT applied.

    Raises:
        ValueError: If TACTICS_REQUEST_TIMEOUT is not a positive number.
    """
    env = os.environ if environ is None else environ

    server_url = env.get("TACTICS_SERVER_URL") or DEFAULT_SERVER_URL
    raw_timeout = env.get("TACTICS_REQUEST_TIMEOUT")
    timeout = DEFAULT_TIMEOUT_S
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"TACTICS_REQUEST_TIMEOUT must be a number, got '{raw_timeout}'"
            ) from None
        if timeout <= 0:
            raise ValueError("TACTICS_REQUEST_TIMEOUT must be positive")

    return Settings(server_url=server_url.rstrip("/"), request_timeout=timeout)
