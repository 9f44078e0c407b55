"""Bridge configuration dataclass."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from typing import Mapping, Optional

# Default dispatch timeout in seconds.  Override with
# FORMAT_BRIDGE_TIMEOUT env var (0 = no limit).
_DEFAULT_TIMEOUT = 60.0

_DEFAULT_ENGINE = "prettier"
_DEFAULT_PRETTIER_COMMAND = ("npx", "--no-install", "prettier")


@dataclass(frozen=True)
class BridgeConfig:
    """Immutable bridge configuration.

    ``timeout`` of ``None`` means the calling thread may block forever.
    """

    engine: str = _DEFAULT_ENGINE
    timeout: Optional[float] = _DEFAULT_TIMEOUT
    prettier_command: tuple[str, ...] = _DEFAULT_PRETTIER_COMMAND

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BridgeConfig":
        """Build a config from ``FORMAT_BRIDGE_*`` environment variables."""
        env = os.environ if environ is None else environ

        timeout_str = env.get("FORMAT_BRIDGE_TIMEOUT", "")
        timeout: Optional[float] = float(timeout_str) if timeout_str else _DEFAULT_TIMEOUT
        if timeout == 0:
            timeout = None  # no limit
        elif timeout < 0:
            raise ValueError(f"FORMAT_BRIDGE_TIMEOUT must be >= 0, got {timeout_str!r}")

        command_str = env.get("FORMAT_BRIDGE_PRETTIER", "")
        command = tuple(shlex.split(command_str)) if command_str else _DEFAULT_PRETTIER_COMMAND

        return cls(
            engine=env.get("FORMAT_BRIDGE_ENGINE", "") or _DEFAULT_ENGINE,
            timeout=timeout,
            prettier_command=command,
        )
