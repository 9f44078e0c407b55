"""Fault taxonomy for the formatter bridge.

Two kinds of failure leave the bridge:

1. **Input faults** (``FormatSyntaxError``) — the engine could not parse the
   text under the configured parser.  Recoverable; the rule reports them as
   a normal, non-fixable diagnostic.
2. **Engine faults** (``FormatEngineError`` and anything else the engine
   raises) — crashes, transport loss, timeouts.  Never converted into a
   diagnostic; they abort the lint pass.

Classification is by exception type, never by message text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from format_bridge.model.diagnostic import Location


class FormatBridgeError(Exception):
    """Root of every error raised by ``format_bridge`` itself."""


class FormatSyntaxError(FormatBridgeError):
    """The engine rejected its input text.

    Carries a human-readable ``message``, an optional 1-based ``loc`` and an
    optional ``code_frame`` (a preformatted excerpt of the offending source).
    Engines raise this to signal an input fault; the bridge re-raises it on
    the calling thread.
    """

    def __init__(
        self,
        message: str,
        loc: Optional["Location"] = None,
        code_frame: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.loc = loc
        self.code_frame = code_frame


class FormatEngineError(FormatBridgeError):
    """Unrecoverable engine failure.  Must propagate out of the lint pass."""


class BridgeTransportError(FormatEngineError):
    """The worker context is not running or died mid-request."""


class BridgeTimeoutError(FormatEngineError):
    """The worker did not answer within the configured timeout."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"formatter did not respond within {timeout:g}s")
        self.timeout = timeout
