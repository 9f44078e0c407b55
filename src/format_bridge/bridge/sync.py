"""Synchronous bridge — blocking ``format()`` over the async worker.

Usage::

    from format_bridge.bridge import get_bridge

    text = get_bridge().format("const x=1", {"parser": "babel"}, file_path="a.js")

The calling thread blocks on the worker's future (a condition-variable wait,
not a poll) while a dedicated lock keeps each dispatch-and-wait sequence
whole: concurrent callers queue on the lock and never interleave.
"""

from __future__ import annotations

import atexit
import concurrent.futures
import logging
import threading
from typing import Any, Callable, Mapping, Optional

from format_bridge.contracts.load import validate_internal
from format_bridge.core.config import BridgeConfig
from format_bridge.engines import FormatEngine, create_engine
from format_bridge.errors import BridgeTimeoutError, BridgeTransportError, FormatSyntaxError
from format_bridge.model.format_result import (
    EngineFault,
    FormatRequest,
    Formatted,
    InputFault,
)

from .worker import FormatterWorker

_logger = logging.getLogger(__name__)


class SyncBridge:
    """Blocking front end of a ``FormatterWorker``.

    Construction starts the worker thread; keep one instance per process
    (see ``get_bridge``).
    """

    def __init__(
        self,
        config: Optional[BridgeConfig] = None,
        *,
        engine_factory: Optional[Callable[[], FormatEngine]] = None,
    ) -> None:
        self.config = config or BridgeConfig.from_env()
        factory = engine_factory or (lambda: create_engine(self.config))
        self._worker = FormatterWorker(factory)
        self._lock = threading.Lock()
        self._worker.start()

    def format(
        self,
        source_text: str,
        options: Optional[Mapping[str, Any]] = None,
        *,
        file_path: Optional[str] = None,
    ) -> str:
        """Return *source_text* formatted by the engine.

        Raises
        ------
        FormatSyntaxError
            The engine could not parse *source_text*.
        BridgeTimeoutError
            No answer within ``config.timeout`` seconds.
        BridgeTransportError
            The worker is not running.
        Exception
            Any other engine failure, re-raised unchanged.
        """
        opts = dict(options or {})
        if file_path is None:
            file_path = str(opts.get("filepath") or "")
        request = FormatRequest(source_text=source_text, file_path=file_path, options=opts)
        validate_internal(request.to_dict(), "format_request.schema.json")

        timeout = self.config.timeout
        with self._lock:
            future = self._worker.submit(request)
            try:
                result = future.result(timeout=timeout)
            except concurrent.futures.TimeoutError:
                future.cancel()
                _logger.warning(
                    "Formatter timed out after %.0fs on %r", timeout, file_path
                )
                raise BridgeTimeoutError(timeout) from None
            except concurrent.futures.CancelledError as exc:
                raise BridgeTransportError("format request was cancelled") from exc

        if isinstance(result, Formatted):
            return result.text
        if isinstance(result, InputFault):
            raise FormatSyntaxError(
                result.message, loc=result.location, code_frame=result.code_frame
            )
        if isinstance(result, EngineFault):
            raise result.error
        raise BridgeTransportError(f"unexpected worker reply: {result!r}")

    def close(self) -> None:
        # No dispatch lock here: a caller blocked in format() must not stall
        # shutdown.  Its pending request is cancelled by the worker.
        self._worker.close()

    def __enter__(self) -> "SyncBridge":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


# ── process-wide instance ───────────────────────────────────────────

_bridge: Optional[SyncBridge] = None
_bridge_lock = threading.Lock()


def get_bridge(config: Optional[BridgeConfig] = None) -> SyncBridge:
    """Return the process-wide bridge, creating it on first use.

    *config* only matters for the call that creates the bridge.
    """
    global _bridge
    if _bridge is None:
        with _bridge_lock:
            if _bridge is None:
                _logger.debug("Creating process-wide format bridge")
                _bridge = SyncBridge(config)
    return _bridge


def shutdown_bridge() -> None:
    """Close and forget the process-wide bridge, if one exists."""
    global _bridge
    with _bridge_lock:
        bridge, _bridge = _bridge, None
    if bridge is not None:
        bridge.close()


atexit.register(shutdown_bridge)
