"""Formatter worker — owns the async engine on a private event loop.

The worker runs a dedicated daemon thread with its own asyncio loop.  The
engine handle is created lazily on that loop the first time a request
arrives and is reused until the worker is closed.  Only the loop thread ever
touches the engine, so no locking is needed around it.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import threading
from typing import Callable, Optional

from format_bridge.engines import FormatEngine
from format_bridge.errors import BridgeTransportError, FormatSyntaxError
from format_bridge.model.format_result import (
    EngineFault,
    FormatRequest,
    FormatResult,
    Formatted,
    InputFault,
)

_logger = logging.getLogger(__name__)


class FormatterWorker:
    """Run format requests on a background event loop.

    Parameters
    ----------
    engine_factory:
        Zero-argument callable returning a ``FormatEngine``.  Called once,
        on the worker loop, when the first request is processed.
    name:
        Thread name, handy in stack dumps.
    """

    def __init__(
        self,
        engine_factory: Callable[[], FormatEngine],
        *,
        name: str = "format-bridge-worker",
    ) -> None:
        self._engine_factory = engine_factory
        self._engine: Optional[FormatEngine] = None
        self._name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._ready = threading.Event()
        self._closed = False

    # ── lifecycle ───────────────────────────────────────────────────

    @property
    def alive(self) -> bool:
        return (
            not self._closed
            and self._thread is not None
            and self._thread.is_alive()
            and self._loop is not None
            and self._loop.is_running()
        )

    def start(self) -> None:
        """Start the worker thread and wait until its loop is running."""
        if self._closed:
            raise BridgeTransportError("worker has been closed")
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._serve, name=self._name, daemon=True)
        self._thread.start()
        self._ready.wait()
        _logger.debug("Formatter worker %s started", self._name)

    def _serve(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        loop.call_soon(self._ready.set)
        try:
            loop.run_forever()
        finally:
            try:
                loop.run_until_complete(loop.shutdown_asyncgens())
                loop.run_until_complete(loop.shutdown_default_executor())
            finally:
                loop.close()

    def close(self, timeout: Optional[float] = 10.0) -> None:
        """Cancel in-flight requests, tear down the engine, stop the loop.

        Callers still waiting on a cancelled request see their future
        cancelled instead of blocking forever.
        """
        if self._closed:
            return
        self._closed = True
        loop, thread = self._loop, self._thread
        if loop is None or thread is None or not thread.is_alive():
            return
        future = asyncio.run_coroutine_threadsafe(self._shutdown(), loop)
        try:
            future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            _logger.warning("Worker did not shut down within %ss", timeout)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout)
        _logger.debug("Formatter worker %s stopped", self._name)

    async def _shutdown(self) -> None:
        current = asyncio.current_task()
        pending = [t for t in asyncio.all_tasks() if t is not current]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        engine, self._engine = self._engine, None
        aclose = getattr(engine, "aclose", None)
        if aclose is not None:
            await aclose()

    # ── requests ────────────────────────────────────────────────────

    def submit(self, request: FormatRequest) -> concurrent.futures.Future:
        """Schedule *request* on the worker loop and return its future."""
        if not self.alive:
            raise BridgeTransportError("formatter worker is not running")
        try:
            return asyncio.run_coroutine_threadsafe(self.run(request), self._loop)
        except RuntimeError as exc:  # loop closed between the check and the call
            raise BridgeTransportError(str(exc)) from exc

    def _get_engine(self) -> FormatEngine:
        if self._engine is None:
            _logger.debug("Creating format engine")
            self._engine = self._engine_factory()
        return self._engine

    async def run(self, request: FormatRequest) -> FormatResult:
        """Format one request and classify the outcome.

        Never raises for engine errors: they come back as ``EngineFault`` with
        the original exception attached so the bridge can re-raise it.
        """
        try:
            engine = self._get_engine()
            text = await engine.format(request.source_text, request.engine_options())
        except FormatSyntaxError as exc:
            return InputFault(message=exc.message, location=exc.loc, code_frame=exc.code_frame)
        except Exception as exc:
            _logger.warning("Format engine failed on %r: %s", request.file_path, exc)
            return EngineFault(error=exc)
        if not isinstance(text, str):
            return EngineFault(
                error=TypeError(f"engine returned {type(text).__name__}, expected str")
            )
        return Formatted(text=text)
