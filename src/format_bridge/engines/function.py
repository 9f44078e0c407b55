"""Adapt a plain callable into a ``FormatEngine``."""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Callable, Mapping


class FunctionEngine:
    """Wrap ``fn(text, options) -> str``.

    Coroutine functions are awaited directly.  Blocking callables run in the
    event loop's default executor so they never stall the worker loop.

    Cancelling a request (bridge timeout) cannot interrupt a blocking
    callable already running in the executor; it runs to completion in the
    background while later requests proceed, possibly concurrently with it.
    Wrapped callables must therefore be pure functions of their arguments.
    """

    def __init__(self, fn: Callable[..., Any]) -> None:
        self._fn = fn
        self._is_async = inspect.iscoroutinefunction(fn)

    async def format(self, text: str, options: Mapping[str, Any]) -> str:
        if self._is_async:
            return await self._fn(text, dict(options))
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self._fn, text, dict(options))
        )
