"""Formatting engines run inside the formatter worker.

An engine is any object with an ``async format(text, options) -> str``
coroutine method.  It may also expose ``async aclose()``, which the worker
awaits when it shuts down.  Bad input is signalled by raising
``format_bridge.errors.FormatSyntaxError``; every other exception is treated
as an engine fault.

Engines are built by name through a small factory registry so the worker can
construct its engine lazily, on its own event loop:

    - ``prettier``: PrettierEngine, the prettier CLI over a subprocess
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping, Protocol

if TYPE_CHECKING:
    from format_bridge.core.config import BridgeConfig


class FormatEngine(Protocol):
    """Every engine must expose an awaitable ``format()``."""

    async def format(self, text: str, options: Mapping[str, Any]) -> str:
        """Return *text* formatted according to *options*."""
        ...


EngineFactory = Callable[["BridgeConfig"], FormatEngine]

_REGISTRY: dict[str, EngineFactory] = {}


def register_engine(name: str, factory: EngineFactory) -> None:
    """Register *factory* under *name*, replacing any previous entry."""
    _REGISTRY[name] = factory


def create_engine(config: BridgeConfig) -> FormatEngine:
    """Build the engine named by ``config.engine``."""
    try:
        factory = _REGISTRY[config.engine]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY)) or "<none>"
        raise ValueError(
            f"unknown format engine {config.engine!r} (registered: {known})"
        ) from None
    return factory(config)


def _prettier_factory(config: BridgeConfig) -> FormatEngine:
    from .prettier import PrettierEngine

    return PrettierEngine(command=config.prettier_command)


register_engine("prettier", _prettier_factory)


# Lazy imports to avoid pulling in asyncio subprocess machinery eagerly
def __getattr__(name: str):
    if name == "FunctionEngine":
        from .function import FunctionEngine
        return FunctionEngine
    if name == "PrettierEngine":
        from .prettier import PrettierEngine
        return PrettierEngine
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
