"""Shared fixtures: in-process fake engines behind a real SyncBridge."""

from __future__ import annotations

from typing import Callable

import pytest

from format_bridge.bridge.sync import SyncBridge
from format_bridge.core.config import BridgeConfig
from format_bridge.engines.function import FunctionEngine


def semicolon_format(text: str, options: dict) -> str:
    """Toy formatter: spaces around ``=``, trailing ``;`` and newline per line."""
    lines = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        line = " = ".join(part.strip() for part in line.split("="))
        if not line.endswith(";"):
            line += ";"
        lines.append(line)
    return "".join(f"{ln}\n" for ln in lines)


@pytest.fixture
def make_bridge():
    """Build SyncBridges around callables; all are closed after the test."""
    bridges: list[SyncBridge] = []

    def _make(fn: Callable, *, timeout: float | None = 5.0) -> SyncBridge:
        bridge = SyncBridge(
            BridgeConfig(timeout=timeout),
            engine_factory=lambda: FunctionEngine(fn),
        )
        bridges.append(bridge)
        return bridge

    yield _make

    for bridge in bridges:
        bridge.close()


@pytest.fixture
def toy_bridge(make_bridge) -> SyncBridge:
    return make_bridge(semicolon_format)
