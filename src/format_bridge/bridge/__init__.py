"""Blocking bridge from a synchronous caller to the async formatter worker."""

from format_bridge.bridge.sync import SyncBridge, get_bridge, shutdown_bridge
from format_bridge.bridge.worker import FormatterWorker

__all__ = [
    "FormatterWorker",
    "SyncBridge",
    "get_bridge",
    "shutdown_bridge",
]
