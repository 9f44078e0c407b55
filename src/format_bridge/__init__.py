"""format_bridge — run an async formatter from a synchronous lint pass."""

__all__ = [
    "__version__",
    "FormatRule",
    "Diagnostic",
    "Edit",
    "Location",
    "FormatSyntaxError",
    "FormatEngineError",
    "BridgeConfig",
    "get_bridge",
    "shutdown_bridge",
    "lint_source",
    "fix_source",
    "apply_edits",
]
__version__ = "0.1.0"

from format_bridge.bridge import get_bridge, shutdown_bridge  # noqa: E402, F401
from format_bridge.core.config import BridgeConfig  # noqa: E402, F401
from format_bridge.core.runner import apply_edits, fix_source, lint_source  # noqa: E402, F401
from format_bridge.errors import FormatEngineError, FormatSyntaxError  # noqa: E402, F401
from format_bridge.model.diagnostic import Diagnostic, Edit, Location  # noqa: E402, F401
from format_bridge.rule import FormatRule  # noqa: E402, F401
