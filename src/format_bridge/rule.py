"""Format rule — the entry point a synchronous lint host calls per file.

The host hands over ``(source_text, file_path, options)`` and gets back a list
of diagnostics.  Formatting differences come back fixable; an input the
engine cannot parse comes back as one non-fixable ``Parsing error``
diagnostic; any other failure propagates.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from format_bridge.bridge.sync import SyncBridge, get_bridge
from format_bridge.contracts.load import load_schema, validate_instance
from format_bridge.errors import FormatSyntaxError
from format_bridge.model import DiffPolicy, MessageId
from format_bridge.model.diagnostic import Diagnostic
from format_bridge.reporting.diff import MESSAGES, diff
from format_bridge.reporting.faults import classify

_logger = logging.getLogger(__name__)

OPTIONS_SCHEMA = "rule_options.schema.json"

# Consumed by the rule itself, never forwarded to the engine.
_RULE_ONLY_OPTIONS = frozenset({"diffPolicy"})


class FormatRule:
    """Report code that the formatting engine would change.

    ``bridge`` defaults to the process-wide ``get_bridge()`` instance,
    resolved on first use.
    """

    id: str = "format"
    version: str = "1.0.0"

    meta: dict[str, Any] = {
        "type": "layout",
        "docs": {
            "description": "Use the formatting engine to format code",
            "category": "Stylistic",
        },
        "fixable": "whitespace",
        "messages": {
            **{mid.value: text for mid, text in MESSAGES.items()},
            MessageId.PARSE_ERROR.value: "Parsing error: {message}",
        },
    }

    def __init__(self, bridge: Optional[SyncBridge] = None) -> None:
        self._bridge = bridge

    @property
    def schema(self) -> dict[str, Any]:
        return load_schema(OPTIONS_SCHEMA)

    @property
    def bridge(self) -> SyncBridge:
        if self._bridge is None:
            self._bridge = get_bridge()
        return self._bridge

    def check(
        self,
        source_text: str,
        file_path: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> list[Diagnostic]:
        """Format *source_text* and report how it differs from the original.

        Raises ``jsonschema.ValidationError`` for invalid *options*, and
        re-raises every engine fault that is not an input syntax error.
        """
        opts = dict(options or {})
        validate_instance(opts, OPTIONS_SCHEMA)

        policy = DiffPolicy(opts.get("diffPolicy", DiffPolicy.WHOLE.value))
        engine_options = {
            "filepath": file_path,
            **{k: v for k, v in opts.items() if k not in _RULE_ONLY_OPTIONS},
        }

        try:
            formatted = self.bridge.format(source_text, engine_options, file_path=file_path)
        except FormatSyntaxError as exc:
            _logger.debug("Input fault in %s: %s", file_path, exc.message)
            return [classify(exc)]

        return diff(source_text, formatted, policy)
