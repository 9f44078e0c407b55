"""Fault classifier — input faults become diagnostics, everything else raises."""

from __future__ import annotations

import re

from format_bridge.errors import FormatSyntaxError
from format_bridge.model import MessageId
from format_bridge.model.diagnostic import Diagnostic, Location
from format_bridge.rules import RULE_ID_BY_MESSAGE

_COORD_SUFFIX_RE = re.compile(r" \(\d+:\d+\)\Z")

# Start of the unit, used when the engine reports no position.
_UNIT_START = Location(line=1, column=1)


def sanitize_message(fault: FormatSyntaxError) -> str:
    """Build the user-facing message for an input fault.

    The host renders the location and the surrounding source itself, so the
    engine's code frame and trailing ``(line:column)`` are stripped.
    """
    message = f"Parsing error: {fault.message}"
    if fault.code_frame:
        message = message.replace(f"\n{fault.code_frame}", "")
    message = message.rstrip()
    if fault.loc is not None:
        message = _COORD_SUFFIX_RE.sub("", message)
    return message


def classify(fault: BaseException) -> Diagnostic:
    """Convert an input fault into a non-fixable diagnostic.

    Any other exception is re-raised unchanged: an engine failure must abort
    the lint pass instead of reading as "no problems found".
    """
    if not isinstance(fault, FormatSyntaxError):
        raise fault
    return Diagnostic(
        message=sanitize_message(fault),
        location=fault.loc or _UNIT_START,
        rule_id=RULE_ID_BY_MESSAGE[MessageId.PARSE_ERROR],
        message_id=MessageId.PARSE_ERROR,
    )
