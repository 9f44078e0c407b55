"""Runner — the host-side loop: lint a source unit and apply its fixes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from format_bridge.model.diagnostic import Diagnostic, Edit

if TYPE_CHECKING:
    from format_bridge.rule import FormatRule

_logger = logging.getLogger(__name__)

# Same cap a lint host uses for repeated fix passes.
_DEFAULT_MAX_PASSES = 10


@dataclass
class FixOutcome:
    """Result of ``fix_source``."""

    output: str
    passes: int
    fixed: bool
    remaining: list[Diagnostic] = field(default_factory=list)


def apply_edits(text: str, edits: Iterable[Edit]) -> str:
    """Apply *edits* (offsets into *text*) left to right.

    Raises ``ValueError`` if the edits overlap or fall outside *text*.
    """
    out: list[str] = []
    cursor = 0
    for edit in sorted(edits, key=lambda e: (e.start, e.end)):
        if edit.start < cursor:
            raise ValueError(f"overlapping edit at offset {edit.start}")
        if edit.end > len(text):
            raise ValueError(f"edit [{edit.start}, {edit.end}) exceeds text length {len(text)}")
        out.append(text[cursor:edit.start])
        out.append(edit.text)
        cursor = edit.end
    out.append(text[cursor:])
    return "".join(out)


def _rule(rule: Optional[FormatRule]) -> FormatRule:
    if rule is not None:
        return rule
    from format_bridge.rule import FormatRule

    return FormatRule()


def lint_source(
    text: str,
    file_path: str,
    options: Mapping[str, Any],
    *,
    rule: Optional[FormatRule] = None,
) -> list[Diagnostic]:
    """Run the format rule once over *text*."""
    return _rule(rule).check(text, file_path, options)


def fix_source(
    text: str,
    file_path: str,
    options: Mapping[str, Any],
    *,
    rule: Optional[FormatRule] = None,
    max_passes: int = _DEFAULT_MAX_PASSES,
) -> FixOutcome:
    """Lint and apply fixes until the text stops changing.

    Stops early when a pass yields no fixable diagnostics (including a
    parsing error, which carries no fix).
    """
    rule = _rule(rule)
    output = text
    passes = 0
    diagnostics: list[Diagnostic] = []
    while passes < max_passes:
        diagnostics = rule.check(output, file_path, options)
        edits = [e for d in diagnostics if d.fix for e in d.fix]
        if not edits:
            break
        passes += 1
        output = apply_edits(output, edits)
        _logger.debug("Fix pass %d on %s applied %d edit(s)", passes, file_path, len(edits))
    else:
        diagnostics = rule.check(output, file_path, options)
        _logger.warning("%s still not stable after %d fix passes", file_path, max_passes)

    return FixOutcome(
        output=output,
        passes=passes,
        fixed=output != text,
        remaining=diagnostics,
    )
