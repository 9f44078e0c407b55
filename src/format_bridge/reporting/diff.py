"""Diff reporter — turn (original, formatted) into fixable diagnostics.

Two policies:

- ``DiffPolicy.WHOLE``: one diagnostic whose single edit replaces the whole
  original text with the formatted text.
- ``DiffPolicy.MINIMAL``: one diagnostic per localized difference.  Lines
  are matched first; changed line blocks are then refined character by
  character so each edit stays small.  Messages follow the
  ``Insert `x``` / ``Delete `x``` / ``Replace `x` with `y``` convention with
  whitespace made visible.

Either way, applying every edit of every diagnostic (in order) to the
original reproduces the formatted text exactly, and equal inputs produce no
diagnostics at all.
"""

from __future__ import annotations

from difflib import SequenceMatcher
from typing import Iterator

from format_bridge.model import DiffPolicy, MessageId
from format_bridge.model.diagnostic import Diagnostic, Edit, offset_to_location
from format_bridge.rules import RULE_ID_BY_MESSAGE

_INVISIBLES = str.maketrans({" ": "·", "\n": "⏎", "\t": "↹", "\r": "␍"})

MESSAGES: dict[MessageId, str] = {
    MessageId.FORMAT: "Code is not formatted",
    MessageId.INSERT: "Insert `{insert}`",
    MessageId.DELETE: "Delete `{delete}`",
    MessageId.REPLACE: "Replace `{delete}` with `{insert}`",
}


def show_invisibles(text: str) -> str:
    return text.translate(_INVISIBLES)


def _line_starts(lines: list[str]) -> list[int]:
    starts = [0]
    for ln in lines:
        starts.append(starts[-1] + len(ln))
    return starts


def iter_differences(original: str, formatted: str) -> Iterator[Edit]:
    """Yield minimal, sorted, non-overlapping edits from *original* to *formatted*."""
    a_lines = original.splitlines(keepends=True)
    b_lines = formatted.splitlines(keepends=True)
    a_starts = _line_starts(a_lines)
    b_starts = _line_starts(b_lines)

    matcher = SequenceMatcher(None, a_lines, b_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        a_off, a_end = a_starts[i1], a_starts[i2]
        b_chunk = formatted[b_starts[j1]:b_starts[j2]]
        if tag != "replace":
            yield Edit(a_off, a_end, b_chunk)
            continue

        a_chunk = original[a_off:a_end]
        chars = SequenceMatcher(None, a_chunk, b_chunk, autojunk=False)
        for ctag, c1, c2, d1, d2 in chars.get_opcodes():
            if ctag != "equal":
                yield Edit(a_off + c1, a_off + c2, b_chunk[d1:d2])


def _diagnostic(original: str, message_id: MessageId, message: str, edit: Edit) -> Diagnostic:
    return Diagnostic(
        message=message,
        location=offset_to_location(original, edit.start),
        end_location=offset_to_location(original, edit.end),
        rule_id=RULE_ID_BY_MESSAGE[message_id],
        message_id=message_id,
        fix=(edit,),
    )


def _localized(original: str, edit: Edit) -> Diagnostic:
    deleted = original[edit.start:edit.end]
    if not deleted:
        message_id = MessageId.INSERT
    elif not edit.text:
        message_id = MessageId.DELETE
    else:
        message_id = MessageId.REPLACE
    message = MESSAGES[message_id].format(
        insert=show_invisibles(edit.text), delete=show_invisibles(deleted)
    )
    return _diagnostic(original, message_id, message, edit)


def diff(
    original: str,
    formatted: str,
    policy: DiffPolicy = DiffPolicy.WHOLE,
) -> list[Diagnostic]:
    """Report the changes needed to turn *original* into *formatted*."""
    if original == formatted:
        return []

    policy = DiffPolicy(policy)
    if policy is DiffPolicy.WHOLE:
        whole = Edit(0, len(original), formatted)
        return [_diagnostic(original, MessageId.FORMAT, MESSAGES[MessageId.FORMAT], whole)]

    return [_localized(original, edit) for edit in iter_differences(original, formatted)]
