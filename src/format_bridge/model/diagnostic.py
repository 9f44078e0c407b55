"""Diagnostic — the normalized rule output for a single formatting issue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import MessageId


@dataclass(frozen=True, slots=True)
class Location:
    """1-based line/column position in the original text."""

    line: int
    column: int

    def to_dict(self) -> dict:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True, slots=True)
class Edit:
    """Replace ``original[start:end]`` with ``text``.

    Offsets index into the *original* text, never into a partially fixed one.
    """

    start: int
    end: int
    text: str

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid edit range [{self.start}, {self.end})")

    def to_dict(self) -> dict:
        return {"range": [self.start, self.end], "text": self.text}


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Immutable, schema-aligned diagnostic.

    Corresponds to ``diagnostic.schema.json``.  ``fix`` is ``None`` for
    diagnostics that cannot be auto-corrected (input faults); otherwise it
    holds edits sorted by start offset that never overlap.
    """

    message: str
    location: Location
    rule_id: str
    message_id: MessageId
    end_location: Optional[Location] = None
    fix: Optional[tuple[Edit, ...]] = None

    @property
    def fixable(self) -> bool:
        return bool(self.fix)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        d: dict = {
            "rule_id": self.rule_id,
            "message_id": self.message_id.value,
            "message": self.message,
            "location": self.location.to_dict(),
        }
        if self.end_location is not None:
            d["end_location"] = self.end_location.to_dict()
        if self.fix is not None:
            d["fix"] = [e.to_dict() for e in self.fix]
        return d


def offset_to_location(text: str, offset: int) -> Location:
    """Translate a character offset in *text* into a 1-based ``Location``."""
    if offset < 0 or offset > len(text):
        raise ValueError(f"offset {offset} outside text of length {len(text)}")
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return Location(line=line, column=offset - line_start + 1)
