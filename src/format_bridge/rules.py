"""Canonical rule ID registry.

Single source of truth for the rule IDs attached to every diagnostic the
format rule emits.  Each message template in ``FormatRule.meta`` maps to
exactly one rule ID.

Structure:
  PUBLIC_RULE_IDS       - stable, supported, safe for downstream consumption
  EXPERIMENTAL_RULE_IDS - unstable, may change or be removed
  ALL_RULE_IDS          - union of all buckets (internal use only)
"""

from __future__ import annotations

from format_bridge.model import MessageId

# ── Formatting differences (public) ─────────────────────────────────
FMT_FORMAT_001 = "FMT_FORMAT_001"
FMT_INSERT_001 = "FMT_INSERT_001"
FMT_DELETE_001 = "FMT_DELETE_001"
FMT_REPLACE_001 = "FMT_REPLACE_001"

# ── Input faults (public) ───────────────────────────────────────────
FMT_PARSE_ERROR_001 = "FMT_PARSE_ERROR_001"

# ── Buckets ─────────────────────────────────────────────────────────

PUBLIC_RULE_IDS: list[str] = sorted([
    FMT_FORMAT_001,
    FMT_PARSE_ERROR_001,
])

EXPERIMENTAL_RULE_IDS: list[str] = sorted([
    # Localized fixes from DiffPolicy.MINIMAL
    FMT_DELETE_001,
    FMT_INSERT_001,
    FMT_REPLACE_001,
])

ALL_RULE_IDS: list[str] = sorted(set(PUBLIC_RULE_IDS + EXPERIMENTAL_RULE_IDS))

RULE_ID_BY_MESSAGE: dict[MessageId, str] = {
    MessageId.FORMAT: FMT_FORMAT_001,
    MessageId.INSERT: FMT_INSERT_001,
    MessageId.DELETE: FMT_DELETE_001,
    MessageId.REPLACE: FMT_REPLACE_001,
    MessageId.PARSE_ERROR: FMT_PARSE_ERROR_001,
}


def _assert_rule_registry_invariants() -> None:
    """Fail fast on invariant violations.

    Called at import time so CI and local runs catch issues immediately.
    """
    import re

    rule_re = re.compile(r"^[A-Z]{2,4}_[A-Z][A-Z0-9_]*_[0-9]{3}$")

    def _check_bucket(name: str, ids: list[str]) -> None:
        if ids != sorted(ids):
            raise AssertionError(f"{name} must be sorted")
        if len(ids) != len(set(ids)):
            raise AssertionError(f"{name} must contain unique IDs")
        bad = [x for x in ids if not rule_re.match(x)]
        if bad:
            raise AssertionError(f"{name} contains invalid rule IDs: {bad}")

    _check_bucket("PUBLIC_RULE_IDS", PUBLIC_RULE_IDS)
    _check_bucket("EXPERIMENTAL_RULE_IDS", EXPERIMENTAL_RULE_IDS)
    _check_bucket("ALL_RULE_IDS", ALL_RULE_IDS)

    overlap = set(PUBLIC_RULE_IDS) & set(EXPERIMENTAL_RULE_IDS)
    if overlap:
        raise AssertionError(
            f"Rule ID buckets must be disjoint; overlaps: {sorted(overlap)}"
        )

    # Every message template needs a registered rule ID, and vice versa.
    missing = set(MessageId) - set(RULE_ID_BY_MESSAGE)
    if missing:
        raise AssertionError(
            f"Message IDs without a rule ID: {sorted(m.value for m in missing)}"
        )
    if set(RULE_ID_BY_MESSAGE.values()) != set(ALL_RULE_IDS):
        raise AssertionError("RULE_ID_BY_MESSAGE must cover exactly ALL_RULE_IDS")


_assert_rule_registry_invariants()
