"""Reporting turns formatter output into diagnostics.

- ``diff``: formatted text -> fixable diagnostics
- ``classify``: input fault -> non-fixable diagnostic (other faults re-raise)
"""

from format_bridge.reporting.diff import diff, iter_differences, show_invisibles
from format_bridge.reporting.faults import classify, sanitize_message

__all__ = [
    "classify",
    "diff",
    "iter_differences",
    "sanitize_message",
    "show_invisibles",
]
