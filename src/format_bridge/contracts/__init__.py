"""JSON schema contracts for rule options, diagnostics and the worker protocol."""

from format_bridge.contracts.load import (
    load_internal_schema,
    load_schema,
    validate_instance,
    validate_internal,
)

__all__ = [
    "load_internal_schema",
    "load_schema",
    "validate_instance",
    "validate_internal",
]
