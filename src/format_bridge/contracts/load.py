"""Load and validate JSON instances against bundled schemas.

Usage::

    from format_bridge.contracts.load import validate_instance, validate_internal

    validate_instance(options, "rule_options.schema.json")
    validate_internal(request.to_dict(), "format_request.schema.json")
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

# ── public-facing schemas ───────────────────────────────────────────

SCHEMA_DIR = "data/schemas"


def _schema_path(name: str) -> Path:
    """Resolve a public schema.

    Priority:
    1. Canonical ``src/format_bridge/data/schemas/`` (relative to this file)
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("format_bridge") / SCHEMA_DIR / name) as p:
        return p


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a public JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    jsonschema.validate(instance=instance, schema=load_schema(schema_name))


# ── internal schemas (bridge wire protocol, not user-facing) ────────

INTERNAL_SCHEMA_DIR = "data/internal_schemas"


def _internal_schema_path(name: str) -> Path:
    canonical = Path(__file__).resolve().parents[1] / INTERNAL_SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(
        resources.files("format_bridge") / INTERNAL_SCHEMA_DIR / name
    ) as p:
        return p


@lru_cache(maxsize=None)
def load_internal_schema(name: str) -> dict[str, Any]:
    """Load an internal JSON schema by filename."""
    path = _internal_schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_internal(instance: Any, schema_name: str) -> None:
    """Validate *instance* against an internal schema."""
    jsonschema.validate(instance=instance, schema=load_internal_schema(schema_name))
