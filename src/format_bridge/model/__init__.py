"""Enums shared across the bridge and reporting layers."""

from __future__ import annotations

from enum import Enum


class DiffPolicy(str, Enum):
    """How the diff reporter splits a formatting change into fixes."""

    WHOLE = "whole"
    MINIMAL = "minimal"


class MessageId(str, Enum):
    """Message template identifiers exposed in the rule's ``meta``."""

    FORMAT = "format"
    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"
    PARSE_ERROR = "parseError"
