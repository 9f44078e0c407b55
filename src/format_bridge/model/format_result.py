"""Request/response types exchanged between the bridge and the worker.

This is a private protocol: nothing outside ``format_bridge.bridge`` should
depend on the wire shape of ``FormatRequest.to_dict()``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .diagnostic import Location


@dataclass(frozen=True)
class FormatRequest:
    """One unit of work for the formatter.

    ``file_path`` is only a hint for parser inference; the engine never opens
    it.  ``options`` is deep-copied into a read-only mapping so the caller
    cannot mutate a request after it has been sent.
    """

    source_text: str
    file_path: str = ""
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "options", MappingProxyType(copy.deepcopy(dict(self.options)))
        )

    def engine_options(self) -> dict[str, Any]:
        """Options as handed to the engine, with ``filepath`` filled in."""
        opts = dict(self.options)
        if self.file_path:
            opts.setdefault("filepath", self.file_path)
        return opts

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_text": self.source_text,
            "file_path": self.file_path,
            "options": dict(self.options),
        }


@dataclass(frozen=True)
class Formatted:
    text: str


@dataclass(frozen=True)
class InputFault:
    """The engine rejected the input text."""

    message: str
    location: Optional[Location] = None
    code_frame: Optional[str] = None


@dataclass(frozen=True)
class EngineFault:
    """Anything else.  ``error`` is the engine's exception, untouched."""

    error: BaseException


FormatResult = Union[Formatted, InputFault, EngineFault]
