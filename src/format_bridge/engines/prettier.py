"""Prettier engine — drives the prettier CLI through an asyncio subprocess.

Usage::

    engine = PrettierEngine(command=("npx", "prettier"))
    formatted = await engine.format("const x=1", {"parser": "babel"})

Options are rendered as CLI flags: ``{"printWidth": 100}`` becomes
``--print-width=100``, ``True`` becomes ``--flag`` and ``False`` becomes
``--no-flag``.  ``filepath`` becomes ``--stdin-filepath``.

When prettier cannot parse its input it exits with status 2 and prints
``[error] <file>: SyntaxError: <message> (L:C)`` followed by a code frame on
stderr.  That shape is turned into ``FormatSyntaxError``; anything else is a
``FormatEngineError``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Mapping, Optional, Sequence

from format_bridge.errors import FormatEngineError, FormatSyntaxError
from format_bridge.model.diagnostic import Location

_logger = logging.getLogger(__name__)

_ERROR_PREFIX = "[error] "
_SYNTAX_MARKER = "SyntaxError: "
_LOC_RE = re.compile(r"\((\d+):(\d+)\)$")
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def option_flags(options: Mapping[str, Any]) -> list[str]:
    """Render engine options as prettier CLI flags (``filepath`` excluded)."""
    flags: list[str] = []
    for key in sorted(options):
        if key == "filepath":
            continue
        value = options[key]
        name = _CAMEL_RE.sub("-", key).lower()
        if value is None:
            continue
        if value is True:
            flags.append(f"--{name}")
        elif value is False:
            flags.append(f"--no-{name}")
        elif isinstance(value, (list, tuple)):
            flags.extend(f"--{name}={item}" for item in value)
        else:
            flags.append(f"--{name}={value}")
    return flags


def parse_syntax_error(stderr: str) -> Optional[FormatSyntaxError]:
    """Extract a ``FormatSyntaxError`` from prettier's stderr, if it holds one."""
    lines = [
        ln[len(_ERROR_PREFIX):] if ln.startswith(_ERROR_PREFIX) else ln
        for ln in stderr.splitlines()
    ]
    for i, line in enumerate(lines):
        idx = line.find(_SYNTAX_MARKER)
        if idx < 0:
            continue
        message = line[idx + len(_SYNTAX_MARKER):].rstrip()
        frame_lines = [ln for ln in lines[i + 1:] if ln.strip()]
        code_frame = "\n".join(frame_lines) or None

        loc: Optional[Location] = None
        m = _LOC_RE.search(message)
        if m:
            loc = Location(line=int(m.group(1)), column=int(m.group(2)))

        if code_frame:
            # Keep the message shaped like prettier's own error object:
            # the code frame follows the first line.
            message = f"{message}\n{code_frame}"
        return FormatSyntaxError(message, loc=loc, code_frame=code_frame)
    return None


class PrettierEngine:
    """Format text by piping it through the prettier CLI."""

    def __init__(self, command: Sequence[str] = ("npx", "--no-install", "prettier")) -> None:
        if not command:
            raise ValueError("prettier command must not be empty")
        self.command = tuple(command)

    def build_argv(self, options: Mapping[str, Any]) -> list[str]:
        argv = list(self.command)
        filepath = options.get("filepath")
        if filepath:
            argv.append(f"--stdin-filepath={filepath}")
        argv.extend(option_flags(options))
        return argv

    async def format(self, text: str, options: Mapping[str, Any]) -> str:
        argv = self.build_argv(options)
        _logger.debug("Running %s", " ".join(argv))
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise FormatEngineError(f"cannot start prettier ({argv[0]}): {exc}") from exc

        try:
            stdout, stderr = await proc.communicate(text.encode("utf-8"))
        finally:
            # Cancelled (bridge timeout) or failed mid-pipe: reap the child.
            if proc.returncode is None:
                _logger.warning("Killing prettier (pid %s)", proc.pid)
                proc.kill()
                await proc.wait()
        err_text = stderr.decode("utf-8", errors="replace")

        if proc.returncode == 0:
            return stdout.decode("utf-8")

        syntax_error = parse_syntax_error(err_text)
        if syntax_error is not None:
            raise syntax_error
        raise FormatEngineError(
            f"prettier exited with status {proc.returncode}: {err_text.strip()}"
        )
