"""Incremental parser that pulls complete JSON values out of streamed text."""

from __future__ import annotations

import json
from typing import Any


class JsonParseError(ValueError):
    """Raised when buffered data can never form valid JSON."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


class IncrementalJsonParser:
    """Buffers fragments and yields each complete JSON object or array.

    Handles values spanning several chunks, several values in one chunk,
    and braces or brackets inside strings.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._reset_state()

    def _reset_state(self) -> None:
        self._brace_depth = 0
        self._bracket_depth = 0
        self._in_string = False
        self._escape_next = False

    def feed(self, chunk: str) -> list[Any]:
        """Add a chunk and return the values it completed."""
        results: list[Any] = []
        for ch in chunk:
            self._buffer += ch

            if self._escape_next:
                self._escape_next = False
                continue

            closed = False
            if ch == "\\" and self._in_string:
                self._escape_next = True
            elif ch == '"':
                self._in_string = not self._in_string
            elif self._in_string:
                continue
            elif ch == "{":
                self._brace_depth += 1
            elif ch == "}":
                self._brace_depth -= 1
                closed = True
            elif ch == "[":
                self._bracket_depth += 1
            elif ch == "]":
                self._bracket_depth -= 1
                closed = True

            if closed and self._brace_depth == 0 and self._bracket_depth == 0:
                found, value = self._try_parse()
                if found:
                    results.append(value)
        return results

    def _try_parse(self) -> tuple[bool, Any]:
        trimmed = self._buffer.strip()
        if not trimmed:
            self._buffer = ""
            return False, None
        try:
            value = json.loads(trimmed, parse_constant=_reject_constant)
        except ValueError as exc:
            if self._brace_depth < 0 or self._bracket_depth < 0:
                self.clear()
                raise JsonParseError(f"Invalid JSON: {exc}") from exc
            return False, None
        self.clear()
        return True, value

    def buffer_len(self) -> int:
        """Size in bytes of the data still buffered."""
        return len(self._buffer.encode("utf-8"))

    def clear(self) -> None:
        """Drop buffered data and reset the parser."""
        self._buffer = ""
        self._reset_state()