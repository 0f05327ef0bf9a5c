"""Line parser for the OpenCode stream-json output: assembles text deltas
and filters by message role."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


@dataclass(frozen=True)
class StreamUsage:
    """Token usage reported by a stream event."""

    input_tokens: int
    output_tokens: int
    cache_read_input_tokens: Optional[int] = None


@dataclass
class StreamUpdate:
    """What a single stream line contributed."""

    emitted_lines: list[str] = field(default_factory=list)
    text_delta: Optional[str] = None
    full_text: Optional[str] = None
    tool_name: Optional[str] = None
    tool_id: Optional[str] = None
    role: Optional[str] = None
    usage: Optional[StreamUsage] = None


def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def _get_str(value: Any, key: str) -> Optional[str]:
    item = _get(value, key)
    return item if isinstance(item, str) else None


def _as_i64(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if _I64_MIN <= value <= _I64_MAX else None


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _extract_role(value: Any) -> Optional[str]:
    return _get_str(_get(value, "message"), "role")


def _is_assistant_role(role: Optional[str]) -> bool:
    return role is None or role.lower() == "assistant"


def _extract_text_delta(value: Any) -> Optional[str]:
    return _get_str(_get(value, "delta"), "text")


def _extract_full_text(value: Any) -> Optional[str]:
    content = _get(_get(value, "message"), "content")
    if isinstance(content, list):
        for item in content:
            text = _get_str(item, "text")
            if text is not None:
                return text
    return _get_str(_get(value, "content_block"), "text")


def _extract_usage(value: Any) -> Optional[StreamUsage]:
    usage = _get(value, "usage")
    if usage is None:
        return None
    input_tokens = _as_i64(_get(usage, "input_tokens"))
    output_tokens = _as_i64(_get(usage, "output_tokens"))
    if input_tokens is None or output_tokens is None:
        return None
    return StreamUsage(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cache_read_input_tokens=_as_i64(_get(usage, "cache_read_input_tokens")),
    )


class OpencodeStreamParser:
    """Stateful parser that accumulates assistant text across stream lines."""

    def __init__(self) -> None:
        self._assembled = ""
        self._pending_line = ""

    def process_line(self, line: str) -> StreamUpdate:
        """Parse one JSON line; raises json.JSONDecodeError on invalid JSON."""
        return self._process_value(json.loads(line))

    def assembled_text(self) -> str:
        """All assistant text assembled so far."""
        return self._assembled

    def flush_pending(self) -> Optional[str]:
        """Return and clear the unterminated trailing line, if it has content."""
        pending, self._pending_line = self._pending_line, ""
        return pending if pending.strip() else None

    def _process_value(self, value: Any) -> StreamUpdate:
        role = _extract_role(value)
        update = StreamUpdate(
            role=role,
            usage=_extract_usage(value),
            tool_name=_get_str(_get(value, "content_block"), "name"),
            tool_id=_get_str(_get(value, "content_block"), "id"),
        )

        if _is_assistant_role(role):
            delta = _extract_text_delta(value)
            if delta is not None:
                update.emitted_lines = self._append_text(delta)
                update.text_delta = delta
                update.full_text = self._assembled
                return update

            full_text = _extract_full_text(value)
            if full_text is not None:
                update.text_delta, update.emitted_lines = self._apply_full_text(full_text)
                update.full_text = self._assembled
                return update

        full_text = _extract_full_text(value)
        if full_text is not None:
            update.emitted_lines = [full_text]
        return update

    def _append_text(self, delta: str) -> list[str]:
        self._assembled += delta
        *lines, self._pending_line = (self._pending_line + delta).split("\n")
        return lines

    def _apply_full_text(self, full_text: str) -> tuple[Optional[str], list[str]]:
        delta = full_text if not self._assembled else None
        self._assembled = full_text
        self._pending_line = ""
        return delta, _split_lines(full_text)