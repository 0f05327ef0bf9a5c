"""Parser for the JSON event lines that OpenCode prints."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class RenderKind(Enum):
    """How a rendered line should be displayed."""

    ASSISTANT = "assistant"
    REASONING = "reasoning"
    TOOL_CALL = "tool_call"
    TOOL_OUTPUT = "tool_output"
    TOOL_OUTPUT_DELTA = "tool_output_delta"
    APPROVAL = "approval"
    STATUS = "status"
    PROGRESS = "progress"
    SUBAGENT = "subagent"
    ERROR = "error"
    MCP = "mcp"
    TODO = "todo"


@dataclass(frozen=True)
class RenderLine:
    """A line of text to show, with its kind."""

    kind: RenderKind
    text: str


@dataclass(frozen=True)
class ToolCallBegin:
    """An agent tool call has started."""

    call_id: str
    tool: str
    detail: Optional[str] = None
    source: str = "agent"


@dataclass
class ParseResult:
    """Everything a single output line yielded."""

    events: list[ToolCallBegin] = field(default_factory=list)
    lines: list[RenderLine] = field(default_factory=list)
    output_buffer_text: Optional[str] = None
    tool_name: Optional[str] = None
    latest_response: Optional[str] = None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _get_str(obj: dict, key: str) -> Optional[str]:
    value = obj.get(key)
    return value if isinstance(value, str) else None


class OpencodeEventParser:
    """Turns OpenCode output lines into events and render lines."""

    def parse_line(self, line: str) -> ParseResult:
        """Parse one line of output, JSON or plain text."""
        result = ParseResult()
        try:
            value = json.loads(line, parse_constant=_reject_constant)
        except ValueError:
            trimmed = line.strip()
            if trimmed:
                result.lines.append(RenderLine(RenderKind.ASSISTANT, line))
                result.latest_response = trimmed
            return result

        if isinstance(value, dict):
            self._parse_json_event(value, result)
        else:
            text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
            result.lines.append(RenderLine(RenderKind.ASSISTANT, text))
            result.latest_response = text
        return result

    def _parse_json_event(self, event: dict, result: ParseResult) -> None:
        event_type = _get_str(event, "type")
        if event_type == "tool_use":
            tool = _get_str(event, "tool")
            if tool is not None:
                result.tool_name = tool
                call_id = _get_str(event, "id") or "unknown"
                if _get_str(event, "id") == "":
                    call_id = ""
                result.events.append(ToolCallBegin(call_id=call_id, tool=tool))
            result.latest_response = _get_str(event, "input")
        elif event_type == "tool_result":
            output = _get_str(event, "output")
            if output is not None:
                result.output_buffer_text = output
        elif event_type == "message":
            text = _get_str(event, "text")
            if text is not None:
                result.lines.append(RenderLine(RenderKind.ASSISTANT, text))
                result.latest_response = text
        elif event_type == "thinking":
            text = _get_str(event, "text")
            if text is not None:
                result.lines.append(RenderLine(RenderKind.ASSISTANT, f"[Thinking] {text}"))
        elif event_type == "status":
            text = _get_str(event, "text")
            if text is not None:
                result.lines.append(RenderLine(RenderKind.STATUS, text))
        elif event_type == "error":
            text = _get_str(event, "message")
            if text is not None:
                result.lines.append(RenderLine(RenderKind.ASSISTANT, f"[Error] {text}"))