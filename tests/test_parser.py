import json

from ralphloop.parser import (
    OpencodeEventParser,
    ParseResult,
    RenderKind,
    RenderLine,
    ToolCallBegin,
)


def parse(line):
    return OpencodeEventParser().parse_line(line)


def test_plain_text_is_assistant_response():
    result = parse("  hello world  ")
    assert result.lines == [RenderLine(RenderKind.ASSISTANT, "  hello world  ")]
    assert result.latest_response == "hello world"
    assert result.events == []


def test_blank_plain_text_yields_nothing():
    assert parse("   ") == ParseResult()


def test_primitive_json_rendered_as_text():
    result = parse("42")
    assert result.lines == [RenderLine(RenderKind.ASSISTANT, "42")]
    assert result.latest_response == "42"


def test_json_string_keeps_quotes():
    result = parse('"hi"')
    assert result.latest_response == '"hi"'


def test_tool_use_event():
    line = json.dumps({"type": "tool_use", "tool": "Read", "id": "c1", "input": "file.txt"})
    result = parse(line)
    assert result.tool_name == "Read"
    assert result.events == [ToolCallBegin(call_id="c1", tool="Read")]
    assert result.latest_response == "file.txt"


def test_tool_use_without_id_uses_unknown():
    result = parse(json.dumps({"type": "tool_use", "tool": "Read"}))
    assert result.events[0].call_id == "unknown"
    assert result.latest_response is None


def test_tool_use_without_tool_has_no_event():
    result = parse(json.dumps({"type": "tool_use", "input": "x"}))
    assert result.events == []
    assert result.tool_name is None
    assert result.latest_response == "x"


def test_tool_result_fills_output_buffer():
    result = parse(json.dumps({"type": "tool_result", "output": "done"}))
    assert result.output_buffer_text == "done"
    assert result.lines == []


def test_message_event():
    result = parse(json.dumps({"type": "message", "text": "answer"}))
    assert result.lines == [RenderLine(RenderKind.ASSISTANT, "answer")]
    assert result.latest_response == "answer"


def test_thinking_event_is_prefixed():
    result = parse(json.dumps({"type": "thinking", "text": "hmm"}))
    assert result.lines == [RenderLine(RenderKind.ASSISTANT, "[Thinking] hmm")]
    assert result.latest_response is None


def test_status_event():
    result = parse(json.dumps({"type": "status", "text": "working"}))
    assert result.lines == [RenderLine(RenderKind.STATUS, "working")]


def test_error_event_is_prefixed():
    result = parse(json.dumps({"type": "error", "message": "boom"}))
    assert result.lines == [RenderLine(RenderKind.ASSISTANT, "[Error] boom")]


def test_unknown_type_and_untyped_objects_are_ignored():
    assert parse(json.dumps({"type": "other", "text": "x"})) == ParseResult()
    assert parse(json.dumps({"text": "x"})) == ParseResult()