import json

import pytest

from ralphloop.stream import OpencodeStreamParser, StreamUsage


def test_assembles_text_deltas():
    parser = OpencodeStreamParser()
    update1 = parser.process_line(
        '{"type":"content_block_delta","delta":{"type":"text_delta","text":"Hello"}}'
    )
    assert update1.text_delta == "Hello"
    assert parser.assembled_text() == "Hello"

    update2 = parser.process_line(
        '{"type":"content_block_delta","delta":{"type":"text_delta","text":" world"}}'
    )
    assert update2.text_delta == " world"
    assert parser.assembled_text() == "Hello world"
    assert update2.full_text == "Hello world"


def test_emits_complete_lines():
    parser = OpencodeStreamParser()
    update = parser.process_line(
        '{"type":"content_block_delta","delta":{"type":"text_delta","text":"Line 1\\nLine 2\\n"}}'
    )
    assert update.emitted_lines == ["Line 1", "Line 2"]


def test_extracts_tool_use():
    parser = OpencodeStreamParser()
    update = parser.process_line(
        '{"type":"content_block_start","content_block":{"type":"tool_use","id":"tu_1","name":"Read"}}'
    )
    assert update.tool_name == "Read"
    assert update.tool_id == "tu_1"


def test_extracts_usage():
    parser = OpencodeStreamParser()
    update = parser.process_line(
        '{"type":"message_delta","usage":{"input_tokens":500,"output_tokens":100}}'
    )
    assert update.usage.input_tokens == 500
    assert update.usage.output_tokens == 100
    assert update.usage.cache_read_input_tokens is None


def test_extracts_cache_read_tokens():
    parser = OpencodeStreamParser()
    update = parser.process_line(
        '{"usage":{"input_tokens":1,"output_tokens":2,"cache_read_input_tokens":3}}'
    )
    assert update.usage == StreamUsage(1, 2, 3)


def test_usage_missing_output_is_ignored():
    parser = OpencodeStreamParser()
    update = parser.process_line('{"usage":{"input_tokens":1}}')
    assert update.usage is None


def test_partial_line_held_until_flushed():
    parser = OpencodeStreamParser()
    first = parser.process_line('{"delta":{"text":"par"}}')
    second = parser.process_line('{"delta":{"text":"tial\\nnext"}}')
    assert first.emitted_lines == []
    assert second.emitted_lines == ["partial"]
    assert parser.flush_pending() == "next"
    assert parser.flush_pending() is None


def test_flush_pending_whitespace_is_dropped():
    parser = OpencodeStreamParser()
    parser.process_line('{"delta":{"text":"   "}}')
    assert parser.flush_pending() is None
    assert parser.assembled_text() == "   "


def test_full_text_from_assistant_message():
    parser = OpencodeStreamParser()
    line = json.dumps(
        {"message": {"role": "assistant", "content": [{"type": "text", "text": "a\nb"}]}}
    )
    update = parser.process_line(line)
    assert update.role == "assistant"
    assert update.text_delta == "a\nb"
    assert update.emitted_lines == ["a", "b"]
    assert update.full_text == "a\nb"

    again = parser.process_line(
        json.dumps({"message": {"role": "assistant", "content": [{"text": "c"}]}})
    )
    assert again.text_delta is None
    assert parser.assembled_text() == "c"


def test_full_text_replaces_pending_line():
    parser = OpencodeStreamParser()
    parser.process_line('{"delta":{"text":"dangling"}}')
    parser.process_line('{"content_block":{"text":"done"}}')
    assert parser.flush_pending() is None
    assert parser.assembled_text() == "done"


def test_non_assistant_text_emitted_without_assembly():
    parser = OpencodeStreamParser()
    update = parser.process_line(
        json.dumps({"message": {"role": "user", "content": [{"text": "hi\nthere"}]}})
    )
    assert update.role == "user"
    assert update.emitted_lines == ["hi\nthere"]
    assert update.text_delta is None
    assert update.full_text is None
    assert parser.assembled_text() == ""


def test_role_match_ignores_case():
    parser = OpencodeStreamParser()
    update = parser.process_line(
        json.dumps({"message": {"role": "ASSISTANT"}, "delta": {"text": "x"}})
    )
    assert update.text_delta == "x"
    assert parser.assembled_text() == "x"


def test_invalid_json_raises():
    parser = OpencodeStreamParser()
    with pytest.raises(json.JSONDecodeError):
        parser.process_line("not json")


def test_non_object_value_yields_empty_update():
    parser = OpencodeStreamParser()
    update = parser.process_line("42")
    assert update.emitted_lines == []
    assert update.text_delta is None
    assert update.usage is None