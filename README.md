# ralphloop

`ralphloop` provides the pieces needed to drive an OpenCode coding agent in a
repeating "Ralph" loop and to make sense of what it prints. It has no runtime
dependencies.

## Installation

```
pip install ralphloop
```

To run the test suite:

```
pip install "ralphloop[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `ralphloop.prompt` | `prepend_opencode_system_prompt()`, `prepend_opencode_file_edit_prompt()` and `prepend_opencode_full_prompt()` wrap guidance in a `<system>` block ahead of a prompt. |
| `ralphloop.behavior` | `OpencodeOptions`, `opencode_command()` and `build_opencode_args()` for the `opencode run` argument list. |
| `ralphloop.stream` | `OpencodeStreamParser`, which assembles stream-json text deltas into complete lines and reports tool names, tool ids, roles and token usage (`StreamUpdate`, `StreamUsage`). |
| `ralphloop.json_parser` | `IncrementalJsonParser`, which pulls complete JSON objects and arrays out of fragmented input, raising `JsonParseError` on unbalanced data. |
| `ralphloop.parser` | `OpencodeEventParser`, which turns one output line (JSON event or plain text) into a `ParseResult` of `RenderLine`s, `ToolCallBegin` events, tool output and the latest response. |
| `ralphloop.loop_state` | Reads and writes `.opencode/ralph-loop.local.md` (`OpencodeLoopState`) and recognises loop markers: `IterationAdvanced`, `PromiseDetected`, `MaxIterations`. |
| `ralphloop.event_loop` | `NonBlockingEventLoop` tick and input-poll timers for asyncio, and the `StreamState` tracker. |
| `ralphloop.stream_reader` | `AsyncStreamReader`, which reads lines from any object with an async `readline()` and returns `StreamChunk`s. |
| `ralphloop.plugin_catalog` | `OpencodeWorkspace` discovers plugins under `.opencode/plugins` and reads their `package.json` manifests. |
| `ralphloop.plugin_components` | Finds the `.js`/`.ts` commands, scripts and tools a plugin ships. |
| `ralphloop.plugin_summary` | `FilesystemPluginSummaryProvider` summarises a single plugin directory. |
| `ralphloop.plugin_workspace` | `FilesystemOpencodeWorkspaceInspector` summarises a project and any extra directories. |

## Examples

Build the argument list for one iteration:

```python
from ralphloop.behavior import OpencodeOptions, build_opencode_args, opencode_command
from ralphloop.prompt import prepend_opencode_file_edit_prompt

options = OpencodeOptions(continue_session=True, format="json")
prompt = prepend_opencode_file_edit_prompt("Fix the failing tests")
argv = [opencode_command(), *build_opencode_args(prompt, "anthropic/sonnet", options)]
```

Follow a stream of text deltas:

```python
from ralphloop.stream import OpencodeStreamParser

parser = OpencodeStreamParser()
update = parser.process_line('{"delta": {"text": "Line 1\\nLine 2\\n"}}')
print(update.emitted_lines)      # ['Line 1', 'Line 2']
print(parser.assembled_text())   # 'Line 1\nLine 2\n'
```

Keep track of the loop between iterations:

```python
from pathlib import Path
from ralphloop.loop_state import (
    write_ralph_state_file, read_ralph_state_file, detect_outcome, PromiseDetected,
)

write_ralph_state_file(Path("."), "Finish the task", 1, 10, "DONE")
state = read_ralph_state_file(Path("."))
print(state.iteration, state.completion_promise)   # 1 DONE

outcome = detect_outcome("Ralph loop: Completion promise detected: DONE")
assert outcome == PromiseDetected("DONE")
```

Inspect the plugins of a project:

```python
from pathlib import Path
from ralphloop.plugin_catalog import OpencodeWorkspace

workspace = OpencodeWorkspace.discover(Path("."))
if workspace is not None:
    for plugin in workspace.list():
        print(plugin.summary_with_description())
```

## What it does not do

`ralphloop` is a library only. It has no command-line program, it does not
start the `opencode` executable or any other process, and it has no terminal
user interface. `build_opencode_args()` produces an argument list and the
parsers consume output lines; launching the agent, feeding it the prompt and
drawing its output are left to the program that uses these pieces.