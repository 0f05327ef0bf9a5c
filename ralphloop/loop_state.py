"""State file and console markers of the OpenCode ralph-loop plugin."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

RALPH_LOOP_STATE_FILE = "ralph-loop.local.md"

_ITERATION_PREFIX = "\U0001f504 Ralph iteration "
_PROMISE_PREFIX = "Ralph loop: Completion promise detected: "
_MAX_ITERATIONS_PREFIX = "Ralph loop: Max iterations ("

_ANSI_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[@-Z\\-_]"
)
_U32_RE = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class PromiseDetected:
    """The loop stopped because the completion promise was seen."""

    promise: str


@dataclass(frozen=True)
class MaxIterations:
    """The loop stopped after reaching its iteration limit."""

    max_iterations: int


@dataclass(frozen=True)
class LoopWarning:
    """The loop reported a warning."""

    message: str


@dataclass(frozen=True)
class IterationAdvanced:
    """The loop started a new iteration."""

    iteration: int


OpencodeLoopOutcome = Union[PromiseDetected, MaxIterations, LoopWarning]
OpencodeLoopEvent = Union[IterationAdvanced, PromiseDetected, MaxIterations, LoopWarning]


@dataclass
class OpencodeLoopState:
    """Contents of the loop state file."""

    active: bool = False
    iteration: int = 0
    max_iterations: int = 0
    completion_promise: Optional[str] = None
    started_at: Optional[str] = None
    prompt: Optional[str] = None


def _strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def _parse_u32(text: str) -> Optional[int]:
    if not _U32_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None


def _lines(text: str) -> list[str]:
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def ralph_state_path(project_dir: Path | str) -> Path:
    """Location of the state file inside a project."""
    return Path(project_dir) / ".opencode" / RALPH_LOOP_STATE_FILE


def write_ralph_state_file(
    project_dir: Path | str,
    prompt: str,
    iteration: int,
    max_iterations: int,
    completion_promise: Optional[str] = None,
) -> Path:
    """Write a fresh, active state file and return its path."""
    state_path = ralph_state_path(project_dir)
    state_path.parent.mkdir(parents=True, exist_ok=True)

    promise = (completion_promise or "").strip()
    promise_value = '"{}"'.format(promise.replace('"', '\\"')) if promise else "null"
    started_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    contents = (
        "---\n"
        "active: true\n"
        f"iteration: {iteration}\n"
        f"max_iterations: {max_iterations}\n"
        f"completion_promise: {promise_value}\n"
        f'started_at: "{started_at}"\n'
        "---\n\n"
        f"{prompt}\n"
    )
    state_path.write_bytes(contents.encode("utf-8"))
    return state_path


def clear_ralph_state_file(project_dir: Path | str) -> Optional[int]:
    """Remove the state file, returning the iteration it recorded."""
    state_path = ralph_state_path(project_dir)
    if not state_path.exists():
        return None
    try:
        state = read_ralph_state_file(project_dir)
    except (OSError, UnicodeDecodeError):
        state = None
    iteration = state.iteration if state is not None else None
    state_path.unlink()
    return iteration


def detect_outcome(output: str) -> Optional[OpencodeLoopOutcome]:
    """Find the last loop outcome reported in the output."""
    for line in reversed(_lines(_strip_ansi(output))):
        event = parse_event(line)
        if event is not None and not isinstance(event, IterationAdvanced):
            return event
    return None


def parse_event(line: str) -> Optional[OpencodeLoopEvent]:
    """Recognise a loop marker in a single line of output."""
    trimmed = _strip_ansi(line).strip()

    if trimmed.startswith(_ITERATION_PREFIX):
        words = trimmed[len(_ITERATION_PREFIX):].split()
        if words:
            iteration = _parse_u32(words[0])
            if iteration is not None:
                return IterationAdvanced(iteration)

    if trimmed.startswith(_PROMISE_PREFIX):
        return PromiseDetected(trimmed[len(_PROMISE_PREFIX):])

    if trimmed.startswith(_MAX_ITERATIONS_PREFIX):
        rest = trimmed[len(_MAX_ITERATIONS_PREFIX):]
        maximum = _parse_u32(rest.split(")", 1)[0])
        if maximum is not None:
            return MaxIterations(maximum)

    return None


def read_ralph_state_file(project_dir: Path | str) -> Optional[OpencodeLoopState]:
    """Read and parse the state file, or None if there is none."""
    state_path = ralph_state_path(project_dir)
    if not state_path.exists():
        return None
    return parse_ralph_state(state_path.read_bytes().decode("utf-8"))


def _split_frontmatter(contents: str) -> Optional[tuple[str, str]]:
    trimmed = contents.lstrip()
    if not trimmed.startswith("---"):
        return None
    after_first = trimmed[3:]
    end = after_first.find("\n---\n")
    if end < 0:
        return None
    return after_first[:end], after_first[end + 5:]


def _parse_fields(frontmatter: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    for line in _lines(frontmatter):
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip()] = value.strip()
    return fields


def parse_ralph_state(contents: str) -> Optional[OpencodeLoopState]:
    """Parse state file contents; None if the frontmatter is missing."""
    parts = _split_frontmatter(contents)
    if parts is None:
        return None
    frontmatter, body = parts
    fields = _parse_fields(frontmatter)

    active_text = fields.get("active")
    promise = fields.get("completion_promise")
    started_at = fields.get("started_at")
    prompt = body.strip()

    return OpencodeLoopState(
        active=active_text == "true",
        iteration=_parse_u32(fields.get("iteration", "")) or 0,
        max_iterations=_parse_u32(fields.get("max_iterations", "")) or 0,
        completion_promise=promise.strip('"') if promise is not None and promise != "null" else None,
        started_at=started_at.strip('"') if started_at is not None else None,
        prompt=prompt or None,
    )