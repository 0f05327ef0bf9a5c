"""Command-line construction for the OpenCode executable."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class OpencodeOptions:
    """Options passed through to `opencode run`."""

    continue_session: bool = False
    session_id: Optional[str] = None
    fork_session: bool = False
    variant: Optional[str] = None
    agent: Optional[str] = None
    format: Optional[str] = None
    thinking: bool = False
    title: Optional[str] = None
    attach: Optional[str] = None
    dir: Optional[Path] = None
    port: Optional[int] = None
    files: list[Path] = field(default_factory=list)


def opencode_command() -> str:
    """Name of the OpenCode executable on this platform."""
    return "opencode.cmd" if sys.platform == "win32" else "opencode"


def build_opencode_args(prompt: str, model: str, options: OpencodeOptions) -> list[str]:
    """Build the argument list for `opencode run`, ending with the prompt."""
    args = ["run"]

    if options.continue_session:
        args.append("--continue")
    if options.session_id is not None:
        args += ["--session", options.session_id]
    if options.fork_session:
        args.append("--fork")

    if model:
        args += ["--model", model]

    valued = [
        ("--variant", options.variant),
        ("--agent", options.agent),
        ("--format", options.format),
    ]
    args += [part for flag, value in valued if value is not None for part in (flag, value)]

    if options.thinking:
        args.append("--thinking")

    if options.title is not None:
        args += ["--title", options.title]
    if options.attach is not None:
        args += ["--attach", options.attach]
    if options.dir is not None:
        args += ["--dir", str(options.dir)]
    if options.port is not None:
        args += ["--port", str(options.port)]

    for file in options.files:
        args += ["--file", str(file)]

    args.append(prompt)
    return args