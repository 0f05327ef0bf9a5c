"""Inspection of the commands, scripts and tools an OpenCode plugin ships."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from itertools import chain
from pathlib import Path

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_EXTENSIONS = ("js", "ts")


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _contains_name(names: list[str], name: str) -> bool:
    needle = _ascii_lower(name.strip())
    return bool(needle) and any(_ascii_lower(item) == needle for item in names)


def _file_stems(directory: Path, extension: str) -> list[str]:
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return []
    return [
        path.stem
        for path in entries
        if path.is_file() and path.suffix and _ascii_lower(path.suffix[1:]) == extension
    ]


def _all_stems(directory: Path) -> list[str]:
    if not directory.is_dir():
        return []
    return list(chain.from_iterable(_file_stems(directory, ext) for ext in _EXTENSIONS))


@dataclass
class OpencodePluginInspection:
    """Names of a plugin's commands, scripts and tools."""

    commands: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)

    def has_command(self, name: str) -> bool:
        """Whether a command of that name exists, ignoring ASCII case."""
        return _contains_name(self.commands, name)

    def has_script(self, name: str) -> bool:
        """Whether a script of that name exists, ignoring ASCII case."""
        return _contains_name(self.scripts, name)

    def has_tool(self, name: str) -> bool:
        """Whether a tool of that name exists, ignoring ASCII case."""
        return _contains_name(self.tools, name)


class FilesystemPluginInspector:
    """Lists component names from a plugin directory."""

    def inspect(self, plugin_dir: Path | str) -> OpencodePluginInspection:
        """Sorted, de-duplicated component names of a plugin."""
        plugin_dir = Path(plugin_dir)
        return OpencodePluginInspection(
            commands=sorted(set(_all_stems(plugin_dir / "commands"))),
            scripts=sorted(set(_all_stems(plugin_dir / "scripts"))),
            tools=sorted(set(_all_stems(plugin_dir / "tools"))),
        )


class ComponentPathSource(Enum):
    """Where a component path was taken from."""

    DEFAULT = "default"
    MANIFEST = "manifest"


@dataclass(frozen=True)
class OpencodePluginComponentPath:
    """A hook or MCP file referenced by a plugin."""

    path: Path
    source: ComponentPathSource
    exists: bool


@dataclass(frozen=True)
class PluginComponentFile:
    """A named command, script or tool and its entry file."""

    name: str
    path: Path


@dataclass(frozen=True)
class OpencodeComponentCounts:
    """How many components of each kind a plugin has."""

    commands: int = 0
    scripts: int = 0
    tools: int = 0
    hook_files: int = 0
    mcp_files: int = 0


@dataclass
class OpencodePluginComponents:
    """All components discovered in a plugin directory."""

    commands: list[PluginComponentFile] = field(default_factory=list)
    scripts: list[PluginComponentFile] = field(default_factory=list)
    tools: list[PluginComponentFile] = field(default_factory=list)
    hook_files: list[OpencodePluginComponentPath] = field(default_factory=list)
    mcp_files: list[OpencodePluginComponentPath] = field(default_factory=list)

    def counts(self) -> OpencodeComponentCounts:
        """Number of components of each kind."""
        return OpencodeComponentCounts(
            commands=len(self.commands),
            scripts=len(self.scripts),
            tools=len(self.tools),
            hook_files=len(self.hook_files),
            mcp_files=len(self.mcp_files),
        )


def _component_files(directory: Path) -> list[PluginComponentFile]:
    return [
        PluginComponentFile(name=name, path=directory / f"{name}.js")
        for name in _all_stems(directory)
    ]


def discover_plugin_components(plugin_dir: Path | str) -> OpencodePluginComponents:
    """Find the commands, scripts and tools of a plugin directory."""
    plugin_dir = Path(plugin_dir)
    return OpencodePluginComponents(
        commands=_component_files(plugin_dir / "commands"),
        scripts=_component_files(plugin_dir / "scripts"),
        tools=_component_files(plugin_dir / "tools"),
    )


class FilesystemPluginComponentInspector:
    """Discovers plugin components by scanning the filesystem."""

    def inspect_components(self, plugin_dir: Path | str) -> OpencodePluginComponents:
        """Components found in the plugin directory."""
        return discover_plugin_components(plugin_dir)