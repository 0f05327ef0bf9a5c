"""Summaries of OpenCode plugins: manifest state plus discovered components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .plugin_catalog import plugin_manifest_path, read_plugin_manifest
from .plugin_components import (
    ComponentPathSource,
    FilesystemPluginComponentInspector,
    OpencodePluginComponentPath,
    OpencodePluginComponents,
)


@dataclass
class OpencodePluginSummary:
    """What is known about one plugin directory."""

    name: str
    version: Optional[str]
    description: Optional[str]
    path: Path
    manifest_present: bool
    manifest_valid: bool
    components: OpencodePluginComponents
    missing_hook_files: list[Path] = field(default_factory=list)
    missing_mcp_files: list[Path] = field(default_factory=list)

    def label(self) -> str:
        """Name, version and description joined for display."""
        label = self.name
        if self.version is not None and self.version.strip():
            label = f"{self.name} v{self.version}"
        if self.description is not None and self.description.strip():
            label = f"{label} - {self.description}"
        return label


def _missing_manifest_paths(files: list[OpencodePluginComponentPath]) -> list[Path]:
    return [
        file.path
        for file in files
        if not file.exists and file.source is ComponentPathSource.MANIFEST
    ]


def _fallback_name(plugin_dir: Path) -> str:
    name = plugin_dir.name
    return name if name and name != ".." else str(plugin_dir)


@dataclass
class FilesystemPluginSummaryProvider:
    """Builds plugin summaries from what is on disk."""

    component_inspector: FilesystemPluginComponentInspector = field(
        default_factory=FilesystemPluginComponentInspector
    )

    def summarize(self, plugin_dir: Path | str) -> OpencodePluginSummary:
        """Summarize a plugin directory."""
        plugin_dir = Path(plugin_dir)
        manifest_present = plugin_manifest_path(plugin_dir).is_file()
        manifest = read_plugin_manifest(plugin_dir)

        if manifest is not None:
            name, version, description = manifest.name, manifest.version, manifest.description
        else:
            name, version, description = _fallback_name(plugin_dir), None, None

        components = self.component_inspector.inspect_components(plugin_dir)
        return OpencodePluginSummary(
            name=name,
            version=version,
            description=description,
            path=plugin_dir,
            manifest_present=manifest_present,
            manifest_valid=manifest_present and manifest is not None,
            components=components,
            missing_hook_files=_missing_manifest_paths(components.hook_files),
            missing_mcp_files=_missing_manifest_paths(components.mcp_files),
        )