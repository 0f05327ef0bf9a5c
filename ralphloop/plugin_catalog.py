"""Discovery of OpenCode plugins under a project's `.opencode/` directory."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

MANIFEST_FILE = "package.json"


def _nonblank(value: Optional[str]) -> Optional[str]:
    return value if value is not None and value.strip() else None


@dataclass(frozen=True)
class OpencodePluginManifest:
    """The fields of a plugin's package.json that matter here."""

    name: str
    version: Optional[str] = None
    description: Optional[str] = None


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"manifest field {key!r} must be a string")


def _manifest_from_value(data: Any) -> OpencodePluginManifest:
    if not isinstance(data, dict):
        raise ValueError("manifest must be a JSON object")
    name = data.get("name")
    if not isinstance(name, str):
        raise ValueError("manifest needs a string 'name'")
    return OpencodePluginManifest(
        name=name,
        version=_optional_str(data, "version"),
        description=_optional_str(data, "description"),
    )


@dataclass(frozen=True)
class OpencodePluginDescriptor:
    """A plugin found on disk."""

    name: str
    path: Path
    description: Optional[str] = None
    version: Optional[str] = None

    def summary(self) -> str:
        """Name, followed by the version when there is one."""
        version = _nonblank(self.version)
        return f"{self.name} v{version}" if version else self.name

    def summary_with_description(self) -> str:
        """The summary, followed by the description when there is one."""
        description = _nonblank(self.description)
        if description:
            return f"{self.summary()} - {description}"
        return self.summary()


def plugin_manifest_path(plugin_dir: Path | str) -> Path:
    """Location of a plugin's manifest."""
    return Path(plugin_dir) / MANIFEST_FILE


def read_plugin_manifest(plugin_dir: Path | str) -> Optional[OpencodePluginManifest]:
    """Read a plugin's manifest; None if it is missing or invalid."""
    try:
        contents = plugin_manifest_path(plugin_dir).read_bytes().decode("utf-8")
        return _manifest_from_value(json.loads(contents))
    except (OSError, UnicodeDecodeError, ValueError):
        return None


def plugin_manifest_name(plugin_dir: Path | str) -> Optional[str]:
    """The name declared in a plugin's manifest, if it can be read."""
    manifest = read_plugin_manifest(plugin_dir)
    return manifest.name if manifest is not None else None


def _descriptor(plugin_dir: Path, fallback_name: str) -> OpencodePluginDescriptor:
    manifest = read_plugin_manifest(plugin_dir)
    if manifest is None:
        return OpencodePluginDescriptor(name=fallback_name, path=plugin_dir)
    return OpencodePluginDescriptor(
        name=manifest.name,
        path=plugin_dir,
        description=manifest.description,
        version=manifest.version,
    )


@dataclass(frozen=True)
class OpencodeWorkspace:
    """A project's `.opencode/` directory and the plugins it holds."""

    root: Path

    @classmethod
    def discover(cls, project_dir: Path | str) -> Optional[OpencodeWorkspace]:
        """The workspace of a project, or None if it has no `.opencode/`."""
        root = Path(project_dir) / ".opencode"
        return cls(root) if root.is_dir() else None

    def plugin_catalog(self) -> OpencodeWorkspace:
        """The source of plugins for this workspace."""
        return self

    def marketplace_len(self) -> int:
        """Number of marketplaces; OpenCode workspaces have none."""
        return 0

    def plugins_root(self) -> Optional[Path]:
        """The `plugins/` directory, if present."""
        path = self.root / "plugins"
        return path if path.is_dir() else None

    def _plugin_dirs(self) -> tuple[Path, ...]:
        plugins_root = self.plugins_root()
        if plugins_root is None:
            return ()
        try:
            entries = sorted(plugins_root.iterdir())
        except OSError:
            return ()
        return tuple(path for path in entries if path.is_dir())

    def resolve(self, name: str) -> Optional[OpencodePluginDescriptor]:
        """Find a plugin by its directory name."""
        plugins_root = self.plugins_root()
        if plugins_root is None:
            return None
        plugin_dir = plugins_root / name
        if not plugin_dir.is_dir():
            return None
        return _descriptor(plugin_dir, name)

    def list(self) -> tuple[OpencodePluginDescriptor, ...]:
        """Every plugin in the workspace, ordered by directory name."""
        return tuple(_descriptor(path, path.name) for path in self._plugin_dirs())