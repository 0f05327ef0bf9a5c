"""Summaries of OpenCode workspaces and the project directories around them."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from .plugin_catalog import OpencodeWorkspace
from .plugin_components import FilesystemPluginComponentInspector, OpencodeComponentCounts


@dataclass(frozen=True)
class OpencodeWorkspaceSummary:
    """Plugin and marketplace counts of a workspace."""

    root: Path
    plugin_count: int
    marketplace_count: int
    local_counts: Optional[OpencodeComponentCounts] = None


@dataclass(frozen=True)
class OpencodeProjectComponentsSummary:
    """Component counts of one project's `.opencode/` directory."""

    root: Path
    opencode_dir: Path
    counts: OpencodeComponentCounts


@dataclass
class OpencodeFullWorkspaceSummary:
    """The workspace summary together with every project's components."""

    opencode_workspace: Optional[OpencodeWorkspaceSummary] = None
    project_components: list[OpencodeProjectComponentsSummary] = field(default_factory=list)


@dataclass
class FilesystemOpencodeWorkspaceInspector:
    """Summarizes workspaces by scanning the filesystem."""

    component_inspector: FilesystemPluginComponentInspector = field(
        default_factory=FilesystemPluginComponentInspector
    )

    def _workspace_summary(self, project_dir: Path) -> Optional[OpencodeWorkspaceSummary]:
        workspace = OpencodeWorkspace.discover(project_dir)
        if workspace is None:
            return None
        local_dir = workspace.root / ".opencode"
        local_counts = (
            self.component_inspector.inspect_components(local_dir).counts()
            if local_dir.is_dir()
            else None
        )
        return OpencodeWorkspaceSummary(
            root=workspace.root,
            plugin_count=len(workspace.plugin_catalog().list()),
            marketplace_count=workspace.marketplace_len(),
            local_counts=local_counts,
        )

    def _project_components(
        self, project_dir: Path, add_dirs: Iterable[Path | str]
    ) -> list[OpencodeProjectComponentsSummary]:
        seen: set[Path] = set()
        summaries = []
        for root in [project_dir, *map(Path, add_dirs)]:
            if root in seen:
                continue
            seen.add(root)
            opencode_dir = root / ".opencode"
            if not opencode_dir.is_dir():
                continue
            counts = self.component_inspector.inspect_components(opencode_dir).counts()
            summaries.append(OpencodeProjectComponentsSummary(root, opencode_dir, counts))
        return summaries

    def summarize(
        self, project_dir: Path | str, add_dirs: Iterable[Path | str] = ()
    ) -> OpencodeFullWorkspaceSummary:
        """Summarize a project and any additional directories."""
        project_dir = Path(project_dir)
        return OpencodeFullWorkspaceSummary(
            opencode_workspace=self._workspace_summary(project_dir),
            project_components=self._project_components(project_dir, add_dirs),
        )