from pathlib import Path

from ralphloop.plugin_components import (
    FilesystemPluginComponentInspector,
    FilesystemPluginInspector,
    OpencodeComponentCounts,
    OpencodePluginInspection,
    PluginComponentFile,
    discover_plugin_components,
)


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("// component\n")


def test_inspection_has_command():
    inspection = OpencodePluginInspection(commands=["test", "build"], scripts=[], tools=[])
    assert inspection.has_command("test")
    assert inspection.has_command("TEST")
    assert not inspection.has_command("unknown")


def test_inspection_has_script():
    inspection = OpencodePluginInspection(commands=[], scripts=["deploy"], tools=[])
    assert inspection.has_script("deploy")
    assert not inspection.has_script("test")


def test_inspection_has_tool():
    inspection = OpencodePluginInspection(commands=[], scripts=[], tools=["formatter"])
    assert inspection.has_tool("formatter")
    assert not inspection.has_tool("linter")


def test_blank_name_never_matches_and_whitespace_is_trimmed():
    inspection = OpencodePluginInspection(commands=["build"])
    assert not inspection.has_command("   ")
    assert not inspection.has_command("")
    assert inspection.has_command("  Build ")


def test_inspector_sorts_and_dedups(tmp_path):
    _touch(tmp_path / "commands" / "zeta.js")
    _touch(tmp_path / "commands" / "alpha.ts")
    _touch(tmp_path / "commands" / "alpha.js")
    _touch(tmp_path / "commands" / "notes.txt")
    (tmp_path / "commands" / "folder.js").mkdir()
    _touch(tmp_path / "tools" / "Upper.JS")
    inspection = FilesystemPluginInspector().inspect(tmp_path)
    assert inspection.commands == ["alpha", "zeta"]
    assert inspection.scripts == []
    assert inspection.tools == ["Upper"]
    assert inspection.has_tool("upper")


def test_discover_lists_js_then_ts_with_js_paths(tmp_path):
    _touch(tmp_path / "scripts" / "run.ts")
    _touch(tmp_path / "scripts" / "run.js")
    _touch(tmp_path / "scripts" / "build.js")
    components = discover_plugin_components(tmp_path)
    scripts_dir = tmp_path / "scripts"
    assert components.scripts == [
        PluginComponentFile("build", scripts_dir / "build.js"),
        PluginComponentFile("run", scripts_dir / "run.js"),
        PluginComponentFile("run", scripts_dir / "run.js"),
    ]
    assert components.hook_files == []
    assert components.mcp_files == []


def test_counts_match_components(tmp_path):
    _touch(tmp_path / "commands" / "a.js")
    _touch(tmp_path / "scripts" / "b.ts")
    _touch(tmp_path / "tools" / "c.js")
    _touch(tmp_path / "tools" / "d.js")
    components = FilesystemPluginComponentInspector().inspect_components(tmp_path)
    assert components.counts() == OpencodeComponentCounts(
        commands=1, scripts=1, tools=2, hook_files=0, mcp_files=0
    )


def test_empty_plugin_dir(tmp_path):
    assert discover_plugin_components(tmp_path).counts() == OpencodeComponentCounts()
    inspection = FilesystemPluginInspector().inspect(tmp_path / "missing")
    assert inspection == OpencodePluginInspection()