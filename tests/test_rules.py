"""Tests for reference rules."""

import os
import tempfile
from pathlib import Path

import pytest

from graph.model import DependencyGraph
from rules import MarkdownDependencyRule, PowerShellDependencyRule, default_rules
from rules.powershell import looks_like_path


@pytest.fixture
def workspace():
    """A temporary directory with symlinks resolved."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


def _write(path: Path, content: str = "") -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestDefaultRules:
    """Tests for the built-in rule list."""

    def test_fresh_list(self):
        """Test that each call returns new rule instances."""
        first = default_rules()
        second = default_rules()

        assert [type(r) for r in first] == [MarkdownDependencyRule, PowerShellDependencyRule]
        assert first[0] is not second[0]


class TestMarkdownRule:
    """Tests for MarkdownDependencyRule."""

    def test_can_handle(self):
        """Test extension matching."""
        rule = MarkdownDependencyRule()

        assert rule.can_handle("/docs/README.md")
        assert rule.can_handle("/docs/notes.MD")
        assert not rule.can_handle("/docs/notes.markdown")
        assert not rule.can_handle("/scripts/run.ps1")

    def test_extract_candidates(self):
        """Test that every link target is a candidate, duplicates kept."""
        rule = MarkdownDependencyRule()
        content = "See [a](a.md), [b](../b.md) and [a again](a.md). ![img](img/x.png)"

        assert rule.extract_candidates(content) == ["a.md", "../b.md", "a.md", "img/x.png"]

    def test_relative_link_to_existing_file(self, workspace):
        """Test that a link to a sibling file yields one edge."""
        source = _write(workspace / "index.md", "[x](intro.md)")
        target = _write(workspace / "intro.md", "# Intro")
        graph = DependencyGraph()

        added = MarkdownDependencyRule().analyze(source, "[x](intro.md)", graph)

        assert added == 1
        assert len(graph.edges) == 1
        edge = graph.edges[0]
        assert edge.source.file_path == source
        assert edge.target.file_path == target

    def test_missing_target(self, workspace):
        """Test that links to missing files yield no edges."""
        source = _write(workspace / "index.md")
        graph = DependencyGraph()

        added = MarkdownDependencyRule().analyze(source, "[x](missing.md)", graph)

        assert added == 0
        assert graph.edges == ()

    def test_external_links_ignored(self, workspace):
        """Test that http(s) links never yield edges."""
        source = _write(workspace / "index.md")
        _write(workspace / "https:" / "example.com", "")
        graph = DependencyGraph()
        rule = MarkdownDependencyRule()

        rule.analyze(source, "[x](https://example.com) [y](HTTP://example.com)", graph)

        assert graph.edges == ()
        assert rule.resolve_candidate(source, "https://example.com") is None

    def test_parent_directory_link(self, workspace):
        """Test that '..' segments are collapsed."""
        source = _write(workspace / "docs" / "guide" / "start.md")
        target = _write(workspace / "docs" / "overview.md")
        graph = DependencyGraph()

        MarkdownDependencyRule().analyze(source, "[up](../overview.md)", graph)

        assert [e.target.file_path for e in graph.edges] == [target]

    def test_fragment_is_stripped(self, workspace):
        """Test that a #fragment does not prevent resolution."""
        source = _write(workspace / "index.md")
        target = _write(workspace / "intro.md")
        graph = DependencyGraph()
        rule = MarkdownDependencyRule()

        rule.analyze(source, "[x](intro.md#setup) [y](#local-anchor)", graph)

        assert [e.target.file_path for e in graph.edges] == [target]
        assert rule.resolve_candidate(source, "#local-anchor") is None

    def test_directory_target_ignored(self, workspace):
        """Test that a link to a directory yields no edge."""
        source = _write(workspace / "index.md")
        (workspace / "docs").mkdir()
        graph = DependencyGraph()

        MarkdownDependencyRule().analyze(source, "[d](docs)", graph)

        assert graph.edges == ()

    def test_empty_content(self, workspace):
        """Test that empty content yields nothing."""
        source = _write(workspace / "index.md")
        graph = DependencyGraph()

        assert MarkdownDependencyRule().analyze(source, "", graph) == 0
        assert len(graph) == 0


class TestPowerShellRule:
    """Tests for PowerShellDependencyRule."""

    def test_can_handle(self):
        """Test extension matching."""
        rule = PowerShellDependencyRule()

        assert rule.can_handle("build.ps1")
        assert rule.can_handle("Module.PSM1")
        assert rule.can_handle("Module.psd1")
        assert not rule.can_handle("readme.md")
        assert not rule.can_handle("script.ps1.bak")

    def test_extract_candidates(self):
        """Test dot-sourcing and import patterns."""
        rule = PowerShellDependencyRule()
        content = "\n".join([
            ". .\\helper.ps1",
            "  . \"$PSScriptRoot\\utils.ps1\"  # comment",
            "Import-Module '.\\Mod.psm1'",
            "import-module -Name ./Other.psm1; Write-Host hi",
            "using module ..\\Shared\\Shared.psm1",
            "Import-Module Pester",
            "Write-Host 'not . a match'",
        ])

        assert rule.extract_candidates(content) == [
            ".\\helper.ps1",
            "$PSScriptRoot\\utils.ps1",
            ".\\Mod.psm1",
            "./Other.psm1",
            "..\\Shared\\Shared.psm1",
            "Pester",
        ]

    def test_dot_sourcing(self, workspace):
        """Test that '. .\\helper.ps1' yields one edge."""
        source = _write(workspace / "main.ps1")
        target = _write(workspace / "helper.ps1")
        graph = DependencyGraph()

        added = PowerShellDependencyRule().analyze(source, ". .\\helper.ps1", graph)

        assert added == 1
        assert [e.target.file_path for e in graph.edges] == [target]

    def test_import_module_with_script_root(self, workspace):
        """Test $PSScriptRoot substitution in an import."""
        source = _write(workspace / "main.ps1")
        target = _write(workspace / "Mod.psm1")
        graph = DependencyGraph()

        PowerShellDependencyRule().analyze(
            source, 'Import-Module "$PSScriptRoot\\Mod.psm1"', graph
        )

        assert [e.target.file_path for e in graph.edges] == [target]

    def test_braced_script_root(self, workspace):
        """Test the ${PSScriptRoot} spelling, in any case."""
        source = _write(workspace / "main.ps1")
        target = _write(workspace / "lib" / "util.ps1")
        graph = DependencyGraph()

        PowerShellDependencyRule().analyze(source, ". ${psscriptroot}/lib/util.ps1", graph)

        assert [e.target.file_path for e in graph.edges] == [target]

    def test_installed_module_ignored(self, workspace):
        """Test that a bare module name yields no edge."""
        source = _write(workspace / "main.ps1")
        _write(workspace / "SomeInstalledModule")
        graph = DependencyGraph()

        added = PowerShellDependencyRule().analyze(source, "Import-Module SomeInstalledModule", graph)

        assert added == 0
        assert graph.edges == ()

    def test_other_variables_unresolvable(self, workspace):
        """Test that variables other than $PSScriptRoot discard the token."""
        source = _write(workspace / "main.ps1")
        _write(workspace / "helper.ps1")
        rule = PowerShellDependencyRule()

        assert rule.resolve_candidate(source, "$env:ROOT\\helper.ps1") is None
        assert rule.resolve_candidate(source, "$PSScriptRoot\\$name.ps1") is None

    def test_parent_and_nested_paths(self, workspace):
        """Test relative paths climbing out of the script's directory."""
        source = _write(workspace / "scripts" / "deploy.ps1")
        shared = _write(workspace / "Shared" / "Shared.psm1")
        graph = DependencyGraph()

        PowerShellDependencyRule().analyze(source, "using module ..\\Shared\\Shared.psm1", graph)

        assert [e.target.file_path for e in graph.edges] == [shared]

    def test_absolute_path(self, workspace):
        """Test that absolute tokens are used as they are."""
        source = _write(workspace / "main.ps1")
        target = _write(workspace / "elsewhere" / "tool.ps1")
        graph = DependencyGraph()

        PowerShellDependencyRule().analyze(source, f'. "{target}"', graph)

        assert [e.target.file_path for e in graph.edges] == [target]

    def test_missing_target(self, workspace):
        """Test that a path-like token to a missing file yields no edge."""
        source = _write(workspace / "main.ps1")
        graph = DependencyGraph()

        assert PowerShellDependencyRule().analyze(source, ". .\\nothere.ps1", graph) == 0

    def test_separator_normalization(self, workspace):
        """Test that both separator styles resolve to the same native path."""
        source = _write(workspace / "main.ps1")
        rule = PowerShellDependencyRule()

        backslash = rule.resolve_candidate(source, ".\\lib\\a.ps1")
        slash = rule.resolve_candidate(source, "./lib/a.ps1")

        assert backslash == slash == os.path.join(str(workspace), "lib", "a.ps1")


class TestLooksLikePath:
    """Tests for the path heuristic."""

    def test_path_like_tokens(self):
        """Test tokens that are paths."""
        assert looks_like_path(".\\helper.ps1")
        assert looks_like_path("../x.ps1")
        assert looks_like_path("/abs/x.ps1")
        assert looks_like_path("\\share\\x.ps1")
        assert looks_like_path("lib/x.ps1")
        assert looks_like_path("$PSScriptRoot\\x.psm1")

    def test_module_names(self):
        """Test tokens that are module names."""
        assert not looks_like_path("Pester")
        assert not looks_like_path("Az.Accounts")
        assert not looks_like_path("-Force")
