"""Tests for the generation orchestrator (bridgegen.orchestrator).

Covers:
- Target selection from the --*-only flags
- Pure build order (core, contracts, adapters)
- Writing packages and the GenerationResult
- Unknown adapter warning
- Write failures surfacing as GenerationError
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from bridgegen.config import ProjectConfig
from bridgegen.errors import BridgegenError, GenerationError
from bridgegen.orchestrator import (
    ALL_TARGETS,
    GenerationOrchestrator,
    GenerationResult,
)
from bridgegen.writer import ArtifactWriter


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


class _FailingWriter(ArtifactWriter):
    """Writer whose every file write fails."""

    def write_file(self, path, content):
        raise PermissionError(f"denied: {path}")


class _SelectiveWriter(ArtifactWriter):
    """Writer that refuses the named packages and writes the rest."""

    def __init__(self, refused: set[str]) -> None:
        self.refused = refused

    def write_set(self, artifacts, output_dir):
        if artifacts.package in self.refused:
            raise PermissionError(f"denied: {artifacts.package}")
        return super().write_set(artifacts, output_dir)


# ---------------------------------------------------------------------------
# Target selection
# ---------------------------------------------------------------------------


class TestSelectedTargets:
    def test_no_flags_selects_all(self):
        assert GenerationOrchestrator.selected_targets() == ALL_TARGETS

    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            ({"core_only": True}, ("core",)),
            ({"contracts_only": True}, ("contracts",)),
            ({"adapters_only": True}, ("adapters",)),
            ({"core_only": True, "adapters_only": True}, ("core", "adapters")),
            (
                {"core_only": True, "contracts_only": True, "adapters_only": True},
                ("core", "contracts", "adapters"),
            ),
        ],
    )
    def test_union_of_flags(self, flags: dict, expected: tuple):
        assert GenerationOrchestrator.selected_targets(**flags) == expected


# ---------------------------------------------------------------------------
# Build
# ---------------------------------------------------------------------------


class TestBuild:
    def test_plan_computed_once(self, default_config: ProjectConfig):
        orchestrator = GenerationOrchestrator(default_config)
        assert [d.token for d in orchestrator.plan.domains] == ["user", "project"]
        assert len(orchestrator.plan.routes) == 6

    def test_package_order(self, default_config: ProjectConfig):
        sets = GenerationOrchestrator(default_config).build()
        assert [s.package for s in sets] == [
            "core", "contracts", "adapter-web", "adapter-mobile",
        ]

    def test_adapters_only(self, default_config: ProjectConfig):
        sets = GenerationOrchestrator(default_config).build(adapters_only=True)
        assert [s.package for s in sets] == ["adapter-web", "adapter-mobile"]

    def test_empty_adapters(self, tmp_path: Path):
        config = ProjectConfig(adapters=[], output_dir=tmp_path)
        sets = GenerationOrchestrator(config).build()
        assert [s.package for s in sets] == ["core", "contracts"]

    def test_build_writes_nothing(self, default_config: ProjectConfig):
        GenerationOrchestrator(default_config).build()
        assert not default_config.output_dir.exists()

    def test_duplicate_domains_raise(self, tmp_path: Path):
        config = ProjectConfig(domains=["user", "user"], output_dir=tmp_path / "out")
        with pytest.raises(GenerationError, match="duplicate artifact path") as exc_info:
            GenerationOrchestrator(config).build()
        assert exc_info.value.package == "core"

    def test_unknown_adapters(self, tmp_path: Path):
        config = ProjectConfig(adapters=["web", "desktop", "tv"], output_dir=tmp_path)
        assert GenerationOrchestrator(config).unknown_adapters() == ["desktop", "tv"]


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


class TestRun:
    async def test_writes_all_packages(self, default_config: ProjectConfig, record_console: Console):
        orchestrator = GenerationOrchestrator(default_config, console=record_console)
        result = await orchestrator.run()

        assert isinstance(result, GenerationResult)
        assert result.packages == ["core", "contracts", "adapter-web", "adapter-mobile"]
        assert result.file_count == 20 + 7 + 10 + 11
        assert all(path.is_file() for path in result.written_files)
        assert result.elapsed_seconds >= 0

        output = default_config.output_dir
        for package in result.packages:
            assert (output / package / "package.json").is_file()

    async def test_reports_progress(self, default_config: ProjectConfig, record_console: Console):
        await GenerationOrchestrator(default_config, console=record_console).run(core_only=True)
        text = record_console.export_text()
        assert "CoreBridge Generation" in text
        assert "core (20 files)" in text
        assert "Generation Summary" in text
        assert "Next steps" in text

    async def test_contracts_only(self, default_config: ProjectConfig, record_console: Console):
        result = await GenerationOrchestrator(default_config, console=record_console).run(
            contracts_only=True
        )
        assert result.packages == ["contracts"]
        assert not (default_config.output_dir / "core").exists()

    async def test_unknown_adapter_warns(self, tmp_path: Path, record_console: Console):
        config = ProjectConfig(domains=["user"], adapters=["desktop"], output_dir=tmp_path)
        result = await GenerationOrchestrator(config, console=record_console).run(
            adapters_only=True
        )

        assert result.packages == ["adapter-desktop"]
        assert "Unknown adapter 'desktop'" in record_console.export_text()
        assert (tmp_path / "adapter-desktop" / "src" / "middleware" / "auth.ts").is_file()

    async def test_no_warning_when_adapters_not_selected(self, tmp_path: Path, record_console: Console):
        config = ProjectConfig(adapters=["desktop"], output_dir=tmp_path)
        await GenerationOrchestrator(config, console=record_console).run(core_only=True)
        assert "Unknown adapter" not in record_console.export_text()

    async def test_write_failure_raises(self, default_config: ProjectConfig, record_console: Console):
        orchestrator = GenerationOrchestrator(
            default_config, writer=_FailingWriter(), console=record_console
        )
        with pytest.raises(GenerationError) as exc_info:
            await orchestrator.run(core_only=True)

        assert exc_info.value.package == "core"
        assert "denied" in str(exc_info.value)
        assert str(exc_info.value).startswith("Package core: ")
        assert isinstance(exc_info.value, BridgegenError)
        assert isinstance(exc_info.value.__cause__, PermissionError)

    async def test_write_failure_stops_before_summary(
        self, default_config: ProjectConfig, record_console: Console
    ):
        orchestrator = GenerationOrchestrator(
            default_config, writer=_FailingWriter(), console=record_console
        )
        with pytest.raises(GenerationError):
            await orchestrator.run()
        assert "Generation Summary" not in record_console.export_text()

    async def test_writer_receives_output_dir(self, default_config: ProjectConfig, record_console: Console):
        writer = ArtifactWriter()
        with patch.object(writer, "write_set", wraps=writer.write_set) as spy:
            await GenerationOrchestrator(
                default_config, writer=writer, console=record_console
            ).run(core_only=True)

        spy.assert_called_once()
        artifacts, output_dir = spy.call_args.args
        assert artifacts.package == "core"
        assert output_dir == default_config.output_dir

    async def test_first_failure_in_package_order_wins(
        self, default_config: ProjectConfig, record_console: Console
    ):
        writer = _SelectiveWriter({"contracts", "adapter-mobile"})
        orchestrator = GenerationOrchestrator(default_config, writer=writer, console=record_console)

        with pytest.raises(GenerationError) as exc_info:
            await orchestrator.run()

        assert exc_info.value.package == "contracts"
        assert (default_config.output_dir / "core" / "package.json").exists()
        assert (default_config.output_dir / "adapter-web" / "package.json").exists()
