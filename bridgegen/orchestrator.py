"""bridgegen generation orchestrator.

Builds a :class:`GenerationPlan` once, runs the selected generators over it,
and hands each resulting artifact set to the :class:`ArtifactWriter`:

1. core       -- domain / port / use-case skeleton
2. contracts  -- OpenAPI, JSON Schemas, DTOs
3. adapters   -- one package per configured adapter, in config order

Packages are written concurrently; their directories never overlap.  The
first write failure stops the run with a :class:`GenerationError`.
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path

from pydantic import BaseModel, Field
from rich.console import Console

from bridgegen.config import ProjectConfig
from bridgegen.errors import GenerationError
from bridgegen.generators.adapter_gen import AdapterGenerator
from bridgegen.generators.artifacts import GeneratedArtifactSet
from bridgegen.generators.contracts_gen import ContractsGenerator
from bridgegen.generators.core_gen import CoreGenerator
from bridgegen.generators.templates import TemplateRenderer
from bridgegen.planning.naming import adapter_package_dir
from bridgegen.planning.plan import GenerationPlan
from bridgegen.planning.platforms import is_builtin
from bridgegen.utils import (
    console as default_console,
    format_duration,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)
from bridgegen.writer import ArtifactWriter

TARGET_CORE = "core"
TARGET_CONTRACTS = "contracts"
TARGET_ADAPTERS = "adapters"

ALL_TARGETS: tuple[str, ...] = (TARGET_CORE, TARGET_CONTRACTS, TARGET_ADAPTERS)


class GenerationResult(BaseModel):
    """Outcome of a successful generation run."""

    packages: list[str] = Field(default_factory=list, description="Package directories written")
    written_files: list[Path] = Field(default_factory=list)
    elapsed_seconds: float = Field(default=0.0, ge=0)

    @property
    def file_count(self) -> int:
        return len(self.written_files)


class GenerationOrchestrator:
    """Drives one generation run for a :class:`ProjectConfig`.

    Attributes:
        config: The immutable project configuration.
        plan: Domain descriptors and route table, computed once.
        writer: Filesystem sink for artifact sets.
    """

    def __init__(
        self,
        config: ProjectConfig,
        writer: ArtifactWriter | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.plan = GenerationPlan.from_config(config)
        self.writer = writer or ArtifactWriter()
        self.console = console or default_console

        renderer = TemplateRenderer()
        self._core = CoreGenerator(renderer)
        self._contracts = ContractsGenerator(renderer)
        self._adapter = AdapterGenerator(renderer)

    # ------------------------------------------------------------------
    # Target selection
    # ------------------------------------------------------------------

    @staticmethod
    def selected_targets(
        core_only: bool = False,
        contracts_only: bool = False,
        adapters_only: bool = False,
    ) -> tuple[str, ...]:
        """Return the targets to generate.

        With no flag set every target is selected; otherwise the union of
        the flagged targets, in generation order.
        """
        flags = {
            TARGET_CORE: core_only,
            TARGET_CONTRACTS: contracts_only,
            TARGET_ADAPTERS: adapters_only,
        }
        if not any(flags.values()):
            return ALL_TARGETS
        return tuple(target for target in ALL_TARGETS if flags[target])

    def unknown_adapters(self) -> list[str]:
        """Configured adapter ids that fall back to the web profile."""
        return [a for a in self.config.adapters if not is_builtin(a)]

    # ------------------------------------------------------------------
    # Build (pure)
    # ------------------------------------------------------------------

    def build(
        self,
        core_only: bool = False,
        contracts_only: bool = False,
        adapters_only: bool = False,
    ) -> list[GeneratedArtifactSet]:
        """Render the selected packages without writing anything."""
        targets = self.selected_targets(core_only, contracts_only, adapters_only)
        artifact_sets: list[GeneratedArtifactSet] = []
        if TARGET_CORE in targets:
            artifact_sets.append(self._core.generate(self.plan))
        if TARGET_CONTRACTS in targets:
            artifact_sets.append(self._contracts.generate(self.plan))
        if TARGET_ADAPTERS in targets:
            for adapter_id in self.config.adapters:
                artifact_sets.append(self._adapter.generate(self.plan, adapter_id))
        return artifact_sets

    # ------------------------------------------------------------------
    # Run (writes)
    # ------------------------------------------------------------------

    async def run(
        self,
        core_only: bool = False,
        contracts_only: bool = False,
        adapters_only: bool = False,
    ) -> GenerationResult:
        """Generate the selected packages and write them under ``output_dir``.

        Raises:
            GenerationError: If any package cannot be built or written.
                All writes are awaited before the first failure, in package
                order, is raised.  Packages already on disk are left as they
                are.
        """
        start = time.monotonic()
        output_dir = self.config.output_dir
        targets = self.selected_targets(core_only, contracts_only, adapters_only)

        print_header("CoreBridge Generation", out=self.console)
        self.console.print(f"  Output  : {output_dir.resolve()}")
        self.console.print(f"  Targets : {', '.join(targets)}")
        self.console.print()

        if TARGET_ADAPTERS in targets:
            for adapter_id in self.unknown_adapters():
                print_warning(
                    f"Unknown adapter '{adapter_id}' -- generating "
                    f"{adapter_package_dir(adapter_id)} with the web profile.",
                    out=self.console,
                )

        artifact_sets = self.build(core_only, contracts_only, adapters_only)
        written = await asyncio.gather(
            *(self._write_package(artifacts, output_dir) for artifacts in artifact_sets),
            return_exceptions=True,
        )
        for outcome in written:
            if isinstance(outcome, BaseException):
                raise outcome

        result = GenerationResult(
            packages=[artifacts.package for artifacts in artifact_sets],
            written_files=[path for paths in written for path in paths],
            elapsed_seconds=time.monotonic() - start,
        )
        self._print_summary(result)
        return result

    async def _write_package(
        self, artifacts: GeneratedArtifactSet, output_dir: Path
    ) -> list[Path]:
        try:
            paths = await self.writer.write_set_async(artifacts, output_dir)
        except OSError as exc:
            raise GenerationError(artifacts.package, str(exc)) from exc
        print_success(
            f"  + {artifacts.package} ({len(paths)} files)", out=self.console
        )
        return paths

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _print_summary(self, result: GenerationResult) -> None:
        self.console.print()
        print_summary_table(
            {
                "Domains": ", ".join(self.config.domains) or "none",
                "Adapters": ", ".join(self.config.adapters) or "none",
                "Contract format": self.config.contract_format.value,
                "Packages": ", ".join(result.packages) or "none",
                "Files written": str(result.file_count),
                "Duration": format_duration(result.elapsed_seconds),
            },
            title="Generation Summary",
            out=self.console,
        )
        self.console.print("[bold]Next steps:[/bold]")
        self.console.print("  1. Implement the repository ports in your infrastructure layer")
        self.console.print("  2. Wire the adapter routers into your server")
        self.console.print("  3. Run 'npm install' and 'npm run build' in each package")
