"""Shared pytest fixtures for the bridgegen test suite.

Provides reusable fixtures for:
- Project configurations (default, GraphQL, unknown adapter)
- Generation plans built from those configurations
- Generated artifact sets for every package
- A recording Rich console for asserting on output
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.console import Console

from bridgegen.config import ContractFormat, ContractsConfig, ProjectConfig
from bridgegen.generators import (
    GeneratedArtifactSet,
    generate_adapter,
    generate_contracts,
    generate_core,
)
from bridgegen.planning import GenerationPlan


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

_ENV_VARS = (
    "BRIDGEGEN_DOMAINS",
    "BRIDGEGEN_ADAPTERS",
    "BRIDGEGEN_CONTRACT_FORMAT",
    "BRIDGEGEN_CONTRACT_VERSION",
    "BRIDGEGEN_OUTPUT_DIR",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every BRIDGEGEN_* variable for the duration of the test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config(tmp_path: Path) -> ProjectConfig:
    """Default domains (user, project) and adapters (web, mobile)."""
    return ProjectConfig(output_dir=tmp_path / "packages")


@pytest.fixture
def graphql_config(tmp_path: Path) -> ProjectConfig:
    return ProjectConfig(
        domains=["user"],
        adapters=["web"],
        contracts=ContractsConfig(format=ContractFormat.GRAPHQL),
        output_dir=tmp_path / "packages",
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A corebridge.config.json overriding domains and the contract version."""
    path = tmp_path / "corebridge.config.json"
    path.write_text(
        json.dumps(
            {
                "domains": ["order"],
                "adapters": ["mobile"],
                "contracts": {"version": "3.0.3"},
                "outputDir": str(tmp_path / "out"),
            }
        ),
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Plans & artifact sets
# ---------------------------------------------------------------------------

@pytest.fixture
def plan(default_config: ProjectConfig) -> GenerationPlan:
    return GenerationPlan.from_config(default_config)


@pytest.fixture
def core_set(plan: GenerationPlan) -> GeneratedArtifactSet:
    return generate_core(plan)


@pytest.fixture
def contracts_set(plan: GenerationPlan) -> GeneratedArtifactSet:
    return generate_contracts(plan)


@pytest.fixture
def web_set(plan: GenerationPlan) -> GeneratedArtifactSet:
    return generate_adapter(plan, "web")


@pytest.fixture
def mobile_set(plan: GenerationPlan) -> GeneratedArtifactSet:
    return generate_adapter(plan, "mobile")


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture
def record_console() -> Console:
    """A Rich console that records output instead of writing to a terminal."""
    return Console(record=True, width=120, force_terminal=False)
