"""bridgegen configuration.

Typed project configuration for a generation run.  The settings use Pydantic
v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.

Only the *shape* of the configuration is checked here.  Domain and adapter
tokens are deliberately not validated: a malformed token flows through into
the generated identifiers and paths unchanged.
"""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bridgegen.errors import ConfigError
from bridgegen.utils import dump_json

DEFAULT_CONFIG_FILENAME = "corebridge.config.json"
CONFIG_SCHEMA_URL = "https://corebridge.dev/schema/config.json"


class ContractFormat(str, Enum):
    """Wire format of the contracts package."""
    OPENAPI = "openapi"
    GRAPHQL = "graphql"


class ContractsConfig(BaseModel):
    """Contract format and the version stamped on the OpenAPI document."""

    model_config = ConfigDict(frozen=True)

    format: ContractFormat = Field(default=ContractFormat.OPENAPI)
    version: str = Field(default="3.1.0", description="OpenAPI document version")


class ProjectConfig(BaseModel):
    """Project description consumed by every generator.

    Instances are created once per run (by the CLI or by the caller) and are
    immutable thereafter.
    """

    model_config = ConfigDict(frozen=True)

    domains: tuple[str, ...] = Field(
        default=("user", "project"),
        description="Ordered business domain tokens, e.g. 'user'",
    )
    adapters: tuple[str, ...] = Field(
        default=("web", "mobile"),
        description="Ordered platform adapter identifiers",
    )
    contracts: ContractsConfig = Field(default_factory=ContractsConfig)
    output_dir: Path = Field(default=Path("./packages"))

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------

    @property
    def contract_format(self) -> ContractFormat:
        return self.contracts.format

    @property
    def contract_version(self) -> str:
        return self.contracts.version

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_file_dict(self) -> dict[str, Any]:
        """Return the on-disk JSON representation (with ``$schema``)."""
        return {
            "$schema": CONFIG_SCHEMA_URL,
            "outputDir": str(self.output_dir),
            "domains": list(self.domains),
            "adapters": list(self.adapters),
            "contracts": {
                "format": self.contracts.format.value,
                "version": self.contracts.version,
            },
        }

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(dump_json(self.to_file_dict()), encoding="utf-8")
        return target

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ProjectConfig":
        """Merge a user-supplied dict over the defaults.

        Top-level keys replace the defaults; the ``contracts`` block is merged
        key by key so a file may override only the version.  Both
        ``outputDir`` and ``output_dir`` spellings are accepted.
        """
        defaults = cls()
        overrides = raw.get("contracts") or {}
        if not isinstance(overrides, dict):
            raise ConfigError("Invalid configuration: 'contracts' must be an object")
        contracts = {
            "format": defaults.contracts.format,
            "version": defaults.contracts.version,
            **overrides,
        }
        output_dir = raw.get("outputDir", raw.get("output_dir", defaults.output_dir))
        try:
            return cls(
                domains=raw.get("domains", defaults.domains),
                adapters=raw.get("adapters", defaults.adapters),
                contracts=ContractsConfig(**contracts),
                output_dir=output_dir,
            )
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def load(cls, path: Path | None = None) -> "ProjectConfig":
        """Load a configuration file, falling back to defaults if absent.

        Args:
            path: The JSON file to read.  Defaults to
                ``corebridge.config.json`` in the working directory.

        Raises:
            ConfigError: If the file is not valid JSON or fails validation.
        """
        file_path = Path(path) if path is not None else Path(DEFAULT_CONFIG_FILENAME)
        if not file_path.exists():
            return cls()
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{file_path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"{file_path} must contain a JSON object")
        return cls.from_dict(raw)

    @classmethod
    def from_env(cls) -> "ProjectConfig":
        """Build a ``ProjectConfig`` from environment variables.

        Recognised variables (all optional):
            BRIDGEGEN_DOMAINS, BRIDGEGEN_ADAPTERS (comma-separated),
            BRIDGEGEN_CONTRACT_FORMAT, BRIDGEGEN_CONTRACT_VERSION,
            BRIDGEGEN_OUTPUT_DIR.
        """
        raw: dict[str, Any] = {}
        if os.environ.get("BRIDGEGEN_DOMAINS"):
            raw["domains"] = _split_csv(os.environ["BRIDGEGEN_DOMAINS"])
        if os.environ.get("BRIDGEGEN_ADAPTERS"):
            raw["adapters"] = _split_csv(os.environ["BRIDGEGEN_ADAPTERS"])

        contracts: dict[str, Any] = {}
        if os.environ.get("BRIDGEGEN_CONTRACT_FORMAT"):
            contracts["format"] = os.environ["BRIDGEGEN_CONTRACT_FORMAT"]
        if os.environ.get("BRIDGEGEN_CONTRACT_VERSION"):
            contracts["version"] = os.environ["BRIDGEGEN_CONTRACT_VERSION"]
        if contracts:
            raw["contracts"] = contracts

        if os.environ.get("BRIDGEGEN_OUTPUT_DIR"):
            raw["outputDir"] = os.environ["BRIDGEGEN_OUTPUT_DIR"]
        return cls.from_dict(raw)


def write_default_config(path: Path, force: bool = False) -> Path:
    """Write the default configuration file used by ``bridgegen init``.

    Raises:
        ConfigError: If *path* already exists and *force* is not set.
    """
    target = Path(path)
    if target.exists() and not force:
        raise ConfigError(f"{target} already exists. Use --force to overwrite.")
    return ProjectConfig().save(target)


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]
