"""Contracts package generation.

Generates:
- ``openapi/openapi.yaml``          -- OpenAPI document projected from the route table
- ``schemas/<Name>.schema.json``    -- one JSON Schema per domain
- ``src/index.ts``                  -- TypeScript DTOs with the same field sets
- ``src/routes.ts``                 -- the route table as a typed constant
- ``graphql/schema.graphql``        -- only when the contract format is GraphQL
"""

from __future__ import annotations

from typing import Any

import yaml

from bridgegen.config import ContractFormat
from bridgegen.generators.artifacts import GeneratedArtifactSet
from bridgegen.generators.core_gen import PACKAGE_VERSION, ts_compiler_config
from bridgegen.generators.templates import TemplateRenderer
from bridgegen.planning.naming import CONTRACTS_PACKAGE, npm_package_name
from bridgegen.planning.plan import GenerationPlan
from bridgegen.planning.schemas import (
    CREATE_FIELDS,
    ENTITY_FIELDS,
    ERROR_CODES,
    graphql_sdl,
    json_schema,
    openapi_document,
)

OPENAPI_PATH = "openapi/openapi.yaml"
GRAPHQL_PATH = "graphql/schema.graphql"


def dump_yaml(document: dict[str, Any]) -> str:
    """Serialise *document* as block-style YAML, preserving key order."""
    return yaml.safe_dump(
        document, sort_keys=False, default_flow_style=False, allow_unicode=True
    )


class ContractsGenerator:
    """Generates the API contract package (OpenAPI, JSON Schema, DTOs)."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def generate(self, plan: GenerationPlan) -> GeneratedArtifactSet:
        """Render every file of the contracts package.

        The OpenAPI paths are built from ``plan.routes``, the same tuple the
        adapter generator mounts, so operationIds cannot drift between them.
        """
        artifacts = GeneratedArtifactSet(CONTRACTS_PACKAGE)
        config = plan.config

        artifacts.add_json("package.json", self._package_json(config.contract_format))
        artifacts.add_json("tsconfig.json", ts_compiler_config())

        document = openapi_document(config, plan.domains, plan.routes)
        artifacts.add(OPENAPI_PATH, dump_yaml(document))

        for domain in plan.domains:
            artifacts.add_json(
                f"schemas/{domain.capitalized}.schema.json", json_schema(domain)
            )

        artifacts.add(
            "src/index.ts",
            self.renderer.render(
                "contracts/index.ts.j2",
                {
                    "domains": plan.domains,
                    "fields": ENTITY_FIELDS,
                    "create_fields": CREATE_FIELDS,
                    "error_codes": ERROR_CODES,
                },
            ),
        )
        artifacts.add(
            "src/routes.ts",
            self.renderer.render("contracts/routes.ts.j2", {"routes": plan.routes}),
        )

        if config.contract_format is ContractFormat.GRAPHQL:
            artifacts.add(GRAPHQL_PATH, graphql_sdl(plan.domains, plan.routes))

        return artifacts

    def _package_json(self, contract_format: ContractFormat) -> dict[str, Any]:
        files = ["dist", "openapi", "schemas"]
        if contract_format is ContractFormat.GRAPHQL:
            files.append("graphql")
        return {
            "name": npm_package_name(CONTRACTS_PACKAGE),
            "version": PACKAGE_VERSION,
            "description": "OpenAPI specs and JSON Schemas",
            "main": "dist/index.js",
            "types": "dist/index.d.ts",
            "files": files,
            "scripts": {"build": "tsc", "clean": "rm -rf dist"},
            "devDependencies": {"typescript": "^5.3.0"},
            "license": "MIT",
        }


def generate_contracts(plan: GenerationPlan) -> GeneratedArtifactSet:
    """Convenience wrapper around :meth:`ContractsGenerator.generate`."""
    return ContractsGenerator().generate(plan)
