"""Core package generation.

Generates the platform-agnostic ``core`` package:

- ``src/domain/models/<Name>.ts``   -- zod schema, response type, mapper
- ``src/domain/errors/DomainError.ts``
- ``src/ports/``                     -- repository and service interfaces
- ``src/use-cases/<token>/``         -- one use case per route, named by
  operationId so adapter controllers can import it by the same name
- ``package.json`` / ``tsconfig.json`` / ``src/index.ts``
"""

from __future__ import annotations

from typing import Any

from bridgegen.generators.artifacts import GeneratedArtifactSet
from bridgegen.generators.templates import TemplateRenderer
from bridgegen.planning.naming import CORE_PACKAGE, DomainDescriptor, capitalize, npm_package_name
from bridgegen.planning.plan import GenerationPlan
from bridgegen.planning.platforms import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from bridgegen.planning.routes import RouteEntry, RouteKind
from bridgegen.planning.schemas import CREATE_FIELDS, ENTITY_FIELDS, EntityField

PACKAGE_VERSION = "0.1.0"

DOMAIN_ERRORS: list[dict[str, Any]] = [
    {"name": "ValidationError", "code": "VALIDATION_ERROR", "status": 400},
    {"name": "NotFoundError", "code": "NOT_FOUND", "status": 404},
    {"name": "ConflictError", "code": "RESOURCE_EXISTS", "status": 409},
    {"name": "UnauthorizedError", "code": "UNAUTHORIZED", "status": 401},
    {"name": "ForbiddenError", "code": "FORBIDDEN", "status": 403},
]

_USE_CASE_TEMPLATES: dict[RouteKind, str] = {
    RouteKind.LIST: "core/use_case_list.ts.j2",
    RouteKind.CREATE: "core/use_case_create.ts.j2",
    RouteKind.GET: "core/use_case_get.ts.j2",
}


def ts_compiler_config() -> dict[str, Any]:
    """``tsconfig.json`` shared by every generated package."""
    return {
        "compilerOptions": {
            "target": "ES2022",
            "module": "NodeNext",
            "moduleResolution": "NodeNext",
            "declaration": True,
            "outDir": "./dist",
            "rootDir": "./src",
            "strict": True,
            "esModuleInterop": True,
            "skipLibCheck": True,
        },
        "include": ["src/**/*"],
        "exclude": ["node_modules", "dist"],
    }


def use_case_module(route: RouteEntry) -> str:
    """Module filename (without extension) of the use case for *route*."""
    return capitalize(route.operation_id)


class CoreGenerator:
    """Generates the domain / port / use-case skeleton package."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def generate(self, plan: GenerationPlan) -> GeneratedArtifactSet:
        """Render every file of the core package.

        Args:
            plan: Names and routes shared with the other generators.

        Returns:
            The ``core`` artifact set; nothing is written to disk.
        """
        artifacts = GeneratedArtifactSet(CORE_PACKAGE)
        context = {"domains": plan.domains}

        artifacts.add_json("package.json", self._package_json())
        artifacts.add_json("tsconfig.json", ts_compiler_config())
        artifacts.add("src/index.ts", self.renderer.render("core/index.ts.j2", context))

        # Domain models
        for domain in plan.domains:
            artifacts.add(
                f"src/domain/models/{domain.capitalized}.ts",
                self.renderer.render("core/model.ts.j2", _model_context(domain)),
            )

        artifacts.add(
            "src/domain/errors/DomainError.ts",
            self.renderer.render("core/DomainError.ts.j2", {"errors": DOMAIN_ERRORS}),
        )

        # Ports
        artifacts.add("src/ports/index.ts", self.renderer.render("core/ports_index.ts.j2", context))
        artifacts.add("src/ports/pagination.ts", self.renderer.render("core/pagination.ts.j2", {}))
        artifacts.add("src/ports/IServices.ts", self.renderer.render("core/IServices.ts.j2", {}))
        for domain in plan.domains:
            artifacts.add(
                f"src/ports/{domain.repository_name}.ts",
                self.renderer.render("core/repository.ts.j2", {"domain": domain}),
            )

        # Use cases
        artifacts.add(
            "src/use-cases/index.ts",
            self.renderer.render("core/use_cases_index.ts.j2", context),
        )
        for domain in plan.domains:
            routes = plan.routes_for(domain)
            artifacts.add(
                f"src/use-cases/{domain.token}/index.ts",
                self.renderer.render("core/domain_use_cases_index.ts.j2", {"routes": routes}),
            )
            for route in routes:
                artifacts.add(
                    f"src/use-cases/{domain.token}/{use_case_module(route)}.ts",
                    self._render_use_case(domain, route),
                )

        return artifacts

    def _render_use_case(self, domain: DomainDescriptor, route: RouteEntry) -> str:
        return self.renderer.render(
            _USE_CASE_TEMPLATES[route.kind],
            {
                "domain": domain,
                "route": route,
                "default_limit": DEFAULT_PAGE_LIMIT,
                "max_limit": MAX_PAGE_LIMIT,
            },
        )

    def _package_json(self) -> dict[str, Any]:
        return {
            "name": npm_package_name(CORE_PACKAGE),
            "version": PACKAGE_VERSION,
            "description": "Platform-agnostic business logic core",
            "main": "dist/index.js",
            "types": "dist/index.d.ts",
            "scripts": {"build": "tsc", "clean": "rm -rf dist"},
            "dependencies": {"zod": "^3.22.4"},
            "devDependencies": {"typescript": "^5.3.0", "@types/node": "^20.10.0"},
            "license": "MIT",
        }


def generate_core(plan: GenerationPlan) -> GeneratedArtifactSet:
    """Convenience wrapper around :meth:`CoreGenerator.generate`."""
    return CoreGenerator().generate(plan)


# ---------------------------------------------------------------------------
# Template context helpers
# ---------------------------------------------------------------------------

def _zod_expression(field: EntityField) -> str:
    if field.format == "uuid":
        return "z.string().uuid()"
    if field.format == "date-time":
        return "z.date()"
    if field.required:
        return "z.string().min(1)"
    return "z.string()"


def _model_field(field: EntityField) -> dict[str, str]:
    # Entities hold Date objects; the public response carries ISO strings.
    to_response = f"entity.{field.name}"
    if field.format == "date-time":
        to_response += ".toISOString()"
    return {
        "name": field.name,
        "zod": _zod_expression(field),
        "ts_type": field.ts_type,
        "to_response": to_response,
    }


def _model_context(domain: DomainDescriptor) -> dict[str, Any]:
    return {
        "domain": domain,
        "fields": [_model_field(f) for f in ENTITY_FIELDS],
        "create_fields": [_model_field(f) for f in CREATE_FIELDS],
    }
