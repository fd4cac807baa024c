"""Platform adapter package generation.

Generates one ``adapter-<id>`` package per platform:

- ``src/middleware/auth.ts``          -- session cookie or bearer token check
- ``src/middleware/errorHandler.ts``  -- maps core DomainErrors to HTTP
- ``src/transformers/``               -- request merging, plain or offline-wrapped responses
- ``src/extensions/pagination.ts``    -- cursor or offset pagination
- ``src/extensions/offline.ts``       -- only for profiles with the offline extension
- ``src/controllers/<Name>Controller.ts`` -- one handler per route entry
- ``src/index.ts``                    -- mounts each controller at its route table path

Every branch is taken on a :class:`PlatformProfile` field, never on the
adapter identifier, so unknown adapters render exactly like ``web``.
"""

from __future__ import annotations

from typing import Any

from bridgegen.generators.artifacts import GeneratedArtifactSet
from bridgegen.generators.core_gen import PACKAGE_VERSION, ts_compiler_config
from bridgegen.generators.templates import TemplateRenderer
from bridgegen.planning.naming import (
    CONTRACTS_PACKAGE,
    CORE_PACKAGE,
    DomainDescriptor,
    adapter_package_dir,
    adapter_router_factory,
    capitalize,
    npm_package_name,
)
from bridgegen.planning.plan import GenerationPlan
from bridgegen.planning.platforms import (
    BEARER_PREFIX,
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    OFFLINE_MODULE,
    PAGINATION_MODULE,
    SESSION_COOKIE,
    UNAUTHORIZED_BODY,
    AuthScheme,
    Envelope,
    PaginationStyle,
    PlatformProfile,
    cache_policy,
    resolve,
)
from bridgegen.planning.routes import mount_paths
from bridgegen.planning.schemas import create_request_schema_name

_AUTH_TEMPLATES: dict[AuthScheme, str] = {
    AuthScheme.SESSION: "adapter/auth_session.ts.j2",
    AuthScheme.BEARER: "adapter/auth_bearer.ts.j2",
}

_RESPONSE_TEMPLATES: dict[Envelope, str] = {
    Envelope.PLAIN: "adapter/response_plain.ts.j2",
    Envelope.OFFLINE_WRAPPED: "adapter/response_offline.ts.j2",
}

_PAGINATION_TEMPLATES: dict[PaginationStyle, str] = {
    PaginationStyle.CURSOR: "adapter/pagination_cursor.ts.j2",
    PaginationStyle.OFFSET: "adapter/pagination_offset.ts.j2",
}

# Export order of extension modules in the adapter index.
_EXTENSION_ORDER = (PAGINATION_MODULE, OFFLINE_MODULE)


class AdapterGenerator:
    """Generates the adapter package for a single platform."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def generate(self, plan: GenerationPlan, adapter_id: str) -> GeneratedArtifactSet:
        """Render every file of ``adapter-<adapter_id>``.

        Args:
            plan: Names and routes shared with the other generators.
            adapter_id: Platform identifier from the config.  Unknown
                identifiers are rendered with the web profile but keep their
                own package directory and router factory name.

        Returns:
            The adapter artifact set; nothing is written to disk.
        """
        profile = resolve(adapter_id)
        artifacts = GeneratedArtifactSet(adapter_package_dir(adapter_id))
        context = self._base_context(plan, adapter_id, profile)

        artifacts.add_json("package.json", self._package_json(adapter_id, profile))
        artifacts.add_json("tsconfig.json", ts_compiler_config())

        # Middleware
        artifacts.add(
            "src/middleware/auth.ts",
            self.renderer.render(_AUTH_TEMPLATES[profile.auth], context),
        )
        artifacts.add(
            "src/middleware/errorHandler.ts",
            self.renderer.render("adapter/errorHandler.ts.j2", context),
        )

        # Transformers
        artifacts.add(
            "src/transformers/request.ts",
            self.renderer.render("adapter/request.ts.j2", context),
        )
        artifacts.add(
            "src/transformers/response.ts",
            self.renderer.render(_RESPONSE_TEMPLATES[profile.envelope], context),
        )

        # Extensions
        artifacts.add(
            "src/extensions/pagination.ts",
            self.renderer.render(_PAGINATION_TEMPLATES[profile.pagination], context),
        )
        if profile.offline:
            artifacts.add(
                "src/extensions/offline.ts",
                self.renderer.render("adapter/offline.ts.j2", context),
            )

        # Controllers
        for domain in plan.domains:
            artifacts.add(
                f"src/controllers/{domain.controller_name}.ts",
                self._render_controller(plan, domain, context),
            )

        artifacts.add("src/index.ts", self.renderer.render("adapter/index.ts.j2", context))
        return artifacts

    # -- Context building --------------------------------------------------

    def _base_context(
        self, plan: GenerationPlan, adapter_id: str, profile: PlatformProfile
    ) -> dict[str, Any]:
        return {
            "adapter_id": adapter_id,
            "adapter_title": capitalize(adapter_id),
            "router_factory": adapter_router_factory(adapter_id),
            "domains": plan.domains,
            "mounts": _mounts(plan),
            "extension_modules": [
                m for m in _EXTENSION_ORDER if m in profile.extension_modules
            ],
            "session": profile.auth is AuthScheme.SESSION,
            "cursor": profile.pagination is PaginationStyle.CURSOR,
            "offline": profile.envelope is Envelope.OFFLINE_WRAPPED,
            "cache_policy": cache_policy(plan.routes),
            "session_cookie": SESSION_COOKIE,
            "bearer_prefix": BEARER_PREFIX,
            "unauthorized": UNAUTHORIZED_BODY,
            "default_limit": DEFAULT_PAGE_LIMIT,
            "max_limit": MAX_PAGE_LIMIT,
        }

    def _render_controller(
        self, plan: GenerationPlan, domain: DomainDescriptor, context: dict[str, Any]
    ) -> str:
        handlers = [
            {"route": route, "deps_type": f"{capitalize(route.operation_id)}Deps"}
            for route in plan.routes_for(domain)
        ]
        return self.renderer.render(
            "adapter/controller.ts.j2",
            {
                **context,
                "domain": domain,
                "handlers": handlers,
                "request_type": create_request_schema_name(domain),
            },
        )

    def _package_json(self, adapter_id: str, profile: PlatformProfile) -> dict[str, Any]:
        dependencies = {
            npm_package_name(CORE_PACKAGE): "^0.1.0",
            npm_package_name(CONTRACTS_PACKAGE): "^0.1.0",
            "express": "^4.18.2",
        }
        dev_dependencies = {
            "typescript": "^5.3.0",
            "@types/node": "^20.10.0",
            "@types/express": "^4.17.21",
        }
        if profile.auth is AuthScheme.SESSION:
            dependencies["cookie-parser"] = "^1.4.6"
            dev_dependencies["@types/cookie-parser"] = "^1.4.6"
        return {
            "name": npm_package_name(adapter_package_dir(adapter_id)),
            "version": PACKAGE_VERSION,
            "description": f"{capitalize(adapter_id)} platform adapter for CoreBridge",
            "main": "dist/index.js",
            "types": "dist/index.d.ts",
            "scripts": {"build": "tsc", "clean": "rm -rf dist"},
            "dependencies": dependencies,
            "devDependencies": dev_dependencies,
            "license": "MIT",
        }


def generate_adapter(plan: GenerationPlan, adapter_id: str) -> GeneratedArtifactSet:
    """Convenience wrapper around :meth:`AdapterGenerator.generate`."""
    return AdapterGenerator().generate(plan, adapter_id)


def _mounts(plan: GenerationPlan) -> list[dict[str, Any]]:
    """One mount per distinct collection path, in route table order."""
    owners: dict[str, DomainDescriptor] = {}
    for route in plan.routes:
        owners.setdefault(route.mount_path, route.domain)
    return [{"path": path, "domain": owners[path]} for path in mount_paths(plan.routes)]
