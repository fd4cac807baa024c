"""The generation plan: names and routes computed once per run.

Every generator reads domain descriptors and route entries from the same
:class:`GenerationPlan` instead of re-deriving them, so a change to the
naming rules reaches all packages at once.
"""

from __future__ import annotations

from dataclasses import dataclass

from bridgegen.config import ProjectConfig
from bridgegen.planning.naming import DomainDescriptor, derive_all
from bridgegen.planning.routes import RouteEntry, build_route_table, routes_for


@dataclass(frozen=True)
class GenerationPlan:
    """Read-only inputs shared by the core, contracts, and adapter generators."""

    config: ProjectConfig
    domains: tuple[DomainDescriptor, ...]
    routes: tuple[RouteEntry, ...]

    @classmethod
    def from_config(cls, config: ProjectConfig) -> "GenerationPlan":
        domains = derive_all(config.domains)
        return cls(config=config, domains=domains, routes=build_route_table(domains))

    def routes_for(self, domain: DomainDescriptor) -> list[RouteEntry]:
        return routes_for(self.routes, domain)
