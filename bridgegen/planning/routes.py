"""Canonical route table shared by the contracts and adapter generators.

Each domain contributes exactly three routes, always in this order:

=========  ======  =========================  ====================
kind       method  path                       operationId
=========  ======  =========================  ====================
list       GET     ``/{segment}``             ``list{Name}s``
create     POST    ``/{segment}``             ``create{Name}``
get        GET     ``/{segment}/{{param}}``   ``get{Name}``
=========  ======  =========================  ====================

The OpenAPI paths object and every adapter's router mounts are projections
of this table.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from bridgegen.planning.naming import DomainDescriptor


class HTTPMethod(str, Enum):
    """HTTP methods used by the canonical routes."""
    GET = "GET"
    POST = "POST"


class RouteKind(str, Enum):
    """Role of a route within its domain."""
    LIST = "list"
    CREATE = "create"
    GET = "get"


_PATH_PARAM_RE = re.compile(r"\{([^}]+)\}")


@dataclass(frozen=True)
class RouteEntry:
    """One (method, path, operationId) triple of the API surface."""

    method: HTTPMethod
    path: str
    operation_id: str
    domain: DomainDescriptor
    kind: RouteKind

    @property
    def mount_path(self) -> str:
        """Collection path the domain router is mounted under."""
        return self.domain.collection_path

    @property
    def relative_path(self) -> str:
        """Express-style path below :attr:`mount_path` (``/`` or ``/:userId``)."""
        rest = self.path[len(self.mount_path):]
        return _PATH_PARAM_RE.sub(r":\1", rest) or "/"

    @property
    def path_params(self) -> list[str]:
        return _PATH_PARAM_RE.findall(self.path)

    @property
    def is_mutation(self) -> bool:
        return self.method is not HTTPMethod.GET


def domain_routes(domain: DomainDescriptor) -> tuple[RouteEntry, RouteEntry, RouteEntry]:
    """Return the list, create, and get routes for one domain."""
    name = domain.capitalized
    return (
        RouteEntry(
            method=HTTPMethod.GET,
            path=domain.collection_path,
            operation_id=f"list{name}s",
            domain=domain,
            kind=RouteKind.LIST,
        ),
        RouteEntry(
            method=HTTPMethod.POST,
            path=domain.collection_path,
            operation_id=f"create{name}",
            domain=domain,
            kind=RouteKind.CREATE,
        ),
        RouteEntry(
            method=HTTPMethod.GET,
            path=domain.item_path,
            operation_id=f"get{name}",
            domain=domain,
            kind=RouteKind.GET,
        ),
    )


def build_route_table(domains: Iterable[DomainDescriptor]) -> tuple[RouteEntry, ...]:
    """Build the full route table, ordered by domain then by route kind."""
    table: list[RouteEntry] = []
    for domain in domains:
        table.extend(domain_routes(domain))
    return tuple(table)


def routes_for(routes: Iterable[RouteEntry], domain: DomainDescriptor) -> list[RouteEntry]:
    """Return the entries of *routes* belonging to *domain*, in table order."""
    return [route for route in routes if route.domain == domain]


def operation_ids(routes: Iterable[RouteEntry]) -> list[str]:
    return [route.operation_id for route in routes]


def mount_paths(routes: Iterable[RouteEntry]) -> list[str]:
    """Distinct collection paths in first-seen order."""
    seen: list[str] = []
    for route in routes:
        if route.mount_path not in seen:
            seen.append(route.mount_path)
    return seen
