"""Pure planning layer: names, routes, schemas, and platform policies.

Nothing in this package touches the filesystem.  The generators consume a
:class:`GenerationPlan` built from a :class:`~bridgegen.config.ProjectConfig`::

    from bridgegen.planning import GenerationPlan

    plan = GenerationPlan.from_config(config)
    [route.operation_id for route in plan.routes]
"""

from bridgegen.planning.naming import DomainDescriptor, derive, derive_all
from bridgegen.planning.plan import GenerationPlan
from bridgegen.planning.platforms import PlatformProfile, resolve
from bridgegen.planning.routes import HTTPMethod, RouteEntry, RouteKind, build_route_table

__all__ = [
    "DomainDescriptor",
    "GenerationPlan",
    "HTTPMethod",
    "PlatformProfile",
    "RouteEntry",
    "RouteKind",
    "build_route_table",
    "derive",
    "derive_all",
    "resolve",
]
