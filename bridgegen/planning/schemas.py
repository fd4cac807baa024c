"""Schema synthesis for the contracts package.

The OpenAPI component schemas, the per-domain JSON Schema documents, the
TypeScript DTO interfaces, and the GraphQL SDL are all projected from
:data:`ENTITY_FIELDS`, so the field sets stay congruent across every wire
artifact.  Paths are projected from the route table.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from bridgegen.config import ProjectConfig
from bridgegen.planning.naming import DomainDescriptor
from bridgegen.planning.routes import RouteEntry, RouteKind, build_route_table

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_ID_BASE = "https://corebridge.dev/schemas"
API_SERVER_URL = "/api/v1"
SECURITY_SCHEME = "BearerAuth"

ERROR_CODES = (
    "VALIDATION_ERROR",
    "NOT_FOUND",
    "RESOURCE_EXISTS",
    "UNAUTHORIZED",
    "FORBIDDEN",
)


@dataclass(frozen=True)
class EntityField:
    """One field of the per-domain response shape."""

    name: str
    json_type: str
    format: str | None
    ts_type: str
    graphql_type: str
    required: bool

    def json_property(self) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": self.json_type}
        if self.format:
            prop["format"] = self.format
        return prop


ENTITY_FIELDS: tuple[EntityField, ...] = (
    EntityField("id", "string", "uuid", "string", "ID", required=True),
    EntityField("name", "string", None, "string", "String", required=False),
    EntityField("createdAt", "string", "date-time", "string", "String", required=True),
    EntityField("updatedAt", "string", "date-time", "string", "String", required=True),
)

# Fields accepted by the create operation; all of them required.
CREATE_FIELDS: tuple[EntityField, ...] = (
    EntityField("name", "string", None, "string", "String", required=True),
)


# ---------------------------------------------------------------------------
# Schema names
# ---------------------------------------------------------------------------

def response_schema_name(domain: DomainDescriptor) -> str:
    return f"{domain.capitalized}Response"


def create_request_schema_name(domain: DomainDescriptor) -> str:
    return f"Create{domain.capitalized}Request"


def schema_ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


# ---------------------------------------------------------------------------
# Component schemas
# ---------------------------------------------------------------------------

def create_request_schema(domain: DomainDescriptor) -> dict[str, Any]:
    """Request body schema of the create operation."""
    return {
        "type": "object",
        "required": [f.name for f in CREATE_FIELDS],
        "properties": {f.name: f.json_property() for f in CREATE_FIELDS},
    }


def response_schema(domain: DomainDescriptor) -> dict[str, Any]:
    """Schema of a single entity as returned by the API."""
    return {
        "type": "object",
        "properties": {f.name: f.json_property() for f in ENTITY_FIELDS},
    }


def list_response_schema(domain: DomainDescriptor) -> dict[str, Any]:
    """Inline schema of the list operation's response body."""
    return {
        "type": "object",
        "properties": {
            "items": {
                "type": "array",
                "items": schema_ref(response_schema_name(domain)),
            },
            "total": {"type": "integer"},
            "hasMore": {"type": "boolean"},
        },
    }


def component_schemas(domains: Iterable[DomainDescriptor]) -> dict[str, Any]:
    schemas: dict[str, Any] = {}
    for domain in domains:
        schemas[create_request_schema_name(domain)] = create_request_schema(domain)
        schemas[response_schema_name(domain)] = response_schema(domain)
    return schemas


# ---------------------------------------------------------------------------
# OpenAPI
# ---------------------------------------------------------------------------

def _json_content(schema: dict[str, Any]) -> dict[str, Any]:
    return {"application/json": {"schema": schema}}


def operation_object(route: RouteEntry) -> dict[str, Any]:
    """Project one route entry into an OpenAPI operation object."""
    domain = route.domain
    ref = schema_ref(response_schema_name(domain))

    if route.kind is RouteKind.LIST:
        return {
            "operationId": route.operation_id,
            "summary": f"List {domain.route_segment}",
            "responses": {
                "200": {
                    "description": "Success",
                    "content": _json_content(list_response_schema(domain)),
                },
            },
        }

    if route.kind is RouteKind.CREATE:
        return {
            "operationId": route.operation_id,
            "summary": f"Create {domain.token}",
            "requestBody": {
                "required": True,
                "content": _json_content(
                    schema_ref(create_request_schema_name(domain))
                ),
            },
            "responses": {
                "201": {"description": "Created", "content": _json_content(ref)},
            },
        }

    return {
        "operationId": route.operation_id,
        "summary": f"Get {domain.token} by ID",
        "parameters": [
            {
                "name": param,
                "in": "path",
                "required": True,
                "schema": {"type": "string", "format": "uuid"},
            }
            for param in route.path_params
        ],
        "responses": {
            "200": {"description": "Success", "content": _json_content(ref)},
        },
    }


def openapi_paths(routes: Iterable[RouteEntry]) -> dict[str, Any]:
    """Group route entries into path-item objects keyed by path."""
    paths: dict[str, dict[str, Any]] = {}
    for route in routes:
        item = paths.setdefault(route.path, {})
        item[route.method.value.lower()] = operation_object(route)
    return paths


def openapi_document(
    config: ProjectConfig,
    domains: Sequence[DomainDescriptor],
    routes: Sequence[RouteEntry] | None = None,
) -> dict[str, Any]:
    """Build the OpenAPI document for *domains*.

    *routes* defaults to the route table derived from *domains*; callers that
    already hold the table pass it in so it is not rebuilt.

    The ``BearerAuth`` security scheme is always declared, even when every
    configured adapter authenticates with a session cookie.
    """
    if routes is None:
        routes = build_route_table(domains)
    return {
        "openapi": config.contract_version,
        "info": {
            "title": "CoreBridge API",
            "version": "1.0.0",
            "description": "Platform-agnostic API",
        },
        "servers": [{"url": API_SERVER_URL}],
        "paths": openapi_paths(routes),
        "components": {
            "schemas": component_schemas(domains),
            "securitySchemes": {
                SECURITY_SCHEME: {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT",
                },
            },
        },
    }


# ---------------------------------------------------------------------------
# JSON Schema
# ---------------------------------------------------------------------------

def json_schema(domain: DomainDescriptor) -> dict[str, Any]:
    """Standalone JSON Schema document describing one domain entity."""
    return {
        "$schema": JSON_SCHEMA_DIALECT,
        "$id": f"{SCHEMA_ID_BASE}/{domain.capitalized}",
        "title": domain.capitalized,
        "type": "object",
        "properties": {f.name: f.json_property() for f in ENTITY_FIELDS},
        "required": [f.name for f in ENTITY_FIELDS if f.required],
    }


# ---------------------------------------------------------------------------
# GraphQL SDL
# ---------------------------------------------------------------------------

def _graphql_type(field: EntityField) -> str:
    return field.graphql_type + ("!" if field.required else "")


def graphql_sdl(
    domains: Sequence[DomainDescriptor], routes: Sequence[RouteEntry]
) -> str:
    """Render a GraphQL schema equivalent to the OpenAPI document.

    Reads become ``Query`` fields and creates become ``Mutation`` fields,
    each named by its operationId.
    """
    blocks: list[str] = []
    for domain in domains:
        lines = [f"type {response_schema_name(domain)} {{"]
        lines += [f"  {f.name}: {_graphql_type(f)}" for f in ENTITY_FIELDS]
        lines.append("}")
        blocks.append("\n".join(lines))

        lines = [f"input {create_request_schema_name(domain)} {{"]
        lines += [f"  {f.name}: {_graphql_type(f)}" for f in CREATE_FIELDS]
        lines.append("}")
        blocks.append("\n".join(lines))

    queries: list[str] = []
    mutations: list[str] = []
    for route in routes:
        response = response_schema_name(route.domain)
        if route.kind is RouteKind.LIST:
            queries.append(
                f"  {route.operation_id}(limit: Int, offset: Int, cursor: String): [{response}!]!"
            )
        elif route.kind is RouteKind.GET:
            args = ", ".join(f"{p}: ID!" for p in route.path_params)
            queries.append(f"  {route.operation_id}({args}): {response}")
        else:
            request = create_request_schema_name(route.domain)
            mutations.append(f"  {route.operation_id}(input: {request}!): {response}!")

    if queries:
        blocks.append("type Query {\n" + "\n".join(queries) + "\n}")
    if mutations:
        blocks.append("type Mutation {\n" + "\n".join(mutations) + "\n}")
    return "\n\n".join(blocks) + "\n"
