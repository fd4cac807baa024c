"""Platform policy table.

A :class:`PlatformProfile` captures every way an adapter package varies by
platform: pagination style, authentication scheme, response envelope, and
extension modules.  Adding a platform means adding a row to
:data:`BUILTIN_PROFILES`; the adapter generator branches only on profile
fields, never on adapter names.

The functions in the second half of this module are the reference
semantics of the runtime helpers emitted into adapter packages
(pagination wrappers, credential extraction, offline envelope).  The
adapter templates are rendered from the same tables.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from bridgegen.planning.routes import RouteEntry, RouteKind


class PaginationStyle(str, Enum):
    CURSOR = "cursor"
    OFFSET = "offset"


class AuthScheme(str, Enum):
    SESSION = "session"
    BEARER = "bearer"


class Envelope(str, Enum):
    PLAIN = "plain"
    OFFLINE_WRAPPED = "offline-wrapped"


PAGINATION_MODULE = "pagination"
OFFLINE_MODULE = "offline"

SESSION_COOKIE = "session"
BEARER_PREFIX = "Bearer "

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100

UNAUTHORIZED_BODY: dict[str, str] = {
    "code": "UNAUTHORIZED",
    "message": "Authentication required",
}


@dataclass(frozen=True)
class PlatformProfile:
    """Fixed policy set for one target platform."""

    adapter_id: str
    pagination: PaginationStyle
    auth: AuthScheme
    envelope: Envelope
    extension_modules: frozenset[str]

    @property
    def offline(self) -> bool:
        return OFFLINE_MODULE in self.extension_modules


WEB_PROFILE = PlatformProfile(
    adapter_id="web",
    pagination=PaginationStyle.CURSOR,
    auth=AuthScheme.SESSION,
    envelope=Envelope.PLAIN,
    extension_modules=frozenset({PAGINATION_MODULE}),
)

MOBILE_PROFILE = PlatformProfile(
    adapter_id="mobile",
    pagination=PaginationStyle.OFFSET,
    auth=AuthScheme.BEARER,
    envelope=Envelope.OFFLINE_WRAPPED,
    extension_modules=frozenset({PAGINATION_MODULE, OFFLINE_MODULE}),
)

BUILTIN_PROFILES: dict[str, PlatformProfile] = {
    WEB_PROFILE.adapter_id: WEB_PROFILE,
    MOBILE_PROFILE.adapter_id: MOBILE_PROFILE,
}

DEFAULT_PROFILE = WEB_PROFILE


def resolve(adapter_id: str) -> PlatformProfile:
    """Return the profile for *adapter_id*.

    Unrecognised identifiers get :data:`DEFAULT_PROFILE` (web).  The fallback
    returns the web profile object itself, so ``resolve("desktop")`` and
    ``resolve("web")`` compare equal.
    """
    return BUILTIN_PROFILES.get(adapter_id, DEFAULT_PROFILE)


def is_builtin(adapter_id: str) -> bool:
    return adapter_id in BUILTIN_PROFILES


# ---------------------------------------------------------------------------
# Cache policy (offline envelope)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CachePolicy:
    """Offline caching behaviour of one operation."""

    cacheable: bool
    ttl: int = 0
    queueable: bool = False


# Single-entity reads live longest, lists refresh sooner, writes never cache.
CACHE_POLICY_BY_KIND: dict[RouteKind, CachePolicy] = {
    RouteKind.GET: CachePolicy(cacheable=True, ttl=3600),
    RouteKind.LIST: CachePolicy(cacheable=True, ttl=300),
    RouteKind.CREATE: CachePolicy(cacheable=False, queueable=True),
}

NOT_CACHEABLE = CachePolicy(cacheable=False)


def cache_policy(routes: Iterable[RouteEntry]) -> dict[str, CachePolicy]:
    """Map every operationId in *routes* to its cache policy."""
    return {route.operation_id: CACHE_POLICY_BY_KIND[route.kind] for route in routes}


def _version_stamp(now: datetime | None) -> int:
    moment = now or datetime.now(timezone.utc)
    return int(moment.timestamp() * 1000)


def offline_flags(
    operation_id: str,
    routes: Sequence[RouteEntry],
    now: datetime | None = None,
) -> dict[str, Any]:
    """Return the ``_offline`` block for *operation_id*.

    Cacheable operations get ``{cacheable, ttl, version}`` where ``version``
    is a millisecond timestamp.  Everything else, including operations not
    present in *routes*, gets ``{cacheable: False}``.
    """
    policy = cache_policy(routes).get(operation_id, NOT_CACHEABLE)
    if not policy.cacheable:
        return {"cacheable": False}
    return {"cacheable": True, "ttl": policy.ttl, "version": _version_stamp(now)}


def can_queue_offline(operation_id: str, routes: Sequence[RouteEntry]) -> bool:
    return cache_policy(routes).get(operation_id, NOT_CACHEABLE).queueable


def wrap_payload(
    payload: Mapping[str, Any],
    operation_id: str,
    routes: Sequence[RouteEntry],
    now: datetime | None = None,
) -> dict[str, Any]:
    """Return a copy of *payload* with an ``_offline`` block added.

    The payload's own fields are copied unchanged and the input mapping is
    not mutated.
    """
    return {**payload, "_offline": offline_flags(operation_id, routes, now)}


def no_cache(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {**payload, "_offline": {"cacheable": False}}


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_int(value: Any, default: int) -> int:
    """Mirror of ``parseInt(String(value ?? ''), 10) || default``.

    Only the leading integer is read, so ``"10abc"`` is 10 and ``"7.9"`` is 7.
    """
    match = _LEADING_INT.match("" if value is None else str(value))
    return (int(match.group(1)) if match else 0) or default


def parse_cursor_params(query: Mapping[str, Any]) -> dict[str, Any]:
    """Read ``cursor`` and ``limit`` from a query mapping (limit capped at 100).

    A cursor that is not a string is dropped.
    """
    cursor = query.get("cursor")
    return {
        "cursor": cursor if isinstance(cursor, str) else None,
        "limit": min(_parse_int(query.get("limit"), DEFAULT_PAGE_LIMIT), MAX_PAGE_LIMIT),
    }


def parse_offset_params(query: Mapping[str, Any]) -> dict[str, int]:
    """Read ``offset`` and ``limit`` from a query mapping (limit capped at 100)."""
    return {
        "offset": _parse_int(query.get("offset"), 0),
        "limit": min(_parse_int(query.get("limit"), DEFAULT_PAGE_LIMIT), MAX_PAGE_LIMIT),
    }


def paginate_cursor(
    items: Sequence[Any],
    has_more: bool,
    get_cursor: Callable[[Any], str],
) -> dict[str, Any]:
    """Cursor-paginated response body.

    ``nextCursor`` is ``None`` when there is no further page or the page is
    empty; otherwise it is the cursor of the last item.
    """
    next_cursor = get_cursor(items[-1]) if has_more and items else None
    return {
        "data": list(items),
        "pagination": {"hasMore": has_more, "nextCursor": next_cursor},
    }


def paginate_offset(
    items: Sequence[Any], total: int, offset: int, limit: int
) -> dict[str, Any]:
    """Offset-paginated response body with ``hasMore = offset + len(items) < total``."""
    return {
        "data": list(items),
        "pagination": {
            "total": total,
            "offset": offset,
            "limit": limit,
            "hasMore": offset + len(items) < total,
        },
    }


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

def extract_credential(
    profile: PlatformProfile,
    headers: Mapping[str, str],
    cookies: Mapping[str, str],
) -> str | None:
    """Return the raw credential the profile expects, or ``None`` if absent.

    Header names are matched case-insensitively.  The credential is not
    checked for authenticity.
    """
    if profile.auth is AuthScheme.SESSION:
        return cookies.get(SESSION_COOKIE) or None

    lowered = {key.lower(): value for key, value in headers.items()}
    header = lowered.get("authorization", "")
    if not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):] or None


def authenticate(
    profile: PlatformProfile,
    headers: Mapping[str, str],
    cookies: Mapping[str, str],
) -> dict[str, str] | None:
    """Return ``None`` when a credential is present, else the 401 error body."""
    if extract_credential(profile, headers, cookies) is None:
        return dict(UNAUTHORIZED_BODY)
    return None
