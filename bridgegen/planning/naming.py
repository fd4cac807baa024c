"""Name derivation for domain tokens.

Every surface form a generator needs (type names, route segments, path
parameters, package names) is derived here from the raw token so that the
core, contracts, and adapter packages spell things identically.

Pluralisation is always "append ``s``".  Irregular plurals are not handled
and tokens are not validated; ``derive`` is total over any string.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

NPM_SCOPE = "@corebridge"

CORE_PACKAGE = "core"
CONTRACTS_PACKAGE = "contracts"
ADAPTER_PACKAGE_PREFIX = "adapter-"


@dataclass(frozen=True)
class DomainDescriptor:
    """All derived spellings of one domain token."""

    token: str
    capitalized: str
    route_segment: str
    path_param: str

    @property
    def plural_capitalized(self) -> str:
        """``Users`` for ``user``; used in list operation names."""
        return self.capitalized + "s"

    @property
    def collection_path(self) -> str:
        return f"/{self.route_segment}"

    @property
    def item_path(self) -> str:
        return f"/{self.route_segment}/{{{self.path_param}}}"

    @property
    def router_name(self) -> str:
        """Name of the Express router exported by the domain controller."""
        return f"{self.token}Router"

    @property
    def controller_name(self) -> str:
        return f"{self.capitalized}Controller"

    @property
    def repository_name(self) -> str:
        return f"I{self.capitalized}Repository"


def capitalize(value: str) -> str:
    """Upper-case the first character only (``projectItem`` -> ``ProjectItem``)."""
    return value[:1].upper() + value[1:]


def derive(token: str) -> DomainDescriptor:
    """Derive the descriptor for a single domain token."""
    return DomainDescriptor(
        token=token,
        capitalized=capitalize(token),
        route_segment=token + "s",
        path_param=token + "Id",
    )


def derive_all(tokens: Iterable[str]) -> tuple[DomainDescriptor, ...]:
    """Derive descriptors for *tokens*, preserving order."""
    return tuple(derive(token) for token in tokens)


# ---------------------------------------------------------------------------
# Package / adapter naming
# ---------------------------------------------------------------------------

def adapter_package_dir(adapter_id: str) -> str:
    """Directory name of an adapter package, e.g. ``adapter-web``."""
    return f"{ADAPTER_PACKAGE_PREFIX}{adapter_id}"


def npm_package_name(package_dir: str) -> str:
    """Scoped npm name for a generated package directory."""
    return f"{NPM_SCOPE}/{package_dir}"


def adapter_router_factory(adapter_id: str) -> str:
    """Name of the router factory exported by an adapter's index module."""
    return f"create{capitalize(adapter_id)}Router"
