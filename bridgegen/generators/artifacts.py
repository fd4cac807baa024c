"""In-memory output of a generator: ``(relative path, content)`` pairs."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from bridgegen.errors import GenerationError
from bridgegen.utils import dump_json


@dataclass(frozen=True)
class Artifact:
    """A single generated file, addressed relative to its package root."""

    path: str
    content: str


@dataclass
class GeneratedArtifactSet:
    """Ordered files of one generated package.

    Consistency between packages is structural only: artifact sets never
    refer to each other.
    """

    package: str
    artifacts: list[Artifact] = field(default_factory=list)

    def add(self, path: str, content: str) -> Artifact:
        """Append a file.  Adding the same path twice raises ``GenerationError``."""
        if path in self:
            raise GenerationError(self.package, f"duplicate artifact path {path!r}")
        artifact = Artifact(path=path, content=content)
        self.artifacts.append(artifact)
        return artifact

    def add_json(self, path: str, data: dict[str, Any]) -> Artifact:
        return self.add(path, dump_json(data))

    def get(self, path: str) -> str:
        """Return the content at *path*.

        Raises:
            KeyError: If no artifact has that path.
        """
        for artifact in self.artifacts:
            if artifact.path == path:
                return artifact.content
        raise KeyError(path)

    def paths(self) -> list[str]:
        return [artifact.path for artifact in self.artifacts]

    def __contains__(self, path: object) -> bool:
        return any(artifact.path == path for artifact in self.artifacts)

    def __iter__(self) -> Iterator[Artifact]:
        return iter(self.artifacts)

    def __len__(self) -> int:
        return len(self.artifacts)
