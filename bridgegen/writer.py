"""Filesystem sink for generated packages.

The writer is the only component that touches the output directory.  It
creates each directory before writing into it, overwrites existing files
unconditionally, and never deletes files left over from earlier runs.
I/O errors are not caught here; they reach the orchestrator unchanged.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from bridgegen.generators.artifacts import GeneratedArtifactSet
from bridgegen.utils import ensure_dir, write_text


class ArtifactWriter:
    """Writes :class:`GeneratedArtifactSet` contents below an output root."""

    def ensure_directory(self, path: str | Path) -> Path:
        return ensure_dir(path)

    def write_file(self, path: str | Path, content: str) -> Path:
        return write_text(path, content)

    def write_set(self, artifacts: GeneratedArtifactSet, output_dir: str | Path) -> list[Path]:
        """Write every artifact of one package to ``output_dir/<package>``.

        Returns:
            The written file paths, in artifact order.

        Raises:
            OSError: On the first failed directory creation or write.  Files
                written before the failure are left in place.
        """
        package_root = self.ensure_directory(Path(output_dir) / artifacts.package)
        written: list[Path] = []
        for artifact in artifacts:
            target = package_root / artifact.path
            self.ensure_directory(target.parent)
            written.append(self.write_file(target, artifact.content))
        return written

    async def write_set_async(
        self, artifacts: GeneratedArtifactSet, output_dir: str | Path
    ) -> list[Path]:
        """Run :meth:`write_set` in a worker thread."""
        return await asyncio.to_thread(self.write_set, artifacts, output_dir)
