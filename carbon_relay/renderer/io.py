"""I/O utilities for the renderer module.

Provides atomic file writing to prevent partial writes and ensure data integrity.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path

import structlog


logger = structlog.get_logger()


@dataclass(frozen=True)
class GeneratedFile:
    """Information about a generated file.

    Attributes:
        path: Path of the written file.
        bytes_written: Number of bytes written.
        sha256: SHA-256 checksum of content.
    """

    path: str
    bytes_written: int
    sha256: str


class AtomicWriter:
    """Provides atomic file writing operations.

    Writes content to a temporary file first, then renames to the final path.
    This ensures that readers never see partially written files.
    """

    def __init__(self, run_id: str | None = None) -> None:
        """Initialize the atomic writer.

        Args:
            run_id: Optional run ID for logging context.
        """
        self._log = logger.bind(component="atomic_writer")
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def write(self, path: Path, content: str) -> GeneratedFile:
        """Write content to file with atomic semantics.

        Args:
            path: Target file path; parent directories are created.
            content: Content to write (will be encoded as UTF-8).

        Returns:
            GeneratedFile with path, checksum, and size information.
        """
        content_bytes = content.encode("utf-8")
        sha256 = hashlib.sha256(content_bytes).hexdigest()

        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        temp_path.write_bytes(content_bytes)
        temp_path.replace(path)

        self._log.debug(
            "file_written",
            path=str(path),
            bytes=len(content_bytes),
            sha256=sha256[:12],
        )

        return GeneratedFile(
            path=str(path),
            bytes_written=len(content_bytes),
            sha256=sha256,
        )
