"""File-extension lookup of tree point cloud readers and writers."""

from __future__ import annotations

from pathlib import Path

from crownscorch.core.pointcloud import PointCloud
from crownscorch.io.base import Reader, Writer


class FormatRegistry:
    """Maps lowercase file extensions to reader and writer classes."""

    def __init__(self) -> None:
        self.readers: dict[str, type[Reader]] = {}
        self.writers: dict[str, type[Writer]] = {}

    def register(self, reader: type[Reader], writer: type[Writer]) -> None:
        for ext in reader.extensions:
            self.readers[ext.lower()] = reader
        for ext in writer.extensions:
            self.writers[ext.lower()] = writer

    @staticmethod
    def _lookup(table: dict, path: str | Path, kind: str):
        ext = Path(path).suffix.lower()
        if ext not in table:
            raise ValueError(
                f"No {kind} for extension '{ext}' ({Path(path).name}). "
                f"Tree files must be one of: {sorted(table)}"
            )
        return table[ext]()

    def reader_for(self, path: str | Path) -> Reader:
        return self._lookup(self.readers, path, "reader")

    def writer_for(self, path: str | Path) -> Writer:
        return self._lookup(self.writers, path, "writer")


formats = FormatRegistry()


def _ensure_registered() -> None:
    """Register the LAS/LAZ format on first use, so laspy loads lazily."""
    if formats.readers:
        return

    from crownscorch.io.las import LasReader, LasWriter

    formats.register(LasReader, LasWriter)


def read(path: str | Path) -> PointCloud:
    """Read a tree point cloud, choosing the format from the extension."""
    _ensure_registered()
    return formats.reader_for(path).read(str(path))


def write(pc: PointCloud, path: str | Path) -> int:
    """Write a tree point cloud, choosing the format from the extension.

    Returns:
        Number of points written.
    """
    _ensure_registered()
    return formats.writer_for(path).write(pc, str(path))


def supported_extensions() -> list[str]:
    """Extensions `read()` accepts, e.g. ['.las', '.laz']."""
    _ensure_registered()
    return sorted(formats.readers)
