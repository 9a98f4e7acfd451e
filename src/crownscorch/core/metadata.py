"""Where a tree point cloud came from and how it was normalised."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass
class Metadata:
    """Metadata carried along with a tree point cloud.

    Attributes:
        source_file: Resolved path the cloud was read from.
        source_format: File format identifier ("las").
        point_format_id: LAS point format of the source file.
        file_version: LAS version of the source file, e.g. "1.2".
        ground_offset: Ground height subtracted from Z by crown isolation.
    """

    source_file: str | None = None
    source_format: str | None = None
    point_format_id: int | None = None
    file_version: str | None = None
    ground_offset: float | None = None

    def copy(self) -> Metadata:
        return replace(self)
