"""Reading and writing tree point cloud files."""

from crownscorch.io.registry import formats, read, supported_extensions, write

__all__ = ["read", "write", "formats", "supported_extensions"]
