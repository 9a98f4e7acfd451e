"""LAS/LAZ reader and writer using laspy[lazrs]."""

from __future__ import annotations

from pathlib import Path

import laspy
import numpy as np

from crownscorch.core.metadata import Metadata
from crownscorch.core.pointcloud import PointCloud
from crownscorch.io.base import Reader, Writer

# laspy point record names -> crownscorch dimension names
_FROM_LASPY = {
    "x": "X",
    "y": "Y",
    "z": "Z",
    "intensity": "Intensity",
    "return_number": "ReturnNumber",
    "number_of_returns": "NumberOfReturns",
    "classification": "Classification",
    "gps_time": "GpsTime",
}
_TO_LASPY = {v: k for k, v in _FROM_LASPY.items()}
_COORDS = ("X", "Y", "Z")


class LasReader(Reader):
    """Reads LAS, and LAZ through the lazrs backend.

    Extra-bytes dimensions (Reflectance exported by RiSCAN, or Reflectance
    and Stem written by LasWriter) are kept under their own names.
    """

    extensions = (".las", ".laz")

    def read(self, path: str) -> PointCloud:
        las = laspy.read(path)
        present = set(las.point_format.dimension_names)

        # x/y/z are scaled views; everything else keeps its stored dtype
        arrays = {dim: np.array(las[dim.lower()], dtype=np.float64) for dim in _COORDS}
        for name, dim in _FROM_LASPY.items():
            if dim not in _COORDS and name in present:
                arrays[dim] = np.array(las[name])
        for name in las.point_format.extra_dimension_names:
            arrays.setdefault(name, np.array(las[name]))

        pc = PointCloud.from_dict(arrays)
        pc.metadata = Metadata(
            source_file=str(Path(path).resolve()),
            source_format="las",
            point_format_id=las.header.point_format.id,
            file_version=f"{las.header.version.major}.{las.header.version.minor}",
        )
        return pc


class LasWriter(Writer):
    """Writes LAS/LAZ (compression follows the extension).

    Dimensions the point format has no field for, such as Reflectance and
    Stem, become extra-bytes dimensions so a calibrated or labelled tree
    reads back the same. Boolean dimensions are stored as uint8.
    """

    extensions = (".las", ".laz")

    def write(self, pc: PointCloud, path: str) -> int:
        if pc.num_points == 0:
            raise ValueError("Cannot write an empty point cloud")

        point_format = pc.metadata.point_format_id
        if point_format is None:
            point_format = 1 if "GpsTime" in pc else 0
        version = "1.4" if point_format >= 6 else "1.2"
        header = laspy.LasHeader(point_format=point_format, version=version)
        header.generating_software = "crownscorch"
        header.scales = np.array([0.001, 0.001, 0.001])
        header.offsets = np.array([np.floor(np.min(pc[c])) for c in _COORDS])

        # Record names are mixed case in laspy (X, intensity, ...)
        standard = {name.lower() for name in header.point_format.dimension_names}
        fields = {}
        for dim in pc.dimensions:
            if dim in _COORDS:
                continue
            name = _TO_LASPY.get(dim, dim)
            values = pc[dim]
            if values.dtype == bool:
                values = values.astype(np.uint8)
            if name.lower() not in standard:
                header.add_extra_dim(
                    laspy.ExtraBytesParams(name=name, type=values.dtype)
                )
            fields[name] = values

        las = laspy.LasData(header)
        # Coordinates first: they size the point record
        las.x, las.y, las.z = pc["X"], pc["Y"], pc["Z"]
        for name, values in fields.items():
            las[name] = values
        las.write(path)
        return pc.num_points
