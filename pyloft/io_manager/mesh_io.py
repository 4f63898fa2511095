# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.
"""
Mesh file import and export for lofted bodies.
Supports: STL, OBJ, PLY, OFF, VTK, VTU
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Union

import numpy as np

from pyloft.geometry.mesh import Mesh, merge_meshes, vertex_normals

logger = logging.getLogger(__name__)

MESH_EXPORT_FORMATS = {
    ".stl": "STL",
    ".obj": "Wavefront OBJ",
    ".ply": "Stanford PLY",
    ".off": "Object File Format",
    ".vtk": "VTK Legacy",
    ".vtu": "VTK Unstructured",
}

# Formats that carry arbitrary per-point fields
_POINT_DATA_FORMATS = {".vtk", ".vtu"}


def _meshio():
    try:
        import meshio
    except ImportError:
        raise ImportError("meshio required for mesh import/export: pip install meshio")
    return meshio


class MeshExporter:
    """Export lofted meshes via meshio."""

    @staticmethod
    def get_supported_formats() -> Dict[str, str]:
        return dict(MESH_EXPORT_FORMATS)

    @staticmethod
    def get_filter_string() -> str:
        all_exts = " ".join(f"*{ext}" for ext in MESH_EXPORT_FORMATS)
        parts = [f"All Mesh Files ({all_exts})"]
        for ext, name in MESH_EXPORT_FORMATS.items():
            parts.append(f"{name} (*{ext})")
        return ";;".join(parts)

    @staticmethod
    def export_file(filepath: Union[str, Path], mesh: Union[Mesh, Iterable[Mesh]]) -> None:
        """
        Export a mesh (or several, merged) to a file.

        Args:
            filepath: output path (format detected from extension)
            mesh: a Mesh or an iterable of meshes to merge first

        Raises:
            ValueError: unsupported extension, or nothing to write
        """
        meshio = _meshio()

        if not isinstance(mesh, Mesh):
            mesh = merge_meshes(mesh)
        ext = Path(filepath).suffix.lower()
        if ext not in MESH_EXPORT_FORMATS:
            raise ValueError(f"Unsupported mesh format '{ext}'. "
                             f"Supported: {', '.join(MESH_EXPORT_FORMATS)}")
        if mesh.is_empty:
            raise ValueError(f"Nothing to export to {filepath}: the mesh has no triangles")

        point_data = {}
        if ext in _POINT_DATA_FORMATS and mesh.vertex_count:
            point_data["normals"] = mesh.normals.astype(float)

        out = meshio.Mesh(
            points=mesh.vertices.astype(float),
            cells=[meshio.CellBlock("triangle", mesh.indices.astype(np.int64))],
            point_data=point_data,
        )
        out.write(str(filepath))
        logger.info(
            f"Exported mesh: {mesh.vertex_count} vertices, "
            f"{mesh.triangle_count} triangles to {filepath}"
        )


class MeshImporter:
    """Read triangle meshes back into Mesh values."""

    @staticmethod
    def import_file(filepath: Union[str, Path]) -> Mesh:
        """
        Import the triangle cells of a mesh file via meshio.

        Normals are recomputed from the triangles.
        """
        meshio = _meshio()

        data = meshio.read(str(filepath))
        points = np.asarray(data.points, dtype=float)
        if points.shape[1] == 2:
            points = np.column_stack([points, np.zeros(len(points))])

        blocks = [np.asarray(c.data, dtype=np.int64) for c in data.cells if c.type == "triangle"]
        if not blocks:
            logger.warning(f"No triangle cells in {filepath}")
            return Mesh.empty()

        indices = np.vstack(blocks)
        logger.info(f"Imported mesh: {len(points)} vertices, {len(indices)} triangles from {filepath}")
        return Mesh(vertices=points, indices=indices, normals=vertex_normals(points, indices))
