# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Renderer-neutral triangle mesh.

The Mesh value is the only geometry output of the pipeline: vertex
positions, triangle index triples and per-vertex normals. MeshBuilder
collects rings of vertices and stitches them; renderers and file exporters
consume the finished Mesh through ``to_buffers`` or ``io_manager.mesh_io``.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np


@dataclass(eq=False)
class Mesh:
    """Triangle mesh with derived per-vertex normals."""
    vertices: np.ndarray  # (N, 3) float
    indices: np.ndarray   # (M, 3) int
    normals: np.ndarray   # (N, 3) float

    @classmethod
    def empty(cls) -> 'Mesh':
        return cls(
            vertices=np.zeros((0, 3), dtype=float),
            indices=np.zeros((0, 3), dtype=np.int64),
            normals=np.zeros((0, 3), dtype=float),
        )

    @property
    def is_empty(self) -> bool:
        return len(self.indices) == 0

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """Axis-aligned bounding box as (min corner, max corner)."""
        if self.vertex_count == 0:
            zero = np.zeros(3)
            return zero, zero.copy()
        return self.vertices.min(axis=0), self.vertices.max(axis=0)

    def to_buffers(self) -> Dict[str, np.ndarray]:
        """Flat float32 positions/normals and uint32 indices for GPU upload."""
        return {
            "position": self.vertices.astype(np.float32).ravel(),
            "normal": self.normals.astype(np.float32).ravel(),
            "index": self.indices.astype(np.uint32).ravel(),
        }


def face_normals(vertices: np.ndarray, indices: np.ndarray, normalize: bool = True) -> np.ndarray:
    """Per-triangle normals following right-hand winding."""
    if len(indices) == 0:
        return np.zeros((0, 3), dtype=float)
    v0 = vertices[indices[:, 0]]
    v1 = vertices[indices[:, 1]]
    v2 = vertices[indices[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    if normalize:
        normals = _normalize_rows(normals)
    return normals


def vertex_normals(vertices: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Area-weighted average of adjacent face normals, normalized."""
    normals = np.zeros_like(vertices, dtype=float)
    if len(indices) == 0:
        return normals
    weighted = face_normals(vertices, indices, normalize=False)
    for corner in range(3):
        np.add.at(normals, indices[:, corner], weighted)
    return _normalize_rows(normals)


def _normalize_rows(vectors: np.ndarray) -> np.ndarray:
    lengths = np.linalg.norm(vectors, axis=1)
    safe = np.where(lengths > 0.0, lengths, 1.0)
    return vectors / safe[:, None]


def unweld(vertices: np.ndarray, indices: np.ndarray) -> Mesh:
    """Give every triangle its own vertices and its face normal (flat shading)."""
    if len(indices) == 0:
        return Mesh.empty()
    flat_vertices = vertices[indices.reshape(-1)]
    flat_indices = np.arange(len(flat_vertices), dtype=np.int64).reshape(-1, 3)
    normals = np.repeat(face_normals(vertices, indices), 3, axis=0)
    return Mesh(vertices=flat_vertices, indices=flat_indices, normals=normals)


def merge_meshes(meshes: Iterable[Mesh]) -> Mesh:
    """Concatenate meshes into one, offsetting indices."""
    vertices: List[np.ndarray] = []
    indices: List[np.ndarray] = []
    normals: List[np.ndarray] = []
    offset = 0
    for mesh in meshes:
        if mesh.vertex_count == 0:
            continue
        vertices.append(mesh.vertices)
        normals.append(mesh.normals)
        indices.append(mesh.indices + offset)
        offset += mesh.vertex_count
    if not vertices:
        return Mesh.empty()
    return Mesh(
        vertices=np.vstack(vertices),
        indices=np.vstack(indices).astype(np.int64),
        normals=np.vstack(normals),
    )


class MeshBuilder:
    """Accumulates vertex rings and triangles, then derives normals."""

    def __init__(self) -> None:
        self._vertices: List[np.ndarray] = []
        self._triangles: List[Tuple[int, int, int]] = []
        self._count = 0

    @property
    def vertex_count(self) -> int:
        return self._count

    def add_vertices(self, points: np.ndarray) -> int:
        """Append ``(n, 3)`` points and return the index of the first one."""
        points = np.asarray(points, dtype=float).reshape(-1, 3)
        offset = self._count
        if len(points):
            self._vertices.append(points)
            self._count += len(points)
        return offset

    def add_triangle(self, a: int, b: int, c: int) -> None:
        self._triangles.append((a, b, c))

    def connect_rings(self, lower: int, upper: int, count: int, reverse: bool = False) -> None:
        """
        Stitch two rings of ``count`` vertices index-for-index with quads.

        With CCW rings (seen from +Y) the default winding faces outward;
        ``reverse`` flips it for inner walls.
        """
        for i in range(count):
            j = (i + 1) % count
            if reverse:
                self._triangles.append((lower + i, lower + j, upper + i))
                self._triangles.append((upper + i, lower + j, upper + j))
            else:
                self._triangles.append((lower + i, upper + i, lower + j))
                self._triangles.append((upper + i, upper + j, lower + j))

    def add_fan(self, ring: int, count: int, center: Sequence[float], upward: bool = True) -> int:
        """Close a ring with a triangle fan around a new center vertex."""
        apex = self.add_vertices(np.asarray(center, dtype=float))
        for i in range(count):
            j = (i + 1) % count
            if upward:
                self._triangles.append((apex, ring + j, ring + i))
            else:
                self._triangles.append((apex, ring + i, ring + j))
        return apex

    def build(self, smooth: bool = True) -> Mesh:
        if self._count == 0 or not self._triangles:
            return Mesh.empty()
        vertices = np.vstack(self._vertices)
        indices = np.asarray(self._triangles, dtype=np.int64).reshape(-1, 3)
        if not smooth:
            return unweld(vertices, indices)
        return Mesh(vertices=vertices, indices=indices, normals=vertex_normals(vertices, indices))
