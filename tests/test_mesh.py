# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Tests for the Mesh value and MeshBuilder stitching."""

import math

import numpy as np

from pyloft.geometry.mesh import Mesh, MeshBuilder, face_normals, merge_meshes


def _ring(y, radius=1.0, count=8):
    angles = np.arange(count) * (2 * math.pi / count)
    return np.column_stack([np.cos(angles) * radius, np.full(count, y), np.sin(angles) * radius])


def _radial_dots(mesh):
    """Dot product of each face normal with the outward radial direction at the face."""
    normals = face_normals(mesh.vertices, mesh.indices)
    centers = mesh.vertices[mesh.indices].mean(axis=1)
    return normals[:, 0] * centers[:, 0] + normals[:, 2] * centers[:, 2]


class TestMeshBuilder:

    def test_connect_rings_faces_outward(self):
        builder = MeshBuilder()
        lower = builder.add_vertices(_ring(0.0))
        upper = builder.add_vertices(_ring(1.0))
        builder.connect_rings(lower, upper, 8)
        mesh = builder.build()
        assert mesh.triangle_count == 16
        assert np.all(_radial_dots(mesh) > 0)

    def test_reverse_faces_inward(self):
        builder = MeshBuilder()
        lower = builder.add_vertices(_ring(0.0))
        upper = builder.add_vertices(_ring(1.0))
        builder.connect_rings(lower, upper, 8, reverse=True)
        assert np.all(_radial_dots(builder.build()) < 0)

    def test_fan_faces_up(self):
        builder = MeshBuilder()
        ring = builder.add_vertices(_ring(2.0))
        apex = builder.add_fan(ring, 8, (0.0, 2.0, 0.0))
        mesh = builder.build()
        assert apex == 8
        assert mesh.triangle_count == 8
        normals = face_normals(mesh.vertices, mesh.indices)
        np.testing.assert_allclose(normals, np.tile([0.0, 1.0, 0.0], (8, 1)), atol=1e-12)

    def test_offsets_accumulate(self):
        builder = MeshBuilder()
        assert builder.add_vertices(_ring(0.0)) == 0
        assert builder.add_vertices(_ring(1.0)) == 8
        assert builder.vertex_count == 16

    def test_no_triangles_gives_empty_mesh(self):
        builder = MeshBuilder()
        builder.add_vertices(_ring(0.0))
        assert builder.build().is_empty

    def test_flat_shading_unwelds(self):
        builder = MeshBuilder()
        builder.connect_rings(builder.add_vertices(_ring(0.0)), builder.add_vertices(_ring(1.0)), 8)
        mesh = builder.build(smooth=False)
        assert mesh.vertex_count == 3 * mesh.triangle_count
        np.testing.assert_allclose(mesh.normals, np.repeat(face_normals(mesh.vertices, mesh.indices), 3, axis=0))

    def test_smooth_normals_are_unit_and_radial(self):
        builder = MeshBuilder()
        builder.connect_rings(builder.add_vertices(_ring(0.0)), builder.add_vertices(_ring(1.0)), 8)
        mesh = builder.build(smooth=True)
        np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0)
        assert np.all(np.abs(mesh.normals[:, 1]) < 1e-9)


class TestMesh:

    def test_empty(self):
        mesh = Mesh.empty()
        assert mesh.is_empty
        assert mesh.vertex_count == 0
        low, high = mesh.bounds()
        np.testing.assert_array_equal(low, high)

    def test_bounds(self):
        builder = MeshBuilder()
        builder.connect_rings(builder.add_vertices(_ring(0.0, 2.0)), builder.add_vertices(_ring(5.0, 2.0)), 8)
        low, high = builder.build().bounds()
        np.testing.assert_allclose(low, [-2.0, 0.0, -2.0], atol=1e-12)
        np.testing.assert_allclose(high, [2.0, 5.0, 2.0], atol=1e-12)

    def test_to_buffers(self):
        builder = MeshBuilder()
        builder.connect_rings(builder.add_vertices(_ring(0.0)), builder.add_vertices(_ring(1.0)), 8)
        buffers = builder.build().to_buffers()
        assert buffers["position"].dtype == np.float32
        assert buffers["normal"].dtype == np.float32
        assert buffers["index"].dtype == np.uint32
        assert buffers["position"].shape == (48,)
        assert buffers["index"].shape == (48,)

    def test_merge_offsets_indices(self):
        builder = MeshBuilder()
        builder.connect_rings(builder.add_vertices(_ring(0.0)), builder.add_vertices(_ring(1.0)), 8)
        part = builder.build()
        merged = merge_meshes([part, Mesh.empty(), part])
        assert merged.vertex_count == 32
        assert merged.triangle_count == 32
        assert merged.indices[16:].min() == 16
        assert merge_meshes([]).is_empty
