# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.
"""
pyloft Import/Export Manager
============================
File I/O for graph documents and generated meshes.

Supported formats:
    Mesh:  STL, OBJ, PLY, OFF, VTK, VTU
    Graph: JSON
"""

from pyloft.io_manager.mesh_io import MeshImporter, MeshExporter
from pyloft.io_manager.project_io import load_graph, save_graph

__all__ = [
    "MeshImporter",
    "MeshExporter",
    "load_graph",
    "save_graph",
]
