# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""pyloft - node-based lofting of 2D shape patterns into 3D meshes."""

__version__ = "1.0.0"
__author__ = "Kutay Demir"
