# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Node library.

Structure:
    nodes/
    ├── types.py       # DataKind, NodePort, NodeDefinition, coercion
    ├── registry.py    # NodeRegistry, NODE_REGISTRY, register_node
    ├── values.py      # Number, Boolean, Text, Shape
    ├── patterns.py    # Pattern 2D, Spine
    ├── transforms.py  # Pattern to Shapes, Cross Sections, Add Holes
    └── geometry.py    # Loft

Importing this package registers every built-in node type.
"""

from pyloft.nodes.types import DataKind, NodeDefinition, NodePort, coerce_value
from pyloft.nodes.registry import (
    NODE_REGISTRY, NodeRegistry, get_node_definition, get_nodes_by_category, register_node
)

# =============================================================================
# BUILT-IN NODES
# =============================================================================
from pyloft.nodes import values, patterns, transforms, geometry  # noqa: F401

__all__ = [
    "DataKind",
    "NODE_REGISTRY",
    "NodeDefinition",
    "NodePort",
    "NodeRegistry",
    "coerce_value",
    "get_node_definition",
    "get_nodes_by_category",
    "register_node",
]
