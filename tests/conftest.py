# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

import numpy as np
import pytest

from pyloft.geometry.cross_sections import CrossSection
from pyloft.graph.model import NodeGraph


def square(half: float = 10.0, cx: float = 0.0, cy: float = 0.0) -> np.ndarray:
    """CCW square with corners at +-half around (cx, cy)."""
    return np.array([
        [cx + half, cy - half],
        [cx + half, cy + half],
        [cx - half, cy + half],
        [cx - half, cy - half],
    ], dtype=float)


def square_section(half: float, t: float) -> CrossSection:
    return CrossSection(outer=square(half), t=t)


@pytest.fixture
def pipeline_graph():
    """Shape -> pattern -> shapes -> cross-sections -> holes -> loft."""
    graph = NodeGraph()
    graph.add_node("shapeSelector", node_id="shape", input_overrides={"shape": "hexagon"})
    graph.add_node("pattern2D", node_id="pattern", input_overrides={"steps": 8})
    graph.add_node("patternToShapes", node_id="shapes")
    graph.add_node("crossSections", node_id="sections")
    graph.add_node("addHoles", node_id="holes", input_overrides={"frequency": 1})
    graph.add_node("loft", node_id="loft", input_overrides={"height": 100})
    graph.add_connection("shape", "shape", "pattern", "shape")
    graph.add_connection("pattern", "pattern", "shapes", "pattern")
    graph.add_connection("shapes", "shapes", "sections", "shapes")
    graph.add_connection("sections", "crossSections", "holes", "crossSections")
    graph.add_connection("holes", "crossSections", "loft", "crossSections")
    return graph
