# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.
"""
Graph document save/load.

Documents are JSON:
    {
        "version": "1.0",
        "nodes": [{"id", "type", "inputOverrides", "position"?}],
        "connections": [{"id", "fromNodeId", "fromPortId", "toNodeId", "toPortId"}]
    }
"""

import json
import logging
import os
from enum import Enum
from typing import Any, Dict, Union

import numpy as np

from pyloft.config import evaluation_config
from pyloft.graph.model import NodeGraph

logger = logging.getLogger(__name__)

GRAPH_EXTENSION = ".json"


def save_graph(filepath: Union[str, os.PathLike], graph: NodeGraph) -> None:
    """Write a graph document; editor positions are kept."""
    document = {"version": evaluation_config.DOCUMENT_VERSION}
    document.update(graph.to_dict())
    _write_json(filepath, document)
    logger.info(f"Graph saved: {filepath}")


def load_graph(filepath: Union[str, os.PathLike]) -> NodeGraph:
    """
    Read a graph document.

    The graph is taken as written; run GraphValidator to find structural
    problems before evaluating it.
    """
    if not os.path.isfile(filepath):
        raise FileNotFoundError(f"Graph file not found: {filepath}")

    document = _read_json(filepath)
    if not isinstance(document, dict) or "nodes" not in document:
        raise ValueError(f"Not a graph document: {filepath}")

    version = document.get("version")
    if version is None:
        logger.warning(f"Graph document {filepath} has no version field")
    elif str(version) != evaluation_config.DOCUMENT_VERSION:
        logger.warning(f"Graph document version {version} differs from "
                       f"{evaluation_config.DOCUMENT_VERSION}; loading anyway")

    try:
        graph = NodeGraph.from_dict(document)
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed graph document {filepath}: {e}") from e

    logger.info(f"Graph loaded: {len(graph.nodes)} nodes, "
                f"{len(graph.connections)} connections from {filepath}")
    return graph


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

class NumpyEncoder(json.JSONEncoder):
    """JSON encoder for numpy scalars/arrays and enum override values."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def _write_json(filepath: Union[str, os.PathLike], data: Any) -> None:
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, cls=NumpyEncoder)


def _read_json(filepath: Union[str, os.PathLike]) -> Dict:
    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)
