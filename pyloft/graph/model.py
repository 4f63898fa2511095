# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Graph document model.

A NodeGraph holds node instances and the connections between their ports,
both in declaration order. Editing operations validate structure and bump
``revision`` so evaluators know their cache is stale. Graphs built directly
from lists (or loaded from a document) are taken as-is; structural problems
in them surface through validation and evaluation diagnostics instead.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pyloft.config import evaluation_config

logger = logging.getLogger(__name__)


class GraphStructureError(ValueError):
    """Raised by editing operations that would produce an invalid graph."""


@dataclass
class GraphNode:
    id: str
    type: str
    input_overrides: Dict[str, Any] = field(default_factory=dict)
    position: Optional[Tuple[float, float]] = None  # editor only

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "inputOverrides": dict(self.input_overrides),
        }
        if self.position is not None:
            data["position"] = {"x": self.position[0], "y": self.position[1]}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GraphNode':
        position = data.get("position")
        if isinstance(position, dict):
            position = (float(position.get("x", 0.0)), float(position.get("y", 0.0)))
        elif position is not None:
            if len(position) != 2:
                raise ValueError(f"Node position must be [x, y], got {position!r}")
            position = (float(position[0]), float(position[1]))
        # Older documents call the overrides "inputValues"
        overrides = data.get("inputOverrides", data.get("inputValues")) or {}
        return cls(id=str(data["id"]), type=str(data["type"]),
                   input_overrides=dict(overrides), position=position)


@dataclass(frozen=True)
class NodeConnection:
    id: str
    from_node_id: str
    from_port_id: str
    to_node_id: str
    to_port_id: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "fromNodeId": self.from_node_id,
            "fromPortId": self.from_port_id,
            "toNodeId": self.to_node_id,
            "toPortId": self.to_port_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NodeConnection':
        return cls(
            id=str(data["id"]),
            from_node_id=str(data["fromNodeId"]),
            from_port_id=str(data["fromPortId"]),
            to_node_id=str(data["toNodeId"]),
            to_port_id=str(data["toPortId"]),
        )


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class NodeGraph:
    """Nodes and connections plus the editing operations of the node editor."""

    def __init__(self, nodes: Iterable[GraphNode] = (), connections: Iterable[NodeConnection] = ()):
        self.nodes: List[GraphNode] = list(nodes)
        self.connections: List[NodeConnection] = list(connections)
        self.revision = 0

    def __repr__(self):
        return (f"NodeGraph(nodes={len(self.nodes)}, connections={len(self.connections)}, "
                f"revision={self.revision})")

    def _touch(self) -> None:
        self.revision += 1

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        return self.get_node(node_id) is not None

    def get_connection(self, connection_id: str) -> Optional[NodeConnection]:
        for connection in self.connections:
            if connection.id == connection_id:
                return connection
        return None

    def incoming(self, node_id: str) -> List[NodeConnection]:
        """Connections ending at ``node_id``, in declaration order."""
        return [c for c in self.connections if c.to_node_id == node_id]

    def outgoing(self, node_id: str) -> List[NodeConnection]:
        return [c for c in self.connections if c.from_node_id == node_id]

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add_node(self, node_type: str, node_id: Optional[str] = None,
                 position: Optional[Tuple[float, float]] = None,
                 input_overrides: Optional[Dict[str, Any]] = None) -> GraphNode:
        node_id = node_id or _new_id(node_type)
        if self.has_node(node_id):
            raise GraphStructureError(f"Node id '{node_id}' already exists")
        node = GraphNode(id=node_id, type=node_type,
                         input_overrides=dict(input_overrides or {}), position=position)
        self.nodes.append(node)
        self._touch()
        logger.debug(f"Added node {node_id} ({node_type})")
        return node

    def move_node(self, node_id: str, position: Tuple[float, float]) -> None:
        self._require_node(node_id).position = (float(position[0]), float(position[1]))
        self._touch()

    def remove_node(self, node_id: str) -> None:
        """Remove a node and every connection touching it."""
        node = self._require_node(node_id)
        self.nodes.remove(node)
        self.connections = [c for c in self.connections
                            if c.from_node_id != node_id and c.to_node_id != node_id]
        self._touch()
        logger.debug(f"Removed node {node_id}")

    def set_input(self, node_id: str, port_id: str, value: Any) -> None:
        self._require_node(node_id).input_overrides[port_id] = value
        self._touch()

    def clear_input(self, node_id: str, port_id: str) -> None:
        self._require_node(node_id).input_overrides.pop(port_id, None)
        self._touch()

    def add_connection(self, from_node_id: str, from_port_id: str, to_node_id: str,
                       to_port_id: str, connection_id: Optional[str] = None) -> NodeConnection:
        self._require_node(from_node_id)
        self._require_node(to_node_id)
        connection_id = connection_id or _new_id("conn")
        if self.get_connection(connection_id) is not None:
            raise GraphStructureError(f"Connection id '{connection_id}' already exists")
        if evaluation_config.REJECT_DUPLICATE_CONNECTIONS:
            for existing in self.incoming(to_node_id):
                if existing.to_port_id == to_port_id:
                    raise GraphStructureError(
                        f"Input '{to_port_id}' of node '{to_node_id}' is already connected "
                        f"(connection '{existing.id}')"
                    )
        connection = NodeConnection(connection_id, from_node_id, from_port_id, to_node_id, to_port_id)
        self.connections.append(connection)
        self._touch()
        return connection

    def remove_connection(self, connection_id: str) -> None:
        connection = self.get_connection(connection_id)
        if connection is None:
            raise GraphStructureError(f"Unknown connection '{connection_id}'")
        self.connections.remove(connection)
        self._touch()

    def _require_node(self, node_id: str) -> GraphNode:
        node = self.get_node(node_id)
        if node is None:
            raise GraphStructureError(f"Unknown node '{node_id}'")
        return node

    # -------------------------------------------------------------------------
    # Document form
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "connections": [connection.to_dict() for connection in self.connections],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NodeGraph':
        return cls(
            nodes=[GraphNode.from_dict(n) for n in data.get("nodes", [])],
            connections=[NodeConnection.from_dict(c) for c in data.get("connections", [])],
        )
