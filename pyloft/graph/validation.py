# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Static graph validation.

Checks a graph document before evaluation for the problems the evaluator
would otherwise only report while running: cycles, unknown node types,
dangling connections, doubly-connected inputs and unconnected geometry
inputs.
"""

from collections import Counter
from typing import Dict, List, Optional

import networkx as nx

from pyloft.graph.model import NodeGraph
from pyloft.nodes import NODE_REGISTRY, NodeRegistry
from pyloft.nodes.types import DataKind

# Inputs that carry geometry data rather than parameters
_DATA_KINDS = (DataKind.PATTERN, DataKind.POINT_2D_LIST, DataKind.CROSS_SECTION_SET, DataKind.GEOMETRY)


class GraphValidator:
    """
    Validates a node graph for connectivity, loops and node type lookups.
    """

    def __init__(self, registry: Optional[NodeRegistry] = None):
        self.registry = registry if registry is not None else NODE_REGISTRY

    def validate(self, graph: NodeGraph) -> Dict[str, List[str]]:
        """
        Runs all validation checks on the graph.
        Returns a dict with 'errors' and 'warnings'.
        """
        errors: List[str] = []
        warnings: List[str] = []

        errors.extend(self._check_duplicate_ids(graph))
        errors.extend(self._check_node_types(graph))
        errors.extend(self._check_connections(graph))
        errors.extend(self._check_cycles(graph))
        warnings.extend(self._check_multiple_inputs(graph))
        warnings.extend(self._check_unconnected_inputs(graph))

        return {
            "errors": errors,
            "warnings": warnings
        }

    def build_dependency_graph(self, graph: NodeGraph) -> nx.DiGraph:
        """Directed graph of node ids with an edge per producer -> consumer pair."""
        G = nx.DiGraph()
        for node in graph.nodes:
            G.add_node(node.id, type=node.type)
        for connection in graph.connections:
            if G.has_node(connection.from_node_id) and G.has_node(connection.to_node_id):
                G.add_edge(connection.from_node_id, connection.to_node_id)
        return G

    def execution_order(self, graph: NodeGraph) -> List[str]:
        """Topological order of the node ids; raises NetworkXUnfeasible on cycles."""
        return list(nx.topological_sort(self.build_dependency_graph(graph)))

    def _check_duplicate_ids(self, graph: NodeGraph) -> List[str]:
        counts = Counter(node.id for node in graph.nodes)
        return [f"Node id '{node_id}' is used {count} times"
                for node_id, count in counts.items() if count > 1]

    def _check_node_types(self, graph: NodeGraph) -> List[str]:
        return [f"Node '{node.id}' has unknown type '{node.type}'"
                for node in graph.nodes if node.type not in self.registry]

    def _check_connections(self, graph: NodeGraph) -> List[str]:
        errors = []
        nodes = {node.id: node for node in graph.nodes}
        for connection in graph.connections:
            source = nodes.get(connection.from_node_id)
            target = nodes.get(connection.to_node_id)
            if source is None:
                errors.append(f"Connection '{connection.id}' starts at unknown node "
                              f"'{connection.from_node_id}'")
            else:
                definition = self.registry.get(source.type)
                if definition is not None and definition.output_port(connection.from_port_id) is None:
                    errors.append(f"Connection '{connection.id}' uses unknown output "
                                  f"'{connection.from_port_id}' of node '{source.id}'")
            if target is None:
                errors.append(f"Connection '{connection.id}' ends at unknown node "
                              f"'{connection.to_node_id}'")
            else:
                definition = self.registry.get(target.type)
                if definition is not None and definition.input_port(connection.to_port_id) is None:
                    errors.append(f"Connection '{connection.id}' uses unknown input "
                                  f"'{connection.to_port_id}' of node '{target.id}'")
        return errors

    def _check_cycles(self, graph: NodeGraph) -> List[str]:
        G = self.build_dependency_graph(graph)
        return [f"Circular dependency: {' -> '.join(cycle + cycle[:1])}"
                for cycle in nx.simple_cycles(G)]

    def _check_multiple_inputs(self, graph: NodeGraph) -> List[str]:
        counts = Counter((c.to_node_id, c.to_port_id) for c in graph.connections)
        return [f"Input '{port_id}' of node '{node_id}' has {count} connections; "
                f"the last one wins"
                for (node_id, port_id), count in counts.items() if count > 1]

    def _check_unconnected_inputs(self, graph: NodeGraph) -> List[str]:
        warnings = []
        connected = {(c.to_node_id, c.to_port_id) for c in graph.connections}
        for node in graph.nodes:
            definition = self.registry.get(node.type)
            if definition is None:
                continue
            for port in definition.inputs:
                if port.kind not in _DATA_KINDS or port.default is not None:
                    continue
                if (node.id, port.id) in connected or port.id in node.input_overrides:
                    continue
                warnings.append(f"Node '{node.id}' ({definition.name}) has no '{port.name}' input; "
                                f"it will produce empty output")
        return warnings
