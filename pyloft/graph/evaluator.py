# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Graph evaluation engine with per-pass output caching.

Nodes are executed producers-first. Dependencies are discovered with an
iterative depth-first walk over incoming connections (unvisited -> visiting
-> evaluated); a connection that leads back to a node still being visited
closes a cycle, is reported once and is left unresolved so the consumer
falls back to its port default. Faults never propagate out of the
evaluator: they are recorded as Diagnostic entries and the faulty node
yields an empty output mapping.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from pyloft.config import evaluation_config
from pyloft.geometry.mesh import Mesh
from pyloft.graph.model import GraphNode, NodeConnection, NodeGraph
from pyloft.nodes import NODE_REGISTRY, NodeRegistry, coerce_value
from pyloft.nodes.types import DataKind, NodeDefinition

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    UNKNOWN_NODE_TYPE = "unknownNodeType"
    NODE_EXECUTION_ERROR = "nodeExecutionError"
    CIRCULAR_DEPENDENCY = "circularDependency"
    MISSING_NODE = "missingNode"
    GEOMETRY_WARNING = "geometryWarning"


@dataclass(frozen=True)
class Diagnostic:
    node_id: str
    kind: DiagnosticKind
    message: str


class NodeState(Enum):
    UNVISITED = 0
    VISITING = 1
    EVALUATED = 2


class EvaluationCache:
    """Output mappings of evaluated nodes, owned by a single evaluator."""

    def __init__(self):
        self._outputs: Dict[str, Dict[str, Any]] = {}

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._outputs

    def __len__(self) -> int:
        return len(self._outputs)

    def get(self, node_id: str) -> Optional[Dict[str, Any]]:
        return self._outputs.get(node_id)

    def set(self, node_id: str, outputs: Dict[str, Any]) -> None:
        self._outputs[node_id] = outputs

    def clear(self) -> None:
        self._outputs.clear()


class ExecutionContext:
    """Handed to execute functions; the only route back into the evaluator."""

    def __init__(self, evaluator: 'GraphEvaluator', node_id: str):
        self._evaluator = evaluator
        self.node_id = node_id

    def get_node_output(self, node_id: str, port_id: str) -> Any:
        return self._evaluator.get_node_output(node_id, port_id)

    def evaluate_node(self, node_id: str) -> None:
        self._evaluator.evaluate_node(node_id)

    def warn(self, message: str) -> None:
        self._evaluator.report(self.node_id, DiagnosticKind.GEOMETRY_WARNING, message, log=False)


class GraphEvaluator:
    """
    Evaluates a NodeGraph against a node registry.

    The cache survives between calls until the graph's ``revision`` changes
    or a full pass starts. When several connections feed one input port the
    last one in declaration order wins; explicit input overrides beat every
    connection. An upstream value of None leaves the port default in place.
    """

    def __init__(self, graph: NodeGraph, registry: Optional[NodeRegistry] = None):
        self.graph = graph
        self.registry = registry if registry is not None else NODE_REGISTRY
        self.cache = EvaluationCache()
        self.diagnostics: List[Diagnostic] = []
        self._reported: Set[Tuple[str, DiagnosticKind, str]] = set()
        self._executing: Set[str] = set()
        self._revision = graph.revision

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def clear_cache(self) -> None:
        self.cache.clear()
        self.diagnostics = []
        self._reported.clear()
        self._revision = self.graph.revision

    def evaluate_graph(self) -> List[Diagnostic]:
        """Run a full pass over every node and return the pass diagnostics."""
        self.clear_cache()
        for node in self.graph.nodes:
            if node.id not in self.cache:
                self._evaluate_with_dependencies(node.id)
        logger.debug(f"Evaluated {len(self.cache)} nodes with {len(self.diagnostics)} diagnostics")
        return list(self.diagnostics)

    def evaluate_node(self, node_id: str) -> None:
        """(Re)execute one node, evaluating uncached upstream nodes first."""
        self._sync_revision()
        if self.graph.get_node(node_id) is None:
            self.report(node_id, DiagnosticKind.MISSING_NODE, f"No node with id '{node_id}'")
            return
        if node_id in self._executing:
            self.report(node_id, DiagnosticKind.CIRCULAR_DEPENDENCY,
                        f"Node '{node_id}' requested its own evaluation while executing")
            return
        self._evaluate_with_dependencies(node_id)

    def get_node_output(self, node_id: str, port_id: str) -> Any:
        """Output ``port_id`` of ``node_id``; evaluates the node only if it is not cached."""
        self._sync_revision()
        if node_id not in self.cache:
            self.evaluate_node(node_id)
        outputs = self.cache.get(node_id)
        return outputs.get(port_id) if outputs is not None else None

    def get_mesh_outputs(self) -> List[Mesh]:
        """Full pass, then the mesh of every geometry output in node order."""
        self.evaluate_graph()
        meshes: List[Mesh] = []
        for node in self.graph.nodes:
            definition = self.registry.get(node.type)
            if definition is None or not definition.has_geometry_output:
                continue
            outputs = self.cache.get(node.id) or {}
            for port in definition.outputs:
                if port.kind is DataKind.GEOMETRY and isinstance(outputs.get(port.id), Mesh):
                    meshes.append(outputs[port.id])
        return meshes

    def report(self, node_id: str, kind: DiagnosticKind, message: str, log: bool = True) -> None:
        """Record a diagnostic; each node reports a condition once per pass."""
        # Geometry warnings are keyed by message so distinct openings all show up
        key = (node_id, kind, message if kind is DiagnosticKind.GEOMETRY_WARNING else "")
        if key in self._reported:
            return
        self._reported.add(key)
        self.diagnostics.append(Diagnostic(node_id, kind, message))
        if log and evaluation_config.LOG_DIAGNOSTICS:
            logger.warning(f"[{node_id}] {kind.value}: {message}")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _sync_revision(self) -> None:
        if self.graph.revision != self._revision:
            logger.debug(f"Graph revision {self._revision} -> {self.graph.revision}; dropping cache")
            self.clear_cache()

    def _evaluate_with_dependencies(self, root_id: str) -> None:
        order, back_edges = self._plan(root_id)
        for node_id in order:
            self._run(self.graph.get_node(node_id), back_edges)

    def _plan(self, root_id: str) -> Tuple[List[str], Set[NodeConnection]]:
        """
        Post-order of ``root_id`` and its uncached upstream nodes, root last.

        Also returns the connections that close a cycle; those are reported
        here and skipped during input resolution.
        """
        known = {node.id for node in self.graph.nodes}
        state: Dict[str, NodeState] = {root_id: NodeState.VISITING}
        stack: List[Tuple[str, Iterator[NodeConnection]]] = [(root_id, iter(self.graph.incoming(root_id)))]
        order: List[str] = []
        back_edges: Set[NodeConnection] = set()

        while stack:
            node_id, pending = stack[-1]
            descended = False
            for connection in pending:
                source_id = connection.from_node_id
                if source_id not in known or source_id in self.cache:
                    continue
                source_state = state.get(source_id, NodeState.UNVISITED)
                if source_state is NodeState.VISITING or source_id in self._executing:
                    back_edges.add(connection)
                    self.report(source_id, DiagnosticKind.CIRCULAR_DEPENDENCY,
                                f"Circular dependency detected involving node '{source_id}'")
                    continue
                if source_state is NodeState.EVALUATED:
                    continue
                state[source_id] = NodeState.VISITING
                stack.append((source_id, iter(self.graph.incoming(source_id))))
                descended = True
                break
            if not descended:
                stack.pop()
                state[node_id] = NodeState.EVALUATED
                order.append(node_id)

        return order, back_edges

    def _run(self, node: GraphNode, back_edges: Set[NodeConnection]) -> None:
        definition = self.registry.get(node.type)
        if definition is None:
            self.report(node.id, DiagnosticKind.UNKNOWN_NODE_TYPE, f"Unknown node type: {node.type}")
            self.cache.set(node.id, {})
            return

        self._executing.add(node.id)
        try:
            inputs = self._resolve_inputs(node, definition, back_edges)
            outputs = definition.execute(inputs, ExecutionContext(self, node.id))
            missing = [port.id for port in definition.outputs
                       if not isinstance(outputs, dict) or port.id not in outputs]
            if missing:
                raise ValueError(f"Node type '{node.type}' did not produce outputs {missing}")
        except Exception as e:
            logger.exception(f"Error evaluating node {node.id}")
            self.report(node.id, DiagnosticKind.NODE_EXECUTION_ERROR, str(e), log=False)
            outputs = {}
        finally:
            self._executing.discard(node.id)

        self.cache.set(node.id, outputs)

    def _resolve_inputs(self, node: GraphNode, definition: NodeDefinition,
                        back_edges: Set[NodeConnection]) -> Dict[str, Any]:
        inputs = definition.defaults()

        for connection in self.graph.incoming(node.id):
            if connection in back_edges:
                continue
            source_outputs = self.cache.get(connection.from_node_id)
            if source_outputs is None:
                if self.graph.get_node(connection.from_node_id) is None:
                    self.report(node.id, DiagnosticKind.MISSING_NODE,
                                f"Connection '{connection.id}' comes from unknown node "
                                f"'{connection.from_node_id}'")
                continue
            value = source_outputs.get(connection.from_port_id)
            if value is not None:
                inputs[connection.to_port_id] = value

        inputs.update(node.input_overrides)

        for port in definition.inputs:
            inputs[port.id] = coerce_value(port.kind, inputs.get(port.id))
        return inputs
