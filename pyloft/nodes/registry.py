# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

from typing import Dict, Iterator, List, Optional

from pyloft.nodes.types import ExecuteFunction, NodeDefinition, NodePort


class NodeRegistry:
    """Dispatch table from node type string to NodeDefinition."""

    def __init__(self):
        self._definitions: Dict[str, NodeDefinition] = {}

    def register(self, definition: NodeDefinition) -> NodeDefinition:
        if not definition.type:
            raise ValueError("Node definition needs a type")
        if definition.type in self._definitions:
            raise ValueError(f"Node type '{definition.type}' is already registered")
        for label, ports in (("input", definition.inputs), ("output", definition.outputs)):
            if not ports:
                raise ValueError(f"Node type '{definition.type}' declares no {label} ports")
            ids = [port.id for port in ports]
            if len(set(ids)) != len(ids):
                raise ValueError(f"Node type '{definition.type}' has duplicate {label} port ids")
        self._definitions[definition.type] = definition
        return definition

    def get(self, node_type: str) -> Optional[NodeDefinition]:
        return self._definitions.get(node_type)

    def __contains__(self, node_type: str) -> bool:
        return node_type in self._definitions

    def __iter__(self) -> Iterator[NodeDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def types(self) -> List[str]:
        return list(self._definitions)

    def by_category(self) -> Dict[str, List[NodeDefinition]]:
        """Definitions grouped by category, in registration order."""
        categories: Dict[str, List[NodeDefinition]] = {}
        for definition in self._definitions.values():
            categories.setdefault(definition.category, []).append(definition)
        return categories


NODE_REGISTRY = NodeRegistry()


def register_node(type: str, name: str, category: str, inputs: List[NodePort],
                  outputs: List[NodePort], description: str = "", color: Optional[str] = None,
                  registry: Optional[NodeRegistry] = None):
    """Decorator to register an execute function as a node type."""
    target = registry if registry is not None else NODE_REGISTRY

    def decorator(execute: ExecuteFunction) -> ExecuteFunction:
        target.register(NodeDefinition(
            type=type,
            name=name,
            category=category,
            inputs=list(inputs),
            outputs=list(outputs),
            execute=execute,
            description=description,
            color=color,
        ))
        return execute

    return decorator


def get_node_definition(node_type: str) -> Optional[NodeDefinition]:
    return NODE_REGISTRY.get(node_type)


def get_nodes_by_category() -> Dict[str, List[NodeDefinition]]:
    return NODE_REGISTRY.by_category()
