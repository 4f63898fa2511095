# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Port and node definition types.

Every value that crosses a connection belongs to one DataKind. Ports declare
their kind and the evaluator coerces resolved values into it before a node
executes, so execute functions can rely on the concrete Python type.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from pyloft.geometry.cross_sections import CrossSection
from pyloft.geometry.mesh import Mesh
from pyloft.geometry.pattern import ShapeInstance, ShapeKind
from pyloft.geometry.polygon import Point2D, as_polygon


class DataKind(str, Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    SHAPE_KIND = "shapeKind"
    PATTERN = "pattern"
    GEOMETRY = "geometry"
    CROSS_SECTION_SET = "crossSectionSet"
    POINT_2D = "point2D"
    POINT_2D_LIST = "point2DList"


@dataclass(frozen=True)
class NodePort:
    id: str
    name: str
    kind: DataKind
    default: Any = None


# execute(inputs, context) -> outputs
ExecuteFunction = Callable[[Dict[str, Any], Any], Dict[str, Any]]


@dataclass
class NodeDefinition:
    """Static description of a node type and its execute function."""
    type: str
    name: str
    category: str
    inputs: List[NodePort]
    outputs: List[NodePort]
    execute: ExecuteFunction
    description: str = ""
    color: Optional[str] = None
    _input_index: Dict[str, NodePort] = field(default_factory=dict, init=False, repr=False)
    _output_index: Dict[str, NodePort] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        self._input_index = {port.id: port for port in self.inputs}
        self._output_index = {port.id: port for port in self.outputs}

    def input_port(self, port_id: str) -> Optional[NodePort]:
        return self._input_index.get(port_id)

    def output_port(self, port_id: str) -> Optional[NodePort]:
        return self._output_index.get(port_id)

    def defaults(self) -> Dict[str, Any]:
        return {port.id: port.default for port in self.inputs}

    @property
    def has_geometry_output(self) -> bool:
        return any(port.kind is DataKind.GEOMETRY for port in self.outputs)


# =============================================================================
# COERCION
# =============================================================================

def _to_number(value: Any) -> float:
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass
    raise TypeError(f"Expected a number, got {value!r}")


def _to_boolean(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        return value != 0
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise TypeError(f"Expected a boolean, got {value!r}")


def _to_string(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Expected a string, got {value!r}")


def _to_shape_kind(value: Any) -> ShapeKind:
    try:
        return ShapeKind(value)
    except ValueError:
        raise TypeError(f"Unknown shape kind {value!r}") from None


def _to_pattern(value: Any) -> List[ShapeInstance]:
    if isinstance(value, (list, tuple)) and all(isinstance(v, ShapeInstance) for v in value):
        return list(value)
    raise TypeError(f"Expected a list of ShapeInstance, got {type(value).__name__}")


def _to_geometry(value: Any) -> Mesh:
    if isinstance(value, Mesh):
        return value
    raise TypeError(f"Expected a Mesh, got {type(value).__name__}")


def _to_cross_sections(value: Any) -> List[CrossSection]:
    if isinstance(value, (list, tuple)) and all(isinstance(v, CrossSection) for v in value):
        return list(value)
    raise TypeError(f"Expected a list of CrossSection, got {type(value).__name__}")


def _to_point(value: Any) -> Point2D:
    try:
        x, y = value
        return Point2D(float(x), float(y))
    except (TypeError, ValueError):
        raise TypeError(f"Expected a 2D point, got {value!r}") from None


def _to_point_lists(value: Any) -> List[Optional[np.ndarray]]:
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"Expected a list of polygons, got {type(value).__name__}")
    polygons: List[Optional[np.ndarray]] = []
    for entry in value:
        if entry is None:
            polygons.append(None)
            continue
        try:
            polygons.append(as_polygon(entry))
        except (TypeError, ValueError):
            raise TypeError(f"Expected a polygon, got {entry!r}") from None
    return polygons


COERCERS: Dict[DataKind, Callable[[Any], Any]] = {
    DataKind.NUMBER: _to_number,
    DataKind.BOOLEAN: _to_boolean,
    DataKind.STRING: _to_string,
    DataKind.SHAPE_KIND: _to_shape_kind,
    DataKind.PATTERN: _to_pattern,
    DataKind.GEOMETRY: _to_geometry,
    DataKind.CROSS_SECTION_SET: _to_cross_sections,
    DataKind.POINT_2D: _to_point,
    DataKind.POINT_2D_LIST: _to_point_lists,
}


def coerce_value(kind: DataKind, value: Any) -> Any:
    """Convert ``value`` to the Python type of ``kind``. None passes through."""
    if value is None:
        return None
    return COERCERS[DataKind(kind)](value)
