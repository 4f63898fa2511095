# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Node graph model, evaluation and validation."""

from pyloft.graph.model import GraphNode, GraphStructureError, NodeConnection, NodeGraph
from pyloft.graph.evaluator import (
    Diagnostic, DiagnosticKind, EvaluationCache, ExecutionContext, GraphEvaluator
)
from pyloft.graph.validation import GraphValidator

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "EvaluationCache",
    "ExecutionContext",
    "GraphEvaluator",
    "GraphNode",
    "GraphStructureError",
    "GraphValidator",
    "NodeConnection",
    "NodeGraph",
]
