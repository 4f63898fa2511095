# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""Tests for graph evaluation: ordering, caching, overrides and diagnostics."""

import logging

import numpy as np
import pytest

from pyloft.graph.evaluator import Diagnostic, DiagnosticKind, GraphEvaluator
from pyloft.graph.model import GraphNode, NodeConnection, NodeGraph
from pyloft.nodes import DataKind, NodePort, NodeRegistry, register_node


@pytest.fixture
def calls():
    return []


@pytest.fixture
def registry(calls):
    """Small arithmetic node set that records every execution."""
    reg = NodeRegistry()
    number = DataKind.NUMBER

    @register_node(type="source", name="Source", category="Test",
                   inputs=[NodePort("value", "Value", number, 1)],
                   outputs=[NodePort("value", "Value", number)], registry=reg)
    def source(inputs, context):
        calls.append(context.node_id)
        return {"value": inputs["value"]}

    @register_node(type="double", name="Double", category="Test",
                   inputs=[NodePort("x", "X", number, 1)],
                   outputs=[NodePort("y", "Y", number)], registry=reg)
    def double(inputs, context):
        calls.append(context.node_id)
        return {"y": inputs["x"] * 2}

    @register_node(type="add", name="Add", category="Test",
                   inputs=[NodePort("a", "A", number, 0), NodePort("b", "B", number, 0)],
                   outputs=[NodePort("sum", "Sum", number)], registry=reg)
    def add(inputs, context):
        calls.append(context.node_id)
        return {"sum": inputs["a"] + inputs["b"]}

    @register_node(type="pass", name="Pass", category="Test",
                   inputs=[NodePort("x", "X", number, 0)],
                   outputs=[NodePort("y", "Y", number)], registry=reg)
    def passthrough(inputs, context):
        return {"y": inputs["x"]}

    @register_node(type="nothing", name="Nothing", category="Test",
                   inputs=[NodePort("x", "X", number, 0)],
                   outputs=[NodePort("value", "Value", number)], registry=reg)
    def nothing(inputs, context):
        return {"value": None}

    @register_node(type="boom", name="Boom", category="Test",
                   inputs=[NodePort("x", "X", number, 0)],
                   outputs=[NodePort("value", "Value", number)], registry=reg)
    def boom(inputs, context):
        raise RuntimeError("kaboom")

    @register_node(type="forgetful", name="Forgetful", category="Test",
                   inputs=[NodePort("x", "X", number, 0)],
                   outputs=[NodePort("value", "Value", number)], registry=reg)
    def forgetful(inputs, context):
        return {}

    @register_node(type="lazy", name="Lazy", category="Test",
                   inputs=[NodePort("target", "Target", DataKind.STRING, "")],
                   outputs=[NodePort("value", "Value", number)], registry=reg)
    def lazy(inputs, context):
        return {"value": context.get_node_output(inputs["target"] or context.node_id, "value")}

    @register_node(type="warner", name="Warner", category="Test",
                   inputs=[NodePort("x", "X", number, 0)],
                   outputs=[NodePort("value", "Value", number)], registry=reg)
    def warner(inputs, context):
        context.warn("first problem")
        context.warn("first problem")
        context.warn("second problem")
        return {"value": 0}

    return reg


def _kinds(diagnostics):
    return [d.kind for d in diagnostics]


class TestOrderingAndCaching:

    def test_producers_run_first(self, registry, calls):
        graph = NodeGraph()
        graph.add_node("double", node_id="d2")
        graph.add_node("double", node_id="d1")
        graph.add_node("source", node_id="src", input_overrides={"value": 3})
        graph.add_connection("src", "value", "d1", "x")
        graph.add_connection("d1", "y", "d2", "x")

        evaluator = GraphEvaluator(graph, registry)
        assert evaluator.evaluate_graph() == []
        assert calls == ["src", "d1", "d2"]
        assert evaluator.get_node_output("d2", "y") == 12.0

    def test_diamond_runs_each_node_once(self, registry, calls):
        graph = NodeGraph()
        graph.add_node("source", node_id="src", input_overrides={"value": 2})
        graph.add_node("double", node_id="left")
        graph.add_node("double", node_id="right")
        graph.add_node("add", node_id="sum")
        graph.add_connection("src", "value", "left", "x")
        graph.add_connection("src", "value", "right", "x")
        graph.add_connection("left", "y", "sum", "a")
        graph.add_connection("right", "y", "sum", "b")

        evaluator = GraphEvaluator(graph, registry)
        evaluator.evaluate_graph()
        assert sorted(calls) == ["left", "right", "src", "sum"]
        assert evaluator.get_node_output("sum", "sum") == 8.0

    def test_cached_outputs_are_reused(self, registry, calls):
        graph = NodeGraph()
        graph.add_node("source", node_id="src")
        graph.add_node("double", node_id="d")
        graph.add_connection("src", "value", "d", "x")
        evaluator = GraphEvaluator(graph, registry)
        evaluator.evaluate_graph()
        calls.clear()

        assert evaluator.get_node_output("d", "y") == 2.0
        assert calls == []
        evaluator.evaluate_node("d")
        assert calls == ["d"]

    def test_on_demand_evaluation_pulls_upstream(self, registry, calls):
        graph = NodeGraph()
        graph.add_node("source", node_id="src", input_overrides={"value": 5})
        graph.add_node("double", node_id="d")
        graph.add_connection("src", "value", "d", "x")
        evaluator = GraphEvaluator(graph, registry)

        assert evaluator.get_node_output("d", "y") == 10.0
        assert calls == ["src", "d"]
        assert evaluator.get_node_output("d", "missing") is None

    def test_graph_edits_invalidate_cache(self, registry):
        graph = NodeGraph()
        graph.add_node("source", node_id="src")
        graph.add_node("double", node_id="d")
        graph.add_connection("src", "value", "d", "x")
        evaluator = GraphEvaluator(graph, registry)
        evaluator.evaluate_graph()

        graph.set_input("src", "value", 7)
        assert evaluator.get_node_output("d", "y") == 14.0

    def test_full_pass_resets_diagnostics(self, registry):
        graph = NodeGraph([GraphNode("b", "boom")])
        evaluator = GraphEvaluator(graph, registry)
        first = evaluator.evaluate_graph()
        second = evaluator.evaluate_graph()
        assert first == second
        assert len(second) == 1

    def test_long_chain(self, registry):
        graph = NodeGraph()
        graph.add_node("source", node_id="n0", input_overrides={"value": 7})
        for i in range(1, 1500):
            graph.add_node("pass", node_id=f"n{i}")
            graph.add_connection(f"n{i - 1}", "value" if i == 1 else "y", f"n{i}", "x")
        evaluator = GraphEvaluator(graph, registry)
        assert evaluator.get_node_output("n1499", "y") == 7.0
        assert evaluator.diagnostics == []


class TestInputResolution:

    def test_override_beats_connection(self, registry):
        graph = NodeGraph()
        graph.add_node("source", node_id="src", input_overrides={"value": 3})
        graph.add_node("double", node_id="d", input_overrides={"x": 10})
        graph.add_connection("src", "value", "d", "x")
        evaluator = GraphEvaluator(graph, registry)
        evaluator.evaluate_graph()
        assert evaluator.get_node_output("d", "y") == 20.0

    def test_last_connection_wins(self, registry):
        graph = NodeGraph(
            nodes=[
                GraphNode("one", "source", {"value": 1}),
                GraphNode("five", "source", {"value": 5}),
                GraphNode("d", "double"),
            ],
            connections=[
                NodeConnection("c1", "one", "value", "d", "x"),
                NodeConnection("c2", "five", "value", "d", "x"),
            ],
        )
        evaluator = GraphEvaluator(graph, registry)
        assert evaluator.evaluate_graph() == []
        assert evaluator.get_node_output("d", "y") == 10.0

    def test_upstream_none_keeps_default(self, registry):
        graph = NodeGraph()
        graph.add_node("nothing", node_id="n")
        graph.add_node("double", node_id="d")
        graph.add_connection("n", "value", "d", "x")
        evaluator = GraphEvaluator(graph, registry)
        evaluator.evaluate_graph()
        assert evaluator.get_node_output("d", "y") == 2.0

    def test_override_strings_are_coerced(self, registry):
        graph = NodeGraph([GraphNode("d", "double", {"x": "4"})])
        evaluator = GraphEvaluator(graph, registry)
        evaluator.evaluate_graph()
        assert evaluator.get_node_output("d", "y") == 8.0


class TestDiagnostics:

    def test_two_node_cycle_reported_once(self, registry):
        graph = NodeGraph()
        graph.add_node("double", node_id="a")
        graph.add_node("double", node_id="b")
        graph.add_connection("a", "y", "b", "x")
        graph.add_connection("b", "y", "a", "x")

        evaluator = GraphEvaluator(graph, registry)
        diagnostics = evaluator.evaluate_graph()
        assert _kinds(diagnostics) == [DiagnosticKind.CIRCULAR_DEPENDENCY]
        assert diagnostics[0].node_id == "a"
        # b falls back to its default, a consumes b
        assert evaluator.get_node_output("b", "y") == 2.0
        assert evaluator.get_node_output("a", "y") == 4.0

    def test_self_loop(self, registry):
        graph = NodeGraph()
        graph.add_node("double", node_id="a")
        graph.add_connection("a", "y", "a", "x")
        evaluator = GraphEvaluator(graph, registry)
        diagnostics = evaluator.evaluate_graph()
        assert diagnostics == [Diagnostic("a", DiagnosticKind.CIRCULAR_DEPENDENCY, diagnostics[0].message)]
        assert evaluator.get_node_output("a", "y") == 2.0

    def test_unknown_type_is_isolated(self, registry):
        graph = NodeGraph()
        graph.add_node("doesNotExist", node_id="mystery")
        graph.add_node("source", node_id="src", input_overrides={"value": 4})
        graph.add_node("double", node_id="d")
        graph.add_connection("mystery", "out", "d", "x")

        evaluator = GraphEvaluator(graph, registry)
        diagnostics = evaluator.evaluate_graph()
        assert _kinds(diagnostics) == [DiagnosticKind.UNKNOWN_NODE_TYPE]
        assert "doesNotExist" in diagnostics[0].message
        assert evaluator.cache.get("mystery") == {}
        assert evaluator.get_node_output("src", "value") == 4.0
        assert evaluator.get_node_output("d", "y") == 2.0

    def test_execution_error_is_contained(self, registry, caplog):
        graph = NodeGraph()
        graph.add_node("boom", node_id="b")
        graph.add_node("double", node_id="d")
        graph.add_connection("b", "value", "d", "x")

        evaluator = GraphEvaluator(graph, registry)
        with caplog.at_level(logging.ERROR, logger="pyloft.graph.evaluator"):
            diagnostics = evaluator.evaluate_graph()
        assert diagnostics == [Diagnostic("b", DiagnosticKind.NODE_EXECUTION_ERROR, "kaboom")]
        assert evaluator.cache.get("b") == {}
        assert evaluator.get_node_output("d", "y") == 2.0
        assert any(r.levelno == logging.ERROR for r in caplog.records)

    def test_missing_declared_output(self, registry):
        graph = NodeGraph([GraphNode("f", "forgetful")])
        evaluator = GraphEvaluator(graph, registry)
        diagnostics = evaluator.evaluate_graph()
        assert _kinds(diagnostics) == [DiagnosticKind.NODE_EXECUTION_ERROR]
        assert "did not produce" in diagnostics[0].message
        assert evaluator.cache.get("f") == {}

    def test_uncoercible_override(self, registry):
        graph = NodeGraph([GraphNode("d", "double", {"x": "abc"})])
        evaluator = GraphEvaluator(graph, registry)
        diagnostics = evaluator.evaluate_graph()
        assert _kinds(diagnostics) == [DiagnosticKind.NODE_EXECUTION_ERROR]
        assert evaluator.get_node_output("d", "y") is None

    def test_missing_node(self, registry):
        evaluator = GraphEvaluator(NodeGraph(), registry)
        evaluator.evaluate_node("ghost")
        assert evaluator.get_node_output("ghost", "value") is None
        assert _kinds(evaluator.diagnostics) == [DiagnosticKind.MISSING_NODE]

    def test_connection_from_missing_node(self, registry):
        graph = NodeGraph(
            nodes=[GraphNode("d", "double")],
            connections=[NodeConnection("c", "ghost", "value", "d", "x")],
        )
        evaluator = GraphEvaluator(graph, registry)
        diagnostics = evaluator.evaluate_graph()
        assert diagnostics[0].kind is DiagnosticKind.MISSING_NODE
        assert diagnostics[0].node_id == "d"
        assert evaluator.get_node_output("d", "y") == 2.0

    def test_lazy_read_of_unconnected_node(self, registry):
        graph = NodeGraph([
            GraphNode("lazy", "lazy", {"target": "src"}),
            GraphNode("src", "source", {"value": 9}),
        ])
        evaluator = GraphEvaluator(graph, registry)
        assert evaluator.evaluate_graph() == []
        assert evaluator.get_node_output("lazy", "value") == 9.0

    def test_lazy_read_of_itself(self, registry):
        graph = NodeGraph([GraphNode("lazy", "lazy")])
        evaluator = GraphEvaluator(graph, registry)
        diagnostics = evaluator.evaluate_graph()
        assert _kinds(diagnostics) == [DiagnosticKind.CIRCULAR_DEPENDENCY]
        assert evaluator.cache.get("lazy") == {"value": None}

    def test_geometry_warnings_keep_distinct_messages(self, registry):
        graph = NodeGraph([GraphNode("w", "warner")])
        evaluator = GraphEvaluator(graph, registry)
        diagnostics = evaluator.evaluate_graph()
        assert [d.message for d in diagnostics] == ["first problem", "second problem"]
        assert set(_kinds(diagnostics)) == {DiagnosticKind.GEOMETRY_WARNING}


class TestBuiltInNodes:

    def test_pipeline_mesh(self, pipeline_graph):
        evaluator = GraphEvaluator(pipeline_graph)
        meshes = evaluator.get_mesh_outputs()
        assert evaluator.diagnostics == []
        assert len(meshes) == 1
        # 4 hexagon sections with a hole each, 3 segments of outer and hole walls
        assert meshes[0].triangle_count == 72
        assert meshes[0].vertex_count == 48
        low, high = meshes[0].bounds()
        assert low[1] == 0.0 and high[1] == 100.0

    def test_pipeline_is_deterministic(self, pipeline_graph):
        first = GraphEvaluator(pipeline_graph).get_mesh_outputs()[0]
        second = GraphEvaluator(pipeline_graph).get_mesh_outputs()[0]
        np.testing.assert_array_equal(first.vertices, second.vertices)
        np.testing.assert_array_equal(first.indices, second.indices)

    def test_unconnected_loft_is_empty(self):
        graph = NodeGraph()
        graph.add_node("loft", node_id="loft")
        evaluator = GraphEvaluator(graph)
        meshes = evaluator.get_mesh_outputs()
        assert evaluator.diagnostics == []
        assert len(meshes) == 1 and meshes[0].is_empty

    def test_loft_warning_becomes_diagnostic(self):
        graph = NodeGraph()
        graph.add_node("crossSections", node_id="sections", input_overrides={
            "shapes": [
                [[1, -1], [1, 1], [-1, 1], [-1, -1]],
                [[1, 0], [-1, 1], [-1, -1]],
            ],
        })
        graph.add_node("loft", node_id="loft")
        graph.add_connection("sections", "crossSections", "loft", "crossSections")

        evaluator = GraphEvaluator(graph)
        meshes = evaluator.get_mesh_outputs()
        assert _kinds(evaluator.diagnostics) == [DiagnosticKind.GEOMETRY_WARNING]
        assert evaluator.diagnostics[0].node_id == "loft"
        assert meshes[0].is_empty

    def test_spine_node(self):
        graph = NodeGraph()
        graph.add_node("spine", node_id="spine", input_overrides={"steps": 5})
        evaluator = GraphEvaluator(graph)
        meshes = evaluator.get_mesh_outputs()
        assert meshes[0].triangle_count == 2 * 16 * 4

    def test_spine_with_too_few_rings_warns(self):
        graph = NodeGraph()
        graph.add_node("spine", node_id="spine", input_overrides={"steps": 2, "removeFrequency": 1})
        evaluator = GraphEvaluator(graph)
        meshes = evaluator.get_mesh_outputs()
        assert _kinds(evaluator.diagnostics) == [DiagnosticKind.GEOMETRY_WARNING]
        assert meshes[0].is_empty

    def test_openings_survive_the_graph(self):
        graph = NodeGraph()
        graph.add_node("pattern2D", node_id="pattern", input_overrides={"shape": "square"})
        graph.add_node("patternToShapes", node_id="shapes",
                       input_overrides={"removeShapes": True, "removeFrequency": 3})
        graph.add_node("crossSections", node_id="sections")
        graph.add_node("loft", node_id="loft")
        graph.add_connection("pattern", "pattern", "shapes", "pattern")
        graph.add_connection("shapes", "shapes", "sections", "shapes")
        graph.add_connection("sections", "crossSections", "loft", "crossSections")

        evaluator = GraphEvaluator(graph)
        mesh = evaluator.get_mesh_outputs()[0]
        # gaps at kept indices 0 and 3 leave only the 1-2 segment
        assert mesh.triangle_count == 2 * 4
