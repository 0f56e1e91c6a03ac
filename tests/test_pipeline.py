# -*- coding: utf-8 -*-
"""
Tests for the end-to-end pipeline

Tests cover:
- Mapping, text and RawBlueprint inputs
- Dropped edge diagnostics
- Declarations and sources
- Entry point warning
"""
import json

import pytest

from blueprint_graph.config import LayoutSettings
from blueprint_graph.core.blueprint import DEFAULT_TARGET_CLASS
from blueprint_graph.core.edge import DropReason
from blueprint_graph.errors import BlueprintPayloadError
from blueprint_graph.generation.payload import RawBlueprint
from blueprint_graph.generation.pipeline import build_blueprint, load_raw_blueprint


class TestBuildBlueprint:
    """Tests for build_blueprint."""

    def test_branch_graph(self, branch_graph):
        blueprint = build_blueprint(branch_graph)

        assert [node.id for node in blueprint.nodes] == ["Event1", "Branch1", "FuncB", "FuncC"]
        assert blueprint.get_node("FuncC").position == (900.0, 200.0)
        assert len(blueprint.edges) == 3
        assert blueprint.dropped_edges == []
        assert blueprint.target_class == "BP_Player"
        assert blueprint.has_entry_point

    def test_response_text(self, branch_graph):
        text = "```json\n" + json.dumps(branch_graph) + "\n```"
        blueprint = build_blueprint(text)
        assert blueprint.get_node("Branch1").position == (450.0, 0.0)

    def test_raw_blueprint_input(self, branch_graph):
        raw = RawBlueprint.model_validate(branch_graph)
        assert load_raw_blueprint(raw) is raw
        assert len(build_blueprint(raw).nodes) == 4

    def test_invalid_text_raises(self):
        with pytest.raises(BlueprintPayloadError):
            build_blueprint("Sorry, I cannot help with that.")

    @pytest.mark.parametrize("source", [None, 42, ["nodes"]])
    def test_unreadable_mapping_is_empty(self, source):
        blueprint = build_blueprint(source)
        assert blueprint.nodes == []
        assert blueprint.target_class == DEFAULT_TARGET_CLASS

    def test_dropped_edges_are_reported(self, branch_graph):
        branch_graph["edges"].append({"source": "FuncC", "target": "Missing"})
        branch_graph["edges"].append("garbage")
        blueprint = build_blueprint(branch_graph)

        assert len(blueprint.edges) == 3
        assert [(d.index, d.reason) for d in blueprint.dropped_edges] == [
            (3, DropReason.UNKNOWN_TARGET),
            (4, DropReason.MALFORMED),
        ]
        assert blueprint.to_dict()["droppedEdges"] == [
            {"index": 3, "reason": "unknown_target"},
            {"index": 4, "reason": "malformed"},
        ]

    def test_custom_settings(self, branch_graph):
        settings = LayoutSettings(column_spacing=300)
        assert build_blueprint(branch_graph, settings).get_node("FuncB").x == 600.0

    def test_declarations(self, branch_graph):
        branch_graph["variables"] = [{"id": "v1", "name": "Health", "type": "float", "defaultValue": "100"}]
        branch_graph["functions"] = [{"name": "TakeDamage", "inputs": [{"name": "Amount", "type": "float"}]}]
        blueprint = build_blueprint(branch_graph)

        assert blueprint.variables[0].to_dict() == {
            "id": "v1", "name": "Health", "type": "float", "defaultValue": "100",
        }
        assert blueprint.functions[0].id == "func_0"
        assert blueprint.functions[0].inputs[0].id == "func_0_Amount"

    def test_sources(self, branch_graph):
        branch_graph["sources"] = [
            {"title": "Flow Control", "url": "https://docs.example.com/flow"},
            {"uri": "https://docs.example.com/events"},
            {"title": "No link"},
            "junk",
        ]
        sources = build_blueprint(branch_graph).sources
        assert [(s.title, s.url) for s in sources] == [
            ("Flow Control", "https://docs.example.com/flow"),
            ("https://docs.example.com/events", "https://docs.example.com/events"),
        ]

    def test_wire_form(self, branch_graph):
        data = build_blueprint(branch_graph).to_dict()
        assert set(data) >= {"nodes", "edges", "summary", "cppCode", "targetClass"}
        assert data["nodes"][1]["position"] == {"x": 450.0, "y": 0.0}
        assert data["edges"][1]["sourceHandle"] == "Branch1_True"
        json.dumps(data)


class TestDiagnostics:
    """Tests for pipeline logging."""

    def test_summary_line(self, branch_graph, log_messages):
        build_blueprint(branch_graph)
        assert "Built blueprint 'BP_Player': 4 nodes, 3 edges, 0 dropped" in log_messages

    def test_missing_entry_point_warns(self, log_messages):
        build_blueprint({"nodes": [{"id": "p", "label": "Print String"}]})
        assert any("no Entry Point" in message for message in log_messages)

    def test_empty_graph_does_not_warn(self, log_messages):
        build_blueprint({})
        assert not any("no Entry Point" in message for message in log_messages)
