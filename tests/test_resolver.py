# -*- coding: utf-8 -*-
"""
Tests for the edge resolver

Tests cover:
- Exact handles are kept
- Exec-like token fallback on both sides
- Drop reasons and diagnostics
- Edge id generation
"""
import pytest

from blueprint_graph.core.edge import DropReason
from blueprint_graph.core.node import Node
from blueprint_graph.core.pins import Pin, PinType
from blueprint_graph.schema.normalizer import normalize_nodes
from blueprint_graph.schema.resolver import (
    EdgeResolution, is_exec_like, resolve, resolve_edge, resolve_handle, select_default_pin,
    SOURCE_EXEC_TOKENS, TARGET_EXEC_TOKENS
)


def _pin(pin_id, pin_type=PinType.EXEC, is_output=False):
    return Pin(id=pin_id, name=pin_id, type=pin_type, is_output=is_output)


@pytest.fixture
def exec_pair():
    """N1 with a single Exec output, N2 with a single Exec input."""
    return [
        Node(id="N1", outputs=[_pin("N1_then", is_output=True)]),
        Node(id="N2", inputs=[_pin("N2_execute")]),
    ]


@pytest.fixture
def mixed_pair():
    """Both nodes list a data pin before their Exec pin."""
    return [
        Node(id="S", outputs=[
            _pin("S_value", PinType.FLOAT, True),
            _pin("S_exec", PinType.EXEC, True),
        ]),
        Node(id="T", inputs=[
            _pin("T_amount", PinType.FLOAT),
            _pin("T_exec", PinType.EXEC),
        ]),
    ]


class TestHandleFallback:
    """Tests for handle resolution."""

    def test_bogus_out_binds_to_exec_output(self, exec_pair):
        """'bogus_out' contains 'out' and binds to the Exec output."""
        result = resolve([{"source": "N1", "target": "N2", "sourceHandle": "bogus_out"}], exec_pair)
        assert result.edges[0].source_handle == "N1_then"
        assert result.edges[0].target_handle == "N2_execute"

    def test_exact_handles_are_kept(self, mixed_pair):
        raw = {"source": "S", "target": "T", "sourceHandle": "S_value", "targetHandle": "T_amount"}
        result = resolve([raw], mixed_pair)
        assert (result.edges[0].source_handle, result.edges[0].target_handle) == ("S_value", "T_amount")

    def test_absent_handles_prefer_exec(self, mixed_pair):
        result = resolve([{"source": "S", "target": "T"}], mixed_pair)
        assert result.edges[0].source_handle == "S_exec"
        assert result.edges[0].target_handle == "T_exec"

    @pytest.mark.parametrize("handle", ["exec_out", "Then 0", "TRUE", "output"])
    def test_source_tokens(self, mixed_pair, handle):
        result = resolve([{"source": "S", "target": "T", "sourceHandle": handle}], mixed_pair)
        assert result.edges[0].source_handle == "S_exec"

    def test_non_exec_like_binds_first_pin(self, mixed_pair):
        result = resolve(
            [{"source": "S", "target": "T", "sourceHandle": "Return", "targetHandle": "Amount"}],
            mixed_pair,
        )
        assert result.edges[0].source_handle == "S_value"
        assert result.edges[0].target_handle == "T_amount"

    def test_target_only_knows_exec_token(self, mixed_pair):
        """'then' is exec-like on the source side only."""
        result = resolve([{"source": "S", "target": "T", "targetHandle": "then"}], mixed_pair)
        assert result.edges[0].target_handle == "T_amount"

        result = resolve([{"source": "S", "target": "T", "targetHandle": "exec_in"}], mixed_pair)
        assert result.edges[0].target_handle == "T_exec"

    def test_exec_like_without_exec_pin_uses_first_pin(self):
        nodes = [
            Node(id="A", outputs=[_pin("A_ret", PinType.FLOAT, True)]),
            Node(id="B", inputs=[_pin("B_x", PinType.FLOAT)]),
        ]
        result = resolve([{"source": "A", "target": "B", "sourceHandle": "out"}], nodes)
        assert result.edges[0].source_handle == "A_ret"

    def test_branch_outputs_by_declared_id(self, branch_graph):
        nodes = normalize_nodes(branch_graph["nodes"])
        result = resolve(branch_graph["edges"], nodes)
        assert [edge.source_handle for edge in result] == ["Event1_Output", "Branch1_True", "Branch1_False"]
        assert [edge.target_handle for edge in result] == ["Branch1_Exec", "FuncB_Exec", "FuncC_Exec"]


    def test_macro_loop_keeps_both_exec_outputs(self):
        """Declared loop handles bind to distinct pins on a macro-typed loop."""
        nodes = normalize_nodes([
            {"id": "L1", "label": "ForEach Loop", "nodeType": "macro"},
            {"id": "P1", "label": "Print String"},
            {"id": "P2", "label": "Print String"},
        ])
        result = resolve([
            {"source": "L1", "target": "P1", "sourceHandle": "L1_LoopBody"},
            {"source": "L1", "target": "P2", "sourceHandle": "L1_Completed"},
        ], nodes)
        assert [edge.source_handle for edge in result] == ["L1_LoopBody", "L1_Completed"]


class TestHelpers:
    """Tests for the named policy helpers."""

    def test_is_exec_like(self):
        assert is_exec_like(None, SOURCE_EXEC_TOKENS)
        assert is_exec_like("", TARGET_EXEC_TOKENS)
        assert is_exec_like("ExecOut", TARGET_EXEC_TOKENS)
        assert not is_exec_like("then", TARGET_EXEC_TOKENS)

    def test_select_default_pin(self):
        pins = [_pin("d", PinType.FLOAT), _pin("e")]
        assert select_default_pin(pins, prefer_exec=True).id == "e"
        assert select_default_pin(pins, prefer_exec=False).id == "d"
        assert select_default_pin([], prefer_exec=True) is None

    def test_resolve_handle_without_pins(self):
        assert resolve_handle("x", [], SOURCE_EXEC_TOKENS) is None


class TestDrops:
    """Tests for dropped edges."""

    def test_unknown_nodes(self, exec_pair):
        result = resolve([
            {"source": "Ghost", "target": "N2"},
            {"source": "N1", "target": "Ghost"},
            {"target": "N2"},
        ], exec_pair)
        assert len(result) == 0
        assert [d.reason for d in result.dropped] == [
            DropReason.UNKNOWN_SOURCE,
            DropReason.UNKNOWN_TARGET,
            DropReason.UNKNOWN_SOURCE,
        ]

    def test_no_pins(self):
        nodes = [Node(id="A"), Node(id="B", outputs=[_pin("B_out", is_output=True)])]
        result = resolve([{"source": "A", "target": "B"}, {"source": "B", "target": "A"}], nodes)
        assert [d.reason for d in result.dropped] == [DropReason.NO_SOURCE_PINS, DropReason.NO_TARGET_PINS]

    @pytest.mark.parametrize("garbage", [None, "N1->N2", 5, ["N1", "N2"]])
    def test_malformed(self, exec_pair, garbage):
        result = resolve([garbage], exec_pair)
        assert result.dropped[0].reason is DropReason.MALFORMED
        assert result.dropped[0].raw == garbage

    def test_unresolved_handle(self):
        nodes = [
            Node(id="A", outputs=[Pin(id="", name="Broken", is_output=True)]),
            Node(id="B", inputs=[_pin("B_in")]),
        ]
        edge, reason = resolve_edge({"source": "A", "target": "B"}, {n.id: n for n in nodes})
        assert edge is None
        assert reason is DropReason.UNRESOLVED_HANDLE

    def test_dropped_keep_index(self, exec_pair):
        result = resolve([
            {"source": "N1", "target": "N2"},
            {"source": "nope", "target": "N2"},
        ], exec_pair)
        assert result.dropped_count == 1
        assert result.dropped[0].index == 1
        assert result.dropped[0].to_dict() == {"index": 1, "reason": "unknown_source"}

    def test_drops_are_logged(self, exec_pair, log_messages):
        resolve([{"source": "N1", "target": "N2"}, {"source": "x", "target": "y"}], exec_pair)
        assert "Edge resolver dropped 1 of 2 edge(s)" in log_messages

    @pytest.mark.parametrize("raw_edges", [None, {"source": "N1"}, "edges"])
    def test_non_list_is_empty(self, exec_pair, raw_edges):
        result = resolve(raw_edges, exec_pair)
        assert isinstance(result, EdgeResolution)
        assert len(result) == 0
        assert result.dropped_count == 0


class TestEdgeIds:
    """Tests for edge identifiers."""

    def test_declared_id_is_kept(self, exec_pair):
        result = resolve([{"id": "wire", "source": "N1", "target": "N2"}], exec_pair)
        assert result.edges[0].id == "wire"

    def test_missing_id_uses_index(self, exec_pair):
        result = resolve([
            {"source": "nope", "target": "N2"},
            {"source": "N1", "target": "N2"},
        ], exec_pair)
        assert result.edges[0].id == "N1_N2_1"

    def test_resolution_iterates_edges(self, exec_pair):
        result = resolve([{"source": "N1", "target": "N2"}], exec_pair)
        assert [edge.id for edge in result] == ["N1_N2_0"]
