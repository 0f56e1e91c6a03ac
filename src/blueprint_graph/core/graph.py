# -*- coding: utf-8 -*-
"""
BlueprintGraph - Editable container for nodes and edges.

Holds the graph the rendering collaborator displays and applies the
edit events it sends back: connect, disconnect, reposition and pin
value edits. New connections go through the edge resolver, so the
editor accepts the same loosely declared handles as the generator.

Connection rules:
    - An Exec output drives at most one edge; connecting it again
      replaces the previous edge.
    - A data input accepts at most one edge; connecting it again
      replaces the previous edge.
    - Exec inputs (fan-in) and data outputs (fan-out) are unrestricted.

Example:
    graph = BlueprintGraph.from_blueprint(build_blueprint(raw))
    graph.connect("Event1", "Event1_Output", "Print1", None)
    graph.set_pin_value("Print1", "Print1_InString", "Hello")
    graph.auto_layout()
"""
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from loguru import logger

from ..events import ObserverEvent
from .edge import Edge
from .node import PositionedNode

if TYPE_CHECKING:
    from ..config import LayoutSettings
    from .blueprint import Blueprint, BlueprintFunction, BlueprintVariable


class BlueprintGraph:
    """
    Container for nodes and edges.

    Nodes live in an arena keyed by id; adjacency is never cached and
    is derived from ``edges`` whenever it is needed.

    Attributes:
        nodes: Dictionary of node_id -> PositionedNode
        edges: Ordered list of resolved edges
        variables: Declared blueprint variables
        functions: Declared blueprint function signatures
        on_changed: Emitted as (action, payload) after every mutation
    """

    def __init__(self):
        self.nodes: Dict[str, PositionedNode] = {}
        self.edges: List[Edge] = []
        self.variables: List['BlueprintVariable'] = []
        self.functions: List['BlueprintFunction'] = []
        self.on_changed = ObserverEvent("GraphChanged")
        self._connect_seq = 0

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @classmethod
    def from_blueprint(cls, blueprint: 'Blueprint') -> 'BlueprintGraph':
        """Create a graph holding a generated blueprint."""
        graph = cls()
        graph.replace(blueprint)
        return graph

    def replace(self, blueprint: 'Blueprint') -> None:
        """
        Replace the whole graph with a new generation result.

        Variables and functions are merged rather than replaced, so
        declarations from earlier generations survive.
        """
        self.nodes = {node.id: node for node in blueprint.nodes}
        self.edges = list(blueprint.edges)
        self.merge_variables(blueprint.variables)
        self.merge_functions(blueprint.functions)
        logger.debug(f"Graph replaced: {self}")
        self.on_changed.emit("replace", blueprint)

    def clear(self) -> None:
        """Remove all nodes, edges and declarations."""
        self.nodes.clear()
        self.edges.clear()
        self.variables.clear()
        self.functions.clear()
        self.on_changed.emit("clear", None)

    # =========================================================================
    # Node Management
    # =========================================================================

    def get_node(self, node_id: str) -> Optional[PositionedNode]:
        """Get a node by ID."""
        return self.nodes.get(node_id)

    def _require_node(self, node_id: str) -> PositionedNode:
        node = self.nodes.get(node_id)
        if node is None:
            raise KeyError(f"Node not found: {node_id}")
        return node

    def remove_node(self, node_id: str) -> None:
        """
        Remove a node and all its edges.

        Args:
            node_id: ID of node to remove
        """
        node = self.nodes.pop(node_id, None)
        if node is None:
            return
        attached = [e for e in self.edges if node_id in (e.source, e.target)]
        for edge in attached:
            self.disconnect(edge.id)
        logger.debug(f"Removed node: {node}")
        self.on_changed.emit("remove_node", node)

    def move_node(self, node_id: str, x: float, y: float) -> None:
        """
        Reposition a node.

        Raises:
            KeyError: If node not found
        """
        node = self._require_node(node_id)
        node.x = float(x)
        node.y = float(y)
        self.on_changed.emit("move", node)

    def set_pin_value(self, node_id: str, pin_id: str, value: Optional[str]) -> None:
        """
        Edit the literal value of a pin.

        Raises:
            KeyError: If node or pin not found
        """
        node = self._require_node(node_id)
        pin = node.get_pin(pin_id)
        if pin is None:
            raise KeyError(f"Pin not found: {node_id}.{pin_id}")
        pin.value = None if value is None else str(value)
        self.on_changed.emit("value", pin)

    def find_entry_nodes(self) -> List[PositionedNode]:
        """
        Find all entry point nodes.

        Returns:
            Event nodes, in declaration order
        """
        return [node for node in self.nodes.values() if node.is_event]

    # =========================================================================
    # Connection Management
    # =========================================================================

    def connect(
        self,
        source_node_id: str,
        source_handle: Optional[str],
        target_node_id: str,
        target_handle: Optional[str],
    ) -> Optional[Edge]:
        """
        Create a connection between two nodes.

        Handles are resolved with the same fallback policy as generated
        edges. Edges made redundant by the connection rules are removed.

        Args:
            source_node_id: ID of node with output pin
            source_handle: Declared output pin id
            target_node_id: ID of node with input pin
            target_handle: Declared input pin id

        Returns:
            The created edge, or None if it cannot be resolved
        """
        from ..schema.resolver import resolve_edge

        raw = {
            "source": source_node_id,
            "target": target_node_id,
            "sourceHandle": source_handle,
            "targetHandle": target_handle,
        }
        index = self._connect_seq
        edge, reason = resolve_edge(raw, self.nodes, index)
        if edge is None:
            logger.warning(f"Connection {source_node_id} -> {target_node_id} refused: {reason.value}")
            return None
        self._connect_seq += 1

        # Keep ids unique among live edges
        while any(e.id == edge.id for e in self.edges):
            index += 1
            edge.id = f"{edge.source}_{edge.target}_{index}"
        self._connect_seq = max(self._connect_seq, index + 1)

        source_pin = self.nodes[edge.source].get_output_pin(edge.source_handle)
        target_pin = self.nodes[edge.target].get_input_pin(edge.target_handle)

        superseded = []
        for existing in self.edges:
            if (source_pin.is_exec and existing.source == edge.source
                    and existing.source_handle == edge.source_handle):
                superseded.append(existing)
            elif (not target_pin.is_exec and existing.target == edge.target
                    and existing.target_handle == edge.target_handle):
                superseded.append(existing)
        for existing in superseded:
            self.disconnect(existing.id)

        self.edges.append(edge)
        logger.debug(f"Connected: {edge}")
        self.on_changed.emit("connect", edge)
        return edge

    def disconnect(self, edge_id: str) -> None:
        """
        Remove an edge.

        Args:
            edge_id: ID of edge to remove
        """
        for i, edge in enumerate(self.edges):
            if edge.id == edge_id:
                del self.edges[i]
                logger.debug(f"Disconnected: {edge}")
                self.on_changed.emit("disconnect", edge)
                return

    def edges_from(self, node_id: str) -> List[Edge]:
        """Get all edges originating from a node."""
        return [edge for edge in self.edges if edge.source == node_id]

    def edges_to(self, node_id: str) -> List[Edge]:
        """Get all edges going into a node."""
        return [edge for edge in self.edges if edge.target == node_id]

    # =========================================================================
    # Layout
    # =========================================================================

    def auto_layout(self, settings: Optional['LayoutSettings'] = None) -> None:
        """Recompute every node position from the graph structure."""
        from ..layout.engine import layout

        positioned = layout(list(self.nodes.values()), self.edges, settings)
        self.nodes = {node.id: node for node in positioned}
        self.on_changed.emit("layout", None)

    # =========================================================================
    # Declarations
    # =========================================================================

    def merge_variables(self, variables: List['BlueprintVariable']) -> None:
        """Append variables whose id is not declared yet."""
        existing = {var.id for var in self.variables}
        self.variables.extend(var for var in variables if var.id not in existing)

    def merge_functions(self, functions: List['BlueprintFunction']) -> None:
        """Append functions whose id is not declared yet."""
        existing = {func.id for func in self.functions}
        self.functions.extend(func for func in functions if func.id not in existing)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """
        Serialize graph for saving.

        Returns:
            Wire form of nodes (with positions), edges and declarations
        """
        return {
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [edge.to_dict() for edge in self.edges],
            "variables": [var.to_dict() for var in self.variables],
            "functions": [func.to_dict() for func in self.functions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BlueprintGraph':
        """
        Load graph from saved data.

        Nodes and edges are re-normalized and re-resolved; saved
        positions are kept where present, everything else is laid out.

        Args:
            data: Dictionary from to_dict()

        Returns:
            Restored BlueprintGraph instance
        """
        from ..generation.pipeline import build_blueprint

        blueprint = build_blueprint(data)
        saved = {}
        for record in data.get("nodes") or []:
            if not isinstance(record, dict) or record.get("id") is None:
                continue
            position = record.get("position")
            if isinstance(position, dict) and "x" in position and "y" in position:
                saved[str(record["id"])] = (position["x"], position["y"])

        graph = cls.from_blueprint(blueprint)
        for node_id, (x, y) in saved.items():
            if node_id in graph.nodes:
                graph.nodes[node_id].x = float(x)
                graph.nodes[node_id].y = float(y)
        return graph

    def __repr__(self) -> str:
        return f"<BlueprintGraph nodes={len(self.nodes)} edges={len(self.edges)}>"
