# -*- coding: utf-8 -*-
"""
Layout Engine - Left-to-right layered placement.

Steps:
    1. Forward/reverse adjacency from the edges
    2. Longest-path ranking (FIFO relaxation from source nodes)
    3. One column per rank
    4. Barycenter ordering inside each column, events on top
    5. Stacking with a running cursor so nodes never overlap

The result depends only on the graph structure, never on previous
positions. This is a fast heuristic, not a crossing-minimizing solver.

Example:
    positioned = layout(nodes, edges)
    for node in positioned:
        print(node.id, node.x, node.y)
"""
import math
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from loguru import logger

from ..config import LayoutSettings
from ..core.edge import Edge
from ..core.node import Node, PositionedNode

UNPLACED = math.inf


@dataclass
class Adjacency:
    """Derived lookup tables, rebuilt on every call."""
    successors: Dict[str, List[str]]
    predecessors: Dict[str, List[str]]

    @classmethod
    def build(cls, nodes: Sequence[Node], edges: Sequence[Edge]) -> 'Adjacency':
        successors: Dict[str, List[str]] = {node.id: [] for node in nodes}
        predecessors: Dict[str, List[str]] = {node.id: [] for node in nodes}
        for edge in edges:
            # Edges pointing outside the node set are ignored
            if edge.source in successors and edge.target in predecessors:
                successors[edge.source].append(edge.target)
                predecessors[edge.target].append(edge.source)
        return cls(successors, predecessors)


def compute_ranks(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    adjacency: Optional[Adjacency] = None,
) -> Dict[str, int]:
    """
    Longest-path layering.

    The queue is seeded with every node that has no incoming edge (or
    with the first node when the graph is fully cyclic). A neighbour is
    queued only when that raises its best-known rank. Ranks are capped
    at ``len(nodes) - 1``, the longest possible simple path, which
    bounds relaxation around cycles.

    Args:
        nodes: Graph nodes
        edges: Graph edges
        adjacency: Prebuilt adjacency, built from ``edges`` if omitted

    Returns:
        Rank per node id; nodes never reached get rank 0
    """
    if not nodes:
        return {}
    adjacency = adjacency or Adjacency.build(nodes, edges)

    sources = [node.id for node in nodes if not adjacency.predecessors[node.id]]
    if not sources:
        sources = [nodes[0].id]

    max_rank = len(nodes) - 1
    final: Dict[str, int] = {}
    best: Dict[str, int] = {node_id: 0 for node_id in sources}
    queue = deque((node_id, 0) for node_id in sources)
    capped = False

    while queue:
        node_id, rank = queue.popleft()
        if rank > final.get(node_id, -1):
            final[node_id] = rank

        for neighbour in adjacency.successors[node_id]:
            candidate = rank + 1
            if candidate <= best.get(neighbour, -1):
                continue
            if candidate > max_rank:
                capped = True
                continue
            best[neighbour] = candidate
            queue.append((neighbour, candidate))

    if capped:
        logger.debug(f"Cycle detected while ranking; ranks capped at {max_rank}")

    return {node.id: final.get(node.id, 0) for node in nodes}


def group_columns(nodes: Sequence[Node], ranks: Dict[str, int]) -> List[List[Node]]:
    """Partition nodes into columns 0..max_rank, keeping declaration order."""
    if not nodes:
        return []
    columns: List[List[Node]] = [[] for _ in range(max(ranks.values()) + 1)]
    for node in nodes:
        columns[ranks[node.id]].append(node)
    return columns


def barycenter(node_id: str, adjacency: Adjacency, placed_y: Dict[str, float]) -> float:
    """Mean Y of already placed predecessors, or UNPLACED if there are none."""
    ys = [placed_y[parent] for parent in adjacency.predecessors[node_id] if parent in placed_y]
    if not ys:
        return UNPLACED
    return sum(ys) / len(ys)


def layout(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    settings: Optional[LayoutSettings] = None,
) -> List[PositionedNode]:
    """
    Assign every node a position from the graph structure alone.

    Args:
        nodes: Normalized nodes
        edges: Resolved edges (passed through untouched by callers)
        settings: Spacing constants, defaults when omitted

    Returns:
        Positioned copies of ``nodes`` in the same order
    """
    settings = settings or LayoutSettings()
    if not nodes:
        return []

    adjacency = Adjacency.build(nodes, edges)
    ranks = compute_ranks(nodes, edges, adjacency)
    columns = group_columns(nodes, ranks)

    placed_y: Dict[str, float] = {}
    step = settings.node_height + settings.node_gap

    for column in columns:
        # Only lower columns are placed at this point
        weights = {node.id: barycenter(node.id, adjacency, placed_y) for node in column}
        ordered = sorted(column, key=lambda node: (not node.is_event, weights[node.id]))

        cursor = 0.0
        for node in ordered:
            target = weights[node.id]
            y = cursor if math.isinf(target) else max(target, cursor)
            placed_y[node.id] = y
            cursor = y + step

    logger.debug(f"Laid out {len(nodes)} node(s) in {len(columns)} column(s)")

    return [
        PositionedNode.place(
            node,
            x=ranks[node.id] * settings.column_spacing,
            y=placed_y[node.id],
        )
        for node in nodes
    ]
