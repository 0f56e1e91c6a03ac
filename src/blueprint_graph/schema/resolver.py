# -*- coding: utf-8 -*-
"""
Edge Resolver - Map declared connection handles onto real pins.

Generators routinely reference pins that do not exist ("exec_out",
"then", a misspelt id). Each raw edge either resolves to an edge whose
handles name real pins, or is dropped and recorded as a diagnostic.
The resolver never raises.

Handle fallback policy (source side; the target side mirrors it on
input pins, with "exec" as its only token):

1. A declared handle naming an existing output pin is kept.
2. Otherwise the handle is exec-like when absent or when its
   lower-cased text contains one of SOURCE_EXEC_TOKENS.
3. Exec-like handles bind to the first Exec output, falling back to
   the first output; other handles bind to the first output.

Example:
    result = resolve(raw_edges, nodes)
    for edge in result:
        ...
    if result.dropped_count:
        print(f"{result.dropped_count} edge(s) dropped")
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from loguru import logger
from pydantic import ValidationError

from ..core.edge import DropReason, DroppedEdge, Edge
from ..core.node import Node
from ..core.pins import Pin
from .raw import RawEdge

SOURCE_EXEC_TOKENS = ("exec", "then", "true", "out")
TARGET_EXEC_TOKENS = ("exec",)


@dataclass
class EdgeResolution:
    """
    Outcome of resolving a raw edge list.

    Iterating or taking ``len`` goes over the validated edges.
    """
    edges: List[Edge] = field(default_factory=list)
    dropped: List[DroppedEdge] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)


def is_exec_like(handle: Optional[str], tokens: Sequence[str]) -> bool:
    """Check whether a declared handle asks for a control-flow pin."""
    if not handle:
        return True
    lowered = handle.lower()
    return any(token in lowered for token in tokens)


def select_default_pin(pins: Sequence[Pin], prefer_exec: bool) -> Optional[Pin]:
    """
    Default-selection policy for unresolved handles.

    First Exec pin when ``prefer_exec`` is set and one exists, else the
    first pin in declaration order.
    """
    if prefer_exec:
        for pin in pins:
            if pin.is_exec:
                return pin
    return pins[0] if pins else None


def resolve_handle(
    declared: Optional[str],
    pins: Sequence[Pin],
    tokens: Sequence[str],
) -> Optional[str]:
    """
    Resolve one side of an edge against a node's pins.

    Args:
        declared: Handle as declared by the generator (may be None)
        pins: Output pins (source side) or input pins (target side)
        tokens: Substrings marking a handle as exec-like

    Returns:
        Id of the bound pin, or None if the node has no pins
    """
    if declared and any(pin.id == declared for pin in pins):
        return declared
    pin = select_default_pin(pins, prefer_exec=is_exec_like(declared, tokens))
    return pin.id if pin else None


def _as_raw_edge(raw_edge: Any) -> Optional[RawEdge]:
    if isinstance(raw_edge, RawEdge):
        return raw_edge
    try:
        return RawEdge.model_validate(raw_edge)
    except ValidationError:
        return None


def resolve_edge(
    raw_edge: Any,
    nodes_by_id: Mapping[str, Node],
    index: int = 0,
) -> Tuple[Optional[Edge], Optional[DropReason]]:
    """
    Resolve a single raw edge.

    Args:
        raw_edge: Mapping or RawEdge as declared by the generator or editor
        nodes_by_id: Normalized nodes keyed by id
        index: Sequence index, used for a missing edge id

    Returns:
        (edge, None) when resolved, (None, reason) when dropped
    """
    raw = _as_raw_edge(raw_edge)
    if raw is None:
        return None, DropReason.MALFORMED

    source = nodes_by_id.get(raw.source) if raw.source else None
    if source is None:
        return None, DropReason.UNKNOWN_SOURCE
    target = nodes_by_id.get(raw.target) if raw.target else None
    if target is None:
        return None, DropReason.UNKNOWN_TARGET

    if not source.outputs:
        return None, DropReason.NO_SOURCE_PINS
    if not target.inputs:
        return None, DropReason.NO_TARGET_PINS

    source_handle = resolve_handle(raw.source_handle, source.outputs, SOURCE_EXEC_TOKENS)
    target_handle = resolve_handle(raw.target_handle, target.inputs, TARGET_EXEC_TOKENS)
    if not source_handle or not target_handle:
        return None, DropReason.UNRESOLVED_HANDLE

    edge = Edge(
        id=raw.id or f"{source.id}_{target.id}_{index}",
        source=source.id,
        target=target.id,
        source_handle=source_handle,
        target_handle=target_handle,
    )
    return edge, None


def resolve(raw_edges: Any, nodes: Sequence[Node]) -> EdgeResolution:
    """
    Resolve raw edges against normalized nodes.

    Args:
        raw_edges: Sequence of raw edge records (anything else counts as empty)
        nodes: Normalized nodes

    Returns:
        EdgeResolution with validated edges and dropped-edge diagnostics
    """
    result = EdgeResolution()
    if not isinstance(raw_edges, (list, tuple)):
        return result

    nodes_by_id: Dict[str, Node] = {node.id: node for node in nodes}
    for index, raw_edge in enumerate(raw_edges):
        edge, reason = resolve_edge(raw_edge, nodes_by_id, index)
        if edge is None:
            result.dropped.append(DroppedEdge(index=index, reason=reason, raw=raw_edge))
            logger.debug(f"Dropped edge #{index}: {reason.value}")
            continue
        result.edges.append(edge)

    if result.dropped:
        logger.warning(
            f"Edge resolver dropped {result.dropped_count} of {len(raw_edges)} edge(s)"
        )
    return result
