"""
Blueprint Graph - Repair and lay out generated visual-scripting graphs.

Turns loosely structured node/edge descriptions produced by an
automated generator into a structurally valid, positioned graph:

- Schema normalizer: category-specific pin contracts
- Edge resolver: maps declared handles onto real pins
- Layout engine: longest-path ranking + barycenter ordering

Usage:
    from blueprint_graph import build_blueprint

    blueprint = build_blueprint(response_text)
    for node in blueprint.nodes:
        print(node.label, node.x, node.y)
"""

__version__ = "0.1.0"

from blueprint_graph.core import (
    PinType,
    Pin,
    NodeKind,
    Node,
    PositionedNode,
    Edge,
    DroppedEdge,
    Blueprint,
    BlueprintGraph,
)
from blueprint_graph.schema import normalize, normalize_nodes, resolve, classify, NodeCategory
from blueprint_graph.layout import layout, compute_ranks
from blueprint_graph.generation import build_blueprint, parse_blueprint_payload
from blueprint_graph.config import ConfigManager, AppConfig, LayoutSettings, GeneralSettings
from blueprint_graph.errors import BlueprintGraphError, BlueprintPayloadError
from blueprint_graph.events import ObserverEvent
from blueprint_graph.logging import setup_logging

__all__ = [
    "PinType",
    "Pin",
    "NodeKind",
    "Node",
    "PositionedNode",
    "Edge",
    "DroppedEdge",
    "Blueprint",
    "BlueprintGraph",
    "normalize",
    "normalize_nodes",
    "resolve",
    "classify",
    "NodeCategory",
    "layout",
    "compute_ranks",
    "build_blueprint",
    "parse_blueprint_payload",
    "ConfigManager",
    "AppConfig",
    "LayoutSettings",
    "GeneralSettings",
    "BlueprintGraphError",
    "BlueprintPayloadError",
    "ObserverEvent",
    "setup_logging",
]
