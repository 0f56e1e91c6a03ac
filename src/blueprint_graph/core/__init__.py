# -*- coding: utf-8 -*-
"""
Blueprint Graph Core - Graph model and editor container.
"""

from .pins import PinType, Pin
from .node import NodeKind, Node, PositionedNode
from .edge import Edge, DropReason, DroppedEdge
from .blueprint import Blueprint, BlueprintVariable, BlueprintFunction, BlueprintSource
from .graph import BlueprintGraph

__all__ = [
    "PinType",
    "Pin",
    "NodeKind",
    "Node",
    "PositionedNode",
    "Edge",
    "DropReason",
    "DroppedEdge",
    "Blueprint",
    "BlueprintVariable",
    "BlueprintFunction",
    "BlueprintSource",
    "BlueprintGraph",
]
