# -*- coding: utf-8 -*-
"""
Schema repair - Normalize untrusted nodes and resolve their edges.
"""

from .raw import RawPin, RawNode, RawEdge
from .classifier import NodeCategory, classify
from .normalizer import normalize, normalize_nodes
from .resolver import EdgeResolution, resolve, resolve_edge

__all__ = [
    "RawPin",
    "RawNode",
    "RawEdge",
    "NodeCategory",
    "classify",
    "normalize",
    "normalize_nodes",
    "EdgeResolution",
    "resolve",
    "resolve_edge",
]
