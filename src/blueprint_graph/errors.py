# -*- coding: utf-8 -*-
"""
Errors raised by blueprint_graph.

The core stages (normalize, resolve, layout) never raise; only the
boundary that reads generator text does.
"""


class BlueprintGraphError(Exception):
    """Base class for package errors."""


class BlueprintPayloadError(BlueprintGraphError, ValueError):
    """Generator output could not be read as a graph description."""
