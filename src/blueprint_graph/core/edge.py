# -*- coding: utf-8 -*-
"""
Edge - Validated connection between two pins.

An edge is directional: an output pin on ``source`` drives an input
pin on ``target``. Edges only exist in this form after the resolver
has mapped both handles onto real pins.
"""
from enum import Enum
from typing import Any

from pydantic import BaseModel


class Edge(BaseModel):
    """
    Connection between an output pin and an input pin.

    Attributes:
        id: Stable edge identifier
        source: Id of the node owning the output pin
        target: Id of the node owning the input pin
        source_handle: Id of an output pin on ``source``
        target_handle: Id of an input pin on ``target``
    """
    id: str
    source: str
    target: str
    source_handle: str
    target_handle: str

    def to_dict(self) -> dict:
        """Serialize connection to the generator's wire form."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "sourceHandle": self.source_handle,
            "targetHandle": self.target_handle,
        }

    def __repr__(self) -> str:
        return (
            f"<Edge {self.source}.{self.source_handle} -> "
            f"{self.target}.{self.target_handle}>"
        )


class DropReason(str, Enum):
    """Why the resolver refused a raw edge."""
    MALFORMED = "malformed"
    UNKNOWN_SOURCE = "unknown_source"
    UNKNOWN_TARGET = "unknown_target"
    NO_SOURCE_PINS = "no_source_pins"
    NO_TARGET_PINS = "no_target_pins"
    UNRESOLVED_HANDLE = "unresolved_handle"


class DroppedEdge(BaseModel):
    """
    Diagnostic record for an edge the resolver could not keep.

    Attributes:
        index: Position of the record in the raw edge list
        reason: Why it was dropped
        raw: The record as received
    """
    index: int
    reason: DropReason
    raw: Any = None

    def to_dict(self) -> dict:
        return {"index": self.index, "reason": self.reason.value}
