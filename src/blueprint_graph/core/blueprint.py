# -*- coding: utf-8 -*-
"""
Blueprint - A generated graph together with its document metadata.

Besides the positioned nodes and resolved edges, a generation result
carries a point-form summary, a C++ rendition of the logic, the
suggested target class, declared variables and function signatures,
and the reference sources the generator cited.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from .edge import DroppedEdge, Edge
from .node import PositionedNode
from .pins import Pin, PinType

DEFAULT_SUMMARY = "No summary provided."
DEFAULT_CPP_CODE = "// No C++ code generated."
DEFAULT_TARGET_CLASS = "BP_GeneratedActor"


class BlueprintVariable(BaseModel):
    """Blueprint member variable."""
    id: str
    name: str
    type: PinType = PinType.OBJECT
    default_value: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"id": self.id, "name": self.name, "type": self.type.value}
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        return data


class BlueprintFunction(BaseModel):
    """Blueprint function signature."""
    id: str
    name: str
    inputs: List[Pin] = Field(default_factory=list)
    outputs: List[Pin] = Field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "inputs": [pin.to_dict() for pin in self.inputs],
            "outputs": [pin.to_dict() for pin in self.outputs],
        }


class BlueprintSource(BaseModel):
    """Reference cited by the generator."""
    title: str
    url: str


class Blueprint(BaseModel):
    """
    Normalized, resolved and positioned generation result.

    Attributes:
        nodes: Positioned nodes in declaration order
        edges: Resolved edges
        summary: Point-form description of the logic
        cpp_code: C++ rendition of the logic
        target_class: Suggested Blueprint class name
        variables: Declared member variables
        functions: Declared function signatures
        sources: Cited references
        dropped_edges: Raw edges the resolver refused
    """
    nodes: List[PositionedNode] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    summary: str = DEFAULT_SUMMARY
    cpp_code: str = DEFAULT_CPP_CODE
    target_class: str = DEFAULT_TARGET_CLASS
    variables: List[BlueprintVariable] = Field(default_factory=list)
    functions: List[BlueprintFunction] = Field(default_factory=list)
    sources: List[BlueprintSource] = Field(default_factory=list)
    dropped_edges: List[DroppedEdge] = Field(default_factory=list)

    @property
    def has_entry_point(self) -> bool:
        """True if at least one Event node can start execution."""
        return any(node.is_event for node in self.nodes)

    def get_node(self, node_id: str) -> Optional[PositionedNode]:
        return next((node for node in self.nodes if node.id == node_id), None)

    def to_dict(self) -> dict:
        """
        Serialize for the rendering collaborator.

        Returns:
            Wire form with camelCase keys
        """
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "summary": self.summary,
            "cppCode": self.cpp_code,
            "targetClass": self.target_class,
            "variables": [var.to_dict() for var in self.variables],
            "functions": [func.to_dict() for func in self.functions],
            "sources": [source.model_dump() for source in self.sources],
            "droppedEdges": [dropped.to_dict() for dropped in self.dropped_edges],
        }
