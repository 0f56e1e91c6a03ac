# -*- coding: utf-8 -*-
"""
Node - Structurally valid blueprint node.

A node owns two ordered pin lists. Whether it takes part in control
flow is derived from its pins: a node without any Exec pin is "pure".

Example:
    node = Node(
        id="Print1",
        label="Print String",
        kind=NodeKind.FUNCTION,
        inputs=[Pin(id="Print1_Exec", name="Exec", type=PinType.EXEC)],
        outputs=[Pin(id="Print1_Output", name="Output", type=PinType.EXEC, is_output=True)],
    )
    assert not node.is_pure
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .pins import Pin


class NodeKind(str, Enum):
    """Node categories as declared by the generator."""
    EVENT = "event"
    INPUT_EVENT = "input_event"
    FUNCTION = "function"
    MACRO = "macro"
    VARIABLE_GET = "variable_get"
    VARIABLE_SET = "variable_set"
    FLOW_CONTROL = "flow_control"


EVENT_KINDS = frozenset({NodeKind.EVENT, NodeKind.INPUT_EVENT})


class Node(BaseModel):
    """
    Blueprint node.

    Attributes:
        id: Unique node identifier (arena key)
        label: Display title, also used for classification
        kind: Node category
        inputs: Ordered input pins
        outputs: Ordered output pins
        comment: Optional free-form comment bubble
    """
    id: str
    label: str = ""
    kind: NodeKind = NodeKind.FUNCTION
    inputs: List[Pin] = Field(default_factory=list)
    outputs: List[Pin] = Field(default_factory=list)
    comment: Optional[str] = None

    @property
    def is_pure(self) -> bool:
        """True if neither side has an Exec pin."""
        return not any(pin.is_exec for pin in self.inputs + self.outputs)

    @property
    def is_event(self) -> bool:
        return self.kind in EVENT_KINDS

    def get_input_pin(self, pin_id: str) -> Optional[Pin]:
        """Get an input pin by id."""
        return next((pin for pin in self.inputs if pin.id == pin_id), None)

    def get_output_pin(self, pin_id: str) -> Optional[Pin]:
        """Get an output pin by id."""
        return next((pin for pin in self.outputs if pin.id == pin_id), None)

    def get_pin(self, pin_id: str) -> Optional[Pin]:
        return self.get_input_pin(pin_id) or self.get_output_pin(pin_id)

    def to_dict(self) -> dict:
        """
        Serialize node to the generator's wire form.

        Returns:
            Dictionary with camelCase keys
        """
        data = {
            "id": self.id,
            "label": self.label,
            "nodeType": self.kind.value,
            "inputs": [pin.to_dict() for pin in self.inputs],
            "outputs": [pin.to_dict() for pin in self.outputs],
        }
        if self.comment is not None:
            data["comment"] = self.comment
        return data

    def __repr__(self) -> str:
        return f"<Node {self.id} '{self.label}' {self.kind.value}>"


class PositionedNode(Node):
    """
    Node with a canvas position.

    Produced by the layout engine. Position is derived state and can
    always be recomputed from the graph structure.
    """
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def place(cls, node: Node, x: float, y: float) -> 'PositionedNode':
        """Copy ``node`` with the given position."""
        data = node.model_dump(exclude={"x", "y"})
        return cls(**data, x=x, y=y)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["position"] = {"x": self.x, "y": self.y}
        return data
