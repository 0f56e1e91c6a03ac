# -*- coding: utf-8 -*-
"""
Pins - Typed input/output pins owned by a node.

Pin Types:
    EXEC - Flow control (drives execution order)
    BOOLEAN, INTEGER, FLOAT, STRING, VECTOR, ROTATOR, OBJECT,
    CLASS, STRUCT, BYTE, NAME, TEXT, DELEGATE - Data types

Example:
    exec_pin = Pin(id="Branch1_Exec", name="Exec", type=PinType.EXEC)
    cond_pin = Pin(id="Branch1_Condition", name="Condition", type=PinType.BOOLEAN)
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PinType(str, Enum):
    """
    Pin data types.

    Values are the lower-case names used on the wire by the generator.
    """
    EXEC = "exec"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    VECTOR = "vector"
    ROTATOR = "rotator"
    OBJECT = "object"
    CLASS = "class"
    STRUCT = "struct"
    BYTE = "byte"
    NAME = "name"
    TEXT = "text"
    DELEGATE = "delegate"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI."""
        return self.value.capitalize()

    @property
    def is_exec(self) -> bool:
        return self is PinType.EXEC


class Pin(BaseModel):
    """
    A single pin on a node.

    Attributes:
        id: Handle used by edges, unique within the owning node
        name: Display name (e.g. "Condition", "Then 0")
        type: Pin type
        is_output: True for pins listed in the node's outputs
        value: User-editable literal value for unconnected inputs
    """
    id: str
    name: str
    type: PinType = PinType.OBJECT
    is_output: bool = False
    value: Optional[str] = None

    @property
    def is_exec(self) -> bool:
        """Check if this is a control-flow pin."""
        return self.type is PinType.EXEC

    def to_dict(self) -> dict:
        """Serialize to the generator's wire form."""
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "isOutput": self.is_output,
        }
        if self.value is not None:
            data["value"] = self.value
        return data

    def __repr__(self) -> str:
        direction = "out" if self.is_output else "in"
        return f"<Pin {self.id} {self.type.value} {direction}>"
