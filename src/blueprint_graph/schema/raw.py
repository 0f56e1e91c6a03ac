# -*- coding: utf-8 -*-
"""
Raw Schema - Tolerant models for untrusted graph descriptions.

The generator is free to omit fields, change key casing
(``nodeType`` / ``node_type`` / ``NodeType``) or send scalars of the
wrong type. These models accept all of that, fill what they can and
leave the rest as ``None`` for the normalizer to default.

Nothing here assumes a structurally valid graph.

Example:
    raw = RawNode.model_validate({"Label": "Branch", "NodeType": "FLOW_CONTROL"})
    assert raw.label == "Branch"
    assert raw.kind is NodeKind.FLOW_CONTROL
"""
import re
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.node import NodeKind
from ..core.pins import PinType


def fold_key(key: Any) -> str:
    """Fold a key or enum token: lower-case, no spaces, underscores or dashes."""
    return re.sub(r"[\s_\-]", "", str(key)).lower()


def as_text(value: Any, strip: bool = True) -> Optional[str]:
    """
    Coerce a scalar to text.

    Returns None for missing values, blank strings and non-scalars
    (lists, mappings) that cannot serve as an id or label.
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, (str, int, float, bool)):
        return None
    text = str(value)
    if strip:
        text = text.strip()
    return text or None


_PIN_TYPES: Dict[str, PinType] = {}
for _pin_type in PinType:
    _PIN_TYPES[fold_key(_pin_type.value)] = _pin_type
    _PIN_TYPES[fold_key(_pin_type.name)] = _pin_type
_PIN_TYPES["execution"] = PinType.EXEC
_PIN_TYPES["bool"] = PinType.BOOLEAN
_PIN_TYPES["int"] = PinType.INTEGER

_NODE_KINDS: Dict[str, NodeKind] = {}
for _kind in NodeKind:
    _NODE_KINDS[fold_key(_kind.value)] = _kind


def parse_pin_type(value: Any) -> PinType:
    """Match a pin type case-insensitively; unknown types become Object."""
    if isinstance(value, PinType):
        return value
    token = as_text(value)
    if token is None:
        return PinType.OBJECT
    return _PIN_TYPES.get(fold_key(token), PinType.OBJECT)


def parse_node_kind(value: Any) -> Optional[NodeKind]:
    """Match a node kind; unknown kinds are treated as absent."""
    if isinstance(value, NodeKind):
        return value
    token = as_text(value)
    if token is None:
        return None
    return _NODE_KINDS.get(fold_key(token))


def _mapping_items(value: Any) -> List[Any]:
    """Keep only record-like entries of a list; anything else is empty."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (Mapping, BaseModel))]


class RawModel(BaseModel):
    """
    Base for tolerant input records.

    Keys are matched after folding, so ``sourceHandle``,
    ``source_handle`` and ``SourceHandle`` all land on the same field.
    Subclasses list extra spellings in ``key_aliases``.
    """
    model_config = ConfigDict(extra="ignore")

    key_aliases: ClassVar[Dict[str, str]] = {}

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            data = data.model_dump()
        if not isinstance(data, Mapping):
            raise ValueError(f"Expected a record, got {type(data).__name__}")

        direct = {fold_key(name): name for name in cls.model_fields}
        folded: Dict[str, Any] = {}
        # Exact field spellings win over aliases
        for key, value in data.items():
            field = direct.get(fold_key(key))
            if field and field not in folded:
                folded[field] = value
        for key, value in data.items():
            field = cls.key_aliases.get(fold_key(key))
            if field and field not in folded:
                folded[field] = value
        return folded


class RawPin(RawModel):
    """Untrusted pin record."""
    id: Optional[str] = None
    name: Optional[str] = None
    type: PinType = PinType.OBJECT
    value: Optional[str] = None

    key_aliases: ClassVar[Dict[str, str]] = {
        "pinid": "id",
        "pinname": "name",
        "label": "name",
        "pintype": "type",
        "defaultvalue": "value",
        "default": "value",
    }

    @field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return as_text(value)

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, (list, tuple, Mapping)):
            return str(value)
        return as_text(value, strip=False)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> PinType:
        return parse_pin_type(value)


class RawNode(RawModel):
    """Untrusted node record."""
    id: Optional[str] = None
    label: str = ""
    kind: Optional[NodeKind] = None
    inputs: List[RawPin] = Field(default_factory=list)
    outputs: List[RawPin] = Field(default_factory=list)
    comment: Optional[str] = None

    key_aliases: ClassVar[Dict[str, str]] = {
        "nodeid": "id",
        "nodetype": "kind",
        "category": "kind",
        "title": "label",
        "name": "label",
        "inputpins": "inputs",
        "outputpins": "outputs",
    }

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Optional[str]:
        return as_text(value)

    @field_validator("label", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> str:
        return as_text(value) or ""

    @field_validator("comment", mode="before")
    @classmethod
    def _coerce_comment(cls, value: Any) -> Optional[str]:
        return as_text(value, strip=False)

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> Optional[NodeKind]:
        return parse_node_kind(value)

    @field_validator("inputs", "outputs", mode="before")
    @classmethod
    def _coerce_pins(cls, value: Any) -> List[Any]:
        return _mapping_items(value)


class RawEdge(RawModel):
    """Untrusted connection record."""
    id: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None

    key_aliases: ClassVar[Dict[str, str]] = {
        "edgeid": "id",
        "from": "source",
        "to": "target",
        "sourcepin": "source_handle",
        "targetpin": "target_handle",
    }

    @field_validator("id", "source", "target", "source_handle", "target_handle", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return as_text(value)


class RawVariable(RawModel):
    """Untrusted blueprint variable record."""
    id: Optional[str] = None
    name: Optional[str] = None
    type: PinType = PinType.OBJECT
    default_value: Optional[str] = None

    key_aliases: ClassVar[Dict[str, str]] = {
        "value": "default_value",
        "default": "default_value",
        "vartype": "type",
    }

    @field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return as_text(value)

    @field_validator("default_value", mode="before")
    @classmethod
    def _coerce_default(cls, value: Any) -> Optional[str]:
        return as_text(value, strip=False)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> PinType:
        return parse_pin_type(value)


class RawFunction(RawModel):
    """Untrusted blueprint function signature record."""
    id: Optional[str] = None
    name: Optional[str] = None
    inputs: List[RawPin] = Field(default_factory=list)
    outputs: List[RawPin] = Field(default_factory=list)

    @field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return as_text(value)

    @field_validator("inputs", "outputs", mode="before")
    @classmethod
    def _coerce_pins(cls, value: Any) -> List[Any]:
        return _mapping_items(value)
