# -*- coding: utf-8 -*-
"""
Schema Normalizer - Repair raw node records into valid nodes.

``normalize`` is total: any input, including garbage, yields a node
whose pins satisfy the contract of its category (see ``classifier``).
It is also idempotent, so already normalized nodes pass through
unchanged.

Pin contracts:
    Branch/If       Exec in + Boolean "Condition" in; Exec "True", "False" out
    Event           Exec out
    Sequence        Exec in; Exec "Then 0", "Then 1" out
    VariableSet     Exec in; Exec out
    VariableGet     inputs-only records are flipped to outputs; Boolean "Value" out
    For/ForEach     Exec in; Exec "Loop Body", "Completed" out
    Generic impure  Exec in; Exec out
    Generic pure    untouched

Example:
    node = normalize({"id": "B1", "label": "Branch"})
    assert [p.name for p in node.outputs] == ["True", "False"]
"""
from typing import Any, Iterable, List, Optional, Set

from loguru import logger
from pydantic import ValidationError

from ..core.blueprint import BlueprintFunction, BlueprintVariable
from ..core.node import Node
from ..core.pins import Pin, PinType
from .classifier import NodeCategory, classify, default_kind
from .raw import RawFunction, RawNode, RawPin, RawVariable

BRANCH_OUTPUTS = ("True", "False")
SEQUENCE_OUTPUTS = ("Then 0", "Then 1")
LOOP_OUTPUTS = ("Loop Body", "Completed")


def pin_id_for(node_id: str, pin_name: str) -> str:
    """Id convention for pins injected by repair."""
    return f"{node_id}_{pin_name.replace(' ', '')}"


class _PinSet:
    """
    Mutable pin lists of one node under repair.

    Tracks taken pin ids so injected pins never collide with the
    record's own pins, which edges may already reference.
    """

    def __init__(self, node_id: str):
        self.node_id = node_id
        self.inputs: List[Pin] = []
        self.outputs: List[Pin] = []
        self._taken: Set[str] = set()
        self.injected = 0

    def _claim(self, base: str) -> str:
        pin_id = base
        suffix = 2
        while pin_id in self._taken:
            pin_id = f"{base}_{suffix}"
            suffix += 1
        self._taken.add(pin_id)
        return pin_id

    def adopt(self, raw: RawPin, is_output: bool) -> Pin:
        """Turn a raw pin record into a pin with a unique id."""
        name = raw.name or raw.id or raw.type.display_name
        pin_id = self._claim(raw.id or pin_id_for(self.node_id, name))
        return Pin(id=pin_id, name=name, type=raw.type, is_output=is_output, value=raw.value)

    def new_pin(self, name: str, pin_type: PinType, is_output: bool) -> Pin:
        self.injected += 1
        return Pin(
            id=self._claim(pin_id_for(self.node_id, name)),
            name=name,
            type=pin_type,
            is_output=is_output,
        )

    @staticmethod
    def has_exec(pins: List[Pin]) -> bool:
        return any(pin.is_exec for pin in pins)

    def ensure_exec_input(self, name: str = "Exec") -> None:
        if not self.has_exec(self.inputs):
            self.inputs.insert(0, self.new_pin(name, PinType.EXEC, False))

    def ensure_exec_output(self, name: str = "Output") -> None:
        if not self.has_exec(self.outputs):
            self.outputs.insert(0, self.new_pin(name, PinType.EXEC, True))

    def ensure_typed_input(self, name: str, pin_type: PinType) -> None:
        if not any(pin.type is pin_type for pin in self.inputs):
            self.inputs.append(self.new_pin(name, pin_type, False))

    def ensure_named_exec_output(self, name: str) -> None:
        """Append an Exec output called ``name`` unless one exists (retyped to Exec)."""
        for pin in self.outputs:
            if pin.name == name:
                pin.type = PinType.EXEC
                return
        self.outputs.append(self.new_pin(name, PinType.EXEC, True))

    def keep_single_exec_input(self) -> None:
        seen = False
        kept = []
        for pin in self.inputs:
            if pin.is_exec:
                if seen:
                    continue
                seen = True
            kept.append(pin)
        self.inputs = kept

    def keep_exec_outputs(self, names: Iterable[str]) -> None:
        """Drop Exec outputs other than the first pin of each allowed name."""
        allowed = set(names)
        kept = []
        for pin in self.outputs:
            if pin.is_exec:
                if pin.name not in allowed:
                    continue
                allowed.discard(pin.name)
            kept.append(pin)
        self.outputs = kept


def _repair(pins: _PinSet, category: NodeCategory) -> None:
    if category is NodeCategory.BRANCH:
        pins.ensure_exec_input()
        pins.ensure_typed_input("Condition", PinType.BOOLEAN)
        for name in BRANCH_OUTPUTS:
            pins.ensure_named_exec_output(name)
        pins.keep_single_exec_input()
        pins.keep_exec_outputs(BRANCH_OUTPUTS)
    elif category is NodeCategory.EVENT:
        pins.ensure_exec_output()
    elif category is NodeCategory.SEQUENCE:
        pins.ensure_exec_input()
        for name in SEQUENCE_OUTPUTS:
            pins.ensure_named_exec_output(name)
    elif category is NodeCategory.VARIABLE_SET:
        pins.ensure_exec_input()
        pins.ensure_exec_output()
    elif category is NodeCategory.VARIABLE_GET:
        if pins.inputs and not pins.outputs:
            pins.outputs, pins.inputs = pins.inputs, []
        if not pins.outputs:
            pins.outputs.append(pins.new_pin("Value", PinType.BOOLEAN, True))
    elif category is NodeCategory.LOOP:
        pins.ensure_exec_input()
        for name in LOOP_OUTPUTS:
            pins.ensure_named_exec_output(name)
    elif category is NodeCategory.GENERIC_IMPURE:
        pins.ensure_exec_input()
        pins.ensure_exec_output()
    # GENERIC_PURE: data flow only, nothing to inject


def _as_raw_node(raw_node: Any) -> RawNode:
    if isinstance(raw_node, RawNode):
        return raw_node
    try:
        return RawNode.model_validate(raw_node)
    except ValidationError as e:
        logger.warning(f"Unreadable node record replaced by an empty node: {e.errors()[0]['msg']}")
        return RawNode()


def normalize(raw_node: Any, index: int = 0) -> Node:
    """
    Repair a raw node description into a structurally valid node.

    Args:
        raw_node: Mapping, RawNode or already normalized Node
        index: Position in the source list, used for a missing id

    Returns:
        Node conforming to its category's pin contract
    """
    raw = _as_raw_node(raw_node)
    node_id = raw.id or f"node_{index}"
    category = classify(raw)

    pins = _PinSet(node_id)
    pins.inputs = [pins.adopt(pin, is_output=False) for pin in raw.inputs]
    pins.outputs = [pins.adopt(pin, is_output=True) for pin in raw.outputs]
    _repair(pins, category)

    for pin in pins.inputs:
        pin.is_output = False
    for pin in pins.outputs:
        pin.is_output = True

    if pins.injected:
        logger.debug(f"Node {node_id} ({category.value}): injected {pins.injected} pin(s)")

    return Node(
        id=node_id,
        label=raw.label,
        kind=raw.kind or default_kind(category),
        inputs=pins.inputs,
        outputs=pins.outputs,
        comment=raw.comment,
    )


def normalize_nodes(raw_nodes: Any) -> List[Node]:
    """
    Normalize a sequence of raw node records.

    A record reusing an id already taken by an earlier node is
    dropped so ids stay usable as arena keys.
    """
    if not isinstance(raw_nodes, (list, tuple)):
        return []

    nodes: List[Node] = []
    seen: Set[str] = set()
    for index, raw_node in enumerate(raw_nodes):
        node = normalize(raw_node, index)
        if node.id in seen:
            logger.warning(f"Dropping node with duplicate id: {node.id}")
            continue
        seen.add(node.id)
        nodes.append(node)
    return nodes


def _validate_or_none(model, record: Any):
    try:
        return model.model_validate(record)
    except ValidationError:
        return None


def normalize_variables(raw_variables: Any) -> List[BlueprintVariable]:
    """Normalize declared blueprint variables, skipping unusable records."""
    if not isinstance(raw_variables, (list, tuple)):
        return []

    variables = []
    for index, record in enumerate(raw_variables):
        raw: Optional[RawVariable] = _validate_or_none(RawVariable, record)
        if raw is None or not (raw.id or raw.name):
            continue
        variables.append(BlueprintVariable(
            id=raw.id or f"var_{index}",
            name=raw.name or raw.id,
            type=raw.type,
            default_value=raw.default_value,
        ))
    return variables


def normalize_functions(raw_functions: Any) -> List[BlueprintFunction]:
    """Normalize declared function signatures; pins get unique ids, no contract."""
    if not isinstance(raw_functions, (list, tuple)):
        return []

    functions = []
    for index, record in enumerate(raw_functions):
        raw: Optional[RawFunction] = _validate_or_none(RawFunction, record)
        if raw is None or not (raw.id or raw.name):
            continue
        function_id = raw.id or f"func_{index}"
        pins = _PinSet(function_id)
        functions.append(BlueprintFunction(
            id=function_id,
            name=raw.name or function_id,
            inputs=[pins.adopt(pin, is_output=False) for pin in raw.inputs],
            outputs=[pins.adopt(pin, is_output=True) for pin in raw.outputs],
        ))
    return functions
