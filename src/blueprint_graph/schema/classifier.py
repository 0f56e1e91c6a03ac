# -*- coding: utf-8 -*-
"""
Classifier - Decide which pin contract a raw node must satisfy.

This is the only place labels and declared kinds are interpreted.
Precedence, first match wins:

1. Explicit kind: Event/InputEvent, VariableSet and VariableGet pick
   their own contract. Function, Macro and FlowControl name no
   contract and fall through to the label rules, so a "ForEach Loop"
   declared as a macro still gets its loop pins.
2. Exact label: "Branch", "If", "Sequence", "For Loop", "ForEach Loop".
3. Label prefix: "Set " is a variable setter; "Event", "On " and
   "Input" are events.
4. Generic node, pure when the label matches PURE_PREFIXES or
   contains one of PURE_FRAGMENTS, impure otherwise.
"""
from enum import Enum
from typing import Optional

from ..core.node import NodeKind
from .raw import RawNode


class NodeCategory(str, Enum):
    """Closed set of pin contracts."""
    BRANCH = "branch"
    SEQUENCE = "sequence"
    LOOP = "loop"
    EVENT = "event"
    VARIABLE_SET = "variable_set"
    VARIABLE_GET = "variable_get"
    GENERIC_IMPURE = "generic_impure"
    GENERIC_PURE = "generic_pure"


BRANCH_LABELS = frozenset({"Branch", "If"})
SEQUENCE_LABELS = frozenset({"Sequence"})
LOOP_LABELS = frozenset({"For Loop", "ForEach Loop"})

SETTER_PREFIXES = ("Set ",)
EVENT_PREFIXES = ("Event", "On ", "Input")

PURE_PREFIXES = ("Get ", "Make ", "Break ", "Is ", "Find ", "Select ")
PURE_FRAGMENTS = ("Math", "+", "-")

_KIND_CATEGORIES = {
    NodeKind.EVENT: NodeCategory.EVENT,
    NodeKind.INPUT_EVENT: NodeCategory.EVENT,
    NodeKind.VARIABLE_SET: NodeCategory.VARIABLE_SET,
    NodeKind.VARIABLE_GET: NodeCategory.VARIABLE_GET,
}

_DEFAULT_KINDS = {
    NodeCategory.BRANCH: NodeKind.FLOW_CONTROL,
    NodeCategory.SEQUENCE: NodeKind.FLOW_CONTROL,
    NodeCategory.LOOP: NodeKind.FLOW_CONTROL,
    NodeCategory.EVENT: NodeKind.EVENT,
    NodeCategory.VARIABLE_SET: NodeKind.VARIABLE_SET,
    NodeCategory.VARIABLE_GET: NodeKind.VARIABLE_GET,
    NodeCategory.GENERIC_IMPURE: NodeKind.FUNCTION,
    NodeCategory.GENERIC_PURE: NodeKind.FUNCTION,
}


def is_pure_label(label: str) -> bool:
    """Check the label against the pure-node keyword list."""
    return label.startswith(PURE_PREFIXES) or any(
        fragment in label for fragment in PURE_FRAGMENTS
    )


def _classify_generic(label: str) -> NodeCategory:
    if is_pure_label(label):
        return NodeCategory.GENERIC_PURE
    return NodeCategory.GENERIC_IMPURE


def _classify_label(label: str) -> Optional[NodeCategory]:
    if label in BRANCH_LABELS:
        return NodeCategory.BRANCH
    if label in SEQUENCE_LABELS:
        return NodeCategory.SEQUENCE
    if label in LOOP_LABELS:
        return NodeCategory.LOOP
    if label.startswith(SETTER_PREFIXES):
        return NodeCategory.VARIABLE_SET
    if label.startswith(EVENT_PREFIXES):
        return NodeCategory.EVENT
    return None


def classify(raw: RawNode) -> NodeCategory:
    """
    Classify a raw node into its pin contract.

    Args:
        raw: Validated raw node record

    Returns:
        The node's category
    """
    if raw.kind in _KIND_CATEGORIES:
        return _KIND_CATEGORIES[raw.kind]
    return _classify_label(raw.label) or _classify_generic(raw.label)


def default_kind(category: NodeCategory) -> NodeKind:
    """Kind stored on a node whose record did not declare one."""
    return _DEFAULT_KINDS[category]
