# -*- coding: utf-8 -*-
"""
Shared fixtures for blueprint_graph tests.

Raw graph descriptions are written the way the generator emits them:
camelCase keys, lower-case enum values, pins frequently missing.
"""
import pytest
from loguru import logger


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def branch_graph():
    """
    Event -> Branch -> {True: FuncB, False: FuncC}.

    The Branch and both functions declare no pins at all.
    """
    return {
        "nodes": [
            {
                "id": "Event1",
                "label": "Event BeginPlay",
                "nodeType": "event",
                "inputs": [],
                "outputs": [{"id": "Event1_Output", "name": "Output", "type": "exec"}],
            },
            {"id": "Branch1", "label": "Branch", "nodeType": "flow_control"},
            {"id": "FuncB", "label": "Print Hello", "nodeType": "function"},
            {"id": "FuncC", "label": "Print Goodbye", "nodeType": "function"},
        ],
        "edges": [
            {"source": "Event1", "target": "Branch1", "sourceHandle": "Event1_Output"},
            {"source": "Branch1", "target": "FuncB", "sourceHandle": "Branch1_True"},
            {"source": "Branch1", "target": "FuncC", "sourceHandle": "Branch1_False"},
        ],
        "summary": "- Branch on begin play",
        "targetClass": "BP_Player",
    }


@pytest.fixture
def print_node_raw():
    """Impure function node with one data input and a literal value."""
    return {
        "id": "Print1",
        "label": "Print String",
        "nodeType": "function",
        "inputs": [
            {"id": "Print1_InString", "name": "In String", "type": "string", "defaultValue": "Hello"},
        ],
        "outputs": [],
    }
