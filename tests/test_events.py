import pytest
from blueprint_graph.events import ObserverEvent

def test_observer_subscribe_emit():
    event = ObserverEvent("GraphChanged")
    results = []

    def callback(action, payload):
        results.append((action, payload))

    event.connect(callback)
    event.emit("connect", "edge-1")

    assert results == [("connect", "edge-1")]

def test_observer_connect_is_idempotent():
    event = ObserverEvent("GraphChanged")
    callback = lambda *args: None

    event.connect(callback)
    event.connect(callback)

    assert len(event) == 1

def test_observer_disconnect():
    event = ObserverEvent("GraphChanged")
    results = []

    def callback():
        results.append(1)

    event.connect(callback)
    event.disconnect(callback)
    event.disconnect(callback)
    event.emit()

    assert len(results) == 0
    assert len(event) == 0

def test_observer_error_safety(log_messages):
    """Ensure error in one subscriber doesnt block others"""
    event = ObserverEvent("err_evt")
    results = []

    def buggy_callback():
        raise ValueError("Bug")

    def worker_callback():
        results.append("ok")

    event.connect(buggy_callback)
    event.connect(worker_callback)

    event.emit()

    assert results == ["ok"]
    assert any("Bug" in message for message in log_messages)

def test_subscriber_may_disconnect_during_emit():
    event = ObserverEvent("GraphChanged")
    results = []

    def once():
        results.append("once")
        event.disconnect(once)

    event.connect(once)
    event.emit()
    event.emit()

    assert results == ["once"]
