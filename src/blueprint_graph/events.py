# -*- coding: utf-8 -*-
"""
Observer events - Minimal synchronous pub/sub.

Used by the config manager and the editor graph to notify listeners
(typically the rendering collaborator) about changes.

Example:
    changed = ObserverEvent("GraphChanged")
    changed.connect(lambda action, payload: print(action))
    changed.emit("connect", edge)
"""
from typing import Callable, List

from loguru import logger


class ObserverEvent:
    def __init__(self, name: str):
        self.name = name
        self._subscribers: List[Callable] = []

    def connect(self, callback: Callable):
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def disconnect(self, callback: Callable):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def emit(self, *args, **kwargs):
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Event '{self.name}' error in subscriber '{sub}': {e}")

    def __len__(self) -> int:
        return len(self._subscribers)
