# -*- coding: utf-8 -*-
"""
Generation results - Read generator output and build positioned blueprints.
"""

from .payload import RawBlueprint, parse_blueprint_payload
from .pipeline import build_blueprint, load_raw_blueprint

__all__ = [
    "RawBlueprint",
    "parse_blueprint_payload",
    "build_blueprint",
    "load_raw_blueprint",
]
