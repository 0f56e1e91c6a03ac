# -*- coding: utf-8 -*-
"""
Automatic layered layout.
"""

from .engine import layout, compute_ranks

__all__ = ["layout", "compute_ranks"]
