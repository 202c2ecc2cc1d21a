"""Graph analysis utilities for alias validation.

Provides cycle detection over copy/include alias graphs.

Python 3.13+.
"""

from .graph import alias_node, detect_cycles

__all__ = [
    "alias_node",
    "detect_cycles",
]
