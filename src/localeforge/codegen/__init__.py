"""Source generation for unified locale sets.

Python 3.13+.
"""

from .emitter import emit_python_module, python_identifier

__all__ = ["emit_python_module", "python_identifier"]
