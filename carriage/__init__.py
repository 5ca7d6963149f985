from __future__ import annotations

from .line_buffer import render

__version__ = "0.1.0"

__all__ = ["render", "__version__"]
