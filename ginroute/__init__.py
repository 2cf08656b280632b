"""Radix-tree HTTP route matching (``tree``) and small routing helpers (``utils``)."""

__version__ = "1.4.0.dev0"
__all__ = ["tree", "utils"]