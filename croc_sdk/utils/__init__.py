"""Utility functions for quantities and transactions"""

from .token import to_display_qty, from_display_qty

__all__ = [
    "to_display_qty",
    "from_display_qty",
]
