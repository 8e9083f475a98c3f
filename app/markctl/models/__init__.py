"""Data models for markctl.

This module exports the value types shared by the store and the area.
"""

from markctl.models.mark import Mark

__all__ = ["Mark"]
