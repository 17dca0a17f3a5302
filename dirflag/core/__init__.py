"""
Core module: slot registry.
"""

from dirflag.core.registry import SlotTable

__all__ = [
    "SlotTable",
]
