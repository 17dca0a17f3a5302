"""
Runtime module: edge-stream drivers.
"""

from dirflag.runtime.driver import RandomEdgeDriver, StepResult

__all__ = [
    "RandomEdgeDriver",
    "StepResult",
]
