"""
Application layer: component assembly and lifecycle control.
"""

from .lifecycle import LifecycleController, ShutdownReason, ShutdownReport
from .startup import ApplicationStartup

__all__ = [
    "LifecycleController",
    "ShutdownReason",
    "ShutdownReport",
    "ApplicationStartup",
]
