"""
Configuration management for portsync.
"""

from .models import ApplicationConfig, MachineConfig, ReconcilerConfig, LoggingConfig
from .loader import ConfigLoader

__all__ = [
    "ApplicationConfig",
    "MachineConfig",
    "ReconcilerConfig",
    "LoggingConfig",
    "ConfigLoader",
]
