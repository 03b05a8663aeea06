"""
Tunnel process management.
"""

from .process import SSHTunnelProcessProvider
from .supervisor import TunnelSupervisor, DEFAULT_MANAGEMENT_PORT

__all__ = [
    "SSHTunnelProcessProvider",
    "TunnelSupervisor",
    "DEFAULT_MANAGEMENT_PORT",
]
