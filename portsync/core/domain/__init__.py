"""
Domain models for container ports and forwarded port sets.
"""

from .containers import ContainerRecord, NetworkSettings, PortBinding
from .ports import ForwardedPortSet, PortMapping, has_changed

__all__ = [
    "ContainerRecord",
    "NetworkSettings",
    "PortBinding",
    "ForwardedPortSet",
    "PortMapping",
    "has_changed",
]
