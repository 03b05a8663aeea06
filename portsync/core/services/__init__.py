"""
Core services implementing port extraction and reconciliation.
"""

from .extractor import PortSetExtractor, FORWARDABLE_HOST_IPS
from .reconciler import Reconciler, ReconcilerState, DEFAULT_POLL_INTERVAL

__all__ = [
    "PortSetExtractor",
    "FORWARDABLE_HOST_IPS",
    "Reconciler",
    "ReconcilerState",
    "DEFAULT_POLL_INTERVAL",
]
