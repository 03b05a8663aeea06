"""
Logging infrastructure.
"""

from .setup import setup_logging

__all__ = ["setup_logging"]
