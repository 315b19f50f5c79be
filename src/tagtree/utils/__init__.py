"""Utility modules for tagtree.

Provides:
- logger: get_logger for logging
"""

from tagtree.utils.logger import get_logger

__all__ = ["get_logger"]
