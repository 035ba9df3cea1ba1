"""
Utilities package for the paintings EDA toolkit.

Exports shared helpers for logging and profiling. Keep this package free of
domain-specific logic.
"""

from art_eda.utils.logging import configure_logging, get_logger
from art_eda.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
