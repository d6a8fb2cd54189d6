"""
Utility functions module
Contains helper functions for logging setup and log shortcuts
"""

from .helpers import (
    setup_logging,
    log_info,
    log_warn,
    log_error,
)

__all__ = [
    "setup_logging",
    "log_info",
    "log_warn",
    "log_error",
]
