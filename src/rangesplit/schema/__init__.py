"""
Data model for rangesplit.

Provides the key, range and split value types shared across planning and
execution.
"""

from .types import (
    Key,
    ScanRange,
    OverallRange,
    Split,
    format_key,
)

__all__ = [
    "Key",
    "ScanRange",
    "OverallRange",
    "Split",
    "format_key",
]
