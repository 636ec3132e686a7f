"""Port interfaces for external dependencies.

This module defines the protocols that infrastructure adapters implement,
so use cases can be wired with real or test doubles.
"""

from .repositories import RowSourcePort, StoragePort, TargetCatalogPort
from .services import LoggerPort, MappingHintPort

__all__ = [
    "LoggerPort",
    "MappingHintPort",
    "RowSourcePort",
    "StoragePort",
    "TargetCatalogPort",
]
