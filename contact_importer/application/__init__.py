"""Application layer for the contact importer.

This layer contains the analysis and transfer use cases together with the
ports (interfaces) their external dependencies implement.
"""

from .models import (
    AnalyzeRequest,
    AnalyzeResponse,
    ChunkResult,
    TransferRequest,
    TransferSummary,
)

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "ChunkResult",
    "TransferRequest",
    "TransferSummary",
]
