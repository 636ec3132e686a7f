"""Application-level exceptions raised around the batch transfer.

Storage and row-source failures are recoverable per chunk: the transfer
records them on the chunk result and moves on to the next chunk.
"""


class TransferError(Exception):
    """Base exception for batch transfer failures."""


class StorageError(TransferError):
    """Raised by storage adapters when an insert or query fails."""

    def __init__(self, message: str, *, table: str | None = None) -> None:
        self.table = table
        super().__init__(message)


class RowSourceError(TransferError):
    """Raised by row sources when rows cannot be counted or fetched."""
