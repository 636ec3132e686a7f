"""Infrastructure layer for the contact importer.

This layer contains adapters for files, storage and console output. It
implements the ports defined in the application layer.
"""

__all__ = []
