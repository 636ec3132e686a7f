"""Presenters for CLI output formatting.

Presenters turn use case responses into rich tables and status lines.
"""

from .mapping_table import MappingPresenter
from .summary import SummaryPresenter, SummaryRequest

__all__ = ["MappingPresenter", "SummaryPresenter", "SummaryRequest"]
