"""Validation of mapped rows before they are stored."""

from .common_rules import COMMON_RULES
from .validator import DataValidator, matches_type

__all__ = ["COMMON_RULES", "DataValidator", "matches_type"]
