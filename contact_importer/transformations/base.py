"""Base interface for value transformers.

A transformer rewrites a single mapped value before it is validated. It
never raises: when a value cannot be converted it returns the original
value with ``applied=False`` so that type validation can report the problem
on the untouched input.

Example:
    Implementing a simple transformer:

    >>> from contact_importer.transformations import ValueTransformResult
    >>>
    >>> def upper_case(value: object, existing: object = None) -> ValueTransformResult:
    ...     if not isinstance(value, str):
    ...         return ValueTransformResult.unchanged(value, "not a string")
    ...     return ValueTransformResult(value=value.upper())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ValueTransformResult:
    """Result of transforming one value.

    Attributes:
        value: Transformed value, or the original one when nothing applied
        applied: Whether the transformation changed the representation
        message: Short description of why the transformation was skipped

    Example:
        >>> result = ValueTransformResult.unchanged("31.02.2024", "unparseable date")
        >>> result.applied
        False
    """

    value: object
    applied: bool = True
    message: str = ""

    @classmethod
    def unchanged(cls, value: object, message: str = "") -> ValueTransformResult:
        """Return ``value`` as-is, marked as not applied."""
        return cls(value=value, applied=False, message=message)


class ValueTransformerPort(Protocol):
    """Protocol for a tag-addressed value transformer.

    ``existing`` is the value the target field already holds in the row being
    built. Only concatenating transformers use it.
    """

    def __call__(self, value: object, existing: object = None) -> ValueTransformResult:
        """Transform ``value``."""
        ...
