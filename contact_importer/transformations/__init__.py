"""Value transformation framework.

Transformers rewrite single mapped values (dates, booleans, phones, ...)
before validation. They are addressed by the tag a field mapping carries.
"""

from .base import ValueTransformerPort, ValueTransformResult
from .values import (
    CONCATENATE_WITH_EXISTING,
    NORMALIZE_EMAIL,
    NORMALIZE_PHONE,
    PARSE_DATE,
    STRING_TO_BOOLEAN,
    STRING_TO_UUID,
    TRIM_STRING,
    apply_transformation,
    format_phone_number,
    known_transformations,
)

__all__ = [
    "CONCATENATE_WITH_EXISTING",
    "NORMALIZE_EMAIL",
    "NORMALIZE_PHONE",
    "PARSE_DATE",
    "STRING_TO_BOOLEAN",
    "STRING_TO_UUID",
    "TRIM_STRING",
    "ValueTransformResult",
    "ValueTransformerPort",
    "apply_transformation",
    "format_phone_number",
    "known_transformations",
]
