"""Tag-addressed value transformers applied by the validation pipeline.

Each mapping may carry a transformation tag. The tags and their effect:

- ``parse_date``: any parseable date becomes an ISO 8601 UTC timestamp
- ``string_to_boolean``: yes/no keywords (English and Russian) become bools
- ``string_to_uuid``: a valid UUID passes through, anything else becomes None
- ``normalize_phone``: Russian numbers become ``+7XXXXXXXXXX``
- ``normalize_email``: trimmed and lower-cased
- ``trim_string``: surrounding whitespace removed
- ``concatenate_with_existing``: appended to the field's current value

Unknown tags and ``None`` values pass through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from types import MappingProxyType

from ..constants import Defaults, TransformationTags
from ..domain.services.value_checks import (
    UUID_PATTERN,
    digits_only,
    is_blank,
    parse_timestamp,
)
from .base import ValueTransformerPort, ValueTransformResult

PARSE_DATE = TransformationTags.PARSE_DATE
STRING_TO_BOOLEAN = TransformationTags.STRING_TO_BOOLEAN
STRING_TO_UUID = TransformationTags.STRING_TO_UUID
NORMALIZE_PHONE = TransformationTags.NORMALIZE_PHONE
NORMALIZE_EMAIL = TransformationTags.NORMALIZE_EMAIL
TRIM_STRING = TransformationTags.TRIM_STRING
CONCATENATE_WITH_EXISTING = TransformationTags.CONCATENATE_WITH_EXISTING

TRUE_KEYWORDS = frozenset({"true", "yes", "1", "да", "истина", "on", "y"})
FALSE_KEYWORDS = frozenset({"false", "no", "0", "нет", "ложь", "off", "n"})

CONCAT_SEPARATOR = " | "
RUSSIAN_COUNTRY_CODE = "7"


def parse_date(value: object, existing: object = None) -> ValueTransformResult:
    _ = existing
    timestamp = parse_timestamp(value)
    if timestamp is None:
        return ValueTransformResult.unchanged(value, "unparseable date")
    if timestamp.tzinfo is None:
        timestamp = timestamp.tz_localize("UTC")
    else:
        timestamp = timestamp.tz_convert("UTC")
    return ValueTransformResult(value=timestamp.isoformat())


def string_to_boolean(value: object, existing: object = None) -> ValueTransformResult:
    _ = existing
    if isinstance(value, bool):
        return ValueTransformResult(value=value)
    if not isinstance(value, str):
        return ValueTransformResult.unchanged(value, "not a string")
    keyword = value.strip().lower()
    if keyword in TRUE_KEYWORDS:
        return ValueTransformResult(value=True)
    if keyword in FALSE_KEYWORDS:
        return ValueTransformResult(value=False)
    return ValueTransformResult.unchanged(value, "not a boolean keyword")


def string_to_uuid(value: object, existing: object = None) -> ValueTransformResult:
    _ = existing
    if not isinstance(value, str):
        return ValueTransformResult.unchanged(value, "not a string")
    candidate = value.strip()
    if UUID_PATTERN.match(candidate):
        return ValueTransformResult(value=candidate)
    return ValueTransformResult(value=None, message="not a UUID")


def normalize_phone(value: object, existing: object = None) -> ValueTransformResult:
    """Normalize Russian phone numbers to ``+7`` followed by ten digits.

    ``8XXXXXXXXXX`` and ``7XXXXXXXXXX`` (11 digits) and bare ten-digit
    numbers are rewritten; anything else is returned unchanged.
    """
    _ = existing
    if not isinstance(value, str):
        return ValueTransformResult.unchanged(value, "not a string")
    digits = digits_only(value)
    if len(digits) == 11 and digits[0] in ("7", "8"):
        return ValueTransformResult(value=f"+{RUSSIAN_COUNTRY_CODE}{digits[1:]}")
    if len(digits) == 10:
        return ValueTransformResult(value=f"+{RUSSIAN_COUNTRY_CODE}{digits}")
    return ValueTransformResult.unchanged(value, "unrecognized phone format")


def normalize_email(value: object, existing: object = None) -> ValueTransformResult:
    _ = existing
    if not isinstance(value, str):
        return ValueTransformResult.unchanged(value, "not a string")
    return ValueTransformResult(value=value.strip().lower())


def trim_string(value: object, existing: object = None) -> ValueTransformResult:
    _ = existing
    if not isinstance(value, str):
        return ValueTransformResult.unchanged(value, "not a string")
    return ValueTransformResult(value=value.strip())


def concatenate_with_existing(
    value: object,
    existing: object = None,
    *,
    max_length: int = Defaults.OVERFLOW_MAX_LENGTH,
) -> ValueTransformResult:
    """Append ``value`` to ``existing`` with a ``" | "`` separator.

    Text already contained in ``existing`` is not appended twice, and the
    combined text is cut at ``max_length`` characters.
    """
    text = value.strip() if isinstance(value, str) else value
    if is_blank(text):
        return ValueTransformResult.unchanged(existing if existing else value, "nothing to append")
    if not isinstance(text, str):
        text = str(text)
    if not isinstance(existing, str) or not existing.strip():
        return ValueTransformResult(value=text[:max_length])
    if text in existing:
        return ValueTransformResult.unchanged(existing, "already present")
    combined = f"{existing}{CONCAT_SEPARATOR}{text}"
    return ValueTransformResult(value=combined[:max_length])


_TRANSFORMERS: Mapping[str, ValueTransformerPort] = MappingProxyType(
    {
        PARSE_DATE: parse_date,
        STRING_TO_BOOLEAN: string_to_boolean,
        STRING_TO_UUID: string_to_uuid,
        NORMALIZE_PHONE: normalize_phone,
        NORMALIZE_EMAIL: normalize_email,
        TRIM_STRING: trim_string,
        CONCATENATE_WITH_EXISTING: concatenate_with_existing,
    }
)


def known_transformations() -> tuple[str, ...]:
    return tuple(_TRANSFORMERS)


def apply_transformation(
    value: object,
    tag: str | None,
    existing: object = None,
    *,
    max_length: int = Defaults.OVERFLOW_MAX_LENGTH,
) -> ValueTransformResult:
    """Apply the transformer registered under ``tag``.

    Args:
        value: Raw source value
        tag: Transformation tag from the field mapping, or None
        existing: Current value of the target field in the row being built
        max_length: Cap for concatenated text

    Returns:
        ValueTransformResult; unknown tags and None values are returned as-is
    """
    if value is None or tag is None:
        return ValueTransformResult.unchanged(value)
    transformer = _TRANSFORMERS.get(tag)
    if transformer is None:
        return ValueTransformResult.unchanged(value, f"unknown transformation: {tag}")
    if tag == CONCATENATE_WITH_EXISTING:
        transformer = partial(concatenate_with_existing, max_length=max_length)
    return transformer(value, existing)


def format_phone_number(value: str) -> str:
    """Format a Russian number for display as ``+7 (XXX) XXX-XX-XX``."""
    digits = digits_only(value)
    if len(digits) == 11 and digits.startswith(RUSSIAN_COUNTRY_CODE):
        digits = digits[1:]
    if len(digits) != 10:
        return value
    return f"+7 ({digits[:3]}) {digits[3:6]}-{digits[6:8]}-{digits[8:]}"
