"""Value-shape predicates shared by the engine, inferencer and validator."""

from datetime import date, datetime
import math
import re
from urllib.parse import urlparse
import warnings

import pandas as pd

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
NAME_PATTERN = re.compile(r"^[a-zA-Zа-яА-ЯёЁ\s\-']+$")
COMPANY_PATTERN = re.compile(r"^[a-zA-Zа-яА-ЯёЁ0-9\s\-.&,()]+$")
_NON_DIGIT_RE = re.compile(r"\D")
_NUMERIC_NOISE_RE = re.compile(r"[\s\-+()]")

MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50

BOOLEAN_KEYWORDS: frozenset[str] = frozenset(
    {"true", "false", "1", "0", "yes", "no", "да", "нет", "on", "off"}
)


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def digits_only(value: str) -> str:
    return _NON_DIGIT_RE.sub("", value)


def is_valid_email(value: object) -> bool:
    return isinstance(value, str) and bool(EMAIL_PATTERN.search(value.strip()))


def is_valid_phone(value: object) -> bool:
    if not isinstance(value, str):
        return False
    return MIN_PHONE_DIGITS <= len(digits_only(value)) <= MAX_PHONE_DIGITS


def is_valid_name(value: object) -> bool:
    if not isinstance(value, str):
        return False
    if not MIN_NAME_LENGTH <= len(value) <= MAX_NAME_LENGTH:
        return False
    return (
        bool(NAME_PATTERN.search(value))
        and not is_valid_email(value)
        and not is_valid_phone(value)
    )


def is_valid_company_name(value: object) -> bool:
    if not isinstance(value, str) or len(value) < MIN_NAME_LENGTH:
        return False
    if is_valid_email(value) or is_valid_phone(value):
        return False
    return bool(COMPANY_PATTERN.search(value))


def is_valid_uuid(value: object) -> bool:
    return isinstance(value, str) and bool(UUID_PATTERN.search(value.strip()))


def is_valid_url(value: object) -> bool:
    """Absolute URL check: a scheme plus a host or path."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def looks_like_url(value: object) -> bool:
    """Lenient URL check used by validation rules."""
    if is_valid_url(value):
        return True
    return isinstance(value, str) and ("://" in value or "www." in value)


def parse_timestamp(value: object) -> pd.Timestamp | None:
    if isinstance(value, bool) or is_blank(value):
        return None
    if not isinstance(value, (str, date, datetime, pd.Timestamp)):
        return None
    # pandas resolves "now" and "today" against the clock
    if isinstance(value, str) and not any(ch.isdigit() for ch in value):
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(value, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed


def is_valid_date(value: object) -> bool:
    return parse_timestamp(value) is not None


def is_number_like(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return not (isinstance(value, float) and math.isnan(value))
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        number = float(value.strip())
    except ValueError:
        return False
    return not math.isnan(number)


def is_number_coercible(value: object) -> bool:
    """Numbers, or strings that are numeric once spaces, signs and brackets go."""
    if isinstance(value, str):
        return is_number_like(_NUMERIC_NOISE_RE.sub("", value))
    return is_number_like(value)


def is_boolean_keyword(value: object) -> bool:
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value.strip().lower() in BOOLEAN_KEYWORDS
