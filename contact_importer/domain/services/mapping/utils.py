import re

from ....constants import ConfidenceLevels

_SEPARATOR_RE = re.compile(r"[_\s]+")
_TOKEN_SPLIT_RE = re.compile(r"[_\s\-]+")


def normalize_field_name(name: str) -> str:
    return _SEPARATOR_RE.sub("_", name.strip().lower())


def split_name_tokens(name: str) -> list[str]:
    return [token for token in _TOKEN_SPLIT_RE.split(name.lower()) if token]


def mentions_keyword(name: str, keyword: str, *, min_substring_length: int = 4) -> bool:
    """Return True when ``keyword`` appears in ``name``.

    Short keywords ("it", "hr", "тех") only count as whole tokens so that
    they do not fire inside unrelated words such as "position".
    """
    lowered = name.lower()
    if len(keyword) < min_substring_length:
        return keyword in split_name_tokens(lowered)
    return keyword in lowered


def confidence_level(score: float) -> str:
    if score >= ConfidenceLevels.HIGH:
        return "high"
    if score >= ConfidenceLevels.MEDIUM:
        return "medium"
    return "low"
