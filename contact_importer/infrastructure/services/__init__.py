"""Service adapters."""

from .json_hint_source import HintFileError, JsonHintSource, load_hint_file

__all__ = ["HintFileError", "JsonHintSource", "load_hint_file"]
