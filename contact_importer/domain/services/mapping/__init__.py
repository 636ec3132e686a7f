"""Field mapping: pattern tables, value classification and the mapping engine."""

from .engine import FieldMappingEngine, MatchCandidate
from .hint_resolver import AcceptedHint, HintMatch, HintResolution, HintResolver
from .patterns import PatternLibrary, default_pattern_library
from .utils import confidence_level, normalize_field_name
from .value_classifier import ClassificationResult, ValueClassifier

__all__ = [
    "AcceptedHint",
    "ClassificationResult",
    "FieldMappingEngine",
    "HintMatch",
    "HintResolution",
    "HintResolver",
    "MatchCandidate",
    "PatternLibrary",
    "ValueClassifier",
    "confidence_level",
    "default_pattern_library",
    "normalize_field_name",
]
