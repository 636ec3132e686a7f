from typing import ClassVar


class Defaults:
    MIN_CONFIDENCE = 0.3
    OVERFLOW_CONFIDENCE = 0.6
    OVERFLOW_MIN_LENGTH = 10
    OVERFLOW_MAX_LENGTH = 4000
    CLASSIFIER_THRESHOLD = 0.2
    BATCH_SIZE = 100
    SAMPLE_SIZE = 5
    INFERENCE_ROWS = 10
    DEFAULT_TABLE = "пользователи"
    SOURCE_TABLE_NAME = "uploaded_file"


class ConfidenceLevels:
    HIGH = 0.8
    MEDIUM = 0.6


class InferenceThresholds:
    MATCH_RATIO = 0.8
    LONG_TEXT_RATIO = 0.5
    LONG_TEXT_LENGTH = 255


class LogLevels:
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


class MissingValues:
    STRING_MARKERS: ClassVar[frozenset[str]] = frozenset(
        {"NAN", "<NA>", "NONE", "NULL", "N/A"}
    )


class TransformationTags:
    PARSE_DATE = "parse_date"
    STRING_TO_BOOLEAN = "string_to_boolean"
    STRING_TO_UUID = "string_to_uuid"
    NORMALIZE_PHONE = "normalize_phone"
    NORMALIZE_EMAIL = "normalize_email"
    TRIM_STRING = "trim_string"
    CONCATENATE_WITH_EXISTING = "concatenate_with_existing"
