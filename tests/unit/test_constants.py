"""Unit tests for constants module.

Tests validate that the thresholds stay consistent with each other.
"""

from contact_importer.constants import (
    ConfidenceLevels,
    Defaults,
    InferenceThresholds,
    LogLevels,
    MissingValues,
    TransformationTags,
)
from contact_importer.transformations import known_transformations


class TestDefaults:
    """Test suite for Defaults class."""

    def test_confidence_thresholds_in_range(self):
        for value in (
            Defaults.MIN_CONFIDENCE,
            Defaults.OVERFLOW_CONFIDENCE,
            Defaults.CLASSIFIER_THRESHOLD,
        ):
            assert 0.0 <= value <= 1.0

    def test_overflow_mapping_clears_acceptance_threshold(self):
        """Synthesized overflow mappings must themselves be acceptable."""
        assert Defaults.OVERFLOW_CONFIDENCE > Defaults.MIN_CONFIDENCE

    def test_sizes_positive(self):
        assert Defaults.BATCH_SIZE > 0
        assert Defaults.SAMPLE_SIZE > 0
        assert Defaults.INFERENCE_ROWS >= Defaults.SAMPLE_SIZE

    def test_default_table_name(self):
        assert Defaults.DEFAULT_TABLE == "пользователи"


class TestConfidenceLevels:
    def test_levels_ordered(self):
        assert 0.0 < ConfidenceLevels.MEDIUM < ConfidenceLevels.HIGH <= 1.0


class TestInferenceThresholds:
    def test_match_ratio(self):
        assert InferenceThresholds.MATCH_RATIO == 0.8
        assert InferenceThresholds.LONG_TEXT_RATIO < InferenceThresholds.MATCH_RATIO


class TestLogLevels:
    def test_levels_increase(self):
        assert LogLevels.NORMAL < LogLevels.VERBOSE < LogLevels.DEBUG


class TestMissingValues:
    def test_markers_are_uppercase(self):
        assert all(marker == marker.upper() for marker in MissingValues.STRING_MARKERS)


class TestTransformationTags:
    def test_every_tag_has_a_transformer(self):
        tags = {
            value
            for name, value in vars(TransformationTags).items()
            if name.isupper()
        }
        assert tags == set(known_transformations())
