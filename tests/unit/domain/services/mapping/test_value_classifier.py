"""Tests for the category classifier."""

from contact_importer.domain.services.mapping import ValueClassifier


class TestValueClassifier:
    """Category scoring from column names and sample values."""

    def test_email_column_classified_as_email(self):
        classifier = ValueClassifier()

        best = classifier.best("email", ["a@b.com", "c@d.com"])

        assert best is not None
        assert best.category == "email"
        assert best.confidence > 0.75
        assert "exact field name match" in best.reasoning

    def test_results_sorted_by_confidence(self):
        results = ValueClassifier().classify("phone", ["+79991234567", "89991234567"])

        confidences = [r.confidence for r in results]
        assert confidences == sorted(confidences, reverse=True)
        assert results[0].category == "phone"

    def test_phone_format_insight(self):
        results = ValueClassifier().classify("phone", ["+79991234567", "89991234567"])

        phone = next(r for r in results if r.category == "phone")
        assert "Phone formats: international (1), domestic (1)" in phone.insights

    def test_email_case_suggestion(self):
        best = ValueClassifier().best("email", ["Ivan@Example.com"])

        assert best is not None
        assert best.suggestions == ("Normalize email addresses to lower case",)

    def test_threshold_filters_results(self):
        classifier = ValueClassifier(threshold=0.99)

        assert classifier.classify("email", ["a@b.com"]) == []
        assert classifier.best("email", ["a@b.com"]) is None

    def test_blank_samples_ignored(self):
        classifier = ValueClassifier()

        with_blanks = classifier.best("email", ["a@b.com", None, ""])
        without = classifier.best("email", ["a@b.com"])

        assert with_blanks is not None and without is not None
        assert with_blanks.confidence == without.confidence

    def test_confidence_capped_at_one(self):
        for result in ValueClassifier().classify("position_title", ["Senior Developer"]):
            assert 0.0 <= result.confidence <= 1.0
