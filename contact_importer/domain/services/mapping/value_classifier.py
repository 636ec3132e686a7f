"""Category scoring for a column from its name and sample values.

Each category of the pattern library is scored as a weighted sum of four
sub-scores, each clamped to [0, 1] first:

- name analysis (0.35): exact name list, partial name list, semantic keywords
- sample values (0.45): share of non-empty samples matching any pattern
- context (0.15): personal/professional/technical keyword buckets
- business rules (0.05): hierarchy and department keywords, positions only

Insights and suggestions are side computations for display. They never feed
back into the score.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from ....constants import Defaults
from ..value_checks import is_blank
from .patterns import PROFESSIONAL_KEYWORDS_RE, PatternLibrary, default_pattern_library
from .utils import mentions_keyword, normalize_field_name

NAME_WEIGHT = 0.35
VALUE_WEIGHT = 0.45
CONTEXT_WEIGHT = 0.15
BUSINESS_WEIGHT = 0.05

EXACT_NAME_SCORE = 0.95
PARTIAL_NAME_SCORE = 0.7
SEMANTIC_MIN_SCORE = 0.5
SEMANTIC_FACTOR = 0.8
CONTEXT_BUCKET_SCORE = 0.3
HIERARCHY_SCORE = 0.2
DEPARTMENT_SCORE = 0.1

_SOCIAL_PLATFORMS: tuple[tuple[str, str], ...] = (
    ("linkedin.com", "LinkedIn"),
    ("instagram.com", "Instagram"),
    ("twitter.com", "Twitter"),
    ("facebook.com", "Facebook"),
    ("tiktok.com", "TikTok"),
    ("youtube.com", "YouTube"),
)
_PROFILE_HOSTS: dict[str, tuple[str, str]] = {
    "linkedin": ("linkedin.com", "LinkedIn"),
    "instagram": ("instagram.com", "Instagram"),
    "twitter": ("twitter.com", "Twitter"),
}


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    category: str
    confidence: float
    reasoning: str
    pattern: str
    suggestions: tuple[str, ...] = ()
    insights: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class _SubScore:
    score: float
    reasoning: str
    insights: tuple[str, ...] = ()


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))


def _format_counts(counts: Counter[str]) -> str:
    return ", ".join(f"{label} ({count})" for label, count in counts.items())


class ValueClassifier:
    def __init__(
        self,
        library: PatternLibrary | None = None,
        *,
        threshold: float = Defaults.CLASSIFIER_THRESHOLD,
    ) -> None:
        super().__init__()
        self._library = library or default_pattern_library()
        self._threshold = threshold

    @property
    def library(self) -> PatternLibrary:
        return self._library

    def classify(
        self, field_name: str, sample_values: Sequence[object] = ()
    ) -> list[ClassificationResult]:
        """Score every category and return those above the threshold.

        Results are sorted by descending confidence; ties keep the category
        order of the pattern library.
        """
        samples = [str(v) for v in sample_values if not is_blank(v)]
        results: list[ClassificationResult] = []
        for category in self._library.categories:
            result = self._score_category(field_name, category, samples)
            if result.confidence > self._threshold:
                results.append(result)
        results.sort(key=lambda r: -r.confidence)
        return results

    def best(
        self, field_name: str, sample_values: Sequence[object] = ()
    ) -> ClassificationResult | None:
        results = self.classify(field_name, sample_values)
        return results[0] if results else None

    def _score_category(
        self, field_name: str, category: str, samples: list[str]
    ) -> ClassificationResult:
        name_part = self._analyze_name(field_name, category)
        context_part = self._analyze_context(field_name, category)
        business_part = self._analyze_business_rules(field_name, category)
        confidence = (
            name_part.score * NAME_WEIGHT
            + context_part.score * CONTEXT_WEIGHT
            + business_part.score * BUSINESS_WEIGHT
        )
        reasons = [name_part.reasoning]
        insights: list[str] = []
        if samples:
            value_part = self._analyze_values(category, samples)
            confidence += value_part.score * VALUE_WEIGHT
            reasons.append(value_part.reasoning)
            insights.extend(value_part.insights)
            insights.extend(self._general_insights(samples))
        reasons.extend([context_part.reasoning, business_part.reasoning])
        return ClassificationResult(
            category=category,
            confidence=min(confidence, 1.0),
            reasoning=" | ".join(reasons),
            pattern=self._detect_pattern(category, samples),
            suggestions=self._suggestions(category, samples),
            insights=tuple(insights),
        )

    def _analyze_name(self, field_name: str, category: str) -> _SubScore:
        normalized = normalize_field_name(field_name)
        score = 0.0
        reasons: list[str] = []
        if normalized in self._library.category_names.get(category, frozenset()):
            score += EXACT_NAME_SCORE
            reasons.append("exact field name match")
        if normalized:
            for partial in self._library.category_partial_names.get(category, ()):
                if partial in normalized or normalized in partial:
                    score += PARTIAL_NAME_SCORE
                    reasons.append(f'partial name match: "{partial}"')
                    break
        semantic = self._semantic_score(field_name, category)
        if semantic > SEMANTIC_MIN_SCORE:
            score += semantic * SEMANTIC_FACTOR
            reasons.append(f"semantic similarity: {round(semantic * 100)}%")
        return _SubScore(
            score=_clamp(score),
            reasoning=", ".join(reasons) or "no name evidence",
        )

    def _semantic_score(self, field_name: str, category: str) -> float:
        group = self._library.semantic_groups.get(category)
        if not group:
            return 0.0
        name = field_name.lower()
        matches = sum(1 for term in group if term in name)
        return matches / len(group)

    def _analyze_values(self, category: str, samples: list[str]) -> _SubScore:
        patterns = self._library.patterns_for(category)
        matched = sum(
            1 for value in samples if any(p.search(value) for p in patterns)
        )
        score = matched / len(samples)
        return _SubScore(
            score=_clamp(score),
            reasoning=(
                f"{matched} of {len(samples)} values match patterns "
                f"(score {score:.2f})"
            ),
            insights=self._category_insights(category, samples),
        )

    def _analyze_context(self, field_name: str, category: str) -> _SubScore:
        score = 0.0
        reasons: list[str] = []
        for bucket, keywords in self._library.context_buckets.items():
            if category not in self._library.context_relevance.get(bucket, ()):
                continue
            if any(mentions_keyword(field_name, kw) for kw in keywords):
                score += CONTEXT_BUCKET_SCORE
                reasons.append(f"context: {bucket}")
        return _SubScore(
            score=_clamp(score), reasoning=", ".join(reasons) or "no context"
        )

    def _analyze_business_rules(self, field_name: str, category: str) -> _SubScore:
        if category != "position":
            return _SubScore(score=0.0, reasoning="no business rules")
        score = 0.0
        reasons: list[str] = []
        for level in self._library.hierarchy_keywords:
            if mentions_keyword(field_name, level):
                score += HIERARCHY_SCORE
                reasons.append(f"hierarchy level: {level}")
                break
        for department in self._library.department_keywords:
            if mentions_keyword(field_name, department):
                score += DEPARTMENT_SCORE
                reasons.append(f"department: {department}")
        return _SubScore(
            score=_clamp(score), reasoning=", ".join(reasons) or "no business rules"
        )

    def _category_insights(self, category: str, samples: list[str]) -> tuple[str, ...]:
        insights: list[str] = []
        if category == "email":
            domains = list(
                dict.fromkeys(v.split("@", 1)[1] for v in samples if "@" in v)
            )
            domains = [d for d in domains if d]
            if len(domains) > 1:
                insights.append(
                    f"{len(domains)} distinct email domains: {', '.join(domains)}"
                )
        elif category == "phone":
            counts = Counter(self._phone_format(v) for v in samples)
            insights.append(f"Phone formats: {_format_counts(counts)}")
        elif category == "telegram":
            counts = Counter(self._telegram_format(v) for v in samples)
            insights.append(f"Telegram formats: {_format_counts(counts)}")
        elif category == "description":
            average = sum(len(v) for v in samples) / len(samples)
            insights.append(f"Average text length: {round(average)} characters")
            if any(PROFESSIONAL_KEYWORDS_RE.search(v) for v in samples):
                insights.append("Contains professional keywords")
        elif category in _PROFILE_HOSTS:
            host, label = _PROFILE_HOSTS[category]
            profiles = sum(1 for v in samples if host in v)
            insights.append(f"{label} profiles: {profiles}")
        elif category == "social_media":
            platforms = [
                label
                for host, label in _SOCIAL_PLATFORMS
                if any(host in v for v in samples)
            ]
            if platforms:
                insights.append(f"Platforms: {', '.join(platforms)}")
        return tuple(insights)

    @staticmethod
    def _general_insights(samples: list[str]) -> list[str]:
        uniqueness = len(set(samples)) / len(samples) * 100
        if uniqueness < 100:
            return [f"Uniqueness: {round(uniqueness)}%"]
        return []

    @staticmethod
    def _phone_format(value: str) -> str:
        if value.startswith("+7"):
            return "international"
        if value.startswith("8"):
            return "domestic"
        return "other"

    @staticmethod
    def _telegram_format(value: str) -> str:
        if value.startswith("@"):
            return "username (@)"
        if value.startswith("t.me/"):
            return "t.me link"
        if "t.me" in value:
            return "full link"
        return "plain name"

    @staticmethod
    def _suggestions(category: str, samples: list[str]) -> tuple[str, ...]:
        if not samples:
            return ()
        if category == "email" and any(v != v.lower() for v in samples):
            return ("Normalize email addresses to lower case",)
        if category == "phone" and any(
            not v.startswith(("+7", "8")) for v in samples
        ):
            return ("Normalize phone numbers to +7XXXXXXXXXX",)
        return ()

    def _detect_pattern(self, category: str, samples: list[str]) -> str:
        """Source of the pattern matching the most samples."""
        if not samples:
            return "unknown"
        best_pattern = "none"
        best_count = 0
        for pattern in self._library.patterns_for(category):
            count = sum(1 for value in samples if pattern.search(value))
            if count > best_count:
                best_pattern = pattern.pattern
                best_count = count
        return best_pattern
