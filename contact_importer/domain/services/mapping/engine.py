"""Heuristic field-mapping engine.

For every target field the engine scores all source columns, keeps the best
one when it clears ``min_confidence`` and annotates the pairing with the
value classifier's top result. Source columns that win nothing and carry
free text are folded into the target's notes field.

Each target field is scored independently, so one source column may win
several target fields. ``exclusive_sources=True`` switches to a greedy
one-to-one assignment by descending confidence instead.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rapidfuzz import fuzz, process, utils

from ....constants import Defaults, TransformationTags
from ...entities.mapping import FieldMapping, MappingResult, aggregate_confidence
from ...exceptions import SchemaError
from ..value_checks import (
    is_blank,
    is_valid_company_name,
    is_valid_date,
    is_valid_email,
    is_valid_name,
    is_valid_phone,
    is_valid_url,
)
from .patterns import PatternLibrary, default_pattern_library
from .utils import split_name_tokens
from .value_classifier import ValueClassifier

if TYPE_CHECKING:
    from ...entities.schema import ColumnInfo, TableSchema

EXACT_MATCH_SCORE = 1.0
SYNONYM_MATCH_SCORE = 0.9
TOKEN_EXACT_SCORE = 0.5
TOKEN_PARTIAL_SCORE = 0.3
MIN_EXACT_TOKEN_LENGTH = 3
TYPE_WEIGHT = 0.2
SAMPLE_WEIGHT = 0.3
UNKNOWN_SAMPLE_SCORE = 0.1
CLOSEST_COLUMN_CUTOFF = 60.0

PARSE_DATE = TransformationTags.PARSE_DATE
STRING_TO_BOOLEAN = TransformationTags.STRING_TO_BOOLEAN
STRING_TO_UUID = TransformationTags.STRING_TO_UUID
CONCATENATE_WITH_EXISTING = TransformationTags.CONCATENATE_WITH_EXISTING

# Sample detectors keyed off the target field name, first hit wins.
SAMPLE_DETECTORS: tuple[tuple[tuple[str, ...], Callable[[object], bool]], ...] = (
    (("mail", "почта"), is_valid_email),
    (("phone", "телефон"), is_valid_phone),
    (("name", "имя"), is_valid_name),
    (("company", "компания", "org"), is_valid_company_name),
    (("date", "время", "birthday"), is_valid_date),
    (("url", "link", "profile"), is_valid_url),
)

_STRING_TYPES = ("VARCHAR", "TEXT", "STRING", "CHAR")


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    source: ColumnInfo
    confidence: float
    transformation: str | None = None


def _is_string_type(type_tag: str) -> bool:
    upper = type_tag.upper()
    return any(fragment in upper for fragment in _STRING_TYPES)


class FieldMappingEngine:
    def __init__(
        self,
        library: PatternLibrary | None = None,
        classifier: ValueClassifier | None = None,
        *,
        min_confidence: float = Defaults.MIN_CONFIDENCE,
        overflow_confidence: float = Defaults.OVERFLOW_CONFIDENCE,
        overflow_min_length: int = Defaults.OVERFLOW_MIN_LENGTH,
        exclusive_sources: bool = False,
    ) -> None:
        super().__init__()
        self._library = library or default_pattern_library()
        self._classifier = classifier or ValueClassifier(self._library)
        self._min_confidence = min_confidence
        self._overflow_confidence = overflow_confidence
        self._overflow_min_length = overflow_min_length
        self._exclusive_sources = exclusive_sources

    def analyze_and_map(
        self, source_schema: TableSchema | None, target_schema: TableSchema | None
    ) -> MappingResult:
        source = self._require_schema(source_schema, "source")
        target = self._require_schema(target_schema, "target")

        if self._exclusive_sources:
            winners = self._assign_exclusive(target, source)
        else:
            winners = {
                column.name: self.find_best_match(column, source.columns)
                for column in target.columns
            }

        mappings: list[FieldMapping] = []
        suggestions: list[str] = []
        insights: list[str] = []
        for target_column in target.columns:
            candidate = winners.get(target_column.name)
            if candidate is None or candidate.confidence <= self._min_confidence:
                suggestions.append(self._unmatched_suggestion(target_column, source))
                continue
            mapping = self._build_mapping(target_column, candidate)
            mappings.append(mapping)
            if mapping.reasoning:
                insights.append(
                    f"{mapping.source_field} → {mapping.target_field}: "
                    f"{mapping.reasoning}"
                )

        overflow, unmapped = self._map_overflow(source, target, mappings)
        for mapping in overflow:
            insights.append(
                f"{mapping.source_field} → {mapping.target_field}: unrecognized "
                "free-text column appended to notes"
            )
        mappings.extend(overflow)

        return MappingResult(
            mappings=mappings,
            confidence=aggregate_confidence(mappings),
            suggestions=suggestions,
            insights=insights,
            unmapped_columns=unmapped,
        )

    def find_best_match(
        self, target: ColumnInfo, sources: Sequence[ColumnInfo]
    ) -> MatchCandidate | None:
        """Highest-scoring source column; the first one wins ties."""
        best: MatchCandidate | None = None
        max_confidence = 0.0
        for source in sources:
            confidence = self.calculate_match_confidence(target, source)
            if confidence > max_confidence:
                max_confidence = confidence
                best = MatchCandidate(
                    source=source,
                    confidence=confidence,
                    transformation=self.suggest_transformation(target, source),
                )
        return best

    def calculate_match_confidence(self, target: ColumnInfo, source: ColumnInfo) -> float:
        if target.name.lower() == source.name.lower():
            return EXACT_MATCH_SCORE

        target_synonyms = {s.lower() for s in self._library.synonyms_for(target.name)}
        source_synonyms = {s.lower() for s in self._library.synonyms_for(source.name)}
        if target_synonyms & source_synonyms:
            return min(SYNONYM_MATCH_SCORE, 1.0)

        confidence = self._token_overlap(target.name, source.name)
        confidence += (
            self._library.type_compatibility_score(target.type, source.type)
            * TYPE_WEIGHT
        )
        if source.sample_values:
            confidence += (
                self._sample_value_score(target, source.sample_values) * SAMPLE_WEIGHT
            )
        return min(confidence, 1.0)

    @staticmethod
    def suggest_transformation(target: ColumnInfo, source: ColumnInfo) -> str | None:
        if not _is_string_type(source.type):
            return None
        target_type = target.type.upper()
        if "TIMESTAMP" in target_type:
            return PARSE_DATE
        if "BOOLEAN" in target_type:
            return STRING_TO_BOOLEAN
        if "UUID" in target_type:
            return STRING_TO_UUID
        return None

    @staticmethod
    def _require_schema(schema: TableSchema | None, role: str) -> TableSchema:
        if schema is None:
            raise SchemaError(f"Missing {role} schema")
        if schema.is_empty:
            raise SchemaError(
                f"{role.capitalize()} schema '{schema.table_name}' has no columns",
                table_name=schema.table_name,
            )
        return schema

    @staticmethod
    def _token_overlap(target_name: str, source_name: str) -> float:
        score = 0.0
        for target_word in split_name_tokens(target_name):
            for source_word in split_name_tokens(source_name):
                if target_word == source_word and len(target_word) >= MIN_EXACT_TOKEN_LENGTH:
                    score += TOKEN_EXACT_SCORE
                elif target_word in source_word or source_word in target_word:
                    score += TOKEN_PARTIAL_SCORE
        return score

    @staticmethod
    def _sample_value_score(target: ColumnInfo, samples: Sequence[object]) -> float:
        values = [value for value in samples if not is_blank(value)]
        if not values:
            return 0.0
        target_name = target.name.lower()
        for keywords, detector in SAMPLE_DETECTORS:
            if any(keyword in target_name for keyword in keywords):
                return sum(1 for value in values if detector(value)) / len(values)
        return UNKNOWN_SAMPLE_SCORE

    def _assign_exclusive(
        self, target: TableSchema, source: TableSchema
    ) -> dict[str, MatchCandidate | None]:
        scored: list[tuple[float, int, int]] = []
        for t_index, target_column in enumerate(target.columns):
            for s_index, source_column in enumerate(source.columns):
                confidence = self.calculate_match_confidence(target_column, source_column)
                if confidence > self._min_confidence:
                    scored.append((confidence, t_index, s_index))
        scored.sort(key=lambda item: (-item[0], item[1], item[2]))

        winners: dict[str, MatchCandidate | None] = {}
        claimed_sources: set[int] = set()
        for confidence, t_index, s_index in scored:
            target_column = target.columns[t_index]
            if target_column.name in winners or s_index in claimed_sources:
                continue
            source_column = source.columns[s_index]
            claimed_sources.add(s_index)
            winners[target_column.name] = MatchCandidate(
                source=source_column,
                confidence=confidence,
                transformation=self.suggest_transformation(target_column, source_column),
            )
        return winners

    def _build_mapping(
        self, target: ColumnInfo, candidate: MatchCandidate
    ) -> FieldMapping:
        top = self._classifier.best(candidate.source.name, candidate.source.sample_values)
        return FieldMapping(
            source_field=candidate.source.name,
            target_field=target.name,
            confidence=candidate.confidence,
            transformation=candidate.transformation,
            reasoning=top.reasoning if top else None,
            suggestions=list(top.suggestions) if top else [],
            insights=list(top.insights) if top else [],
        )

    def _map_overflow(
        self,
        source: TableSchema,
        target: TableSchema,
        mappings: Sequence[FieldMapping],
    ) -> tuple[list[FieldMapping], list[str]]:
        notes_column = target.overflow_column()
        claimed = {m.source_field for m in mappings}
        overflow: list[FieldMapping] = []
        unmapped: list[str] = []
        for column in source.columns:
            if column.name in claimed:
                continue
            if notes_column is None or not self._holds_free_text(column):
                unmapped.append(column.name)
                continue
            overflow.append(
                FieldMapping(
                    source_field=column.name,
                    target_field=notes_column.name,
                    confidence=self._overflow_confidence,
                    transformation=CONCATENATE_WITH_EXISTING,
                    reasoning=(
                        "Column not recognized but holds free text; "
                        "appended to notes"
                    ),
                    suggestions=["Consider mapping this column manually"],
                    insights=[
                        f"Holds {len(column.sample_values)} sample values",
                        "Type: free text",
                    ],
                )
            )
        return overflow, unmapped

    def _holds_free_text(self, column: ColumnInfo) -> bool:
        return any(
            isinstance(value, str) and len(value.strip()) > self._overflow_min_length
            for value in column.sample_values
        )

    @staticmethod
    def _unmatched_suggestion(target: ColumnInfo, source: TableSchema) -> str:
        message = (
            f'No match found for field "{target.name}". Consider manual mapping.'
        )
        closest = process.extractOne(
            target.name,
            source.column_names,
            scorer=fuzz.ratio,
            processor=utils.default_process,
            score_cutoff=CLOSEST_COLUMN_CUTOFF,
        )
        if closest is not None:
            column_name, score, _ = closest
            message += f' Closest column: "{column_name}" ({score:.0f}%).'
        return message
