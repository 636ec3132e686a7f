"""Cross-check externally proposed mappings against real file headers.

A hint source (an LLM, a saved mapping file) proposes ``{target: header}``
pairs. Keys are folded into canonical target field names, then every
proposed header is matched against the actual headers: exact first, then
case-insensitive, then substring containment. Proposals that match nothing
are discarded with a warning. Hints are advisory and never re-score the
engine's own mappings.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from rapidfuzz import fuzz, process, utils

from ...entities.mapping import FieldMapping
from .patterns import PatternLibrary, default_pattern_library

if TYPE_CHECKING:
    from ...entities.schema import TableSchema

# Hint keys commonly produced in English, folded before the synonym table.
HINT_KEY_ALIASES: Mapping[str, str] = {
    "first_name": "имя",
    "name": "имя",
    "full_name": "имя",
    "last_name": "фамилия",
    "surname": "фамилия",
    "company": "компания",
    "company_name": "компания",
    "position": "должность",
    "job_title": "должность",
    "job": "должность",
    "notes": "примечания",
    "comment": "примечания",
    "email": "электронная_почта",
    "phone": "телефон",
    "mobile": "телефон",
    "linkedin": "linkedin_url",
    "telegram": "телеграмма",
    "country": "страна",
    "rating": "рейтинг",
    "network": "сеть",
    "birth_date": "день_рождения",
    "birthday": "день_рождения",
    "date": "день_рождения",
}

CLOSEST_HEADER_CUTOFF = 50.0


class HintMatch(str, Enum):
    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"
    CONTAINMENT = "containment"

    @property
    def confidence(self) -> float:
        return _MATCH_CONFIDENCE[self]


_MATCH_CONFIDENCE: dict[HintMatch, float] = {
    HintMatch.EXACT: 1.0,
    HintMatch.CASE_INSENSITIVE: 0.9,
    HintMatch.CONTAINMENT: 0.7,
}


@dataclass(frozen=True, slots=True)
class AcceptedHint:
    target_field: str
    source_field: str
    proposed: str
    match: HintMatch


def _empty_hints() -> list[AcceptedHint]:
    return []


def _empty_strs() -> list[str]:
    return []


@dataclass(slots=True)
class HintResolution:
    accepted: list[AcceptedHint] = field(default_factory=_empty_hints)
    warnings: list[str] = field(default_factory=_empty_strs)

    def to_field_mappings(self) -> list[FieldMapping]:
        return [
            FieldMapping(
                source_field=hint.source_field,
                target_field=hint.target_field,
                confidence=hint.match.confidence,
                reasoning=f'External hint "{hint.proposed}" ({hint.match.value} match)',
            )
            for hint in self.accepted
        ]


class HintResolver:
    def __init__(self, library: PatternLibrary | None = None) -> None:
        super().__init__()
        self._library = library or default_pattern_library()

    def normalize_key(self, key: str) -> str:
        cleaned = key.strip()
        alias = HINT_KEY_ALIASES.get(cleaned.lower())
        if alias is not None:
            return alias
        return self._library.canonical_name(cleaned) or cleaned

    def resolve(
        self,
        hints: Mapping[str, object],
        headers: Sequence[str],
        target_schema: TableSchema,
    ) -> HintResolution:
        resolution = HintResolution()
        claimed: set[str] = set()
        for key, proposed in hints.items():
            target_field = self.normalize_key(str(key))
            if not target_schema.has_column(target_field):
                continue
            if target_field in claimed:
                resolution.warnings.append(
                    f'Duplicate hint for "{target_field}" ignored: "{proposed}"'
                )
                continue
            if not isinstance(proposed, str) or not proposed.strip():
                resolution.warnings.append(
                    f'Hint for "{target_field}" is not a header name: {proposed!r}'
                )
                continue
            matched = self.match_header(proposed, headers)
            if matched is None:
                resolution.warnings.append(
                    self._discard_message(target_field, proposed, headers)
                )
                continue
            header, match = matched
            claimed.add(target_field)
            resolution.accepted.append(
                AcceptedHint(
                    target_field=target_field,
                    source_field=header,
                    proposed=proposed,
                    match=match,
                )
            )
        return resolution

    @staticmethod
    def match_header(
        proposed: str, headers: Sequence[str]
    ) -> tuple[str, HintMatch] | None:
        if proposed in headers:
            return proposed, HintMatch.EXACT
        wanted = proposed.strip().lower()
        lookup = {header.strip().lower(): header for header in reversed(headers)}
        if wanted in lookup:
            return lookup[wanted], HintMatch.CASE_INSENSITIVE
        for header in headers:
            key = header.strip().lower()
            if key and (wanted in key or key in wanted):
                return header, HintMatch.CONTAINMENT
        return None

    @staticmethod
    def _discard_message(target_field: str, proposed: str, headers: Sequence[str]) -> str:
        message = (
            f'Hint for "{target_field}" names header "{proposed}" which is not in '
            "the file"
        )
        closest = process.extractOne(
            proposed,
            list(headers),
            scorer=fuzz.ratio,
            processor=utils.default_process,
            score_cutoff=CLOSEST_HEADER_CUTOFF,
        )
        if closest is not None:
            message += f'; closest header is "{closest[0]}"'
        return message
