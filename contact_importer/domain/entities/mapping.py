from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def _empty_str_list() -> list[str]:
    return []


class FieldMapping(BaseModel):
    source_field: str
    target_field: str
    confidence: float = Field(ge=0.0, le=1.0)
    transformation: str | None = None
    reasoning: str | None = None
    suggestions: list[str] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)

    def describe(self) -> str:
        arrow = f"{self.source_field} -> {self.target_field}"
        if self.transformation:
            arrow += f" [{self.transformation}]"
        return f"{arrow} ({self.confidence:.2f})"


@dataclass(slots=True)
class MappingResult:
    """Outcome of one mapping pass.

    ``unmapped_columns`` lists source columns that neither won a target field
    nor qualified for the overflow field. Their data is not carried into the
    destination rows.
    """

    mappings: list[FieldMapping]
    confidence: float = 0.0
    suggestions: list[str] = field(default_factory=_empty_str_list)
    insights: list[str] = field(default_factory=_empty_str_list)
    unmapped_columns: list[str] = field(default_factory=_empty_str_list)

    @property
    def mapped_targets(self) -> list[str]:
        return [m.target_field for m in self.mappings]

    @property
    def mapped_sources(self) -> set[str]:
        return {m.source_field for m in self.mappings}

    def mapping_for(self, target_field: str) -> FieldMapping | None:
        for mapping in self.mappings:
            if mapping.target_field == target_field:
                return mapping
        return None

    def mappings_from(self, source_field: str) -> list[FieldMapping]:
        return [m for m in self.mappings if m.source_field == source_field]

    def to_dict(self) -> dict[str, object]:
        return {
            "mappings": [m.model_dump() for m in self.mappings],
            "confidence": self.confidence,
            "suggestions": list(self.suggestions),
            "insights": list(self.insights),
            "unmapped_columns": list(self.unmapped_columns),
        }


def aggregate_confidence(mappings: Sequence[FieldMapping]) -> float:
    if not mappings:
        return 0.0
    return sum(m.confidence for m in mappings) / len(mappings)


def merge_mappings(
    base: MappingResult, extra: Iterable[FieldMapping]
) -> MappingResult:
    """Add mappings for target fields ``base`` left unmatched.

    Mappings already present in ``base`` are never replaced.
    """
    claimed = set(base.mapped_targets)
    merged = list(base.mappings)
    added: list[str] = []
    for mapping in extra:
        if mapping.target_field in claimed:
            continue
        claimed.add(mapping.target_field)
        merged.append(mapping)
        added.append(mapping.target_field)
    suggestions = [
        line
        for line in base.suggestions
        if not any(f'"{target}"' in line for target in added)
    ]
    return MappingResult(
        mappings=merged,
        confidence=aggregate_confidence(merged),
        suggestions=suggestions,
        insights=list(base.insights),
        unmapped_columns=[
            column
            for column in base.unmapped_columns
            if column not in {m.source_field for m in merged}
        ],
    )
