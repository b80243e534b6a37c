"""Catalog data models — conformance levels and success criteria."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from accessaudit.errors import InvalidInputError


class ConformanceLevel(enum.Enum):
    """WCAG conformance level. Higher levels include all lower-level criteria."""

    A = "A"
    AA = "AA"
    AAA = "AAA"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def includes(self, other: ConformanceLevel) -> bool:
        """Whether criteria at ``other`` apply when assessing at this level."""
        return other.rank <= self.rank

    @classmethod
    def parse(cls, value: str | ConformanceLevel) -> ConformanceLevel:
        if isinstance(value, ConformanceLevel):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidInputError(
                f"Invalid conformance level {value!r}; expected one of A, AA, AAA"
            ) from None


_RANKS = {ConformanceLevel.A: 1, ConformanceLevel.AA: 2, ConformanceLevel.AAA: 3}


@dataclass(frozen=True)
class Criterion:
    """A single numbered success criterion."""

    id: str
    title: str
    level: ConformanceLevel
    guideline: str = ""


@dataclass(frozen=True)
class Catalog:
    """A versioned, immutable set of success criteria."""

    version: str
    criteria: tuple[Criterion, ...]

    def for_level(self, level: ConformanceLevel) -> list[Criterion]:
        """Criteria applicable at ``level``, in catalog order."""
        return [c for c in self.criteria if level.includes(c.level)]

    def get(self, criterion_id: str) -> Criterion | None:
        for criterion in self.criteria:
            if criterion.id == criterion_id:
                return criterion
        return None

    def __len__(self) -> int:
        return len(self.criteria)
