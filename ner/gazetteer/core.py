"""
Core data structures for gazetteer matching.

A word sequence can be registered under several categories. The outcome of a
lookup is therefore a tagged variant: a single category, an ambiguous set of
candidate categories, or nothing at all.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

AMBIGUITY_SEPARATOR = "+"


class OutcomeKind(Enum):
    SINGLE = "single"
    AMBIGUOUS = "ambiguous"
    NONE = "none"


@dataclass(frozen=True)
class MatchOutcome:
    """The category (or categories) a matched word sequence belongs to."""

    kind: OutcomeKind
    categories: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def single(cls, category: str) -> "MatchOutcome":
        return cls(OutcomeKind.SINGLE, (category,))

    @classmethod
    def ambiguous(cls, categories) -> "MatchOutcome":
        return cls(OutcomeKind.AMBIGUOUS, tuple(categories))

    @classmethod
    def none(cls) -> "MatchOutcome":
        return cls(OutcomeKind.NONE)

    @classmethod
    def from_categories(cls, categories) -> "MatchOutcome":
        """Build the outcome for a list of candidate categories."""
        categories = tuple(categories)
        if not categories:
            return cls.none()
        if len(categories) == 1:
            return cls.single(categories[0])
        return cls.ambiguous(categories)

    @property
    def category(self) -> Optional[str]:
        """The decided category, or None when ambiguous or unmatched."""
        if self.kind is OutcomeKind.SINGLE:
            return self.categories[0]
        return None

    @property
    def label(self) -> str:
        """Legacy string encoding: the categories joined by '+', or 'O'."""
        if self.kind is OutcomeKind.NONE:
            return "O"
        return AMBIGUITY_SEPARATOR.join(self.categories)


@dataclass(frozen=True)
class GazetteerMatch:
    """A gazetteer entry found in a word sequence."""

    start: int
    length: int
    outcome: MatchOutcome

    @property
    def end(self) -> int:
        return self.start + self.length
