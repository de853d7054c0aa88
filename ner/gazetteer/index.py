"""
Longest-match gazetteer index.

Names from all categories are kept in one table keyed by their word tuple, so
a lookup at a position only has to try the candidate lengths from the longest
registered name down to one word.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .core import GazetteerMatch, MatchOutcome, OutcomeKind
from .loader import read_name_list, read_spec_file

logger = logging.getLogger(__name__)

DEFAULT_MAX_NER_SIZE = 15


class GazetteerIndex:
    """
    Dictionary of multi-word names grouped by category.

    The index is filled once at startup and only read afterwards.

    Attributes:
        max_ner_size: Names with more words than this are not registered
        spec_path: Specification file the index was loaded from, if any
    """

    def __init__(self, max_ner_size: int = DEFAULT_MAX_NER_SIZE):
        self.max_ner_size = max_ner_size
        self.spec_path: Optional[str] = None
        self._entries: Dict[Tuple[str, ...], List[str]] = {}
        self._category_counts: Dict[str, int] = {}
        self._longest = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def categories(self) -> List[str]:
        """Categories in registration order."""
        return list(self._category_counts)

    @property
    def longest(self) -> int:
        """Word count of the longest registered name."""
        return self._longest

    def entry_count(self, category: str) -> int:
        return self._category_counts.get(category, 0)

    def add(self, category: str, words: Sequence[str]) -> bool:
        """
        Register one name under a category.

        Returns:
            False when the name is empty or longer than max_ner_size
        """
        key = tuple(words)
        if not key:
            return False
        if len(key) > self.max_ner_size:
            logger.warning(
                "Skipping %s name longer than %s words: %s",
                category,
                self.max_ner_size,
                " ".join(key),
            )
            return False
        categories = self._entries.setdefault(key, [])
        if category not in categories:
            categories.append(category)
        self._category_counts[category] = self._category_counts.get(category, 0) + 1
        self._longest = max(self._longest, len(key))
        return True

    def load(self, category: str, word_lists: Iterable[str]) -> int:
        """
        Register the names of one category from its list files.

        Args:
            category: Entity category, e.g. "LOC"
            word_lists: Paths of name list files

        Returns:
            Number of names registered

        Raises:
            LoadError: If a list file is unreadable
        """
        self._category_counts.setdefault(category, 0)
        added = 0
        for list_path in word_lists:
            for words in read_name_list(list_path):
                if self.add(category, words):
                    added += 1
            logger.debug("Loaded %s list %s", category, list_path)
        return added

    def load_spec(self, spec_path: str) -> int:
        """
        Load every list named in a gazetteer specification file.

        Raises:
            LoadError: If the specification or one of its lists is unreadable
        """
        total = 0
        for category, list_path in read_spec_file(spec_path):
            total += self.load(category, [list_path])
        self.spec_path = spec_path
        logger.info(
            "Loaded %s gazetteer names in %s categories from %s",
            total,
            len(self._category_counts),
            spec_path,
        )
        return total

    @classmethod
    def from_spec_file(
        cls, spec_path: str, max_ner_size: int = DEFAULT_MAX_NER_SIZE
    ) -> "GazetteerIndex":
        index = cls(max_ner_size=max_ner_size)
        index.load_spec(spec_path)
        return index

    def match(self, words: Sequence[str], start: int) -> Optional[GazetteerMatch]:
        """
        Find the longest registered name starting at a position.

        Args:
            words: The word sequence
            start: Index of the first word of the candidate name

        Returns:
            The match, or None when no name starts at this position
        """
        remaining = len(words) - start
        for length in range(min(self._longest, remaining), 0, -1):
            categories = self._entries.get(tuple(words[start : start + length]))
            if categories:
                return GazetteerMatch(
                    start=start,
                    length=length,
                    outcome=MatchOutcome.from_categories(categories),
                )
        return None

    def scan(self, words: Sequence[str]) -> List[GazetteerMatch]:
        """
        Greedy left-to-right longest-match scan.

        Returns:
            Non-overlapping matches ordered by position
        """
        matches = []
        pos = 0
        while pos < len(words):
            found = self.match(words, pos)
            if found is None:
                pos += 1
                continue
            matches.append(found)
            pos = found.end
        return matches

    def outcomes(self, words: Sequence[str]) -> List[MatchOutcome]:
        """Return the match outcome covering each word."""
        result = [MatchOutcome.none()] * len(words)
        for found in self.scan(words):
            for i in range(found.start, found.end):
                result[i] = found.outcome
        return result

    def tag_sequence(self, words: Sequence[str]) -> List[str]:
        """
        Tag a word sequence with IOB labels from the gazetteer.

        A name that is registered under several categories is left undecided
        and its words are tagged "O".
        """
        tags = ["O"] * len(words)
        for found in self.scan(words):
            if found.outcome.kind is not OutcomeKind.SINGLE:
                continue
            category = found.outcome.category
            tags[found.start] = f"B-{category}"
            for i in range(found.start + 1, found.end):
                tags[i] = f"I-{category}"
        return tags
