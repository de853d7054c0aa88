"""
Bootstrapping an NER corpus from gazetteer matches alone.
"""

import logging
from typing import List, Sequence, TextIO, Tuple

from .gazetteer import GazetteerIndex
from .merge import OUTSIDE
from .windower import write_sentence

logger = logging.getLogger(__name__)


class BootstrapConverter:
    """
    Tags plain word sequences using only the gazetteer.

    Ambiguous names are left undecided ("O"). Boundary coding looks at the tag
    emitted just before: a word continues a mention when the previous word was
    tagged with the same category, even if the two came from separate
    gazetteer names.
    """

    def __init__(self, gazetteer: GazetteerIndex):
        self.gazetteer = gazetteer

    def convert(self, words: Sequence[str]) -> List[Tuple[str, str]]:
        """Return (word, IOB tag) pairs for one sentence."""
        pairs = []
        prev_category = None
        for word, outcome in zip(words, self.gazetteer.outcomes(words)):
            category = outcome.category
            if category is None:
                pairs.append((word, OUTSIDE))
            elif category == prev_category:
                pairs.append((word, f"I-{category}"))
            else:
                pairs.append((word, f"B-{category}"))
            prev_category = category
        return pairs

    def write(self, stream: TextIO, words: Sequence[str], eos_marker=None) -> int:
        """
        Write one bootstrapped sentence block.

        Returns:
            Number of words tagged with an entity
        """
        pairs = self.convert(words)
        write_sentence(stream, (f"{w}\t{t}" for w, t in pairs), eos_marker)
        return sum(1 for _, t in pairs if t != OUTSIDE)
