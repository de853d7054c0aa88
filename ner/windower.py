"""
Feature windows for the sequence tagger trainer.

Every token becomes one tab separated record holding its word, the
previous/current/next POS tag, the previous/current/next gazetteer tag, and
the reference NER tag. The "_" sentinel stands in for context beyond the
sentence boundaries. Each sentence block ends with exactly one separator line.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, TextIO, Tuple

from .reader import SentenceReader
from .session import Session

logger = logging.getLogger(__name__)

BOUNDARY = "_"


@dataclass(frozen=True)
class FeatureRecord:
    """One output line of the training file."""

    word: str
    prev_pos: str
    pos: str
    next_pos: str
    prev_ner: str
    ner: str
    next_ner: str
    reference: str

    def to_line(self) -> str:
        return "\t".join(
            (
                self.word,
                self.prev_pos,
                self.pos,
                self.next_pos,
                self.prev_ner,
                self.ner,
                self.next_ner,
                self.reference,
            )
        )


def tag_context(tags: Sequence[str]) -> Iterator[Tuple[str, str, str]]:
    """
    Yield (previous, current, next) for every tag.

    The previous value is carried along from the tag emitted just before,
    starting from the boundary sentinel.
    """
    prev = BOUNDARY
    last = len(tags) - 1
    for i, current in enumerate(tags):
        following = tags[i + 1] if i < last else BOUNDARY
        yield prev, current, following
        prev = current


def window(
    words: Sequence[str],
    tags_a: Sequence[str],
    tags_b: Sequence[str],
    reference: Sequence[str],
) -> List[FeatureRecord]:
    """
    Build the feature records of one sentence.

    Args:
        words: The words of the sentence
        tags_a: POS tags
        tags_b: Gazetteer NER tags
        reference: The NER tags to learn

    Returns:
        One FeatureRecord per word
    """
    if not len(words) == len(tags_a) == len(tags_b) == len(reference):
        raise ValueError(
            "window needs equally long sequences, got "
            f"{len(words)}/{len(tags_a)}/{len(tags_b)}/{len(reference)}"
        )
    return [
        FeatureRecord(word, pa, ca, na, pb, cb, nb, ref)
        for word, (pa, ca, na), (pb, cb, nb), ref in zip(
            words, tag_context(tags_a), tag_context(tags_b), reference
        )
    ]


def write_sentence(
    stream: TextIO, lines: Iterable[str], eos_marker: Optional[str] = None
) -> None:
    """Write one sentence block followed by a single separator line."""
    for line in lines:
        stream.write(line)
        stream.write("\n")
    stream.write(f"{eos_marker}\n" if eos_marker else "\n")


def rewindow(in_stream: Iterable[str], out_stream: TextIO, session: Session) -> int:
    """
    Re-derive prev/next context from an already tagged stream.

    Input lines hold "word<TAB>tag" or "word<TAB>ner<TAB>tag". Every output
    line holds the word, the middle column when present, and the previous,
    current and next value of the last column.

    Returns:
        Number of sentences written
    """
    reader = SentenceReader(in_stream, session, columns=(2, 3))
    count = 0
    for sentence in reader:
        tags = [t.tag for t in sentence.tokens]
        lines = (
            "\t".join((token.word,) + token.middle + context)
            for token, context in zip(sentence.tokens, tag_context(tags))
        )
        write_sentence(out_stream, lines, session.eos_marker)
        count += 1
    session.sentences += count
    logger.info("Re-windowed %s sentences", count)
    return count
