"""
Sentence segmentation of corpus files.

Lines are buffered until a blank line or an end-of-sentence marker line closes
the sentence. In tagged mode every line holds a word and its tag (optionally
with a middle column); in running-text mode every line is a whole sentence.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import FormatError
from .session import Session
from .text import is_blank, split_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """A word with the columns that followed it in the corpus."""

    word: str
    tag: Optional[str] = None
    middle: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Sentence:
    """An ordered run of tokens and the input line it started on."""

    tokens: Tuple[Token, ...]
    line_number: int = 0

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def words(self) -> List[str]:
        return [t.word for t in self.tokens]

    @property
    def tags(self) -> List[Optional[str]]:
        return [t.tag for t in self.tokens]

    @property
    def text(self) -> str:
        """The sentence as one word per line, as handed to the POS tagger."""
        return "".join(f"{w}\n" for w in self.words)


class SentenceReader:
    """
    Streams sentences out of a line iterable.

    Args:
        lines: The input lines (an open file works)
        session: Run state; its end-of-sentence marker is updated here
        running: Treat each non-blank line as a sentence of words
        columns: Accepted column counts in tagged mode
    """

    def __init__(
        self,
        lines: Iterable[str],
        session: Session,
        running: bool = False,
        columns: Tuple[int, ...] = (2,),
    ):
        self.lines = lines
        self.session = session
        self.running = running
        self.columns = columns

    def _split(self, line: str, line_number: int) -> Token:
        parts = split_fields(line)
        if len(parts) not in self.columns:
            expected = " or ".join(str(c) for c in self.columns)
            raise FormatError(line, line_number, expected)
        return Token(word=parts[0], tag=parts[-1], middle=tuple(parts[1:-1]))

    def __iter__(self) -> Iterator[Sentence]:
        buffer: List[Token] = []
        start = 0
        line_number = 0
        for line_number, raw in enumerate(self.lines, start=1):
            line = raw.rstrip("\r\n")
            if line == self.session.marker:
                self.session.observe_marker()
                line = ""
            if is_blank(line):
                if buffer:
                    yield Sentence(tuple(buffer), start)
                    buffer = []
                continue
            if self.running:
                words = split_fields(line)
                yield Sentence(tuple(Token(w) for w in words), line_number)
                continue
            if not buffer:
                start = line_number
            buffer.append(self._split(line, line_number))
        if buffer:
            yield Sentence(tuple(buffer), start)
        logger.debug("Read %s lines", line_number)
