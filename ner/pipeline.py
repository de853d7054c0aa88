"""
The corpus enrichment pipeline.

Sentences flow strictly in input order through:

    SentenceReader -> POS tagger -> gazetteer -> merge policy -> windower

and every sentence is written before the next one is read. The pipeline never
prints; callers observe progress through a callback receiving the number of
sentences handled so far.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, List, Optional, TextIO

from .bootstrap import BootstrapConverter
from .errors import InputError, OutputError, TaggingError
from .merge import MergeMode, merge
from .reader import Sentence, SentenceReader
from .session import Session
from .tagger import PosTagger
from .windower import FeatureRecord, window, write_sentence

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


@contextmanager
def _open_input(path: str) -> Iterator[TextIO]:
    try:
        stream = open(path, "r", encoding="utf-8")
    except OSError as e:
        raise InputError(f"unable to read input file {path}: {e}") from e
    with stream:
        yield stream


@contextmanager
def _open_output(path: str) -> Iterator[TextIO]:
    try:
        stream = open(path, "w", encoding="utf-8", newline="\n")
    except OSError as e:
        raise OutputError(f"unable to create output file {path}: {e}") from e
    with stream:
        yield stream


class TrainingDataGenerator:
    """
    Converts a corpus into the windowed training file or a bootstrapped corpus.

    Args:
        session: Run state holding the gazetteer and end-of-sentence marker
        tagger: POS tagger; only needed for the training file
        mode: How corpus tags and gazetteer tags are reconciled
        progress_callback: Called after every sentence with the running count
    """

    def __init__(
        self,
        session: Session,
        tagger: Optional[PosTagger] = None,
        mode: MergeMode = MergeMode.PASS_THROUGH,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.session = session
        self.tagger = tagger
        self.mode = mode
        self.progress_callback = progress_callback
        self.bootstrapper = BootstrapConverter(session.gazetteer)

    def _tick(self) -> None:
        self.session.sentences += 1
        if self.progress_callback:
            self.progress_callback(self.session.sentences)

    def enrich(self, sentence: Sentence) -> List[FeatureRecord]:
        """
        Build the feature records of one corpus sentence.

        Raises:
            TaggingError: If there is no tagger or its output does not line up
                with the sentence
        """
        if self.tagger is None:
            raise TaggingError("no POS tagger configured")
        results = self.tagger.tag_sentence(sentence.text)
        if len(results) != len(sentence):
            raise TaggingError(
                f"POS tagger returned {len(results)} tokens for the "
                f"{len(sentence)} word sentence at line {sentence.line_number}"
            )
        words = [r.word for r in results]
        pos_tags = [r.tag for r in results]
        gazetteer_tags = self.session.gazetteer.tag_sequence(words)
        reference = merge(sentence.tags, gazetteer_tags, self.mode)
        return window(words, pos_tags, gazetteer_tags, reference)

    def process(self, lines: Iterable[str], out_stream: TextIO) -> int:
        """
        Enrich every sentence of a tagged corpus stream.

        Returns:
            Number of sentences written
        """
        count = 0
        for sentence in SentenceReader(lines, self.session):
            records = self.enrich(sentence)
            write_sentence(
                out_stream, (r.to_line() for r in records), self.session.eos_marker
            )
            count += 1
            self._tick()
        return count

    def bootstrap(
        self, lines: Iterable[str], out_stream: TextIO, running: bool = False
    ) -> int:
        """
        Bootstrap an IOB corpus from running text or a tagged corpus.

        Returns:
            Number of sentences written
        """
        count = 0
        entities = 0
        for sentence in SentenceReader(lines, self.session, running=running):
            entities += self.bootstrapper.write(
                out_stream, sentence.words, self.session.eos_marker
            )
            count += 1
            self._tick()
        logger.info("Bootstrapped %s sentences, %s entity words", count, entities)
        return count

    def create_train_file(self, input_path: str, output_path: str) -> int:
        with _open_input(input_path) as in_stream, _open_output(
            output_path
        ) as out_stream:
            count = self.process(in_stream, out_stream)
        logger.info("Wrote %s sentences to %s", count, output_path)
        return count

    def create_boot_file(
        self, input_path: str, output_path: str, running: bool = False
    ) -> int:
        with _open_input(input_path) as in_stream, _open_output(
            output_path
        ) as out_stream:
            count = self.bootstrap(in_stream, out_stream, running=running)
        logger.info("Wrote %s sentences to %s", count, output_path)
        return count
