"""
POS tagging through an external memory-based tagger.

The pipeline only relies on the PosTagger call contract: hand over the text of
one sentence, get back one (word, tag) result per word. MbtTagger fulfils it by
keeping the Mbt program running with a trained settings file.
"""

import logging
import os
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from typing import List, Sequence

from .errors import TaggerInitError, TaggingError
from .session import DEFAULT_EOS_MARKER
from .text import split_fields

logger = logging.getLogger(__name__)

EOS_TOKEN = DEFAULT_EOS_MARKER


@dataclass(frozen=True)
class TagResult:
    word: str
    tag: str


class PosTagger:
    """Interface of a synchronous sentence POS tagger."""

    def tag_sentence(self, text: str) -> List[TagResult]:
        raise NotImplementedError

    def close(self) -> None:
        pass


def parse_tagged_output(output: str, eos_marker: str = EOS_TOKEN) -> List[TagResult]:
    """
    Parse "word/tag" tokens as printed by Mbt.

    Raises:
        TaggingError: If a token carries no tag
    """
    results = []
    for token in split_fields(output):
        if token == eos_marker:
            continue
        word, sep, tag = token.rpartition("/")
        if not sep or not word:
            raise TaggingError(f"unexpected tagger output token: {token!r}")
        results.append(TagResult(word, tag))
    return results


class MbtTagger(PosTagger):
    """
    Keeps one Mbt process running for the whole conversion.

    Sentences are written to the tagger's stdin, one per line and closed by
    the end-of-utterance marker; the tagged sentence is read back up to the
    marker echoed in its output. The process is started and sent a test
    sentence on construction, so a broken settings file is reported before
    any output is written.

    Args:
        settings_path: Mbt settings file of a trained POS tagger
        executable: Name or path of the Mbt program
        options: Extra command line options
    """

    def __init__(
        self,
        settings_path: str,
        executable: str = "Mbt",
        options: Sequence[str] = (),
    ):
        if not os.path.isfile(settings_path):
            raise TaggerInitError(
                f"unable to initialize a POS tagger using: {settings_path} "
                "(settings file not found)"
            )
        program = shutil.which(executable)
        if program is None:
            raise TaggerInitError(
                f"unable to initialize a POS tagger: {executable} not found"
            )
        self.settings_path = settings_path
        self.command = [program, "-s", settings_path, *options]
        self._stderr = tempfile.TemporaryFile(mode="w+", encoding="utf-8")
        logger.info("POS tagger: %s", " ".join(self.command))
        try:
            self._process = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=self._stderr,
                text=True,
                encoding="utf-8",
                bufsize=1,
            )
        except OSError as e:
            self._stderr.close()
            raise TaggerInitError(f"unable to start POS tagger: {e}") from e
        try:
            self._exchange(["."])
        except TaggingError as e:
            self.close()
            raise TaggerInitError(
                f"unable to initialize a POS tagger using: {settings_path}: {e}"
            ) from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _failure(self, reason: str) -> TaggingError:
        status = self._process.poll()
        self._stderr.seek(0)
        detail = self._stderr.read().strip()
        if status is not None:
            reason = f"{reason} (exited with status {status})"
        if detail:
            reason = f"{reason}: {detail}"
        return TaggingError(reason)

    def _exchange(self, words: Sequence[str]) -> List[TagResult]:
        try:
            self._process.stdin.write(" ".join(words) + f" {EOS_TOKEN}\n")
            self._process.stdin.flush()
        except (OSError, ValueError) as e:
            raise self._failure(f"POS tagger does not accept input: {e}") from e
        tokens: List[str] = []
        while not tokens or tokens[-1] != EOS_TOKEN:
            line = self._process.stdout.readline()
            if not line:
                self._process.wait()
                raise self._failure("POS tagger stopped responding")
            tokens.extend(split_fields(line))
        return parse_tagged_output(" ".join(tokens))

    def tag_sentence(self, text: str) -> List[TagResult]:
        words = split_fields(text)
        if not words:
            return []
        return self._exchange(words)

    def close(self) -> None:
        """Stop the tagger process; safe to call more than once."""
        process = getattr(self, "_process", None)
        if process is not None and process.stdin:
            try:
                process.stdin.close()
            except OSError:
                logger.debug("POS tagger input pipe already broken")
        if process is not None and process.poll() is None:
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
        if process is not None and process.stdout:
            process.stdout.close()
        self._stderr.close()
