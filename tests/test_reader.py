import io
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from ner.errors import FormatError
from ner.reader import SentenceReader, Token
from ner.session import Session


def read(text, **kwargs):
    session = Session()
    sentences = list(SentenceReader(io.StringIO(text), session, **kwargs))
    return sentences, session


def test_blank_lines_delimit_sentences():
    """A blank line closes a sentence."""
    sentences, session = read("Jan\tB-PER\nslaapt\tO\n\nIk\tO\n")
    assert [s.words for s in sentences] == [["Jan", "slaapt"], ["Ik"]]
    assert sentences[0].tags == ["B-PER", "O"]
    assert session.eos_marker is None


def test_repeated_blank_lines_do_not_make_empty_sentences():
    """Extra blank lines yield no empty sentences."""
    sentences, _ = read("\n\nJan\tB-PER\n\n\n\nIk\tO\n\n")
    assert len(sentences) == 2


def test_trailing_sentence_is_flushed():
    """The last sentence needs no closing blank line."""
    sentences, _ = read("Ik\tO\nloop\tO")
    assert sentences[-1].words == ["Ik", "loop"]


def test_marker_line_delimits_and_is_remembered():
    """A marker line closes a sentence and is recorded."""
    sentences, session = read("Jan\tB-PER\n<utt>\nIk\tO\n")
    assert [s.words for s in sentences] == [["Jan"], ["Ik"]]
    assert session.eos_marker == "<utt>"
    assert session.marker_seen


def test_marker_is_not_a_token():
    """Marker lines never become words."""
    sentences, _ = read("<utt>\nJan\tB-PER\n<utt>\n")
    assert [t.word for s in sentences for t in s.tokens] == ["Jan"]


def test_windows_line_endings():
    """CRLF line endings are accepted."""
    sentences, _ = read("Jan\tB-PER\r\n\r\nIk\tO\r\n")
    assert [s.words for s in sentences] == [["Jan"], ["Ik"]]
    assert sentences[0].tags == ["B-PER"]


def test_line_numbers():
    """Sentences remember their first input line."""
    sentences, _ = read("\nJan\tB-PER\nslaapt\tO\n\nIk\tO\n")
    assert [s.line_number for s in sentences] == [2, 5]


def test_wrong_column_count_is_fatal():
    """Too many columns raise FormatError with the line."""
    with pytest.raises(FormatError) as exc:
        read("Jan\tB-PER\nde Wit\tI-PER\textra\n")
    assert exc.value.line_number == 2
    assert "de Wit" in str(exc.value)


def test_single_column_is_fatal():
    """A word without a tag raises FormatError."""
    with pytest.raises(FormatError):
        read("Jan\n")


def test_three_columns_when_allowed():
    """A middle column is kept when allowed."""
    sentences, _ = read("Jan\tB-PER\tN\n", columns=(2, 3))
    assert sentences[0].tokens == (Token("Jan", "N", ("B-PER",)),)


def test_running_text_one_sentence_per_line():
    """Each running text line is one sentence."""
    sentences, _ = read("Jan de Wit woont in Utrecht\nHij  werkt\n", running=True)
    assert [s.words for s in sentences] == [
        ["Jan", "de", "Wit", "woont", "in", "Utrecht"],
        ["Hij", "werkt"],
    ]
    assert sentences[0].tags == [None] * 6


def test_sentence_text_for_the_tagger():
    """The tagger text has one word per line."""
    sentences, _ = read("Jan\tB-PER\nslaapt\tO\n")
    assert sentences[0].text == "Jan\nslaapt\n"


def test_non_breaking_space_stays_inside_the_word():
    """A non-breaking space is part of the word, not a column separator."""
    sentences, _ = read("10\xa0000\tO\neuro\tO\n")
    assert sentences[0].words == ["10\xa0000", "euro"]
    assert sentences[0].tags == ["O", "O"]


def test_running_text_keeps_non_breaking_spaces():
    """Running text is split on ASCII blanks only."""
    sentences, _ = read("kost 10\xa0000 euro\n", running=True)
    assert sentences[0].words == ["kost", "10\xa0000", "euro"]
