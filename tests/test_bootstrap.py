import io
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from ner.bootstrap import BootstrapConverter
from ner.gazetteer import GazetteerIndex


@pytest.fixture
def converter():
    index = GazetteerIndex()
    index.add("PER", ["Jan", "de", "Wit"])
    index.add("LOC", ["Utrecht"])
    index.add("LOC", ["Zeist"])
    index.add("LOC", ["Parijs"])
    index.add("PER", ["Parijs"])
    return BootstrapConverter(index)


def test_running_text_sentence(converter):
    """Gazetteer names in running text get IOB tags."""
    words = "Jan de Wit woont in Utrecht".split()
    assert converter.convert(words) == [
        ("Jan", "B-PER"),
        ("de", "I-PER"),
        ("Wit", "I-PER"),
        ("woont", "O"),
        ("in", "O"),
        ("Utrecht", "B-LOC"),
    ]


def test_write_block(converter):
    """A sentence is written as word/tag lines plus a blank line."""
    out = io.StringIO()
    entities = converter.write(out, "Jan de Wit woont in Utrecht".split())
    assert entities == 4
    assert out.getvalue() == (
        "Jan\tB-PER\nde\tI-PER\nWit\tI-PER\nwoont\tO\nin\tO\nUtrecht\tB-LOC\n\n"
    )


def test_adjacent_same_category_is_one_mention(converter):
    """Adjacent words of one category continue the mention."""
    assert converter.convert(["Utrecht", "Zeist"]) == [
        ("Utrecht", "B-LOC"),
        ("Zeist", "I-LOC"),
    ]


def test_outside_word_ends_mention(converter):
    """An outside word between two names starts a new mention."""
    assert converter.convert(["Utrecht", "en", "Zeist"]) == [
        ("Utrecht", "B-LOC"),
        ("en", "O"),
        ("Zeist", "B-LOC"),
    ]


def test_ambiguous_name_is_outside(converter):
    """A name listed under two categories is tagged O."""
    assert converter.convert(["naar", "Parijs"]) == [("naar", "O"), ("Parijs", "O")]


def test_marker_separator(converter):
    """The end-of-sentence marker replaces the blank line."""
    out = io.StringIO()
    converter.write(out, ["Utrecht"], "<utt>")
    assert out.getvalue() == "Utrecht\tB-LOC\n<utt>\n"
