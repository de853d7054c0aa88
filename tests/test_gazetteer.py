import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from ner.errors import LoadError
from ner.gazetteer import GazetteerIndex, MatchOutcome, OutcomeKind, read_spec_file


def make_gazetteer(tmp_path, lists, subdir="gaz"):
    """Write one list file per category plus a specification file."""
    gaz_dir = tmp_path / subdir
    gaz_dir.mkdir(exist_ok=True)
    spec_lines = []
    for category, names in lists.items():
        list_name = f"{category.lower()}.txt"
        (gaz_dir / list_name).write_text("\n".join(names) + "\n", encoding="utf-8")
        spec_lines.append(f"{category}\t{list_name}")
    spec = gaz_dir / "ner.gaz"
    spec.write_text("\n".join(spec_lines) + "\n", encoding="utf-8")
    return spec


class TestLoading:
    """Reading specification and list files."""

    def test_list_files_resolved_relative_to_spec(self, tmp_path):
        """List paths are relative to the gazetteer file."""
        spec = make_gazetteer(tmp_path, {"LOC": ["Amsterdam"]})
        entries = read_spec_file(str(spec))
        assert entries == [("LOC", str(tmp_path / "gaz" / "loc.txt"))]

    def test_comments_and_blank_lines_skipped(self, tmp_path):
        """Comment and blank lines in lists are ignored."""
        (tmp_path / "loc.txt").write_text("# cities\n\nUtrecht\n", encoding="utf-8")
        spec = tmp_path / "ner.gaz"
        spec.write_text("# categories\n\nLOC\tloc.txt\n", encoding="utf-8")
        index = GazetteerIndex.from_spec_file(str(spec))
        assert len(index) == 1
        assert index.entry_count("LOC") == 1
        assert index.spec_path == str(spec)

    def test_missing_list_file(self, tmp_path):
        """An unreadable list file raises LoadError."""
        spec = tmp_path / "ner.gaz"
        spec.write_text("LOC\tnowhere.txt\n", encoding="utf-8")
        with pytest.raises(LoadError):
            GazetteerIndex.from_spec_file(str(spec))

    def test_missing_spec_file(self, tmp_path):
        """An unreadable gazetteer file raises LoadError."""
        with pytest.raises(LoadError):
            GazetteerIndex.from_spec_file(str(tmp_path / "absent.gaz"))

    def test_malformed_spec_line(self, tmp_path):
        """A gazetteer line without two fields raises LoadError."""
        spec = tmp_path / "ner.gaz"
        spec.write_text("LOC\n", encoding="utf-8")
        with pytest.raises(LoadError):
            read_spec_file(str(spec))

    def test_names_longer_than_max_size_skipped(self, tmp_path):
        """Names over max_ner_size words are not loaded."""
        (tmp_path / "org.txt").write_text(
            "a b c d\nVerenigde Naties\n", encoding="utf-8"
        )
        index = GazetteerIndex(max_ner_size=3)
        added = index.load("ORG", [str(tmp_path / "org.txt")])
        assert added == 1
        assert index.longest == 2
        assert index.tag_sequence(["a", "b", "c", "d"]) == ["O", "O", "O", "O"]

    def test_categories_in_registration_order(self, tmp_path):
        """Categories are listed in load order."""
        spec = make_gazetteer(tmp_path, {"PER": ["Jan"], "LOC": ["Utrecht"]})
        index = GazetteerIndex.from_spec_file(str(spec))
        assert index.categories == ["PER", "LOC"]


class TestMatching:
    """Longest-match lookup and sequence tagging."""

    @pytest.fixture
    def index(self):
        index = GazetteerIndex()
        index.add("LOC", ["new"])
        index.add("LOC", ["new", "york"])
        index.add("PER", ["Jan", "de", "Wit"])
        index.add("LOC", ["Utrecht"])
        return index

    def test_no_overlap_gives_all_outside(self, index):
        """Words outside the gazetteer are all O."""
        words = ["the", "cat", "sat"]
        assert index.tag_sequence(words) == ["O", "O", "O"]

    def test_isolated_entry(self, index):
        """A multi-word name inside a sentence is found."""
        words = ["gisteren", "zag", "Jan", "de", "Wit", "iets"]
        assert index.tag_sequence(words) == [
            "O",
            "O",
            "B-PER",
            "I-PER",
            "I-PER",
            "O",
        ]

    def test_longest_match_wins(self, index):
        """The longest name at a position is chosen."""
        words = ["new", "york", "city"]
        found = index.match(words, 0)
        assert found.length == 2
        assert found.outcome == MatchOutcome.single("LOC")
        assert index.tag_sequence(words) == ["B-LOC", "I-LOC", "O"]

    def test_shorter_match_when_longer_fails(self, index):
        """A shorter name matches when the longer one breaks off."""
        assert index.tag_sequence(["new", "jersey"]) == ["B-LOC", "O"]

    def test_match_at_end_of_sequence(self, index):
        """Matching stops at the end of the words."""
        assert index.match(["in", "new"], 1).length == 1
        assert index.match(["in", "new"], 0) is None

    def test_adjacent_matches_each_start_a_mention(self, index):
        """Two adjacent names both start with B-."""
        assert index.tag_sequence(["Utrecht", "Utrecht"]) == ["B-LOC", "B-LOC"]

    def test_scan_is_non_overlapping(self, index):
        """Scanning resumes after each match."""
        matches = index.scan(["new", "york", "new", "Utrecht"])
        assert [(m.start, m.length) for m in matches] == [(0, 2), (2, 1), (3, 1)]

    def test_empty_sequence(self, index):
        """No words give no tags."""
        assert index.tag_sequence([]) == []
        assert index.scan([]) == []


class TestAmbiguity:
    """Names registered under more than one category."""

    @pytest.fixture
    def index(self):
        index = GazetteerIndex()
        index.add("LOC", ["Paris"])
        index.add("PER", ["Paris"])
        index.add("PER", ["Paris", "Hilton"])
        return index

    def test_ambiguous_outcome(self, index):
        """A name under two categories reports both."""
        found = index.match(["Paris"], 0)
        assert found.outcome.kind is OutcomeKind.AMBIGUOUS
        assert found.outcome.categories == ("LOC", "PER")
        assert found.outcome.label == "LOC+PER"
        assert found.outcome.category is None

    def test_ambiguous_span_is_undecided(self, index):
        """An ambiguous span is tagged O."""
        assert index.tag_sequence(["in", "Paris"]) == ["O", "O"]

    def test_longer_unambiguous_name_wins(self, index):
        """A longer unambiguous name beats an ambiguous prefix."""
        assert index.tag_sequence(["Paris", "Hilton"]) == ["B-PER", "I-PER"]

    def test_outcomes_per_word(self, index):
        """Each word carries the outcome of its span."""
        outcomes = index.outcomes(["Paris", "Hilton", "in", "Paris"])
        assert outcomes[0] == MatchOutcome.single("PER")
        assert outcomes[1] == MatchOutcome.single("PER")
        assert outcomes[2].kind is OutcomeKind.NONE
        assert outcomes[3].kind is OutcomeKind.AMBIGUOUS

    def test_duplicate_registration_is_not_ambiguous(self):
        """Registering a name twice in one category stays single."""
        index = GazetteerIndex()
        index.add("LOC", ["Utrecht"])
        index.add("LOC", ["Utrecht"])
        assert index.match(["Utrecht"], 0).outcome == MatchOutcome.single("LOC")
