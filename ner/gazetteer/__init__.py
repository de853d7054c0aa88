"""
Gazetteer package - dictionary based entity matching.

- core: Match outcome and match data structures
- loader: Reading gazetteer specification and name list files
- index: The longest-match gazetteer index and sequence tagger
"""

from .core import GazetteerMatch, MatchOutcome, OutcomeKind
from .index import DEFAULT_MAX_NER_SIZE, GazetteerIndex
from .loader import read_name_list, read_spec_file

__all__ = [
    "DEFAULT_MAX_NER_SIZE",
    "GazetteerIndex",
    "GazetteerMatch",
    "MatchOutcome",
    "OutcomeKind",
    "read_name_list",
    "read_spec_file",
]
