"""
Field splitting shared by the corpus, gazetteer and tagger readers.

Only ASCII blanks separate fields. Other Unicode whitespace, such as the
non-breaking space in "10 000", stays part of the word.
"""

import re
from typing import List

FIELD_SEPARATOR = re.compile(r"[ \t\r\n\f\v]+")
ASCII_BLANKS = " \t\r\n\f\v"


def split_fields(line: str) -> List[str]:
    """Split a line on runs of ASCII whitespace, dropping empty fields."""
    stripped = line.strip(ASCII_BLANKS)
    if not stripped:
        return []
    return FIELD_SEPARATOR.split(stripped)


def is_blank(line: str) -> bool:
    return not line.strip(ASCII_BLANKS)
