"""
Reading gazetteer files.

A gazetteer specification file lists one category per line together with the
name list file holding its entries:

    LOC<TAB>locations.txt
    PER<TAB>persons.txt

Relative list file names are resolved against the directory of the
specification file. Each list file holds one name per line; a name consists of
one or more words separated by ASCII blanks.
"""

import logging
import os
from typing import List, Tuple

from ..errors import LoadError
from ..text import ASCII_BLANKS, split_fields

logger = logging.getLogger(__name__)


def _is_skipped(line: str) -> bool:
    return not line or line.startswith("#")


def read_spec_file(spec_path: str) -> List[Tuple[str, str]]:
    """
    Read a gazetteer specification file.

    Args:
        spec_path: Path to the specification file

    Returns:
        (category, list file path) pairs in file order

    Raises:
        LoadError: If the file is unreadable or a line is malformed
    """
    spec_dir = os.path.dirname(os.path.abspath(spec_path))
    entries = []
    try:
        with open(spec_path, "r", encoding="utf-8") as f:
            for line_number, raw in enumerate(f, start=1):
                line = raw.strip(ASCII_BLANKS)
                if _is_skipped(line):
                    continue
                parts = split_fields(line)
                if len(parts) != 2:
                    raise LoadError(
                        f"{spec_path}:{line_number}: expected "
                        f"'category<TAB>file', got {line!r}"
                    )
                category, list_file = parts
                if not os.path.isabs(list_file):
                    list_file = os.path.join(spec_dir, list_file)
                entries.append((category, list_file))
    except OSError as e:
        raise LoadError(f"unable to read gazetteer file {spec_path}: {e}") from e

    logger.debug("Read %s gazetteer lists from %s", len(entries), spec_path)
    return entries


def read_name_list(list_path: str) -> List[Tuple[str, ...]]:
    """
    Read the names of one gazetteer list file.

    Args:
        list_path: Path to the name list

    Returns:
        Each name as a tuple of words

    Raises:
        LoadError: If the file is unreadable
    """
    names = []
    try:
        with open(list_path, "r", encoding="utf-8") as f:
            for raw in f:
                line = raw.strip(ASCII_BLANKS)
                if _is_skipped(line):
                    continue
                names.append(tuple(split_fields(line)))
    except OSError as e:
        raise LoadError(f"unable to read gazetteer list {list_path}: {e}") from e
    return names
