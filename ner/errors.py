"""
Error types raised by the nergen pipeline.

Every error is fatal for the run: the command line front end reports the
message and exits with status 1.
"""

from typing import Optional


class NergenError(Exception):
    """Base class for all nergen errors."""


class ConfigError(NergenError):
    """A configuration file could not be read or parsed."""


class MissingSettingError(NergenError):
    """A required configuration key is absent."""

    def __init__(self, key: str, section: str):
        super().__init__(f"missing key: '{key}' for module: '{section}'")
        self.key = key
        self.section = section


class LoadError(NergenError):
    """A gazetteer specification or list file could not be loaded."""


class FormatError(NergenError):
    """An input line does not split into the expected number of columns."""

    def __init__(
        self, line: str, line_number: Optional[int] = None, expected: str = "2"
    ):
        where = f"line {line_number}" if line_number is not None else "input"
        super().__init__(
            f"malformed {where} (expected {expected} columns): {line!r}"
        )
        self.line = line
        self.line_number = line_number


class TaggerInitError(NergenError):
    """The external POS tagger could not be initialized."""


class TaggingError(NergenError):
    """The external POS tagger failed on a sentence."""


class OutputError(NergenError):
    """An output directory or file is not creatable or writable."""


class TrainerError(NergenError):
    """The external trainer could not be run or exited with an error."""


class InputError(NergenError):
    """An input corpus file could not be read."""
