"""nergen – NER training data generation from a tagged corpus and gazetteers."""

__version__ = "0.1.0"

from .bootstrap import BootstrapConverter
from .configuration import Configuration, default_configuration
from .errors import (
    ConfigError,
    FormatError,
    InputError,
    LoadError,
    MissingSettingError,
    NergenError,
    OutputError,
    TaggerInitError,
    TaggingError,
    TrainerError,
)
from .gazetteer import GazetteerIndex, GazetteerMatch, MatchOutcome, OutcomeKind
from .merge import MergeMode, ScoredTag, merge, merge_scored
from .pipeline import TrainingDataGenerator
from .reader import Sentence, SentenceReader, Token
from .session import DEFAULT_EOS_MARKER, Session
from .tagger import MbtTagger, PosTagger, TagResult
from .windower import FeatureRecord, rewindow, tag_context, window, write_sentence

__all__ = [
    "BootstrapConverter",
    "ConfigError",
    "Configuration",
    "DEFAULT_EOS_MARKER",
    "FeatureRecord",
    "FormatError",
    "GazetteerIndex",
    "GazetteerMatch",
    "InputError",
    "LoadError",
    "MatchOutcome",
    "MbtTagger",
    "MergeMode",
    "MissingSettingError",
    "NergenError",
    "OutcomeKind",
    "OutputError",
    "PosTagger",
    "ScoredTag",
    "Sentence",
    "SentenceReader",
    "Session",
    "TagResult",
    "TaggerInitError",
    "TaggingError",
    "Token",
    "TrainerError",
    "TrainingDataGenerator",
    "default_configuration",
    "merge",
    "merge_scored",
    "rewindow",
    "tag_context",
    "window",
    "write_sentence",
]
