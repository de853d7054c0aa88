"""
Sectioned key/value configuration.

A Configuration maps section names ("global", "tagger", "NER", ...) to
key/value settings. It is filled from a configuration file (see
ner.config_parser), completed with the built-in defaults, queried for the
settings the pipeline needs, and finally written back as a template for the
tagging service that will use the trained model.
"""

import copy
import logging
import os
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import MissingSettingError, OutputError

logger = logging.getLogger(__name__)

GLOBAL_SECTION = "global"
TAGGER_SECTION = "tagger"
NER_SECTION = "NER"

# Settings only needed to train the NER model; they are dropped from the
# generated template.
TRAINER_KEYS = ("baseName", "p", "P", "timblOpts", "M", "n", "%")

# Settings that must be present before any processing starts.
REQUIRED_NER_KEYS = ("set", "p", "P", "timblOpts", "M", "n", "%", "baseName")

DEFAULT_SETTINGS: List[Tuple[str, str, str]] = [
    ("baseName", "nergen", NER_SECTION),
    ("settings", "froggen.settings", TAGGER_SECTION),
    ("p", "ddwdwfWawaa", NER_SECTION),
    ("P", "chnppddwdwFawawasss", NER_SECTION),
    ("n", "10", NER_SECTION),
    ("M", "1000", NER_SECTION),
    ("%", "5", NER_SECTION),
    ("timblOpts", "+vS -G -FColumns K: -a4 U: -a4 -mM -k19 -dID", NER_SECTION),
    ("set", "http://ilk.uvt.nl/folia/sets/frog-ner-nl", NER_SECTION),
    ("max_ner_size", "15", NER_SECTION),
]


class Configuration:
    """
    Settings grouped by section.

    Attributes:
        config_path: File the settings were read from, if any
    """

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self._sections: Dict[str, Dict[str, str]] = {}

    def add_section(self, section: str) -> None:
        self._sections.setdefault(section, {})

    def set(self, key: str, value: str, section: str = GLOBAL_SECTION) -> None:
        self._sections.setdefault(section, {})[key] = value

    def lookup(
        self, key: str, section: str = GLOBAL_SECTION, default: str = ""
    ) -> str:
        """Return the value of key in section, or default when absent."""
        return self._sections.get(section, {}).get(key, default)

    def has(self, key: str, section: str = GLOBAL_SECTION) -> bool:
        return key in self._sections.get(section, {})

    def clear(self, key: str, section: str = GLOBAL_SECTION) -> None:
        self._sections.get(section, {}).pop(key, None)

    def require(self, key: str, section: str = GLOBAL_SECTION) -> str:
        """
        Return a non-empty setting.

        Raises:
            MissingSettingError: If the key is absent or empty
        """
        value = self.lookup(key, section)
        if not value:
            raise MissingSettingError(key, section)
        return value

    def merge(self, other: "Configuration") -> None:
        """
        Fill in every setting of other that this configuration lacks.

        Settings already present here take precedence.
        """
        for section, key, value in other.items():
            if not self.has(key, section):
                self.set(key, value, section)

    def items(self) -> Iterator[Tuple[str, str, str]]:
        """Yield (section, key, value) triples in insertion order."""
        for section, settings in self._sections.items():
            for key, value in settings.items():
                yield section, key, value

    def sections(self) -> List[str]:
        return list(self._sections)

    def copy(self) -> "Configuration":
        return copy.deepcopy(self)

    @property
    def config_dir(self) -> str:
        """
        Directory that relative resource names are resolved against.

        An explicit configDir in the global section wins over the directory of
        the configuration file. Returns "" when neither is known; a non-empty
        result always ends with a path separator.
        """
        config_dir = self.lookup("configDir", GLOBAL_SECTION)
        if not config_dir and self.config_path:
            config_dir = os.path.dirname(os.path.abspath(self.config_path))
        if config_dir and not config_dir.endswith(os.sep):
            config_dir += os.sep
        return config_dir

    def to_string(self) -> str:
        chunks = []
        for section, settings in self._sections.items():
            if not settings:
                continue
            lines = [f"[[{section}]]"]
            lines.extend(f"{key}={value}" for key, value in settings.items())
            chunks.append("\n".join(lines) + "\n")
        return "\n".join(chunks)

    def write(self, path: str) -> None:
        """
        Write the configuration in the file format ner.config_parser reads.

        Raises:
            OutputError: If the file cannot be written
        """
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(self.to_string())
        except OSError as e:
            raise OutputError(f"unable to write configuration {path}: {e}") from e
        logger.info("Wrote configuration to %s", path)


def default_configuration() -> Configuration:
    """Return a Configuration holding the built-in defaults."""
    config = Configuration()
    for key, value, section in DEFAULT_SETTINGS:
        config.set(key, value, section)
    return config


def template_configuration(
    config: Configuration, settings_path: str, gazetteer_path: str
) -> Configuration:
    """
    Derive the configuration template for the tagging service.

    Trainer-only settings are dropped; the NER section is pointed at the
    freshly trained model settings and the gazetteer that was used.
    """
    template = config.copy()
    for key in TRAINER_KEYS:
        template.clear(key, NER_SECTION)
    template.set("settings", settings_path, NER_SECTION)
    template.set("known_ners", gazetteer_path, NER_SECTION)
    template.set("version", "2.0", NER_SECTION)
    return template


def template_file_name(config_file: Optional[str]) -> str:
    """
    Return the file name for the generated configuration template.

    Without a configuration file the name is fixed; otherwise "-nergen" is
    inserted before the first dot of the configuration file's base name.
    """
    if not config_file:
        return "frog-nergen.cfg.template"
    name = os.path.basename(config_file)
    dot = name.find(".")
    if dot < 0:
        return f"{name}-nergen.cfg.template"
    return f"{name[:dot]}-nergen{name[dot:]}"
