"""
Config Transformer: Lark tree transformer for configuration files.

Converts the parse tree produced by config_grammar.lark into a Configuration
object, applying section headers to the assignments that follow them.
"""

from typing import Optional

from lark import Transformer, v_args

from ner.configuration import GLOBAL_SECTION, Configuration


def _clean_value(raw: Optional[str]) -> str:
    if raw is None:
        return ""
    value = str(raw).strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]
    return value


@v_args(inline=True)
class ConfigTransformer(Transformer):
    """
    Transformer that converts Lark parse trees into a Configuration.

    Section headers and assignments are first turned into small tagged tuples;
    the start rule replays them in order so each assignment lands in the most
    recent section.
    """

    def __init__(self, config_path: Optional[str] = None):
        super().__init__()
        self.config_path = config_path

    def start(self, *items):
        """Build the Configuration from the ordered items."""
        config = Configuration(config_path=self.config_path)
        section = GLOBAL_SECTION
        for kind, *payload in items:
            if kind == "section":
                section = payload[0]
                config.add_section(section)
            else:
                key, value = payload
                config.set(key, value, section)
        return config

    def section(self, name):
        """Transform a [[section]] header."""
        return ("section", str(name).strip())

    def assignment(self, key, value=None):
        """Transform a key=value line."""
        return ("assign", str(key).strip(), _clean_value(value))
