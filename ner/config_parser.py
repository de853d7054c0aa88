from pathlib import Path
from typing import Optional

from lark import Lark
from lark.exceptions import LarkError, VisitError

from ner.configuration import Configuration
from ner.config_transformer import ConfigTransformer
from ner.errors import ConfigError

GRAMMAR_PATH = Path(__file__).parent / "config_grammar.lark"
with open(GRAMMAR_PATH, "r", encoding="utf-8") as f:
    CONFIG_GRAMMAR = f.read()

config_parser = Lark(CONFIG_GRAMMAR, start="start", parser="lalr")


def parse_string(code: str, *, config_path: Optional[str] = None) -> Configuration:
    """
    Parse configuration text into a Configuration.

    Args:
        code: Configuration file contents
        config_path: Path the text was read from, used to derive configDir

    Returns:
        Parsed Configuration

    Raises:
        ConfigError: If the text does not follow the configuration syntax
    """
    where = config_path or "<string>"
    if code and not code.endswith("\n"):
        code += "\n"
    try:
        tree = config_parser.parse(code)
    except LarkError as e:
        raise ConfigError(f"unable to parse configuration {where}: {e}") from e
    try:
        return ConfigTransformer(config_path=config_path).transform(tree)
    except VisitError as ve:
        raise ConfigError(
            f"unable to parse configuration {where}: {ve.orig_exc}"
        ) from ve


def parse_file(path) -> Configuration:
    try:
        with open(path, "r", encoding="utf-8") as file:
            code = file.read()
    except OSError as e:
        raise ConfigError(f"unable to open: {path}: {e}") from e
    return parse_string(code, config_path=str(path))
