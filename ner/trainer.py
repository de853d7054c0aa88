"""
Training the NER tagger on the generated data file.
"""

import logging
import shlex
import subprocess
from typing import List

from .configuration import NER_SECTION, Configuration
from .errors import TrainerError

logger = logging.getLogger(__name__)


def build_trainer_command(
    config: Configuration,
    data_path: str,
    settings_path: str,
    marker_seen: bool,
    keep_intermediate: bool = False,
    executable: str = "Mbtg",
) -> List[str]:
    """
    Build the Mbtg command line that trains the NER tagger.

    Args:
        config: Configuration holding the NER trainer settings
        data_path: The generated training file
        settings_path: Settings file the trainer will write
        marker_seen: Whether the corpus used the end-of-sentence marker
        keep_intermediate: Keep the trainer's intermediate files (-X)
        executable: Name or path of the trainer program

    Raises:
        MissingSettingError: If a trainer setting is absent
    """
    command = [
        executable,
        "-E",
        data_path,
        "-s",
        settings_path,
        "-p",
        config.require("p", NER_SECTION),
        "-P",
        config.require("P", NER_SECTION),
        "-O" + config.require("timblOpts", NER_SECTION),
        "-M",
        config.require("M", NER_SECTION),
        "-n",
        config.require("n", NER_SECTION),
        "-%",
        config.require("%", NER_SECTION),
    ]
    if not marker_seen:
        # sentences are separated by empty lines
        command.append("-eEL")
    if keep_intermediate:
        command.append("-X")
    command.append("-DLogSilent")
    return command


def run_trainer(command: List[str]) -> None:
    """
    Run the trainer and wait for it to finish.

    Raises:
        TrainerError: If the trainer cannot be started or fails
    """
    logger.info("Starting trainer: %s", shlex.join(command))
    try:
        subprocess.run(command, check=True)
    except FileNotFoundError as e:
        raise TrainerError(f"trainer not found: {command[0]}") from e
    except subprocess.CalledProcessError as e:
        raise TrainerError(f"trainer exited with status {e.returncode}") from e
