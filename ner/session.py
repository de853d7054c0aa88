"""
Per-run state shared by the pipeline components.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .gazetteer import GazetteerIndex

logger = logging.getLogger(__name__)

DEFAULT_EOS_MARKER = "<utt>"


@dataclass
class Session:
    """
    State of one conversion run.

    The end-of-sentence marker starts out unset, which means sentences are
    separated by blank lines. The first marker line seen in the input fixes it
    for every separator written afterwards.
    """

    gazetteer: GazetteerIndex = field(default_factory=GazetteerIndex)
    marker: str = DEFAULT_EOS_MARKER
    eos_marker: Optional[str] = None
    sentences: int = 0

    def observe_marker(self) -> None:
        if self.eos_marker is None:
            logger.info("End-of-sentence marker %s in use", self.marker)
        self.eos_marker = self.marker

    @property
    def marker_seen(self) -> bool:
        return self.eos_marker is not None
