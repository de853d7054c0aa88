"""
Reconciling corpus NER tags with gazetteer derived tags.

Three policies are supported:

- pass-through: the corpus tags are kept as they are
- override: gazetteer mentions fill positions the corpus tagged "O"; any
  other corpus tag is left alone
- bootstrap: the gazetteer tags replace the corpus tags everywhere
"""

import logging
from enum import Enum
from typing import List, NamedTuple, Sequence

from .gazetteer.core import AMBIGUITY_SEPARATOR

logger = logging.getLogger(__name__)

OUTSIDE = "O"


class MergeMode(Enum):
    PASS_THROUGH = "pass-through"
    OVERRIDE = "override"
    BOOTSTRAP = "bootstrap"


class ScoredTag(NamedTuple):
    """A tag with the confidence it was assigned with."""

    tag: str
    confidence: float = 1.0


def split_tag(tag: str):
    """Split "B-LOC" into ("B", "LOC"); plain labels give ("", label)."""
    if len(tag) > 2 and tag[1] == "-" and tag[0] in "BI":
        return tag[0], tag[2:]
    return "", tag


def resolve_tag(tag: str) -> str:
    """Map a tag whose category is a '+' joined disjunction to "O"."""
    _, category = split_tag(tag)
    if AMBIGUITY_SEPARATOR in category:
        return OUTSIDE
    return tag


def _fill(previous: str, proposed: str) -> str:
    # An inserted continuation must follow a mention of the same category.
    prefix, category = split_tag(proposed)
    if prefix == "I" and split_tag(previous) not in (("B", category), ("I", category)):
        return f"B-{category}"
    return proposed


def merge_scored(
    original: Sequence[ScoredTag],
    gazetteer: Sequence[ScoredTag],
    mode: MergeMode,
) -> List[ScoredTag]:
    """
    Merge two aligned scored tag sequences.

    Args:
        original: Tags supplied by the corpus
        gazetteer: Tags derived from gazetteer matches
        mode: The merge policy

    Returns:
        The merged tags, one per position

    Raises:
        ValueError: If the sequences differ in length
    """
    if len(original) != len(gazetteer):
        raise ValueError(
            f"cannot merge {len(original)} corpus tags with "
            f"{len(gazetteer)} gazetteer tags"
        )
    if mode is MergeMode.PASS_THROUGH:
        return list(original)

    proposed = [ScoredTag(resolve_tag(g.tag), g.confidence) for g in gazetteer]
    if mode is MergeMode.BOOTSTRAP:
        return proposed

    merged: List[ScoredTag] = []
    filled = 0
    for orig, prop in zip(original, proposed):
        if orig.tag == OUTSIDE and prop.tag != OUTSIDE:
            previous = merged[-1].tag if merged else OUTSIDE
            merged.append(ScoredTag(_fill(previous, prop.tag), prop.confidence))
            filled += 1
        else:
            merged.append(orig)
    if filled:
        logger.debug("Override filled %s of %s positions", filled, len(merged))
    return merged


def merge(
    original: Sequence[str], gazetteer: Sequence[str], mode: MergeMode
) -> List[str]:
    """Merge plain tag sequences; every tag is weighted 1.0."""
    merged = merge_scored(
        [ScoredTag(t) for t in original], [ScoredTag(t) for t in gazetteer], mode
    )
    return [s.tag for s in merged]
