"""
Commonness scoring and tag derivation.

The boost is a diminishing-returns function of how often a word is
written, spoken and used inside other words. It has a floor of 1.0 so
that entries without any frequency data still rank.
"""

import math
from typing import AbstractSet, Iterable, Optional

from hanzi_lexicon.constants import (
    BOOST_FLOOR,
    COMMON_CHAR_THRESHOLD,
    COMMON_SPOKEN_THRESHOLD,
    COMMON_WRITTEN_THRESHOLD,
    TAG_COMMON,
    TAG_COMMON_CHAR,
    TAG_COMMON_SPOKEN,
    TAG_COMMON_WRITTEN,
    TAG_PROFICIENCY,
    TAG_VERY_COMMON,
    VARIANT_MARKER,
    VERY_COMMON_SPOKEN_THRESHOLD,
    proficiency_level_tag,
)
from hanzi_lexicon.entry import Entry
from hanzi_lexicon.errors import InvariantViolation
from hanzi_lexicon.tables import InOthersIndex, ProficiencyIndex


def commonness_boost(written: float, spoken: float, in_others: float) -> float:
    """
    Compute ``max(4, sqrt(written + spoken + in_others)) / 4``.

    Raises:
        InvariantViolation: If an input is negative or NaN, or the result
            is not a number
    """
    for value in (written, spoken, in_others):
        if math.isnan(value) or value < 0:
            raise InvariantViolation(
                f"Invalid frequency input {value!r} "
                f"(written={written}, spoken={spoken}, in_others={in_others})"
            )
    boost = max(BOOST_FLOOR, math.sqrt(written + spoken + in_others)) / BOOST_FLOOR
    if math.isnan(boost):
        raise InvariantViolation("Commonness boost is NaN")
    return boost


def is_variant_entry(meanings: Iterable[str]) -> bool:
    """True if every sense only says the entry is a variant of another."""
    meanings = list(meanings)
    return bool(meanings) and all(VARIANT_MARKER in m for m in meanings)


def score_entry(
    entry: Entry,
    proficiency: ProficiencyIndex,
    in_others: InOthersIndex,
    unambiguous: AbstractSet[str],
) -> None:
    """
    Attach frequency data, the commonness boost and tags to an entry.

    Forms with a single reading in the corpus are looked up by surface form
    alone; all others need the exact (form, reading) pair, using the
    Taiwanese reading when there is one.
    """
    pronunciation: Optional[str] = None
    if entry.traditional not in unambiguous:
        pronunciation = entry.chosen_pronunciation

    record = proficiency.lookup(entry.traditional, pronunciation)
    written = spoken = 0
    if record is not None:
        entry.proficiency_level = record.level
        written = record.written_per_million
        spoken = record.spoken_per_million
    others = in_others.lookup(entry.traditional, pronunciation)

    entry.commonness_boost = commonness_boost(written, spoken, others)

    # "X, variant of Y" stubs must not outrank Y
    variant = is_variant_entry(entry.meanings)
    if variant:
        written = 0
        entry.commonness_boost = 1.0

    entry.written_per_million = written
    entry.spoken_per_million = spoken
    entry.in_others_per_million = others

    if not variant:
        add_frequency_tags(entry)
    if entry.proficiency_level is not None:
        entry.tags.add(TAG_PROFICIENCY)
        entry.tags.add(proficiency_level_tag(entry.proficiency_level))


def add_frequency_tags(entry: Entry) -> None:
    """Tag an entry by its (already suppressed) frequency values."""
    if entry.written_per_million > COMMON_WRITTEN_THRESHOLD:
        entry.tags.add(TAG_COMMON)
        entry.tags.add(TAG_COMMON_WRITTEN)
    if entry.spoken_per_million > COMMON_SPOKEN_THRESHOLD:
        entry.tags.add(TAG_COMMON)
        entry.tags.add(TAG_COMMON_SPOKEN)
    if entry.spoken_per_million > VERY_COMMON_SPOKEN_THRESHOLD:
        entry.tags.add(TAG_VERY_COMMON)
    if entry.in_others_per_million > COMMON_CHAR_THRESHOLD:
        entry.tags.add(TAG_COMMON_CHAR)
