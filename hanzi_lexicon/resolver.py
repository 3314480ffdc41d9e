"""
Cross-entry resolution.

Runs after every entry of the corpus exists. Entries never point at each
other; lookups go through index maps (character -> positions in the entry
list) built from a snapshot of the whole list.
"""

import logging
from collections import Counter
from typing import Dict, FrozenSet, List, Optional, Sequence

from hanzi_lexicon.entry import Entry

logger = logging.getLogger(__name__)


# ============================================================================
# Single Character Index
# ============================================================================

def index_single_characters(entries: Sequence[Entry]) -> Dict[str, List[int]]:
    """Map each single-character traditional form to its entry positions."""
    index: Dict[str, List[int]] = {}
    for i, entry in enumerate(entries):
        if entry.is_single_char:
            index.setdefault(entry.traditional, []).append(i)
    return index


def _alt_syllable(char: str, entries: Sequence[Entry], index: Dict[str, List[int]]) -> Optional[str]:
    # First entry in corpus order that has a Taiwanese reading wins
    for i in index[char]:
        alt = entries[i].pronunciation_alt_region
        if alt:
            return alt
    return None


# ============================================================================
# Taiwanese Pronunciation Backfill
# ============================================================================

def compose_alt_pronunciation(
    entry: Entry,
    entries: Sequence[Entry],
    index: Dict[str, List[int]],
) -> Optional[str]:
    """
    Compose a Taiwanese reading for a word from its characters' readings.

    E.g. if 垃 is read ``le4`` in Taiwan, 垃圾 (``la1 ji1``) becomes
    ``le4 se4``. Every character must have a single-character entry;
    otherwise nothing is composed. Characters whose entries have no
    Taiwanese reading keep their syllable from the word.

    Returns:
        The composed reading (lower case), or None if the entry already has
        one, is a single character, cannot be composed, or reads the same
    """
    if entry.pronunciation_alt_region is not None or entry.is_single_char:
        return None

    syllables = entry.pronunciation.split()
    if len(syllables) != len(entry.traditional):
        return None

    composed = []
    for char, syllable in zip(entry.traditional, syllables):
        if char not in index:
            return None
        alt = _alt_syllable(char, entries, index)
        composed.append(alt if alt is not None else syllable)

    result = " ".join(composed).strip().lower()
    if result == entry.pronunciation.lower():
        return None
    return result


def backfill_alt_pronunciations(entries: List[Entry]) -> int:
    """
    Fill in composed Taiwanese readings for multi-character entries.

    Existing readings are never overwritten.

    Returns:
        Number of entries that received a reading
    """
    index = index_single_characters(entries)
    # Compute against the snapshot first so results do not depend on order
    composed = [compose_alt_pronunciation(entry, entries, index) for entry in entries]

    fixed = 0
    for entry, alt in zip(entries, composed):
        if alt is not None:
            entry.pronunciation_alt_region = alt
            fixed += 1

    logger.info(f"Composed Taiwanese pronunciation for {fixed} entries")
    return fixed


# ============================================================================
# Ambiguity
# ============================================================================

def count_surface_forms(entries: Sequence[Entry]) -> Counter:
    """Count how many entries share each traditional form."""
    return Counter(entry.traditional for entry in entries)


def unambiguous_forms(entries: Sequence[Entry]) -> FrozenSet[str]:
    """Traditional forms with exactly one pronunciation variant in the corpus."""
    counts = count_surface_forms(entries)
    return frozenset(form for form, count in counts.items() if count == 1)
