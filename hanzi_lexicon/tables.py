"""
Immutable lookup tables for hanzi-lexicon.

Loaded corpus records are frozen into marisa_trie.RecordTrie structures
once, then shared read-only by every stage of the pipeline. Each table
stores fixed-size binary records keyed by surface form, or by surface
form and pronunciation for lookups that need to be unambiguous.
"""

from collections import defaultdict
from typing import Dict, Iterable, Iterator, Optional, Tuple

import marisa_trie

from hanzi_lexicon.constants import MAX_PER_MILLION
from hanzi_lexicon.phonetics import pronunciation_key, split_syllables
from hanzi_lexicon.raw_types import FrequencyRecord, ProficiencyRecord

# ============================================================================
# Binary Record Schemas
# ============================================================================
# Frequency:  count (uint64), per_million (double),
#             in_others (uint64), in_others_per_million (double)
# Proficiency: level (uint8), written_per_million (uint32),
#              spoken_per_million (uint32)
# In others:  per_million (uint32)

FREQUENCY_FORMAT = "<QdQd"
PROFICIENCY_FORMAT = "<BII"
IN_OTHERS_FORMAT = "<I"

KEY_SEPARATOR = "\t"


def make_key(surface: str, pronunciation: Optional[str] = None) -> str:
    """Trie key for a surface form, optionally qualified by pronunciation."""
    if pronunciation is None:
        return surface
    return f"{surface}{KEY_SEPARATOR}{pronunciation_key(pronunciation)}"


def _first(trie: marisa_trie.RecordTrie, key: str) -> Optional[tuple]:
    records = trie.get(key)
    if not records:
        return None
    return records[0]


# ============================================================================
# Frequency Table
# ============================================================================

class FrequencyTable:
    """Frozen frequency records keyed by surface form."""

    def __init__(self, trie: marisa_trie.RecordTrie):
        self._trie = trie

    @classmethod
    def from_records(cls, records: Dict[str, FrequencyRecord]) -> "FrequencyTable":
        def generate_items():
            for surface, record in records.items():
                yield (surface, (
                    record.occurrence_count,
                    record.occurrence_per_million,
                    record.occurrence_in_others,
                    record.occurrence_per_million_in_others,
                ))

        return cls(marisa_trie.RecordTrie(FREQUENCY_FORMAT, generate_items()))

    def get(self, surface: str) -> Optional[FrequencyRecord]:
        record = _first(self._trie, surface)
        if record is None:
            return None
        count, per_million, in_others, in_others_pm = record
        return FrequencyRecord(
            surface_form=surface,
            occurrence_count=count,
            occurrence_per_million=per_million,
            occurrence_in_others=in_others,
            occurrence_per_million_in_others=in_others_pm,
        )

    def items(self) -> Iterator[Tuple[str, FrequencyRecord]]:
        for surface, (count, per_million, in_others, in_others_pm) in self._trie.items():
            yield surface, FrequencyRecord(
                surface_form=surface,
                occurrence_count=count,
                occurrence_per_million=per_million,
                occurrence_in_others=in_others,
                occurrence_per_million_in_others=in_others_pm,
            )

    def __contains__(self, surface: str) -> bool:
        return surface in self._trie

    def __len__(self) -> int:
        return len(self._trie)


# ============================================================================
# Proficiency Index
# ============================================================================

class ProficiencyIndex:
    """
    Word list data keyed by surface form and by (surface form, pinyin).

    When several records share a key, the first one in file order wins.
    """

    def __init__(self, trie: marisa_trie.RecordTrie):
        self._trie = trie

    @classmethod
    def from_records(cls, records: Iterable[ProficiencyRecord]) -> "ProficiencyIndex":
        items: Dict[str, Tuple[int, int, int]] = {}
        for record in records:
            value = (record.level, record.written_per_million, record.spoken_per_million)
            items.setdefault(make_key(record.surface_form), value)
            items.setdefault(make_key(record.surface_form, record.pronunciation), value)
        return cls(marisa_trie.RecordTrie(PROFICIENCY_FORMAT, items.items()))

    def lookup(
        self,
        surface: str,
        pronunciation: Optional[str] = None,
    ) -> Optional[ProficiencyRecord]:
        """
        Look up a word.

        Args:
            surface: Traditional form
            pronunciation: Required for forms with several readings; None
                looks up by surface form alone
        """
        record = _first(self._trie, make_key(surface, pronunciation))
        if record is None:
            return None
        level, written, spoken = record
        return ProficiencyRecord(
            surface_form=surface,
            pronunciation=pronunciation or "",
            level=level,
            written_per_million=written,
            spoken_per_million=spoken,
        )

    def __len__(self) -> int:
        return len(self._trie)


# ============================================================================
# In-Others Index
# ============================================================================

class InOthersIndex:
    """
    How common a character is as part of other words, per million.

    Keys by surface form come from the character frequency table (after
    accumulate_in_others). Keys by (character, pinyin) come from the
    proficiency word list, whose words carry readings: every character of
    a multi-character word is credited with the word's written and spoken
    frequency under the syllable it is read with.
    """

    def __init__(self, trie: marisa_trie.RecordTrie):
        self._trie = trie

    @classmethod
    def build(
        cls,
        char_table: Optional[FrequencyTable] = None,
        proficiency_records: Iterable[ProficiencyRecord] = (),
    ) -> "InOthersIndex":
        items: Dict[str, int] = {}
        if char_table is not None:
            for surface, record in char_table.items():
                items[make_key(surface)] = round(record.occurrence_per_million_in_others)

        by_reading: Dict[str, int] = defaultdict(int)
        for record in proficiency_records:
            if len(record.surface_form) < 2:
                continue
            # Word list pinyin is usually unspaced (táiwān)
            syllables = split_syllables(record.pronunciation)
            if syllables is None or len(syllables) != len(record.surface_form):
                continue
            total = record.written_per_million + record.spoken_per_million
            for char, syllable in zip(record.surface_form, syllables):
                by_reading[make_key(char, syllable)] += total
        items.update(by_reading)

        return cls(marisa_trie.RecordTrie(
            IN_OTHERS_FORMAT,
            ((key, (min(value, MAX_PER_MILLION),)) for key, value in items.items()),
        ))

    def lookup(self, surface: str, pronunciation: Optional[str] = None) -> int:
        record = _first(self._trie, make_key(surface, pronunciation))
        if record is None:
            return 0
        return record[0]
