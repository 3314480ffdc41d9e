"""
Key-based joins that attach auxiliary data to an entry.

Each join is independent of the others. A miss is not an error: the
entry simply keeps its empty default.
"""

from typing import List, Mapping, Tuple

from hanzi_lexicon.constants import TAG_WANIKANI, wanikani_level_tag
from hanzi_lexicon.entry import Entry
from hanzi_lexicon.raw_types import KanjiCharacter
from hanzi_lexicon.variants import ScriptConverter


def attach_radicals(
    entry: Entry,
    simplified_radicals: Mapping[str, List[List[str]]],
    traditional_radicals: Mapping[str, List[List[str]]],
) -> None:
    """Attach character decompositions for both scripts."""
    entry.simplified_radicals = [list(g) for g in simplified_radicals.get(entry.simplified, [])]
    entry.traditional_radicals = [list(g) for g in traditional_radicals.get(entry.traditional, [])]


def attach_kanji(
    entry: Entry,
    kanji_table: Mapping[str, KanjiCharacter],
    converter: ScriptConverter,
) -> None:
    """
    Attach the Japanese kanji matching the entry's traditional form.

    The table is keyed by single kanji, so only single-character entries
    can match. Kanji taught by WaniKani also tag the entry with the level.
    """
    kanji = kanji_table.get(converter.to_japanese(entry.traditional))
    if kanji is None:
        return

    entry.kanji = kanji
    if kanji.wk_level is not None:
        entry.tags.add(TAG_WANIKANI)
        entry.tags.add(wanikani_level_tag(kanji.wk_level))


def attach_glosses(entry: Entry, glosses: Mapping[Tuple[str, str], List[str]]) -> None:
    """Attach secondary-language senses for the exact (form, reading) pair."""
    entry.meanings_secondary = list(glosses.get((entry.traditional, entry.pronunciation), []))
