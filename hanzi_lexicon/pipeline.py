"""
The entry construction pipeline.

Two phases:
1. Every raw dictionary line becomes an Entry on its own (definitions,
   pinyin forms, radicals, kanji, glosses).
2. Once all entries exist, Taiwanese readings are composed from single
   characters, search variants are generated and every entry is scored
   against the frequency data.

All lookup tables are built up front into a Corpora object and only read
afterwards.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, List, Mapping, Tuple, Union

from hanzi_lexicon.config import CorpusPaths
from hanzi_lexicon.definitions import normalize_definitions
from hanzi_lexicon.emitter import write_entries
from hanzi_lexicon.enrichment import attach_glosses, attach_kanji, attach_radicals
from hanzi_lexicon.entry import Entry, OrderedSet
from hanzi_lexicon.loaders import (
    accumulate_in_others,
    iter_dictionary,
    load_frequency_records,
    load_glosses,
    load_kanji_table,
    load_proficiency_records,
    load_radicals,
)
from hanzi_lexicon.phonetics import prettify, search_variants, to_secondary_phonetic
from hanzi_lexicon.raw_types import KanjiCharacter, RawDictionaryLine
from hanzi_lexicon.resolver import backfill_alt_pronunciations, unambiguous_forms
from hanzi_lexicon.scoring import score_entry
from hanzi_lexicon.tables import FrequencyTable, InOthersIndex, ProficiencyIndex
from hanzi_lexicon.variants import ScriptConverter

logger = logging.getLogger(__name__)


# ============================================================================
# Corpora
# ============================================================================

@dataclass(frozen=True)
class Corpora:
    """Every lookup table the pipeline joins against. Read-only."""
    proficiency: ProficiencyIndex = field(default_factory=lambda: ProficiencyIndex.from_records([]))
    in_others: InOthersIndex = field(default_factory=InOthersIndex.build)
    simplified_radicals: Mapping[str, List[List[str]]] = field(default_factory=dict)
    traditional_radicals: Mapping[str, List[List[str]]] = field(default_factory=dict)
    kanji: Mapping[str, KanjiCharacter] = field(default_factory=dict)
    glosses: Mapping[Tuple[str, str], List[str]] = field(default_factory=dict)
    converter: ScriptConverter = field(default_factory=ScriptConverter)


def load_corpora(paths: CorpusPaths) -> Corpora:
    """Load every configured auxiliary corpus and freeze it into tables."""
    char_table = None
    if paths.char_frequency is not None:
        char_records = load_frequency_records(paths.char_frequency)
        if paths.word_frequency is not None:
            word_records = load_frequency_records(paths.word_frequency)
            accumulate_in_others(char_records, word_records)
        char_table = FrequencyTable.from_records(char_records)
    elif paths.word_frequency is not None:
        logger.warning("Word frequencies given without character frequencies; ignoring them")

    proficiency_records = []
    if paths.proficiency is not None:
        proficiency_records = load_proficiency_records(paths.proficiency)

    kwargs = {}
    if paths.simplified_radicals is not None:
        kwargs["simplified_radicals"] = load_radicals(paths.simplified_radicals)
    if paths.traditional_radicals is not None:
        kwargs["traditional_radicals"] = load_radicals(paths.traditional_radicals)
    if paths.kanji is not None:
        kwargs["kanji"] = load_kanji_table(paths.kanji)
    if paths.glosses is not None:
        kwargs["glosses"] = load_glosses(paths.glosses)
    if paths.variants is not None:
        kwargs["converter"] = ScriptConverter.from_file(paths.variants)

    return Corpora(
        proficiency=ProficiencyIndex.from_records(proficiency_records),
        in_others=InOthersIndex.build(char_table, proficiency_records),
        **kwargs,
    )


# ============================================================================
# Phase 1: Per-Line Construction
# ============================================================================

def build_entry(raw: RawDictionaryLine, corpora: Corpora) -> Entry:
    """Turn one raw dictionary line into an Entry. Needs no other entries."""
    meanings = list(raw.definitions)
    alt_region = normalize_definitions(meanings)
    pretty = prettify(raw.pronunciation)

    entry = Entry(
        simplified=raw.simplified,
        traditional=raw.traditional,
        pronunciation=raw.pronunciation,
        pronunciation_alt_region=alt_region,
        pronunciation_pretty=pretty,
        secondary_phonetic=to_secondary_phonetic(pretty),
        meanings=meanings,
    )

    attach_radicals(entry, corpora.simplified_radicals, corpora.traditional_radicals)
    attach_kanji(entry, corpora.kanji, corpora.converter)
    attach_glosses(entry, corpora.glosses)
    return entry


# ============================================================================
# Phase 2: Cross-Entry Passes
# ============================================================================

def resolve_entries(entries: List[Entry], corpora: Corpora) -> None:
    """Run the passes that need the complete entry list, in place."""
    backfill_alt_pronunciations(entries)

    for entry in entries:
        entry.search_variants = OrderedSet(
            search_variants(entry.pronunciation, entry.pronunciation_alt_region)
        )

    unambiguous = unambiguous_forms(entries)
    logger.info(f"{len(unambiguous)} of {len(entries)} entries have an unambiguous form")

    for entry in entries:
        score_entry(entry, corpora.proficiency, corpora.in_others, unambiguous)


def build_entries(raw_lines: Iterable[RawDictionaryLine], corpora: Corpora) -> List[Entry]:
    """
    Build, resolve and score all entries.

    Returns:
        Entries in corpus order
    """
    entries = []
    for raw in raw_lines:
        entries.append(build_entry(raw, corpora))
        if len(entries) % 50000 == 0:
            logger.info(f"  Parsed {len(entries)} entries...")
    logger.info(f"Parsed {len(entries)} entries")

    resolve_entries(entries, corpora)
    return entries


def run(paths: CorpusPaths, output: Union[str, Path, IO[str]]) -> int:
    """
    Build the dictionary feed and write it to output.

    Returns:
        Number of records written
    """
    if not Path(paths.dictionary).exists():
        raise FileNotFoundError(f"Dictionary corpus not found at {paths.dictionary}")

    start_time = time.time()

    logger.info("Loading corpora...")
    corpora = load_corpora(paths)

    logger.info(f"Parsing dictionary {paths.dictionary}...")
    entries = build_entries(iter_dictionary(paths.dictionary), corpora)

    count = write_entries(entries, output)

    elapsed = time.time() - start_time
    logger.info(f"Wrote {count} entries in {elapsed:.1f} seconds")
    return count
