"""
hanzi-lexicon: Chinese-English dictionary feed builder

Fuses CC-CEDICT with word lists, frequency tables, radical tables and a
kanji cross-reference into one normalized, scored and tagged JSON record
per dictionary entry, ready for a search engine to index.

Basic Usage:
    from hanzi_lexicon import CorpusPaths, run

    paths = CorpusPaths.from_directory("data")
    run(paths, "db.json")

Or entry by entry:
    from hanzi_lexicon import Corpora, build_entries, parse_dictionary_line

    raw = parse_dictionary_line("下午 下午 [xia4 wu3] /afternoon/p.m./")
    entries = build_entries([raw], Corpora())
    print(entries[0].pronunciation_pretty)  # xià wǔ
"""

__version__ = "0.1.0"

from hanzi_lexicon.config import CorpusPaths
from hanzi_lexicon.entry import Entry
from hanzi_lexicon.errors import InvariantViolation, LexiconError, MalformedInputError
from hanzi_lexicon.loaders import parse_dictionary_line
from hanzi_lexicon.pipeline import Corpora, build_entries, build_entry, load_corpora, run

__all__ = [
    "Corpora",
    "CorpusPaths",
    "Entry",
    "InvariantViolation",
    "LexiconError",
    "MalformedInputError",
    "build_entries",
    "build_entry",
    "load_corpora",
    "parse_dictionary_line",
    "run",
]
