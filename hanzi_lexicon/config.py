"""
Corpus locations.

Every corpus lives under one data directory with a fixed default file
name. The directory defaults to ``./data`` and can be moved with the
``HANZI_LEXICON_DATA`` environment variable or the CLI.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DATA_DIR_ENV = "HANZI_LEXICON_DATA"

# ============================================================================
# Default File Names
# ============================================================================

DICTIONARY_FILE = "cedict_ts.u8"
WORD_FREQUENCY_FILE = "word_freq.json"
CHAR_FREQUENCY_FILE = "char_freq.json"
PROFICIENCY_FILE = "tocfl.csv"
SIMPLIFIED_RADICALS_FILE = "simplified_character_radicals.txt"
TRADITIONAL_RADICALS_FILE = "traditional_character_radicals.txt"
KANJI_FILE = "kanji.json"
GLOSSES_FILE = "handedict.u8"
VARIANTS_FILE = "kanji_variants.tsv"
OUTPUT_FILE = "db.json"


def default_data_dir() -> Path:
    return Path(os.environ.get(DATA_DIR_ENV, "data"))


@dataclass
class CorpusPaths:
    """
    Paths of every corpus the pipeline reads.

    Only the dictionary is required. An optional corpus set to None is
    skipped; one that is set but missing on disk is an error.
    """
    dictionary: Path
    word_frequency: Optional[Path] = None
    char_frequency: Optional[Path] = None
    proficiency: Optional[Path] = None
    simplified_radicals: Optional[Path] = None
    traditional_radicals: Optional[Path] = None
    kanji: Optional[Path] = None
    glosses: Optional[Path] = None
    variants: Optional[Path] = None

    @classmethod
    def from_directory(cls, data_dir: Optional[Path] = None) -> "CorpusPaths":
        """Use the default file names, leaving out optional files that do not exist."""
        data_dir = Path(data_dir) if data_dir is not None else default_data_dir()

        def optional(name: str) -> Optional[Path]:
            path = data_dir / name
            return path if path.exists() else None

        return cls(
            dictionary=data_dir / DICTIONARY_FILE,
            word_frequency=optional(WORD_FREQUENCY_FILE),
            char_frequency=optional(CHAR_FREQUENCY_FILE),
            proficiency=optional(PROFICIENCY_FILE),
            simplified_radicals=optional(SIMPLIFIED_RADICALS_FILE),
            traditional_radicals=optional(TRADITIONAL_RADICALS_FILE),
            kanji=optional(KANJI_FILE),
            glosses=optional(GLOSSES_FILE),
            variants=optional(VARIANTS_FILE),
        )
