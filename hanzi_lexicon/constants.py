"""
Shared constants for hanzi-lexicon.

Tag names, frequency thresholds and the patterns used to pick apart
CC-CEDICT style definitions.
"""

import re
from typing import Tuple

# ============================================================================
# Definition Patterns
# ============================================================================

# "(Taiwan pr. [han4])"
ALT_REGION_PATTERN = re.compile(r"Taiwan pr\. \[(.*?)\]")

# Any bracketed phonetic annotation, e.g. "variant of 個|个[ge4]"
PHONETIC_ANNOTATION_PATTERN = re.compile(r"\[(.*?)\]")

# TRAD SIMP [pin1 yin1] /def 1/def 2/
DICTIONARY_LINE_PATTERN = re.compile(r"^(\S+) (\S+) \[([^\]]*)\] /(.*)/\s*$")

SENSE_DELIMITER = ";"
VARIANT_MARKER = "variant"


# ============================================================================
# Commonness Thresholds (per million)
# ============================================================================

COMMON_WRITTEN_THRESHOLD = 150  # roughly the top 1000 words
COMMON_SPOKEN_THRESHOLD = 150
VERY_COMMON_SPOKEN_THRESHOLD = 450  # roughly the top 300 words
COMMON_CHAR_THRESHOLD = 550

BOOST_FLOOR = 4.0


# ============================================================================
# Tags
# ============================================================================

TAG_COMMON = "common"
TAG_COMMON_WRITTEN = "common_written"
TAG_COMMON_SPOKEN = "common_spoken"
TAG_VERY_COMMON = "verycommon"
TAG_COMMON_CHAR = "commonchar"
TAG_PROFICIENCY = "proficiency"
TAG_WANIKANI = "wanikani"


def proficiency_level_tag(level: int) -> str:
    return f"{TAG_PROFICIENCY}{level}"


def wanikani_level_tag(level: int) -> str:
    return f"{TAG_WANIKANI}{level}"


# ============================================================================
# Output Schema
# ============================================================================

# Field order of an emitted record. Optional fields are left out when empty.
RECORD_FIELDS: Tuple[str, ...] = (
    "simplified",
    "traditional",
    "simplified_radicals",
    "traditional_radicals",
    "pronunciation",
    "pronunciation_alt_region",
    "search_variants",
    "secondary_phonetic",
    "pronunciation_pretty",
    "proficiency_level",
    "meanings",
    "meanings_secondary",
    "tags",
    "commonness_boost",
    "written_per_million",
    "spoken_per_million",
    "in_others_per_million",
    "kanji",
)

OPTIONAL_FIELDS = frozenset({
    "simplified_radicals",
    "traditional_radicals",
    "pronunciation_alt_region",
    "proficiency_level",
    "meanings_secondary",
    "kanji",
})


# ============================================================================
# Table Limits
# ============================================================================
# Proficiency levels are stored as uint8, frequencies per million as uint32

MAX_PROFICIENCY_LEVEL = 255
MAX_PER_MILLION = 2 ** 32 - 1
