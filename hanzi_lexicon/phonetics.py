"""
Pinyin helpers for hanzi-lexicon.

Converts tone-numbered pinyin (``jia1 li3``) into its diacritic form
(``jiā lǐ``) and into Zhuyin, and generates the spelling variants the
search engine matches against.
"""

import re
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Optional

from pypinyin import constants as pypinyin_constants
from pypinyin.contrib.tone_convert import to_normal, to_tone
from pypinyin.style.bopomofo import BopomofoConverter

# A numbered syllable: letters (with u: / ü for the umlaut) and a tone digit
NUMBERED_SYLLABLE = re.compile(r"^([A-Za-zÜü:]+)([1-5])$")

# Syllabic nasals and interjections (嘸 m2, 嗯 ng2) have no Zhuyin spelling
INTERJECTION_SYLLABLES = frozenset({"m", "n", "ng", "hm", "hng"})

# Longest toneless syllable (zhuang, chuang, shuang)
MAX_SYLLABLE_LENGTH = 6

# Separators inside one pinyin cell: xī'ān, xī-ān
SYLLABLE_SEPARATORS = re.compile(r"[\s'’-]+")

ERHUA_SUFFIX = "r"
APOSTROPHE_INITIALS = frozenset("aoe")

_BOPOMOFO = BopomofoConverter()


# ============================================================================
# Diacritics
# ============================================================================

def prettify_syllable(syllable: str) -> str:
    """
    Convert one tone-numbered syllable to its diacritic form.

    Syllables that do not look like ``letters + tone digit`` are returned
    unchanged.
    """
    match = NUMBERED_SYLLABLE.match(syllable)
    if match is None:
        return syllable

    base, tone = match.groups()
    capitalized = base[0].isupper()
    base = base.lower().replace("u:", "v").replace("ü", "v")

    if tone == "5":
        pretty = base.replace("v", "ü")
    else:
        pretty = to_tone(base + tone)

    if capitalized:
        pretty = pretty[0].upper() + pretty[1:]
    return pretty


def prettify(pinyin: str) -> str:
    """Convert a space-separated, tone-numbered pinyin string to diacritics."""
    return " ".join(prettify_syllable(part) for part in pinyin.split())


# ============================================================================
# Syllables
# ============================================================================

@lru_cache(maxsize=1)
def valid_syllables() -> FrozenSet[str]:
    """Toneless pinyin syllables known to pypinyin's character dictionary."""
    syllables = set()
    for value in pypinyin_constants.PINYIN_DICT.values():
        for item in str(value).split(","):
            base = to_normal(item.strip())
            if base:
                syllables.add(base)
    return frozenset(syllables)


def _toneless_letter(char: str) -> str:
    base = to_normal(char.lower())
    return base if len(base) == 1 else char.lower()


def _segment(text: str, start: int = 0) -> Optional[List[int]]:
    # End offsets of a split of text[start:], longest syllable first
    if start == len(text):
        return []
    if start > 0:
        if text[start:] == ERHUA_SUFFIX:
            return [len(text)]
        # Written pinyin puts an apostrophe before these (xī'ān)
        if text[start] in APOSTROPHE_INITIALS:
            return None

    syllables = valid_syllables()
    for end in range(min(len(text), start + MAX_SYLLABLE_LENGTH), start, -1):
        if text[start:end] in syllables:
            rest = _segment(text, end)
            if rest is not None:
                return [end] + rest
    return None


def split_syllables(pinyin: str) -> Optional[List[str]]:
    """
    Split a pinyin string into syllables, whether it is spaced or not.

    ``xiàwǔ``, ``xià wǔ`` and ``xia4wu3`` all give two syllables; tone
    marks and tone digits stay with their syllable. A trailing erhua ``r``
    (``wánr``) becomes a syllable of its own.

    Returns:
        The syllables, or None if some part is not valid pinyin
    """
    result: List[str] = []
    for token in SYLLABLE_SEPARATORS.split(pinyin.strip()):
        if not token:
            continue

        # One item per letter, tone digits attached to the letter before
        letters: List[str] = []
        for char in token:
            if char.isdigit() and letters:
                letters[-1] += char
            else:
                letters.append(char)

        toneless = "".join(_toneless_letter(item[0]) for item in letters)
        ends = _segment(toneless)
        if ends is None:
            return None

        start = 0
        for end in ends:
            result.append("".join(letters[start:end]))
            start = end
    return result


# ============================================================================
# Zhuyin
# ============================================================================

def syllable_to_zhuyin(syllable: str) -> Optional[str]:
    """Map one diacritic syllable to Zhuyin, or None if there is no mapping."""
    lowered = syllable.lower()
    base = to_normal(lowered)
    if base not in valid_syllables() or base in INTERJECTION_SYLLABLES:
        return None
    return _BOPOMOFO.to_bopomofo(lowered)


def to_secondary_phonetic(pretty: str) -> str:
    """Convert diacritic pinyin to Zhuyin, syllable by syllable."""
    parts = []
    for syllable in pretty.split():
        zhuyin = syllable_to_zhuyin(syllable)
        parts.append(zhuyin if zhuyin is not None else syllable)
    return " ".join(parts)


# ============================================================================
# Search Variants
# ============================================================================

def remove_whitespace(text: str) -> str:
    return "".join(c for c in text if not c.isspace())


def remove_digits(text: str) -> str:
    return "".join(c for c in text if not c.isnumeric())


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping the first occurrence of each item."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def generate_search_variants(pinyin: str) -> List[str]:
    """
    Generate the spellings a user might type for a pinyin string.

    For ``jia1 li3`` this yields ``jia1 li3``, ``jia1li3``, ``jia li``,
    ``jiali``, ``jiā lǐ`` and ``jiālǐ``. Duplicates are dropped, so the
    result has at most six items and always starts with the input.
    """
    no_digits = remove_digits(pinyin)
    pretty = prettify(pinyin)
    return dedupe([
        pinyin,
        remove_whitespace(pinyin),
        no_digits,
        remove_whitespace(no_digits),
        pretty,
        remove_whitespace(pretty),
    ])


def search_variants(pronunciation: str, alt_region: Optional[str] = None) -> List[str]:
    """Search variants of the raw and the alternate-region pronunciation."""
    variants = generate_search_variants(pronunciation)
    if alt_region:
        variants.extend(generate_search_variants(alt_region))
    return dedupe(variants)


def pronunciation_key(pinyin: str) -> str:
    """
    Normalize a pronunciation for table lookups.

    Tone-numbered and diacritic spellings of the same reading map to the
    same key (``tai2 wan1`` and ``táiwān`` both become ``táiwān``).
    """
    return remove_whitespace(prettify(pinyin)).lower()
