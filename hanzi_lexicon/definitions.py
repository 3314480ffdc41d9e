"""
Definition normalization.

CC-CEDICT definitions carry inline pinyin (``variant of 個|个[ge4]``) and
occasionally a Taiwanese reading (``Taiwan pr. [han4]``). Both are pulled
out or rewritten here before the definitions are split into senses.
"""

from typing import Iterable, List, Optional

from hanzi_lexicon.constants import (
    ALT_REGION_PATTERN,
    PHONETIC_ANNOTATION_PATTERN,
    SENSE_DELIMITER,
)
from hanzi_lexicon.phonetics import prettify


def extract_alt_region_pronunciation(definitions: Iterable[str]) -> Optional[str]:
    """Return the last ``Taiwan pr. [...]`` reading found in the definitions."""
    found = None
    for text in definitions:
        for match in ALT_REGION_PATTERN.finditer(text):
            found = match.group(1)
    return found


def _prettify_annotation(match) -> str:
    orig = match.group(1)
    if not orig.strip():
        return match.group(0)
    pretty = prettify(orig)
    if pretty != orig:
        return f"[{pretty}]"
    return match.group(0)


def prettify_annotations(text: str) -> str:
    """Rewrite every ``[pin1 yin1]`` annotation in text to diacritics."""
    return PHONETIC_ANNOTATION_PATTERN.sub(_prettify_annotation, text)


def split_senses(definitions: Iterable[str]) -> List[str]:
    """Split ``;``-joined definitions into atomic senses, keeping order."""
    senses = []
    for text in definitions:
        for sense in text.split(SENSE_DELIMITER):
            sense = sense.strip()
            if sense:
                senses.append(sense)
    return senses


def normalize_definitions(definitions: List[str]) -> Optional[str]:
    """
    Normalize the definitions of one entry in place.

    Args:
        definitions: Raw definitions, replaced by the flattened senses

    Returns:
        The alternate-region (Taiwan) pronunciation, if one is stated
    """
    alt_region = extract_alt_region_pronunciation(definitions)
    rewritten = [prettify_annotations(text) for text in definitions]
    definitions[:] = split_senses(rewritten)
    return alt_region
