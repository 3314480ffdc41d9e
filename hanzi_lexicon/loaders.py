"""
Corpus loaders for hanzi-lexicon.

Each loader reads one raw corpus into plain in-memory structures. No
business logic lives here; the tables module freezes the results into
lookup tables.

Error policy:
- The primary dictionary corpus fails fast on the first malformed line.
- Auxiliary corpora skip rows whose optional fields cannot be coerced,
  logging a warning, but still fail on structural problems.
"""

import csv
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from hanzi_lexicon.constants import (
    DICTIONARY_LINE_PATTERN,
    MAX_PER_MILLION,
    MAX_PROFICIENCY_LEVEL,
)
from hanzi_lexicon.definitions import split_senses
from hanzi_lexicon.errors import MalformedInputError
from hanzi_lexicon.raw_types import (
    FrequencyRecord,
    KanjiCharacter,
    ProficiencyRecord,
    RawDictionaryLine,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _require_file(path: PathLike, what: str) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{what} not found at {path}")
    return path


# ============================================================================
# Dictionary Corpus (CC-CEDICT format)
# ============================================================================

def parse_dictionary_line(line: str) -> Optional[RawDictionaryLine]:
    """
    Parse one CC-CEDICT line.

    Args:
        line: ``TRAD SIMP [pin1 yin1] /def 1/def 2/``

    Returns:
        The parsed line, or None for blank, comment and metadata lines

    Raises:
        MalformedInputError: If the line is not in the expected shape
    """
    line = line.rstrip("\r\n")
    if not line.strip() or line.startswith("#"):
        return None

    match = DICTIONARY_LINE_PATTERN.match(line)
    if match is None:
        raise MalformedInputError(f"Incorrect dictionary line: {line!r}")

    traditional, simplified, pronunciation, body = match.groups()
    definitions = body.split("/")
    return RawDictionaryLine(
        traditional=traditional,
        simplified=simplified,
        pronunciation=" ".join(pronunciation.split()),
        definitions=definitions,
    )


def iter_dictionary(path: PathLike) -> Iterator[RawDictionaryLine]:
    """Yield every entry of a CC-CEDICT file in file order."""
    path = _require_file(path, "Dictionary corpus")

    with open(path, "r", encoding="utf-8-sig") as f:
        for line_no, line in enumerate(f, start=1):
            try:
                parsed = parse_dictionary_line(line)
            except MalformedInputError as e:
                raise MalformedInputError(str(e), path, line_no) from e
            if parsed is not None:
                yield parsed


def load_glosses(path: PathLike) -> Dict[Tuple[str, str], List[str]]:
    """
    Load a secondary-language dictionary in CC-CEDICT format (HanDeDict).

    Returns:
        Mapping of (traditional, pronunciation) to senses
    """
    path = _require_file(path, "Gloss corpus")
    glosses: Dict[Tuple[str, str], List[str]] = defaultdict(list)
    skipped = 0

    with open(path, "r", encoding="utf-8-sig") as f:
        for line_no, line in enumerate(f, start=1):
            try:
                parsed = parse_dictionary_line(line)
            except MalformedInputError:
                logger.warning(f"Skipping malformed gloss line {path}:{line_no}")
                skipped += 1
                continue
            if parsed is None:
                continue
            key = (parsed.traditional, parsed.pronunciation)
            glosses[key].extend(split_senses(parsed.definitions))

    logger.info(f"Loaded glosses for {len(glosses)} words from {path.name}")
    if skipped:
        logger.warning(f"Skipped {skipped} malformed gloss lines")
    return dict(glosses)


# ============================================================================
# Frequency Tables (SUBTLEX-CH, newline-delimited JSON)
# ============================================================================

_FREQUENCY_ALIASES = {
    "text": ("text", "surface_form"),
    "count": ("count", "occurrence_count"),
    "count_per_million": ("count_per_million", "occurrence_per_million"),
}


def _pick(row: dict, field: str):
    for name in _FREQUENCY_ALIASES[field]:
        if name in row:
            return row[name]
    return None


def load_frequency_records(path: PathLike) -> Dict[str, FrequencyRecord]:
    """
    Load a frequency table.

    Each line is a JSON object such as
    ``{"text": "下午", "count": 12345, "count_per_million": 371.6}``.

    Raises:
        MalformedInputError: If a line is not a JSON object
    """
    path = _require_file(path, "Frequency table")
    records: Dict[str, FrequencyRecord] = {}
    skipped = 0

    with open(path, "r", encoding="utf-8-sig") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                row = json.loads(line)
            except json.JSONDecodeError as e:
                raise MalformedInputError(f"Invalid JSON: {e}", path, line_no) from e
            if not isinstance(row, dict):
                raise MalformedInputError("Expected a JSON object", path, line_no)

            text = _pick(row, "text")
            try:
                count = int(_pick(row, "count"))
                per_million = float(_pick(row, "count_per_million"))
            except (TypeError, ValueError):
                skipped += 1
                continue
            if not text or count < 0 or per_million < 0:
                skipped += 1
                continue

            if text not in records:
                records[text] = FrequencyRecord(
                    surface_form=text,
                    occurrence_count=count,
                    occurrence_per_million=per_million,
                )

    logger.info(f"Loaded {len(records)} frequency records from {path.name}")
    if skipped:
        logger.warning(f"Skipped {skipped} frequency rows with unusable counts")
    return records


def accumulate_in_others(
    char_records: Dict[str, FrequencyRecord],
    word_records: Dict[str, FrequencyRecord],
) -> None:
    """
    Credit every character with the frequency of the words it appears in.

    A single character can be rare on its own but common as part of other
    words (午 vs. 下午). Each distinct character of every multi-character
    word gains that word's count; characters missing from the character
    table are added with zero counts of their own.
    """
    for word, record in word_records.items():
        if len(word) < 2:
            continue
        for char in dict.fromkeys(word):
            char_record = char_records.get(char)
            if char_record is None:
                char_record = FrequencyRecord(
                    surface_form=char,
                    occurrence_count=0,
                    occurrence_per_million=0.0,
                )
                char_records[char] = char_record
            char_record.occurrence_in_others += record.occurrence_count
            char_record.occurrence_per_million_in_others += record.occurrence_per_million


# ============================================================================
# Proficiency Table (TOCFL)
# ============================================================================

_PROFICIENCY_COLUMNS = {
    "word": ("word",),
    "pronunciation": ("pronunciation", "pinyin"),
    "level": ("level",),
    "written_per_million": ("written_per_million", "writtenpermillion"),
    "spoken_per_million": ("spoken_per_million", "spokenpermillion"),
}


def _resolve_columns(header: List[str], path: Path) -> Dict[str, int]:
    normalized = [h.strip().lower().replace(" ", "_") for h in header]
    columns = {}
    for field, aliases in _PROFICIENCY_COLUMNS.items():
        for alias in aliases:
            if alias in normalized:
                columns[field] = normalized.index(alias)
                break
    missing = [name for name in ("word", "pronunciation", "level") if name not in columns]
    if missing:
        raise MalformedInputError(f"Missing columns: {', '.join(missing)}", path, 1)
    return columns


def _per_million(value: str) -> int:
    value = value.strip().replace(",", "")
    if not value:
        return 0
    result = round(float(value))
    if not 0 <= result <= MAX_PER_MILLION:
        raise ValueError(f"frequency out of range: {value}")
    return result


def _level(value: str) -> int:
    result = int(value.strip())
    if not 0 <= result <= MAX_PROFICIENCY_LEVEL:
        raise ValueError(f"level out of range: {value}")
    return result


def load_proficiency_records(path: PathLike, delimiter: str = ",") -> List[ProficiencyRecord]:
    """
    Load a proficiency word list.

    The header names the columns (word, pinyin, level and optionally
    written/spoken per million). A pinyin cell may list alternatives
    separated by ``/``; each becomes its own record.

    Returns:
        Records in file order
    """
    path = _require_file(path, "Proficiency table")
    records: List[ProficiencyRecord] = []
    skipped = 0

    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f, delimiter=delimiter)
        header = next(reader, None)
        if header is None:
            raise MalformedInputError("Empty proficiency table", path)
        columns = _resolve_columns(header, path)

        for line_no, row in enumerate(reader, start=2):
            if not any(cell.strip() for cell in row):
                continue
            try:
                word = row[columns["word"]].strip()
                pronunciations = row[columns["pronunciation"]]
                level = _level(row[columns["level"]])
                written = spoken = 0
                if "written_per_million" in columns:
                    written = _per_million(row[columns["written_per_million"]])
                if "spoken_per_million" in columns:
                    spoken = _per_million(row[columns["spoken_per_million"]])
            except (IndexError, ValueError, OverflowError):
                logger.warning(f"Skipping proficiency row {path}:{line_no}")
                skipped += 1
                continue

            for pronunciation in pronunciations.split("/"):
                pronunciation = pronunciation.strip()
                if word and pronunciation:
                    records.append(ProficiencyRecord(
                        surface_form=word,
                        pronunciation=pronunciation,
                        level=level,
                        written_per_million=written,
                        spoken_per_million=spoken,
                    ))

    logger.info(f"Loaded {len(records)} proficiency records from {path.name}")
    if skipped:
        logger.warning(f"Skipped {skipped} proficiency rows")
    return records


# ============================================================================
# Radicals (chaizi)
# ============================================================================

def load_radicals(path: PathLike) -> Dict[str, List[List[str]]]:
    """
    Load a character decomposition table.

    Each line is ``FORM<TAB>group<TAB>group...`` where a group is a
    space-delimited list of components.
    """
    path = _require_file(path, "Radical table")
    radicals: Dict[str, List[List[str]]] = {}

    with open(path, "r", encoding="utf-8-sig") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            parts = line.split("\t")
            radicals[parts[0]] = [group.split() for group in parts[1:]]

    logger.info(f"Loaded decompositions for {len(radicals)} characters from {path.name}")
    return radicals


# ============================================================================
# Kanji Cross-Reference
# ============================================================================

def load_kanji_table(path: PathLike) -> Dict[str, KanjiCharacter]:
    """
    Load the kanji table, a JSON object keyed by character.

    Raises:
        MalformedInputError: If the file is not a JSON object
    """
    path = _require_file(path, "Kanji table")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid JSON: {e}", path) from e
    if not isinstance(data, dict):
        raise MalformedInputError("Expected a JSON object keyed by character", path)

    kanji: Dict[str, KanjiCharacter] = {}
    for char, value in data.items():
        try:
            kanji[char] = KanjiCharacter.from_dict(value)
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning(f"Skipping kanji {char!r}: unusable record")

    logger.info(f"Loaded {len(kanji)} kanji from {path.name}")
    return kanji
