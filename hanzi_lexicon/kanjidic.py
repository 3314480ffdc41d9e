"""
Kanji table builder.

Converts KANJIDIC2 XML (http://www.edrdg.org/kanjidic/kanjidic2.xml.gz)
into the JSON object read by ``loaders.load_kanji_table``, optionally
merging WaniKani data keyed by kanji:

    {"気": {"level": 5, "meanings": ["Spirit"], "readings_on": ["き"],
            "readings_kun": [], "radicals": ["Air"]}}
"""

import gzip
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from lxml import etree

from hanzi_lexicon.errors import MalformedInputError
from hanzi_lexicon.raw_types import KanjiCharacter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def node_text(elem) -> str:
    """Get text content of an element."""
    return (elem.text or "").strip() if elem is not None else ""


def _int_or_none(elem) -> Optional[int]:
    text = node_text(elem)
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_character(elem) -> Optional[KanjiCharacter]:
    """Build a KanjiCharacter from a KANJIDIC2 ``<character>`` element."""
    misc = elem.find("misc")
    strokes = _int_or_none(misc.find("stroke_count")) if misc is not None else None
    if strokes is None:
        return None

    meanings: List[str] = []
    readings_on: List[str] = []
    readings_kun: List[str] = []
    for rm in elem.iterfind("reading_meaning/rmgroup"):
        for reading in rm.iterfind("reading"):
            r_type = reading.get("r_type")
            if r_type == "ja_on":
                readings_on.append(node_text(reading))
            elif r_type == "ja_kun":
                readings_kun.append(node_text(reading))
        for meaning in rm.iterfind("meaning"):
            # Untagged meanings are English
            if meaning.get("m_lang") is None:
                meanings.append(node_text(meaning))

    return KanjiCharacter(
        strokes=strokes,
        grade=_int_or_none(misc.find("grade")),
        freq=_int_or_none(misc.find("freq")),
        jlpt_old=_int_or_none(misc.find("jlpt")),
        meanings=meanings,
        readings_on=readings_on,
        readings_kun=readings_kun,
    )


def _open_xml(path: Path):
    if path.suffix == ".gz":
        return gzip.open(path, "rb")
    return open(path, "rb")


def parse_kanjidic(xml_path: PathLike) -> Dict[str, KanjiCharacter]:
    """
    Parse KANJIDIC2 into kanji records keyed by literal.

    Raises:
        FileNotFoundError: If the file does not exist
        MalformedInputError: If the XML cannot be parsed
    """
    xml_path = Path(xml_path)
    if not xml_path.exists():
        raise FileNotFoundError(f"KANJIDIC2 file not found at {xml_path}")

    kanji: Dict[str, KanjiCharacter] = {}
    skipped = 0

    with _open_xml(xml_path) as f:
        context = etree.iterparse(
            f,
            events=("end",),
            tag="character",
            load_dtd=False,
            no_network=True,
            resolve_entities=False,
        )
        try:
            for _, elem in context:
                literal = node_text(elem.find("literal"))
                record = parse_character(elem)
                if literal and record is not None:
                    kanji[literal] = record
                else:
                    skipped += 1
                elem.clear()
        except etree.XMLSyntaxError as e:
            raise MalformedInputError(f"Invalid XML: {e}", xml_path) from e

    logger.info(f"Parsed {len(kanji)} kanji from {xml_path.name}")
    if skipped:
        logger.warning(f"Skipped {skipped} characters without literal or stroke count")
    return kanji


def merge_wanikani(kanji: Dict[str, KanjiCharacter], wanikani_path: PathLike) -> int:
    """
    Merge WaniKani data into the kanji records in place.

    Returns:
        Number of kanji that received WaniKani data
    """
    wanikani_path = Path(wanikani_path)
    if not wanikani_path.exists():
        raise FileNotFoundError(f"WaniKani file not found at {wanikani_path}")

    with open(wanikani_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid JSON: {e}", wanikani_path) from e
    if not isinstance(data, dict):
        raise MalformedInputError("Expected a JSON object keyed by kanji", wanikani_path)

    merged = 0
    for char, wk in data.items():
        record = kanji.get(char)
        if record is None or not isinstance(wk, dict):
            continue
        try:
            record.wk_level = int(wk["level"])
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Skipping WaniKani data for {char!r}: no level")
            continue
        record.wk_meanings = wk.get("meanings")
        record.wk_readings_on = wk.get("readings_on")
        record.wk_readings_kun = wk.get("readings_kun")
        record.wk_radicals = wk.get("radicals")
        merged += 1

    logger.info(f"Merged WaniKani data for {merged} kanji")
    return merged


def write_kanji_table(kanji: Dict[str, KanjiCharacter], output_path: PathLike) -> None:
    """Save the kanji records as one JSON object keyed by kanji."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(
            {char: record.to_dict() for char, record in kanji.items()},
            f,
            ensure_ascii=False,
        )
    logger.info(f"Saved {len(kanji)} kanji to {output_path}")
