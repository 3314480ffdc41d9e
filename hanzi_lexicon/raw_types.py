"""
Lightweight data structures for the corpora fed into the pipeline.

These are populated by the loaders and are either consumed immediately
(RawDictionaryLine) or frozen into lookup tables after loading.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, NamedTuple, Optional


class RawDictionaryLine(NamedTuple):
    """One bilingual entry as parsed from the source corpus."""
    traditional: str
    simplified: str
    pronunciation: str
    definitions: List[str]


@dataclass(slots=True)
class FrequencyRecord:
    """
    A row of a SUBTLEX-CH style frequency table.

    Character-level records also accumulate how often the character occurs
    inside other (multi-character) words.
    """
    surface_form: str
    occurrence_count: int
    occurrence_per_million: float
    occurrence_in_others: int = 0
    occurrence_per_million_in_others: float = 0.0


class ProficiencyRecord(NamedTuple):
    """A word list row (TOCFL style), keyed by word and pronunciation."""
    surface_form: str
    pronunciation: str
    level: int
    written_per_million: int
    spoken_per_million: int


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def _optional_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    return [str(v) for v in value]


@dataclass(slots=True)
class KanjiCharacter:
    """
    Japanese kanji data for one character.

    The ``wk_*`` fields are only set for kanji taught by WaniKani.
    """
    strokes: int
    grade: Optional[int] = None
    freq: Optional[int] = None
    jlpt_old: Optional[int] = None
    jlpt_new: Optional[int] = None
    meanings: List[str] = field(default_factory=list)
    readings_on: List[str] = field(default_factory=list)
    readings_kun: List[str] = field(default_factory=list)
    wk_level: Optional[int] = None
    wk_meanings: Optional[List[str]] = None
    wk_readings_on: Optional[List[str]] = None
    wk_readings_kun: Optional[List[str]] = None
    wk_radicals: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KanjiCharacter":
        """
        Build from a kanji table value.

        Raises:
            KeyError: If ``strokes`` is missing
            TypeError, ValueError: If a field has the wrong shape
        """
        return cls(
            strokes=int(data["strokes"]),
            grade=_optional_int(data.get("grade")),
            freq=_optional_int(data.get("freq")),
            jlpt_old=_optional_int(data.get("jlpt_old")),
            jlpt_new=_optional_int(data.get("jlpt_new")),
            meanings=_optional_list(data.get("meanings")) or [],
            readings_on=_optional_list(data.get("readings_on")) or [],
            readings_kun=_optional_list(data.get("readings_kun")) or [],
            wk_level=_optional_int(data.get("wk_level")),
            wk_meanings=_optional_list(data.get("wk_meanings")),
            wk_readings_on=_optional_list(data.get("wk_readings_on")),
            wk_readings_kun=_optional_list(data.get("wk_readings_kun")),
            wk_radicals=_optional_list(data.get("wk_radicals")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, leaving out fields that are None."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                data[f.name] = value
        return data
