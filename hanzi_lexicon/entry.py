"""
The dictionary entry produced by the pipeline.

An Entry is created once per raw dictionary line, patched in place by the
cross-reference and scoring passes, and serialized exactly once.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

from hanzi_lexicon.constants import OPTIONAL_FIELDS, RECORD_FIELDS
from hanzi_lexicon.raw_types import KanjiCharacter


class OrderedSet:
    """A list that ignores items it already holds."""

    __slots__ = ("_items", "_seen")

    def __init__(self, items: Iterable[str] = ()):
        self._items: List[str] = []
        self._seen = set()
        self.extend(items)

    def add(self, item: str) -> bool:
        """Append item unless present. Returns True if it was added."""
        if item in self._seen:
            return False
        self._seen.add(item)
        self._items.append(item)
        return True

    def extend(self, items: Iterable[str]) -> None:
        for item in items:
            self.add(item)

    def __contains__(self, item: object) -> bool:
        return item in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedSet):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedSet({self._items!r})"

    def to_list(self) -> List[str]:
        return list(self._items)


@dataclass(slots=True)
class Entry:
    """
    One Chinese-English dictionary entry.

    Attributes:
        simplified: Simplified surface form
        traditional: Traditional surface form
        pronunciation: Raw tone-numbered pinyin (``xia4 wu3``)
        pronunciation_alt_region: Taiwanese pinyin, stated or composed
        pronunciation_pretty: Pinyin with tone marks
        secondary_phonetic: Zhuyin
        search_variants: Spellings to match in search
        meanings: Atomic English senses
        meanings_secondary: Senses from the secondary-language corpus
        proficiency_level: Word list level, if listed
        tags: Category tags, each at most once
        commonness_boost: Ranking signal, >= 1.0
    """
    simplified: str
    traditional: str
    pronunciation: str
    pronunciation_alt_region: Optional[str] = None
    pronunciation_pretty: str = ""
    secondary_phonetic: str = ""
    search_variants: OrderedSet = field(default_factory=OrderedSet)
    meanings: List[str] = field(default_factory=list)
    meanings_secondary: List[str] = field(default_factory=list)
    proficiency_level: Optional[int] = None
    tags: OrderedSet = field(default_factory=OrderedSet)
    commonness_boost: float = 1.0
    written_per_million: int = 0
    spoken_per_million: int = 0
    in_others_per_million: int = 0
    simplified_radicals: List[List[str]] = field(default_factory=list)
    traditional_radicals: List[List[str]] = field(default_factory=list)
    kanji: Optional[KanjiCharacter] = None

    @property
    def chosen_pronunciation(self) -> str:
        """The Taiwanese pronunciation if known, else the raw one."""
        return self.pronunciation_alt_region or self.pronunciation

    @property
    def is_single_char(self) -> bool:
        return len(self.traditional) == 1

    def to_record(self) -> Dict[str, Any]:
        """Serialize in a stable field order, omitting empty optional fields."""
        record = {}
        for name in RECORD_FIELDS:
            value = getattr(self, name)
            if name in OPTIONAL_FIELDS and (value is None or value == [] or value == ""):
                continue
            if isinstance(value, OrderedSet):
                value = value.to_list()
            elif isinstance(value, KanjiCharacter):
                value = value.to_dict()
            record[name] = value
        return record

    def __repr__(self) -> str:
        return f"Entry({self.traditional!r}, {self.pronunciation!r})"
