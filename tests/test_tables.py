"""Tests for the frozen lookup tables."""

import pytest

from hanzi_lexicon.raw_types import FrequencyRecord, ProficiencyRecord
from hanzi_lexicon.tables import FrequencyTable, InOthersIndex, ProficiencyIndex, make_key


def test_make_key():
    assert make_key("了") == "了"
    assert make_key("台灣", "tai2 wan1") == "台灣\ttáiwān"
    assert make_key("台灣", "tái wān") == make_key("台灣", "tai2 wan1")


class TestFrequencyTable:
    def test_round_trip(self):
        table = FrequencyTable.from_records({
            "天": FrequencyRecord("天", 20000, 600.0, 3000, 90.0),
        })
        record = table.get("天")
        assert record.occurrence_count == 20000
        assert record.occurrence_per_million == 600.0
        assert record.occurrence_in_others == 3000
        assert record.occurrence_per_million_in_others == 90.0
        assert "天" in table
        assert len(table) == 1

    def test_miss(self):
        table = FrequencyTable.from_records({})
        assert table.get("天") is None
        assert list(table.items()) == []


class TestProficiencyIndex:
    RECORDS = [
        ProficiencyRecord("了", "le", 1, 900, 1000),
        ProficiencyRecord("了", "liǎo", 3, 20, 30),
        ProficiencyRecord("了", "le", 5, 1, 1),
    ]

    def test_first_record_wins(self):
        index = ProficiencyIndex.from_records(self.RECORDS)
        assert index.lookup("了").level == 1
        assert index.lookup("了", "le5").level == 1

    def test_lookup_by_reading(self):
        index = ProficiencyIndex.from_records(self.RECORDS)
        record = index.lookup("了", "liao3")
        assert record.level == 3
        assert record.written_per_million == 20
        assert record.spoken_per_million == 30

    def test_miss(self):
        index = ProficiencyIndex.from_records(self.RECORDS)
        assert index.lookup("好") is None
        assert index.lookup("了", "liao4") is None


class TestInOthersIndex:
    def test_surface_layer(self):
        chars = FrequencyTable.from_records({
            "下": FrequencyRecord("下", 15000, 450.0, 5000, 150.5),
        })
        index = InOthersIndex.build(chars)
        assert index.lookup("下") == 150
        assert index.lookup("午") == 0

    def test_reading_layer(self):
        records = [
            ProficiencyRecord("下午", "xià wǔ", 1, 500, 600),
            ProficiencyRecord("下面", "xià miàn", 1, 100, 100),
            ProficiencyRecord("台灣", "tái", 1, 50, 50),
            ProficiencyRecord("下", "xià", 1, 999, 999),
        ]
        index = InOthersIndex.build(proficiency_records=records)
        assert index.lookup("下", "xia4") == 1300
        assert index.lookup("午", "wu3") == 1100
        # Syllable count does not match the character count
        assert index.lookup("台", "tai2") == 0

    @pytest.mark.parametrize("pronunciation", [None, "xia4"])
    def test_empty(self, pronunciation):
        assert InOthersIndex.build().lookup("下", pronunciation) == 0


class TestInOthersUnspacedPinyin:
    def test_unspaced_reading(self):
        index = InOthersIndex.build(proficiency_records=[
            ProficiencyRecord("下午", "xiàwǔ", 1, 500, 600),
        ])
        assert index.lookup("下", "xia4") == 1100
        assert index.lookup("午", "wu3") == 1100

    def test_matches_spaced_reading(self):
        spaced = InOthersIndex.build(proficiency_records=[
            ProficiencyRecord("台灣", "tái wān", 1, 50, 50),
        ])
        unspaced = InOthersIndex.build(proficiency_records=[
            ProficiencyRecord("台灣", "táiwān", 1, 50, 50),
        ])
        assert spaced.lookup("灣", "wan1") == unspaced.lookup("灣", "wan1") == 100

    def test_unsplittable_reading_is_skipped(self):
        index = InOthersIndex.build(proficiency_records=[
            ProficiencyRecord("下午", "xiàqq", 1, 500, 600),
        ])
        assert index.lookup("下", "xia4") == 0
