"""End-to-end tests for the entry pipeline."""

import io
import json
import math

import pytest

from hanzi_lexicon.config import CorpusPaths
from hanzi_lexicon.loaders import parse_dictionary_line
from hanzi_lexicon.pipeline import Corpora, build_entries, build_entry, load_corpora, run


@pytest.fixture
def records(corpus_paths):
    out = io.StringIO()
    count = run(corpus_paths, out)
    lines = out.getvalue().splitlines()
    assert count == len(lines)
    return [json.loads(line) for line in lines]


def by_form(records, traditional, pronunciation=None):
    for record in records:
        if record["traditional"] == traditional and (
            pronunciation is None or record["pronunciation"] == pronunciation
        ):
            return record
    raise KeyError(traditional)


def test_corpus_order(records):
    assert [(r["traditional"], r["pronunciation"]) for r in records] == [
        ("下午", "xia4 wu3"),
        ("箇", "ge4"),
        ("了", "le5"),
        ("了", "liao3"),
        ("氣", "qi4"),
        ("天", "tian1"),
        ("天氣", "tian1 qi4"),
        ("天空", "tian1 kong1"),
        ("好", "hao3"),
    ]


def test_common_word(records):
    record = by_form(records, "下午")

    assert record["pronunciation_pretty"] == "xià wǔ"
    assert record["secondary_phonetic"] == "ㄒㄧㄚˋ ㄨˇ"
    assert record["search_variants"] == [
        "xia4 wu3", "xia4wu3", "xia wu", "xiawu", "xià wǔ", "xiàwǔ",
    ]
    assert record["meanings"] == ["afternoon", "p.m."]
    assert record["meanings_secondary"] == ["Nachmittag"]
    assert record["proficiency_level"] == 1
    assert record["commonness_boost"] == pytest.approx(math.sqrt(1100) / 4)
    assert record["tags"] == [
        "common", "common_written", "common_spoken", "verycommon",
        "proficiency", "proficiency1",
    ]


def test_variant_entry(records):
    record = by_form(records, "箇")

    assert record["meanings"] == ["variant of 個|个[gè]"]
    assert record["commonness_boost"] == 1.0
    assert record["written_per_million"] == 0
    assert record["spoken_per_million"] == 400
    assert record["tags"] == ["proficiency", "proficiency2"]


def test_ambiguous_form(records):
    le = by_form(records, "了", "le5")
    liao = by_form(records, "了", "liao3")

    assert le["proficiency_level"] == 1
    assert le["commonness_boost"] == pytest.approx(math.sqrt(1900) / 4)
    assert le["search_variants"] == ["le5", "le"]
    assert liao["proficiency_level"] == 3
    assert liao["commonness_boost"] == pytest.approx(math.sqrt(50) / 4)


def test_character_with_kanji(records):
    record = by_form(records, "氣")

    assert record["pronunciation_alt_region"] == "qi3"
    assert record["meanings"] == ["gas", "air", "Taiwan pr. [qǐ]"]
    assert record["in_others_per_million"] == 90
    assert record["commonness_boost"] == pytest.approx(math.sqrt(90) / 4)
    assert record["tags"] == ["wanikani", "wanikani5"]
    assert record["kanji"]["strokes"] == 6
    assert record["kanji"]["wk_level"] == 5
    assert record["traditional_radicals"] == [["气", "米"]]
    assert record["simplified_radicals"] == [["气"]]
    assert "qi3" in record["search_variants"]
    assert "qǐ" in record["search_variants"]


def test_composed_alt_region(records):
    record = by_form(records, "天氣")

    assert record["pronunciation_alt_region"] == "tian1 qi3"
    assert "tian qi" in record["search_variants"]
    assert "tiānqǐ" in record["search_variants"]
    assert record["meanings_secondary"] == ["Wetter", "Witterung"]
    assert "kanji" not in record


def test_no_composition_without_character_entries(records):
    assert "pronunciation_alt_region" not in by_form(records, "天空")
    assert by_form(records, "天")["in_others_per_million"] == 90


def test_shared_kanji(records):
    record = by_form(records, "好")

    assert record["kanji"]["meanings"] == ["fond", "pleasing"]
    assert record["tags"] == []
    assert record["simplified_radicals"] == [["女", "子"]]
    assert record["traditional_radicals"] == [["女", "子"]]


def test_invariants(records):
    for record in records:
        assert record["commonness_boost"] >= 1.0
        assert len(record["tags"]) == len(set(record["tags"]))
        assert len(record["search_variants"]) == len(set(record["search_variants"]))
        assert record["search_variants"][0] == record["pronunciation"]


def test_load_corpora(corpus_paths):
    corpora = load_corpora(corpus_paths)

    assert corpora.proficiency.lookup("下午").level == 1
    assert corpora.in_others.lookup("下") == 150
    assert corpora.in_others.lookup("午") == 150
    assert corpora.in_others.lookup("下", "xia4") == 1100
    assert corpora.glosses[("下午", "xia4 wu3")] == ["Nachmittag"]


def test_dictionary_only(corpus_dir):
    paths = CorpusPaths(dictionary=corpus_dir / "cedict_ts.u8")
    out = io.StringIO()
    assert run(paths, out) == 9

    for line in out.getvalue().splitlines():
        record = json.loads(line)
        assert record["commonness_boost"] == 1.0
        assert "kanji" not in record


def test_missing_dictionary(tmp_path):
    with pytest.raises(FileNotFoundError):
        run(CorpusPaths(dictionary=tmp_path / "missing.u8"), io.StringIO())


def test_build_entry_needs_no_other_entries():
    raw = parse_dictionary_line("小心 小心 [xiao3 xin1] /to be careful/Taiwan pr. [xiao3 xin5]/\n")
    entry = build_entry(raw, Corpora())

    assert entry.pronunciation_alt_region == "xiao3 xin5"
    assert entry.pronunciation_pretty == "xiǎo xīn"
    assert entry.meanings == ["to be careful", "Taiwan pr. [xiǎo xin]"]
    assert len(entry.search_variants) == 0


def test_build_entries_empty():
    assert build_entries([], Corpora()) == []


def test_ambiguous_character_credited_from_unspaced_word_list(tmp_path):
    dictionary = tmp_path / "cedict_ts.u8"
    dictionary.write_text(
        "了 了 [le5] /(particle)/\n"
        "了 了 [liao3] /to finish/\n"
        "了解 了解 [liao3 jie3] /to understand/\n",
        encoding="utf-8",
    )
    proficiency = tmp_path / "tocfl.csv"
    proficiency.write_text(
        "Word,Pinyin,Level,written_per_million,spoken_per_million\n"
        "了解,liǎojiě,1,400,300\n",
        encoding="utf-8",
    )
    out = io.StringIO()
    run(CorpusPaths(dictionary=dictionary, proficiency=proficiency), out)
    records = [json.loads(line) for line in out.getvalue().splitlines()]

    le, liao, liaojie = records
    assert liao["in_others_per_million"] == 700
    assert "commonchar" in liao["tags"]
    assert le["in_others_per_million"] == 0
    assert liaojie["proficiency_level"] == 1
