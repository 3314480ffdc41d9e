"""Shared fixtures: a tiny set of corpora written to a temp directory."""

import json

import pytest

from hanzi_lexicon.config import CorpusPaths

CEDICT = """\
# CC-CEDICT
#! version=1
#! charset=UTF-8

下午 下午 [xia4 wu3] /afternoon/p.m./
箇 个 [ge4] /variant of 個|个[ge4]/
了 了 [le5] /(modal particle intensifying preceding clause)/
了 了 [liao3] /to finish; to understand/
氣 气 [qi4] /gas; air/Taiwan pr. [qi3]/
天 天 [tian1] /day; sky/
天氣 天气 [tian1 qi4] /weather/
天空 天空 [tian1 kong1] /sky/
好 好 [hao3] /good/
"""

WORD_FREQ = [
    {"text": "下午", "count": 5000, "count_per_million": 150.5},
    {"text": "天氣", "count": 3000, "count_per_million": 90.0},
    {"text": "天", "count": 9000, "count_per_million": 270.0},
]

CHAR_FREQ = [
    {"text": "天", "count": 20000, "count_per_million": 600.0},
    {"text": "下", "count": 15000, "count_per_million": 450.0},
]

TOCFL = """\
Word,Pinyin,Level,written_per_million,spoken_per_million
下午,xià wǔ,1,500,600
箇,gè,2,400,400
了,le,1,900,1000
了,liǎo,3,20,30
"""

KANJI = {
    "気": {
        "strokes": 6,
        "grade": 1,
        "freq": 113,
        "jlpt_old": 4,
        "meanings": ["spirit", "mind"],
        "readings_on": ["キ", "ケ"],
        "readings_kun": ["いき"],
        "wk_level": 5,
    },
    "好": {"strokes": 6, "meanings": ["fond", "pleasing"]},
}

HANDEDICT = """\
下午 下午 [xia4 wu3] /Nachmittag/
天氣 天气 [tian1 qi4] /Wetter; Witterung/
"""


KANJIDIC = """\
<?xml version="1.0" encoding="UTF-8"?>
<kanjidic2>
<header><file_version>4</file_version></header>
<character>
<literal>気</literal>
<misc>
<grade>1</grade>
<stroke_count>6</stroke_count>
<stroke_count>4</stroke_count>
<freq>113</freq>
<jlpt>4</jlpt>
</misc>
<reading_meaning>
<rmgroup>
<reading r_type="pinyin">qi4</reading>
<reading r_type="ja_on">キ</reading>
<reading r_type="ja_on">ケ</reading>
<reading r_type="ja_kun">いき</reading>
<meaning>spirit</meaning>
<meaning>mind</meaning>
<meaning m_lang="fr">esprit</meaning>
</rmgroup>
</reading_meaning>
</character>
<character>
<literal>好</literal>
<misc>
<stroke_count>6</stroke_count>
</misc>
</character>
<character>
<literal>X</literal>
<misc><grade>2</grade></misc>
</character>
</kanjidic2>
"""


def write_jsonl(path, rows):
    path.write_text("".join(json.dumps(r, ensure_ascii=False) + "\n" for r in rows), encoding="utf-8")


@pytest.fixture
def corpus_dir(tmp_path):
    (tmp_path / "cedict_ts.u8").write_text(CEDICT, encoding="utf-8")
    write_jsonl(tmp_path / "word_freq.json", WORD_FREQ)
    write_jsonl(tmp_path / "char_freq.json", CHAR_FREQ)
    (tmp_path / "tocfl.csv").write_text(TOCFL, encoding="utf-8")
    (tmp_path / "simplified_character_radicals.txt").write_text("好\t女 子\n气\t气\n", encoding="utf-8")
    (tmp_path / "traditional_character_radicals.txt").write_text("好\t女 子\n氣\t气 米\n", encoding="utf-8")
    (tmp_path / "kanji.json").write_text(json.dumps(KANJI, ensure_ascii=False), encoding="utf-8")
    (tmp_path / "handedict.u8").write_text(HANDEDICT, encoding="utf-8")
    return tmp_path


@pytest.fixture
def corpus_paths(corpus_dir):
    return CorpusPaths.from_directory(corpus_dir)


@pytest.fixture
def kanjidic_path(tmp_path):
    path = tmp_path / "kanjidic2.xml"
    path.write_text(KANJIDIC, encoding="utf-8")
    return path
