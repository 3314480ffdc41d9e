"""
Traditional Chinese to Japanese kanji conversion.

Japanese simplified a number of characters after the war (shinjitai), so
the traditional form of a hanzi does not always match the kanji it
corresponds to: 氣 is written 気, 國 is written 国. The table below maps
the traditional form to the Japanese one; characters not listed are
shared by both scripts.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# ============================================================================
# Kyūjitai / Traditional -> Shinjitai
# ============================================================================

TRADITIONAL_TO_JAPANESE: Dict[str, str] = {
    '亞': '亜', '惡': '悪', '壓': '圧', '圍': '囲', '爲': '為', '壹': '壱',
    '隱': '隠', '榮': '栄', '衞': '衛', '驛': '駅', '圓': '円', '緣': '縁',
    '櫻': '桜', '溫': '温', '假': '仮', '價': '価', '畫': '画', '會': '会',
    '殼': '殻', '覺': '覚', '學': '学', '嶽': '岳', '勸': '勧', '卷': '巻',
    '寬': '寛', '歡': '歓', '關': '関', '觀': '観', '氣': '気', '犧': '犠',
    '舊': '旧', '據': '拠', '峽': '峡', '狹': '狭', '曉': '暁', '勳': '勲',
    '徑': '径', '莖': '茎', '溪': '渓', '經': '経', '縣': '県', '劍': '剣',
    '險': '険', '檢': '検', '權': '権', '獻': '献', '顯': '顕', '驗': '験',
    '嚴': '厳', '廣': '広', '號': '号', '國': '国', '黑': '黒', '濟': '済',
    '齋': '斎', '劑': '剤', '雜': '雑', '參': '参', '慘': '惨', '蠶': '蚕',
    '讚': '賛', '殘': '残', '絲': '糸', '兒': '児', '辭': '辞', '濕': '湿',
    '實': '実', '舍': '舎', '壽': '寿', '收': '収', '從': '従', '獸': '獣',
    '縱': '縦', '肅': '粛', '處': '処', '敍': '叙', '燒': '焼', '將': '将',
    '證': '証', '條': '条', '狀': '状', '乘': '乗', '淨': '浄', '剩': '剰',
    '疊': '畳', '讓': '譲', '釀': '醸', '觸': '触', '寢': '寝', '盡': '尽',
    '圖': '図', '粹': '粋', '醉': '酔', '穗': '穂', '隨': '随', '髓': '髄',
    '樞': '枢', '數': '数', '聲': '声', '靜': '静', '齊': '斉', '攝': '摂',
    '竊': '窃', '專': '専', '淺': '浅', '錢': '銭', '踐': '践', '潛': '潜',
    '纖': '繊', '禪': '禅', '戰': '戦', '雙': '双', '壯': '壮', '爭': '争',
    '莊': '荘', '搜': '捜', '插': '挿', '巢': '巣', '總': '総', '聰': '聡',
    '臟': '臓', '藏': '蔵', '屬': '属', '續': '続', '墮': '堕', '體': '体',
    '對': '対', '帶': '帯', '滯': '滞', '臺': '台', '瀧': '滝', '擇': '択',
    '澤': '沢', '擔': '担', '膽': '胆', '團': '団', '彈': '弾', '斷': '断',
    '癡': '痴', '晝': '昼', '鑄': '鋳', '廳': '庁', '徵': '徴', '聽': '聴',
    '鎭': '鎮', '遞': '逓', '鐵': '鉄', '點': '点', '轉': '転', '傳': '伝',
    '燈': '灯', '當': '当', '黨': '党', '盜': '盗', '稻': '稲', '鬭': '闘',
    '德': '徳', '獨': '独', '讀': '読', '貳': '弐', '惱': '悩', '腦': '脳',
    '霸': '覇', '廢': '廃', '拜': '拝', '賣': '売', '麥': '麦', '發': '発',
    '髮': '髪', '拔': '抜', '蠻': '蛮', '祕': '秘', '濱': '浜', '拂': '払',
    '佛': '仏', '竝': '並', '變': '変', '邊': '辺', '辯': '弁', '辨': '弁',
    '瓣': '弁', '步': '歩', '寶': '宝', '豐': '豊', '沒': '没', '萬': '万',
    '滿': '満', '默': '黙', '譯': '訳', '藥': '薬', '與': '与', '譽': '誉',
    '餘': '余', '搖': '揺', '樣': '様', '謠': '謡', '來': '来', '賴': '頼',
    '亂': '乱', '覽': '覧', '龍': '竜', '兩': '両', '獵': '猟', '綠': '緑',
    '壘': '塁', '勵': '励', '禮': '礼', '靈': '霊', '齡': '齢', '歷': '歴',
    '曆': '暦', '戀': '恋', '爐': '炉', '勞': '労', '樓': '楼', '錄': '録',
    '灣': '湾', '顏': '顔', '雞': '鶏', '鷄': '鶏', '黃': '黄', '惠': '恵',
    '淚': '涙', '齒': '歯', '蟲': '虫', '鹽': '塩', '戶': '戸', '稅': '税',
    '說': '説', '閱': '閲', '銳': '鋭', '脫': '脱', '內': '内', '姬': '姫',
    '值': '値', '卽': '即', '冰': '氷', '每': '毎', '區': '区', '醫': '医',
    '歸': '帰', '營': '営', '單': '単', '歲': '歳', '戲': '戯', '釋': '釈',
    '應': '応', '樂': '楽', '擴': '拡',
}


class ScriptConverter:
    """Per-character conversion from traditional hanzi to Japanese kanji."""

    def __init__(self, table: Optional[Mapping[str, str]] = None):
        merged = dict(TRADITIONAL_TO_JAPANESE)
        if table:
            merged.update(table)
        self._table = MappingProxyType(merged)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ScriptConverter":
        """
        Extend the built-in table from a file of ``TRAD<TAB>KANJI`` lines.

        Lines starting with ``#`` are comments. Lines without exactly two
        single-character columns are skipped with a warning.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Variant table not found at {path}")

        extra = {}
        with open(path, "r", encoding="utf-8-sig") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                parts = line.split("\t")
                if len(parts) != 2 or len(parts[0]) != 1 or len(parts[1]) != 1:
                    logger.warning(f"Skipping variant line {path}:{line_no}")
                    continue
                extra[parts[0]] = parts[1]

        logger.info(f"Loaded {len(extra)} extra script variants from {path.name}")
        return cls(extra)

    def to_japanese(self, text: str) -> str:
        """Convert every character of text that has a Japanese form."""
        return "".join(self._table.get(c, c) for c in text)

    def __len__(self) -> int:
        return len(self._table)
