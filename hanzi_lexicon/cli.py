"""
CLI interface for hanzi-lexicon.

Usage:
    hanzi-lexicon build --data-dir data --output db.json
    hanzi-lexicon build --cedict cedict_ts.u8 --proficiency tocfl.csv
    hanzi-lexicon kanjidic kanjidic2.xml.gz --wanikani wanikani.json -o kanji.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from hanzi_lexicon import __version__
from hanzi_lexicon.config import OUTPUT_FILE, CorpusPaths, default_data_dir
from hanzi_lexicon.errors import LexiconError
from hanzi_lexicon.kanjidic import merge_wanikani, parse_kanjidic, write_kanji_table
from hanzi_lexicon.pipeline import run

logger = logging.getLogger("hanzi_lexicon")

# CLI flag -> CorpusPaths field
CORPUS_FLAGS = {
    "cedict": "dictionary",
    "word_freq": "word_frequency",
    "char_freq": "char_frequency",
    "proficiency": "proficiency",
    "simplified_radicals": "simplified_radicals",
    "traditional_radicals": "traditional_radicals",
    "kanji": "kanji",
    "glosses": "glosses",
    "variants": "variants",
}


# ============================================================================
# Commands
# ============================================================================

def resolve_paths(args: argparse.Namespace) -> CorpusPaths:
    """Default every corpus to the data directory, then apply explicit flags."""
    paths = CorpusPaths.from_directory(args.data_dir)
    for flag, attr in CORPUS_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            setattr(paths, attr, value)
    return paths


def cmd_build(args: argparse.Namespace) -> int:
    paths = resolve_paths(args)
    output = args.output if args.output is not None else Path(OUTPUT_FILE)
    run(paths, output)
    return 0


def cmd_kanjidic(args: argparse.Namespace) -> int:
    kanji = parse_kanjidic(args.xml)
    if args.wanikani is not None:
        merge_wanikani(kanji, args.wanikani)
    write_kanji_table(kanji, args.output)
    return 0


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hanzi-lexicon",
        description="Build a searchable Chinese-English dictionary feed",
    )
    parser.add_argument(
        "--verbose", "-V",
        action="store_true",
        help="Log debug output",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"hanzi-lexicon {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build the dictionary feed")
    build.add_argument(
        "--data-dir", "-d",
        type=Path,
        default=None,
        help=f"Directory holding the corpora (default: {default_data_dir()})",
    )
    build.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help=f"Output file (default: {OUTPUT_FILE})",
    )
    for flag in CORPUS_FLAGS:
        build.add_argument(
            f"--{flag.replace('_', '-')}",
            dest=flag,
            type=Path,
            default=None,
            help=f"Path to the {flag.replace('_', ' ')} corpus (overrides --data-dir)",
        )
    build.set_defaults(func=cmd_build)

    kanjidic = subparsers.add_parser("kanjidic", help="Convert KANJIDIC2 XML to the kanji table")
    kanjidic.add_argument("xml", type=Path, help="Path to kanjidic2.xml(.gz)")
    kanjidic.add_argument(
        "--wanikani", "-w",
        type=Path,
        default=None,
        help="WaniKani JSON to merge",
    )
    kanjidic.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("kanji.json"),
        help="Output file (default: kanji.json)",
    )
    kanjidic.set_defaults(func=cmd_kanjidic)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        return args.func(args)
    except (LexiconError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
