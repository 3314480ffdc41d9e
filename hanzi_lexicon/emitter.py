"""
Newline-delimited JSON output.

The emitted file is the whole interface to the search engine: one entry
per line, in corpus order, fields in a fixed order.
"""

import json
import logging
from pathlib import Path
from typing import IO, Iterable, Union

from hanzi_lexicon.entry import Entry

logger = logging.getLogger(__name__)


def dump_entry(entry: Entry) -> str:
    """Serialize one entry to a single JSON line (without newline)."""
    return json.dumps(entry.to_record(), ensure_ascii=False)


def _write(entries: Iterable[Entry], f: IO[str]) -> int:
    count = 0
    for entry in entries:
        f.write(dump_entry(entry))
        f.write("\n")
        count += 1
    return count


def write_entries(entries: Iterable[Entry], output: Union[str, Path, IO[str]]) -> int:
    """
    Write entries as newline-delimited JSON.

    Args:
        entries: Entries in the order they should appear
        output: A path, or an open text stream

    Returns:
        Number of entries written
    """
    if hasattr(output, "write"):
        return _write(entries, output)

    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        count = _write(entries, f)

    file_size = path.stat().st_size / (1024 * 1024)
    logger.info(f"Saved {count} entries to {path} ({file_size:.1f} MB)")
    return count
