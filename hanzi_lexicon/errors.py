"""
Exceptions raised while building the dictionary feed.

Lookup misses are not errors; they are modeled as "no data" by the
individual stages.
"""

from pathlib import Path
from typing import Optional, Union


class LexiconError(Exception):
    """Base class for all hanzi-lexicon errors."""


class MalformedInputError(LexiconError, ValueError):
    """
    A corpus line or file could not be parsed into its expected shape.

    Attributes:
        path: Source file, if known
        line_no: 1-based line number, if known
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        line_no: Optional[int] = None,
    ):
        self.path = path
        self.line_no = line_no
        location = ""
        if path is not None:
            location = f"{path}:{line_no}: " if line_no is not None else f"{path}: "
        super().__init__(f"{location}{message}")


class InvariantViolation(LexiconError, RuntimeError):
    """A computed value broke an invariant (e.g. a NaN score)."""
