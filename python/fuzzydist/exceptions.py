"""Exception hierarchy for fuzzydist.

Every error raised by the library derives from :class:`FuzzyDistError` and
also from the closest builtin exception, so ``except ValueError`` keeps
working for callers that do not know about fuzzydist.
"""

from typing import Optional


class FuzzyDistError(Exception):
    """Base exception for all fuzzydist errors."""


class ValidationError(FuzzyDistError, ValueError):
    """Raised when input validation fails (invalid parameters, out of range values)."""


class AlgorithmError(FuzzyDistError, ValueError):
    """Raised when an unknown or unsupported algorithm is specified."""


class InvalidCallbackError(FuzzyDistError, TypeError):
    """Raised when a metric or encoder supplied by the caller is not callable."""


class InvalidCollectionShapeError(FuzzyDistError, ValueError):
    """Raised when a collection is empty or is not flat / single-level tabular."""


class ColumnOutOfRangeError(FuzzyDistError, IndexError):
    """Raised when the comparison column is outside the collection's columns."""

    def __init__(self, column, width: Optional[int] = None):
        self.column = column
        self.width = width
        if width is None:
            msg = f"Column {column!r} does not exist"
        else:
            msg = f"Column {column!r} is out of range for {width} column(s)"
        super().__init__(msg)


class UnknownCharacterError(FuzzyDistError, KeyError):
    """Raised when a character has no entry in the active keyboard layout."""

    def __init__(self, char: str):
        self.char = char
        super().__init__(char)

    def __str__(self) -> str:
        return f"Character {self.char!r} is not on the keyboard layout"


class UnencodableWordError(FuzzyDistError, ValueError):
    """Raised when phonetic normalization leaves no classifiable letters."""

    def __init__(self, word: str, encoder: str = "phonetic"):
        self.word = word
        self.encoder = encoder
        super().__init__(f"{encoder} cannot encode {word!r}: no classifiable letters")


__all__ = [
    "FuzzyDistError",
    "ValidationError",
    "AlgorithmError",
    "InvalidCallbackError",
    "InvalidCollectionShapeError",
    "ColumnOutOfRangeError",
    "UnknownCharacterError",
    "UnencodableWordError",
]
