"""Enums for fuzzydist API."""

from enum import Enum


class Algorithm(str, Enum):
    """Available distance metrics.

    This enum provides type-safe metric selection for search operations.
    Plain string names are accepted everywhere an Algorithm is.

    Example:
        >>> from fuzzydist import Algorithm, fuzzy_search
        >>> results = fuzzy_search(
        ...     ["apple", "apply", "banana"],
        ...     "appel",
        ...     0.6,
        ...     metric=Algorithm.OPTIMAL_ALIGNMENT,
        ... )
    """

    LEVENSHTEIN = "levenshtein"
    """Classic edit distance (insertions, deletions, substitutions)"""

    OPTIMAL_ALIGNMENT = "optimal_alignment"
    """Edit distance plus adjacent transpositions, each substring edited at most once"""

    OSA = "osa"
    """Alias for OPTIMAL_ALIGNMENT"""

    HAMMING = "hamming"
    """Positional mismatch count, shorter string padded"""

    KEYBOARD = "keyboard"
    """Edit distance weighted by physical key distance (QWERTY)"""

    SOUNDEX = "soundex"
    """Edit distance between American Soundex codes"""

    GERMAN_SOUNDEX = "german_soundex"
    """Edit distance between German Soundex codes"""

    COLOGNE = "cologne"
    """Edit distance between Cologne phonetic (Koelner Phonetik) codes"""


class KeyboardLayout(str, Enum):
    """Built-in keyboard layouts.

    Example:
        >>> from fuzzydist import KeyboardLayout, get_layout
        >>> layout = get_layout(KeyboardLayout.QWERTZ)
        >>> layout["z"]
        (6.5, 1.0, 0.0)
    """

    QWERTY = "qwerty"
    """US English layout"""

    QWERTZ = "qwertz"
    """German layout"""


class CharDistanceMode(str, Enum):
    """Geometry used to measure the distance between two keys."""

    EUCLIDEAN = "euclidean"
    """Straight-line (L2) distance"""

    MANHATTAN = "manhattan"
    """Row plus column (L1) distance"""


__all__ = ["Algorithm", "KeyboardLayout", "CharDistanceMode"]
