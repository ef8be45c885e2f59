"""
fuzzydist - Typo-tolerant string distances and fuzzy search

Distance metrics for approximate string matching (edit distance, optimal
string alignment, padded Hamming, phonetic codes and keyboard-key
proximity) behind one calling convention, plus drivers that search and
group collections with any of them.

Example usage:
    >>> import fuzzydist as fd

    # Distances
    >>> fd.levenshtein("plauge", "plague")
    2
    >>> fd.optimal_string_alignment("plauge", "plague")
    1

    # Every metric returns the same result shape
    >>> fd.HAMMING("Test", "Tes")
    DistanceResult(distance=1, similarity=0.75, truncated=False)

    # "Did you mean ...?"
    >>> [r.item for r in fd.fuzzy_search(["apple", "apply", "banana"], "appel", 0.5)]
    ['apple', 'apply']

    # Group by pronunciation
    >>> fd.group_by_phonetic(["Meier", "Mayer", "Schmidt"], "cologne")
    {'67': ['Meier', 'Mayer'], '862': ['Schmidt']}
"""

from importlib.metadata import version as _get_version

# Register the .fuzzy expression namespace
import fuzzydist.expr  # noqa: F401
from fuzzydist import batch
from fuzzydist.engine import EditDistanceEngine, banded_edit_distance
from fuzzydist.enums import Algorithm, CharDistanceMode, KeyboardLayout
from fuzzydist.exceptions import (
    AlgorithmError,
    ColumnOutOfRangeError,
    FuzzyDistError,
    InvalidCallbackError,
    InvalidCollectionShapeError,
    UnencodableWordError,
    UnknownCharacterError,
    ValidationError,
)
from fuzzydist.keyboard import (
    build_layout,
    char_distance,
    get_layout,
    key_distance,
    max_key_distance,
)
from fuzzydist.metrics import (
    COLOGNE,
    GERMAN_SOUNDEX,
    HAMMING,
    LEVENSHTEIN,
    OPTIMAL_ALIGNMENT,
    SOUNDEX,
    DistanceMetric,
    EditDistanceMetric,
    HammingMetric,
    KeyboardMetric,
    PhoneticMetric,
    cologne_similarity,
    get_metric,
    hamming_distance_padded,
    hamming_similarity,
    keyboard_distance,
    keyboard_similarity,
    levenshtein,
    levenshtein_bounded,
    levenshtein_similarity,
    optimal_string_alignment,
    optimal_string_alignment_similarity,
    phonetic_match,
    soundex_similarity,
)
from fuzzydist.phonetic import cologne_phonetic, german_soundex, soundex
from fuzzydist.polars_ext import match_series, phonetic_groups, search_frame, search_series
from fuzzydist.search import extract_one, fuzzy_search, group_by_phonetic
from fuzzydist.types import DistanceResult, MatchResult, SearchResult, Threshold

__version__ = _get_version("fuzzydist")
__all__ = [
    # Version
    "__version__",
    # Custom exceptions
    "FuzzyDistError",
    "ValidationError",
    "AlgorithmError",
    "InvalidCallbackError",
    "InvalidCollectionShapeError",
    "ColumnOutOfRangeError",
    "UnknownCharacterError",
    "UnencodableWordError",
    # Result and parameter types
    "DistanceResult",
    "Threshold",
    "SearchResult",
    "MatchResult",
    # Enums
    "Algorithm",
    "KeyboardLayout",
    "CharDistanceMode",
    # Engine
    "EditDistanceEngine",
    "banded_edit_distance",
    # Metrics
    "DistanceMetric",
    "EditDistanceMetric",
    "HammingMetric",
    "PhoneticMetric",
    "KeyboardMetric",
    "LEVENSHTEIN",
    "OPTIMAL_ALIGNMENT",
    "HAMMING",
    "SOUNDEX",
    "GERMAN_SOUNDEX",
    "COLOGNE",
    "get_metric",
    # Distance/similarity functions
    "levenshtein",
    "levenshtein_bounded",
    "levenshtein_similarity",
    "optimal_string_alignment",
    "optimal_string_alignment_similarity",
    "hamming_distance_padded",
    "hamming_similarity",
    "keyboard_distance",
    "keyboard_similarity",
    "soundex_similarity",
    "cologne_similarity",
    "phonetic_match",
    # Phonetic encoders
    "soundex",
    "german_soundex",
    "cologne_phonetic",
    # Keyboard geometry
    "get_layout",
    "build_layout",
    "char_distance",
    "key_distance",
    "max_key_distance",
    # Collection drivers
    "fuzzy_search",
    "extract_one",
    "group_by_phonetic",
    # Polars Integration
    "search_series",
    "search_frame",
    "match_series",
    "phonetic_groups",
    # Batch helpers
    "batch",
]


# Convenience aliases
edit_distance = levenshtein
osa = optimal_string_alignment
