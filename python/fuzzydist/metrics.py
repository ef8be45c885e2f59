"""Distance metrics with one calling convention.

Every metric is a callable ``metric(a, b, threshold=None) -> DistanceResult``.
``threshold`` is a :class:`~fuzzydist.types.Threshold`, a raw number (see
:meth:`Threshold.coerce`) or None. A similarity threshold is converted into a
maximum distance from the longer input's length before the comparison runs,
so every metric prunes and truncates the same way.

Example:
    >>> from fuzzydist.metrics import LEVENSHTEIN, KeyboardMetric
    >>> LEVENSHTEIN("kitten", "sitting")
    DistanceResult(distance=3, similarity=0.5714285714285714, truncated=False)
    >>> KeyboardMetric()("hello", "jello").distance < KeyboardMetric()("hello", "pello").distance
    True
"""

from typing import Mapping, Optional, Protocol, Union

from fuzzydist._utils import normalize_algorithm, validate_cost
from fuzzydist.engine import EditDistanceEngine
from fuzzydist.enums import Algorithm, CharDistanceMode, KeyboardLayout
from fuzzydist.exceptions import InvalidCallbackError
from fuzzydist.keyboard import (
    DEFAULT_LAYOUT,
    DEFAULT_SHIFT_Z_OFFSET,
    Coordinate,
    get_layout,
    key_distance,
    max_key_distance,
    resolve_mode,
)
from fuzzydist.phonetic import PhoneticEncoder, cologne_phonetic, german_soundex, soundex
from fuzzydist.types import DistanceResult, Number, Threshold

ThresholdLike = Union[Threshold, int, float, None]


class DistanceMetric(Protocol):
    """Anything that compares two strings under an optional threshold."""

    def __call__(self, a: str, b: str, threshold: ThresholdLike = None) -> DistanceResult: ...


def _bound(threshold: ThresholdLike, a: str, b: str) -> Optional[Number]:
    threshold = Threshold.coerce(threshold)
    if threshold is None:
        return None
    return threshold.max_distance(max(len(a), len(b)))


class EditDistanceMetric:
    """
    Character edit distance.

    Args:
        transpositions: Count a swap of two adjacent characters as one edit
            (optimal string alignment). This is the restricted form: a
            substring that was transposed is not edited again, so it is not
            the unrestricted Damerau-Levenshtein distance.
    """

    def __init__(self, transpositions: bool = False):
        self.transpositions = transpositions
        self._engine = EditDistanceEngine(transpositions=transpositions)

    def __call__(self, a: str, b: str, threshold: ThresholdLike = None) -> DistanceResult:
        return self._engine.compute(a, b, _bound(threshold, a, b))

    def __repr__(self) -> str:
        return f"EditDistanceMetric(transpositions={self.transpositions!r})"


class HammingMetric:
    """
    Positional mismatch count.

    The shorter string is padded with a filler that never matches, so every
    extra character of the longer string counts as one mismatch. Runs in
    O(n) without pruning; a distance above the threshold is still reported
    as truncated so results look the same as for the other metrics.
    """

    def __call__(self, a: str, b: str, threshold: ThresholdLike = None) -> DistanceResult:
        max_len = max(len(a), len(b))
        distance = abs(len(a) - len(b)) + sum(1 for x, y in zip(a, b) if x != y)
        bound = _bound(threshold, a, b)
        if bound is not None and distance > bound:
            return DistanceResult.from_distance(bound + 1, max_len, truncated=True)
        return DistanceResult.from_distance(distance, max_len)

    def __repr__(self) -> str:
        return "HammingMetric()"


class PhoneticMetric:
    """
    Edit distance between the phonetic codes of two words.

    Raises:
        InvalidCallbackError: If ``encoder`` is not callable.
        UnencodableWordError: From the encoder, when a word has no letters.
    """

    def __init__(self, encoder: PhoneticEncoder = soundex, transpositions: bool = False):
        if not callable(encoder):
            raise InvalidCallbackError(f"encoder must be callable, got {type(encoder).__name__}")
        self.encoder = encoder
        self._metric = EditDistanceMetric(transpositions=transpositions)

    def __call__(self, a: str, b: str, threshold: ThresholdLike = None) -> DistanceResult:
        return self._metric(self.encoder(a), self.encoder(b), threshold)

    def __repr__(self) -> str:
        name = getattr(self.encoder, "__name__", repr(self.encoder))
        return f"PhoneticMetric(encoder={name})"


class KeyboardMetric:
    """
    Optimal string alignment where substitutions cost the distance between keys.

    Typing ``"jello"`` for ``"hello"`` (neighbouring keys) is cheaper than
    ``"pello"``. Key distances are divided by the widest distance on the
    layout (see :func:`fuzzydist.keyboard.max_key_distance`), so under unit
    costs a substitution costs at most 1 and the distance never exceeds the
    longer string's length. Similarity is clamped to 0 for custom costs
    above 1.

    Args:
        layout: Built-in layout name or a mapping from character to coordinate
            (see :func:`fuzzydist.keyboard.build_layout`)
        euclidean: True / "euclidean" for L2 key distance, False / "manhattan" for L1
        case_sensitive: Whether shifted characters sit above their base key
        shift_z_offset: Height of shifted characters when case sensitive
        cost_delete: Cost of a deletion
        cost_insert: Cost of an insertion
        cost_replace: Multiplier applied to the normalized key distance of a substitution

    Raises:
        ValidationError: If a cost is not a positive finite number or the
            layout name is unknown.
        UnknownCharacterError: At comparison time, when a substituted
            character is not on the layout.
    """

    def __init__(
        self,
        layout: Union[str, KeyboardLayout, Mapping[str, Coordinate]] = DEFAULT_LAYOUT,
        euclidean: Union[bool, str, CharDistanceMode] = True,
        case_sensitive: bool = False,
        shift_z_offset: float = DEFAULT_SHIFT_Z_OFFSET,
        cost_delete: Number = 1,
        cost_insert: Number = 1,
        cost_replace: Number = 1,
    ):
        if isinstance(layout, Mapping):
            self.layout = layout
        else:
            self.layout = get_layout(layout, case_sensitive, shift_z_offset)
        self.euclidean = resolve_mode(euclidean)
        # A layout whose keys all share one position has no spread to divide by
        self.scale = max_key_distance(self.layout, self.euclidean) or 1.0
        self.cost_replace = validate_cost("cost_replace", cost_replace)
        self._engine = EditDistanceEngine(
            self._substitution_cost,
            cost_delete=cost_delete,
            cost_insert=cost_insert,
            transpositions=True,
        )

    def _substitution_cost(self, x: str, y: str) -> float:
        return self.cost_replace * key_distance(self.layout, x, y, self.euclidean) / self.scale

    def __call__(self, a: str, b: str, threshold: ThresholdLike = None) -> DistanceResult:
        return self._engine.compute(a, b, _bound(threshold, a, b))

    def __repr__(self) -> str:
        return (
            f"KeyboardMetric(keys={len(self.layout)}, euclidean={self.euclidean!r}, "
            f"cost_delete={self._engine.cost_delete!r}, cost_insert={self._engine.cost_insert!r}, "
            f"cost_replace={self.cost_replace!r})"
        )


LEVENSHTEIN = EditDistanceMetric()
OPTIMAL_ALIGNMENT = EditDistanceMetric(transpositions=True)
HAMMING = HammingMetric()
SOUNDEX = PhoneticMetric(soundex)
GERMAN_SOUNDEX = PhoneticMetric(german_soundex)
COLOGNE = PhoneticMetric(cologne_phonetic)

_METRICS = {
    "levenshtein": LEVENSHTEIN,
    "optimal_alignment": OPTIMAL_ALIGNMENT,
    "hamming": HAMMING,
    "soundex": SOUNDEX,
    "german_soundex": GERMAN_SOUNDEX,
    "cologne": COLOGNE,
}


def get_metric(algorithm: Union[str, Algorithm]) -> DistanceMetric:
    """
    Metric instance for an algorithm name.

    Raises:
        AlgorithmError: If the name is not recognized.

    Example:
        >>> get_metric("osa")("ab", "ba").distance
        1
    """
    name = normalize_algorithm(algorithm)
    if name == "keyboard":
        return KeyboardMetric()
    return _METRICS[name]


def resolve_metric(metric: Union[None, str, Algorithm, DistanceMetric]) -> DistanceMetric:
    """Turn a metric argument (None, name, enum or callable) into a callable metric."""
    if metric is None:
        return LEVENSHTEIN
    if isinstance(metric, (str, Algorithm)):
        return get_metric(metric)
    if not callable(metric):
        raise InvalidCallbackError(f"metric must be callable, got {type(metric).__name__}")
    return metric


# -----------------------------------------------------------------------------
# Flat convenience functions
# -----------------------------------------------------------------------------


def _distance_bound(max_distance):
    return None if max_distance is None else Threshold.distance(max_distance)


def levenshtein(a: str, b: str, max_distance: Optional[int] = None) -> int:
    """
    Compute Levenshtein (edit) distance between two strings.

    Args:
        a: First string
        b: Second string
        max_distance: Optional maximum distance for early termination.
            Returns max_distance + 1 if exceeded.
            Use levenshtein_bounded() if you prefer None semantics.

    Example:
        >>> levenshtein("kitten", "sitting")
        3
        >>> levenshtein("abcdef", "ghijkl", max_distance=3)
        4
    """
    return LEVENSHTEIN(a, b, _distance_bound(max_distance)).distance


def levenshtein_bounded(a: str, b: str, max_distance: int) -> Optional[int]:
    """Levenshtein distance, or None when it exceeds ``max_distance``."""
    result = LEVENSHTEIN(a, b, Threshold.distance(max_distance))
    return None if result.truncated else result.distance


def levenshtein_similarity(a: str, b: str) -> float:
    """
    Normalized Levenshtein similarity (0.0 to 1.0).

    Example:
        >>> levenshtein_similarity("hello", "hallo")
        0.8
    """
    return LEVENSHTEIN(a, b).similarity


def optimal_string_alignment(a: str, b: str, max_distance: Optional[int] = None) -> int:
    """
    Edit distance counting an adjacent swap as a single edit.

    Example:
        >>> optimal_string_alignment("plauge", "plague")
        1
        >>> optimal_string_alignment("ca", "abc")
        3
    """
    return OPTIMAL_ALIGNMENT(a, b, _distance_bound(max_distance)).distance


def optimal_string_alignment_similarity(a: str, b: str) -> float:
    return OPTIMAL_ALIGNMENT(a, b).similarity


def hamming_distance_padded(a: str, b: str) -> int:
    """
    Hamming distance with padding for unequal-length strings.

    Example:
        >>> hamming_distance_padded("Test", "Tes")
        1
    """
    return HAMMING(a, b).distance


def hamming_similarity(a: str, b: str) -> float:
    """
    Normalized padded Hamming similarity (0.0 to 1.0).

    Example:
        >>> hamming_similarity("Test", "Tes")
        0.75
    """
    return HAMMING(a, b).similarity


def keyboard_distance(
    a: str,
    b: str,
    layout: Union[str, KeyboardLayout] = DEFAULT_LAYOUT,
    euclidean: Union[bool, str, CharDistanceMode] = True,
    case_sensitive: bool = False,
) -> float:
    """
    Typing-error distance between two strings on a physical keyboard.

    Example:
        >>> keyboard_distance("hello", "jello") < keyboard_distance("hello", "pello")
        True
    """
    metric = KeyboardMetric(layout, euclidean=euclidean, case_sensitive=case_sensitive)
    return float(metric(a, b).distance)


def keyboard_similarity(
    a: str,
    b: str,
    layout: Union[str, KeyboardLayout] = DEFAULT_LAYOUT,
    euclidean: Union[bool, str, CharDistanceMode] = True,
    case_sensitive: bool = False,
) -> float:
    metric = KeyboardMetric(layout, euclidean=euclidean, case_sensitive=case_sensitive)
    return metric(a, b).similarity


def soundex_similarity(a: str, b: str) -> float:
    """
    Similarity of the Soundex codes of two words.

    Example:
        >>> soundex_similarity("Robert", "Rupert")
        1.0
    """
    return SOUNDEX(a, b).similarity


def cologne_similarity(a: str, b: str) -> float:
    return COLOGNE(a, b).similarity


def phonetic_match(a: str, b: str, encoder: PhoneticEncoder = soundex) -> bool:
    """Whether two words share the same phonetic code."""
    return encoder(a) == encoder(b)


__all__ = [
    "DistanceMetric",
    "ThresholdLike",
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
    "resolve_metric",
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
]
