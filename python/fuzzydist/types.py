"""Value types shared by the metrics and the search drivers."""

import math
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from fuzzydist._utils import round_half_up
from fuzzydist.exceptions import ValidationError

Number = Union[int, float]

# Absorbs the rounding error of 1 - distance / max_len next to a typed similarity
_SIMILARITY_TOLERANCE = 1e-9


@dataclass(frozen=True)
class DistanceResult:
    """
    Outcome of a single comparison.

    Attributes:
        distance: Edit cost (int for character metrics, float for the keyboard metric).
            When ``truncated`` is True this is ``max_distance + 1``, not the exact value.
        similarity: ``1 - distance / max(len(a), len(b))`` clamped to [0.0, 1.0].
        truncated: True when the real distance exceeds the requested threshold.
    """

    distance: Number
    similarity: float
    truncated: bool = False

    @classmethod
    def from_distance(cls, distance: Number, max_len: int, truncated: bool = False) -> "DistanceResult":
        """Build a result, deriving the similarity from ``distance`` and ``max_len``."""
        if max_len == 0:
            # Two empty strings: identical by convention
            return cls(distance, 1.0 if distance == 0 else 0.0, truncated)
        similarity = 1.0 - distance / max_len
        return cls(distance, min(1.0, max(0.0, similarity)), truncated)


@dataclass(frozen=True)
class Threshold:
    """
    A filter bound that is either a maximum distance or a minimum similarity.

    Prefer the explicit constructors over raw numbers:

        >>> Threshold.distance(2)
        Threshold(kind='distance', value=2)
        >>> Threshold.similarity(0.8)
        Threshold(kind='similarity', value=0.8)

    Raw numbers are accepted by :meth:`coerce`: an ``int`` is a distance, a
    ``float`` in [0, 1] is a similarity, and a ``float`` above 1 is a
    (possibly fractional) distance. Beware that ``1`` and ``1.0`` therefore
    mean different things.
    """

    kind: str
    value: Number

    DISTANCE: ClassVar[str] = "distance"
    SIMILARITY: ClassVar[str] = "similarity"

    @classmethod
    def distance(cls, value: Number) -> "Threshold":
        _check_number("max distance", value)
        if value < 0:
            raise ValidationError(f"max distance must be >= 0, got {value!r}")
        return cls(cls.DISTANCE, value)

    @classmethod
    def similarity(cls, value: Number) -> "Threshold":
        _check_number("min similarity", value)
        if not 0.0 <= value <= 1.0:
            raise ValidationError(f"min similarity must be in [0.0, 1.0], got {value!r}")
        return cls(cls.SIMILARITY, float(value))

    @classmethod
    def coerce(cls, value: Union["Threshold", Number, None]) -> Optional["Threshold"]:
        """Turn a raw threshold argument into a Threshold (None stays None)."""
        if value is None or isinstance(value, Threshold):
            return value
        _check_number("threshold", value)
        if isinstance(value, int):
            return cls.distance(value)
        if 0.0 <= value <= 1.0:
            return cls.similarity(value)
        return cls.distance(value)

    @property
    def is_similarity(self) -> bool:
        return self.kind == self.SIMILARITY

    def max_distance(self, max_len: int) -> Number:
        """
        Absolute distance bound for strings whose longer side has ``max_len`` code points.

        A similarity ``s`` converts to ``round((1 - s) * max_len)``; a result of 0 is
        raised to 1 so the band around the diagonal never collapses.
        """
        if self.kind == self.DISTANCE:
            return self.value
        bound = round_half_up((1.0 - self.value) * max_len)
        return bound if bound > 0 else 1

    def accepts(self, result: DistanceResult) -> bool:
        """Whether ``result`` passes this threshold."""
        if result.truncated:
            return False
        if self.kind == self.SIMILARITY:
            return result.similarity >= self.value - _SIMILARITY_TOLERANCE
        return result.distance <= self.value


@dataclass(frozen=True)
class SearchResult:
    """
    One hit from :func:`fuzzydist.fuzzy_search`.

    Attributes:
        item: The original collection entry (string or row)
        distance: Distance between the target and the compared text
        similarity: Similarity score (0.0-1.0)
        index: Position of ``item`` in the input collection
    """

    item: Any
    distance: Number
    similarity: float
    index: int


@dataclass(frozen=True)
class MatchResult:
    """Result from the batch helpers: matched text, similarity score and input position."""

    text: str
    score: float
    id: Optional[int] = None


def _check_number(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value!r}")


__all__ = ["DistanceResult", "Threshold", "SearchResult", "MatchResult"]
