"""Banded edit-distance engine.

All edit-distance style metrics in fuzzydist (Levenshtein, optimal string
alignment, keyboard-weighted distance) run through :func:`banded_edit_distance`.
The engine is parametric over the substitution cost so the same dynamic
program serves both the 0/1 mismatch cost and real-valued key distances.

When a maximum distance ``k`` is given only the cells within ``k`` steps of
the main diagonal are evaluated (O(n*k) instead of O(n*m)); everything
outside the band is treated as unreachable.
"""

import math
from typing import Callable, Optional

from fuzzydist._utils import validate_cost
from fuzzydist.exceptions import ValidationError
from fuzzydist.types import DistanceResult, Number

SubstitutionCost = Callable[[str, str], float]

_INF = math.inf


def mismatch_cost(x: str, y: str) -> int:
    """0 if the two characters are equal, 1 otherwise."""
    return 0 if x == y else 1


def banded_edit_distance(
    a: str,
    b: str,
    max_distance: Optional[Number] = None,
    substitution_cost: Optional[SubstitutionCost] = None,
    cost_delete: Number = 1,
    cost_insert: Number = 1,
    transpositions: bool = False,
) -> DistanceResult:
    """
    Compute the (optionally transposition-aware) edit distance between two strings.

    Args:
        a: Source string
        b: Target string
        max_distance: Stop as soon as the distance is known to exceed this bound.
            ``None`` computes the exact distance without a band.
        substitution_cost: Cost of replacing one character with a different one.
            Only called for unequal characters. Defaults to a cost of 1.
        cost_delete: Cost of deleting a character of ``a``
        cost_insert: Cost of inserting a character of ``b``
        transpositions: Also allow swapping two adjacent characters
            (optimal string alignment: each substring is edited at most once).

    Returns:
        DistanceResult. When the bound is exceeded ``distance`` is
        ``max_distance + 1`` and ``truncated`` is True.

    Complexity:
        Time: O(n*k) cell evaluations with max_distance=k, O(n*m) without.
        Space: O(m) using three rolling rows.

    Example:
        >>> banded_edit_distance("plauge", "plague").distance
        2
        >>> banded_edit_distance("plauge", "plague", transpositions=True).distance
        1
        >>> banded_edit_distance("abcdef", "ghijkl", max_distance=3)
        DistanceResult(distance=4, similarity=0.33333333333333337, truncated=True)
    """
    validate_cost("cost_delete", cost_delete)
    validate_cost("cost_insert", cost_insert)
    if max_distance is not None:
        if isinstance(max_distance, bool) or not isinstance(max_distance, (int, float)):
            raise ValidationError(
                f"max_distance must be a number, got {type(max_distance).__name__}"
            )
        if max_distance < 0 or not math.isfinite(max_distance):
            raise ValidationError(f"max_distance must be a finite number >= 0, got {max_distance!r}")
    if substitution_cost is None:
        substitution_cost = mismatch_cost

    n, m = len(a), len(b)
    max_len = max(n, m)
    if a == b:
        return DistanceResult(0, 1.0, False)

    min_indel = min(cost_delete, cost_insert)
    if max_distance is None:
        band = max_len
    else:
        if abs(n - m) * min_indel > max_distance:
            return _truncated(max_distance, max_len)
        # Leaving the diagonal by more than `band` cells costs more than max_distance
        band = min(max_len, int(max_distance // min_indel))

    before = None
    prev = [_INF] * (m + 1)
    for j in range(min(m, band) + 1):
        prev[j] = j * cost_insert
    prev_min = 0

    for i in range(1, n + 1):
        cur = [_INF] * (m + 1)
        if i <= band:
            cur[0] = i * cost_delete
        lo = max(1, i - band)
        hi = min(m, i + band)
        ca = a[i - 1]
        for j in range(lo, hi + 1):
            cb = b[j - 1]
            sub = 0 if ca == cb else substitution_cost(ca, cb)
            best = prev[j - 1] + sub
            cost = prev[j] + cost_delete
            if cost < best:
                best = cost
            cost = cur[j - 1] + cost_insert
            if cost < best:
                best = cost
            if transpositions and i > 1 and j > 1 and ca == b[j - 2] and a[i - 2] == cb:
                cost = before[j - 2] + sub
                if cost < best:
                    best = cost
            cur[j] = best

        if max_distance is not None:
            row_min = min(cur[lo - 1 : hi + 1])
            # A transposition reaches back two rows, so both must be out of bounds
            if row_min > max_distance and (not transpositions or prev_min > max_distance):
                return _truncated(max_distance, max_len)
            prev_min = row_min
        before, prev = prev, cur

    distance = prev[m]
    if max_distance is not None and distance > max_distance:
        return _truncated(max_distance, max_len)
    return DistanceResult.from_distance(distance, max_len)


def _truncated(max_distance: Number, max_len: int) -> DistanceResult:
    return DistanceResult.from_distance(max_distance + 1, max_len, truncated=True)


class EditDistanceEngine:
    """
    Edit-distance configuration bound to one substitution cost and set of operation costs.

    Example:
        >>> engine = EditDistanceEngine(transpositions=True)
        >>> engine.compute("ab", "ba").distance
        1
    """

    def __init__(
        self,
        substitution_cost: Optional[SubstitutionCost] = None,
        cost_delete: Number = 1,
        cost_insert: Number = 1,
        transpositions: bool = False,
    ):
        self.substitution_cost = substitution_cost or mismatch_cost
        self.cost_delete = validate_cost("cost_delete", cost_delete)
        self.cost_insert = validate_cost("cost_insert", cost_insert)
        self.transpositions = transpositions

    def compute(self, a: str, b: str, max_distance: Optional[Number] = None) -> DistanceResult:
        return banded_edit_distance(
            a,
            b,
            max_distance=max_distance,
            substitution_cost=self.substitution_cost,
            cost_delete=self.cost_delete,
            cost_insert=self.cost_insert,
            transpositions=self.transpositions,
        )

    def __repr__(self) -> str:
        return (
            f"EditDistanceEngine(cost_delete={self.cost_delete!r}, "
            f"cost_insert={self.cost_insert!r}, transpositions={self.transpositions!r})"
        )


__all__ = ["EditDistanceEngine", "banded_edit_distance", "mismatch_cost", "SubstitutionCost"]
