"""Batch operations API for fuzzydist.

This module provides list-based helpers on top of the distance metrics.
Every function accepts a metric callable, an Algorithm member or an
algorithm name.

Example usage:
    >>> import fuzzydist.batch as batch

    # Compute similarity of query against all strings
    >>> results = batch.similarity(["hello", "hallo", "world"], "helo")
    >>> [(r.text, round(r.score, 2)) for r in results]
    [('hello', 0.8), ('hallo', 0.6), ('world', 0.2)]

    # Find top N best matches
    >>> matches = batch.best_matches(["apple", "apply", "banana"], "appel", limit=2)
    >>> [(m.text, m.score) for m in matches]
    [('apple', 0.6), ('apply', 0.6)]

    # Pairwise similarity between aligned lists
    >>> batch.pairwise(["hello", "world"], ["hallo", "word"])
    [0.8, 0.8]
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Union

from fuzzydist._utils import validate_limit
from fuzzydist.exceptions import UnencodableWordError, UnknownCharacterError, ValidationError
from fuzzydist.metrics import resolve_metric
from fuzzydist.types import MatchResult, Threshold

if TYPE_CHECKING:
    from fuzzydist.enums import Algorithm
    from fuzzydist.metrics import DistanceMetric

logger = logging.getLogger(__name__)

__all__ = [
    "similarity",
    "best_matches",
    "pairwise",
    "similarity_matrix",
    "distance_matrix",
]

MetricArg = Union[str, "Algorithm", "DistanceMetric"]


def _score(scorer, a: str, b: str) -> float:
    try:
        return scorer(a, b).similarity
    except (UnknownCharacterError, UnencodableWordError) as exc:
        logger.debug("Scoring %r against %r failed: %s", a, b, exc)
        return 0.0


def similarity(
    strings: list[str],
    query: str,
    algorithm: MetricArg = "levenshtein",
) -> list[MatchResult]:
    """Compute similarity of a query against all strings.

    Results are returned in the same order as the input strings. A string the
    metric cannot compare (unknown key, unencodable word) scores 0.0.

    Args:
        strings: List of strings to compare against the query.
        query: The query string to match.
        algorithm: Metric to use (callable, name or Algorithm enum). Options:
            - "levenshtein": Normalized Levenshtein similarity (default)
            - "optimal_alignment" / "osa": Levenshtein plus adjacent transpositions
            - "hamming": Padded positional similarity
            - "keyboard": Keyboard-distance weighted similarity (QWERTY)
            - "soundex", "german_soundex", "cologne": Phonetic-code similarity

    Returns:
        List of MatchResult objects in input order, ``id`` being the input position.

    Example:
        >>> results = similarity(["hello", "hallo", "world"], "helo")
        >>> for r in results:
        ...     print(f"{r.text}: {r.score:.2f}")
        hello: 0.80
        hallo: 0.60
        world: 0.20
    """
    scorer = resolve_metric(algorithm)
    return [MatchResult(s, _score(scorer, query, s), i) for i, s in enumerate(strings)]


def best_matches(
    strings: list[str],
    query: str,
    algorithm: MetricArg = "levenshtein",
    limit: int = 5,
    min_similarity: float = 0.0,
) -> list[MatchResult]:
    """Find top N best matches for a query from a list of strings.

    Args:
        strings: List of strings to search.
        query: The query string to match.
        algorithm: Metric to use (see :func:`similarity`).
        limit: Maximum number of results to return (default: 5).
        min_similarity: Minimum similarity score to include in results
            (default: 0.0, meaning all results are included).

    Returns:
        List of MatchResult objects sorted by score descending; ties keep input order.

    Raises:
        ValidationError: If min_similarity is outside [0.0, 1.0] or limit is negative.
    """
    bound = Threshold.similarity(min_similarity)
    limit = validate_limit(limit)
    scorer = resolve_metric(algorithm)
    matches = []
    for i, s in enumerate(strings):
        try:
            result = scorer(query, s, bound)
        except (UnknownCharacterError, UnencodableWordError) as exc:
            logger.debug("Skipping %r: %s", s, exc)
            continue
        if bound.accepts(result):
            matches.append(MatchResult(s, result.similarity, i))
    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[:limit]


def pairwise(
    left: list[str],
    right: list[str],
    algorithm: MetricArg = "levenshtein",
) -> list[float]:
    """Compute pairwise similarity between two equal-length lists.

    Raises:
        ValidationError: If left and right have different lengths.

    Example:
        >>> pairwise(["hello", "world"], ["hallo", "word"])
        [0.8, 0.8]
    """
    if len(left) != len(right):
        raise ValidationError(
            f"left and right must have the same length, got {len(left)} and {len(right)}"
        )
    scorer = resolve_metric(algorithm)
    return [_score(scorer, a, b) for a, b in zip(left, right)]


def similarity_matrix(
    queries: list[str],
    choices: list[str],
    algorithm: MetricArg = "levenshtein",
) -> list[list[float]]:
    """Compute similarity matrix between all queries and all choices.

    Returns:
        2D list where result[i][j] is the similarity between queries[i]
        and choices[j].

    Example:
        >>> matrix = similarity_matrix(["hello", "world"], ["hallo", "word", "help"])
        >>> len(matrix), len(matrix[0])
        (2, 3)
    """
    scorer = resolve_metric(algorithm)
    return [[_score(scorer, q, c) for c in choices] for q in queries]


def distance_matrix(
    queries: list[str],
    choices: list[str],
    algorithm: MetricArg = "levenshtein",
) -> list[list[float]]:
    """Compute the matrix of raw distances between all queries and all choices.

    Unlike :func:`similarity_matrix` a pair the metric cannot compare raises
    instead of scoring 0.

    Example:
        >>> distance_matrix(["kitten"], ["sitting", "kitten"])
        [[3, 0]]
    """
    scorer = resolve_metric(algorithm)
    return [[scorer(q, c).distance for c in choices] for q in queries]
