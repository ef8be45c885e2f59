"""High-level Polars DataFrame operations for fuzzydist.

This module wraps the search and grouping drivers so they take and return
Polars objects.

Functions in This Module
------------------------
- ``search_series()``: Search a Series for values close to a target
- ``search_frame()``: Filter DataFrame rows whose column is close to a target
- ``match_series()``: Match every query in one Series against another Series
- ``phonetic_groups()``: Tabulate phonetic codes of a Series in insertion order

Example Usage
-------------
>>> import polars as pl
>>> import fuzzydist as fd
>>>
>>> cities = pl.DataFrame({"city": ["Berlin", "Bern", "Bonn"], "pop": [3.6, 0.13, 0.33]})
>>> fd.search_frame(cities, "Berm", 0.7, column="city")
shape: (1, 4)
...

See Also
--------
- ``fuzzydist.expr``: Polars expression namespace for column operations
- ``fuzzydist.search``: The underlying collection drivers
"""

from typing import Optional, Union

import polars as pl

from fuzzydist.enums import Algorithm
from fuzzydist.metrics import DistanceMetric, ThresholdLike, resolve_metric
from fuzzydist.phonetic import PhoneticEncoder, soundex
from fuzzydist.search import fuzzy_search, group_by_phonetic
from fuzzydist.types import Threshold

MetricArg = Union[None, str, Algorithm, DistanceMetric]

_SEARCH_SCHEMA = {
    "index": pl.Int64,
    "text": pl.Utf8,
    "distance": pl.Float64,
    "similarity": pl.Float64,
}


def search_series(
    series: "pl.Series",
    target: str,
    threshold: ThresholdLike,
    metric: MetricArg = None,
    limit: Optional[int] = None,
) -> "pl.DataFrame":
    """
    Search a Series for values close to ``target``.

    Args:
        series: Series of strings
        target: Query string
        threshold: Maximum distance or minimum similarity (see Threshold)
        metric: Metric callable, Algorithm or name (default: Levenshtein)
        limit: Maximum number of rows to return

    Returns:
        DataFrame with columns: index, text, distance, similarity,
        sorted by descending similarity.

    Example:
        >>> search_series(pl.Series(["apple", "apply", "banana"]), "appel", 0.5)
        shape: (2, 4)
        ...
    """
    results = fuzzy_search(series, target, threshold, metric, limit=limit)
    if not results:
        return pl.DataFrame(schema=_SEARCH_SCHEMA)
    return pl.DataFrame(
        {
            "index": [r.index for r in results],
            "text": [str(r.item) for r in results],
            "distance": [float(r.distance) for r in results],
            "similarity": [r.similarity for r in results],
        },
        schema=_SEARCH_SCHEMA,
    )


def search_frame(
    df: "pl.DataFrame",
    target: str,
    threshold: ThresholdLike,
    column: Union[int, str] = 0,
    metric: MetricArg = None,
    limit: Optional[int] = None,
) -> "pl.DataFrame":
    """
    Keep the DataFrame rows whose ``column`` is close to ``target``.

    Returns:
        The matching rows (best first) with two extra columns,
        ``_distance`` and ``_similarity``.

    Raises:
        ColumnOutOfRangeError: If ``column`` is not a column of ``df``.
        InvalidCollectionShapeError: If ``df`` is empty or the column is nested.
    """
    results = fuzzy_search(df, target, threshold, metric, column=column, limit=limit)
    hits = pl.DataFrame(
        {
            "_row": [r.index for r in results],
            "_distance": [float(r.distance) for r in results],
            "_similarity": [r.similarity for r in results],
        },
        schema={"_row": pl.UInt32, "_distance": pl.Float64, "_similarity": pl.Float64},
    )
    return (
        df.with_row_index("_row")
        .join(hits, on="_row", how="inner")
        .sort(["_similarity", "_row"], descending=[True, False])
        .drop("_row")
    )


def match_series(
    query_series: "pl.Series",
    target_series: "pl.Series",
    threshold: ThresholdLike = 0.0,
    metric: MetricArg = None,
) -> "pl.DataFrame":
    """
    Match each value in query_series against all values in target_series.

    For each query, finds all target values that pass the threshold.

    Args:
        query_series: Series of query strings
        target_series: Series of target strings to match against
        threshold: Maximum distance or minimum similarity (default: keep everything)
        metric: Metric callable, Algorithm or name (default: Levenshtein)

    Returns:
        DataFrame with columns: query_idx, query, target_idx, target, distance, similarity

    Example:
        >>> queries = pl.Series(["apple", "banana"])
        >>> targets = pl.Series(["appel", "banan", "cherry"])
        >>> result = match_series(queries, targets, threshold=0.6)
    """
    scorer = resolve_metric(metric)
    bound = Threshold.coerce(threshold)
    rows = []
    for query_idx, query in enumerate(query_series.to_list()):
        if query is None:
            continue
        for hit in fuzzy_search(target_series, str(query), bound, scorer, sort=False):
            rows.append(
                {
                    "query_idx": query_idx,
                    "query": str(query),
                    "target_idx": hit.index,
                    "target": str(hit.item),
                    "distance": float(hit.distance),
                    "similarity": hit.similarity,
                }
            )

    schema = {
        "query_idx": pl.Int64,
        "query": pl.Utf8,
        "target_idx": pl.Int64,
        "target": pl.Utf8,
        "distance": pl.Float64,
        "similarity": pl.Float64,
    }
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema)


def phonetic_groups(
    series: "pl.Series",
    encoder: Union[str, PhoneticEncoder] = soundex,
) -> "pl.DataFrame":
    """
    Phonetic code of every encodable value, grouped and in insertion order.

    Returns:
        DataFrame with columns ``code`` and ``text``; values sharing a code
        are adjacent, groups ordered by first appearance.

    Example:
        >>> phonetic_groups(pl.Series(["Robert", "Rubin", "Rupert"]))["code"].to_list()
        ['R163', 'R163', 'R150']
    """
    groups = group_by_phonetic(series, encoder)
    codes = [code for code, members in groups.items() for _ in members]
    texts = [text for members in groups.values() for text in members]
    return pl.DataFrame({"code": codes, "text": texts}, schema={"code": pl.Utf8, "text": pl.Utf8})


__all__ = ["search_series", "search_frame", "match_series", "phonetic_groups"]
