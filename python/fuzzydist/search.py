"""Fuzzy search and phonetic grouping over collections.

Both drivers accept the same collection shapes:

- a flat sequence of strings (``["apple", "apply"]``)
- a sequence of rows with a comparison ``column`` (``[("apple", 3), ("pear", 1)]``)
- a ``polars.Series`` or a ``polars.DataFrame`` (column by position or name)

Shape problems (empty collection, nested cells, bad column) abort the whole
call. Per-item failures (a character missing from the keyboard layout, a
word without letters for a phonetic encoder) only skip that item.

Example:
    >>> from fuzzydist import fuzzy_search, group_by_phonetic
    >>> [r.item for r in fuzzy_search(["apple", "apply", "banana"], "appel", 0.5)]
    ['apple', 'apply']
    >>> group_by_phonetic(["Robert", "Rupert", "Rubin"])
    {'R163': ['Robert', 'Rupert'], 'R150': ['Rubin']}
"""

import logging
from collections.abc import Mapping, Set
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import polars as pl

from fuzzydist._utils import validate_limit
from fuzzydist.enums import Algorithm
from fuzzydist.exceptions import (
    AlgorithmError,
    ColumnOutOfRangeError,
    InvalidCallbackError,
    InvalidCollectionShapeError,
    UnencodableWordError,
    UnknownCharacterError,
)
from fuzzydist.metrics import DistanceMetric, ThresholdLike, resolve_metric
from fuzzydist.phonetic import ENCODERS, PhoneticEncoder, soundex
from fuzzydist.types import SearchResult, Threshold

logger = logging.getLogger(__name__)

Column = Union[int, str, None]
# (position, original item, text to compare or None)
_Entry = Tuple[int, Any, Optional[str]]

_SKIPPABLE = (UnknownCharacterError, UnencodableWordError)


def _is_nested(value) -> bool:
    return isinstance(value, (Sequence, Mapping, Set)) and not isinstance(value, (str, bytes))


def _cell_text(value) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _frame_entries(df: pl.DataFrame, column: Column) -> List[_Entry]:
    if df.width == 0 or df.height == 0:
        raise InvalidCollectionShapeError(f"DataFrame is empty (shape {df.shape})")
    if column is None:
        column = 0
    if isinstance(column, str):
        if column not in df.columns:
            raise ColumnOutOfRangeError(column)
        name = column
    elif isinstance(column, int) and not isinstance(column, bool):
        if not 0 <= column < df.width:
            raise ColumnOutOfRangeError(column, df.width)
        name = df.columns[column]
    else:
        raise ColumnOutOfRangeError(column, df.width)
    series = df.get_column(name)
    if series.dtype.is_nested():
        raise InvalidCollectionShapeError(f"Column {name!r} has nested dtype {series.dtype}")
    texts = series.to_list()
    return [(i, row, _cell_text(text)) for i, (row, text) in enumerate(zip(df.rows(), texts))]


def _series_entries(series: pl.Series, column: Column) -> List[_Entry]:
    if series.len() == 0:
        raise InvalidCollectionShapeError("Series is empty")
    if column not in (None, 0):
        raise ColumnOutOfRangeError(column, 1)
    if series.dtype.is_nested():
        raise InvalidCollectionShapeError(f"Series has nested dtype {series.dtype}")
    return [(i, value, _cell_text(value)) for i, value in enumerate(series.to_list())]


def _entries(collection, column: Column) -> List[_Entry]:
    """Validate the collection shape and pair every item with the text to compare."""
    if isinstance(collection, pl.DataFrame):
        return _frame_entries(collection, column)
    if isinstance(collection, pl.Series):
        return _series_entries(collection, column)
    if isinstance(collection, (str, bytes)) or isinstance(collection, Mapping):
        raise InvalidCollectionShapeError(
            f"collection must be a sequence of strings or rows, got {type(collection).__name__}"
        )
    try:
        items = list(collection)
    except TypeError:
        raise InvalidCollectionShapeError(
            f"collection must be iterable, got {type(collection).__name__}"
        ) from None
    if not items:
        raise InvalidCollectionShapeError("collection is empty")

    rows = [_is_nested(item) for item in items if item is not None]
    if not any(rows):
        if column not in (None, 0):
            raise ColumnOutOfRangeError(column, 1)
        return [(i, item, _cell_text(item)) for i, item in enumerate(items)]
    if not all(rows):
        raise InvalidCollectionShapeError("collection mixes plain values and rows")

    if column is None:
        column = 0
    if isinstance(column, bool) or not isinstance(column, int):
        raise ColumnOutOfRangeError(column)
    entries = []
    for i, row in enumerate(items):
        if row is None:
            continue
        if isinstance(row, (Mapping, Set)):
            raise InvalidCollectionShapeError(f"row {i} is a {type(row).__name__}, expected a sequence")
        if not 0 <= column < len(row):
            raise ColumnOutOfRangeError(column, len(row))
        if any(_is_nested(cell) for cell in row):
            raise InvalidCollectionShapeError(f"row {i} contains nested values")
        entries.append((i, row, _cell_text(row[column])))
    return entries


def fuzzy_search(
    collection,
    target: str,
    threshold: ThresholdLike,
    metric: Union[None, str, Algorithm, DistanceMetric] = None,
    *,
    column: Column = None,
    sort: bool = True,
    limit: Optional[int] = None,
) -> List[SearchResult]:
    """
    Find the items of a collection that are close to ``target``.

    Args:
        collection: Strings, rows, a polars Series or a polars DataFrame
        target: The string to look for
        threshold: Maximum distance (``int`` or ``Threshold.distance``) or minimum
            similarity (``float`` in [0, 1] or ``Threshold.similarity``).
            None keeps every item.
        metric: Metric callable, Algorithm or algorithm name. Defaults to Levenshtein.
        column: Comparison column for rows and DataFrames (position or name, default 0)
        sort: Order results by descending similarity; equal scores keep input order
        limit: Maximum number of results to return

    Returns:
        List of SearchResult objects with ``item``, ``distance``, ``similarity``
        and ``index`` (position in the collection).

    Raises:
        InvalidCallbackError: If ``metric`` is not callable.
        InvalidCollectionShapeError: If the collection is empty or not flat/tabular.
        ColumnOutOfRangeError: If ``column`` does not exist.
        ValidationError: If ``threshold`` or ``limit`` is invalid.

    Example:
        >>> rows = [("Berlin", 3_600_000), ("Bern", 134_000), ("Bonn", 330_000)]
        >>> [(r.item[0], r.distance) for r in fuzzy_search(rows, "Berm", 1)]
        [('Bern', 1)]
    """
    scorer = resolve_metric(metric)
    bound = Threshold.coerce(threshold)
    limit = validate_limit(limit)
    entries = _entries(collection, column)

    results = []
    for index, item, text in entries:
        if text is None:
            continue
        try:
            result = scorer(target, text, bound)
        except _SKIPPABLE as exc:
            logger.debug("Skipping item %d (%r): %s", index, text, exc)
            continue
        if bound is None or bound.accepts(result):
            results.append(SearchResult(item, result.distance, result.similarity, index))

    if sort:
        # list.sort is stable with reverse=True, so ties keep input order
        results.sort(key=lambda r: r.similarity, reverse=True)
    if limit is not None:
        results = results[:limit]
    return results


def extract_one(
    collection,
    target: str,
    threshold: ThresholdLike = None,
    metric: Union[None, str, Algorithm, DistanceMetric] = None,
    *,
    column: Column = None,
) -> Optional[SearchResult]:
    """Best match for ``target``, or None when nothing passes the threshold."""
    results = fuzzy_search(collection, target, threshold, metric, column=column, limit=1)
    return results[0] if results else None


def resolve_encoder(encoder: Union[str, PhoneticEncoder]) -> PhoneticEncoder:
    if isinstance(encoder, str):
        try:
            return ENCODERS[encoder.lower()]
        except KeyError:
            raise AlgorithmError(
                f"Unknown phonetic encoder: '{encoder}'. Valid options: {sorted(ENCODERS)}"
            ) from None
    if not callable(encoder):
        raise InvalidCallbackError(f"encoder must be callable, got {type(encoder).__name__}")
    return encoder


def group_by_phonetic(
    collection,
    encoder: Union[str, PhoneticEncoder] = soundex,
    *,
    column: Column = None,
) -> Dict[str, List[Any]]:
    """
    Group items by their phonetic code.

    Groups appear in the order their first member was seen, and members keep
    their input order. Items the encoder cannot encode are left out.

    Args:
        collection: Strings, rows, a polars Series or a polars DataFrame
        encoder: Phonetic encoder callable or name ("soundex", "german_soundex", "cologne")
        column: Comparison column for rows and DataFrames

    Raises:
        InvalidCallbackError: If ``encoder`` is not callable.
        InvalidCollectionShapeError: If the collection is empty or not flat/tabular.
        ColumnOutOfRangeError: If ``column`` does not exist.

    Example:
        >>> group_by_phonetic(["Meier", "Mayer", "Schmidt"], "cologne")
        {'67': ['Meier', 'Mayer'], '862': ['Schmidt']}
    """
    encode = resolve_encoder(encoder)
    groups: Dict[str, List[Any]] = {}
    for index, item, text in _entries(collection, column):
        if text is None:
            continue
        try:
            code = encode(text)
        except UnencodableWordError as exc:
            logger.debug("Skipping item %d (%r): %s", index, text, exc)
            continue
        groups.setdefault(code, []).append(item)
    return groups


__all__ = ["fuzzy_search", "extract_one", "group_by_phonetic", "resolve_encoder"]
