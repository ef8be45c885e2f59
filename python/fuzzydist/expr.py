"""Polars expression namespace for fuzzy string matching.

This module registers a `.fuzzy` namespace on Polars expressions,
enabling chainable distance, similarity and phonetic operations directly
in Polars expression contexts. Values are computed row by row with
``map_elements``.

Example:
    >>> import polars as pl
    >>> import fuzzydist  # Registers the namespace
    >>>
    >>> df = pl.DataFrame({"name": ["John", "Jon", "Jane"]})
    >>> df.with_columns(
    ...     is_similar=pl.col("name").fuzzy.is_similar("John", 0.7)
    ... )
"""

from typing import Callable, Union

import polars as pl

from fuzzydist.enums import Algorithm
from fuzzydist.exceptions import UnencodableWordError, UnknownCharacterError, ValidationError
from fuzzydist.metrics import DistanceMetric, ThresholdLike, resolve_metric
from fuzzydist.search import resolve_encoder
from fuzzydist.types import DistanceResult, Threshold

MetricArg = Union[str, Algorithm, DistanceMetric]


@pl.api.register_expr_namespace("fuzzy")
class FuzzyExprNamespace:
    """
    Fuzzy string matching namespace for Polars expressions.

    Provides chainable methods for fuzzy matching directly on columns.
    Access via `.fuzzy` on any string expression. Rows with a null on either
    side, and rows the metric cannot compare (unknown keyboard character,
    unencodable word), become null.
    """

    def __init__(self, expr: pl.Expr):
        self._expr = expr

    def _compare(
        self,
        other: Union[str, pl.Expr],
        metric: MetricArg,
        extract: Callable[[DistanceResult], object],
        return_dtype,
        threshold: ThresholdLike = None,
    ) -> pl.Expr:
        scorer = resolve_metric(metric)
        bound = Threshold.coerce(threshold)

        def compare(a, b):
            if a is None or b is None:
                return None
            try:
                return extract(scorer(str(a), str(b), bound))
            except (UnknownCharacterError, UnencodableWordError):
                return None

        if isinstance(other, str):
            # Compare against a literal string
            return self._expr.map_elements(
                lambda s: compare(s, other),
                return_dtype=return_dtype,
            )
        # Compare against another column
        return pl.struct([self._expr.alias("_left"), other.alias("_right")]).map_elements(
            lambda row: compare(row["_left"], row["_right"]),
            return_dtype=return_dtype,
        )

    def distance(
        self,
        other: Union[str, pl.Expr],
        algorithm: MetricArg = "levenshtein",
    ) -> pl.Expr:
        """
        Calculate the distance between this column and another value/column.

        Args:
            other: String literal or column expression to compare against
            algorithm: Metric to use (name, Algorithm enum or callable)

        Returns:
            Expression producing distances as Float64 (the keyboard metric is real-valued)

        Example:
            >>> df.with_columns(
            ...     dist=pl.col("name").fuzzy.distance("John")
            ... )
        """
        return self._compare(other, algorithm, lambda r: float(r.distance), pl.Float64)

    def similarity(
        self,
        other: Union[str, pl.Expr],
        algorithm: MetricArg = "levenshtein",
    ) -> pl.Expr:
        """
        Calculate similarity score between this column and another value/column.

        Returns:
            Expression producing similarity scores (0.0 to 1.0)

        Example:
            >>> df.with_columns(
            ...     score=pl.col("name1").fuzzy.similarity(pl.col("name2"), "osa")
            ... )
        """
        return self._compare(other, algorithm, lambda r: r.similarity, pl.Float64)

    def is_similar(
        self,
        other: Union[str, pl.Expr],
        threshold: ThresholdLike = 0.8,
        algorithm: MetricArg = "levenshtein",
    ) -> pl.Expr:
        """
        Check if values pass a threshold against another value/column.

        Args:
            other: String literal or column expression to compare against
            threshold: Maximum distance (int) or minimum similarity (float in [0, 1])
            algorithm: Metric to use

        Returns:
            Boolean expression

        Example:
            >>> df.filter(pl.col("name").fuzzy.is_similar("John", 1))
        """
        bound = Threshold.coerce(threshold)
        if bound is None:
            raise ValidationError("is_similar needs a threshold")
        return self._compare(other, algorithm, bound.accepts, pl.Boolean, threshold=bound)

    def phonetic(self, encoder="soundex") -> pl.Expr:
        """
        Generate the phonetic code of each value.

        Args:
            encoder: "soundex", "german_soundex", "cologne" or an encoder callable

        Returns:
            Phonetic code expression (null where the value has no letters)

        Example:
            >>> df.with_columns(
            ...     code=pl.col("name").fuzzy.phonetic("cologne")
            ... )
        """
        encode = resolve_encoder(encoder)

        def encode_value(value):
            if value is None:
                return None
            try:
                return encode(str(value))
            except UnencodableWordError:
                return None

        return self._expr.map_elements(encode_value, return_dtype=pl.Utf8)
