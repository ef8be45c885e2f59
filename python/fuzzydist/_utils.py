"""Internal utilities for fuzzydist."""

import math
from typing import Union

from fuzzydist.enums import Algorithm
from fuzzydist.exceptions import AlgorithmError, ValidationError

# Valid algorithm names (lowercase)
VALID_ALGORITHMS = frozenset({
    "levenshtein",
    "optimal_alignment",
    "osa",
    "hamming",
    "keyboard",
    "soundex",
    "german_soundex",
    "cologne",
})

# Accepted spellings that map onto a canonical name
_ALGORITHM_ALIASES = {
    "osa": "optimal_alignment",
    "optimal_string_alignment": "optimal_alignment",
    "edit_distance": "levenshtein",
    "kolner": "cologne",
    "koelner": "cologne",
}


def normalize_algorithm(algorithm: Union[str, Algorithm]) -> str:
    """Convert Algorithm enum to string, or validate string algorithm name.

    Args:
        algorithm: Either an Algorithm enum value or a string algorithm name.

    Returns:
        Canonical lowercase algorithm name (aliases resolved).

    Raises:
        AlgorithmError: If the algorithm name is not recognized.
        TypeError: If algorithm is not a string or Algorithm enum.

    Example:
        >>> normalize_algorithm(Algorithm.OSA)
        'optimal_alignment'
        >>> normalize_algorithm("Levenshtein")
        'levenshtein'
    """
    if isinstance(algorithm, Algorithm):
        name = algorithm.value
    elif isinstance(algorithm, str):
        name = algorithm.lower()
    else:
        raise TypeError(
            f"algorithm must be str or Algorithm enum, got {type(algorithm).__name__}"
        )

    name = _ALGORITHM_ALIASES.get(name, name)
    if name not in VALID_ALGORITHMS:
        raise AlgorithmError(
            f"Unknown algorithm: '{algorithm}'. "
            f"Valid options: {sorted(VALID_ALGORITHMS | set(_ALGORITHM_ALIASES))}"
        )
    return name


def validate_cost(name: str, value: float) -> float:
    """Reject costs that are not positive finite numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be a positive finite number, got {value!r}")
    return value


def validate_limit(limit):
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValidationError(f"limit must be a non-negative integer, got {limit!r}")
    return limit


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (never banker's rounding)."""
    return int(math.floor(value + 0.5))


__all__ = [
    "normalize_algorithm",
    "validate_cost",
    "validate_limit",
    "round_half_up",
    "VALID_ALGORITHMS",
]
