"""Tests for input validation helpers, enums and the exception hierarchy."""

import math

import pytest

import fuzzydist as fd
from fuzzydist import Algorithm, CharDistanceMode, KeyboardLayout
from fuzzydist._utils import (
    VALID_ALGORITHMS,
    normalize_algorithm,
    round_half_up,
    validate_cost,
    validate_limit,
)


class TestNormalizeAlgorithm:
    """Algorithm names and enums resolve to canonical names."""

    def test_enum(self):
        assert normalize_algorithm(Algorithm.LEVENSHTEIN) == "levenshtein"
        assert normalize_algorithm(Algorithm.OSA) == "optimal_alignment"

    def test_case_insensitive(self):
        assert normalize_algorithm("Levenshtein") == "levenshtein"
        assert normalize_algorithm("HAMMING") == "hamming"

    @pytest.mark.parametrize(
        "alias,name",
        [
            ("osa", "optimal_alignment"),
            ("optimal_string_alignment", "optimal_alignment"),
            ("edit_distance", "levenshtein"),
            ("koelner", "cologne"),
        ],
    )
    def test_aliases(self, alias, name):
        assert normalize_algorithm(alias) == name

    def test_every_enum_member_is_valid(self):
        for member in Algorithm:
            assert normalize_algorithm(member) in VALID_ALGORITHMS

    def test_unknown(self):
        with pytest.raises(fd.AlgorithmError) as excinfo:
            normalize_algorithm("jaro")
        assert "Valid options" in str(excinfo.value)

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            normalize_algorithm(None)


class TestValidators:
    """Numeric parameter checks."""

    def test_cost(self):
        assert validate_cost("cost", 2) == 2
        assert validate_cost("cost", 0.25) == 0.25

    @pytest.mark.parametrize("value", [0, -0.5, math.nan, math.inf, True, None])
    def test_bad_cost(self, value):
        with pytest.raises(fd.ValidationError):
            validate_cost("cost", value)

    def test_limit(self):
        assert validate_limit(None) is None
        assert validate_limit(0) == 0
        assert validate_limit(3) == 3

    @pytest.mark.parametrize("value", [-1, 1.5, True, "3"])
    def test_bad_limit(self, value):
        with pytest.raises(fd.ValidationError):
            validate_limit(value)

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(1.4999) == 1
        assert round_half_up(0.0) == 0


class TestEnums:
    """String enums compare equal to their values."""

    def test_algorithm_values(self):
        assert Algorithm.LEVENSHTEIN == "levenshtein"
        assert Algorithm.COLOGNE.value == "cologne"

    def test_layouts(self):
        assert [layout.value for layout in KeyboardLayout] == ["qwerty", "qwertz"]

    def test_modes(self):
        assert CharDistanceMode("manhattan") is CharDistanceMode.MANHATTAN


class TestExceptionHierarchy:
    """Every error is a FuzzyDistError and the closest builtin."""

    @pytest.mark.parametrize(
        "exc,builtin",
        [
            (fd.ValidationError, ValueError),
            (fd.AlgorithmError, ValueError),
            (fd.InvalidCallbackError, TypeError),
            (fd.InvalidCollectionShapeError, ValueError),
            (fd.ColumnOutOfRangeError, IndexError),
            (fd.UnknownCharacterError, KeyError),
            (fd.UnencodableWordError, ValueError),
        ],
    )
    def test_bases(self, exc, builtin):
        assert issubclass(exc, fd.FuzzyDistError)
        assert issubclass(exc, builtin)

    def test_column_message(self):
        assert str(fd.ColumnOutOfRangeError(3, 2)) == "Column 3 is out of range for 2 column(s)"
        assert str(fd.ColumnOutOfRangeError("city")) == "Column 'city' does not exist"

    def test_unknown_character_message(self):
        assert str(fd.UnknownCharacterError("€")) == "Character '€' is not on the keyboard layout"

    def test_unencodable_message(self):
        error = fd.UnencodableWordError("42", "cologne")
        assert error.word == "42"
        assert "cologne" in str(error)


class TestPackage:
    """Top-level exports."""

    def test_version(self):
        assert isinstance(fd.__version__, str)

    def test_all_exports_exist(self):
        for name in fd.__all__:
            assert hasattr(fd, name), name
