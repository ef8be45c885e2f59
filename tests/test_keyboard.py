"""Tests for keyboard layouts, key distances and the keyboard-weighted metric."""

import math

import pytest

import fuzzydist as fd
from fuzzydist import KeyboardLayout
from fuzzydist.keyboard import lookup, resolve_mode


class TestLayouts:
    """Built-in layouts."""

    def test_qwerty_coordinates(self):
        layout = fd.get_layout("qwerty")
        assert layout["q"] == (1.5, 1.0, 0.0)
        assert layout["1"] == (1.0, 0.0, 0.0)
        assert layout[" "] == (6.0, 4.0, 0.0)

    def test_qwertz_coordinates(self):
        layout = fd.get_layout(KeyboardLayout.QWERTZ)
        assert layout["z"] == (6.5, 1.0, 0.0)
        assert layout["y"] == (2.25, 3.0, 0.0)
        assert "ü" in layout
        assert "Ü" in layout

    def test_name_is_case_insensitive(self):
        assert fd.get_layout("QWERTY") is fd.get_layout(KeyboardLayout.QWERTY)

    def test_shifted_characters_share_the_base_key(self):
        layout = fd.get_layout("qwerty")
        assert layout["Q"] == layout["q"]
        assert layout["!"] == layout["1"]

    def test_case_sensitive_lifts_shifted_characters(self):
        layout = fd.get_layout("qwerty", case_sensitive=True)
        assert layout["Q"] == (1.5, 1.0, 1.0)
        assert layout["!"] == (1.0, 0.0, 1.0)
        assert layout["q"] == (1.5, 1.0, 0.0)

    def test_shift_offset(self):
        layout = fd.get_layout("qwerty", case_sensitive=True, shift_z_offset=2.0)
        assert layout["A"][2] == 2.0

    def test_cached(self):
        assert fd.get_layout("qwerty") is fd.get_layout("qwerty")
        assert fd.get_layout("qwerty") is not fd.get_layout("qwerty", case_sensitive=True)

    def test_read_only(self):
        layout = fd.get_layout("qwerty")
        with pytest.raises(TypeError):
            layout["q"] = (0.0, 0.0, 0.0)

    def test_unknown_layout(self):
        with pytest.raises(fd.ValidationError):
            fd.get_layout("dvorak")

    def test_lookup_unknown_character(self):
        layout = fd.get_layout("qwerty")
        with pytest.raises(fd.UnknownCharacterError) as excinfo:
            lookup(layout, "€")
        assert excinfo.value.char == "€"
        assert "€" in str(excinfo.value)
        assert isinstance(excinfo.value, KeyError)

    @pytest.mark.parametrize("offset", ["1", None, True, -1.0, math.nan])
    def test_bad_shift_offset(self, offset):
        with pytest.raises(fd.ValidationError):
            fd.get_layout("qwerty", case_sensitive=True, shift_z_offset=offset)

    def test_bad_shift_offset_is_not_cached(self):
        with pytest.raises(fd.ValidationError):
            fd.get_layout("qwertz", case_sensitive=True, shift_z_offset=True)
        layout = fd.get_layout("qwertz", case_sensitive=True, shift_z_offset=1)
        assert layout["Z"][2] == 1.0


class TestBuildLayout:
    """Caller-authored layouts."""

    def test_two_dimensional_coordinates_are_padded(self):
        layout = fd.build_layout({"a": (0, 0), "b": (1, 0)})
        assert layout["a"] == (0.0, 0.0, 0.0)
        assert layout["B"] == (1.0, 0.0, 0.0)

    def test_case_sensitive(self):
        layout = fd.build_layout({"a": (0, 0), "b": (1, 0)}, case_sensitive=True)
        assert layout["B"] == (1.0, 0.0, 1.0)

    def test_three_dimensional_coordinates(self):
        layout = fd.build_layout({"a": (0, 0, 2)}, case_sensitive=True, shift_z_offset=0.5)
        assert layout["A"] == (0.0, 0.0, 2.5)

    def test_shifted_map(self):
        layout = fd.build_layout({"1": (0, 0)}, shifted={"!": "1"}, case_sensitive=True)
        assert layout["!"] == (0.0, 0.0, 1.0)

    def test_multi_character_uppercase_is_skipped(self):
        layout = fd.build_layout({"ß": (0, 0)})
        assert "SS" not in layout

    def test_bad_coordinate(self):
        with pytest.raises(fd.ValidationError):
            fd.build_layout({"a": (0,)})

    def test_shifted_unknown_base(self):
        with pytest.raises(fd.ValidationError):
            fd.build_layout({"a": (0, 0)}, shifted={"!": "1"})

    @pytest.mark.parametrize("offset", [-1.0, math.nan, True])
    def test_bad_shift_offset(self, offset):
        with pytest.raises(fd.ValidationError):
            fd.build_layout({"a": (0, 0)}, shift_z_offset=offset)


class TestCharDistance:
    """Geometry between key coordinates."""

    def test_euclidean(self):
        assert fd.char_distance((0, 0, 0), (3, 4, 0)) == 5.0

    def test_manhattan(self):
        assert fd.char_distance((0, 0, 0), (3, 4, 0), euclidean=False) == 7.0

    def test_uses_z_axis(self):
        assert fd.char_distance((0, 0, 0), (0, 0, 1)) == 1.0

    def test_key_distance(self):
        layout = fd.get_layout("qwerty")
        assert fd.key_distance(layout, "h", "j") == 1.0
        assert fd.key_distance(layout, "a", "s", euclidean=False) == 1.0

    def test_identical_characters_skip_lookup(self):
        layout = fd.get_layout("qwerty")
        assert fd.key_distance(layout, "€", "€") == 0.0

    def test_max_key_distance(self):
        layout = fd.build_layout({"a": (0, 0), "b": (3, 0), "c": (0, 4)})
        assert fd.max_key_distance(layout) == 5.0
        assert fd.max_key_distance(layout, euclidean=False) == 7.0
        assert fd.max_key_distance({}) == 0.0

    def test_max_key_distance_bounds_every_pair(self):
        layout = fd.get_layout("qwerty", case_sensitive=True)
        widest = fd.max_key_distance(layout)
        keys = list(layout)
        assert max(fd.key_distance(layout, x, y) for x in keys for y in keys) <= widest

    def test_resolve_mode(self):
        assert resolve_mode(True) is True
        assert resolve_mode(False) is False
        assert resolve_mode("euclidean") is True
        assert resolve_mode(fd.CharDistanceMode.MANHATTAN) is False
        with pytest.raises(fd.ValidationError):
            resolve_mode("chebyshev")


# Corner to corner across the QWERTY bounding box, x in [0, 13.5] and y in [0, 4]
QWERTY_SPAN = math.sqrt(13.5**2 + 4**2)


class TestKeyboardMetric:
    """Edit distance weighted by key proximity."""

    def test_scale_spans_the_layout(self):
        assert fd.KeyboardMetric().scale == pytest.approx(QWERTY_SPAN)
        assert fd.KeyboardMetric(euclidean=False).scale == 17.5

    def test_neighbouring_keys(self):
        assert fd.keyboard_distance("hello", "jello") == pytest.approx(1 / QWERTY_SPAN)
        assert fd.keyboard_similarity("hello", "jello") == pytest.approx(1 - 1 / QWERTY_SPAN / 5)

    def test_distant_keys_cost_more(self):
        assert fd.keyboard_distance("hello", "jello") < fd.keyboard_distance("hello", "pello")

    def test_manhattan(self):
        # h (6.75, 2) to y (6.5, 1)
        assert fd.keyboard_distance("hello", "yello", euclidean=False) == pytest.approx(1.25 / 17.5)
        assert fd.keyboard_distance("hello", "yello", euclidean="manhattan") == pytest.approx(
            1.25 / 17.5
        )

    def test_euclidean_value(self):
        expected = math.sqrt(0.25**2 + 1) / QWERTY_SPAN
        assert fd.keyboard_distance("hello", "yello") == pytest.approx(expected)

    def test_case_insensitive_by_default(self):
        assert fd.keyboard_distance("Hello", "hello") == 0.0
        expected = 1 / math.sqrt(13.5**2 + 4**2 + 1)
        assert fd.keyboard_distance("Hello", "hello", case_sensitive=True) == pytest.approx(expected)

    def test_qwertz(self):
        # z and y swap places between the layouts
        span = fd.KeyboardMetric("qwertz").scale
        assert fd.keyboard_distance("zoo", "too", layout="qwertz") == pytest.approx(1 / span)
        assert fd.keyboard_distance("yes", "xes", layout="qwertz") == pytest.approx(1 / span)

    def test_transposition_of_neighbours(self):
        assert fd.keyboard_distance("as", "sa") == pytest.approx(1 / QWERTY_SPAN)

    def test_unit_costs_bounded_by_longer_length(self):
        assert fd.keyboard_distance("qq", "pp") <= 2
        assert fd.keyboard_distance("q", "m") <= 1
        assert fd.keyboard_distance("`", "\\") <= 1
        assert fd.keyboard_similarity("qq", "pp") > 0.0

    def test_substitution_never_beats_indels(self):
        # Ten times the normalized q/m distance is far above delete + insert
        metric = fd.KeyboardMetric(cost_replace=10)
        assert metric("q", "m").distance == 2

    def test_similarity_clamped(self):
        assert fd.KeyboardMetric(cost_replace=10)("q", "m").similarity == 0.0
        metric = fd.KeyboardMetric(cost_delete=5, cost_insert=5, cost_replace=50)
        result = metric("abc", "xyz")
        assert result.distance > 3
        assert result.similarity == 0.0

    def test_cost_replace(self):
        metric = fd.KeyboardMetric(cost_replace=0.5)
        assert metric("hello", "jello").distance == pytest.approx(0.5 / QWERTY_SPAN)

    def test_custom_layout(self):
        layout = fd.build_layout({"a": (0, 0), "b": (1, 0), "c": (4, 0)})
        metric = fd.KeyboardMetric(layout=layout)
        assert metric.scale == 4.0
        assert metric("a", "b").distance == 0.25
        assert metric("a", "c").distance == 1.0

    def test_single_key_layout(self):
        metric = fd.KeyboardMetric(layout=fd.build_layout({"a": (0, 0)}))
        assert metric.scale == 1.0
        assert metric("a", "A").distance == 0.0

    def test_unknown_character(self):
        with pytest.raises(fd.UnknownCharacterError):
            fd.KeyboardMetric()("h€llo", "hello")

    def test_unknown_character_identical_strings(self):
        assert fd.KeyboardMetric()("h€llo", "h€llo").distance == 0

    def test_threshold(self):
        metric = fd.KeyboardMetric()
        bound = fd.Threshold.distance(0.1)
        assert not metric("hello", "jello", bound).truncated
        result = metric("hello", "pello", bound)
        assert result.truncated
        assert result.distance == pytest.approx(1.1)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"cost_delete": 0},
            {"cost_insert": -1},
            {"cost_replace": 0},
            {"cost_replace": math.inf},
        ],
    )
    def test_invalid_costs(self, kwargs):
        with pytest.raises(fd.ValidationError):
            fd.KeyboardMetric(**kwargs)

    def test_invalid_layout(self):
        with pytest.raises(fd.ValidationError):
            fd.KeyboardMetric(layout="azerty")

    def test_repr(self):
        assert repr(fd.KeyboardMetric()).startswith("KeyboardMetric(keys=")
