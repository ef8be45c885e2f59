"""Keyboard geometry: character coordinates and key-to-key distances.

Each character maps to a 3-D coordinate ``(x, y, z)``: ``x`` is the column
(including row stagger), ``y`` the row, and ``z`` is 0 unless the character
needs the Shift key and the layout was built case sensitive.

Layouts are built on first use and cached for the life of the process as
read-only mappings, so they can be shared between threads.
"""

import logging
import math
import threading
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union

from fuzzydist.enums import CharDistanceMode, KeyboardLayout
from fuzzydist.exceptions import UnknownCharacterError, ValidationError

logger = logging.getLogger(__name__)

Coordinate = Tuple[float, float, float]

DEFAULT_LAYOUT = KeyboardLayout.QWERTY
DEFAULT_SHIFT_Z_OFFSET = 1.0

# (row keys, x offset of the first key). Offsets follow the physical stagger
# of an ISO/ANSI board measured in key widths.
_QWERTY_ROWS = (
    ("`1234567890-=", 0.0),
    ("qwertyuiop[]\\", 1.5),
    ("asdfghjkl;'", 1.75),
    ("zxcvbnm,./", 2.25),
)
_QWERTY_SHIFTED = dict(
    zip("~!@#$%^&*()_+{}|:\"<>?", "`1234567890-=[]\\;',./")
)

_QWERTZ_ROWS = (
    ("^1234567890ß´", 0.0),
    ("qwertzuiopü+", 1.5),
    ("asdfghjklöä#", 1.75),
    ("<yxcvbnm,.-", 1.25),
)
_QWERTZ_SHIFTED = dict(
    zip("°!\"§$%&/()=?`*'>;:_", "^1234567890ß´+#<,.-")
)

_SPACE = (" ", (6.0, 4.0))

_BUILTIN = {
    KeyboardLayout.QWERTY.value: (_QWERTY_ROWS, _QWERTY_SHIFTED),
    KeyboardLayout.QWERTZ.value: (_QWERTZ_ROWS, _QWERTZ_SHIFTED),
}

_cache: Dict[Tuple[str, bool, float], Mapping[str, Coordinate]] = {}
_cache_lock = threading.Lock()


def _check_shift_offset(shift_z_offset) -> None:
    if isinstance(shift_z_offset, bool) or not isinstance(shift_z_offset, (int, float)):
        raise ValidationError(
            f"shift_z_offset must be a number, got {type(shift_z_offset).__name__}"
        )
    if not math.isfinite(shift_z_offset) or shift_z_offset < 0:
        raise ValidationError(f"shift_z_offset must be a finite number >= 0, got {shift_z_offset!r}")


def _rows_to_table(rows) -> Dict[str, Tuple[float, float]]:
    table = {}
    for y, (keys, offset) in enumerate(rows):
        for x, key in enumerate(keys):
            table[key] = (offset + x, float(y))
    table[_SPACE[0]] = _SPACE[1]
    return table


def build_layout(
    table: Mapping[str, Sequence[float]],
    shifted: Optional[Mapping[str, str]] = None,
    case_sensitive: bool = False,
    shift_z_offset: float = DEFAULT_SHIFT_Z_OFFSET,
) -> Mapping[str, Coordinate]:
    """
    Build a character -> coordinate mapping from base key positions.

    Args:
        table: Unshifted characters mapped to ``(x, y)`` or ``(x, y, z)``.
        shifted: Characters typed with Shift, mapped to the base character of
            their key (e.g. ``{"!": "1"}``). Uppercase letters are derived
            automatically and need not be listed.
        case_sensitive: When True, shifted characters sit ``shift_z_offset``
            above their base key so that case changes cost something.
        shift_z_offset: Extra distance on the z axis for shifted characters.

    Returns:
        Read-only mapping of every typeable character to its coordinate.

    Raises:
        ValidationError: If a coordinate is not 2-D or 3-D, or a shifted
            character refers to a key missing from ``table``.

    Example:
        >>> layout = build_layout({"a": (0, 0), "b": (1, 0)}, case_sensitive=True)
        >>> layout["B"]
        (1.0, 0.0, 1.0)
    """
    _check_shift_offset(shift_z_offset)

    lift = float(shift_z_offset) if case_sensitive else 0.0
    layout: Dict[str, Coordinate] = {}
    for char, coord in table.items():
        if len(coord) not in (2, 3):
            raise ValidationError(f"Coordinate for {char!r} must have 2 or 3 values, got {len(coord)}")
        base = tuple(float(v) for v in coord)
        if len(base) == 2:
            base = base + (0.0,)
        layout[char] = base

    for char, coord in list(layout.items()):
        upper = char.upper()
        # Skip characters whose uppercase is not a single code point (e.g. "ß" -> "SS")
        if upper != char and len(upper) == 1 and upper not in layout:
            layout[upper] = (coord[0], coord[1], coord[2] + lift)

    for char, base_char in (shifted or {}).items():
        try:
            x, y, z = layout[base_char]
        except KeyError:
            raise ValidationError(
                f"Shifted character {char!r} refers to unknown key {base_char!r}"
            ) from None
        layout[char] = (x, y, z + lift)

    return MappingProxyType(layout)


def get_layout(
    name: Union[str, KeyboardLayout] = DEFAULT_LAYOUT,
    case_sensitive: bool = False,
    shift_z_offset: float = DEFAULT_SHIFT_Z_OFFSET,
) -> Mapping[str, Coordinate]:
    """
    Return a built-in layout, building it once per process.

    Args:
        name: ``"qwerty"``, ``"qwertz"`` or a KeyboardLayout member
        case_sensitive: Lift shifted characters onto the z axis
        shift_z_offset: Height of the lift

    Raises:
        ValidationError: If the layout name is unknown.

    Example:
        >>> get_layout("qwerty")["q"]
        (1.5, 1.0, 0.0)
    """
    key_name = name.value if isinstance(name, KeyboardLayout) else str(name).lower()
    if key_name not in _BUILTIN:
        raise ValidationError(
            f"Unknown keyboard layout: {name!r}. Valid options: {sorted(_BUILTIN)}"
        )
    _check_shift_offset(shift_z_offset)
    key = (key_name, bool(case_sensitive), float(shift_z_offset))
    layout = _cache.get(key)
    if layout is not None:
        return layout
    with _cache_lock:
        layout = _cache.get(key)
        if layout is None:
            rows, shifted = _BUILTIN[key_name]
            layout = build_layout(_rows_to_table(rows), shifted, case_sensitive, shift_z_offset)
            logger.debug(
                "Built %s layout (case_sensitive=%s, shift_z_offset=%s) with %d keys",
                key_name, case_sensitive, shift_z_offset, len(layout),
            )
            _cache[key] = layout
    return layout


def lookup(layout: Mapping[str, Coordinate], char: str) -> Coordinate:
    """Coordinate of ``char``; raises UnknownCharacterError when it is not on the layout."""
    try:
        return layout[char]
    except KeyError:
        raise UnknownCharacterError(char) from None


def char_distance(
    coord_a: Sequence[float],
    coord_b: Sequence[float],
    euclidean: bool = True,
) -> float:
    """
    Geometric distance between two key coordinates.

    Example:
        >>> char_distance((0, 0, 0), (3, 4, 0))
        5.0
        >>> char_distance((0, 0, 0), (3, 4, 0), euclidean=False)
        7.0
    """
    if euclidean:
        return math.dist(coord_a, coord_b)
    return float(sum(abs(p - q) for p, q in zip(coord_a, coord_b)))


def key_distance(
    layout: Mapping[str, Coordinate],
    x: str,
    y: str,
    euclidean: bool = True,
) -> float:
    """Distance between the keys that type ``x`` and ``y`` (0 for identical characters)."""
    if x == y:
        return 0.0
    return char_distance(lookup(layout, x), lookup(layout, y), euclidean)


def max_key_distance(layout: Mapping[str, Coordinate], euclidean: bool = True) -> float:
    """
    Upper bound on the distance between any two keys of ``layout``.

    Measured corner to corner across the bounding box of all coordinates,
    so dividing a key distance by it yields a value in [0, 1].

    Example:
        >>> max_key_distance(build_layout({"a": (0, 0), "b": (3, 0), "c": (0, 4)}))
        5.0
    """
    if not layout:
        return 0.0
    coords = list(layout.values())
    low = [min(axis) for axis in zip(*coords)]
    high = [max(axis) for axis in zip(*coords)]
    return char_distance(low, high, euclidean)


def resolve_mode(mode: Union[bool, str, CharDistanceMode]) -> bool:
    """Map a CharDistanceMode (or its name, or a bool) to the ``euclidean`` flag."""
    if isinstance(mode, bool):
        return mode
    try:
        return CharDistanceMode(mode) is CharDistanceMode.EUCLIDEAN
    except ValueError:
        raise ValidationError(
            f"Unknown distance mode: {mode!r}. Valid options: {[m.value for m in CharDistanceMode]}"
        ) from None


__all__ = [
    "Coordinate",
    "DEFAULT_LAYOUT",
    "DEFAULT_SHIFT_Z_OFFSET",
    "build_layout",
    "get_layout",
    "lookup",
    "char_distance",
    "key_distance",
    "max_key_distance",
    "resolve_mode",
]
