"""Phonetic encoders: American Soundex, German Soundex and Cologne phonetics.

Every encoder takes a word and returns a code string. Input is normalized
first (uppercased, letters outside the encoder's alphabet dropped); when
nothing classifiable is left the encoder raises UnencodableWordError.

The letter tables are module constants built at import time and never
mutated afterwards.
"""

import unicodedata
from typing import Callable, Dict, Mapping

from fuzzydist.exceptions import UnencodableWordError

PhoneticEncoder = Callable[[str], str]

# American Soundex. H and W are transparent (codes on either side merge);
# vowels and Y separate equal codes.
_SOUNDEX_CODES: Mapping[str, str] = {
    **dict.fromkeys("BFPV", "1"),
    **dict.fromkeys("CGJKQSXZ", "2"),
    **dict.fromkeys("DT", "3"),
    "L": "4",
    **dict.fromkeys("MN", "5"),
    "R": "6",
    **dict.fromkeys("AEIOUY", ""),
    **dict.fromkeys("HW", None),
}

# German Soundex: W sounds like V, J like the sibilants; umlauts are vowels.
_GERMAN_SOUNDEX_CODES: Mapping[str, str] = {
    **dict.fromkeys("BFPVW", "1"),
    **dict.fromkeys("CGJKQSXZß", "2"),
    **dict.fromkeys("DT", "3"),
    "L": "4",
    **dict.fromkeys("MN", "5"),
    "R": "6",
    **dict.fromkeys("AEIOUYÄÖÜ", ""),
    "H": None,
}

_UMLAUTS = str.maketrans({"Ä": "A", "Ö": "O", "Ü": "U", "ß": "S"})

# Cologne phonetics, context-free part of the table
_COLOGNE_CODES: Mapping[str, str] = {
    **dict.fromkeys("AEIJOUY", "0"),
    "B": "1",
    **dict.fromkeys("FVW", "3"),
    **dict.fromkeys("GKQ", "4"),
    "L": "5",
    **dict.fromkeys("MN", "6"),
    "R": "7",
    **dict.fromkeys("SZ", "8"),
}
_C_HARD_INITIAL = frozenset("AHKLOQRUX")
_C_HARD = frozenset("AHKOQUX")


def _fold_accents(word: str) -> str:
    return "".join(
        ch for ch in unicodedata.normalize("NFKD", word) if not unicodedata.combining(ch)
    )


def _soundex(letters: str, codes: Mapping[str, str]) -> str:
    first = letters[0]
    result = [first]
    last = codes[first]
    for ch in letters[1:]:
        code = codes[ch]
        if code is None:
            continue
        if code and code != last:
            result.append(code)
            if len(result) == 4:
                break
        last = code
    return "".join(result).ljust(4, "0")


def soundex(word: str) -> str:
    """
    American Soundex code: first letter plus three digits.

    Accents are folded (``"Émile"`` encodes like ``"Emile"``) and anything
    that is not a letter A-Z is ignored.

    Raises:
        UnencodableWordError: If ``word`` contains no letters A-Z.

    Example:
        >>> soundex("Robert")
        'R163'
        >>> soundex("Ashcraft")
        'A261'
    """
    letters = "".join(ch for ch in _fold_accents(word).upper() if ch in _SOUNDEX_CODES)
    if not letters:
        raise UnencodableWordError(word, "soundex")
    return _soundex(letters, _SOUNDEX_CODES)


def german_soundex(word: str) -> str:
    """
    Soundex variant tuned for German spelling.

    Example:
        >>> german_soundex("Müller")
        'M460'
        >>> german_soundex("Meier") == german_soundex("Mayer")
        True
    """
    # "ß".upper() is "SS", so uppercase per character and keep ß
    upper = "".join(ch if ch == "ß" else ch.upper() for ch in word)
    letters = "".join(ch for ch in upper if ch in _GERMAN_SOUNDEX_CODES)
    if not letters:
        raise UnencodableWordError(word, "german_soundex")
    return _soundex(letters, _GERMAN_SOUNDEX_CODES)


def _cologne_word(letters: str) -> str:
    digits = []
    size = len(letters)
    for i, ch in enumerate(letters):
        prev = letters[i - 1] if i > 0 else ""
        nxt = letters[i + 1] if i + 1 < size else ""
        if ch == "H":
            continue
        if ch == "P":
            code = "3" if nxt == "H" else "1"
        elif ch in "DT":
            code = "8" if nxt in ("C", "S", "Z") else "2"
        elif ch == "C":
            if i == 0:
                code = "4" if nxt in _C_HARD_INITIAL else "8"
            elif prev in ("S", "Z"):
                code = "8"
            else:
                code = "4" if nxt in _C_HARD else "8"
        elif ch == "X":
            code = "8" if prev in ("C", "K", "Q") else "48"
        else:
            code = _COLOGNE_CODES[ch]
        digits.extend(code)

    collapsed = []
    for digit in digits:
        if not collapsed or collapsed[-1] != digit:
            collapsed.append(digit)
    if not collapsed:
        return ""
    return collapsed[0] + "".join(d for d in collapsed[1:] if d != "0")


def cologne_phonetic(word: str) -> str:
    """
    Cologne phonetics (Koelner Phonetik) code: a digit string per word.

    Multi-word input yields one code per word, joined by single spaces.

    Raises:
        UnencodableWordError: If no word contains a classifiable letter.

    Example:
        >>> cologne_phonetic("Wikipedia")
        '3412'
        >>> cologne_phonetic("Müller-Lüdenscheidt")
        '65752682'
    """
    codes = []
    for part in word.split():
        upper = "".join(ch if ch == "ß" else ch.upper() for ch in part).translate(_UMLAUTS)
        letters = "".join(ch for ch in upper if ch in _COLOGNE_CODES or ch in "CDHPTX")
        code = _cologne_word(letters) if letters else ""
        if code:
            codes.append(code)
    if not codes:
        raise UnencodableWordError(word, "cologne")
    return " ".join(codes)


ENCODERS: Dict[str, PhoneticEncoder] = {
    "soundex": soundex,
    "german_soundex": german_soundex,
    "cologne": cologne_phonetic,
}


__all__ = ["PhoneticEncoder", "soundex", "german_soundex", "cologne_phonetic", "ENCODERS"]
