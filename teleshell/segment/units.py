"""UTF-16 code-unit arithmetic.

Telegram counts entity offsets in UTF-16 code units, so every length and cut
position in the segmenter is expressed in those units rather than in Python
string indices (code points).
"""

from __future__ import annotations

_ENCODING = "utf-16-le"
_UNIT = 2  # bytes per code unit


def code_unit_length(text: str) -> int:
    """Return the length of *text* in UTF-16 code units."""
    # Characters above U+FFFF take two units; everything else takes one.
    return len(text) + sum(1 for ch in text if ord(ch) > 0xFFFF)


def _is_high_surrogate(unit: int) -> bool:
    return 0xD800 <= unit <= 0xDBFF


class CodeUnits:
    """A string viewed as a sequence of UTF-16 code units."""

    def __init__(self, text: str):
        self._data = text.encode(_ENCODING, errors="surrogatepass")

    def __len__(self) -> int:
        return len(self._data) // _UNIT

    def unit(self, index: int) -> int:
        """Return the code unit at *index*."""
        pos = index * _UNIT
        return int.from_bytes(self._data[pos:pos + _UNIT], "little")

    def slice(self, lo: int, hi: int) -> str:
        """Decode the code units in ``[lo, hi)`` back to a string."""
        return self._data[lo * _UNIT:hi * _UNIT].decode(_ENCODING, errors="surrogatepass")

    def safe_cut(self, index: int) -> int:
        """Move a cut position back so it never splits a surrogate pair."""
        if 0 < index < len(self) and _is_high_surrogate(self.unit(index - 1)):
            return index - 1
        return index
