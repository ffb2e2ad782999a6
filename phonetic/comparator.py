"""
Compare strings by their phonetic encoding instead of their spelling.

- Works with any encoder exposing encode(str) -> str.
- Use with sorted(..., key=comparator.key()) or functools.cmp_to_key(comparator).
"""

from functools import cmp_to_key
from typing import Any, Callable

from .errors import EncoderError


class StringEncoderComparator:
    """
    Order two strings by their encoded values.
    Encoder failures and None encodings (None input) compare equal (0).
    """

    def __init__(self, encoder: Any):
        if encoder is None:
            raise ValueError("Encoder must not be None")
        self._encoder = encoder

    def compare(self, s1: Any, s2: Any) -> int:
        try:
            e1 = self._encoder.encode(s1)
            e2 = self._encoder.encode(s2)
        except EncoderError:
            return 0
        if e1 is None or e2 is None:
            return 0
        return (e1 > e2) - (e1 < e2)

    __call__ = compare

    def key(self) -> Callable[[Any], Any]:
        """Sort key wrapping compare()."""
        return cmp_to_key(self.compare)
