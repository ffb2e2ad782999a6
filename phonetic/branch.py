"""
Branch: one candidate Daitch-Mokotoff code under construction.

- Code is bounded to MAX_LENGTH characters; overflow is truncated.
- A replacement that the previous replacement already ends with is not appended again,
  unless the caller forces it (the m/n adjacency case).
- Branches compare and hash by their current code string.
"""

from typing import Optional

# Length of a finished DM Soundex code
MAX_LENGTH = 6
PAD_CHAR = "0"


class Branch:
    __slots__ = ("_code", "_last_replacement")

    def __init__(self, code: str = "", last_replacement: Optional[str] = None):
        self._code = code
        self._last_replacement = last_replacement

    @property
    def last_replacement(self) -> Optional[str]:
        return self._last_replacement

    def fork(self) -> "Branch":
        """New branch with the same code and last replacement; both evolve independently."""
        return Branch(self._code, self._last_replacement)

    def process_next_replacement(self, replacement: str, force_append: bool = False) -> None:
        """Append replacement unless it repeats the tail of the previous one."""
        append = (
            self._last_replacement is None
            or not self._last_replacement.endswith(replacement)
            or force_append
        )
        if append and len(self._code) < MAX_LENGTH:
            self._code = (self._code + replacement)[:MAX_LENGTH]
        self._last_replacement = replacement

    def finish(self) -> None:
        """Pad with '0' up to MAX_LENGTH."""
        self._code = self._code.ljust(MAX_LENGTH, PAD_CHAR)

    def __str__(self) -> str:
        return self._code

    def __repr__(self) -> str:
        return "Branch(%r, last_replacement=%r)" % (self._code, self._last_replacement)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Branch):
            return NotImplemented
        return self._code == other._code

    def __hash__(self) -> int:
        return hash(self._code)
