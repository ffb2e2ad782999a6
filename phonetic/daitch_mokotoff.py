"""
Daitch-Mokotoff Soundex encoding for fuzzy name matching.

- Codes are 6 digits; the first letter of the name is coded too.
- Rules match multi-letter patterns, longest first (see rules.py / dmrules.txt).
- Ambiguous rules yield several codes for one name (branching):
  encode() keeps only the first alternative, soundex() returns all codes joined by '|'.
- Thread-safe: rule tables are read-only, every call builds its own branches.
"""

from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Set

from .branch import Branch
from .config import dm_folding_default
from .errors import EncoderError
from .rules import RuleSet, default_rule_set

CODE_SEPARATOR = "|"


def _distinct(branches: Iterable[Branch]) -> List[Branch]:
    """Drop branches whose code is already present; first occurrence wins."""
    seen: Dict[str, Branch] = {}
    for branch in branches:
        seen.setdefault(str(branch), branch)
    return list(seen.values())


class DaitchMokotoffSoundex:
    """
    Daitch-Mokotoff Soundex encoder.
    With folding enabled, accented characters are mapped to ASCII first (e.g. è -> e).
    A custom RuleSet (see rules.load_rules) replaces the bundled rules.
    """

    def __init__(self, folding: Optional[bool] = None, rule_set: Optional[RuleSet] = None):
        self.folding = dm_folding_default() if folding is None else folding
        self.rule_set = rule_set if rule_set is not None else default_rule_set()

    def cleanup(self, text: str) -> str:
        """Lower-case letters only, ASCII-folded when folding is enabled."""
        foldings = self.rule_set.foldings
        out = []
        for ch in text:
            if ch.isspace() or not ch.isalpha():
                continue
            # lower() may expand a letter (e.g. dotted capital I); keep the letters only
            for lc in ch.lower():
                if not lc.isalpha():
                    continue
                if self.folding:
                    lc = foldings.get(lc, lc)
                out.append(lc)
        return "".join(out)

    def _encode_branches(self, source: str, branching: bool) -> List[str]:
        text = self.cleanup(source)
        rules = self.rule_set.rules
        branches: List[Branch] = [Branch()]
        last_char: Optional[str] = None
        index = 0
        while index < len(text):
            ch = text[index]
            context = text[index:]
            rule = rules.match(context)
            if rule is None:
                last_char = ch
                index += 1
                continue
            replacements = rule.get_replacements(context, last_char is None)
            # special rule: m followed by n (or n by m) is always coded
            force = (last_char == "m" and ch == "n") or (last_char == "n" and ch == "m")
            if branching:
                next_branches: List[Branch] = []
                for branch in branches:
                    for replacement in replacements:
                        next_branch = branch.fork() if len(replacements) > 1 else branch
                        next_branch.process_next_replacement(replacement, force)
                        next_branches.append(next_branch)
                branches = _distinct(next_branches)
            else:
                for branch in branches:
                    branch.process_next_replacement(replacements[0], force)
            index += len(rule.pattern)
            last_char = ch
        for branch in branches:
            branch.finish()
        return [str(b) for b in _distinct(branches)]

    def _check(self, source: object) -> None:
        if not isinstance(source, str):
            raise EncoderError(
                "Parameter supplied to DaitchMokotoffSoundex is not of type str: %s"
                % type(source).__name__
            )

    def encode(self, source: Optional[str]) -> Optional[str]:
        """Single code, branching disabled. None in, None out."""
        if source is None:
            return None
        self._check(source)
        return self._encode_branches(source, branching=False)[0]

    def soundex_codes(self, source: str) -> List[str]:
        """All distinct codes in the order they were produced."""
        self._check(source)
        return self._encode_branches(source, branching=True)

    def soundex(self, source: Optional[str]) -> Optional[str]:
        """
        All codes, branching enabled, joined by '|'.
        Example: "AUERBACH" -> "097400|097500".
        """
        if source is None:
            return None
        return CODE_SEPARATOR.join(self.soundex_codes(source))

    def soundex_words(self, text: str) -> Set[str]:
        """DM Soundex codes (all branches) for every word in text; words without letters are skipped."""
        self._check(text)
        codes: Set[str] = set()
        for word in text.split():
            if self.cleanup(word):
                codes.update(self.soundex_codes(word))
        return codes


@lru_cache(maxsize=1)
def default_encoder() -> DaitchMokotoffSoundex:
    """Shared encoder with folding and rules taken from configuration."""
    return DaitchMokotoffSoundex()


def encode(source: Optional[str]) -> Optional[str]:
    return default_encoder().encode(source)


def soundex(source: Optional[str]) -> Optional[str]:
    return default_encoder().soundex(source)


def soundex_words(text: str) -> Set[str]:
    return default_encoder().soundex_words(text)
