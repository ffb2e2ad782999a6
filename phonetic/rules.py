"""
Daitch-Mokotoff rule table.

- Line-oriented rule source: rule lines ("pattern" "at start" "before vowel" "default")
  and folding lines (char=char); // and /* ... */ comments.
- Rules are grouped by the first character of their pattern and sorted longest first,
  so the first matching rule for a position is the longest match.
- Tables are immutable once built and safe to share between threads.
"""

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union

from .config import DEFAULT_DM_RULES_PATH, dm_rules_path
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

COMMENT = "//"
MULTILINE_COMMENT_START = "/*"
MULTILINE_COMMENT_END = "*/"
DOUBLE_QUOTE = '"'
ALTERNATIVE_SEPARATOR = "|"
FOLDING_SEPARATOR = "="

VOWELS = frozenset("aeiou")


def _split_alternatives(field: str) -> Tuple[str, ...]:
    # An empty alternative is valid: it emits nothing
    return tuple(field.split(ALTERNATIVE_SEPARATOR))


class Rule(NamedTuple):
    """One context-sensitive transformation: pattern plus three replacement lists."""
    pattern: str
    replacement_at_start: Tuple[str, ...]
    replacement_before_vowel: Tuple[str, ...]
    replacement_default: Tuple[str, ...]

    @classmethod
    def from_fields(cls, pattern: str, at_start: str, before_vowel: str, default: str) -> "Rule":
        """Build a rule from raw fields; replacement fields may hold '|'-separated alternatives."""
        if not pattern:
            raise ValueError("Rule pattern must not be empty")
        return cls(
            pattern=pattern,
            replacement_at_start=_split_alternatives(at_start),
            replacement_before_vowel=_split_alternatives(before_vowel),
            replacement_default=_split_alternatives(default),
        )

    def matches(self, context: str) -> bool:
        return context.startswith(self.pattern)

    def get_replacements(self, context: str, at_start: bool) -> Tuple[str, ...]:
        """
        Pick the replacement list for a match at the head of context.
        At the start of a word the start list wins; otherwise the character
        following the pattern decides between before-vowel and default.
        """
        if at_start:
            return self.replacement_at_start
        next_index = len(self.pattern)
        if next_index < len(context) and context[next_index] in VOWELS:
            return self.replacement_before_vowel
        return self.replacement_default

    def __str__(self) -> str:
        return "%s=(%s,%s,%s)" % (
            self.pattern,
            list(self.replacement_at_start),
            list(self.replacement_before_vowel),
            list(self.replacement_default),
        )


class RuleTable:
    """Read-only mapping first character -> rules starting with it, longest pattern first."""

    def __init__(self, rules: Iterable[Rule]):
        grouped: Dict[str, List[Rule]] = {}
        for rule in rules:
            grouped.setdefault(rule.pattern[0], []).append(rule)
        # sorted() is stable: equal-length patterns keep source order
        self._rules: Mapping[str, Tuple[Rule, ...]] = MappingProxyType({
            ch: tuple(sorted(group, key=lambda r: len(r.pattern), reverse=True))
            for ch, group in grouped.items()
        })

    def rules_for(self, ch: str) -> Tuple[Rule, ...]:
        """Candidate rules for a character; empty when the character has none."""
        return self._rules.get(ch, ())

    def match(self, context: str) -> Optional[Rule]:
        """Longest rule whose pattern is a prefix of context, or None."""
        if not context:
            return None
        for rule in self.rules_for(context[0]):
            if rule.matches(context):
                return rule
        return None

    def __contains__(self, ch: object) -> bool:
        return ch in self._rules

    def __iter__(self) -> Iterator[Rule]:
        for group in self._rules.values():
            yield from group

    def __len__(self) -> int:
        return sum(len(group) for group in self._rules.values())

    def __repr__(self) -> str:
        return "RuleTable(%d rules, %d keys)" % (len(self), len(self._rules))


class RuleSet(NamedTuple):
    """Parsed rule source: transformation rules and ASCII foldings."""
    rules: RuleTable
    foldings: Mapping[str, str]


def _strip_quotes(value: str) -> str:
    if value.startswith(DOUBLE_QUOTE):
        value = value[1:]
    if value.endswith(DOUBLE_QUOTE):
        value = value[:-1]
    return value


def _parse_folding(line: str, raw_line: str, line_number: int, location: str) -> Tuple[str, str]:
    parts = line.split(FOLDING_SEPARATOR)
    if len(parts) != 2:
        raise ConfigurationError(
            "Malformed folding statement split into %d parts: %s in %s (line %d)"
            % (len(parts), raw_line, location, line_number),
            line_number, raw_line, location,
        )
    left, right = parts
    if len(left) != 1 or len(right) != 1:
        raise ConfigurationError(
            "Malformed folding statement - patterns are not single characters: %s in %s (line %d)"
            % (raw_line, location, line_number),
            line_number, raw_line, location,
        )
    return left, right


def _parse_rule(line: str, raw_line: str, line_number: int, location: str) -> Rule:
    parts = line.split()
    if len(parts) != 4:
        raise ConfigurationError(
            "Malformed rule statement split into %d parts: %s in %s (line %d)"
            % (len(parts), raw_line, location, line_number),
            line_number, raw_line, location,
        )
    try:
        return Rule.from_fields(*(_strip_quotes(p) for p in parts))
    except ValueError as e:
        raise ConfigurationError(
            "Problem parsing line '%d' in %s: %s" % (line_number, location, e),
            line_number, raw_line, location,
        ) from e


def parse_rules(lines: Iterable[str], location: str = "<string>") -> RuleSet:
    """
    Parse a rule source into a RuleSet.
    Raises ConfigurationError naming the offending line and its 1-based number.
    """
    rules: List[Rule] = []
    foldings: Dict[str, str] = {}
    in_multiline_comment = False
    for line_number, raw_line in enumerate(lines, start=1):
        raw_line = raw_line.rstrip("\r\n")
        if in_multiline_comment:
            if raw_line.endswith(MULTILINE_COMMENT_END):
                in_multiline_comment = False
            continue
        if raw_line.startswith(MULTILINE_COMMENT_START):
            # a block opened and closed on one line does not swallow the next
            closed = len(raw_line) >= 4 and raw_line.endswith(MULTILINE_COMMENT_END)
            in_multiline_comment = not closed
            continue
        line = raw_line
        cmt = line.find(COMMENT)
        if cmt >= 0:
            line = line[:cmt]
        line = line.strip()
        if not line:
            continue
        if FOLDING_SEPARATOR in line:
            left, right = _parse_folding(line, raw_line, line_number, location)
            foldings[left] = right
        else:
            rules.append(_parse_rule(line, raw_line, line_number, location))
    return RuleSet(rules=RuleTable(rules), foldings=MappingProxyType(foldings))


def parse_rules_text(text: str, location: str = "<string>") -> RuleSet:
    """Parse an in-memory rule source."""
    return parse_rules(text.splitlines(), location)


def load_rules(path: Union[str, Path]) -> RuleSet:
    """Read and parse a UTF-8 rule file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        rule_set = parse_rules(f, str(path))
    logger.debug(
        "Loaded %d Daitch-Mokotoff rules and %d foldings from %s",
        len(rule_set.rules), len(rule_set.foldings), path,
    )
    return rule_set


@lru_cache(maxsize=None)
def _load_cached(path: Path) -> RuleSet:
    if path != DEFAULT_DM_RULES_PATH:
        logger.info("Using Daitch-Mokotoff rule override %s", path)
    return load_rules(path)


def default_rule_set() -> RuleSet:
    """
    Process-wide rule set, loaded once per rule file.
    Uses PHONETIC_DM_RULES when set, else the bundled dmrules.txt.
    """
    return _load_cached(dm_rules_path().resolve())
