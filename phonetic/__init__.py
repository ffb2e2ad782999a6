"""Daitch-Mokotoff Soundex: branching phonetic encoding of names."""

from .errors import ConfigurationError, EncoderError
from .rules import (
    Rule,
    RuleTable,
    RuleSet,
    parse_rules,
    parse_rules_text,
    load_rules,
    default_rule_set,
)
from .branch import Branch, MAX_LENGTH
from .daitch_mokotoff import (
    DaitchMokotoffSoundex,
    default_encoder,
    encode,
    soundex,
    soundex_words,
)
from .comparator import StringEncoderComparator

__all__ = [
    "ConfigurationError",
    "EncoderError",
    "Rule",
    "RuleTable",
    "RuleSet",
    "parse_rules",
    "parse_rules_text",
    "load_rules",
    "default_rule_set",
    "Branch",
    "MAX_LENGTH",
    "DaitchMokotoffSoundex",
    "default_encoder",
    "encode",
    "soundex",
    "soundex_words",
    "StringEncoderComparator",
]
