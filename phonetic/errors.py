"""Errors raised by the phonetic encoders and the rule-table parser."""

from typing import Optional


class ConfigurationError(ValueError):
    """
    A rule source could not be parsed.
    Fatal at load time; a table that failed to load is never used.
    """

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None,
                 location: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        self.location = location
        super().__init__(message)


class EncoderError(TypeError):
    """Value handed to an encoder is not a string."""
