"""Errors raised while parsing a methylation site line."""

from typing import Optional


class ParseError(ValueError):
    """Raised when a text line cannot be parsed into an MSite.

    Attributes
    ----------
    field : str
        Name of the field that failed, e.g. "pos" or "meth".
    value : str, optional
        The offending token, or None if the field was missing.
    """

    def __init__(
        self, message: str, *, field: str, value: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class MissingFieldError(ParseError):
    """Raised when the line has fewer than six fields."""


class InvalidNumberError(ParseError):
    """Raised when pos, meth or n_reads is not a valid number."""


class InvalidStrandError(ParseError):
    """Raised when the strand token is not exactly one character."""


class OutOfRangeError(ParseError):
    """Raised when meth falls outside [0.0, 1.0]."""
