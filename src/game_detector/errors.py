"""
Error types raised while parsing launcher data.

Only ParseError and ExtractionError are raised by this package itself;
filesystem and deserializer errors propagate as their own types and are
caught at the source boundary inside each launcher.
"""

from typing import Optional


class GamesParsingError(Exception):
    """Base class for errors raised while parsing games from a launcher."""


class ParseError(GamesParsingError):
    """
    Syntax error in a KeyValues document.

    Attributes:
        offset: Character (not byte) offset of the offending token
        line: 1-based line of the offending token
        column: 1-based column of the offending token
        depth: Number of blocks still open when the error was raised
    """

    def __init__(
        self,
        message: str,
        offset: int,
        line: int,
        column: int,
        depth: int = 0,
    ):
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        self.depth = depth
        super().__init__(f"{message} (line {line}, column {column})")


class ExtractionError(GamesParsingError):
    """A required field is missing from an otherwise valid tree."""

    def __init__(self, field: str, context: Optional[str] = None):
        self.field = field
        self.context = context
        message = f"missing required field '{field}'"
        if context:
            message = f"{message} in {context}"
        super().__init__(message)
