"""
Exception types raised by the jsdoclint front ends and configuration layer.
"""

from enum import Enum
from typing import Optional


class JSDocLintError(Exception):
    """Base class for all jsdoclint errors."""


class JSSyntaxError(JSDocLintError):
    """Raised when JavaScript source cannot be tokenized or parsed."""

    def __init__(self, message: str, lineno: int = 0, col_offset: int = 0):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset

    def __str__(self) -> str:
        if self.lineno > 0:
            return f"Line {self.lineno}, Col {self.col_offset}: {self.message}"
        return self.message


class ParseErrorKind(Enum):
    """Structured classification of JSDoc comment syntax errors."""

    UNBALANCED_BRACES = "unbalanced_braces"
    INVALID_TYPE = "invalid_type"
    INVALID_TITLE = "invalid_title"
    MISSING_NAME = "missing_name"


class JSDocSyntaxError(JSDocLintError):
    """Raised by the comment parser when a JSDoc comment is malformed."""

    def __init__(
        self,
        message: str,
        kind: Optional[ParseErrorKind] = None,
        line_number: int = 0,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.line_number = line_number


class ConfigError(JSDocLintError):
    """Raised when a lint configuration is invalid."""
