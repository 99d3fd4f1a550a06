"""Exceptions raised while analyzing a Rust source file.

Every failure here is fatal for the file being analyzed. Callers that process
several files catch ``RustImportsError`` per file and move on to the next one.
"""

from pathlib import Path


class RustImportsError(Exception):
    """Base class for all analysis failures."""


class SourceReadError(RustImportsError):
    """The source file could not be read or decoded."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not open file {path}: {cause}")


class RustParseError(RustImportsError):
    """The source text is not valid Rust.

    Attributes:
        filename: Name of the file (or pseudo-file) that failed to parse
        line: 1-based line of the first syntax error
        column: 1-based column of the first syntax error
    """

    def __init__(self, filename: str, line: int, column: int, detail: str) -> None:
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(f"{filename}:{line}:{column}: {detail}")
