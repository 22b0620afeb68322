"""Exceptions raised while extracting metadata from a source file."""

from typing import Optional


class ExtractionError(Exception):
    """Base error for a failed extraction.

    Attributes:
        path: The source file (or '<string>') that could not be processed.
        cause: The underlying exception, if any.
    """

    def __init__(
        self, message: str, path: str, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause


class SourceReadError(ExtractionError):
    """The file is missing, unreadable, or cannot be decoded."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Failed to read {path}: {cause}", path, cause)


class SourceSyntaxError(ExtractionError):
    """The source text could not be parsed into a valid syntax tree.

    Attributes:
        line: 1-based line of the first syntax error.
        column: 1-based column of the first syntax error.
    """

    def __init__(self, path: str, line: int, column: int) -> None:
        super().__init__(
            f"Syntax error in {path} at line {line}, column {column}", path
        )
        self.line = line
        self.column = column
