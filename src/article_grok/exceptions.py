"""Custom exceptions for article extraction."""


class GrokError(Exception):
    """Base exception for all extraction errors."""

    def __init__(self, message: str, path: str | None = None, *args, **kwargs):
        self.message = message
        self.path = path
        super().__init__(message, *args, **kwargs)


class SourceReadError(GrokError):
    """Raised when a source document cannot be opened, mapped or stat'ed."""

    pass


class MalformedDocumentError(GrokError):
    """Raised when the parser reports a well-formedness violation.

    The string form is the positioned diagnostic ``path:line:col: message``.
    """

    def __init__(self, path: str, line: int, column: int, message: str):
        self.line = line
        self.column = column
        super().__init__(message, path)

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}: {self.message}"


class RegionNestingError(MalformedDocumentError):
    """Raised when input ends while a tracked region is still open."""

    def __init__(self, message: str, path: str = "", line: int = 0, column: int = 0):
        super().__init__(path, line, column, message)
