"""
Error hierarchy for embedmd

Every failure while processing a document is fatal to that document's pass.
Errors carry enough context (reference, pattern, line number) for a user to
find the offending directive.

    EmbedError
    ├── MalformedDirective
    ├── FetchError
    └── ExtractionError
        ├── BadPattern
        └── NoMatch
"""

from typing import Optional


class EmbedError(Exception):
    """Base class for all embedmd errors"""

    def __init__(self, message: str, reference: Optional[str] = None, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.reference = reference
        self.line_number = line_number

    def located(self, reference: str, line_number: int) -> "EmbedError":
        """
        Attach directive location to the error.

        Called by the document processor before re-raising, so errors raised
        deep inside the fetch/extract stages still identify their directive.

        Args:
            reference: Path or URL of the directive that failed
            line_number: 1-based line of the directive in its document

        Returns:
            self
        """
        if self.reference is None:
            self.reference = reference
        self.line_number = line_number
        return self

    def __str__(self) -> str:
        parts = []
        if self.line_number is not None:
            parts.append(f"line {self.line_number}")
        if self.reference is not None:
            parts.append(self.reference)
        if parts:
            return f"{': '.join(parts)}: {self.message}"
        return self.message


class MalformedDirective(EmbedError):
    """Raised when an [embedmd]:# argument list cannot be decoded"""
    pass


class FetchError(EmbedError):
    """Raised when a reference cannot be read from disk or fetched over HTTP"""
    pass


class ExtractionError(EmbedError):
    """Raised when a boundary cannot be applied to fetched content"""

    def __init__(self, message: str, pattern: str, reference: Optional[str] = None):
        super().__init__(message, reference=reference)
        self.pattern = pattern


class BadPattern(ExtractionError):
    """Raised when a boundary pattern is not a valid regular expression"""

    def __init__(self, pattern: str, reason: str = ""):
        message = f"invalid pattern /{pattern}/"
        if reason:
            message += f": {reason}"
        super().__init__(message, pattern)


class NoMatch(ExtractionError):
    """Raised when a boundary pattern matches nothing in the fetched content"""

    def __init__(self, pattern: str):
        super().__init__(f"could not match /{pattern}/", pattern)
