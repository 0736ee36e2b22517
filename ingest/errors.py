"""Exceptions raised while converting a source spreadsheet.

Every failure here is fatal to a conversion run; nothing is retried and no
output is written.
"""

from typing import List, Optional, Sequence

__all__ = [
    "IngestionError",
    "SourceNotFoundError",
    "UnsupportedSourceError",
    "EmptySourceError",
    "MissingRequiredColumnsError",
    "UnreadableSourceError",
]


class IngestionError(Exception):
    """Base class for conversion failures."""
    pass


class SourceNotFoundError(IngestionError):
    """Raised when the source file does not exist."""

    def __init__(self, path: str):
        self.path = str(path)
        super().__init__(f"Source file not found: {self.path}")


class UnsupportedSourceError(IngestionError):
    """Raised when no schema variant handles the source file type."""
    pass


class EmptySourceError(IngestionError):
    """Raised when the source table has no data rows."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        where = f" ({path})" if path else ""
        super().__init__(f"Source appears to be empty{where}")


class MissingRequiredColumnsError(IngestionError):
    """Raised when required columns are absent from the header."""

    def __init__(self, missing: Sequence[str], actual: Optional[Sequence[str]] = None):
        self.missing: List[str] = list(missing)
        self.actual: List[str] = list(actual or [])
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")


class UnreadableSourceError(IngestionError):
    """Raised when the source file exists but cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = str(path)
        super().__init__(f"Could not read {self.path}: {reason}")
