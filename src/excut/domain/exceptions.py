"""Domain exceptions for cut list optimization."""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised when the stock size and kerf cannot describe a usable bin.

    Attributes:
        field: Name of the offending configuration field.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidInput(ValueError):
    """Raised when a cutting table is malformed.

    Attributes:
        row: Zero-based index of the offending row, if known.
    """

    def __init__(self, message: str, row: int | None = None) -> None:
        self.row = row
        super().__init__(message)
