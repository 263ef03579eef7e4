"""Value objects for the cutting domain.

All classes are frozen dataclasses so they can be shared freely between
packing runs and used as dictionary keys.
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidConfiguration


@dataclass(frozen=True)
class Cutout:
    """A single piece to be cut from stock.

    The size is not validated here. Eligibility against a stock length is
    checked when the cutting table is parsed.

    Attributes:
        label: Optional display label, carried through for traceability.
        size: Piece length in whole units.
    """

    label: str | None
    size: int

    def describe(self) -> str:
        """Human-readable form used in text reports."""
        if self.label is None:
            return str(self.size)
        return f"{self.size} ({self.label})"


@dataclass(frozen=True)
class CuttingConfig:
    """Parameters of a packing run.

    Attributes:
        stock_size: Length of every raw stock segment.
        kerf: Material consumed by each saw cut.
    """

    stock_size: int
    kerf: int = 0

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise InvalidConfiguration(
                "Cut size must be zero or positive number", field="kerf"
            )
        if self.stock_size <= self.kerf:
            raise InvalidConfiguration(
                "Bin size must be greater than cut size", field="stock_size"
            )
