"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from excut.infrastructure.bin_packing import PackingResult


@dataclass
class CutListInput:
    """Input DTO for a cut list request.

    Attributes:
        stock_size: Length of every raw stock segment.
        kerf: Material consumed by each saw cut.
        rows: Cutting table rows of ``(label, count, size)``.
        policy: Bin selection policy name.
        strict: Reject non-numeric table cells instead of skipping rows.
    """

    stock_size: int
    kerf: int
    rows: Sequence[Sequence[Any]]
    policy: str = "current"
    strict: bool = False


@dataclass
class CutListOutput:
    """Output DTO containing the packing result.

    Attributes:
        result: Packing result, or None if the request was rejected.
        errors: List of error messages if the request was rejected.
        error_type: Category of the first error (configuration, input, policy).
        details: Context of the error: the offending ``field`` for
            configuration errors, ``row`` for input errors, and ``policy``
            with the ``available`` names for policy errors.
    """

    result: PackingResult | None = None
    errors: list[str] = field(default_factory=list)
    error_type: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """Check if the cut list was produced without errors."""
        return not self.errors and self.result is not None
