"""Pydantic models for cut job configuration files.

A job file bundles the stock parameters with the cutting table so a cut
list can be reproduced from a single JSON document:

    {
        "schema_version": "1.0",
        "stock_size": 6000,
        "kerf": 3,
        "policy": "current",
        "cutouts": [
            {"label": "Rail", "count": 4, "size": 1200},
            {"label": "Stile", "count": 2, "size": 2100}
        ]
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

# Version 1.0: Stock size, kerf and cutting table
# Version 1.1: Bin selection policy and strict table parsing
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

# Pydantic error type raised when the kerf leaves no usable stock
KERF_NOT_BELOW_STOCK = "kerf_not_below_stock"


class CutoutRowSchema(BaseModel):
    """One row of the cutting table.

    Rows with a non-positive count or size are accepted here and skipped
    when the table is parsed, matching spreadsheet input.
    """

    model_config = ConfigDict(extra="forbid")

    label: str | None = Field(default=None, description="Display label for the piece")
    count: int = Field(..., description="Number of identical pieces")
    size: int = Field(..., description="Length of each piece")


class CutJobConfiguration(BaseModel):
    """Root model of a cut job configuration file.

    Attributes:
        schema_version: Configuration schema version.
        stock_size: Length of every raw stock segment.
        kerf: Material consumed by each saw cut.
        policy: Bin selection policy name.
        strict: Reject non-numeric table cells instead of skipping rows.
        cutouts: Cutting table rows.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", description="Schema version")
    stock_size: int = Field(..., gt=0, description="Stock length")
    kerf: int = Field(default=0, ge=0, description="Saw kerf width")
    policy: str = Field(default="current", description="Bin selection policy")
    strict: bool = Field(default=False, description="Reject malformed table rows")
    cutouts: list[CutoutRowSchema] = Field(
        default_factory=list, description="Cutting table rows"
    )

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(
                f"Unsupported schema version '{v}'. Supported versions: {supported}"
            )
        return v

    @field_validator("kerf")
    @classmethod
    def validate_kerf_below_stock(cls, v: int, info: ValidationInfo) -> int:
        """Stock must be longer than a single cut.

        Reported against ``kerf`` with its own error type so loaders can
        tell a stock/kerf mismatch apart from a malformed document.
        """
        stock_size = info.data.get("stock_size")
        if stock_size is not None and stock_size <= v:
            raise PydanticCustomError(
                KERF_NOT_BELOW_STOCK,
                "Bin size must be greater than cut size "
                "(stock_size {stock_size}, kerf {kerf})",
                {"stock_size": stock_size, "kerf": v},
            )
        return v
