"""Pydantic request schemas for the REST API."""

from pydantic import BaseModel, Field

# bool keeps JSON true/false from being coerced to 1/0. The table parser
# treats booleans as non-numeric.
TableCell = bool | str | int | float | None


class CutListRequest(BaseModel):
    """Request to optimize a cutting table.

    The table mirrors a spreadsheet range: one ``[label, count, size]``
    row per required piece type, with loosely typed cells.
    """

    stock_size: int = Field(..., description="Stock length of every bin")
    kerf: int = Field(default=0, description="Material consumed by each saw cut")
    table: list[list[TableCell]] = Field(
        ..., description="Cutting table rows of [label, count, size]"
    )
    policy: str = Field(default="current", description="Bin selection policy")
    strict: bool = Field(
        default=False, description="Reject non-numeric cells instead of skipping rows"
    )
