"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class BinSchema(BaseModel):
    """A single stock segment of the cutting plan."""

    number: int = Field(..., description="1-based bin number in plan order")
    used: int = Field(..., description="Sum of piece lengths")
    cuts: int = Field(..., description="Material consumed by saw cuts")
    rest: int = Field(..., description="Leftover length")
    sizes: list[int] = Field(default_factory=list, description="Piece lengths in cutting order")
    labels: list[str | None] = Field(default_factory=list, description="Piece labels in cutting order")


class PlanSummarySchema(BaseModel):
    """Totals of a cutting plan."""

    total_bins: int = Field(..., description="Number of stock segments")
    total_pieces: int = Field(..., description="Number of pieces placed")
    lower_bound: int = Field(..., description="Minimum bins ignoring kerf")
    waste_percentage: float = Field(..., description="Stock not turned into pieces")


class CutListResponse(BaseModel):
    """Response for cut list optimization."""

    policy: str = Field(..., description="Bin selection policy used")
    bins: list[BinSchema] = Field(default_factory=list, description="Bins in plan order")
    table: list[list[Any]] = Field(
        default_factory=list,
        description="Spreadsheet rows: [used, cuts, rest], sizes, labels per bin",
    )
    report: str = Field(default="", description="Human-readable cutting plan")
    summary: PlanSummarySchema


class PoliciesResponse(BaseModel):
    """Available bin selection policies."""

    policies: list[str] = Field(default_factory=list)
