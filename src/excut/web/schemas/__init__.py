"""Request and response schemas for the REST API."""

from .requests import CutListRequest
from .responses import BinSchema, CutListResponse, PlanSummarySchema, PoliciesResponse

__all__ = [
    "BinSchema",
    "CutListRequest",
    "CutListResponse",
    "PlanSummarySchema",
    "PoliciesResponse",
]
