"""Cut list optimization endpoints."""

from fastapi import APIRouter

from excut.application import CutListInput, CutListOutput
from excut.domain import InvalidConfiguration, InvalidInput
from excut.infrastructure import (
    PackingResult,
    SpreadsheetFormatter,
    TextReportFormatter,
    available_policies,
)
from excut.web.dependencies import OptimizeCommandDep
from excut.web.exceptions import UnsupportedPolicyError
from excut.web.schemas import (
    BinSchema,
    CutListRequest,
    CutListResponse,
    PlanSummarySchema,
    PoliciesResponse,
)

router = APIRouter(prefix="/cutlist", tags=["cutlist"])


def _raise_for_errors(output: CutListOutput) -> None:
    """Re-raise a rejected command as the exception its handler expects."""
    message = output.errors[0]
    if output.error_type == "configuration":
        raise InvalidConfiguration(message, field=output.details.get("field"))
    if output.error_type == "policy":
        raise UnsupportedPolicyError(
            output.details["policy"], output.details["available"]
        )
    raise InvalidInput(message, row=output.details.get("row"))


def _result_to_schema(result: PackingResult) -> CutListResponse:
    return CutListResponse(
        policy=result.policy,
        bins=[
            BinSchema(
                number=b.index + 1,
                used=b.used,
                cuts=b.cuts,
                rest=b.rest,
                sizes=list(b.sizes),
                labels=list(b.labels),
            )
            for b in result.bins
        ],
        table=SpreadsheetFormatter().format(result.bins),
        report=TextReportFormatter().format(result.bins),
        summary=PlanSummarySchema(
            total_bins=result.total_bins,
            total_pieces=result.total_pieces,
            lower_bound=result.lower_bound,
            waste_percentage=round(result.waste_percentage, 2),
        ),
    )


@router.post("", response_model=CutListResponse)
async def optimize_cut_list(
    request: CutListRequest,
    command: OptimizeCommandDep,
) -> CutListResponse:
    """Optimize a cutting table into a cutting plan.

    Args:
        request: Stock parameters and cutting table.
        command: Injected OptimizeCutListCommand.

    Returns:
        Bins with per-bin accounting, the spreadsheet table and a text report.

    Raises:
        InvalidConfiguration: If kerf is negative or not below the stock size.
        UnsupportedPolicyError: If the policy is not registered.
        InvalidInput: If the table is empty, malformed, or too large.
    """
    output = command.execute(
        CutListInput(
            stock_size=request.stock_size,
            kerf=request.kerf,
            rows=request.table,
            policy=request.policy,
            strict=request.strict,
        )
    )
    if not output.is_valid:
        _raise_for_errors(output)
    return _result_to_schema(output.result)


@router.get("/policies", response_model=PoliciesResponse)
async def list_policies() -> PoliciesResponse:
    """List available bin selection policies."""
    return PoliciesResponse(policies=available_policies())
