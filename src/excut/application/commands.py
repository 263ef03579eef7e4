"""Application commands (use cases) for cut list optimization."""

from __future__ import annotations

import logging

from excut.domain import CuttingConfig, InvalidConfiguration, InvalidInput
from excut.infrastructure.bin_packing import CuttingOptimizer, available_policies

from .cutting_table import parse_table
from .dtos import CutListInput, CutListOutput

logger = logging.getLogger(__name__)


class OptimizeCutListCommand:
    """Command to turn a cutting table into a cutting plan.

    Validates the stock configuration before anything else, parses and
    filters the cutting table, then runs the optimizer. Either a full plan
    or a list of errors is returned, never a partial plan.
    """

    def execute(self, request: CutListInput) -> CutListOutput:
        """Execute the cut list command.

        Args:
            request: Stock parameters, cutting table and packing options.

        Returns:
            CutListOutput with the packing result or the errors that
            prevented packing.
        """
        try:
            config = CuttingConfig(stock_size=request.stock_size, kerf=request.kerf)
        except InvalidConfiguration as e:
            return CutListOutput(
                errors=[str(e)], error_type="configuration", details={"field": e.field}
            )

        try:
            optimizer = CuttingOptimizer(request.policy)
        except KeyError as e:
            return CutListOutput(
                errors=[e.args[0]],
                error_type="policy",
                details={"policy": request.policy, "available": available_policies()},
            )

        try:
            cutouts = parse_table(request.rows, config.stock_size, strict=request.strict)
        except InvalidInput as e:
            return CutListOutput(
                errors=[str(e)], error_type="input", details={"row": e.row}
            )

        logger.info(
            "Optimizing %d cutouts on %d-long stock",
            len(cutouts),
            config.stock_size,
        )
        return CutListOutput(result=optimizer.optimize(config, cutouts))
