"""Application layer - use cases and input adaptation."""

from .commands import OptimizeCutListCommand
from .cutting_table import CuttingTableRow, parse_row, parse_table, read_csv_table
from .dtos import CutListInput, CutListOutput

__all__ = [
    "CutListInput",
    "CutListOutput",
    "CuttingTableRow",
    "OptimizeCutListCommand",
    "parse_row",
    "parse_table",
    "read_csv_table",
]
