"""Infrastructure layer - packing engine and output formatters."""

from .bin_packing import (
    Bin,
    BinSelectionPolicy,
    BestFitPolicy,
    CurrentBinPolicy,
    CuttingOptimizer,
    FirstFitPolicy,
    PackingResult,
    PolicyRegistry,
    available_policies,
    get_policy,
    optimize,
)
from .formatters import (
    BarDiagramRenderer,
    CsvExporter,
    JsonExporter,
    SpreadsheetFormatter,
    SummaryFormatter,
    TextReportFormatter,
)

__all__ = [
    # Packing engine
    "Bin",
    "BinSelectionPolicy",
    "BestFitPolicy",
    "CurrentBinPolicy",
    "CuttingOptimizer",
    "FirstFitPolicy",
    "PackingResult",
    "PolicyRegistry",
    "available_policies",
    "get_policy",
    "optimize",
    # Formatters
    "BarDiagramRenderer",
    "CsvExporter",
    "JsonExporter",
    "SpreadsheetFormatter",
    "SummaryFormatter",
    "TextReportFormatter",
]
