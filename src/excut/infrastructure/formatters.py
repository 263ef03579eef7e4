"""Output formatters and exporters for cutting plans."""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Sequence

from .bin_packing import Bin, PackingResult


class SpreadsheetFormatter:
    """Formats bins as a jagged table for spreadsheet output.

    Each bin contributes three rows: ``[used, cuts, rest]``, the cutout
    sizes, and the cutout labels. Rows of one bin line up column by column
    so the plan can be spilled into a worksheet as is.
    """

    def format(self, bins: Sequence[Bin]) -> list[list[Any]]:
        rows: list[list[Any]] = []
        for b in bins:
            rows.append([b.used, b.cuts, b.rest])
            rows.append(list(b.sizes))
            rows.append(list(b.labels))
        return rows


class TextReportFormatter:
    """Formats bins as one line of text per bin.

    Lines look like ``Bin #1 (110/10/0): 60 (Rail), 50 (Stile)`` with the
    bin's used length, kerf and rest in parentheses. Bins are numbered from
    1 in result order.
    """

    def format_bin(self, number: int, b: Bin) -> str:
        pieces = ", ".join(c.describe() for c in b.cutouts)
        return f"Bin #{number} ({b.used}/{b.cuts}/{b.rest}): {pieces}"

    def format(self, bins: Sequence[Bin]) -> str:
        return "\n".join(
            self.format_bin(number, b) for number, b in enumerate(bins, start=1)
        )


class SummaryFormatter:
    """Formats overall statistics of a packing result."""

    def format(self, result: PackingResult) -> str:
        config = result.config
        lines = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Stock Size: {config.stock_size}",
            f"Kerf: {config.kerf}",
            f"Policy: {result.policy}",
            f"Pieces: {result.total_pieces}",
            f"Bins: {result.total_bins} (lower bound {result.lower_bound})",
            f"Stock Used: {result.total_used} of {result.total_stock}",
            f"Cut Waste: {result.total_cuts}",
            f"Rest: {result.total_rest}",
            f"Total Waste: {result.waste_percentage:.1f}%",
        ]
        return "\n".join(lines)


class JsonExporter:
    """Exports a packing result as a JSON document."""

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def to_dict(self, result: PackingResult) -> dict[str, Any]:
        return {
            "config": {
                "stock_size": result.config.stock_size,
                "kerf": result.config.kerf,
                "policy": result.policy,
            },
            "bins": [
                {
                    "number": b.index + 1,
                    "used": b.used,
                    "cuts": b.cuts,
                    "rest": b.rest,
                    "cutouts": [
                        {"label": c.label, "size": c.size} for c in b.cutouts
                    ],
                }
                for b in result.bins
            ],
            "summary": {
                "total_bins": result.total_bins,
                "total_pieces": result.total_pieces,
                "total_used": result.total_used,
                "total_cuts": result.total_cuts,
                "total_rest": result.total_rest,
                "lower_bound": result.lower_bound,
                "waste_percentage": round(result.waste_percentage, 2),
            },
        }

    def format(self, result: PackingResult) -> str:
        return json.dumps(self.to_dict(result), indent=self._indent)


class CsvExporter:
    """Exports bins as CSV with one row per cutout."""

    HEADER = ("bin", "used", "cuts", "rest", "size", "label")

    def format(self, bins: Sequence[Bin]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(self.HEADER)
        for number, b in enumerate(bins, start=1):
            for cutout in b.cutouts:
                writer.writerow(
                    [number, b.used, b.cuts, b.rest, cutout.size, cutout.label or ""]
                )
        return output.getvalue()


class BarDiagramRenderer:
    """Renders bins as ASCII bars for terminal display.

    Pieces alternate between ``#`` and ``=`` fill so neighbours stay
    distinguishable, kerf is drawn as ``x`` and the rest is left blank.
    Segment boundaries are rounded from cumulative positions, so the bar
    always spans exactly ``width`` characters.

    Attributes:
        width: Characters between the bar's end markers.
    """

    PIECE_FILLS = ("#", "=")
    KERF_FILL = "x"
    REST_FILL = " "

    def __init__(self, width: int = 60) -> None:
        if width < 10:
            raise ValueError("Diagram width must be at least 10 characters")
        self.width = width

    def _segments(self, b: Bin, kerf: int) -> list[tuple[int, str]]:
        """Split a bin into ``(length, fill)`` segments in cutting order.

        Kerf is laid after each piece until the bin's total cut waste is
        used up; only a bin's single full-length piece is charged less.
        """
        segments: list[tuple[int, str]] = []
        cuts_left = b.cuts
        for i, cutout in enumerate(b.cutouts):
            segments.append((cutout.size, self.PIECE_FILLS[i % 2]))
            charged = min(kerf, cuts_left)
            if charged:
                segments.append((charged, self.KERF_FILL))
                cuts_left -= charged
        if b.rest:
            segments.append((b.rest, self.REST_FILL))
        return segments

    def render_bin(self, b: Bin, kerf: int, total_bins: int = 1) -> str:
        scale = self.width / b.stock_size
        bar: list[str] = []
        position = 0
        start = 0
        for length, fill in self._segments(b, kerf):
            position += length
            end = round(position * scale)
            bar.append(fill * (end - start))
            start = end

        header = (
            f"Bin {b.index + 1} of {total_bins} - used {b.used}, cuts {b.cuts}, "
            f"rest {b.rest} ({b.waste_percentage:.1f}% waste)"
        )
        return "\n".join([header, "|" + "".join(bar) + "|"])

    def render(self, result: PackingResult) -> str:
        if not result.bins:
            return "No bins in cutting plan."
        return "\n\n".join(
            self.render_bin(b, result.config.kerf, result.total_bins)
            for b in result.bins
        )
