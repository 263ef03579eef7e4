"""Cutting table parsing.

A cutting table lists required pieces as ``(label, count, size)`` rows, the
way they are typed into a spreadsheet. Cells are loosely typed: counts and
sizes may arrive as ints, floats or numeric strings, and labels may be
missing. This module turns such a table into individual ``Cutout`` values
ready for the optimizer.
"""

from __future__ import annotations

import csv
import io
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

from excut.domain import Cutout, InvalidInput

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ("label", "count", "size")

# Upper bound on cutouts a single table may expand to. Cut lists run to a
# few thousand pieces; counts far beyond that are typing errors.
MAX_CUTOUTS = 100_000


@dataclass(frozen=True)
class CuttingTableRow:
    """One parsed row of a cutting table.

    Attributes:
        label: Display label for every cutout of this row.
        count: Number of identical pieces required.
        size: Length of each piece.
    """

    label: str | None
    count: int
    size: int

    def expand(self) -> list[Cutout]:
        """Expand the row into ``count`` individual cutouts."""
        return [Cutout(label=self.label, size=self.size) for _ in range(self.count)]


def _to_label(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _to_int(value: Any) -> int | None:
    """Convert a loosely typed numeric cell to int.

    Returns None when the cell is not numeric. Fractional values are
    truncated toward zero, as spreadsheet integer conversion does.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return _to_int(number)
    return None


def parse_row(row: Sequence[Any], index: int, strict: bool = False) -> CuttingTableRow | None:
    """Parse a single table row.

    Args:
        row: Three cells: label, count, size.
        index: Zero-based row index, used in error messages.
        strict: Raise instead of skipping rows with non-numeric cells.

    Returns:
        The parsed row, or None if the row has non-numeric cells and
        strict mode is off.

    Raises:
        InvalidInput: If the row does not have three cells, or strict mode
            is on and a cell is not numeric.
    """
    if len(row) != len(TABLE_COLUMNS):
        raise InvalidInput(
            f"Row {index + 1}: expected {len(TABLE_COLUMNS)} cells "
            f"(label, count, size), got {len(row)}",
            row=index,
        )

    label, raw_count, raw_size = row
    count = _to_int(raw_count)
    size = _to_int(raw_size)

    if count is None or size is None:
        if strict:
            column = "count" if count is None else "size"
            raw = raw_count if count is None else raw_size
            raise InvalidInput(
                f"Row {index + 1}: {column} must be a number (got: {raw!r})",
                row=index,
            )
        logger.debug("Skipping row %d: non-numeric cells %r", index + 1, list(row))
        return None

    return CuttingTableRow(label=_to_label(label), count=count, size=size)


def parse_table(
    rows: Iterable[Sequence[Any]],
    stock_size: int,
    strict: bool = False,
    max_cutouts: int = MAX_CUTOUTS,
) -> list[Cutout]:
    """Parse a cutting table into individual cutouts.

    Rows asking for no pieces, non-positive sizes, or pieces longer than
    the stock are skipped.

    Args:
        rows: Table rows of ``(label, count, size)``.
        stock_size: Stock length used to discard oversize pieces.
        strict: Raise on non-numeric cells instead of skipping the row.
        max_cutouts: Largest number of cutouts the table may expand to.

    Returns:
        Cutouts in table order, each row expanded ``count`` times.

    Raises:
        InvalidInput: If the table is empty, malformed, or expands to more
            than ``max_cutouts`` cutouts.
    """
    table = list(rows)
    if not table:
        raise InvalidInput(
            "Cutouts table must have at least one row with label, count and length"
        )

    cutouts: list[Cutout] = []
    for index, raw in enumerate(table):
        row = parse_row(raw, index, strict=strict)
        if row is None:
            continue
        if row.count <= 0 or row.size <= 0 or row.size > stock_size:
            logger.debug(
                "Skipping row %d (%s): count %d, size %d not placeable in %d",
                index + 1,
                row.label,
                row.count,
                row.size,
                stock_size,
            )
            continue
        if len(cutouts) + row.count > max_cutouts:
            raise InvalidInput(
                f"Row {index + 1}: cutting table expands to more than "
                f"{max_cutouts} cutouts",
                row=index,
            )
        cutouts.extend(row.expand())

    logger.debug("Parsed %d table rows into %d cutouts", len(table), len(cutouts))
    return cutouts


def _looks_like_header(row: Sequence[str]) -> bool:
    return [cell.strip().lower() for cell in row] == list(TABLE_COLUMNS)


def read_csv_table(source: Path | str) -> list[list[str]]:
    """Read a ``label,count,size`` CSV table.

    A header row naming the three columns is skipped. Blank lines are
    ignored. Files may start with the byte order mark spreadsheet programs
    write in front of UTF-8 CSV exports.

    Args:
        source: Path to a CSV file, or the CSV text itself.

    Returns:
        Raw rows of string cells, ready for ``parse_table``.

    Raises:
        InvalidInput: If the file cannot be read or is not UTF-8 text.
    """
    if isinstance(source, Path):
        try:
            text = source.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidInput(f"Error reading cutting table: {source}: {e}") from e
    else:
        text = source

    reader = csv.reader(io.StringIO(text))
    rows = [row for row in reader if any(cell.strip() for cell in row)]
    if rows and _looks_like_header(rows[0]):
        rows = rows[1:]
    return rows
