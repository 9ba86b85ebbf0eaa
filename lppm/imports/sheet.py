"""
Reading uploaded spreadsheets into a raw grid of normalized cells.

The first sheet is read without header inference; importers decide where the
headings and data rows are.
"""
import csv
import io
import numbers
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pandas as pd

from ..utils.helpers import slugify

Grid = List[List[Any]]

_EXCEL_ENGINES = {"xlsx": "openpyxl", "xls": "xlrd"}
# day 0 of the Excel serial date system
_EXCEL_EPOCH = date(1899, 12, 30)


def read_sheet(content: bytes, extension: str) -> Grid:
    """Parse an xlsx, xls or csv upload into rows of normalized cells."""
    extension = extension.lower()
    if extension == "csv":
        text = content.decode("utf-8-sig")
        # rows may differ in length; DataFrame pads them
        frame = pd.DataFrame(list(csv.reader(io.StringIO(text))))
    else:
        frame = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            header=None,
            dtype=object,
            keep_default_na=False,
            engine=_EXCEL_ENGINES.get(extension),
        )
    return [
        [normalize_cell(value) for value in row]
        for row in frame.itertuples(index=False, name=None)
    ]


def normalize_cell(value: Any) -> Any:
    """Blank and NaN become ``None``, integral floats ``int``, timestamps ``date``."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if value is None or pd.isna(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, bool):
        return value
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        value = float(value)
        return int(value) if value.is_integer() else value
    return value


def cell_text(value: Any) -> Optional[str]:
    """Cell as text for string columns: ``2024.0`` -> ``"2024"``."""
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip() or None


def cell_date(value: Any) -> Optional[date]:
    """Date from an Excel date, an Excel serial number or ISO / day-first text."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return _EXCEL_EPOCH + timedelta(days=int(value))
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    parsed = pd.to_datetime(text, dayfirst=True, errors="coerce")
    if pd.isna(parsed):
        raise ValueError(f"invalid date {value!r}")
    return parsed.date()


def heading_key(value: Any) -> str:
    """Column key for a heading cell: ``"No Publikasi"`` -> ``"no_publikasi"``."""
    return slugify(cell_text(value) or "", "_")


def heading_rows(grid: Grid, heading_row: int) -> Iterator[Tuple[int, Dict[str, Any]]]:
    """Yield ``(sheet_row_number, {heading: cell})`` below the 1-based ``heading_row``.

    Fully blank rows are skipped.
    """
    if len(grid) < heading_row:
        return
    keys = [heading_key(cell) for cell in grid[heading_row - 1]]
    for index in range(heading_row, len(grid)):
        cells = grid[index]
        if all(cell is None for cell in cells):
            continue
        row = {key: cell for key, cell in zip(keys, cells) if key}
        yield index + 1, row


def indexed_rows(grid: Grid, width: int) -> Iterator[Tuple[int, List[Any]]]:
    """Yield ``(sheet_row_number, cells)`` padded to ``width`` cells.

    Header rows (first cell ``NO``) and rows with an empty second cell are
    skipped.
    """
    for index, cells in enumerate(grid):
        cells = list(cells) + [None] * (width - len(cells))
        first = cell_text(cells[0])
        if (first or "").upper() == "NO" or cells[1] is None:
            continue
        yield index + 1, cells
