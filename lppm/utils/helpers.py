"""
Helper utility functions shared by services and importers.
"""

import random
import re
import unicodedata
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Union


Number = Union[int, float, Decimal]


def slugify(text: str, separator: str = "-") -> str:
    """ASCII slug of ``text``: ``"Program & Kebijakan"`` -> ``"program-kebijakan"``."""
    text = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^a-z0-9]+", separator, text.lower())
    return text.strip(separator)


def generate_colors(count: int) -> List[str]:
    """Random ``#RRGGBB`` colors, one per chart slice; not stable across calls."""
    return [f"#{random.randint(0, 0xFFFFFF):06X}" for _ in range(count)]


def percentage(part: Number, total: Number) -> float:
    if not total:
        return 0
    return round(float(part) / float(total) * 100, 2)


def format_currency(amount: Optional[Number]) -> str:
    """Indonesian Rupiah text, e.g. ``Rp 1.500.000,00``."""
    value = Decimal(str(amount or 0))
    text = f"{value:,.2f}"
    # 1,500,000.00 -> 1.500.000,00
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"Rp {text}"


def parse_money(value: Any) -> Decimal:
    """Parse spreadsheet money cells such as ``"Rp. 1.500.000"`` or ``1500000.0``.

    Dots are thousand separators; a trailing comma part is the fraction.
    Raises ``ValueError`` when nothing numeric is left.
    """
    if value is None:
        raise ValueError("empty amount")
    if isinstance(value, (int, float, Decimal)):
        return Decimal(str(value))

    text = str(value).replace("Rp.", "").replace("Rp", "").replace(".", "").strip()
    text = text.replace(" ", "").replace(",", ".")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"invalid amount {value!r}")


def null_if_dash(value: Any) -> Any:
    """Spreadsheets use ``-`` for "no value"."""
    if isinstance(value, str) and value.strip() == "-":
        return None
    return value


def join_names(names: List[str]) -> str:
    return ", ".join(names)
