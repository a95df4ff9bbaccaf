"""Helpers shared by the institution adapters.

Amount parsing accepts the spellings seen across exports (``$``, thousands
separators, leading sign, accounting parentheses). Date handling is
best-effort: adapters keep the raw source string when no layout matches.
"""

from __future__ import annotations

import csv
from collections.abc import Sequence
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from io import StringIO
from os import PathLike
from pathlib import Path

from ..models import DISPLAY_DATE_FORMAT

# Tried after an adapter's native layouts.
COMMON_DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%Y-%m-%d",
    "%d %b %Y",
    "%d %b. %Y",
    "%b %d, %Y",
    "%Y/%m/%d",
    "%m/%d/%y",
)

CENTS = Decimal("0.01")


def _unwrap_amount(text: str) -> tuple[str, bool]:
    """Peel sign, ``$`` and accounting parentheses off ``text``.

    Returns the remaining digits and whether any marker meant a debit.
    """

    negative = False
    while text:
        head = text[0]
        if head in "+-":
            negative = negative or head == "-"
            text = text[1:]
        elif head == "$":
            text = text[1:]
        elif head == "(" and text.endswith(")"):
            negative = True
            text = text[1:-1]
        else:
            break
        text = text.strip()
    return text, negative


def to_decimal(raw: str | None) -> Decimal:
    """Parse a currency amount into a signed ``Decimal``.

    Raises ``ValueError`` for empty or unparseable input and for magnitudes
    whose cent value does not fit the decimal context (``1e30``), so callers
    can skip the row like any other malformed amount.
    """

    text = (raw or "").strip()
    if not text:
        raise ValueError(f"missing amount: {raw!r}")

    digits, negative = _unwrap_amount(text)
    try:
        value = Decimal(digits.replace(",", ""))
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {raw!r}") from exc

    # Quantizing to cents needs adjusted() + 3 significant digits.
    if not value.is_finite() or value.adjusted() + 3 > getcontext().prec:
        raise ValueError(f"amount out of range: {raw!r}")
    return -abs(value) if negative else value


def fmt_amount(d: Decimal) -> str:
    """Two decimals, ASCII dot, leading minus for negatives."""

    return f"{d.quantize(CENTS, rounding=ROUND_HALF_UP):.2f}"


def parse_date(raw: str, formats: Sequence[str] = ()) -> date | None:
    """Return the calendar date in ``raw`` or ``None`` when no layout matches.

    ``formats`` are tried first, then :data:`COMMON_DATE_FORMATS`. A trailing
    time (``2025-01-15T10:00:00`` or ``2025-01-15 10:00``) is ignored.
    """

    s = raw.strip()
    if not s:
        return None
    candidates = [s]
    if "T" in s and s[:1].isdigit():
        candidates.append(s.split("T", 1)[0])
    if " " in s and s[:4].isdigit():
        candidates.append(s.split(" ", 1)[0])

    for fmt in (*formats, *COMMON_DATE_FORMATS):
        for c in candidates:
            try:
                return datetime.strptime(c, fmt).date()
            except ValueError:
                continue
    return None


def display_date(raw: str, formats: Sequence[str] = ()) -> str:
    """Format ``raw`` as ``MM/DD/YYYY``; unparseable input is returned as-is."""

    parsed = parse_date(raw, formats)
    if parsed is None:
        return raw
    return parsed.strftime(DISPLAY_DATE_FORMAT)


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def read_text(path: str | PathLike[str]) -> str:
    """Read an export as UTF-8, tolerating a byte-order mark."""

    return Path(path).read_text(encoding="utf-8-sig")


def read_rows(text: str) -> list[list[str]]:
    """Split CSV text into rows, dropping rows whose cells are all blank."""

    with StringIO(text, newline="") as f:
        return [row for row in csv.reader(f) if any(cell.strip() for cell in row)]


def cell(row: Sequence[str], idx: int) -> str:
    """Return the stripped cell at ``idx`` or ``""`` when the row is short."""

    if idx < 0 or idx >= len(row):
        return ""
    return row[idx].strip()


def first_line(text: str) -> str:
    for line in text.splitlines():
        return line
    return ""


_MONTHLY_STATEMENT_MARKER = "-monthly-statement-transactions-"


def account_name_for(path: str | PathLike[str]) -> str:
    """Derive the account label for an export from its file name."""

    name = Path(path).name
    if name.startswith("accountactivity"):
        return "TD Credit Card"
    if name == "Summary.csv":
        return "Amex Credit Card"
    if name.startswith("Basic_Plus_"):
        return "Scotiabank Chequing"
    if name.startswith("credit-card-statement-transactions-"):
        return "Wealthsimple Credit Card"
    if _MONTHLY_STATEMENT_MARKER in name:
        # Wealthsimple prefixes investment exports with the account nickname.
        nickname = name.split(_MONTHLY_STATEMENT_MARKER, 1)[0].strip()
        if nickname:
            return nickname
    if name.lower().endswith(".csv"):
        return name[: -len(".csv")]
    return name


__all__ = [
    "CENTS",
    "COMMON_DATE_FORMATS",
    "account_name_for",
    "cell",
    "display_date",
    "first_line",
    "fmt_amount",
    "month_key",
    "parse_date",
    "read_rows",
    "read_text",
    "to_decimal",
]
