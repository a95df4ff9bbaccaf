"""Adapter for American Express (Canada) ``Summary.csv`` exports.

The header contains at least ``Date``, ``Description`` and ``Amount``; when a
column cannot be found by name the historical positions (0, 2, 3) are used.
Dates look like ``15 Sep 2025``. Charges are exported as positive amounts and
credits as negative ones, so the sign is flipped.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from ...categorize import MerchantCategorizer
from ...models import MonthlyIncomeLedger, Transaction
from ..utils import cell, display_date, read_rows, to_decimal

DATE_FORMATS = ("%d %b %Y", "%d %b. %Y")
PAYMENT_MARKERS: tuple[str, ...] = ("PAYMENT RECEIVED",)

_FALLBACK_POSITIONS = {"date": 0, "description": 2, "amount": 3}


def _column_positions(header: Sequence[str]) -> dict[str, int]:
    names = [h.strip().lower() for h in header]
    positions: dict[str, int] = {}
    for key, fallback in _FALLBACK_POSITIONS.items():
        positions[key] = names.index(key) if key in names else fallback
    return positions


def to_transactions(
    text: str,
    *,
    account: str,
    categorizer: MerchantCategorizer,
    ledger: MonthlyIncomeLedger | None = None,
) -> Iterator[Transaction]:
    rows = read_rows(text)
    if not rows:
        return
    pos = _column_positions(rows[0])
    min_cells = max(pos.values()) + 1

    for row in rows[1:]:
        if len(row) < min_cells:
            continue
        description = cell(row, pos["description"])
        raw_amount = cell(row, pos["amount"])
        if not raw_amount or any(m in description.upper() for m in PAYMENT_MARKERS):
            continue
        try:
            d = to_decimal(raw_amount)
            amount = -abs(d) if d > 0 else abs(d)
        except ValueError:
            continue

        result = categorizer.categorize(description)
        yield Transaction(
            date=display_date(cell(row, pos["date"]), DATE_FORMATS),
            description=description,
            amount=amount,
            category=result.category,
            review_flag=result.needs_review,
            account=account,
        )


__all__ = ["to_transactions"]
