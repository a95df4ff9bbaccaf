"""Adapter for Scotiabank chequing exports (``Basic_Plus_*.csv``).

Header: ``Filter, Date, Description, Sub-description, Type of Transaction,
Amount, Balance``. Amounts are already signed (debits negative). The export
interleaves rows describing the active filter; those are not transactions.
"""

from __future__ import annotations

from collections.abc import Iterator

from ...categorize import MerchantCategorizer
from ...models import MonthlyIncomeLedger, Transaction
from ..utils import cell, display_date, read_rows, to_decimal

DATE_FORMATS = ("%Y-%m-%d",)
FILTER_ROW_MARKER = "Custom filters"

_MIN_CELLS = 7


def to_transactions(
    text: str,
    *,
    account: str,
    categorizer: MerchantCategorizer,
    ledger: MonthlyIncomeLedger | None = None,
) -> Iterator[Transaction]:
    rows = read_rows(text)
    for row in rows[1:]:
        if len(row) < _MIN_CELLS:
            continue
        filter_cell = cell(row, 0)
        raw_date = cell(row, 1)
        description = cell(row, 2)
        sub_description = cell(row, 3)
        raw_amount = cell(row, 5)

        if not raw_date or not raw_amount or FILTER_ROW_MARKER in filter_cell:
            continue
        try:
            amount = to_decimal(raw_amount)
        except ValueError:
            continue

        if sub_description:
            description = f"{description} {sub_description}".strip()

        result = categorizer.categorize(description)
        yield Transaction(
            date=display_date(raw_date, DATE_FORMATS),
            description=description,
            amount=amount,
            category=result.category,
            review_flag=result.needs_review,
            account=account,
        )


__all__ = ["to_transactions"]
