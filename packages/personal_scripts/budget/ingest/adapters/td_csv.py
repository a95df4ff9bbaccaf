"""Adapter for TD credit-card exports (``accountactivity*.csv``).

The export has no header row. Columns by position:
``date (MM/DD/YYYY), description, debit, credit[, balance]``.
Exactly one of debit/credit is filled on each row.
"""

from __future__ import annotations

from collections.abc import Iterator

from ...categorize import MerchantCategorizer
from ...models import MonthlyIncomeLedger, Transaction
from ..utils import cell, display_date, read_rows, to_decimal

DATE_FORMATS = ("%m/%d/%Y",)

# Paying the card from another bank shows up as a credit; it is a transfer.
BILL_PAYMENT_PAYERS: tuple[str, ...] = ("ROYAL BANK OF CANADA",)

_MIN_CELLS = 4


def to_transactions(
    text: str,
    *,
    account: str,
    categorizer: MerchantCategorizer,
    ledger: MonthlyIncomeLedger | None = None,
) -> Iterator[Transaction]:
    for row in read_rows(text):
        if len(row) < _MIN_CELLS:
            continue
        raw_date, description = cell(row, 0), cell(row, 1)
        debit, credit = cell(row, 2), cell(row, 3)

        upper = description.upper()
        if credit and any(p in upper for p in BILL_PAYMENT_PAYERS):
            continue

        try:
            if debit:
                amount = -abs(to_decimal(debit))
            elif credit:
                amount = abs(to_decimal(credit))
            else:
                continue
        except ValueError:
            continue

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
