"""Adapter for Wealthsimple credit-card exports.

Header: ``transaction_date, post_date, type, details, amount, currency``.
Purchases are exported as positive amounts and refunds as negative ones, so
the sign is flipped to the budgeting convention. Card payments are transfers
and are dropped.
"""

from __future__ import annotations

from collections.abc import Iterator

from ...categorize import MerchantCategorizer
from ...models import MonthlyIncomeLedger, Transaction
from ..utils import cell, display_date, read_rows, to_decimal

DATE_FORMATS = ("%Y-%m-%d",)
SKIPPED_TYPES = frozenset({"PAYMENT"})

_MIN_CELLS = 5


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
        raw_date = cell(row, 0)
        tx_type = cell(row, 2)
        details = cell(row, 3)

        if tx_type.upper() in SKIPPED_TYPES:
            continue

        try:
            d = to_decimal(cell(row, 4))
            amount = -abs(d) if d > 0 else abs(d)
        except ValueError:
            continue

        result = categorizer.categorize(details)
        yield Transaction(
            date=display_date(raw_date, DATE_FORMATS),
            description=details,
            amount=amount,
            category=result.category,
            review_flag=result.needs_review,
            account=account,
        )


__all__ = ["to_transactions"]
