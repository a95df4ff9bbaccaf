"""Adapter for Wealthsimple investment/savings monthly statements.

Header: ``date, transaction, description, amount, balance, currency``.
Amounts are already signed from the account's point of view.

Rows that are not spending are handled before categorization:

- interest (``INT``) is dropped;
- payroll deposits (``AFT_IN`` from a known employer) feed the monthly income
  ledger instead of the transaction list;
- card bill payments (``AFT_OUT`` to a known payee) and account-to-account
  transfers (``TRFIN``/``TRFOUT``) are dropped;
- rows in a currency other than CAD are dropped.
"""

from __future__ import annotations

from collections.abc import Iterator

from ....logging_setup import get_logger
from ...categorize import MerchantCategorizer
from ...models import MonthlyIncomeLedger, Transaction
from ..utils import cell, display_date, month_key, parse_date, read_rows, to_decimal

DATE_FORMATS = ("%Y-%m-%d",)
ACCOUNT_CURRENCY = "CAD"

INTEREST_TYPES = frozenset({"INT"})
PAYROLL_MARKERS: tuple[str, ...] = ("Direct deposit from Wealthsimple-OS",)
BILL_PAYMENT_PAYEES: tuple[str, ...] = ("Pre-authorized Debit to AMEX",)
TRANSFER_TYPE_MARKERS: tuple[str, ...] = ("TRFIN", "TRFOUT")

_MIN_CELLS = 6

logger = get_logger("personal_scripts.budget.ingest.adapters.wealthsimple_investment_csv")


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
        tx_type = cell(row, 1)
        description = cell(row, 2)
        raw_amount = cell(row, 3)
        currency = cell(row, 5)

        if not raw_amount or currency != ACCOUNT_CURRENCY:
            continue
        if tx_type in INTEREST_TYPES:
            continue
        try:
            amount = to_decimal(raw_amount)
        except ValueError:
            continue

        if tx_type == "AFT_IN" and any(m in description for m in PAYROLL_MARKERS):
            parsed = parse_date(raw_date, DATE_FORMATS)
            if parsed is None:
                logger.warning(
                    "Payroll deposit with unreadable date %r left out of income", raw_date
                )
            elif ledger is not None:
                ledger.add(month_key(parsed), amount)
            continue
        if tx_type == "AFT_OUT" and any(p in description for p in BILL_PAYMENT_PAYEES):
            continue
        if any(m in tx_type for m in TRANSFER_TYPE_MARKERS):
            continue

        result = categorizer.categorize(description)
        yield Transaction(
            date=display_date(raw_date, DATE_FORMATS),
            description=f"{tx_type}: {description}",
            amount=amount,
            category=result.category,
            review_flag=result.needs_review,
            account=account,
        )


__all__ = ["to_transactions"]
