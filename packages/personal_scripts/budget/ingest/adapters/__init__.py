"""Per-institution adapters: export text → normalized ``Transaction`` items.

Every adapter exposes ``to_transactions(text, *, account, categorizer,
ledger)`` with identical semantics: malformed rows are skipped, never raised.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TypeAlias

from ...categorize import MerchantCategorizer
from ...models import InstitutionFormat, MonthlyIncomeLedger, Transaction
from . import (
    amex_csv,
    scotiabank_csv,
    td_csv,
    wealthsimple_card_csv,
    wealthsimple_investment_csv,
)

Adapter: TypeAlias = Callable[..., Iterator[Transaction]]

ADAPTERS: Mapping[InstitutionFormat, Adapter] = {
    InstitutionFormat.TD: td_csv.to_transactions,
    InstitutionFormat.WEALTHSIMPLE: wealthsimple_card_csv.to_transactions,
    InstitutionFormat.WEALTHSIMPLE_INVESTMENT: wealthsimple_investment_csv.to_transactions,
    InstitutionFormat.AMEX: amex_csv.to_transactions,
    InstitutionFormat.SCOTIABANK: scotiabank_csv.to_transactions,
}


def parse_transactions(
    fmt: InstitutionFormat,
    text: str,
    *,
    account: str,
    categorizer: MerchantCategorizer,
    ledger: MonthlyIncomeLedger | None = None,
) -> list[Transaction]:
    """Run the adapter registered for ``fmt`` over ``text``.

    Raises ``KeyError`` for :attr:`InstitutionFormat.UNKNOWN`.
    """

    adapter = ADAPTERS[fmt]
    return list(adapter(text, account=account, categorizer=categorizer, ledger=ledger))


__all__ = ["ADAPTERS", "parse_transactions"]
