"""Records passed between the stages of the transaction pipeline.

``Transaction`` mirrors one row of the budgeting CSV. ``date`` is kept as the
display string (``MM/DD/YYYY``) because unparseable source dates pass through
verbatim; callers that need a calendar date use :func:`transaction_sort_key`.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

DISPLAY_DATE_FORMAT = "%m/%d/%Y"


class InstitutionFormat(enum.StrEnum):
    """CSV export layouts understood by the parser."""

    SCOTIABANK = "scotiabank"
    WEALTHSIMPLE = "wealthsimple"
    WEALTHSIMPLE_INVESTMENT = "wealthsimple_investment"
    AMEX = "amex"
    TD = "td"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class CategoryResult:
    category: str
    needs_review: bool


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single normalized transaction.

    ``amount`` is negative for outflows and positive for credits/deposits,
    whatever the sign convention of the source export.
    """

    date: str
    description: str
    amount: Decimal
    category: str
    review_flag: bool
    account: str

    def parsed_date(self) -> date | None:
        try:
            return datetime.strptime(self.date, DISPLAY_DATE_FORMAT).date()
        except ValueError:
            return None


def transaction_sort_key(tx: Transaction) -> tuple[int, date]:
    """Sort key ordering by calendar date; unparseable dates sort last."""

    d = tx.parsed_date()
    if d is None:
        return (1, date.max)
    return (0, d)


class MonthlyIncomeLedger(Mapping[str, Decimal]):
    """Income accumulated per month key (``YYYY-MM``) during one run.

    Only ever grows through :meth:`add`; a fresh run calls :meth:`reset`.
    """

    def __init__(self) -> None:
        self._totals: dict[str, Decimal] = {}

    def add(self, month_key: str, amount: Decimal) -> None:
        self._totals[month_key] = self._totals.get(month_key, Decimal("0")) + amount

    def reset(self) -> None:
        self._totals.clear()

    def total(self) -> Decimal:
        return sum(self._totals.values(), Decimal("0"))

    def months(self) -> list[str]:
        return sorted(self._totals)

    def __getitem__(self, key: str) -> Decimal:
        return self._totals[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"MonthlyIncomeLedger({self._totals!r})"


@dataclass(frozen=True, slots=True)
class ProcessingSummary:
    file_name: str
    transaction_count: int
    review_count: int
    detected_format: InstitutionFormat
    error: str | None = None


@dataclass(slots=True)
class BatchResult:
    """Everything a directory run produced, for export and reporting."""

    transactions: list[Transaction] = field(default_factory=list)
    ledger: MonthlyIncomeLedger = field(default_factory=MonthlyIncomeLedger)
    summaries: list[ProcessingSummary] = field(default_factory=list)
    output_path: Path | None = None

    @property
    def review_count(self) -> int:
        return sum(1 for t in self.transactions if t.review_flag)

    @property
    def failed_files(self) -> list[ProcessingSummary]:
        return [s for s in self.summaries if s.error is not None]


__all__ = [
    "BatchResult",
    "CategoryResult",
    "DISPLAY_DATE_FORMAT",
    "InstitutionFormat",
    "MonthlyIncomeLedger",
    "ProcessingSummary",
    "Transaction",
    "transaction_sort_key",
]
