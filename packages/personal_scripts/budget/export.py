"""Budget CSV export and plain-text run summaries.

The CSV has a fixed header ``Date,Description,Amount,Category,Account`` with
every field quoted. Rows flagged for review get an empty Category cell; the
blank cell is what marks them in the budgeting spreadsheet.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence
from datetime import datetime
from os import PathLike
from pathlib import Path

from .ingest.utils import fmt_amount
from .models import MonthlyIncomeLedger, ProcessingSummary, Transaction, transaction_sort_key

CSV_HEADER: tuple[str, ...] = ("Date", "Description", "Amount", "Category", "Account")
RULE_WIDTH = 80


def sort_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return transactions oldest first; ties and unparseable dates keep input order."""

    return sorted(transactions, key=transaction_sort_key)


def to_csv_row(tx: Transaction) -> list[str]:
    return [
        tx.date,
        tx.description,
        fmt_amount(tx.amount),
        "" if tx.review_flag else tx.category,
        tx.account,
    ]


def export_budget_csv(
    transactions: Iterable[Transaction], output_path: str | PathLike[str]
) -> Path:
    """Write ``transactions`` sorted by date to ``output_path`` and return the path."""

    path = Path(output_path)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for tx in sort_transactions(transactions):
            writer.writerow(to_csv_row(tx))
    return path


def default_output_name(*, batch: bool, now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    prefix = "budget_transactions_batch" if batch else "budget_transactions"
    return f"{prefix}_{stamp}.csv"


def render_review_summary(transactions: Sequence[Transaction]) -> str:
    flagged = sum(1 for t in transactions if t.review_flag)
    if flagged:
        return f"{flagged} transactions need review (categories left blank in CSV)"
    return "All transactions categorized successfully!"


def render_income(ledger: MonthlyIncomeLedger) -> list[str]:
    if not ledger:
        return []
    lines = ["", "Monthly income:"]
    for month in ledger.months():
        lines.append(f"  {month}: ${fmt_amount(ledger[month])}")
    lines.append("  " + "-" * 24)
    lines.append(f"  Total: ${fmt_amount(ledger.total())} (excluded from transaction list)")
    return lines


def render_file_summary(
    transactions: Sequence[Transaction],
    output_path: str | PathLike[str],
    ledger: MonthlyIncomeLedger | None = None,
) -> str:
    lines = [
        f"Processed {len(transactions)} transactions",
        f"Output saved to: {output_path}",
    ]
    if ledger is not None:
        lines.extend(render_income(ledger))
    lines.append("")
    lines.append(render_review_summary(transactions))
    return "\n".join(lines)


def _file_line(summary: ProcessingSummary) -> str:
    if summary.error is not None:
        detail = f"failed: {summary.error}"
    else:
        detail = f"{summary.transaction_count:>3} transactions"
        if summary.review_count:
            detail += f" ({summary.review_count} flagged)"
    return f"  {summary.file_name:<50} | {summary.detected_format.value:<23} | {detail}"


def render_batch_summary(
    summaries: Sequence[ProcessingSummary],
    transactions: Sequence[Transaction],
    ledger: MonthlyIncomeLedger,
    output_path: str | PathLike[str],
) -> str:
    """Render the end-of-batch report: per-file counts, totals, income, output."""

    total = len(transactions)
    flagged = sum(1 for t in transactions if t.review_flag)

    lines = ["=" * RULE_WIDTH, "BATCH PROCESSING SUMMARY", "=" * RULE_WIDTH, "", "Files processed:"]
    lines.extend(_file_line(s) for s in summaries)
    lines.append("")
    lines.append(f"Total: {total} transactions from {len(summaries)} files")
    failed = [s for s in summaries if s.error is not None]
    if failed:
        lines.append(f"{len(failed)} files could not be processed")
    if flagged:
        lines.append(f"{flagged} transactions need review")
    lines.extend(render_income(ledger))
    lines.append("")
    lines.append(f"Output saved to: {output_path}")
    lines.append("=" * RULE_WIDTH)
    return "\n".join(lines)


__all__ = [
    "CSV_HEADER",
    "default_output_name",
    "export_budget_csv",
    "render_batch_summary",
    "render_file_summary",
    "render_income",
    "render_review_summary",
    "sort_transactions",
    "to_csv_row",
]
