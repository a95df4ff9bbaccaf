from datetime import datetime
from decimal import Decimal

from personal_scripts.budget.export import (
    default_output_name,
    export_budget_csv,
    render_batch_summary,
    render_file_summary,
    render_review_summary,
    sort_transactions,
)
from personal_scripts.budget.models import (
    InstitutionFormat,
    MonthlyIncomeLedger,
    ProcessingSummary,
    Transaction,
)


def _tx(date, description, amount, category="Groceries", review=False, account="TD Credit Card"):
    return Transaction(date, description, Decimal(amount), category, review, account)


def test_sort_is_chronological_with_unparseable_dates_last():
    txs = [
        _tx("01/10/2025", "LATER", "-1"),
        _tx("sometime", "UNDATED", "-1"),
        _tx("12/31/2024", "EARLIEST", "-1"),
        _tx("01/05/2025", "MIDDLE", "-1"),
    ]
    assert [t.description for t in sort_transactions(txs)] == [
        "EARLIEST",
        "MIDDLE",
        "LATER",
        "UNDATED",
    ]


def test_sorting_is_idempotent():
    txs = [_tx("02/01/2025", "B", "-1"), _tx("01/01/2025", "A", "-1"), _tx("02/01/2025", "C", "-1")]
    once = sort_transactions(txs)
    assert sort_transactions(once) == once
    # Same-day rows keep their input order.
    assert [t.description for t in once] == ["A", "B", "C"]


def test_export_writes_quoted_rows_and_blanks_flagged_categories(tmp_path):
    out = tmp_path / "budget.csv"
    txs = [
        _tx("01/10/2025", "AMZN MKTP CA", "-24.9", "Just a little treat", review=True),
        _tx("01/05/2025", "FRESHCO", "-45.67"),
        _tx("01/07/2025", 'SHOP "QUOTED", INC', "10", "Other non-essentials", account="Amex"),
    ]

    assert export_budget_csv(txs, out) == out
    assert out.read_text(encoding="utf-8") == (
        '"Date","Description","Amount","Category","Account"\n'
        '"01/05/2025","FRESHCO","-45.67","Groceries","TD Credit Card"\n'
        '"01/07/2025","SHOP ""QUOTED"", INC","10.00","Other non-essentials","Amex"\n'
        '"01/10/2025","AMZN MKTP CA","-24.90","","TD Credit Card"\n'
    )


def test_export_of_no_transactions_writes_header_only(tmp_path):
    out = export_budget_csv([], tmp_path / "empty.csv")
    assert out.read_text(encoding="utf-8") == '"Date","Description","Amount","Category","Account"\n'


def test_default_output_name():
    now = datetime(2025, 3, 4, 5, 6, 7)
    assert default_output_name(batch=False, now=now) == "budget_transactions_20250304_050607.csv"
    assert (
        default_output_name(batch=True, now=now)
        == "budget_transactions_batch_20250304_050607.csv"
    )


def test_review_summary_counts_flagged_rows():
    assert render_review_summary([_tx("01/01/2025", "A", "-1")]) == (
        "All transactions categorized successfully!"
    )
    flagged = [_tx("01/01/2025", "A", "-1", review=True), _tx("01/02/2025", "B", "-1", review=True)]
    assert render_review_summary(flagged) == (
        "2 transactions need review (categories left blank in CSV)"
    )


def test_file_summary_includes_income_when_present():
    ledger = MonthlyIncomeLedger()
    ledger.add("2025-02", Decimal("2500"))
    ledger.add("2025-01", Decimal("2500"))

    text = render_file_summary([_tx("01/01/2025", "A", "-1")], "out.csv", ledger)

    assert text.splitlines()[:2] == ["Processed 1 transactions", "Output saved to: out.csv"]
    assert "  2025-01: $2500.00\n  2025-02: $2500.00" in text
    assert "Total: $5000.00" in text
    assert text.endswith("All transactions categorized successfully!")


def test_file_summary_without_income_has_no_income_block():
    text = render_file_summary([], "out.csv", MonthlyIncomeLedger())
    assert "Monthly income" not in text


def test_batch_summary_lists_files_failures_and_totals():
    summaries = [
        ProcessingSummary("accountactivity.csv", 3, 1, InstitutionFormat.TD),
        ProcessingSummary("bad.csv", 0, 0, InstitutionFormat.UNKNOWN, error="unrecognized"),
    ]
    txs = [
        _tx("01/01/2025", "A", "-1"),
        _tx("01/02/2025", "B", "-1"),
        _tx("01/03/2025", "C", "-1", review=True),
    ]
    ledger = MonthlyIncomeLedger()
    ledger.add("2025-01", Decimal("2500.00"))

    text = render_batch_summary(summaries, txs, ledger, "batch.csv")
    lines = text.splitlines()

    assert "BATCH PROCESSING SUMMARY" in lines
    assert any("accountactivity.csv" in l and "3 transactions (1 flagged)" in l for l in lines)
    assert any("bad.csv" in l and "failed: unrecognized" in l for l in lines)
    assert "Total: 3 transactions from 2 files" in lines
    assert "1 files could not be processed" in lines
    assert "1 transactions need review" in lines
    assert "  2025-01: $2500.00" in lines
    assert "Output saved to: batch.csv" in lines
