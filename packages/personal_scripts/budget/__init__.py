"""Bank and credit-card CSV normalization with rule-based categorization.

Stable import surface for the transaction pipeline; no runtime logic lives
here, only re-exports.
"""

from .categorize import MerchantCategorizer
from .export import export_budget_csv, render_batch_summary, sort_transactions
from .ingest import UnrecognizedFormatError, detect_format
from .models import (
    BatchResult,
    CategoryResult,
    InstitutionFormat,
    MonthlyIncomeLedger,
    ProcessingSummary,
    Transaction,
)
from .pipeline import process_directory, process_file, scan_directory_for_csv_files

__all__ = [
    # Pipeline
    "detect_format",
    "process_file",
    "process_directory",
    "scan_directory_for_csv_files",
    "export_budget_csv",
    "render_batch_summary",
    "sort_transactions",
    "MerchantCategorizer",
    # Models / errors
    "BatchResult",
    "CategoryResult",
    "InstitutionFormat",
    "MonthlyIncomeLedger",
    "ProcessingSummary",
    "Transaction",
    "UnrecognizedFormatError",
]
