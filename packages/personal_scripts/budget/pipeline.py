"""Orchestration of the transaction pipeline for a file or a directory.

Files are processed one at a time in alphabetical order. The only state shared
between files is the :class:`MonthlyIncomeLedger`, created fresh per batch and
passed explicitly to the adapters.
"""

from __future__ import annotations

import csv
from os import PathLike
from pathlib import Path

from ..logging_setup import get_logger
from .categorize import MerchantCategorizer
from .ingest import (
    UnrecognizedFormatError,
    account_name_for,
    detect_format,
    parse_transactions,
    read_text,
)
from .models import (
    BatchResult,
    InstitutionFormat,
    MonthlyIncomeLedger,
    ProcessingSummary,
    Transaction,
)

logger = get_logger("personal_scripts.budget.pipeline")

# Per-file failures that a directory batch records and moves past.
FILE_ERRORS: tuple[type[Exception], ...] = (OSError, UnicodeDecodeError, csv.Error)


def scan_directory_for_csv_files(dir_path: str | PathLike[str]) -> list[Path]:
    """List ``*.csv`` files in ``dir_path`` (non-recursive), sorted by name.

    Hidden (``.``) and editor/office temp (``~``) files are excluded. Raises
    ``FileNotFoundError`` or ``NotADirectoryError`` for a bad directory.
    """

    root = Path(dir_path)
    if not root.exists():
        raise FileNotFoundError(f"Directory {root} not found")
    if not root.is_dir():
        raise NotADirectoryError(f"{root} is not a directory")

    files = [
        p
        for p in root.iterdir()
        if p.is_file()
        and p.name.lower().endswith(".csv")
        and not p.name.startswith((".", "~"))
    ]
    return sorted(files, key=lambda p: p.name)


def process_file(
    file_path: str | PathLike[str],
    *,
    ledger: MonthlyIncomeLedger,
    categorizer: MerchantCategorizer | None = None,
) -> tuple[InstitutionFormat, list[Transaction]]:
    """Detect the format of one export and parse it.

    Raises ``OSError``/``UnicodeDecodeError`` when the file cannot be read and
    :class:`UnrecognizedFormatError` when its layout is not known.
    """

    path = Path(file_path)
    text = read_text(path)
    fmt = detect_format(text)
    logger.info("Detected file type for %s: %s", path.name, fmt.value)
    if fmt is InstitutionFormat.UNKNOWN:
        raise UnrecognizedFormatError(f"unrecognized CSV layout in {path.name}")

    transactions = parse_transactions(
        fmt,
        text,
        account=account_name_for(path),
        categorizer=categorizer or MerchantCategorizer(),
        ledger=ledger,
    )
    return fmt, transactions


def process_directory(
    dir_path: str | PathLike[str],
    *,
    categorizer: MerchantCategorizer | None = None,
    ledger: MonthlyIncomeLedger | None = None,
) -> BatchResult:
    """Process every CSV export in ``dir_path`` into one :class:`BatchResult`.

    A file that fails to read or parse is logged with its name and recorded
    with zero transactions; the rest of the batch still runs.
    """

    files = scan_directory_for_csv_files(dir_path)
    categorizer = categorizer or MerchantCategorizer()
    result = BatchResult(ledger=ledger if ledger is not None else MonthlyIncomeLedger())
    result.ledger.reset()

    logger.info("Found %d CSV files in %s", len(files), dir_path)
    for path in files:
        logger.info("Processing: %s", path.name)
        try:
            fmt, transactions = process_file(path, ledger=result.ledger, categorizer=categorizer)
        except FILE_ERRORS as e:
            logger.error("Error processing %s: %s", path.name, e)
            result.summaries.append(
                ProcessingSummary(
                    file_name=path.name,
                    transaction_count=0,
                    review_count=0,
                    detected_format=InstitutionFormat.UNKNOWN,
                    error=str(e),
                )
            )
            continue

        flagged = sum(1 for t in transactions if t.review_flag)
        logger.info(
            "Processed %d transactions from %s (%d need review)",
            len(transactions),
            path.name,
            flagged,
        )
        result.transactions.extend(transactions)
        result.summaries.append(
            ProcessingSummary(
                file_name=path.name,
                transaction_count=len(transactions),
                review_count=flagged,
                detected_format=fmt,
            )
        )

    return result


__all__ = [
    "FILE_ERRORS",
    "process_directory",
    "process_file",
    "scan_directory_for_csv_files",
]
