"""``transaction-parser``: normalize bank/credit-card CSV exports for budgeting.

The command handler (:func:`cmd_parse_transactions`) returns a process exit
code and is usable without Typer; the Typer wrapper below only maps options
and raises ``typer.Exit`` with that code.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from ..logging_setup import configure_logging
from .export import (
    default_output_name,
    export_budget_csv,
    render_batch_summary,
    render_file_summary,
)
from .ingest import UnrecognizedFormatError
from .models import MonthlyIncomeLedger
from .pipeline import FILE_ERRORS, process_directory, process_file

SUPPORTED_FORMATS_HELP = """
Supported file formats:

  - TD Credit Card (no headers)

  - Wealthsimple Credit Card (with headers)

  - Wealthsimple Investment/Savings Accounts (with headers)

  - Amex Credit Card (with headers)

  - Scotiabank (with headers)
"""


def cmd_parse_transactions(
    input_path: str,
    *,
    output: str | None = None,
    directory: bool = False,
) -> int:
    """Parse one export or a directory of exports into a single budget CSV.

    Returns ``0`` on success and ``1`` when the input path is missing, is not
    a directory although ``directory`` was forced, or (single-file mode) the
    file cannot be read or recognized.
    """

    path = Path(input_path)
    if not path.exists():
        print(f"Error: {input_path} not found", file=sys.stderr)
        return 1

    if path.is_dir() or directory:
        if not path.is_dir():
            print(f"Error: Directory {input_path} not found or not accessible", file=sys.stderr)
            return 1
        return _run_directory(path, output)

    if not path.is_file():
        print("Error: Input path is neither a file nor a directory", file=sys.stderr)
        return 1
    return _run_file(path, output)


def _run_file(path: Path, output: str | None) -> int:
    ledger = MonthlyIncomeLedger()
    try:
        _fmt, transactions = process_file(path, ledger=ledger)
    except UnrecognizedFormatError as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return 1
    except FILE_ERRORS as e:
        print(f"Error: Unable to read '{path}': {e}", file=sys.stderr)
        return 1

    out = Path(output or default_output_name(batch=False))
    try:
        export_budget_csv(transactions, out)
    except OSError as e:
        print(f"Error: Unable to write '{out}': {e}", file=sys.stderr)
        return 1

    print(render_file_summary(transactions, out, ledger))
    return 0


def _run_directory(path: Path, output: str | None) -> int:
    try:
        result = process_directory(path)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not result.summaries:
        print("No CSV files found in directory")
        return 0

    out = Path(output or default_output_name(batch=True))
    try:
        result.output_path = export_budget_csv(result.transactions, out)
    except OSError as e:
        print(f"Error: Unable to write '{out}': {e}", file=sys.stderr)
        return 1

    print(render_batch_summary(result.summaries, result.transactions, result.ledger, out))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "Parse CSV transactions from bank and credit-card exports and convert "
        "them to the budget spreadsheet format."
    ),
    epilog=SUPPORTED_FORMATS_HELP,
)


@app.command()
def parse_transactions_cmd(
    input_path: Annotated[
        str, typer.Argument(help="Path to a CSV file or a directory containing CSV files")
    ],
    directory: Annotated[
        bool,
        typer.Option("--directory", "-d", help="Treat input as a directory (auto-detected)"),
    ] = False,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output CSV file (default: auto-generated)"),
    ] = None,
) -> None:
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()
    raise typer.Exit(cmd_parse_transactions(input_path, output=output, directory=directory))


if __name__ == "__main__":  # pragma: no cover
    app()
