"""Header-keyword detection of the institution format of an export.

Only the first line is inspected. The predicates overlap (a Wealthsimple
investment header also satisfies the generic card test), so they are tried
in a fixed order and the first match wins.
"""

from __future__ import annotations

import csv
from collections.abc import Callable
from datetime import datetime

from ..models import InstitutionFormat
from .utils import first_line, read_rows


class UnrecognizedFormatError(csv.Error):
    """Raised when a file matches none of the known export layouts."""


def _contains_all(*tokens: str) -> Callable[[str], bool]:
    return lambda header: all(t in header for t in tokens)


_HEADER_RULES: tuple[tuple[InstitutionFormat, Callable[[str], bool]], ...] = (
    (InstitutionFormat.SCOTIABANK, _contains_all("filter", "type of transaction")),
    (InstitutionFormat.WEALTHSIMPLE, _contains_all("transaction_date")),
    (
        InstitutionFormat.WEALTHSIMPLE_INVESTMENT,
        _contains_all("date", "transaction", "balance", "currency"),
    ),
    (InstitutionFormat.AMEX, _contains_all("date", "description", "amount")),
)


def _looks_like_td_row(line: str) -> bool:
    # TD exports have no header; the first cell of every row is MM/DD/YYYY.
    rows = read_rows(line)
    if not rows or not rows[0]:
        return False
    try:
        datetime.strptime(rows[0][0].strip(), "%m/%d/%Y")
    except ValueError:
        return False
    return True


def detect_format(text: str) -> InstitutionFormat:
    """Classify export ``text`` by its first line.

    Returns :attr:`InstitutionFormat.UNKNOWN` when no header rule matches and
    the line is not a headerless TD row either.
    """

    line = first_line(text)
    header = line.lower()
    for fmt, rule in _HEADER_RULES:
        if rule(header):
            return fmt
    if _looks_like_td_row(line):
        return InstitutionFormat.TD
    return InstitutionFormat.UNKNOWN


__all__ = ["UnrecognizedFormatError", "detect_format"]
