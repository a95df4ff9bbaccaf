"""Reading institution exports: format detection and per-format adapters."""

from .adapters import ADAPTERS, parse_transactions
from .detect import UnrecognizedFormatError, detect_format
from .utils import account_name_for, read_text

__all__ = [
    "ADAPTERS",
    "UnrecognizedFormatError",
    "account_name_for",
    "detect_format",
    "parse_transactions",
    "read_text",
]
