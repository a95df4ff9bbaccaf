import pytest

from personal_scripts.budget.ingest import detect_format
from personal_scripts.budget.models import InstitutionFormat

from tests.helpers.exports import (
    AMEX_EXPORT,
    SCOTIABANK_EXPORT,
    TD_EXPORT,
    WEALTHSIMPLE_CARD_EXPORT,
    WEALTHSIMPLE_INVESTMENT_EXPORT,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (SCOTIABANK_EXPORT, InstitutionFormat.SCOTIABANK),
        (WEALTHSIMPLE_CARD_EXPORT, InstitutionFormat.WEALTHSIMPLE),
        (WEALTHSIMPLE_INVESTMENT_EXPORT, InstitutionFormat.WEALTHSIMPLE_INVESTMENT),
        (AMEX_EXPORT, InstitutionFormat.AMEX),
        (TD_EXPORT, InstitutionFormat.TD),
    ],
)
def test_detects_known_exports(text, expected):
    assert detect_format(text) is expected


def test_investment_header_wins_over_generic_card_header():
    # Contains date/description/amount too; order decides.
    header = '"date","transaction","description","amount","balance","currency"\n'
    assert detect_format(header) is InstitutionFormat.WEALTHSIMPLE_INVESTMENT


def test_only_first_line_is_inspected():
    text = "01/02/2025,COFFEE,3.00,,\nFilter,Type of Transaction\n"
    assert detect_format(text) is InstitutionFormat.TD


def test_header_matching_ignores_case():
    assert detect_format("DATE,DESCRIPTION,AMOUNT\n") is InstitutionFormat.AMEX


@pytest.mark.parametrize("text", ["", "\n", "name,notes\nfoo,bar\n", "2025-01-01,COFFEE,3.00\n"])
def test_unrecognized_content_is_reported_as_unknown(text):
    assert detect_format(text) is InstitutionFormat.UNKNOWN
