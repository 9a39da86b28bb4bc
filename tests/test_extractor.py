from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from kurs_lark.exceptions import ExtractError
from kurs_lark.ingestion.extractor import extract_rate, iter_rows, normalise_number
from kurs_lark.ingestion.models import NumberLocale
from kurs_lark.ingestion.sources import BCA, CIMB


@pytest.mark.parametrize(
    ("text", "locale", "expected"),
    [
        ("15.234,56", NumberLocale.DOT_THOUSANDS_COMMA_DECIMAL, 15234.56),
        ("Rp 15.300,00", NumberLocale.DOT_THOUSANDS_COMMA_DECIMAL, 15300.0),
        ("15.234", NumberLocale.DOT_THOUSANDS_COMMA_DECIMAL, 15234.0),
        ("15,234", NumberLocale.COMMA_THOUSANDS, 15234),
        (" 15,234.75 ", NumberLocale.COMMA_THOUSANDS, 15234),
        ("1,015,234", NumberLocale.COMMA_THOUSANDS, 1015234),
    ],
)
def test_normalise_number_follows_locale(text, locale, expected):
    assert normalise_number(text, locale) == expected


def test_normalise_number_whole_for_comma_thousands():
    value = normalise_number("16,325.40", NumberLocale.COMMA_THOUSANDS)
    assert value == 16325
    assert float(value).is_integer()


@pytest.mark.parametrize(
    ("text", "locale"),
    [
        ("1,2,3", NumberLocale.DOT_THOUSANDS_COMMA_DECIMAL),
        ("-", NumberLocale.DOT_THOUSANDS_COMMA_DECIMAL),
        ("", NumberLocale.COMMA_THOUSANDS),
        (".50", NumberLocale.COMMA_THOUSANDS),
    ],
)
def test_normalise_number_rejects_malformed_text(text, locale):
    with pytest.raises(ValueError):
        normalise_number(text, locale)


def test_extract_rate_reads_cimb_usd_row(cimb_html):
    rate = extract_rate(cimb_html, CIMB)

    assert rate is not None
    assert rate.source == "CIMB"
    assert rate.currency == "USD"
    assert (rate.buy_rate, rate.sell_rate) == (15230, 15330)


def test_extract_rate_matches_bca_currency_by_substring(bca_html):
    rate = extract_rate(BeautifulSoup(bca_html, "html.parser"), BCA)

    assert rate is not None
    assert (rate.buy_rate, rate.sell_rate) == (15300.0, 15400.0)


def test_extract_rate_keeps_bca_fraction():
    html = """
    <table><tbody>
        <tr><td>USD/IDR</td><td>15.234,56</td><td>15.334,12</td></tr>
    </tbody></table>
    """
    rate = extract_rate(html, BCA)

    assert rate is not None
    assert rate.buy_rate == pytest.approx(15234.56)
    assert rate.sell_rate == pytest.approx(15334.12)


def test_cimb_requires_exact_currency_cell():
    html = """
    <table>
        <tr><td>USD/IDR</td><td>15,000</td><td>15,100</td></tr>
    </table>
    """
    assert extract_rate(html, CIMB) is None


def test_extract_rate_returns_none_without_usd_row():
    html = """
    <table>
        <tr><td>EUR</td><td>17,650</td><td>17,900</td></tr>
        <tr><td>JPY</td><td>104</td><td>106</td></tr>
    </table>
    """
    assert extract_rate(html, CIMB) is None


def test_extract_rate_returns_none_without_any_table():
    assert extract_rate("<html><body><p>Maintenance</p></body></html>", BCA) is None


def test_extract_rate_skips_usd_row_with_empty_figures():
    html = """
    <table>
        <tr><td>USD</td><td></td><td>15,330</td></tr>
        <tr><td>USD</td><td>15,240</td><td> - </td></tr>
        <tr><td>USD</td><td>15,250</td><td>15,350</td></tr>
    </table>
    """
    rate = extract_rate(html, CIMB)

    assert rate is not None
    assert (rate.buy_rate, rate.sell_rate) == (15250, 15350)


def test_extract_rate_returns_none_when_only_empty_usd_rows():
    html = """
    <table>
        <tr><td>USD</td><td>  </td><td>15,330</td></tr>
    </table>
    """
    assert extract_rate(html, CIMB) is None


def test_extract_rate_first_match_wins():
    html = """
    <table><tbody>
        <tr><td>USD e-Rate</td><td>15.300,00</td><td>15.400,00</td></tr>
        <tr><td>USD Bank Notes</td><td>15.100,00</td><td>15.600,00</td></tr>
    </tbody></table>
    """
    rate = extract_rate(html, BCA)

    assert rate is not None
    assert rate.buy_rate == 15300.0


def test_extract_rate_skips_short_rows():
    html = """
    <table>
        <tr><td>USD</td><td>99,999</td></tr>
        <tr><td>USD</td><td>15,230</td><td>15,330</td></tr>
    </table>
    """
    rate = extract_rate(html, CIMB)

    assert rate is not None
    assert rate.buy_rate == 15230


def test_extract_rate_raises_for_malformed_figures():
    html = """
    <table><tbody>
        <tr><td>USD</td><td>15,300,00</td><td>15.400,00</td></tr>
    </tbody></table>
    """
    with pytest.raises(ExtractError) as excinfo:
        extract_rate(html, BCA)

    assert excinfo.value.source == "BCA"
    assert str(excinfo.value).startswith("BCA: ")


def test_iter_rows_collapses_whitespace(bca_html):
    rows = list(iter_rows(BeautifulSoup(bca_html, "html.parser"), BCA.selector))

    assert rows[1][0] == "USD United States Dollar"
    assert len(rows) == 2
