from __future__ import annotations

from datetime import datetime, timezone

import pytest

CIMB_HTML = """
<table>
    <tr><th>Mata Uang</th><th>Beli</th><th>Jual</th></tr>
    <tr><td>SGD</td><td>11,650</td><td>11,820</td></tr>
    <tr><td> USD </td><td>15,230</td><td>15,330</td></tr>
    <tr><td>EUR</td><td>17,650</td><td>17,900</td></tr>
</table>
"""

BCA_HTML = """
<table>
    <thead><tr><th>Mata Uang</th><th>Beli</th><th>Jual</th></tr></thead>
    <tbody>
        <tr><td>AUD <span>Australian Dollar</span></td><td>10.100,00</td><td>10.250,00</td></tr>
        <tr><td>USD <span>United States Dollar</span></td><td>15.300,00</td><td>15.400,00</td></tr>
    </tbody>
</table>
"""


@pytest.fixture
def cimb_html() -> str:
    return CIMB_HTML


@pytest.fixture
def bca_html() -> str:
    return BCA_HTML


@pytest.fixture
def fixed_now() -> datetime:
    # 14:30 in Asia/Jakarta
    return datetime(2026, 10, 18, 7, 30, tzinfo=timezone.utc)
