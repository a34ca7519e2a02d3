import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

sys.path.append(str(Path(__file__).parents[1] / "src"))

from credit_reports.config import Settings
from credit_reports.main import create_app
from credit_reports.parsers.registry import build_default_registry


EXPERIAN_ACTIVE_REPORT = """EXPERIAN CREDIT REPORT
SUMMARY: CREDIT ACCOUNT INFORMATION
Acct 1 HDFC BANK CREDIT CARD XXXX1234 Individual 01-01-2023 ACTIVE 20220505 50,000 25,000 0
CREDIT ACCOUNT INFORMATION DETAILS
"""

EXPERIAN_CLOSED_REPORT = """EXPERIAN CREDIT REPORT
SUMMARY: CREDIT ACCOUNT INFORMATION
Acct 1 HDFC BANK CREDIT CARD XXXX1234 Individual 01-01-2023 CLOSED 20220505 50,000 0 0
CREDIT ACCOUNT INFORMATION DETAILS
"""

CIBIL_REPORT = """CIBIL CREDIT REPORT
Date of Report: 15-03-2024
CIBIL Score: 780

ACCOUNT DETAILS
Member Name: HDFC Bank
Account Type: Credit Card
Account Number: XXXXXXXX1234
Status: Active
Credit Limit: 1,00,000
Current Balance: 25,000
Date Opened: 10-01-2020

ACCOUNT DETAILS
Member Name: ICICI Bank
Account Type: Personal Loan
Account Number: XXXXXXXX5678
Status: Active
Sanctioned Amount: 5,00,000
Current Balance: 2,50,000
EMI Amount: 12,500
Date Opened: 05-06-2021

ACCOUNT DETAILS
Member Name: State Bank of India
Account Type: Home Loan
Account Number: XXXXXXXX9012
Status: Closed
Sanctioned Amount: 30,00,000
Current Balance: 0
Date Opened: 01-04-2015
"""

UNKNOWN_LAYOUT_REPORT = """Statement of accounts
HDFC Bank account XXXX5678
Current Balance: 10,000
"""


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def registry(settings):
    return build_default_registry(settings)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    """Async HTTP client bound to a fresh application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def experian_active_report():
    return EXPERIAN_ACTIVE_REPORT


@pytest.fixture
def experian_closed_report():
    return EXPERIAN_CLOSED_REPORT


@pytest.fixture
def cibil_report():
    return CIBIL_REPORT


@pytest.fixture
def unknown_layout_report():
    return UNKNOWN_LAYOUT_REPORT
