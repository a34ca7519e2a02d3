"""Tests for the shared field extractors."""

import pytest

from credit_reports.parsers import fields
from credit_reports.parsers.fields import (
    calculate_confidence_score,
    determine_account_type,
    extract_account_number,
    extract_account_status,
    extract_bank_name,
    normalize_bank_name,
    parse_date,
)
from credit_reports.schemas.internal import (
    AccountStatus,
    AccountSubType,
    AccountType,
    CreditAccount,
)


class TestBankName:
    """Test lender name extraction and normalization."""

    def test_labelled_member_name(self):
        """Test a labelled lender wins."""
        text = "Member Name: HDFC Bank\nAccount Number: XXXX1234"
        assert extract_bank_name(text) == "HDFC Bank"

    def test_falls_back_to_known_institution(self):
        """Test bare institution mention is found without a label."""
        assert extract_bank_name("Loan sanctioned by Kotak Mahindra") == "Kotak"

    def test_no_bank(self):
        """Test text without any lender."""
        assert extract_bank_name("nothing useful here") is None
        assert extract_bank_name("") is None

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("hdfc", "HDFC Bank"),
            ("HDFC Bank", "HDFC Bank"),
            ("HDFC BANK LTD", "HDFC Bank"),
            ("sbi", "State Bank of India"),
            ("South Indian Bank", "South Indian Bank"),
            ("Central Bank of India", "Central Bank of India"),
            ("CITI", "Citibank"),
        ],
    )
    def test_normalize_bank_name(self, raw, expected):
        """Test abbreviations map to canonical names."""
        assert normalize_bank_name(raw) == expected

    def test_normalize_is_idempotent(self):
        """Test normalizing a canonical name returns it unchanged."""
        for raw in ("hdfc", "axis", "Bank of India", "amex", "Union Bank"):
            once = normalize_bank_name(raw)
            assert normalize_bank_name(once) == once

    def test_unknown_name_unchanged(self):
        """Test unknown lenders are returned stripped."""
        assert normalize_bank_name("  Some Cooperative Society ") == "Some Cooperative Society"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Indian Overseas Bank", "Indian Overseas Bank"),
            ("IOB", "Indian Overseas Bank"),
            ("Indian Bank", "Indian Bank"),
            ("Union Bank", "Union Bank of India"),
            ("Credit Union Finance", "Credit Union Finance"),
            ("Central Finance Corp", "Central Finance Corp"),
        ],
    )
    def test_normalize_does_not_confuse_lenders(self, raw, expected):
        """Test a key only matches a whole lender name, not part of another."""
        assert normalize_bank_name(raw) == expected

    def test_leftmost_institution_wins(self):
        """Test the earliest mention is taken regardless of list order."""
        assert extract_bank_name("ICICI Bank card, paid from HDFC account") == "ICICI"
        assert extract_bank_name("Paid to State Bank of India") == "State Bank of India"
        assert extract_bank_name("Central Bank of India branch") == "Central Bank"

    def test_short_keys_match_whole_words_only(self):
        """Test 'SC' does not match inside 'SCHEME'."""
        assert normalize_bank_name("Scheme Finance") == "Scheme Finance"


class TestAccountNumber:
    """Test account number extraction."""

    def test_labelled(self):
        assert extract_account_number("Account Number: XXXX1234") == "XXXX1234"

    def test_bare_masked(self):
        """Test masked run without a label."""
        assert extract_account_number("card ****5678 issued") == "****5678"

    def test_missing(self):
        assert extract_account_number("Balance: 10,000") is None


class TestAccountType:
    """Test account type classification."""

    def test_credit_card(self):
        assert determine_account_type("Account Type: Credit Card") == (
            AccountType.CREDIT_CARD,
            AccountSubType.UNSECURED_CARD,
        )

    def test_secured_credit_card(self):
        assert determine_account_type("Secured Credit Card") == (
            AccountType.CREDIT_CARD,
            AccountSubType.SECURED_CARD,
        )

    def test_loan_sub_types(self):
        """Test loan flavours are recognized."""
        assert determine_account_type("Home Loan") == (AccountType.LOAN, AccountSubType.HOME_LOAN)
        assert determine_account_type("Gold Loan") == (AccountType.LOAN, AccountSubType.GOLD_LOAN)
        assert determine_account_type("Education Loan") == (
            AccountType.LOAN,
            AccountSubType.EDUCATION_LOAN,
        )

    def test_plain_loan_defaults_to_personal(self):
        assert determine_account_type("Loan") == (AccountType.LOAN, AccountSubType.PERSONAL_LOAN)

    def test_savings_and_current(self):
        assert determine_account_type("Savings Account") == (AccountType.SAVINGS, None)
        assert determine_account_type("Account Type: Current Account") == (AccountType.CURRENT, None)

    def test_current_balance_is_not_current_account(self):
        """Test 'current balance' does not classify an account."""
        assert determine_account_type("Current Balance: 500") == (AccountType.UNKNOWN, None)

    def test_abbreviations_need_word_boundaries(self):
        """Test 'cc' inside 'access' is not a credit card."""
        assert determine_account_type("access scheme") == (AccountType.UNKNOWN, None)


class TestAccountStatus:
    """Test account status extraction."""

    def test_labelled_status(self):
        assert extract_account_status("Status: Closed") == AccountStatus.CLOSED

    def test_labelled_beats_bare_keyword(self):
        """Test the labelled value wins over other keywords in the span."""
        assert extract_account_status("Status: Active\nPrevious card closed") == AccountStatus.ACTIVE

    def test_written_off(self):
        assert extract_account_status("Account is WRITTEN OFF") == AccountStatus.WRITTEN_OFF

    def test_no_status(self):
        """Test that 'current balance' alone implies nothing."""
        assert extract_account_status("Current Balance: 100") is None


class TestDates:
    """Test date parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("05-06-2023", "2023-06-05"),
            ("05/06/2023", "2023-06-05"),
            ("05.06.2023", "2023-06-05"),
            ("15-Jan-2025", "2025-01-15"),
            ("15 Jan 2025", "2025-01-15"),
            ("2024-03-15", "2024-03-15"),
        ],
    )
    def test_parse_date(self, raw, expected):
        """Test dates are read day-first and returned as ISO."""
        assert parse_date(raw) == expected

    def test_invalid_calendar_date(self):
        assert parse_date("31-02-2023") is None

    def test_open_date(self):
        assert fields.extract_account_open_date("Date Opened: 10-01-2020") == "2020-01-10"


class TestAmounts:
    """Test money and numeric extractors."""

    def test_credit_limit_with_currency_prefix(self):
        assert fields.extract_credit_limit("Credit Limit: Rs. 1,50,000") == 150000.0

    def test_sanctioned_amount_as_limit(self):
        assert fields.extract_credit_limit("Sanctioned Amount: 5,00,000") == 500000.0

    def test_current_balance(self):
        assert fields.extract_current_balance("Current Balance: 25,000.50") == 25000.50

    def test_outstanding(self):
        assert fields.extract_outstanding_amount("Total Outstanding: 12,345") == 12345.0

    def test_emi(self):
        assert fields.extract_emi_amount("EMI Amount: 12,500") == 12500.0

    def test_interest_rate(self):
        assert fields.extract_interest_rate("Interest Rate: 14.5%") == 14.5

    def test_tenure_years_converted(self):
        """Test years become months."""
        assert fields.extract_tenure("Tenure: 5 years") == 60
        assert fields.extract_tenure("Tenure: 36 months") == 36

    def test_missing_amount(self):
        assert fields.extract_credit_limit("nothing here") is None


class TestPaymentHistory:
    def test_counters(self):
        text = "Months Reported: 24\nDelayed Payments: 2\nOn-time Payments: 22"
        history = fields.extract_payment_history(text)
        assert history is not None
        assert history.total_months_reported == 24
        assert history.delayed_payments == 2
        assert history.on_time_payments == 22

    def test_absent(self):
        assert fields.extract_payment_history("Balance: 100") is None


class TestReportLevelFields:
    """Test score, inquiries and report number."""

    def test_score_with_provider(self):
        assert fields.extract_credit_score("CIBIL Score: 750") == (750, "CIBIL")

    def test_score_out_of_range_rejected(self):
        assert fields.extract_credit_score("CIBIL Score: 250") == (None, None)

    def test_score_default_provider(self):
        """Test the default provider is used when no bureau is named."""
        assert fields.extract_credit_score("Credit Score: 820", default_provider="Equifax") == (
            820,
            "Equifax",
        )

    def test_recent_inquiries(self):
        assert fields.extract_recent_inquiries("Recent Enquiries: 3") == 3

    def test_report_number(self):
        assert fields.extract_report_number("Report Number: EXP-2024-001") == "EXP-2024-001"


class TestConfidenceScore:
    """Test the section confidence heuristic."""

    def test_minimal_account(self):
        """Test bank + number + balance only."""
        account = CreditAccount(
            account_id="t_1",
            bank_name="HDFC Bank",
            account_number="XXXX5678",
            current_balance=10000.0,
            extracted_fields=["bank_name", "account_number", "current_balance"],
        )
        assert calculate_confidence_score(account) == pytest.approx(0.65)

    def test_status_bonus_requires_textual_evidence(self):
        """Test a defaulted status does not add confidence."""
        account = CreditAccount(
            account_id="t_1",
            bank_name="HDFC Bank",
            account_number="XXXX5678",
            account_status=AccountStatus.ACTIVE,
            extracted_fields=["bank_name", "account_number"],
        )
        assert calculate_confidence_score(account) == pytest.approx(0.5)

    def test_capped_at_one(self):
        account = CreditAccount(
            account_id="t_1",
            account_type=AccountType.CREDIT_CARD,
            bank_name="HDFC Bank",
            account_number="XXXX5678",
            account_status=AccountStatus.ACTIVE,
            credit_limit=50000.0,
            account_open_date="2020-01-01",
            extracted_fields=[
                "bank_name",
                "account_number",
                "account_type",
                "account_status",
                "credit_limit",
                "account_open_date",
            ],
        )
        assert calculate_confidence_score(account) == 1.0
