"""Tests for the engine data model."""

import pytest
from pydantic import ValidationError

from credit_reports.schemas.internal import (
    RAW_DATA_MAX_CHARS,
    AccountStatus,
    AccountType,
    BureauKind,
    CreditAccount,
    CreditReportSummary,
    ParseResult,
)


class TestCreditAccount:
    """Test CreditAccount validation."""

    def test_defaults(self):
        account = CreditAccount(account_id="a_1", bank_name="HDFC Bank", account_number="XXXX1234")
        assert account.account_type == AccountType.UNKNOWN
        assert account.account_status == AccountStatus.UNKNOWN
        assert account.confidence_score == 0.0
        assert account.extracted_fields == []

    def test_raw_data_truncated(self):
        account = CreditAccount(
            account_id="a_1",
            bank_name="HDFC Bank",
            account_number="XXXX1234",
            raw_data="x" * (RAW_DATA_MAX_CHARS + 100),
        )
        assert len(account.raw_data) == RAW_DATA_MAX_CHARS

    @pytest.mark.parametrize("score", [-0.1, 1.01])
    def test_confidence_bounds(self, score):
        with pytest.raises(ValidationError):
            CreditAccount(
                account_id="a_1",
                bank_name="HDFC Bank",
                account_number="XXXX1234",
                confidence_score=score,
            )

    def test_negative_money_rejected(self):
        with pytest.raises(ValidationError):
            CreditAccount(
                account_id="a_1",
                bank_name="HDFC Bank",
                account_number="XXXX1234",
                overdue_amount=-1.0,
            )


class TestCreditReportSummary:
    @pytest.mark.parametrize("score", [299, 901])
    def test_score_range(self, score):
        with pytest.raises(ValidationError):
            CreditReportSummary(credit_score=score)

    def test_score_bounds_inclusive(self):
        assert CreditReportSummary(credit_score=300).credit_score == 300
        assert CreditReportSummary(credit_score=900).credit_score == 900


class TestParseResult:
    def test_json_uses_bureau_strings(self):
        result = ParseResult(bureau=BureauKind.EXPERIAN)
        data = result.model_dump(mode="json")
        assert data["bureau"] == "Experian"
        assert data["summary"]["total_accounts"] == 0
        assert data["accounts"] == []
