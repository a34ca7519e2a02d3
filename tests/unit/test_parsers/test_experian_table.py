"""Tests for the Experian summary table state machine."""

import pytest

from credit_reports.parsers.experian_table import (
    TRANSITIONS,
    ExperianTableParser,
    TableRow,
    TableState,
    expect_status,
    expect_type,
    extract_summary_block,
    is_acceptable_row,
    is_amount,
    is_account_type_extension,
    is_account_type_starter,
    is_date_opened,
    is_date_reported,
    is_ownership,
    is_status,
    parse_date_opened,
    parse_entry,
    row_confidence,
    split_entries,
)
from credit_reports.schemas.internal import AccountStatus, AccountSubType, AccountType

HDFC_ROW = "HDFC BANK CREDIT CARD XXXX1234 Individual 01-01-2023 ACTIVE 20220505 50,000 25,000 0"


def table(*rows: str, end: bool = True) -> str:
    body = "\n".join(f"Acct {n} {row}" for n, row in enumerate(rows, start=1))
    text = f"EXPERIAN CREDIT REPORT\nSUMMARY: CREDIT ACCOUNT INFORMATION\n{body}\n"
    if end:
        text += "CREDIT ACCOUNT INFORMATION DETAILS\nLender: something else\n"
    return text


class TestTokenPredicates:
    """Test the pure token classifiers."""

    def test_type_starters(self):
        assert is_account_type_starter("CREDIT")
        assert is_account_type_starter("two")
        assert not is_account_type_starter("BANK")

    def test_type_extensions(self):
        for token in ("LOAN", "CARD", "CARDS", "ACCOUNT", "WHEELER"):
            assert is_account_type_extension(token)
        assert not is_account_type_extension("XXXX1234")

    def test_ownership(self):
        assert is_ownership("Individual")
        assert is_ownership("JOINT")
        assert not is_ownership("Guarantor")

    def test_dates(self):
        assert is_date_reported("01-01-2023")
        assert not is_date_reported("2023-01-01")
        assert is_date_opened("20220505")
        assert not is_date_opened("2022055")

    def test_status(self):
        assert is_status("ACTIVE")
        assert is_status("WRITTEN OFF")
        assert not is_status("WRITTEN")

    @pytest.mark.parametrize("token", ["0", "-", "50,000", "1,00,000", "25000"])
    def test_amounts(self, token):
        assert is_amount(token)

    @pytest.mark.parametrize("token", ["Rs", "XXXX1234", "1,,000", ""])
    def test_not_amounts(self, token):
        assert not is_amount(token)


class TestTransitions:
    """Test individual state transitions."""

    def test_every_working_state_has_a_transition(self):
        assert set(TRANSITIONS) == set(TableState) - {TableState.DONE}

    def test_type_takes_at_most_two_extensions(self):
        row = TableRow()
        tokens = ["TWO", "WHEELER", "LOAN", "ACCOUNT", "XXXX1"]
        state, pos = expect_type(tokens, 0, row)
        assert state is TableState.EXPECT_ACCOUNT_NUMBER
        assert row.account_type == "TWO WHEELER LOAN"
        assert pos == 3

    def test_written_off_spans_two_tokens(self):
        row = TableRow()
        state, pos = expect_status(["WRITTEN", "OFF", "20200101"], 0, row)
        assert state is TableState.EXPECT_DATE_OPENED
        assert row.status == "WRITTEN OFF"
        assert pos == 2

    def test_missing_status_consumes_nothing(self):
        row = TableRow()
        state, pos = expect_status(["20200101"], 0, row)
        assert state is TableState.EXPECT_DATE_OPENED
        assert row.status == ""
        assert pos == 0


class TestParseEntry:
    """Test full entry walks."""

    def test_complete_row(self):
        row = parse_entry(HDFC_ROW)
        assert row.lender == "HDFC BANK"
        assert row.account_type == "CREDIT CARD"
        assert row.account_number == "XXXX1234"
        assert row.ownership == "Individual"
        assert row.date_reported == "01-01-2023"
        assert row.status == "ACTIVE"
        assert row.date_opened == "20220505"
        assert row.amounts == ["50,000", "25,000", "0"]

    def test_optional_columns_missing(self):
        """Test ownership and date reported are optional."""
        row = parse_entry("AXIS BANK PERSONAL LOAN XXXX9999 ACTIVE 20210101 1,00,000 40,000")
        assert row.ownership is None
        assert row.date_reported is None
        assert row.status == "ACTIVE"
        assert row.amounts == ["1,00,000", "40,000"]
        assert row.overdue_amount is None

    def test_no_type_keyword(self):
        """Test a row without any type starter has an empty type."""
        row = parse_entry("UNKNOWN LENDER XXXX1234 ACTIVE")
        assert row.lender == "UNKNOWN LENDER XXXX1234 ACTIVE"
        assert row.account_type == ""


class TestRowInterpretation:
    def test_parse_date_opened(self):
        assert parse_date_opened("20220505") == "2022-05-05"
        assert parse_date_opened("20210230") is None
        assert parse_date_opened(None) is None

    def test_row_confidence_full(self):
        row = parse_entry(HDFC_ROW)
        assert row_confidence(row) == 1.0

    def test_row_confidence_partial(self):
        """Test short lender and placeholder balance earn nothing."""
        row = TableRow(lender="SBI", account_type="CREDIT CARD", status="ACTIVE", amounts=["1", "-"])
        assert row_confidence(row) == pytest.approx(0.6)

    def test_acceptance(self):
        row = parse_entry(HDFC_ROW)
        assert is_acceptable_row(row)
        closed = parse_entry(HDFC_ROW.replace("ACTIVE", "CLOSED"))
        assert not is_acceptable_row(closed)
        assert is_acceptable_row(closed, include_inactive=True)


class TestBlockSegmentation:
    def test_requires_start_anchor(self):
        assert extract_summary_block("Acct 1 " + HDFC_ROW) is None

    def test_block_stops_at_details(self):
        block = extract_summary_block(table(HDFC_ROW))
        assert "HDFC BANK" in block
        assert "something else" not in block

    def test_block_runs_to_end_without_end_anchor(self):
        block = extract_summary_block(table(HDFC_ROW, end=False))
        assert block.strip().endswith("25,000 0")

    def test_block_without_end_anchor_stops_at_blank_line(self):
        """Test a page footer after the table is left out of the block."""
        text = table(HDFC_ROW, end=False) + "\n1200 7\n"
        block = extract_summary_block(text)
        assert block.strip().endswith("25,000 0")
        assert "1200" not in block

    def test_footer_numbers_not_taken_as_amounts(self):
        row = "HDFC BANK CREDIT CARD XXXX1234 Individual 01-01-2023 ACTIVE 20220505 50,000"
        accounts = ExperianTableParser().parse(table(row, end=False) + "\n1200 7\n")

        assert len(accounts) == 1
        assert accounts[0].credit_limit == 50000.0
        assert accounts[0].current_balance is None

    def test_split_entries_skips_header(self):
        block = "Lender Type Number\nAcct 1 first row\nAcct 2 second row\n"
        assert split_entries(block) == ["first row", "second row"]


class TestExperianTableParser:
    """Test the table parser end to end."""

    def test_active_credit_card(self):
        accounts = ExperianTableParser().parse(table(HDFC_ROW))
        assert len(accounts) == 1
        account = accounts[0]
        assert account.account_id == "experian_1"
        assert account.bank_name == "HDFC Bank"
        assert account.account_type == AccountType.CREDIT_CARD
        assert account.account_status == AccountStatus.ACTIVE
        assert account.account_number == "XXXX1234"
        assert account.account_open_date == "2022-05-05"
        assert account.credit_limit == 50000.0
        assert account.current_balance == 25000.0
        assert account.outstanding_amount == 25000.0
        assert account.overdue_amount == 0.0
        assert account.available_credit == 25000.0
        assert account.confidence_score == 1.0

    def test_closed_rows_dropped_by_default(self):
        closed = HDFC_ROW.replace("ACTIVE", "CLOSED")
        assert ExperianTableParser().parse(table(closed)) == []

    def test_include_inactive_keeps_mapped_status(self):
        row = "AXIS BANK PERSONAL LOAN XXXX9999 Joint 02-02-2024 WRITTEN OFF 20210230 1,00,000 - 5,000"
        accounts = ExperianTableParser(include_inactive=True).parse(table(row))
        assert len(accounts) == 1
        account = accounts[0]
        assert account.bank_name == "Axis Bank"
        assert account.account_status == AccountStatus.WRITTEN_OFF
        assert account.account_sub_type == AccountSubType.PERSONAL_LOAN
        assert account.account_open_date is None
        assert account.credit_limit == 100000.0
        assert account.current_balance is None
        assert account.overdue_amount == 5000.0
        assert account.confidence_score == pytest.approx(0.9)

    def test_two_wheeler_loan(self):
        row = "BAJAJ FINANCE TWO WHEELER LOAN XXXX4321 Individual 03-03-2024 ACTIVE 20230101 80,000 40,000 0"
        accounts = ExperianTableParser().parse(table(row))
        assert accounts[0].account_type == AccountType.LOAN
        assert accounts[0].account_sub_type == AccountSubType.AUTO_LOAN
        assert accounts[0].bank_name == "Bajaj Finance"

    def test_short_account_number_rejected(self):
        row = "HDFC BANK CREDIT CARD X12 Individual 01-01-2023 ACTIVE 20220505 50,000 25,000 0"
        assert ExperianTableParser().parse(table(row)) == []

    def test_ids_follow_accepted_rows(self):
        """Test ids are sequential over accepted rows only."""
        closed = HDFC_ROW.replace("ACTIVE", "CLOSED")
        second = "ICICI BANK HOME LOAN XXXX8888 Individual 01-01-2023 ACTIVE 20190101 20,00,000 15,00,000 0"
        accounts = ExperianTableParser().parse(table(closed, HDFC_ROW, second))
        assert [a.account_id for a in accounts] == ["experian_1", "experian_2"]
        assert [a.bank_name for a in accounts] == ["HDFC Bank", "ICICI Bank"]

    def test_no_table(self):
        assert ExperianTableParser().parse("Experian report without a table") == []
        assert ExperianTableParser().parse("") == []
